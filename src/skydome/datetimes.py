"""Time helpers — date/time string parsing and local ⇄ UTC conversion.

Everything here runs before an ephemeris query: the ephemeris only ever sees a
tz-aware UTC datetime.
"""

from datetime import date, datetime, timedelta

from pytz import timezone, utc
from pytz.exceptions import InvalidTimeError
from timezonefinder import TimezoneFinder

_tf = TimezoneFinder()

_WHEN_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M")


class ObserverError(Exception):
    """Observer location or local time cannot be resolved."""


class TimezoneLookupError(ObserverError):
    """No IANA timezone covers the given coordinates."""


def parse_date(date_string: str, date_format: str = "dd/mm/yyyy") -> date:
    """Parse a slash-separated date whose field order is given by a format string.

    The format names the position of ``dd``, ``mm`` and ``yyyy`` (any case),
    e.g. ``"mm/dd/yyyy"`` or ``"yyyy/mm/dd"``.

    Args:
        date_string: Date such as "15/01/1995".
        date_format: Field order of date_string.

    Returns:
        The parsed date.

    Raises:
        ValueError: Wrong number of fields, unknown format, or invalid date.
    """
    fields = date_format.lower().split("/")
    if sorted(fields) != ["dd", "mm", "yyyy"]:
        raise ValueError(f"Unsupported date format: {date_format}")

    parts = date_string.strip().split("/")
    if len(parts) != 3:
        raise ValueError(f"Expected 3 date fields in {date_string!r}")

    values = {field: int(part) for field, part in zip(fields, parts)}
    return date(values["yyyy"], values["mm"], values["dd"])


def parse_time(time_string: str, on: date | None = None) -> datetime:
    """Parse "HH:MM:SS" into a naive datetime on the given date (today if None).

    Raises:
        ValueError: Malformed string or out-of-range field.
    """
    parts = time_string.strip().split(":")
    if len(parts) != 3:
        raise ValueError(f"Expected HH:MM:SS, got {time_string!r}")
    hours, minutes, seconds = (int(p) for p in parts)
    day = on or date.today()
    return datetime(day.year, day.month, day.day, hours, minutes, seconds)


def parse_when(when: str) -> datetime:
    """Parse "YYYY-MM-DD HH:MM[:SS]" into a naive local datetime."""
    for fmt in _WHEN_FORMATS:
        try:
            return datetime.strptime(when.strip(), fmt)
        except ValueError:
            continue
    raise ValueError(f"Expected 'YYYY-MM-DD HH:MM[:SS]', got {when!r}")


def local_to_utc(
    local_dt: datetime, utc_offset_hours: float, is_dst: bool = False
) -> datetime:
    """Convert a naive local datetime to UTC using a fixed offset.

    UTC = local - offset, less one more hour when DST is in force.

    Args:
        local_dt: Naive wall-clock time at the observer.
        utc_offset_hours: Standard-time offset from UTC (e.g. 9 for Seoul, -5 for New York).
        is_dst: Daylight saving time in force; adds one hour to the offset.

    Returns:
        tz-aware UTC datetime.
    """
    offset = utc_offset_hours + (1.0 if is_dst else 0.0)
    naive_utc = local_dt.replace(tzinfo=None) - timedelta(hours=offset)
    return utc.localize(naive_utc)


def timezone_name_at(lat: float, lng: float) -> str:
    """IANA timezone name covering the given point.

    Raises:
        TimezoneLookupError: When the point has no timezone.
    """
    tz_str = _tf.timezone_at(lat=lat, lng=lng)
    if tz_str is None:
        raise TimezoneLookupError(f"Timezone not found: lat={lat}, lng={lng}")
    return tz_str


def localize_to_utc(local_dt: datetime, lat: float, lng: float) -> datetime:
    """Convert a naive local datetime at (lat, lng) to UTC via the zone database.

    DST is taken from the zone rules.

    Raises:
        TimezoneLookupError: When the point has no timezone.
        ObserverError: Ambiguous or non-existent wall-clock time around a DST
            transition.
    """
    tz_name = timezone_name_at(lat, lng)
    naive = local_dt.replace(tzinfo=None)
    try:
        local = timezone(tz_name).localize(naive, is_dst=None)
    except InvalidTimeError as exc:
        raise ObserverError(
            f"Local time {naive.isoformat(sep=' ')} is ambiguous or skipped in {tz_name}; "
            "pass a fixed UTC offset instead"
        ) from exc
    return local.astimezone(utc)


def utc_to_local(utc_dt: datetime, tz_name: str) -> datetime:
    """Convert a UTC datetime (naive values are taken as UTC) to a zone's local time."""
    if utc_dt.tzinfo is None:
        utc_dt = utc.localize(utc_dt)
    return utc_dt.astimezone(timezone(tz_name))


def add_timespan(dt: datetime, delta: timedelta) -> datetime:
    return dt + delta
