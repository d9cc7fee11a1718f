"""Ephemeris layer — observer resolution and skyfield sun/moon/sky-point positions.

The observer location is an explicit argument of every query; nothing here
holds a "current location".
"""

import logging
from datetime import datetime, timedelta
from functools import lru_cache

import numpy as np
from pytz import utc
from skyfield.api import Loader, Star, wgs84

from skydome.config import load_settings
from skydome.datetimes import (
    ObserverError,
    local_to_utc,
    localize_to_utc,
    parse_when,
)
from skydome.models import (
    FIRST_POINT_OF_ARIES,
    AimResult,
    Body,
    CelestialPosition,
    EquatorialTarget,
    ObserverContext,
    QueryInput,
    TrackSample,
)
from skydome.orientation import sky_orientation


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _load():
    """Load (timescale, ephemeris) once per process. Downloads into the data dir if missing."""
    settings = load_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    loader = Loader(str(settings.data_dir))
    logger.info("Loading ephemeris %s from %s", settings.ephemeris, settings.data_dir)
    return loader.timescale(), loader(settings.ephemeris)


def as_body(body: Body | str) -> Body:
    """Accept a Body or its name ("sun", "moon", "star")."""
    if isinstance(body, Body):
        return body
    try:
        return Body(body.lower())
    except ValueError:
        raise ValueError(f"Unknown body: {body!r}") from None


def _altaz_degrees(
    body: Body,
    lat: float,
    lng: float,
    utc_dts: list[datetime],
    target: EquatorialTarget,
) -> tuple[np.ndarray, np.ndarray]:
    """Apparent altitude/azimuth (degrees) of a body for each instant. No refraction."""
    ts, eph = _load()
    t = ts.from_datetimes(utc_dts)

    # altaz() needs a ground observer (earth + latlon), not a bare geographic position
    ground = eph["earth"] + wgs84.latlon(latitude_degrees=lat, longitude_degrees=lng)
    if body is Body.SUN:
        observed = eph["sun"]
    elif body is Body.MOON:
        observed = eph["moon"]
    else:
        observed = Star(ra_hours=target.ra_hours, dec_degrees=target.dec_deg)

    alt, az, _ = ground.at(t).observe(observed).apparent().altaz()
    return np.atleast_1d(alt.degrees), np.atleast_1d(az.degrees)


def observer_context(
    lat: float,
    lng: float,
    local_dt: datetime,
    utc_offset_hours: float | None = None,
    is_dst: bool = False,
) -> ObserverContext:
    """Resolve an observer's location and local time to an ObserverContext.

    Args:
        lat: Latitude in decimal degrees, [-90, 90].
        lng: Longitude in decimal degrees, [-180, 180].
        local_dt: Local wall-clock time. A tz-aware value is converted as is.
        utc_offset_hours: Fixed standard-time offset. None looks the zone up
            from lat/lng and applies its DST rules.
        is_dst: Adds one hour to a fixed offset. Ignored on zone lookup.

    Returns:
        ObserverContext with a UTC datetime.

    Raises:
        ObserverError: Coordinates out of range or no timezone at the location.
    """
    if not -90.0 <= lat <= 90.0:
        raise ObserverError(f"Latitude out of range: {lat}")
    if not -180.0 <= lng <= 180.0:
        raise ObserverError(f"Longitude out of range: {lng}")

    if local_dt.tzinfo is not None:
        utc_dt = local_dt.astimezone(utc)
    elif utc_offset_hours is None:
        utc_dt = localize_to_utc(local_dt, lat, lng)
    else:
        utc_dt = local_to_utc(local_dt, utc_offset_hours, is_dst)

    return ObserverContext(lat=lat, lng=lng, utc_dt=utc_dt)


def body_position(
    body: Body | str,
    context: ObserverContext,
    target: EquatorialTarget = FIRST_POINT_OF_ARIES,
) -> CelestialPosition:
    """Horizontal coordinates of a body for one observer and instant.

    Args:
        body: Sun, moon, or a fixed sky point.
        context: Observer location and UTC instant.
        target: RA/Dec of the sky point; used only for Body.STAR.

    Returns:
        CelestialPosition in degrees (elevation [-90, 90], azimuth [0, 360)).
    """
    body = as_body(body)
    alt, az = _altaz_degrees(body, context.lat, context.lng, [context.utc_dt], target)
    position = CelestialPosition(elevation=float(alt[0]), azimuth=float(az[0]))
    logger.debug(
        "%s at lat=%.4f lng=%.4f %s: el=%.3f az=%.3f",
        body.value,
        context.lat,
        context.lng,
        context.utc_dt.isoformat(),
        position.elevation,
        position.azimuth,
    )
    return position


def sun_position(context: ObserverContext) -> CelestialPosition:
    return body_position(Body.SUN, context)


def moon_position(context: ObserverContext) -> CelestialPosition:
    return body_position(Body.MOON, context)


def sky_position(
    context: ObserverContext, target: EquatorialTarget = FIRST_POINT_OF_ARIES
) -> CelestialPosition:
    """Position of a fixed sky point (the First Point of Aries by default)."""
    return body_position(Body.STAR, context, target)


def compute_track(
    body: Body | str,
    context: ObserverContext,
    step: timedelta,
    count: int,
    target: EquatorialTarget = FIRST_POINT_OF_ARIES,
) -> tuple[TrackSample, ...]:
    """Sample a body's path across the sky for time-lapse animation.

    All instants are evaluated in one vectorized skyfield call.

    Args:
        body: Sun, moon, or a fixed sky point.
        context: Observer location and the first instant.
        step: Time between samples.
        count: Number of samples (>= 1).
        target: RA/Dec of the sky point; used only for Body.STAR.

    Returns:
        Tuple of TrackSample, one per instant, each with its orientation.

    Raises:
        ValueError: count < 1.
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    body = as_body(body)
    utc_dts = [context.utc_dt + step * i for i in range(count)]
    alt, az = _altaz_degrees(body, context.lat, context.lng, utc_dts, target)

    samples: list[TrackSample] = []
    for utc_dt, el_deg, az_deg in zip(utc_dts, alt, az):
        position = CelestialPosition(elevation=float(el_deg), azimuth=float(az_deg))
        samples.append(
            TrackSample(
                utc_dt=utc_dt, position=position, orientation=sky_orientation(position)
            )
        )
    logger.debug("Computed %d-sample %s track", len(samples), body.value)
    return tuple(samples)


def run(query: QueryInput) -> AimResult:
    """Top-level entry point: takes a QueryInput and returns an AimResult.

    Raises:
        ValueError: Malformed time string.
        ObserverError: Invalid location or unresolvable timezone.
    """
    local_dt = parse_when(query.when)
    context = observer_context(
        query.lat,
        query.lng,
        local_dt,
        utc_offset_hours=query.utc_offset_hours,
        is_dst=query.is_dst,
    )
    position = body_position(query.body, context, query.target)
    orientation = sky_orientation(position)
    return AimResult(
        context=context,
        body=as_body(query.body),
        position=position,
        orientation=orientation,
    )
