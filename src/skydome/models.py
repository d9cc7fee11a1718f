"""Data model definitions — explicit boundaries between input, ephemeris, transform, and render layers."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from skydome.angles import normalize_degrees


class Body(Enum):
    """Celestial bodies the ephemeris layer can locate."""

    SUN = "sun"
    MOON = "moon"
    STAR = "star"  # Arbitrary fixed point given by RA/Dec


@dataclass(frozen=True)
class EquatorialTarget:
    """Fixed sky point in equatorial coordinates."""

    ra_hours: float  # Right ascension (hours, 0-24)
    dec_deg: float  # Declination (degrees)


FIRST_POINT_OF_ARIES = EquatorialTarget(ra_hours=0.0, dec_deg=0.0)


@dataclass(frozen=True)
class CelestialPosition:
    """Horizontal coordinates of a body as seen by one observer at one instant.

    Values are stored as given. Consumers work on ``normalized()``, which clamps
    elevation into [-90, 90] and wraps azimuth into [0, 360).
    """

    elevation: float  # Altitude above the horizon (degrees)
    azimuth: float  # Compass bearing (degrees, 0=N, 90=E, 180=S, 270=W)

    def normalized(self) -> "CelestialPosition":
        elevation = min(90.0, max(-90.0, self.elevation))
        return CelestialPosition(
            elevation=elevation, azimuth=normalize_degrees(self.azimuth)
        )


@dataclass(frozen=True)
class Orientation:
    """Render-ready rotation (degrees). Yaw is fixed; pitch and roll carry the aim."""

    pitch: float
    roll: float
    yaw: float = 0.0


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    lat: float  # Latitude (decimal degrees, +North)
    lng: float  # Longitude (decimal degrees, +East)
    when: str  # Local time, "YYYY-MM-DD HH:MM" or "YYYY-MM-DD HH:MM:SS"
    body: Body = Body.SUN
    target: EquatorialTarget = FIRST_POINT_OF_ARIES  # Used only for Body.STAR
    utc_offset_hours: float | None = None  # None = look the zone up from lat/lng
    is_dst: bool = False  # Adds one hour to the fixed offset


@dataclass(frozen=True)
class ObserverContext:
    """Observer location and instant. Passed explicitly into every ephemeris query."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    utc_dt: datetime  # UTC datetime (with tzinfo=utc)


@dataclass(frozen=True)
class TrackSample:
    """One instant of a body's track across the sky."""

    utc_dt: datetime
    position: CelestialPosition
    orientation: Orientation


@dataclass(frozen=True)
class AimResult:
    """The sole output of a query. Fully computed state."""

    context: ObserverContext
    body: Body
    position: CelestialPosition
    orientation: Orientation
