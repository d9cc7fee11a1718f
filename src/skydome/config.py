"""Environment-driven settings. Values come from the process environment, with a .env file loaded first."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_ROOT = Path(__file__).parent.parent.parent


@dataclass(frozen=True)
class Settings:
    data_dir: Path  # skyfield Loader cache (ephemeris, timescale files)
    ephemeris: str  # JPL ephemeris filename
    log_level: str
    log_file: Path | None


def load_settings() -> Settings:
    """Read settings from SKYDOME_* environment variables.

    SKYDOME_DATA_DIR   skyfield data directory (default: <repo>/resources)
    SKYDOME_EPHEMERIS  ephemeris filename (default: de421.bsp)
    SKYDOME_LOG_LEVEL  DEBUG/INFO/WARNING/ERROR/CRITICAL (default: INFO)
    SKYDOME_LOG_FILE   optional log file path
    """
    load_dotenv()
    log_file = os.environ.get("SKYDOME_LOG_FILE")
    return Settings(
        data_dir=Path(os.environ.get("SKYDOME_DATA_DIR", str(_ROOT / "resources"))),
        ephemeris=os.environ.get("SKYDOME_EPHEMERIS", "de421.bsp"),
        log_level=os.environ.get("SKYDOME_LOG_LEVEL", "INFO").upper(),
        log_file=Path(log_file) if log_file else None,
    )
