"""CLI entry point: aim at the sun, moon, or a sky point for a place and time.

    skydome --lat 35.15 --lng 129.06 --when "1995-01-15 06:00"
    skydome --lat 51.48 --lng 0.0 --when "2024-06-21 04:00" --utc-offset 0 --dst \\
        --track-hours 18 --step-minutes 10 --chart results/solstice.png
"""

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from skydome.angles import format_dms  # noqa: E402
from skydome.compute import ObserverError, compute_track, run  # noqa: E402
from skydome.config import load_settings  # noqa: E402
from skydome.logging_config import setup_logging  # noqa: E402
from skydome.models import Body, EquatorialTarget, QueryInput  # noqa: E402

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skydome",
        description="Compute a body's sky position and the orientation to aim a dome or light at it.",
    )
    parser.add_argument("--lat", type=float, required=True, help="Latitude (deg, +N)")
    parser.add_argument("--lng", type=float, required=True, help="Longitude (deg, +E)")
    parser.add_argument(
        "--when", required=True, help='Local time, "YYYY-MM-DD HH:MM[:SS]"'
    )
    parser.add_argument(
        "--body", choices=[b.value for b in Body], default=Body.SUN.value
    )
    parser.add_argument(
        "--ra", type=float, default=0.0, help="Right ascension (hours), --body star"
    )
    parser.add_argument(
        "--dec", type=float, default=0.0, help="Declination (deg), --body star"
    )
    parser.add_argument(
        "--utc-offset",
        type=float,
        default=None,
        help=(
            "Observer's standard-time offset from UTC in hours, east positive "
            "(+9 Seoul, -5 New York). UTC = local - offset. "
            "Omit to look the timezone up from lat/lng."
        ),
    )
    parser.add_argument(
        "--dst", action="store_true", help="Daylight saving in force: UTC = local - offset - 1h"
    )
    parser.add_argument(
        "--track-hours",
        type=float,
        default=None,
        help="Also sample the body's track for this many hours",
    )
    parser.add_argument("--step-minutes", type=float, default=15.0)
    parser.add_argument(
        "--chart", type=Path, default=None, help="Save the track chart to this PNG"
    )
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.step_minutes <= 0:
        parser.error("--step-minutes must be positive")
    settings = load_settings()
    setup_logging(args.log_level or settings.log_level, settings.log_file)

    query = QueryInput(
        lat=args.lat,
        lng=args.lng,
        when=args.when,
        body=Body(args.body),
        target=EquatorialTarget(ra_hours=args.ra, dec_deg=args.dec),
        utc_offset_hours=args.utc_offset,
        is_dst=args.dst,
    )

    try:
        result = run(query)
    except (ValueError, ObserverError) as exc:
        logger.error("%s", exc)
        return 1

    pos = result.position
    rot = result.orientation
    print(f"{result.body.value} @ {result.context.utc_dt.isoformat()}")
    print(f"  elevation {pos.elevation:9.4f}  ({format_dms(pos.elevation)})")
    print(f"  azimuth   {pos.azimuth:9.4f}  ({format_dms(pos.azimuth)})")
    print(f"  pitch {rot.pitch:9.4f}  roll {rot.roll:9.4f}  yaw {rot.yaw:.1f}")

    if args.track_hours is not None:
        step = timedelta(minutes=args.step_minutes)
        count = max(1, int(args.track_hours * 60 / args.step_minutes) + 1)
        track = compute_track(query.body, result.context, step, count, query.target)
        for sample in track:
            print(
                f"{sample.utc_dt.strftime('%Y-%m-%d %H:%M')}"
                f"  el {sample.position.elevation:8.3f}"
                f"  az {sample.position.azimuth:8.3f}"
                f"  pitch {sample.orientation.pitch:8.3f}"
                f"  roll {sample.orientation.roll:8.3f}"
            )
        if args.chart is not None:
            from skydome.renderers.static import save_track_chart

            path = save_track_chart(track, args.chart)
            print(f"Saved: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
