"""CLI entry point for the full moon house finder.

    uv run fullmoonhouse --rising Aries --date 2025-01-13 --system sidereal
"""

import argparse
import sys

from dotenv import load_dotenv

from fullmoonhouse.compute import SIGNS, SYSTEMS, run
from fullmoonhouse.config import ConfigError, configure_logging, load_settings
from fullmoonhouse.reference import (
    ReferenceDataError,
    format_date_label,
    full_moon_dates,
    load_reference_data,
)
from fullmoonhouse.renderers.static import save_static_wheel
from fullmoonhouse.renderers.text import render_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fullmoonhouse",
        description="Find which house a full moon falls in for a rising sign.",
    )
    parser.add_argument("--system", choices=SYSTEMS, default="tropical")
    parser.add_argument("--rising", choices=SIGNS, default="Aries")
    parser.add_argument("--date", help="Full moon date (YYYY-MM-DD). Defaults to the first one.")
    parser.add_argument("--list-dates", action="store_true", help="List full moon dates and exit.")
    parser.add_argument("--save-chart", action="store_true", help="Also save a PNG house wheel.")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)

    try:
        reference = load_reference_data(settings.data_source)
    except ReferenceDataError as e:
        print(f"Could not load reference data: {e}", file=sys.stderr)
        return 1

    dates = full_moon_dates(reference)
    if args.list_dates:
        for key in dates:
            print(f"{key}  {format_date_label(key)}")
        return 0

    if not dates and args.date is None:
        print("No full moons in the reference data.", file=sys.stderr)
        return 1
    date_key = args.date or dates[0]
    result = run(
        reference,
        args.system,
        SIGNS.index(args.rising),
        date_key,
        ayanamsa=settings.ayanamsa,
    )
    if result is None:
        print(f"No full moon recorded for {date_key}.", file=sys.stderr)
        return 1

    print(render_text(result, display_tz=settings.display_tz))
    if args.save_chart:
        path = save_static_wheel(result)
        print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
