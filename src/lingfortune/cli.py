"""CLI entry point for birth-chart readings.

Usage:
    lingfortune --when "1993-06-01 14:30" [--mode bazi|astro|both] [--lang zh|en] [--narrative]
"""

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from lingfortune.config import (
    ephemeris_dir,
    load_observer_config,
    load_sexagenary_config,
)
from lingfortune.ephemeris import EphemerisUnavailable, SkyfieldEphemeris
from lingfortune.i18n import t
from lingfortune.reading import astro_reading, bazi_reading, interpret, parse_birth_moment


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a Bazi and astrology reading.")
    parser.add_argument("--when", required=True, help='Birth time, "YYYY-MM-DD HH:MM"')
    parser.add_argument("--mode", default="both", choices=["bazi", "astro", "both"])
    parser.add_argument("--lang", default="zh", choices=["zh", "en"])
    parser.add_argument("--question", default="", help="Topic for the interpretation")
    parser.add_argument(
        "--narrative", action="store_true", help="Add an AI interpretation"
    )
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        moment = parse_birth_moment(args.when)
        observer = load_observer_config()
        sexagenary = load_sexagenary_config()
    except ValueError as e:
        parser.error(str(e))

    readings = []
    if args.mode in ("bazi", "both"):
        readings.append(bazi_reading(moment, lang=args.lang, config=sexagenary))
    if args.mode in ("astro", "both"):
        provider = SkyfieldEphemeris(data_dir=ephemeris_dir())
        try:
            readings.append(
                astro_reading(moment, provider, lang=args.lang, config=observer)
            )
        except EphemerisUnavailable as e:
            print(t("error_ephemeris", args.lang).format(error=e), file=sys.stderr)
            return 1

    output = []
    for reading in readings:
        entry = reading.to_dict()
        if args.narrative:
            entry["interpretation"] = interpret(reading, question=args.question)
        output.append(entry)

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
