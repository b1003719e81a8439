"""Command line: print the date-time a phrase refers to.

Usage:
    fuzzydate next friday at noon
    fuzzydate -r 2024-05-31T09:00:00-04:00 3 months before today
    fuzzydate --input-timezone America/New_York --output-timezone UTC today 5pm
    printf 'today\\ntomorrow\\n' | fuzzydate --stdin
"""

import argparse
import logging
import sys
from datetime import datetime

from . import debug_parse, parse
from .config import get_zone, load_config
from .errors import FuzzyDateError


def format_datetime(moment: datetime, fmt: str) -> str:
    """strftime, with %:z as a +HH:MM offset."""
    if "%:z" in fmt:
        offset = moment.strftime("%z")
        fmt = fmt.replace("%:z", f"{offset[:3]}:{offset[3:5]}" if offset else "")
    return moment.strftime(fmt)


def _relative_to(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO 8601 date-time: {value!r}") from None


def _print_debug(phrase: str, relative_to, zone) -> None:
    debug = debug_parse(phrase, relative_to=relative_to, tz=zone)
    print(f"lexemes: {debug.lexemes}", file=sys.stderr)
    print(f"parsed:  {debug.parsed}", file=sys.stderr)
    print(f"result:  {debug.result}", file=sys.stderr)
    if debug.error is not None:
        print(f"error:   {debug.error}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn a human date phrase into a date-time")
    parser.add_argument("date_string", nargs="*", default=["today"], help="Phrase to parse")
    parser.add_argument(
        "-f",
        "--format",
        default=None,
        help="Output strftime format; %%:z is a +HH:MM offset",
    )
    parser.add_argument(
        "-r",
        "--relative-to",
        type=_relative_to,
        default=None,
        help="Instant to treat as now, as ISO 8601 / RFC 3339",
    )
    parser.add_argument("--input-timezone", help="Zone for relative values (default: system zone)")
    parser.add_argument("--output-timezone", help="Zone to print results in (default: system zone)")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument(
        "--stdin", action="store_true", help="Read one phrase per line from standard input"
    )
    parser.add_argument("--debug", action="store_true", help="Report every parsing stage")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        input_zone = get_zone(args.input_timezone or config.input_timezone)
        output_zone = get_zone(args.output_timezone or config.output_timezone)
    except FuzzyDateError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    fmt = args.format or config.format

    if args.stdin:
        phrases = [line.strip() for line in sys.stdin if line.strip()]
    else:
        phrases = [" ".join(args.date_string)]

    failed = False
    for phrase in phrases:
        if args.debug:
            _print_debug(phrase, args.relative_to, input_zone)

        try:
            result = parse(phrase, relative_to=args.relative_to, tz=input_zone)
        except FuzzyDateError as e:
            print(f"{phrase}: {e}" if args.stdin else e, file=sys.stderr)
            failed = True
            continue

        print(format_datetime(result.astimezone(output_zone), fmt))

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
