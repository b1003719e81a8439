"""fuzzydate: turn human date phrases into precise date-times.

Pipeline: lex the phrase -> parse lexemes into an expression -> resolve the
expression against a reference instant and time zone.

Example:
    from datetime import datetime
    from zoneinfo import ZoneInfo
    from fuzzydate import parse

    ref = datetime(2022, 2, 1, 9, 30, tzinfo=ZoneInfo("America/New_York"))
    parse("five days after 2/12/22 5:00 PM", relative_to=ref)
    # -> 2022-02-17 17:00 America/New_York
"""

__version__ = "0.3.0"

import logging
from dataclasses import dataclass
from datetime import datetime, time, tzinfo

from .ast import (
    After,
    Ago,
    Article,
    ArticleDuration,
    Before,
    Clock,
    Concat,
    Date,
    DateAfter,
    DateAgo,
    DateBefore,
    DateTime,
    Duration,
    EmptyTime,
    Expr,
    Midnight,
    Month,
    MonthDay,
    MonthDayYear,
    MonthNumDay,
    MonthNumDayYear,
    Noon,
    Now,
    Relative,
    RelativeSpecifier,
    Specific,
    Time,
    TimeDate,
    Today,
    Tomorrow,
    Unit,
    UnitRelative,
    Weekday,
    WeekdayDate,
    Yesterday,
)
from .config import Config, get_zone, load_config
from .errors import (
    ConfigError,
    FuzzyDateError,
    InvalidDateError,
    ParseError,
    UnrecognizedTokenError,
)
from .lexer import KEYWORDS, Lexeme, Lexer, TokenType, lex
from .parser import parse_expr, parse_root
from .resolver import Resolver, localize, resolve

logger = logging.getLogger(__name__)


def reference_instant(relative_to: datetime | None = None, tz: tzinfo | str | None = None) -> datetime:
    """Build the zoned reference instant for a parse.

    The zone is tz if given, else the zone of relative_to, else the system
    zone. A naive relative_to is read as wall-clock time in that zone.
    """
    if isinstance(tz, str):
        zone = get_zone(tz)
    elif tz is not None:
        zone = tz
    elif relative_to is not None and relative_to.tzinfo is not None:
        zone = relative_to.tzinfo
    else:
        zone = get_zone(None)

    if relative_to is None:
        return datetime.now(zone)
    if relative_to.tzinfo is None:
        return localize(relative_to, zone)
    return relative_to.astimezone(zone)


def parse(text: str, relative_to: datetime | None = None, tz: tzinfo | str | None = None) -> datetime:
    """Parse a phrase into a zoned datetime."""
    lexemes = lex(text)
    expr = parse_expr(lexemes)
    return resolve(expr, reference_instant(relative_to, tz))


def parse_with_default_time(text: str, default: time, tz: tzinfo | str | None = None) -> datetime:
    """Parse a phrase relative to today at the given wall-clock time."""
    today = reference_instant(None, tz)
    reference = localize(datetime.combine(today.date(), default), today.tzinfo)
    return parse(text, relative_to=reference)


@dataclass
class DebugResult:
    """Output of every pipeline stage that ran."""

    lexemes: list[Lexeme] | None = None
    parsed: tuple[Expr, int] | None = None  # (expression, lexemes consumed)
    result: datetime | None = None
    error: FuzzyDateError | None = None


def debug_parse(
    text: str, relative_to: datetime | None = None, tz: tzinfo | str | None = None
) -> DebugResult:
    """Run the pipeline, keeping each stage's output and the first error."""
    debug = DebugResult()
    try:
        reference = reference_instant(relative_to, tz)
        debug.lexemes = lex(text)
        debug.parsed = parse_root(debug.lexemes)
        expr = parse_expr(debug.lexemes)
        debug.result = resolve(expr, reference)
    except FuzzyDateError as e:
        logger.debug("debug_parse stopped: %s", e)
        debug.error = e
    return debug


__all__ = [
    # Pipeline
    "parse",
    "parse_with_default_time",
    "debug_parse",
    "DebugResult",
    "reference_instant",
    "lex",
    "parse_expr",
    "parse_root",
    "resolve",
    "localize",
    "Lexer",
    "Lexeme",
    "TokenType",
    "KEYWORDS",
    "Resolver",
    # Errors
    "FuzzyDateError",
    "UnrecognizedTokenError",
    "ParseError",
    "InvalidDateError",
    "ConfigError",
    # Config
    "Config",
    "load_config",
    "get_zone",
    # AST
    "Expr",
    "Now",
    "DateTime",
    "TimeDate",
    "After",
    "Before",
    "Ago",
    "Date",
    "Today",
    "Tomorrow",
    "Yesterday",
    "MonthDay",
    "MonthDayYear",
    "MonthNumDay",
    "MonthNumDayYear",
    "Relative",
    "UnitRelative",
    "WeekdayDate",
    "DateAfter",
    "DateBefore",
    "DateAgo",
    "Time",
    "Midnight",
    "Noon",
    "Clock",
    "EmptyTime",
    "Duration",
    "Specific",
    "ArticleDuration",
    "Concat",
    "Unit",
    "Weekday",
    "Month",
    "RelativeSpecifier",
    "Article",
]
