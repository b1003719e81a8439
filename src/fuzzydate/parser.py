"""Recursive descent grammar for fuzzy date expressions.

Grammar (alternatives are tried in order; the first one that matches commits):
    datetime  = "now"
              | duration ("after" | "from") datetime
              | duration "before" datetime
              | duration "ago"
              | date [","] ["at"] duration ("after" | "before") time
              | date [","] ["at"] time
              | time [","] ["on"] date
    date      = duration "ago"                        ; whole days or longer only
              | duration ("after" | "from") date      ; whole days or longer only
              | duration "before" date                ; whole days or longer only
              | "today" | "tomorrow" | "yesterday"
              | month num [num]
              | ("this" | "next" | "last") (weekday | unit)
              | weekday
              | num delim num [delim num]             ; delim is "/", "-" or "."
    time      = "midnight" | "noon"
              | num [":" [num]] ["am" | "pm"]
              | <empty>
    duration  = (num unit | article unit) ["and" duration]

Numeric dates are month/day/year, except with "." which is day.month.year.
Every rule returns (node, lexemes consumed) or None.
"""

import logging
from collections.abc import Sequence

from . import ast
from .errors import ParseError
from .lexer import Lexeme, TokenType
from .numerals import parse_num, peek

logger = logging.getLogger(__name__)

UNITS = {
    TokenType.DAY: ast.Unit.DAY,
    TokenType.WEEK: ast.Unit.WEEK,
    TokenType.HOUR: ast.Unit.HOUR,
    TokenType.MINUTE: ast.Unit.MINUTE,
    TokenType.MONTH: ast.Unit.MONTH,
    TokenType.YEAR: ast.Unit.YEAR,
}

SUB_DAILY = {ast.Unit.HOUR, ast.Unit.MINUTE}

WEEKDAYS = {
    TokenType.MONDAY: ast.Weekday.MONDAY,
    TokenType.TUESDAY: ast.Weekday.TUESDAY,
    TokenType.WEDNESDAY: ast.Weekday.WEDNESDAY,
    TokenType.THURSDAY: ast.Weekday.THURSDAY,
    TokenType.FRIDAY: ast.Weekday.FRIDAY,
    TokenType.SATURDAY: ast.Weekday.SATURDAY,
    TokenType.SUNDAY: ast.Weekday.SUNDAY,
}

MONTHS = {
    TokenType.JANUARY: ast.Month.JANUARY,
    TokenType.FEBRUARY: ast.Month.FEBRUARY,
    TokenType.MARCH: ast.Month.MARCH,
    TokenType.APRIL: ast.Month.APRIL,
    TokenType.MAY: ast.Month.MAY,
    TokenType.JUNE: ast.Month.JUNE,
    TokenType.JULY: ast.Month.JULY,
    TokenType.AUGUST: ast.Month.AUGUST,
    TokenType.SEPTEMBER: ast.Month.SEPTEMBER,
    TokenType.OCTOBER: ast.Month.OCTOBER,
    TokenType.NOVEMBER: ast.Month.NOVEMBER,
    TokenType.DECEMBER: ast.Month.DECEMBER,
}

SPECIFIERS = {
    TokenType.THIS: ast.RelativeSpecifier.THIS,
    TokenType.NEXT: ast.RelativeSpecifier.NEXT,
    TokenType.LAST: ast.RelativeSpecifier.LAST,
}

ARTICLES = {
    TokenType.A: ast.Article.A,
    TokenType.AN: ast.Article.AN,
    TokenType.THE: ast.Article.THE,
}

DATE_DELIMITERS = {TokenType.SLASH, TokenType.DASH, TokenType.DOT}


def _keyword(table: dict, tokens: Sequence[Lexeme]):
    """Match a single lexeme looked up in table."""
    if (tt := peek(tokens)) in table:
        return table[tt], 1
    return None


def is_sub_daily(duration: ast.Duration) -> bool:
    """True if any part of the duration is in hours or minutes."""
    match duration:
        case ast.Concat(left=left, right=right):
            return is_sub_daily(left) or is_sub_daily(right)
        case ast.Specific(unit=unit) | ast.ArticleDuration(unit=unit):
            return unit in SUB_DAILY
    raise TypeError(f"not a duration: {duration!r}")


# Durations


def _parse_concrete_duration(tokens: Sequence[Lexeme]):
    if num := parse_num(tokens):
        count, pos = num
        if unit := _keyword(UNITS, tokens[pos:]):
            return ast.Specific(count=count, unit=unit[0]), pos + 1

    if article := _keyword(ARTICLES, tokens):
        if unit := _keyword(UNITS, tokens[1:]):
            return ast.ArticleDuration(article=article[0], unit=unit[0]), 2

    return None


def parse_duration(tokens: Sequence[Lexeme]):
    """Parse a duration, right-associating 'and' into Concat."""
    concrete = _parse_concrete_duration(tokens)
    if concrete is None:
        return None

    duration, pos = concrete
    if peek(tokens, pos) is TokenType.AND:
        if rest := parse_duration(tokens[pos + 1 :]):
            right, consumed = rest
            return ast.Concat(left=duration, right=right), pos + 1 + consumed

    return duration, pos


# Dates


def _parse_duration_date(tokens: Sequence[Lexeme]):
    """'<duration> ago' and '<duration> after/from/before <date>'."""
    parsed = parse_duration(tokens)
    if parsed is None:
        return None

    duration, pos = parsed
    if is_sub_daily(duration):
        return None

    match peek(tokens, pos):
        case TokenType.AGO:
            return ast.DateAgo(duration=duration), pos + 1
        case TokenType.AFTER | TokenType.FROM:
            if inner := parse_date(tokens[pos + 1 :]):
                return ast.DateAfter(duration=duration, date=inner[0]), pos + 1 + inner[1]
        case TokenType.BEFORE:
            if inner := parse_date(tokens[pos + 1 :]):
                return ast.DateBefore(duration=duration, date=inner[0]), pos + 1 + inner[1]
    return None


def _parse_numeric_date(tokens: Sequence[Lexeme]):
    first = parse_num(tokens)
    if first is None:
        return None
    num1, pos = first

    delim = peek(tokens, pos)
    if delim not in DATE_DELIMITERS:
        return None
    pos += 1

    second = parse_num(tokens[pos:])
    if second is None:
        return None
    num2, consumed = second
    pos += consumed

    # Day first with dots, month first otherwise
    month, day = (num2, num1) if delim is TokenType.DOT else (num1, num2)

    if peek(tokens, pos) is not delim:
        node = ast.MonthNumDay(month=month, day=day, delimiter=delim.value)
        return node, pos
    pos += 1

    third = parse_num(tokens[pos:])
    if third is None:
        return None
    year, consumed = third
    node = ast.MonthNumDayYear(month=month, day=day, year=year, delimiter=delim.value)
    return node, pos + consumed


def parse_date(tokens: Sequence[Lexeme]):
    """Parse a calendar date."""
    if result := _parse_duration_date(tokens):
        return result

    match peek(tokens):
        case TokenType.TODAY:
            return ast.Today(), 1
        case TokenType.TOMORROW:
            return ast.Tomorrow(), 1
        case TokenType.YESTERDAY:
            return ast.Yesterday(), 1

    if month := _keyword(MONTHS, tokens):
        day = parse_num(tokens[1:])
        if day is None:
            return None
        pos = 1 + day[1]
        if year := parse_num(tokens[pos:]):
            node = ast.MonthDayYear(month=month[0], day=day[0], year=year[0])
            return node, pos + year[1]
        return ast.MonthDay(month=month[0], day=day[0]), pos

    if specifier := _keyword(SPECIFIERS, tokens):
        if weekday := _keyword(WEEKDAYS, tokens[1:]):
            return ast.Relative(specifier=specifier[0], weekday=weekday[0]), 2
        if unit := _keyword(UNITS, tokens[1:]):
            return ast.UnitRelative(specifier=specifier[0], unit=unit[0]), 2
        return None

    if weekday := _keyword(WEEKDAYS, tokens):
        return ast.WeekdayDate(weekday=weekday[0]), 1

    return _parse_numeric_date(tokens)


# Times


def parse_time(tokens: Sequence[Lexeme]):
    """Parse a clock time. Always matches; no time at all is EmptyTime."""
    match peek(tokens):
        case TokenType.MIDNIGHT:
            return ast.Midnight(), 1
        case TokenType.NOON:
            return ast.Noon(), 1

    if hour := parse_num(tokens):
        pos = hour[1]
        minute = 0
        if peek(tokens, pos) is TokenType.COLON:
            pos += 1
            if parsed := parse_num(tokens[pos:]):
                minute = parsed[0]
                pos += parsed[1]

        meridiem = None
        if peek(tokens, pos) is TokenType.AM:
            meridiem = "am"
            pos += 1
        elif peek(tokens, pos) is TokenType.PM:
            meridiem = "pm"
            pos += 1
        return ast.Clock(hour=hour[0], minute=minute, meridiem=meridiem), pos

    return ast.EmptyTime(), 0


# Root


def _parse_relative(tokens: Sequence[Lexeme]):
    """'<duration> after/from/before <datetime>' and '<duration> ago'."""
    parsed = parse_duration(tokens)
    if parsed is None:
        return None

    duration, pos = parsed
    match peek(tokens, pos):
        case TokenType.AFTER | TokenType.FROM:
            if inner := parse_root(tokens[pos + 1 :]):
                return ast.After(duration=duration, expr=inner[0]), pos + 1 + inner[1]
        case TokenType.BEFORE:
            if inner := parse_root(tokens[pos + 1 :]):
                return ast.Before(duration=duration, expr=inner[0]), pos + 1 + inner[1]
        case TokenType.AGO:
            return ast.Ago(duration=duration), pos + 1
    return None


def _parse_date_first(tokens: Sequence[Lexeme]):
    parsed = parse_date(tokens)
    if parsed is None:
        return None

    date, pos = parsed
    if peek(tokens, pos) is TokenType.COMMA:
        pos += 1
    if peek(tokens, pos) is TokenType.AT:
        pos += 1

    # Before time: a bare number would start a time and strand the unit
    if relative := parse_duration(tokens[pos:]):
        duration, consumed = relative
        after = pos + consumed
        if peek(tokens, after) in (TokenType.AFTER, TokenType.BEFORE):
            time, t = parse_time(tokens[after + 1 :])
            anchor = ast.DateTime(date=date, time=time)
            end = after + 1 + t
            if peek(tokens, after) is TokenType.AFTER:
                return ast.After(duration=duration, expr=anchor), end
            return ast.Before(duration=duration, expr=anchor), end

    time, t = parse_time(tokens[pos:])
    return ast.DateTime(date=date, time=time), pos + t


def _parse_time_first(tokens: Sequence[Lexeme]):
    time, pos = parse_time(tokens)
    if pos == 0:
        return None

    rest = pos
    if peek(tokens, rest) is TokenType.COMMA:
        rest += 1
    if peek(tokens, rest) is TokenType.ON:
        rest += 1

    if date := parse_date(tokens[rest:]):
        return ast.TimeDate(time=time, date=date[0]), rest + date[1]
    return None


def parse_root(tokens: Sequence[Lexeme]):
    """Parse a full date-time expression from the start of tokens.

    Returns (expression, lexemes consumed) or None. The caller must check that
    every lexeme was consumed.
    """
    if peek(tokens) is TokenType.NOW:
        return ast.Now(), 1

    if result := _parse_relative(tokens):
        return result

    if result := _parse_date_first(tokens):
        return result

    return _parse_time_first(tokens)


def parse_expr(lexemes: Sequence[Lexeme]) -> ast.Expr:
    """Parse lexemes into an expression, requiring all of them to be consumed."""
    if not lexemes:
        raise ParseError("empty input")

    parsed = parse_root(lexemes)
    if parsed is None:
        raise ParseError("unable to parse date")

    expr, consumed = parsed
    if consumed < len(lexemes):
        raise ParseError(
            f"unable to parse date: {len(lexemes) - consumed} trailing lexeme(s) "
            f"starting at {lexemes[consumed]!r}"
        )

    logger.debug("parsed %d lexemes into %r", consumed, expr)
    return expr
