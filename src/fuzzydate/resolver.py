"""Resolver: evaluates a parsed expression against a reference instant.

Days, weeks, hours and minutes are fixed lengths of elapsed time. Months and
years step the calendar and clamp to the last day of a shorter month. Local
times are placed in the reference zone: a time inside a DST gap is an error,
and a repeated time takes its earlier occurrence.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from dateutil import tz
from dateutil.relativedelta import relativedelta

from . import ast
from .errors import InvalidDateError, ParseError

logger = logging.getLogger(__name__)

# Two-digit years more than this far ahead of the reference year are last century
YEAR_WINDOW = 10


def _delta(count: int, unit: ast.Unit) -> timedelta | relativedelta:
    match unit:
        case ast.Unit.DAY:
            return timedelta(days=count)
        case ast.Unit.WEEK:
            return timedelta(weeks=count)
        case ast.Unit.HOUR:
            return timedelta(hours=count)
        case ast.Unit.MINUTE:
            return timedelta(minutes=count)
        case ast.Unit.MONTH:
            return relativedelta(months=count)
        case ast.Unit.YEAR:
            return relativedelta(years=count)


def _leaves(duration: ast.Duration):
    """Yield (count, unit) pairs left to right."""
    match duration:
        case ast.Concat(left=left, right=right):
            yield from _leaves(left)
            yield from _leaves(right)
        case ast.Specific(count=count, unit=unit):
            yield count, unit
        case ast.ArticleDuration(unit=unit):
            yield 1, unit


def make_date(year: int, month: int, day: int) -> date:
    try:
        return date(year, month, day)
    except (OverflowError, ValueError):
        raise InvalidDateError(f"invalid year-month-day: {year}-{month}-{day}") from None


def localize(naive: datetime, zone: tzinfo) -> datetime:
    """Attach a zone to a wall-clock time.

    Raises InvalidDateError if a DST transition skips the time. A time that
    occurs twice resolves to the earlier occurrence.
    """
    local = naive.replace(tzinfo=zone, fold=0)
    if not tz.datetime_exists(local):
        raise InvalidDateError(
            f"{naive:%Y-%m-%d %H:%M} does not exist in {zone} "
            "(skipped by a daylight saving transition)"
        )
    return local


def expand_year(year: int, reference_year: int) -> int:
    """Expand a two-digit year to the century nearest the reference year."""
    if year >= 100:
        return year
    if reference_year + YEAR_WINDOW < 2000 + year:
        return 1900 + year
    return 2000 + year


class Resolver:
    """Resolves expressions relative to a timezone-aware reference instant."""

    def __init__(self, reference: datetime):
        if reference.tzinfo is None:
            raise ValueError("reference instant must be timezone-aware")
        self.reference = reference
        self.tz = reference.tzinfo
        self.today = reference.date()

    def resolve(self, expr: ast.Expr) -> datetime:
        result = self._resolve(expr)
        logger.debug("resolved %r -> %s", expr, result.isoformat())
        return result

    def _resolve(self, expr: ast.Expr) -> datetime:
        match expr:
            case ast.Now():
                return self.reference

            case ast.DateTime(date=d, time=t) | ast.TimeDate(date=d, time=t):
                return self.localize(datetime.combine(self.resolve_date(d), self.resolve_time(t)))

            case ast.After(duration=duration, expr=inner):
                return self.shift(self._resolve(inner), duration, 1)

            case ast.Before(duration=duration, expr=inner):
                return self.shift(self._resolve(inner), duration, -1)

            case ast.Ago(duration=duration):
                return self.shift(self.reference, duration, -1)

        raise TypeError(f"not an expression: {expr!r}")

    def localize(self, naive: datetime) -> datetime:
        return localize(naive, self.tz)

    def shift(self, moment: datetime, duration: ast.Duration, sign: int) -> datetime:
        """Move a zoned instant forward (sign=1) or back (sign=-1) by a duration."""
        for count, unit in _leaves(duration):
            try:
                delta = _delta(sign * count, unit)
                if isinstance(delta, timedelta):
                    utc = moment.astimezone(timezone.utc) + delta
                    moment = utc.astimezone(self.tz)
                else:
                    moment = self.localize(moment.replace(tzinfo=None) + delta)
            except (OverflowError, ValueError) as e:
                raise InvalidDateError(
                    f"{count} {unit.value}(s) from {moment.isoformat()} is out of range: {e}"
                ) from e
        return moment

    def shift_date(self, day: date, duration: ast.Duration, sign: int) -> date:
        """Move a calendar date by a whole-day duration."""
        for count, unit in _leaves(duration):
            try:
                day = day + _delta(sign * count, unit)
            except (OverflowError, ValueError) as e:
                raise InvalidDateError(
                    f"{count} {unit.value}(s) from {day.isoformat()} is out of range: {e}"
                ) from e
        return day

    def resolve_date(self, node: ast.Date) -> date:
        today = self.today
        match node:
            case ast.Today():
                return today
            case ast.Tomorrow():
                return self.shift_date(today, ast.Specific(count=1, unit=ast.Unit.DAY), 1)
            case ast.Yesterday():
                return self.shift_date(today, ast.Specific(count=1, unit=ast.Unit.DAY), -1)

            case ast.MonthDay(month=month, day=day):
                return make_date(today.year, month.value, day)
            case ast.MonthDayYear(month=month, day=day, year=year):
                return make_date(year, month.value, day)
            case ast.MonthNumDay(month=month, day=day):
                return make_date(today.year, month, day)
            case ast.MonthNumDayYear(month=month, day=day, year=year):
                return make_date(expand_year(year, today.year), month, day)

            case ast.Relative(specifier=specifier, weekday=weekday):
                return self._relative_weekday(specifier, weekday)
            case ast.UnitRelative(specifier=specifier, unit=unit):
                return self._relative_unit(specifier, unit)
            case ast.WeekdayDate(weekday=weekday):
                # Next occurrence, today included
                return today + timedelta(days=(weekday.value - today.weekday()) % 7)

            case ast.DateAfter(duration=duration, date=inner):
                return self.shift_date(self.resolve_date(inner), duration, 1)
            case ast.DateBefore(duration=duration, date=inner):
                return self.shift_date(self.resolve_date(inner), duration, -1)
            case ast.DateAgo(duration=duration):
                return self.shift_date(today, duration, -1)

        raise TypeError(f"not a date: {node!r}")

    def _relative_weekday(self, specifier: ast.RelativeSpecifier, weekday: ast.Weekday) -> date:
        """Find a weekday in the current, next or previous ISO week."""
        monday = self.today - timedelta(days=self.today.weekday())
        match specifier:
            case ast.RelativeSpecifier.NEXT:
                monday += timedelta(weeks=1)
            case ast.RelativeSpecifier.LAST:
                monday -= timedelta(weeks=1)
        return monday + timedelta(days=weekday.value)

    def _relative_unit(self, specifier: ast.RelativeSpecifier, unit: ast.Unit) -> date:
        match specifier:
            case ast.RelativeSpecifier.NEXT:
                sign = 1
            case ast.RelativeSpecifier.LAST:
                sign = -1
            case _:
                raise ParseError(f"'this {unit.value}' is not supported; use 'next' or 'last'")

        one = ast.Specific(count=1, unit=unit)
        if unit in (ast.Unit.MONTH, ast.Unit.YEAR):
            # Calendar step on the date alone; the time of day is resolved separately
            return self.shift_date(self.today, one, sign)
        return self.shift(self.reference, one, sign).date()

    def resolve_time(self, node: ast.Time) -> time:
        match node:
            case ast.EmptyTime():
                return self.reference.time()
            case ast.Midnight():
                return time(0, 0)
            case ast.Noon():
                return time(12, 0)
            case ast.Clock(hour=hour, minute=minute, meridiem=meridiem):
                return _clock(hour, minute, meridiem)

        raise TypeError(f"not a time: {node!r}")


def _clock(hour: int, minute: int, meridiem: str | None) -> time:
    label = f"{hour}:{minute:02d}" + (f" {meridiem}" if meridiem else "")
    if meridiem is not None:
        if not 1 <= hour <= 12:
            raise InvalidDateError(f"invalid time: {label}")
        hour %= 12
        if meridiem == "pm":
            hour += 12
    try:
        return time(hour, minute)
    except (OverflowError, ValueError):
        raise InvalidDateError(f"invalid time: {label}") from None


def resolve(expr: ast.Expr, reference: datetime) -> datetime:
    """Resolve an expression relative to a timezone-aware reference instant."""
    return Resolver(reference).resolve(expr)
