"""Tests for the date expression grammar."""

import pytest
from pydantic import TypeAdapter, ValidationError

from fuzzydate import (
    After,
    Ago,
    Article,
    ArticleDuration,
    Before,
    Clock,
    Concat,
    DateAfter,
    DateBefore,
    DateTime,
    EmptyTime,
    Expr,
    Month,
    MonthDay,
    MonthDayYear,
    MonthNumDay,
    MonthNumDayYear,
    Noon,
    Now,
    ParseError,
    Relative,
    RelativeSpecifier,
    Specific,
    TimeDate,
    Tomorrow,
    Unit,
    UnitRelative,
    Weekday,
    WeekdayDate,
    Yesterday,
    lex,
    parse_expr,
    parse_root,
)
from fuzzydate.parser import is_sub_daily, parse_date, parse_duration, parse_time


class TestDuration:
    def test_specific(self):
        assert parse_duration(lex("five days")) == (Specific(count=5, unit=Unit.DAY), 2)

    def test_article(self):
        assert parse_duration(lex("an hour")) == (
            ArticleDuration(article=Article.AN, unit=Unit.HOUR),
            2,
        )

    def test_concat_right_associates(self):
        duration, consumed = parse_duration(lex("a week and 2 days and 3 hours"))
        assert consumed == 8
        assert duration == Concat(
            left=ArticleDuration(article=Article.A, unit=Unit.WEEK),
            right=Concat(
                left=Specific(count=2, unit=Unit.DAY),
                right=Specific(count=3, unit=Unit.HOUR),
            ),
        )

    def test_dangling_and_not_consumed(self):
        assert parse_duration(lex("2 days and")) == (Specific(count=2, unit=Unit.DAY), 2)

    def test_missing_unit(self):
        assert parse_duration(lex("5 pm")) is None

    def test_sub_daily(self):
        assert is_sub_daily(Specific(count=3, unit=Unit.MINUTE))
        assert not is_sub_daily(Specific(count=3, unit=Unit.WEEK))
        assert is_sub_daily(parse_duration(lex("a day and an hour"))[0])


class TestDate:
    def test_sentinels(self):
        assert parse_date(lex("tomorrow")) == (Tomorrow(), 1)
        assert parse_date(lex("yesterday")) == (Yesterday(), 1)

    def test_month_day(self):
        assert parse_date(lex("june 3")) == (MonthDay(month=Month.JUNE, day=3), 2)

    def test_month_day_year(self):
        assert parse_date(lex("jan 1 2010")) == (
            MonthDayYear(month=Month.JANUARY, day=1, year=2010),
            3,
        )

    def test_month_requires_day(self):
        assert parse_date(lex("june")) is None

    def test_relative_weekday(self):
        assert parse_date(lex("next friday")) == (
            Relative(specifier=RelativeSpecifier.NEXT, weekday=Weekday.FRIDAY),
            2,
        )

    def test_relative_unit(self):
        assert parse_date(lex("last month")) == (
            UnitRelative(specifier=RelativeSpecifier.LAST, unit=Unit.MONTH),
            2,
        )

    def test_specifier_alone(self):
        assert parse_date(lex("next")) is None

    def test_weekday(self):
        assert parse_date(lex("wed")) == (WeekdayDate(weekday=Weekday.WEDNESDAY), 1)

    def test_numeric_slash(self):
        assert parse_date(lex("5/2/2022")) == (
            MonthNumDayYear(month=5, day=2, year=2022, delimiter="/"),
            5,
        )

    def test_numeric_dot_is_day_first(self):
        assert parse_date(lex("12.2.2022")) == (
            MonthNumDayYear(month=2, day=12, year=2022, delimiter="."),
            5,
        )

    def test_numeric_without_year(self):
        assert parse_date(lex("2/12")) == (MonthNumDay(month=2, day=12, delimiter="/"), 3)

    def test_numeric_dangling_delimiter(self):
        assert parse_date(lex("2/12/")) is None

    def test_duration_before_date(self):
        assert parse_date(lex("3 days before yesterday")) == (
            DateBefore(duration=Specific(count=3, unit=Unit.DAY), date=Yesterday()),
            4,
        )

    def test_from_is_after(self):
        node, consumed = parse_date(lex("a week from tomorrow"))
        assert consumed == 4
        assert node == DateAfter(
            duration=ArticleDuration(article=Article.A, unit=Unit.WEEK),
            date=Tomorrow(),
        )

    def test_sub_daily_duration_is_not_a_date(self):
        assert parse_date(lex("3 minutes before yesterday")) is None


class TestTime:
    def test_named(self):
        assert parse_time(lex("noon")) == (Noon(), 1)

    def test_clock_with_meridiem(self):
        assert parse_time(lex("5:30 pm")) == (Clock(hour=5, minute=30, meridiem="pm"), 4)

    def test_clock_24_hour(self):
        assert parse_time(lex("17:45")) == (Clock(hour=17, minute=45), 3)

    def test_colon_without_minutes(self):
        assert parse_time(lex("5:")) == (Clock(hour=5, minute=0), 2)

    def test_empty(self):
        assert parse_time([]) == (EmptyTime(), 0)
        assert parse_time(lex("tomorrow")) == (EmptyTime(), 0)


class TestRoot:
    def test_now(self):
        assert parse_root(lex("now")) == (Now(), 1)

    def test_ago(self):
        assert parse_root(lex("3 days ago")) == (Ago(duration=Specific(count=3, unit=Unit.DAY)), 3)

    def test_sub_daily_relative(self):
        node, consumed = parse_root(lex("ten minutes before now"))
        assert consumed == 4
        assert node == Before(duration=Specific(count=10, unit=Unit.MINUTE), expr=Now())

    def test_date_then_time(self):
        assert parse_root(lex("tomorrow, at 5pm")) == (
            DateTime(date=Tomorrow(), time=Clock(hour=5, meridiem="pm")),
            5,
        )

    def test_time_then_date(self):
        assert parse_root(lex("5pm on friday")) == (
            TimeDate(time=Clock(hour=5, meridiem="pm"), date=WeekdayDate(weekday=Weekday.FRIDAY)),
            4,
        )

    def test_time_alone(self):
        """A time must be followed by a date."""
        assert parse_root(lex("5pm")) is None
        assert parse_root(lex("12")) is None
        with pytest.raises(ParseError):
            parse_expr(lex("2021"))

    def test_duration_after_time_of_month_day(self):
        assert parse_root(lex("june 5, 2 hours after noon")) == (
            After(
                duration=Specific(count=2, unit=Unit.HOUR),
                expr=DateTime(date=MonthDay(month=Month.JUNE, day=5), time=Noon()),
            ),
            7,
        )

    def test_number_after_month_day_is_year(self):
        """Without a comma the count is read as the year."""
        with pytest.raises(ParseError, match="trailing"):
            parse_expr(lex("june 5 2 hours after noon"))

    def test_duration_after_time_of_date(self):
        assert parse_root(lex("tomorrow 2 hours after noon")) == (
            After(
                duration=Specific(count=2, unit=Unit.HOUR),
                expr=DateTime(date=Tomorrow(), time=Noon()),
            ),
            5,
        )

    def test_nested(self):
        lexemes = lex("a week after two days before the day after tomorrow, 5:20")
        node, consumed = parse_root(lexemes)
        assert consumed == len(lexemes) == 14
        assert isinstance(node, After)
        assert isinstance(node.expr, Before)
        assert node.expr.expr.expr == DateTime(date=Tomorrow(), time=Clock(hour=5, minute=20))


class TestParseExpr:
    def test_requires_full_consumption(self):
        with pytest.raises(ParseError, match="trailing"):
            parse_expr(lex("today 5 days"))

    def test_empty(self):
        with pytest.raises(ParseError, match="empty"):
            parse_expr([])

    def test_nothing_to_match(self):
        with pytest.raises(ParseError):
            parse_expr(lex("ago"))

    def test_trailing_after_now(self):
        with pytest.raises(ParseError):
            parse_expr(lex("now 5"))

    def test_repeated_at(self):
        with pytest.raises(ParseError):
            parse_expr(lex("tomorrow at at 5pm"))

    def test_mixed_delimiters(self):
        with pytest.raises(ParseError):
            parse_expr(lex("2/12-2022"))

    def test_returns_expression(self):
        assert parse_expr(lex("now")) == Now()


class TestNodes:
    def test_frozen(self):
        node = Specific(count=1, unit=Unit.DAY)
        with pytest.raises(ValidationError):
            node.count = 2

    def test_discriminated_round_trip(self):
        adapter = TypeAdapter(Expr)
        expr = parse_expr(lex("2 days after 5pm on june 3"))
        assert adapter.validate_python(adapter.dump_python(expr)) == expr
