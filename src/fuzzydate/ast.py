"""AST nodes for fuzzy date expressions."""

from enum import Enum
from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, ConfigDict, Field


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Unit(Enum):
    DAY = "day"
    WEEK = "week"
    HOUR = "hour"
    MINUTE = "minute"
    MONTH = "month"
    YEAR = "year"


class Weekday(Enum):
    # Values match datetime.date.weekday()
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class Month(Enum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


class RelativeSpecifier(Enum):
    THIS = "this"
    NEXT = "next"
    LAST = "last"


class Article(Enum):
    A = "a"
    AN = "an"
    THE = "the"


# Durations
class Specific(Node):
    """An explicit count of a unit (e.g., 'five days')."""

    type: TypingLiteral["specific"] = "specific"
    count: int
    unit: Unit


class ArticleDuration(Node):
    """One of a unit introduced by an article (e.g., 'a week')."""

    type: TypingLiteral["article"] = "article"
    article: Article
    unit: Unit


class Concat(Node):
    """'left and right', applied left first."""

    type: TypingLiteral["concat"] = "concat"
    left: "Duration"
    right: "Duration"


Duration = Annotated[
    Specific | ArticleDuration | Concat,
    Field(discriminator="type"),
]


# Dates
class Today(Node):
    type: TypingLiteral["today"] = "today"


class Tomorrow(Node):
    type: TypingLiteral["tomorrow"] = "tomorrow"


class Yesterday(Node):
    type: TypingLiteral["yesterday"] = "yesterday"


class MonthDay(Node):
    type: TypingLiteral["month_day"] = "month_day"
    month: Month
    day: int


class MonthDayYear(Node):
    type: TypingLiteral["month_day_year"] = "month_day_year"
    month: Month
    day: int
    year: int


class MonthNumDay(Node):
    """Numeric date without a year (e.g., '2/12' or '12.2')."""

    type: TypingLiteral["month_num_day"] = "month_num_day"
    month: int
    day: int
    delimiter: str = "/"


class MonthNumDayYear(Node):
    """Numeric date with a year; the year may be two digits."""

    type: TypingLiteral["month_num_day_year"] = "month_num_day_year"
    month: int
    day: int
    year: int
    delimiter: str = "/"


class Relative(Node):
    """'this/next/last <weekday>'."""

    type: TypingLiteral["relative"] = "relative"
    specifier: RelativeSpecifier
    weekday: Weekday


class UnitRelative(Node):
    """'next/last <unit>'."""

    type: TypingLiteral["unit_relative"] = "unit_relative"
    specifier: RelativeSpecifier
    unit: Unit


class WeekdayDate(Node):
    type: TypingLiteral["weekday"] = "weekday"
    weekday: Weekday


class DateAfter(Node):
    type: TypingLiteral["date_after"] = "date_after"
    duration: Duration
    date: "Date"


class DateBefore(Node):
    type: TypingLiteral["date_before"] = "date_before"
    duration: Duration
    date: "Date"


class DateAgo(Node):
    """'<duration> ago' as a date: the duration before today."""

    type: TypingLiteral["date_ago"] = "date_ago"
    duration: Duration


Date = Annotated[
    Today
    | Tomorrow
    | Yesterday
    | MonthDay
    | MonthDayYear
    | MonthNumDay
    | MonthNumDayYear
    | Relative
    | UnitRelative
    | WeekdayDate
    | DateAfter
    | DateBefore
    | DateAgo,
    Field(discriminator="type"),
]


# Times
class Midnight(Node):
    type: TypingLiteral["midnight"] = "midnight"


class Noon(Node):
    type: TypingLiteral["noon"] = "noon"


class Clock(Node):
    type: TypingLiteral["clock"] = "clock"
    hour: int
    minute: int = 0
    meridiem: TypingLiteral["am", "pm"] | None = None  # None = 24-hour


class EmptyTime(Node):
    """No time given; resolves to the reference time of day."""

    type: TypingLiteral["empty"] = "empty"


Time = Annotated[
    Midnight | Noon | Clock | EmptyTime,
    Field(discriminator="type"),
]


# Root expressions
class Now(Node):
    type: TypingLiteral["now"] = "now"


class DateTime(Node):
    type: TypingLiteral["datetime"] = "datetime"
    date: Date
    time: Time


class TimeDate(Node):
    type: TypingLiteral["timedate"] = "timedate"
    time: Time
    date: Date


class After(Node):
    type: TypingLiteral["after"] = "after"
    duration: Duration
    expr: "Expr"


class Before(Node):
    type: TypingLiteral["before"] = "before"
    duration: Duration
    expr: "Expr"


class Ago(Node):
    type: TypingLiteral["ago"] = "ago"
    duration: Duration


Expr = Annotated[
    Now | DateTime | TimeDate | After | Before | Ago,
    Field(discriminator="type"),
]


# Rebuild models for forward references
Concat.model_rebuild()
DateAfter.model_rebuild()
DateBefore.model_rebuild()
DateAgo.model_rebuild()
DateTime.model_rebuild()
TimeDate.model_rebuild()
After.model_rebuild()
Before.model_rebuild()
Ago.model_rebuild()
