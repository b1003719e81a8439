"""Lexer for fuzzy date phrases.

Input is folded to lowercase and scanned one character at a time. Characters
accumulate in a buffer until a boundary:

    whitespace          flush, discard the character
    , : / - .           flush, emit COMMA / COLON / SLASH / DASH / DOT
    digit <-> non-digit flush before appending ("10am" -> NUM(10) AM)

A flushed buffer must be a keyword or an unsigned 32-bit integer literal.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from .errors import ParseError, UnrecognizedTokenError

logger = logging.getLogger(__name__)

# Longest buffer accepted before a flush
MAX_BUFFER = 20

U32_MAX = 2**32 - 1

DIGITS = "0123456789"


class TokenType(Enum):
    # Literals
    NUM = "NUM"

    # Punctuation
    COMMA = ","
    COLON = ":"
    SLASH = "/"
    DASH = "-"
    DOT = "."

    # Connectives and articles
    A = "a"
    AN = "an"
    THE = "the"
    AND = "and"
    ON = "on"
    AT = "at"
    FROM = "from"
    AFTER = "after"
    BEFORE = "before"
    AGO = "ago"

    # Sentinels
    NOW = "now"
    TODAY = "today"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"
    MIDNIGHT = "midnight"
    NOON = "noon"

    # Relative specifiers
    THIS = "this"
    NEXT = "next"
    LAST = "last"

    AM = "am"
    PM = "pm"

    # Weekdays
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    # Months
    JANUARY = "january"
    FEBRUARY = "february"
    MARCH = "march"
    APRIL = "april"
    MAY = "may"
    JUNE = "june"
    JULY = "july"
    AUGUST = "august"
    SEPTEMBER = "september"
    OCTOBER = "october"
    NOVEMBER = "november"
    DECEMBER = "december"

    # Units
    DAY = "day"
    WEEK = "week"
    HOUR = "hour"
    MINUTE = "minute"
    MONTH = "month"
    YEAR = "year"

    # Number words
    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    THREE = "three"
    FOUR = "four"
    FIVE = "five"
    SIX = "six"
    SEVEN = "seven"
    EIGHT = "eight"
    NINE = "nine"
    TEN = "ten"
    ELEVEN = "eleven"
    TWELVE = "twelve"
    THIRTEEN = "thirteen"
    FOURTEEN = "fourteen"
    FIFTEEN = "fifteen"
    SIXTEEN = "sixteen"
    SEVENTEEN = "seventeen"
    EIGHTEEN = "eighteen"
    NINETEEN = "nineteen"
    TWENTY = "twenty"
    THIRTY = "thirty"
    FORTY = "forty"
    FIFTY = "fifty"
    SIXTY = "sixty"
    SEVENTY = "seventy"
    EIGHTY = "eighty"
    NINETY = "ninety"
    HUNDRED = "hundred"
    THOUSAND = "thousand"
    MILLION = "million"
    BILLION = "billion"


PUNCTUATION = {
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "/": TokenType.SLASH,
    "-": TokenType.DASH,
    ".": TokenType.DOT,
}

_NON_KEYWORDS = {TokenType.NUM, *PUNCTUATION.values()}

_ALIASES = {
    "mon": TokenType.MONDAY,
    "tue": TokenType.TUESDAY,
    "wed": TokenType.WEDNESDAY,
    "thu": TokenType.THURSDAY,
    "fri": TokenType.FRIDAY,
    "sat": TokenType.SATURDAY,
    "sun": TokenType.SUNDAY,
    "jan": TokenType.JANUARY,
    "feb": TokenType.FEBRUARY,
    "mar": TokenType.MARCH,
    "apr": TokenType.APRIL,
    "jun": TokenType.JUNE,
    "jul": TokenType.JULY,
    "aug": TokenType.AUGUST,
    "sep": TokenType.SEPTEMBER,
    "oct": TokenType.OCTOBER,
    "nov": TokenType.NOVEMBER,
    "dec": TokenType.DECEMBER,
    "days": TokenType.DAY,
    "weeks": TokenType.WEEK,
    "hours": TokenType.HOUR,
    "minutes": TokenType.MINUTE,
    "min": TokenType.MINUTE,
    "mins": TokenType.MINUTE,
    "months": TokenType.MONTH,
    "years": TokenType.YEAR,
    "fourty": TokenType.FORTY,
}

# Keyword text -> token type. Read-only after import.
KEYWORDS = MappingProxyType(
    {tt.value: tt for tt in TokenType if tt not in _NON_KEYWORDS} | _ALIASES
)


@dataclass(frozen=True)
class Lexeme:
    type: TokenType
    value: int | None = None  # set for NUM only

    def __repr__(self) -> str:
        if self.type is TokenType.NUM:
            return f"NUM({self.value})"
        return self.type.name


class Lexer:
    """Splits a phrase into lexemes."""

    def __init__(self, source: str):
        self.source = source.lower()
        self.buffer: list[str] = []
        self.lexemes: list[Lexeme] = []

    def tokenize(self) -> list[Lexeme]:
        for ch in self.source:
            if ch.isspace():
                self._push_lexeme()
                continue

            if self.buffer and (self.buffer[-1] in DIGITS) != (ch in DIGITS):
                self._push_lexeme()

            if ch in PUNCTUATION:
                self._push_lexeme()
                self.lexemes.append(Lexeme(PUNCTUATION[ch]))
            else:
                if len(self.buffer) == MAX_BUFFER:
                    raise ParseError(f"token longer than {MAX_BUFFER} characters")
                self.buffer.append(ch)

        self._push_lexeme()
        return self.lexemes

    def _push_lexeme(self) -> None:
        if not self.buffer:
            return

        text = "".join(self.buffer)
        if text in KEYWORDS:
            self.lexemes.append(Lexeme(KEYWORDS[text]))
        elif all(c in DIGITS for c in text) and int(text) <= U32_MAX:
            self.lexemes.append(Lexeme(TokenType.NUM, int(text)))
        else:
            raise UnrecognizedTokenError(text)
        self.buffer.clear()


def lex(source: str) -> list[Lexeme]:
    """Lex a phrase into a list of lexemes."""
    lexemes = Lexer(source).tokenize()
    logger.debug("lexed %r into %d lexemes", source, len(lexemes))
    return lexemes
