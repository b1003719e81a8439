"""Numeral grammar: English number words and integer literals.

Grammar (ordered choice, first match commits):
    num         = triple triple_unit ["and" num]
                | triple_unit ["and" num]
                | triple
                | NUM                       ; literal >= 1000
    triple      = ones "hundred" ["and" double]
                | "hundred" ["and" double]
                | double
                | NUM                       ; literal 100-999
    triple_unit = "thousand" | "million" | "billion"
    double      = tens ["-"] [ones]
                | teens
                | ones
                | NUM                       ; literal 20-99
    teens       = "ten" .. "nineteen" | NUM ; literal 10-19
    ones        = "zero" .. "nine" | NUM    ; literal 0-9

An "and" after "hundred" or a triple unit requires a number to follow;
without it the remainder is 0.

Each rule takes a lexeme sequence and returns (value, lexemes consumed), or
None if the rule does not match at the start of the sequence.
"""

from collections.abc import Sequence

from .lexer import U32_MAX, Lexeme, TokenType

Match = tuple[int, int] | None

ONES = {
    TokenType.ZERO: 0,
    TokenType.ONE: 1,
    TokenType.TWO: 2,
    TokenType.THREE: 3,
    TokenType.FOUR: 4,
    TokenType.FIVE: 5,
    TokenType.SIX: 6,
    TokenType.SEVEN: 7,
    TokenType.EIGHT: 8,
    TokenType.NINE: 9,
}

TEENS = {
    TokenType.TEN: 10,
    TokenType.ELEVEN: 11,
    TokenType.TWELVE: 12,
    TokenType.THIRTEEN: 13,
    TokenType.FOURTEEN: 14,
    TokenType.FIFTEEN: 15,
    TokenType.SIXTEEN: 16,
    TokenType.SEVENTEEN: 17,
    TokenType.EIGHTEEN: 18,
    TokenType.NINETEEN: 19,
}

TENS = {
    TokenType.TWENTY: 20,
    TokenType.THIRTY: 30,
    TokenType.FORTY: 40,
    TokenType.FIFTY: 50,
    TokenType.SIXTY: 60,
    TokenType.SEVENTY: 70,
    TokenType.EIGHTY: 80,
    TokenType.NINETY: 90,
}

TRIPLE_UNITS = {
    TokenType.THOUSAND: 1_000,
    TokenType.MILLION: 1_000_000,
    TokenType.BILLION: 1_000_000_000,
}


def peek(tokens: Sequence[Lexeme], i: int = 0) -> TokenType | None:
    """Type of the lexeme at position i, or None past the end."""
    if i < len(tokens):
        return tokens[i].type
    return None


def literal(tokens: Sequence[Lexeme], lo: int, hi: int) -> Match:
    """Match a NUM literal in [lo, hi]."""
    if peek(tokens) is TokenType.NUM and lo <= tokens[0].value <= hi:
        return tokens[0].value, 1
    return None


def parse_ones(tokens: Sequence[Lexeme]) -> Match:
    if (tt := peek(tokens)) in ONES:
        return ONES[tt], 1
    return literal(tokens, 0, 9)


def parse_teens(tokens: Sequence[Lexeme]) -> Match:
    if (tt := peek(tokens)) in TEENS:
        return TEENS[tt], 1
    return literal(tokens, 10, 19)


def parse_tens(tokens: Sequence[Lexeme]) -> Match:
    if (tt := peek(tokens)) in TENS:
        return TENS[tt], 1
    return None


def parse_double(tokens: Sequence[Lexeme]) -> Match:
    if tens := parse_tens(tokens):
        value, pos = tens
        if peek(tokens, pos) is TokenType.DASH:
            pos += 1
        if ones := parse_ones(tokens[pos:]):
            value += ones[0]
            pos += ones[1]
        return value, pos

    if teens := parse_teens(tokens):
        return teens

    if ones := parse_ones(tokens):
        return ones

    return literal(tokens, 20, 99)


def _hundreds(tokens: Sequence[Lexeme], multiplier: int, pos: int) -> Match:
    """Finish a triple after 'hundred' at tokens[pos - 1]."""
    required = peek(tokens, pos) is TokenType.AND
    if required:
        pos += 1

    double = parse_double(tokens[pos:])
    if double is None:
        if required:
            return None
        return multiplier * 100, pos
    return multiplier * 100 + double[0], pos + double[1]


def parse_triple(tokens: Sequence[Lexeme]) -> Match:
    if ones := parse_ones(tokens):
        value, pos = ones
        if peek(tokens, pos) is TokenType.HUNDRED:
            if result := _hundreds(tokens, value, pos + 1):
                return result

    if peek(tokens) is TokenType.HUNDRED:
        if result := _hundreds(tokens, 1, 1):
            return result

    if double := parse_double(tokens):
        return double

    return literal(tokens, 100, 999)


def parse_triple_unit(tokens: Sequence[Lexeme]) -> Match:
    if (tt := peek(tokens)) in TRIPLE_UNITS:
        return TRIPLE_UNITS[tt], 1
    return None


def _scaled(tokens: Sequence[Lexeme], scale: int, pos: int) -> Match:
    """Finish a num after a triple unit ending at tokens[pos - 1]."""
    required = peek(tokens, pos) is TokenType.AND
    if required:
        pos += 1

    rest = parse_num(tokens[pos:])
    if rest is None:
        if required:
            return None
        return scale, pos
    return scale + rest[0], pos + rest[1]


def parse_num(tokens: Sequence[Lexeme]) -> Match:
    """Parse a number up to the billions."""
    if triple := parse_triple(tokens):
        value, pos = triple
        if unit := parse_triple_unit(tokens[pos:]):
            result = _scaled(tokens, value * unit[0], pos + unit[1])
            if result and result[0] <= U32_MAX:
                return result

    if unit := parse_triple_unit(tokens):
        result = _scaled(tokens, unit[0], unit[1])
        if result and result[0] <= U32_MAX:
            return result

    if triple := parse_triple(tokens):
        return triple

    return literal(tokens, 1000, U32_MAX)
