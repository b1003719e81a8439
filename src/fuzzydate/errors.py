"""Exceptions raised by the fuzzydate pipeline."""


class FuzzyDateError(Exception):
    pass


class UnrecognizedTokenError(FuzzyDateError):
    """The lexer found a run of characters that is neither a keyword nor an integer."""

    def __init__(self, token: str):
        super().__init__(f"unrecognized token: {token!r}")
        self.token = token


class ParseError(FuzzyDateError):
    """The grammar could not match the whole input."""


class InvalidDateError(FuzzyDateError):
    """The input parsed but describes a date or time that cannot exist."""


class ConfigError(FuzzyDateError):
    pass
