# src/rargs/core/errors.py


class RargsError(Exception):
    """Base class for errors that abort a rargs run."""


class InvalidPatternError(RargsError):
    """The line-matching regex (or the delimiter it was built from) does not compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


class LineDecodeError(RargsError):
    """An input record is not valid UTF-8."""

    def __init__(self, line_num: int, reason: str):
        self.line_num = line_num
        self.reason = reason
        super().__init__(f"line {line_num}: invalid UTF-8 input ({reason})")
