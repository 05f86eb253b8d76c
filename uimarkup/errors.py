import attr

from uimarkup.utils import _caret_excerpt, _compute_row_col


class UiMarkupError(Exception):
    """Base exception for the library."""


@attr.s(frozen=True, slots=True, auto_exc=True)
class ParseError(UiMarkupError):
    """Aborts a parse; points at the offending offset of the source."""

    message: str = attr.ib()
    position: int = attr.ib()
    text: str = attr.ib(default="", repr=False)

    def __str__(self) -> str:
        return f"{self.message} (at {self.position})"

    @property
    def character(self) -> str:
        return self.text[self.position : self.position + 1]

    @property
    def row_col(self) -> tuple[int, int]:
        return _compute_row_col(self.text, self.position)

    def excerpt(self) -> str:
        return _caret_excerpt(self.text, self.position)


class UnexpectedEndError(ParseError):
    """Raised when input ends where more was required."""


class ExpectedCharacterError(ParseError):
    """Raised when a required punctuation character is missing."""


class MissingIdentifierError(ParseError):
    """Raised when a mandatory identifier matched nothing."""


class MissingValueError(ParseError):
    """Raised when an attribute has an empty value."""


class IntegerRangeError(ParseError):
    """Raised on integer literals outside the supported range."""


class FloatValueError(ParseError):
    """Raised on `digits.digits` literals, which the language forbids."""


class UnterminatedStringError(ParseError):
    """Raised when a quoted string or its escape runs into end of input."""
