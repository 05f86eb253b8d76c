from __future__ import annotations

import typing as t

import attr

from uimarkup.errors import (
    ExpectedCharacterError,
    MissingIdentifierError,
    ParseError,
    UnexpectedEndError,
    UnterminatedStringError,
)


QUOTES = frozenset("\"'")

ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_TOKEN_STOPS = frozenset(">{}/")

_E = t.TypeVar("_E", bound=ParseError)


def _is_identifier_char(char: str, allow_dot: bool, allow_hyphen: bool) -> bool:
    return (
        char.isalnum()
        or char == "_"
        or (allow_hyphen and char == "-")
        or (allow_dot and char == ".")
    )


@attr.s(slots=True)
class Cursor:
    """A forward-only read position over an immutable source text."""

    text: str = attr.ib(
        on_setattr=attr.setters.frozen,
        validator=attr.validators.instance_of(str),
    )

    _position: int = attr.ib(init=False, default=0)

    @property
    def position(self) -> int:
        return self._position

    def at_end(self) -> bool:
        return self._position >= len(self.text)

    def error(
        self,
        kind: type[_E],
        message: str,
        position: t.Optional[int] = None,
    ) -> _E:
        if position is None:
            position = self._position
        return kind(message, position, self.text)

    def peek(self, offset: int = 0) -> t.Optional[str]:
        index = self._position + offset
        if 0 <= index < len(self.text):
            return self.text[index]
        return None

    def advance(self) -> str:
        if self.at_end():
            raise self.error(UnexpectedEndError, "Unexpected end of input")
        char = self.text[self._position]
        self._position += 1
        return char

    def match(self, literal: str) -> bool:
        if self.text.startswith(literal, self._position):
            self._position += len(literal)
            return True
        return False

    def expect(self, char: str) -> None:
        if self.at_end():
            raise self.error(
                UnexpectedEndError, f"Unexpected end of input, expected '{char}'"
            )
        if self.peek() != char:
            raise self.error(ExpectedCharacterError, f"Expected '{char}'")
        self._position += 1

    def skip_insignificant(self) -> None:
        text = self.text
        while not self.at_end():
            char = text[self._position]
            if char.isspace():
                self._position += 1
            elif text.startswith("//", self._position):
                end = text.find("\n", self._position + 2)
                self._position = len(text) if end == -1 else end
            elif text.startswith("/*", self._position):
                # Unterminated block comments swallow the rest of the input.
                end = text.find("*/", self._position + 2)
                self._position = len(text) if end == -1 else end + 2
            else:
                break

    def read_identifier(
        self,
        required: bool = True,
        allow_dot: bool = False,
        allow_hyphen: bool = True,
    ) -> str:
        self.skip_insignificant()
        start = self._position
        while (char := self.peek()) is not None and _is_identifier_char(
            char, allow_dot, allow_hyphen
        ):
            self._position += 1
        if self._position == start and required:
            raise self.error(MissingIdentifierError, "Expected identifier", start)
        return self.text[start : self._position]

    def read_token(self) -> str:
        """Read an unquoted value up to whitespace or a structural character."""
        start = self._position
        while (char := self.peek()) is not None and not (
            char.isspace() or char in _TOKEN_STOPS
        ):
            self._position += 1
        return self.text[start : self._position]

    def read_quoted(self) -> str:
        """Read a single- or double-quoted string, resolving escapes.

        Unknown escapes keep the escaped character as-is, so `\\q` reads as
        `q`.
        """
        quote = self.advance()
        chunks: list[str] = []
        while not self.at_end():
            char = self.advance()
            if char == quote:
                return "".join(chunks)
            if char == "\\":
                if self.at_end():
                    raise self.error(
                        UnterminatedStringError, "Unterminated escape in string"
                    )
                escaped = self.advance()
                chunks.append(ESCAPES.get(escaped, escaped))
            else:
                chunks.append(char)
        raise self.error(UnterminatedStringError, "Unterminated quoted string")
