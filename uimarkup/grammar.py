from __future__ import annotations

import logging
import re
import typing as t

import attr

from uimarkup.errors import (
    FloatValueError,
    IntegerRangeError,
    MissingValueError,
    ParseError,
    UnexpectedEndError,
)
from uimarkup.lexer import QUOTES, Cursor
from uimarkup.node import BooleanValue, IntegerValue, Node, StringValue, Value


logger = logging.getLogger(__name__)

MAX_INTEGER = 2**63 - 1

_INTEGER = re.compile(r"\d+")
_FLOAT = re.compile(r"\d+\.\d+")


@attr.s(frozen=True, slots=True)
class ParseResult:
    """Either the parsed root nodes or the error that aborted the parse."""

    nodes: tuple[Node, ...] = attr.ib(default=(), converter=tuple)
    error: t.Optional[ParseError] = attr.ib(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> tuple[Node, ...]:
        if self.error is not None:
            raise self.error
        return self.nodes


@attr.s(slots=True)
class Parser:
    """Recursive-descent parser for UI markup.

    A parser owns a single cursor and must not be shared between threads.
    Every call to `parse` starts over from the beginning of `text`.
    """

    text: str = attr.ib(
        on_setattr=attr.setters.frozen,
        validator=attr.validators.instance_of(str),
    )

    _cursor: Cursor = attr.ib(
        init=False,
        repr=False,
        default=attr.Factory(lambda self: Cursor(self.text), takes_self=True),
    )

    def parse(self) -> ParseResult:
        self._cursor = Cursor(self.text)
        logger.debug("Parsing %d characters of markup", len(self.text))
        try:
            nodes = self._parse_document()
        except ParseError as error:
            logger.debug("Parse failed: %s", error)
            return ParseResult(error=error)
        logger.debug("Parsed %d root element(s)", len(nodes))
        return ParseResult(nodes=nodes)

    def _parse_document(self) -> list[Node]:
        cursor = self._cursor
        nodes = []
        cursor.skip_insignificant()
        while not cursor.at_end():
            nodes.append(self._parse_element())
            cursor.skip_insignificant()
        return nodes

    def _parse_element(self) -> Node:
        cursor = self._cursor
        cursor.skip_insignificant()
        id_ = cursor.read_identifier(allow_dot=False)
        cursor.skip_insignificant()
        cursor.expect("<")
        cursor.skip_insignificant()
        type_ = cursor.read_identifier(allow_hyphen=True)
        cursor.skip_insignificant()

        attributes: dict[str, Value] = {}
        if cursor.match(";"):
            while True:
                cursor.skip_insignificant()
                if cursor.at_end():
                    raise cursor.error(
                        UnexpectedEndError, "Unexpected end of input, expected '>'"
                    )
                if cursor.peek() in (">", "/"):
                    break
                key = cursor.read_identifier(allow_hyphen=True)
                cursor.skip_insignificant()
                cursor.expect("=")
                cursor.skip_insignificant()
                # Repeated keys overwrite earlier ones.
                attributes[key] = self._read_value()

        # Comments were skipped above, so a '/' here can only start "/>".
        if cursor.match("/"):
            cursor.skip_insignificant()
            cursor.expect(">")
            return Node(id_, type_, attributes)
        cursor.expect(">")

        children = []
        cursor.skip_insignificant()
        if cursor.match("{"):
            cursor.skip_insignificant()
            while not cursor.match("}"):
                if cursor.at_end():
                    raise cursor.error(
                        UnexpectedEndError, "Unexpected end of input, expected '}'"
                    )
                children.append(self._parse_element())
                cursor.skip_insignificant()

        return Node(id_, type_, attributes, children)

    def _read_value(self) -> Value:
        cursor = self._cursor
        if cursor.peek() in QUOTES:
            return StringValue(cursor.read_quoted())

        token = cursor.read_token()
        if not token:
            raise cursor.error(MissingValueError, "Expected a value")

        if _INTEGER.fullmatch(token):
            number = int(token)
            if number > MAX_INTEGER:
                raise cursor.error(IntegerRangeError, f"Integer out of range: {token}")
            return IntegerValue(number)
        if _FLOAT.fullmatch(token):
            raise cursor.error(
                FloatValueError, f"Floating-point values are not allowed: {token}"
            )

        lowered = token.lower()
        if lowered == "true":
            return BooleanValue(True)
        if lowered == "false":
            return BooleanValue(False)

        return StringValue(token)


def parse(text: str) -> ParseResult:
    return Parser(text).parse()
