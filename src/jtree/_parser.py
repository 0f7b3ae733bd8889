"""
Recursive-descent parser over the scanner's token sequence.

One method per grammar production; each consumes exactly the tokens of the
value it builds and leaves the cursor on the token that follows it.
"""

from __future__ import annotations

import logging

from ._config import DuplicateKeys
from ._config import ParseConfig
from ._errors import JSONSyntaxError
from ._errors import JSONValueError
from ._profile import ProfileContext
from ._scanner import Token
from ._scanner import TokenKind
from ._value import JsonValue
from ._value import ValueKind

logger = logging.getLogger(__name__)

type Position = tuple[int, int]

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_UNICODE_ESCAPE_LENGTH = 4
_SURROGATE_FIRST = 0xD800
_SURROGATE_LAST = 0xDFFF


def _process_escape_sequence(inner: str, i: int, token: Token) -> tuple[str, int]:
    """Decodes the escape starting at inner[i] and returns (char, new index)."""
    next_char = inner[i + 1] if i + 1 < len(inner) else ""

    if next_char in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[next_char], i + 2
    elif next_char == "u":
        hex_digits = inner[i + 2 : i + 2 + _UNICODE_ESCAPE_LENGTH]
        if len(hex_digits) < _UNICODE_ESCAPE_LENGTH or not all(
            c in _HEX_DIGITS for c in hex_digits
        ):
            raise JSONValueError(
                f"invalid unicode escape sequence \\u{hex_digits}",
                token.line,
                token.column,
            )
        code_point = int(hex_digits, 16)
        if _SURROGATE_FIRST <= code_point <= _SURROGATE_LAST:
            raise JSONValueError(
                f"\\u{hex_digits} is not a valid unicode scalar value",
                token.line,
                token.column,
            )
        return chr(code_point), i + 2 + _UNICODE_ESCAPE_LENGTH
    else:
        raise JSONValueError(
            f"invalid escape char '\\{next_char}'", token.line, token.column
        )


def decode_string(token: Token) -> str:
    """Strips the quotes from a string token and decodes its escapes."""
    with ProfileContext("decode_string", len(token.text)):
        inner = token.text[1:-1]

        # Fast path: nothing to decode
        if "\\" not in inner:
            return inner

        result = []
        i = 0
        while i < len(inner):
            if inner[i] == "\\":
                char, i = _process_escape_sequence(inner, i, token)
                result.append(char)
            else:
                result.append(inner[i])
                i += 1

        return "".join(result)


def decode_number(token: Token) -> float:
    """Parses the raw text of a numeric token as a 64-bit float."""
    try:
        return float(token.text)
    except ValueError as e:
        raise JSONSyntaxError(
            f"invalid number '{token.text}'", token.line, token.column
        ) from e


class Parser:
    """
    Builds a JsonValue tree from tokens with a single forward cursor.

    end is the position reported when the tokens run out before the
    grammar is satisfied; the scanner's final line/column is the natural
    choice.
    """

    def __init__(
        self,
        tokens: list[Token],
        config: ParseConfig | None = None,
        end: Position = (1, 1),
    ):
        self.tokens = tokens
        self.config = config or ParseConfig()
        self.end = end
        self.pos = 0
        self.depth = 0

    def current(self) -> Token:
        """Returns the token under the cursor or fails at end of input."""
        if self.pos >= len(self.tokens):
            raise JSONSyntaxError("unexpected end of input", *self.end)
        return self.tokens[self.pos]

    def advance(self) -> None:
        self.pos += 1

    def expect(self, kind: TokenKind, what: str) -> Token:
        """Consumes a token of the given kind or fails at the offending one."""
        token = self.current()
        if token.kind is not kind:
            raise JSONSyntaxError(
                f"expected {what}, found {token.describe()}",
                token.line,
                token.column,
            )
        self.advance()
        return token

    def parse(self) -> JsonValue:
        """Parses one complete document; no tokens may follow the root value."""
        with ProfileContext("parse", len(self.tokens)):
            if not self.tokens:
                raise JSONSyntaxError("expecting value", *self.end)

            root = self.parse_value()

            if self.pos < len(self.tokens):
                extra = self.tokens[self.pos]
                raise JSONSyntaxError(
                    f"extra data: {extra.describe()}", extra.line, extra.column
                )

            logger.debug(
                "parsed %s root from %d tokens", root.kind.value, len(self.tokens)
            )
            return root

    def parse_value(self) -> JsonValue:  # noqa: PLR0911
        """Dispatches on the current token's kind."""
        token = self.current()
        kind = token.kind

        if kind is TokenKind.OPEN_BRACE:
            return self.parse_object()
        elif kind is TokenKind.OPEN_BRACKET:
            return self.parse_array()
        elif kind is TokenKind.STRING:
            self.advance()
            return JsonValue.string(decode_string(token))
        elif kind is TokenKind.NUMBER:
            self.advance()
            return JsonValue.number(decode_number(token))
        elif kind is TokenKind.TRUE:
            self.advance()
            return JsonValue.boolean(True)
        elif kind is TokenKind.FALSE:
            self.advance()
            return JsonValue.boolean(False)
        elif kind is TokenKind.NULL:
            self.advance()
            return JsonValue.null()
        else:
            raise JSONSyntaxError(
                f"unexpected token {token.describe()}", token.line, token.column
            )

    def _enter(self, token: Token) -> None:
        self.depth += 1
        if self.config.max_depth is not None and self.depth > self.config.max_depth:
            raise JSONSyntaxError(
                "maximum nesting depth exceeded", token.line, token.column
            )

    def _parse_object_key(self) -> tuple[str, Token]:
        token = self.expect(TokenKind.STRING, "string key")
        return decode_string(token), token

    def parse_object(self) -> JsonValue:
        """Parses '{' (key ':' value (',' key ':' value)*)? '}'."""
        with ProfileContext("parse_object"):
            self._enter(self.current())
            self.expect(TokenKind.OPEN_BRACE, "'{'")

            members: dict[str, JsonValue] = {}
            if self.current().kind is TokenKind.CLOSE_BRACE:
                self.advance()
                self.depth -= 1
                return JsonValue(ValueKind.OBJECT, members)

            while True:
                key, key_token = self._parse_object_key()
                self.expect(TokenKind.COLON, "':'")
                value = self.parse_value()

                if (
                    key in members
                    and self.config.duplicate_keys is DuplicateKeys.REJECT
                ):
                    raise JSONSyntaxError(
                        f"duplicate key '{key}'", key_token.line, key_token.column
                    )
                members[key] = value

                if self.current().kind is TokenKind.CLOSE_BRACE:
                    self.advance()
                    break
                self.expect(TokenKind.COMMA, "',' or '}'")

            self.depth -= 1
            return JsonValue(ValueKind.OBJECT, members)

    def parse_array(self) -> JsonValue:
        """Parses '[' (value (',' value)*)? ']'."""
        with ProfileContext("parse_array"):
            self._enter(self.current())
            self.expect(TokenKind.OPEN_BRACKET, "'['")

            elements: list[JsonValue] = []
            if self.current().kind is TokenKind.CLOSE_BRACKET:
                self.advance()
                self.depth -= 1
                return JsonValue(ValueKind.ARRAY, elements)

            while True:
                elements.append(self.parse_value())

                if self.current().kind is TokenKind.CLOSE_BRACKET:
                    self.advance()
                    break
                self.expect(TokenKind.COMMA, "',' or ']'")

            self.depth -= 1
            return JsonValue(ValueKind.ARRAY, elements)


def parse(
    tokens: list[Token],
    config: ParseConfig | None = None,
    *,
    end: Position | None = None,
) -> JsonValue:
    """
    Parses a token sequence into a JsonValue.

    Without an explicit end position, end-of-input errors are reported just
    after the last token.
    """
    if end is None:
        end = _position_after(tokens)
    return Parser(tokens, config, end).parse()


def _position_after(tokens: list[Token]) -> Position:
    if not tokens:
        return (1, 1)
    last = tokens[-1]
    # Approximate for string tokens with embedded line feeds
    return (last.line, last.column + len(last.text))
