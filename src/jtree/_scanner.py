"""
Byte-level scanner turning a resident buffer into positioned tokens.

The scanner knows token shapes only. Numeric text is captured verbatim and
string literals keep their quotes and escapes; both are interpreted later by
the parser, which is also where unknown identifiers are rejected.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from enum import Enum

from ._errors import JSONSyntaxError
from ._profile import ProfileContext

logger = logging.getLogger(__name__)

type Buffer = bytes | bytearray | memoryview | str


class TokenKind(Enum):
    """Lexical categories produced by the scanner."""

    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    OPEN_BRACKET = "["
    CLOSE_BRACKET = "]"
    COLON = ":"
    COMMA = ","
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Token:
    """
    A lexical unit with the 1-based line and column of its first byte.

    text holds the raw source slice: quotes included for strings, the digit
    run for numbers, the identifier for keywords and unknown words.
    """

    kind: TokenKind
    text: str
    line: int
    column: int

    def describe(self) -> str:
        """Short human-readable rendering used in error messages."""
        if self.kind in (TokenKind.STRING, TokenKind.NUMBER, TokenKind.UNKNOWN):
            return f"{self.kind.value} {self.text}"
        return f"'{self.text}'"


_STRUCTURAL = {
    ord("{"): TokenKind.OPEN_BRACE,
    ord("}"): TokenKind.CLOSE_BRACE,
    ord("["): TokenKind.OPEN_BRACKET,
    ord("]"): TokenKind.CLOSE_BRACKET,
    ord(":"): TokenKind.COLON,
    ord(","): TokenKind.COMMA,
}
_KEYWORDS = {
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "null": TokenKind.NULL,
}
_LETTERS = frozenset(string.ascii_letters.encode("ascii"))
_NUMBER_START = frozenset(b"0123456789-+.")
_NUMBER_BODY = frozenset(b"0123456789.eE+-")

_SPACE = ord(" ")
_LINE_FEED = ord("\n")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_PRINTABLE_LOW = 0x21
_PRINTABLE_HIGH = 0x7E


def _describe_byte(byte: int) -> str:
    if _PRINTABLE_LOW <= byte <= _PRINTABLE_HIGH:
        return f"'{chr(byte)}'"
    return f"0x{byte:02x}"


class Scanner:
    """
    Tokenizes a byte buffer left to right.

    Tracks the scan position plus the 1-based line and column of the next
    unread byte. After tokenize() returns, line and column point just past
    the end of the input.
    """

    def __init__(self, buffer: bytes):
        self.buffer = buffer
        self.length = len(buffer)
        self.pos = 0
        self.line = 1
        self.column = 1

    def advance(self, count: int) -> None:
        """Moves forward count bytes, folding any line feeds into line/column."""
        end = self.pos + count
        last_line_feed = self.buffer.rfind(b"\n", self.pos, end)
        if last_line_feed == -1:
            self.column += count
        else:
            self.line += self.buffer.count(b"\n", self.pos, end)
            self.column = end - last_line_feed
        self.pos = end

    def scan_string(self) -> Token:
        """Scans a string literal, quotes included, without decoding escapes."""
        start = self.pos
        line, column = self.line, self.column

        cursor = start + 1
        while cursor < self.length:
            byte = self.buffer[cursor]
            if byte == _BACKSLASH:
                cursor += 2
                continue
            if byte == _QUOTE:
                raw = self.buffer[start : cursor + 1]
                try:
                    text = raw.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise JSONSyntaxError(
                        "invalid UTF-8 in string literal", line, column
                    ) from e
                self.advance(cursor + 1 - start)
                return Token(TokenKind.STRING, text, line, column)
            cursor += 1

        raise JSONSyntaxError("terminator not found", line, column)

    def scan_word(self) -> Token:
        """Scans a maximal run of ASCII letters as a keyword or unknown word."""
        start = self.pos
        line, column = self.line, self.column

        end = start
        while end < self.length and self.buffer[end] in _LETTERS:
            end += 1

        text = self.buffer[start:end].decode("ascii")
        self.advance(end - start)
        return Token(_KEYWORDS.get(text, TokenKind.UNKNOWN), text, line, column)

    def scan_number(self) -> Token:
        """Scans a maximal run of numeric characters, unvalidated."""
        start = self.pos
        line, column = self.line, self.column

        end = start
        while end < self.length and self.buffer[end] in _NUMBER_BODY:
            end += 1

        text = self.buffer[start:end].decode("ascii")
        self.advance(end - start)
        return Token(TokenKind.NUMBER, text, line, column)

    def tokenize(self) -> list[Token]:
        """Scans the whole buffer and returns its tokens in order."""
        with ProfileContext("tokenize", self.length):
            tokens: list[Token] = []

            while self.pos < self.length:
                byte = self.buffer[self.pos]

                if byte in _STRUCTURAL:
                    tokens.append(
                        Token(_STRUCTURAL[byte], chr(byte), self.line, self.column)
                    )
                    self.advance(1)
                elif byte in (_SPACE, _LINE_FEED):
                    self.advance(1)
                elif byte == _QUOTE:
                    tokens.append(self.scan_string())
                elif byte in _LETTERS:
                    tokens.append(self.scan_word())
                elif byte in _NUMBER_START:
                    tokens.append(self.scan_number())
                else:
                    raise JSONSyntaxError(
                        f"invalid character {_describe_byte(byte)}",
                        self.line,
                        self.column,
                    )

            logger.debug(
                "scanned %d bytes into %d tokens", self.length, len(tokens)
            )
            return tokens


def as_bytes(buffer: Buffer) -> bytes:
    """Normalizes accepted input types to bytes."""
    if isinstance(buffer, str):
        return buffer.encode("utf-8")
    if isinstance(buffer, bytes | bytearray | memoryview):
        return bytes(buffer)
    raise TypeError(
        f"the JSON input must be bytes or str, not {type(buffer).__name__}"
    )


def tokenize(buffer: Buffer) -> list[Token]:
    """Converts a resident buffer into its positioned token sequence."""
    return Scanner(as_bytes(buffer)).tokenize()
