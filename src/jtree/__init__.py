"""
JSON-like text to tagged-union value trees, and back.

Scans a resident byte buffer into positioned tokens, parses them by
recursive descent into a JsonValue tree, and renders trees as indented text.
JsonValue offers protected accessors that raise recoverable errors and
unchecked bracket indexing for call sites that already know the shape.
"""

import logging
from typing import Any

from ._config import DuplicateKeys
from ._config import ParseConfig
from ._config import RenderConfig
from ._errors import JSONIndexError
from ._errors import JSONKeyError
from ._errors import JSONSyntaxError
from ._errors import JSONValueError
from ._errors import JtreeError
from ._errors import UncheckedAccessError
from ._parser import Parser
from ._parser import parse
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._scanner import Buffer
from ._scanner import Scanner
from ._scanner import Token
from ._scanner import TokenKind
from ._scanner import as_bytes
from ._scanner import tokenize
from ._value import JsonValue
from ._value import ValueKind
from ._value import to_value

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def loads(s: Buffer, **kwargs: Any) -> JsonValue:
    """
    Parses a complete document held in memory into a JsonValue.

    Accepts bytes-like input or str (encoded as UTF-8). Keyword arguments
    are ParseConfig fields.
    """
    config = ParseConfig(**kwargs)
    scanner = Scanner(as_bytes(s))
    tokens = scanner.tokenize()
    return Parser(tokens, config, (scanner.line, scanner.column)).parse()


def dumps(obj: Any, **kwargs: Any) -> str:
    """
    Renders a JsonValue, or plain Python data convertible to one, as text.

    Keyword arguments are RenderConfig fields.
    """
    config = RenderConfig(**kwargs)
    return JsonValue.from_python(obj).render(config)


__all__ = [
    "Buffer",
    "DuplicateKeys",
    "HotPathStats",
    "JSONIndexError",
    "JSONKeyError",
    "JSONSyntaxError",
    "JSONValueError",
    "JsonValue",
    "JtreeError",
    "ParseConfig",
    "Parser",
    "RenderConfig",
    "Scanner",
    "Token",
    "TokenKind",
    "UncheckedAccessError",
    "ValueKind",
    "clear_hot_path_stats",
    "dumps",
    "get_hot_path_stats",
    "loads",
    "parse",
    "tokenize",
    "to_value",
]
