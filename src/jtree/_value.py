"""
Dynamically-typed JSON value tree with statically-typed extraction.

JsonValue is a closed tagged union over six kinds. Containers own their
children outright, so trees are built bottom-up and cannot contain cycles.

Two accessor surfaces are offered:

- protected accessors (get, insert, remove, try_index, push, pop, cast)
  raise a JtreeError subclass on misuse and leave the tree untouched;
- bracket indexing (value["key"], value[0]) is unchecked by contract and
  raises UncheckedAccessError, which callers are not expected to handle.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ._config import RenderConfig
from ._errors import JSONIndexError
from ._errors import JSONKeyError
from ._errors import JSONValueError
from ._errors import JtreeError
from ._errors import UncheckedAccessError
from ._profile import ProfileContext


class ValueKind(Enum):
    """The six variants a JsonValue can hold."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


type Payload = (
    bool | float | str | list["JsonValue"] | dict[str, "JsonValue"] | None
)

# Largest magnitude below which every integral float is exactly an integer
_EXACT_INTEGER_LIMIT = 2**53

_CAST_KINDS: dict[type, ValueKind] = {
    bool: ValueKind.BOOLEAN,
    float: ValueKind.NUMBER,
    int: ValueKind.NUMBER,
    str: ValueKind.STRING,
}


@dataclass(slots=True)
class JsonValue:
    """
    A parsed or programmatically built JSON value.

    kind selects the variant and data holds its payload: bool, float, str,
    list of JsonValue, dict of str to JsonValue, or None for null. Use the
    named constructors rather than building instances by hand.
    """

    kind: ValueKind
    data: Payload = None

    # -- construction -----------------------------------------------------

    @classmethod
    def boolean(cls, value: bool) -> JsonValue:
        if not isinstance(value, bool):
            raise TypeError(f"expected bool, not {type(value).__name__}")
        return cls(ValueKind.BOOLEAN, value)

    @classmethod
    def number(cls, value: int | float) -> JsonValue:
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise TypeError(f"expected a number, not {type(value).__name__}")
        try:
            return cls(ValueKind.NUMBER, float(value))
        except OverflowError as e:
            raise JSONValueError(
                f"integer {value} is too large for a 64-bit float"
            ) from e

    @classmethod
    def string(cls, value: str) -> JsonValue:
        if not isinstance(value, str):
            raise TypeError(f"expected str, not {type(value).__name__}")
        return cls(ValueKind.STRING, value)

    @classmethod
    def array(cls, items: Iterable[Any] = ()) -> JsonValue:
        return cls(ValueKind.ARRAY, [cls._child(item) for item in items])

    @classmethod
    def object(cls, members: dict[str, Any] | None = None) -> JsonValue:
        converted: dict[str, JsonValue] = {}
        for key, item in (members or {}).items():
            if not isinstance(key, str):
                raise TypeError(f"keys must be strings, not {type(key).__name__}")
            converted[key] = cls._child(item)
        return cls(ValueKind.OBJECT, converted)

    @classmethod
    def null(cls) -> JsonValue:
        return cls(ValueKind.NULL, None)

    @classmethod
    def from_python(cls, obj: Any) -> JsonValue:  # noqa: PLR0911
        """
        Converts plain Python data into a JsonValue.

        None maps to null, so an absent optional becomes null as well.
        Integers of any width are widened to float; an existing JsonValue is
        returned unchanged.
        """
        if isinstance(obj, JsonValue):
            return obj
        elif obj is None:
            return cls.null()
        elif isinstance(obj, bool):
            return cls.boolean(obj)
        elif isinstance(obj, int | float):
            return cls.number(obj)
        elif isinstance(obj, str):
            return cls.string(obj)
        elif isinstance(obj, list | tuple):
            return cls.array(obj)
        elif isinstance(obj, dict):
            return cls.object(obj)
        else:
            msg = (
                f"Object of type {type(obj).__name__} "
                "is not convertible to a JSON value"
            )
            raise TypeError(msg)

    @classmethod
    def _child(cls, obj: Any) -> JsonValue:
        """
        Converts obj for storage inside a container.

        An existing JsonValue is deep-copied, so no node ever has two parents
        and a container cannot be made to hold itself.
        """
        if isinstance(obj, JsonValue):
            return copy.deepcopy(obj)
        return cls.from_python(obj)

    def to_python(self) -> Any:
        """Converts the tree back into plain Python data."""
        if self.kind is ValueKind.ARRAY:
            return [item.to_python() for item in self._elements()]
        elif self.kind is ValueKind.OBJECT:
            return {key: item.to_python() for key, item in self._members().items()}
        return self.data

    # -- kind checks --------------------------------------------------------

    def is_boolean(self) -> bool:
        return self.kind is ValueKind.BOOLEAN

    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def is_array(self) -> bool:
        return self.kind is ValueKind.ARRAY

    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def _expect(self, kind: ValueKind) -> None:
        if self.kind is not kind:
            raise JSONValueError(
                f"expected {kind.value}, found {self.kind.value}"
            )

    def _members(self) -> dict[str, JsonValue]:
        self._expect(ValueKind.OBJECT)
        return self.data  # type: ignore[return-value]

    def _elements(self) -> list[JsonValue]:
        self._expect(ValueKind.ARRAY)
        return self.data  # type: ignore[return-value]

    # -- object family ------------------------------------------------------

    def get(self, key: str) -> JsonValue:
        """Returns the live child stored under key."""
        members = self._members()
        try:
            return members[key]
        except KeyError:
            raise JSONKeyError(f"key '{key}' not found") from None

    # Children are returned live, so the mutable variants are aliases
    get_mut = get

    def contains(self, key: str) -> bool:
        return key in self._members()

    def __contains__(self, item: Any) -> bool:
        """
        Key membership for objects, element membership for arrays.

        Array elements are compared structurally, after converting item with
        from_python.
        """
        if self.kind is ValueKind.ARRAY:
            return JsonValue.from_python(item) in self._elements()
        return item in self._members()

    def keys(self) -> Iterator[str]:
        return iter(self._members())

    def items(self) -> Iterator[tuple[str, JsonValue]]:
        return iter(self._members().items())

    def _insert_member(self, key: str, value: Any) -> None:
        members = self._members()
        if key in members:
            raise JSONKeyError(f"key '{key}' already exists")
        members[key] = JsonValue._child(value)

    def _remove_member(self, key: str) -> tuple[str, JsonValue]:
        members = self._members()
        if key not in members:
            raise JSONKeyError(f"key '{key}' not found")
        return key, members.pop(key)

    # -- array family -------------------------------------------------------

    def try_index(self, index: int) -> JsonValue:
        """Returns the live element at index."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"array index must be int, not {type(index).__name__}")
        elements = self._elements()
        if not 0 <= index < len(elements):
            raise JSONValueError(
                f"index {index} out of bounds for array of length {len(elements)}"
            )
        return elements[index]

    try_index_mut = try_index

    def push(self, value: Any) -> None:
        self._elements().append(JsonValue._child(value))

    def pop(self) -> JsonValue:
        elements = self._elements()
        if not elements:
            raise JSONValueError("cannot pop from an empty array")
        return elements.pop()

    def _insert_element(self, pos: int, value: Any) -> None:
        elements = self._elements()
        if not 0 <= pos <= len(elements):
            raise JSONIndexError(
                f"insertion index {pos} exceeds array length {len(elements)}"
            )
        elements.insert(pos, JsonValue._child(value))

    def _remove_element(self, pos: int) -> JsonValue:
        elements = self._elements()
        if not 0 <= pos < len(elements):
            raise JSONIndexError(
                f"removal index {pos} out of range for array of length {len(elements)}"
            )
        return elements.pop(pos)

    # -- shared by both families -------------------------------------------

    def insert(self, where: str | int, value: Any) -> None:
        """
        Inserts into an object (str key) or an array (int position).

        Objects reject keys that already exist; arrays accept any position up
        to and including the current length.
        """
        if isinstance(where, str):
            self._insert_member(where, value)
        elif isinstance(where, int) and not isinstance(where, bool):
            self._insert_element(where, value)
        else:
            raise _selector_error(where)

    def remove(self, where: str | int) -> Any:
        """
        Removes from an object (returns the key/value pair) or an array
        (returns the element).
        """
        if isinstance(where, str):
            return self._remove_member(where)
        elif isinstance(where, int) and not isinstance(where, bool):
            return self._remove_element(where)
        else:
            raise _selector_error(where)

    def size(self) -> int:
        """Number of elements, members or characters."""
        if self.kind in (ValueKind.ARRAY, ValueKind.OBJECT, ValueKind.STRING):
            return len(self.data)  # type: ignore[arg-type]
        raise JSONValueError(f"{self.kind.value} value has no size")

    def __iter__(self) -> Iterator[Any]:
        if self.kind is ValueKind.ARRAY:
            return iter(self._elements())
        elif self.kind is ValueKind.OBJECT:
            return iter(self._members())
        raise JSONValueError(f"{self.kind.value} value is not iterable")

    # -- unchecked ----------------------------------------------------------

    def __getitem__(self, where: str | int) -> JsonValue:
        """
        Unchecked access by key or position.

        Misuse of any kind, including a selector that is neither str nor
        int, raises UncheckedAccessError; use get() or try_index() where the
        shape of the tree is not already known.
        """
        try:
            if isinstance(where, str):
                return self.get(where)
            return self.try_index(where)
        except (JtreeError, TypeError) as e:
            raise UncheckedAccessError(f"unchecked access failed: {e}") from e

    # -- casting ------------------------------------------------------------

    def cast[T](self, target: type[T]) -> T:
        """
        Extracts a primitive of type target.

        Supported targets are bool, float, int and str. int truncates the
        stored float toward zero.
        """
        expected = _CAST_KINDS.get(target)
        if expected is None:
            raise TypeError(f"cannot cast a JSON value to {target.__name__}")
        self._expect(expected)

        if target is int:
            try:
                return int(self.data)  # type: ignore[arg-type, return-value]
            except (ValueError, OverflowError) as e:
                raise JSONValueError(
                    f"cannot truncate {self.data!r} to an integer"
                ) from e
        return self.data  # type: ignore[return-value]

    # -- rendering ----------------------------------------------------------

    def render(self, config: RenderConfig | None = None) -> str:
        """Pretty-prints the tree as indented text."""
        config = config or RenderConfig()
        with ProfileContext("render"):
            return _render_value(self, config, 0)

    def __str__(self) -> str:
        return self.render()


def to_value(obj: Any) -> JsonValue:
    """Module-level shorthand for JsonValue.from_python."""
    return JsonValue.from_python(obj)


def _selector_error(where: object) -> TypeError:
    return TypeError(
        f"expected str key or int position, not {type(where).__name__}"
    )


def _render_number(n: float) -> str:
    if n == 0 and math.copysign(1.0, n) < 0:
        return "-0"
    if n.is_integer() and abs(n) < _EXACT_INTEGER_LIMIT:
        return str(int(n))
    return repr(n)


def _escape_string(s: str) -> str:
    """Encode string with JSON escape sequences."""
    control_limit = 0x20
    result = []
    for char in s:
        if char == '"':
            result.append('\\"')
        elif char == "\\":
            result.append("\\\\")
        elif char == "\b":
            result.append("\\b")
        elif char == "\f":
            result.append("\\f")
        elif char == "\n":
            result.append("\\n")
        elif char == "\r":
            result.append("\\r")
        elif char == "\t":
            result.append("\\t")
        elif ord(char) < control_limit:
            result.append(f"\\u{ord(char):04x}")
        else:
            result.append(char)
    return "".join(result)


def _render_string(s: str, config: RenderConfig) -> str:
    if config.escape_strings:
        return f'"{_escape_string(s)}"'
    return f'"{s}"'


def _format_block(
    open_char: str, close_char: str, items: list[str], config: RenderConfig, level: int
) -> str:
    """Lays out container items one per line with no trailing comma."""
    if not items:
        return open_char + close_char

    indent_str = " " * (config.indent * level)
    inner_indent = " " * (config.indent * (level + 1))

    lines = [open_char]
    for i, item in enumerate(items):
        line = f"{inner_indent}{item}"
        if i < len(items) - 1:
            line += ","
        lines.append(line)

    lines.append(f"{indent_str}{close_char}")
    return "\n".join(lines)


def _render_value(  # noqa: PLR0911
    value: JsonValue, config: RenderConfig, level: int
) -> str:
    kind = value.kind
    if kind is ValueKind.NULL:
        return "null"
    elif kind is ValueKind.BOOLEAN:
        return "true" if value.data else "false"
    elif kind is ValueKind.NUMBER:
        return _render_number(value.data)  # type: ignore[arg-type]
    elif kind is ValueKind.STRING:
        return _render_string(value.data, config)  # type: ignore[arg-type]
    elif kind is ValueKind.ARRAY:
        items = [
            _render_value(item, config, level + 1)
            for item in value.data  # type: ignore[union-attr]
        ]
        return _format_block("[", "]", items, config, level)
    else:
        members = list(value.data.items())  # type: ignore[union-attr]
        if config.sort_keys:
            members.sort(key=lambda pair: pair[0])
        items = [
            f"{_render_string(key, config)}: {_render_value(item, config, level + 1)}"
            for key, item in members
        ]
        return _format_block("{", "}", items, config, level)
