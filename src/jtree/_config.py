"""Immutable parse and render settings."""

from dataclasses import dataclass
from enum import Enum


class DuplicateKeys(Enum):
    """Policy for a key repeated inside one object literal."""

    REJECT = "reject"
    LAST_WINS = "last_wins"


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    duplicate_keys decides what a repeated key inside one object literal
    does; max_depth bounds container nesting (None leaves it to the
    interpreter's recursion limit).
    """

    duplicate_keys: DuplicateKeys = DuplicateKeys.REJECT
    max_depth: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.duplicate_keys, DuplicateKeys):
            raise TypeError("duplicate_keys must be a DuplicateKeys member")
        if self.max_depth is not None and (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 1
        ):
            raise ValueError("max_depth must be a positive integer or None")


@dataclass(frozen=True)
class RenderConfig:
    """
    Configures text rendering with immutable settings.

    The defaults produce four-space indentation, the mapping's own key order
    and strings written back without escapes.
    """

    indent: int = 4
    sort_keys: bool = False
    escape_strings: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise TypeError("indent must be an integer")
        if self.indent < 0:
            raise ValueError("indent must be non-negative")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if not isinstance(self.escape_strings, bool):
            raise TypeError("escape_strings must be a boolean")
