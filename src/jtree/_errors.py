"""Error taxonomy shared by the scanner, parser and value model."""

from __future__ import annotations


class JtreeError(Exception):
    """
    Base class for every recoverable jtree failure.

    Carries a human-readable message and, when the failure can be tied to a
    place in the source text, the 1-based line and column.
    """

    def __init__(
        self, msg: str, lineno: int | None = None, colno: int | None = None
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")

        self.msg = msg
        self.lineno = lineno
        self.colno = colno

        super().__init__(self._format())

    def _format(self) -> str:
        if self.lineno is None or self.colno is None:
            return self.msg
        return f"{self.msg} at line {self.lineno}, column {self.colno}"

    def __str__(self) -> str:
        # KeyError quotes its argument; keep one format for the whole family
        return self._format()


class JSONSyntaxError(JtreeError, ValueError):
    """Malformed input text: bad byte, unterminated string, unexpected token."""


class JSONValueError(JtreeError, ValueError):
    """Operation attempted on the wrong kind of value, or a bad escape."""


class JSONKeyError(JtreeError, KeyError):
    """Object key missing, or already present on a protected insert."""


class JSONIndexError(JtreeError, IndexError):
    """Array position outside the valid insertion/removal range."""


class UncheckedAccessError(RuntimeError):
    """
    Raised by bracket indexing on misuse.

    Deliberately outside the JtreeError hierarchy, so handlers written for
    recoverable failures do not catch it.
    """
