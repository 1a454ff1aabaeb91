"""
Comma-space separated row output.

Report rows are read by people and pasted into spreadsheets, so fields are
joined with ``", "`` and never quoted. Any comma or line break inside a
field is replaced by a space so the columns stay aligned.
"""
import re
import sys
from typing import Iterable, Optional, TextIO

SEPARATOR = ", "

_UNSAFE = re.compile(r"[,\r\n]")


def sanitize_field(value: object) -> str:
    """Render a field, replacing each comma or line break with one space."""
    if value is None:
        return ""
    return _UNSAFE.sub(" ", str(value))


def format_row(fields: Iterable[object]) -> str:
    """Join sanitized fields; trailing blank columns leave the row ending in ``,``."""
    return SEPARATOR.join(sanitize_field(f) for f in fields).rstrip(" ")


class RowWriter:
    """Writes report lines and rows to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the writes
        return self._stream if self._stream is not None else sys.stdout

    def line(self, text: str = "") -> None:
        self.stream.write(f"{text}\n")

    def row(self, *fields: object) -> None:
        self.line(format_row(fields))
