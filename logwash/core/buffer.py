"""
LineBuffer — Raw history text rewritten in place

The washer consumes raw lines from the front of the buffer and replaces
each with its rendered form. At any time the buffer's contents are the
rendered lines followed by the raw lines not yet consumed.

Every raw line is held twice: as the exact string (escapes removed,
control characters kept) that grammars match and records capture from,
and as a styled Text used only for rendering.

Not safe for concurrent use: one wash pass owns the buffer.
"""

from typing import List, Optional

from rich.text import Text

from ..presentation.color import decode_lines
from .records import RenderedLine


class LineBuffer:
    """Cursor over raw lines plus the rendered lines that replaced them."""

    def __init__(self, lines: List[Text], exact: Optional[List[str]] = None):
        self._raw = list(lines)
        if exact is None:
            exact = [line.plain for line in self._raw]
        if len(exact) != len(self._raw):
            raise ValueError("exact and styled lines differ in count")
        self._exact = list(exact)
        self._point = 0
        self._offset = 0
        self.rendered: List[RenderedLine] = []

    @classmethod
    def from_text(cls, raw_text: str, color: bool = False) -> "LineBuffer":
        """
        Build a buffer from raw query output.

        With color, one decoder reads the lines in order, so styles
        spanning lines survive.
        """
        exact, styled = decode_lines(raw_text, color)
        return cls(styled, exact)

    # -------------------------------------------------------------------------
    # Cursor
    # -------------------------------------------------------------------------

    def at_end(self) -> bool:
        return self._point >= len(self._raw)

    def peek(self, ahead: int = 0) -> Optional[Text]:
        """Styled raw line at the cursor (or ahead of it), None past the end."""
        index = self._point + ahead
        if index < len(self._raw):
            return self._raw[index]
        return None

    def peek_exact(self, ahead: int = 0) -> Optional[str]:
        """Exact raw line at the cursor (or ahead of it), None past the end."""
        index = self._point + ahead
        if index < len(self._exact):
            return self._exact[index]
        return None

    def delete_line(self) -> Text:
        """Consume the raw line at the cursor."""
        line = self._raw[self._point]
        self._offset += len(self._exact[self._point]) + 1
        self._point += 1
        return line

    def insert(self, line: RenderedLine) -> RenderedLine:
        """Insert a rendered line before the remaining raw text."""
        self.rendered.append(line)
        return line

    @property
    def offset(self) -> int:
        """Character offset of the cursor in the raw block."""
        return self._offset

    @property
    def line_number(self) -> int:
        """1-based raw line number at the cursor."""
        return self._point + 1

    # -------------------------------------------------------------------------
    # Whole-buffer edits
    # -------------------------------------------------------------------------

    def trim_trailing_blank(self) -> int:
        """Drop blank raw lines at the end of the text. Returns how many."""
        dropped = 0
        while len(self._raw) > self._point and not self._exact[-1].strip():
            self._raw.pop()
            self._exact.pop()
            dropped += 1
        return dropped

    def reverse_remaining(self) -> None:
        """Reverse the order of the raw lines not yet consumed."""
        self._raw[self._point:] = reversed(self._raw[self._point:])
        self._exact[self._point:] = reversed(self._exact[self._point:])

    @property
    def remaining(self) -> List[Text]:
        return self._raw[self._point:]

    @property
    def remaining_exact(self) -> List[str]:
        return self._exact[self._point:]

    @property
    def lines(self) -> List[Text]:
        """Current buffer contents: rendered lines, then unconsumed raw lines."""
        return [line.text for line in self.rendered] + self.remaining
