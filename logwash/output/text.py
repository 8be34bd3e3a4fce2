"""
TextRenderer — Washed buffer with a right-hand margin

    abc1234 * Fix bug                       Jane Doe              3d
            │ Longer explanation
    def5678 * Initial commit                Jane Doe              2w

Lines are padded to a common content column; the margin follows after
one space. Lines without a margin (continuations of marginless styles,
the sentinel) are emitted as they are.
"""

import io
from typing import TYPE_CHECKING, List, Optional

from rich.console import Console
from rich.text import Text

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec

MARGIN_STYLE = "dim"


class TextRenderer(BaseRenderer):
    """Render a WashResult as terminal text, optionally with ANSI styles."""

    def render(self, spec: "OutputSpec") -> str:
        result = spec.data
        if not result.lines:
            return spec.empty_message

        rows = self._compose(result.lines, result.margins)
        if spec.title:
            rows.insert(0, Text(spec.title, style="bold"))

        if not self.color:
            return "\n".join(row.plain for row in rows)

        out = io.StringIO()
        console = Console(
            file=out,
            force_terminal=True,
            color_system="standard",
            width=max(self.width, max(row.cell_len for row in rows)),
            highlight=False,
        )
        for row in rows:
            console.print(row, soft_wrap=True)
        return out.getvalue().rstrip("\n")

    def _compose(self, lines, margins: List[Optional[str]]) -> List[Text]:
        """Pair each rendered line with its margin."""
        margin_width = max((len(m) for m in margins if m is not None), default=0)
        if not margin_width:
            return [line.text.copy() for line in lines]

        content = max(line.text.cell_len for line in lines)
        if not self.full:
            content = min(content, max(1, self.width - margin_width - 1))

        rows = []
        for line, margin in zip(lines, margins):
            row = self._fit(line.text, content) if margin is not None else line.text.copy()
            if margin is not None:
                row.append(" ")
                row.append(margin, style=MARGIN_STYLE)
            rows.append(row)
        return rows

    def _fit(self, text: Text, width: int) -> Text:
        """Pad or cut styled text to exactly width cells."""
        fitted = text.copy()
        if fitted.cell_len > width:
            ellipsis = self.symbols.ellipsis
            keep = max(0, width - len(ellipsis))
            fitted = fitted[:keep]
            fitted.append(ellipsis[:width])
        fitted.pad_right(width - fitted.cell_len)
        return fitted
