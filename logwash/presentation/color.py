"""
Color — Inline escape resolution and display styles

Raw history produced with --color carries ANSI SGR escapes that may open
on one physical line and close several lines later. decode_lines() keeps
two views of every line: the exact characters with escapes removed, which
feed the grammars and the records, and a styled rich Text for display.
rich drops control characters from Text, so records never read from it.
"""

import re
from typing import List, Tuple

from rich.ansi import AnsiDecoder
from rich.text import Text

from ..core.records import CherryMarker, SideMarker, GpgStatus


HASH_STYLE = "dim"
SENTINEL_STYLE = "italic"
VERDICT_STYLES = {
    "bad": "bold red",
    "skip": "bold yellow",
    "good": "bold green",
}
CHERRY_STYLES = {
    CherryMarker.APPLIED: "magenta",
    CherryMarker.UNMATCHED: "cyan",
}
SIDE_STYLES = {
    SideMarker.LEFT: "red",
    SideMarker.RIGHT: "green",
}
GPG_STYLES = {
    GpgStatus.GOOD: "green",
    GpgStatus.BAD: "red",
    GpgStatus.UNTRUSTED: "yellow",
    GpgStatus.NONE: HASH_STYLE,
}


# SGR, other CSI and OSC sequences
ANSI_ESCAPE_RE = re.compile(r'\x1b(?:\[[0-?]*[ -/]*[@-~]|\][^\x07\x1b]*(?:\x07|\x1b\\))')


def strip_escapes(raw: str) -> str:
    """Remove ANSI escape sequences, keeping every other character."""
    return ANSI_ESCAPE_RE.sub("", raw)


def decode_lines(raw_text: str, color: bool = True) -> Tuple[List[str], List[Text]]:
    """
    Split raw output into lines, each as exact text and as styled text.

    Lines break on newline only. A single trailing newline does not
    produce an extra empty line. With color, one decoder reads every
    line in order, so a style opened on one line carries over to the
    next.

    Args:
        raw_text: Output of the history query
        color: Whether raw_text carries ANSI escapes to resolve

    Returns:
        (exact lines without escapes, styled lines for display)
    """
    if not raw_text:
        return [], []
    pieces = raw_text.split("\n")
    if raw_text.endswith("\n"):
        pieces.pop()
    if not color:
        return pieces, [Text(piece) for piece in pieces]
    decoder = AnsiDecoder()
    return [strip_escapes(piece) for piece in pieces], [decoder.decode_line(piece) for piece in pieces]
