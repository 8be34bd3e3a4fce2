"""
Symbols — Glyph vocabulary for washed history

Progressive enhancement: Unicode graph glyphs when supported, ASCII
passthrough otherwise. Configurable via the display.symbols setting.

Also provides:
- GraphGlyphTranslator: style-preserving substitution over graph segments
- truncate(): ellipsis truncation used by margins
- safe_print(): encoding-safe printing of washed output
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, Optional, Union

from rich.text import Text


# Common Unicode to ASCII replacements for display
UNICODE_TO_ASCII = {
    '╱': '/',
    '│': '|',
    '╲': '\\',
    '◆': '*',
    '◇': 'o',
    '…': '...',
    '→': '->',
}

# Characters the translator is allowed to substitute
GRAPH_ALPHABET = frozenset('/|\\*o ')


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Print with graceful encoding fallback.

    Handles UnicodeEncodeError by replacing unencodable characters
    with ASCII equivalents or '?' as last resort.

    Args:
        text: Text to print (may contain any Unicode)
        end: String appended after text (default: newline)
        file: Output stream (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        safe_text = text
        for unicode_char, ascii_equiv in UNICODE_TO_ASCII.items():
            safe_text = safe_text.replace(unicode_char, ascii_equiv)

        try:
            print(safe_text, end=end, file=file)
        except UnicodeEncodeError:
            encoding = getattr(file, 'encoding', 'utf-8') or 'utf-8'
            encoded = safe_text.encode(encoding, errors='replace')
            print(encoded.decode(encoding), end=end, file=file)


def truncate(text: str, length: int, ellipsis: str = "...") -> str:
    """
    Truncate text to exactly fit length, marking the cut with ellipsis.

    Args:
        text: Text to truncate
        length: Max length of the result
        ellipsis: Marker appended when text is cut

    Returns:
        text unchanged if it fits, else a prefix plus ellipsis

    Examples:
        truncate("Jane Doe", 10)          -> "Jane Doe"
        truncate("Jane Doe", 6, "…")      -> "Jane …"
        truncate("Jane Doe", 2, "...")    -> "Ja"
    """
    if not text:
        return ""
    if length <= 0:
        return ""
    if len(text) <= length:
        return text
    if length <= len(ellipsis):
        return text[:length]
    return text[:length - len(ellipsis)] + ellipsis


@dataclass(frozen=True)
class SymbolSet:
    """Glyphs used when rendering a washed buffer."""
    # Graph (replacements for / | \ * o)
    graph_slash: str
    graph_vertical: str
    graph_backslash: str
    graph_commit: str
    graph_boundary: str

    # Margin
    ellipsis: str

    # Sentinel
    more: str

    @property
    def graph_table(self) -> Dict[str, str]:
        """Substitution table for GraphGlyphTranslator."""
        return {
            '/': self.graph_slash,
            '|': self.graph_vertical,
            '\\': self.graph_backslash,
            '*': self.graph_commit,
            'o': self.graph_boundary,
        }


UNICODE = SymbolSet(
    graph_slash='╱',
    graph_vertical='│',
    graph_backslash='╲',
    graph_commit='◆',
    graph_boundary='◇',
    ellipsis='…',
    more='→',
)

ASCII = SymbolSet(
    graph_slash='/',
    graph_vertical='|',
    graph_backslash='\\',
    graph_commit='*',
    graph_boundary='o',
    ellipsis='...',
    more='->',
)


def supports_unicode() -> bool:
    """
    Check if environment likely supports Unicode output.

    Conservative: defaults to ASCII if uncertain.
    Checks stdout encoding first (most reliable on Windows).
    """
    if os.environ.get('LOGWASH_ASCII_ONLY', '').lower() in ('1', 'true', 'yes'):
        return False
    if os.environ.get('LOGWASH_UNICODE', '').lower() in ('1', 'true', 'yes'):
        return True

    stdout_encoding = getattr(sys.stdout, 'encoding', None)
    if stdout_encoding:
        encoding_lower = stdout_encoding.lower().replace('-', '').replace('_', '')
        if encoding_lower.startswith('cp') or encoding_lower in ('ascii', 'latin1', 'iso88591'):
            return False

    lang = os.environ.get('LANG', '').lower()
    lc_all = os.environ.get('LC_ALL', '').lower()

    if 'utf-8' in lang or 'utf8' in lang:
        return True
    if 'utf-8' in lc_all or 'utf8' in lc_all:
        return True

    term_program = os.environ.get('TERM_PROGRAM', '')
    if term_program in ('vscode', 'iTerm.app', 'Apple_Terminal', 'Hyper'):
        return True

    if os.environ.get('WT_SESSION'):
        return True

    term = os.environ.get('TERM', '')
    if term in ('xterm-256color', 'screen-256color', 'alacritty', 'kitty'):
        if lang or lc_all:
            return True

    if stdout_encoding and 'utf' in stdout_encoding.lower():
        return True

    return False


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Get appropriate symbol set based on preference or auto-detection.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)

    Returns:
        Appropriate SymbolSet for the environment
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII


# =============================================================================
# Graph Glyph Translation
# =============================================================================

class GraphGlyphTranslator:
    """
    Substitute graph characters with alternate glyphs.

    Pure one-to-one character substitution, so any style span carried by a
    rich Text input stays on the same character. Characters outside the
    table pass through unchanged.
    """

    def __init__(self, table: Optional[Dict[str, str]] = None):
        """
        Args:
            table: Mapping from graph character to replacement glyph.
                   None or {} is the identity mapping.

        Raises:
            ValueError: If a key is outside the graph alphabet or a
                        replacement is not exactly one character.
        """
        table = dict(table or {})
        for source, glyph in table.items():
            if source not in GRAPH_ALPHABET:
                raise ValueError(f"'{source}' is not a graph character")
            if len(glyph) != 1:
                raise ValueError(f"Replacement for '{source}' must be one character, got {glyph!r}")
        self.table = table
        self._translation = str.maketrans(table)

    @classmethod
    def for_symbols(cls, symbols: SymbolSet) -> "GraphGlyphTranslator":
        return cls(symbols.graph_table)

    @property
    def is_identity(self) -> bool:
        return all(source == glyph for source, glyph in self.table.items())

    def translate(self, graph_segment: Union[str, Text]) -> Union[str, Text]:
        """
        Translate a graph segment.

        Args:
            graph_segment: Plain string or styled rich Text

        Returns:
            Same type as the input, with glyphs substituted
        """
        if isinstance(graph_segment, Text):
            translated = graph_segment.copy()
            translated.plain = graph_segment.plain.translate(self._translation)
            return translated
        return graph_segment.translate(self._translation)


IDENTITY = GraphGlyphTranslator()
