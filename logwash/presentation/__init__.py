"""
Presentation — Display layer for Logwash

Contains display and formatting:
- Symbols: Visual vocabulary (unicode/ascii) and graph glyph translation
- Duration: Fixed-width relative ages
- Margin: Author/age annotations beside washed lines
- Refs: Ref decoration labels
- Color: ANSI escape resolution and display styles
"""

from .symbols import (
    SymbolSet, UNICODE, ASCII, get_symbols, supports_unicode,
    safe_print, truncate,
    GraphGlyphTranslator, IDENTITY,
)
from .duration import DurationUnit, DEFAULT_DURATION_TABLE, format_duration, duration_width
from .margin import MarginSpec, MarginAnnotator, DEFAULT_MARGIN_SPEC
from .refs import RefKind, RefLabel, parse_refs, simplify_labels, render_refs
from .color import strip_escapes, decode_lines

__all__ = [
    # Symbols
    "SymbolSet", "UNICODE", "ASCII", "get_symbols", "supports_unicode",
    "safe_print", "truncate",
    "GraphGlyphTranslator", "IDENTITY",
    # Duration
    "DurationUnit", "DEFAULT_DURATION_TABLE", "format_duration", "duration_width",
    # Margin
    "MarginSpec", "MarginAnnotator", "DEFAULT_MARGIN_SPEC",
    # Refs
    "RefKind", "RefLabel", "parse_refs", "simplify_labels", "render_refs",
    # Color
    "strip_escapes", "decode_lines",
]
