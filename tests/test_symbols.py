"""
Tests for Symbols — Glyph sets and graph translation

Tests Unicode/ASCII detection, truncation and the graph glyph translator.
"""

import os
from unittest.mock import patch

import pytest
from rich.text import Text

from logwash.presentation.symbols import (
    get_symbols, supports_unicode, truncate, UNICODE, ASCII,
    GraphGlyphTranslator, IDENTITY,
)


class TestSymbolSets:
    """Test symbol set completeness."""

    def test_ascii_is_printable(self):
        """ASCII symbols are all printable ASCII."""
        for sym in [ASCII.graph_slash, ASCII.graph_vertical, ASCII.graph_backslash,
                    ASCII.graph_commit, ASCII.graph_boundary, ASCII.ellipsis, ASCII.more]:
            assert all(32 <= ord(c) <= 126 for c in sym), f"Non-printable ASCII in {sym}"

    def test_unicode_graph_glyphs_are_single_characters(self):
        for glyph in UNICODE.graph_table.values():
            assert len(glyph) == 1


class TestSymbolSelection:
    """Test symbol set selection logic."""

    def test_explicit_unicode(self):
        assert get_symbols("unicode") is UNICODE

    def test_explicit_ascii(self):
        assert get_symbols("ascii") is ASCII

    def test_ascii_only_env(self):
        with patch.dict(os.environ, {"LOGWASH_ASCII_ONLY": "1"}):
            assert supports_unicode() is False
            assert get_symbols() is ASCII

    def test_unicode_env(self):
        with patch.dict(os.environ, {"LOGWASH_UNICODE": "1", "LOGWASH_ASCII_ONLY": ""}):
            assert supports_unicode() is True


class TestTruncate:
    """truncate() fits text to an exact length."""

    def test_fits(self):
        assert truncate("Jane Doe", 10) == "Jane Doe"

    def test_cut_with_ellipsis(self):
        assert truncate("Jane Doe", 6, "…") == "Jane …"

    def test_length_shorter_than_ellipsis(self):
        assert truncate("Jane Doe", 2, "...") == "Ja"

    def test_zero_length(self):
        assert truncate("Jane Doe", 0) == ""


class TestGraphGlyphTranslator:
    """Character substitution over the graph alphabet."""

    def test_unicode_table(self):
        translator = GraphGlyphTranslator.for_symbols(UNICODE)
        assert translator.translate("/|\\*o ") == "╱│╲◆◇ "

    def test_identity_table(self):
        assert IDENTITY.translate("/|\\*o ") == "/|\\*o "
        assert IDENTITY.is_identity

    def test_ascii_symbols_are_identity(self):
        assert GraphGlyphTranslator.for_symbols(ASCII).is_identity

    def test_unmapped_characters_pass_through(self):
        translator = GraphGlyphTranslator({'*': '#'})
        assert translator.translate("*_-.|") == "#_-.|"

    def test_empty_segment(self):
        assert GraphGlyphTranslator.for_symbols(UNICODE).translate("") == ""

    def test_styled_text_keeps_spans(self):
        """Styles stay on the same character positions."""
        segment = Text()
        segment.append("|", style="red")
        segment.append(" ")
        segment.append("*", style="bold")
        translated = GraphGlyphTranslator.for_symbols(UNICODE).translate(segment)

        assert isinstance(translated, Text)
        assert translated.plain == "│ ◆"
        assert [(s.start, s.end, s.style) for s in translated.spans] == [
            (0, 1, "red"), (2, 3, "bold"),
        ]
        # Input untouched
        assert segment.plain == "| *"

    def test_rejects_non_graph_key(self):
        with pytest.raises(ValueError):
            GraphGlyphTranslator({'x': 'y'})

    def test_rejects_multi_character_glyph(self):
        with pytest.raises(ValueError):
            GraphGlyphTranslator({'|': '||'})
