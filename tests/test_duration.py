"""
Tests for Duration — Relative age formatting

These tests validate:
- Unit selection (first unit with quotient >= 1, else the last)
- Half-up rounding of the count
- Abbreviated and spelled-out layouts
- Monotone growth across unit boundaries
- Table validation
"""

import pytest

from logwash.core.errors import MarginConfigError
from logwash.presentation.duration import (
    DurationUnit, DEFAULT_DURATION_TABLE,
    format_duration, duration_width, longest_label, validate_duration_table,
)


UNIT_SECONDS = {u.abbreviation: u.seconds for u in DEFAULT_DURATION_TABLE}


def rendered_seconds(text: str) -> int:
    """Seconds an abbreviated rendering stands for."""
    return int(text[:3]) * UNIT_SECONDS[text[3]]


class TestAbbreviated:
    """unit_width == 1: "%3d%c"."""

    def test_zero_uses_finest_unit(self):
        """Zero seconds renders with the last (finest) unit."""
        assert format_duration(0, DEFAULT_DURATION_TABLE, 1) == "  0s"

    def test_seconds(self):
        assert format_duration(45, DEFAULT_DURATION_TABLE, 1) == " 45s"

    def test_rounds_half_up(self):
        """90 seconds is 1.5 minutes, rounded up to 2."""
        assert format_duration(90, DEFAULT_DURATION_TABLE, 1) == "  2m"

    def test_rounds_down_below_half(self):
        assert format_duration(89, DEFAULT_DURATION_TABLE, 1) == "  1m"

    def test_three_days(self):
        assert format_duration(3 * 86400, DEFAULT_DURATION_TABLE, 1) == "  3d"

    def test_two_weeks(self):
        assert format_duration(1259200, DEFAULT_DURATION_TABLE, 1) == "  2w"

    def test_years(self):
        year = UNIT_SECONDS['Y']
        assert format_duration(10 * year, DEFAULT_DURATION_TABLE, 1) == " 10Y"

    def test_fixed_width(self):
        """Every abbreviated rendering has the same width."""
        for seconds in (0, 59, 3600, 86400 * 40, UNIT_SECONDS['Y'] * 3):
            assert len(format_duration(seconds, DEFAULT_DURATION_TABLE, 1)) == duration_width(1)


class TestSpelledOut:
    """unit_width > 1: "%3d %-Ns" with pluralized labels."""

    def test_singular(self):
        assert format_duration(86400, DEFAULT_DURATION_TABLE, 7) == "  1 day    "

    def test_plural(self):
        assert format_duration(2 * 86400, DEFAULT_DURATION_TABLE, 7) == "  2 days   "

    def test_zero_is_plural(self):
        assert format_duration(0, DEFAULT_DURATION_TABLE, 7) == "  0 seconds"

    def test_width_matches_duration_width(self):
        width = longest_label(DEFAULT_DURATION_TABLE)
        text = format_duration(3600, DEFAULT_DURATION_TABLE, width)
        assert len(text) == duration_width(width)


class TestMonotone:
    """Rendered size never shrinks as seconds grow."""

    def test_across_unit_boundaries(self):
        year = UNIT_SECONDS['Y']
        month = UNIT_SECONDS['M']
        samples = [
            0, 1, 59, 60, 89, 90, 3599, 3600, 86399, 86400,
            604799, 604800, month - 1, month, year - 1, year, 10 * year,
        ]
        values = [rendered_seconds(format_duration(s, DEFAULT_DURATION_TABLE, 1)) for s in samples]
        assert values == sorted(values)


class TestErrors:
    """Invalid input and tables."""

    def test_negative_seconds(self):
        with pytest.raises(ValueError):
            format_duration(-1, DEFAULT_DURATION_TABLE, 1)

    def test_empty_table(self):
        with pytest.raises(MarginConfigError):
            validate_duration_table([])

    def test_not_descending(self):
        table = [DurationUnit('m', 'minute', 'minutes', 60), DurationUnit('h', 'hour', 'hours', 3600)]
        with pytest.raises(MarginConfigError, match="descending"):
            validate_duration_table(table)

    def test_non_positive_unit(self):
        with pytest.raises(MarginConfigError):
            validate_duration_table([DurationUnit('s', 'second', 'seconds', 0)])

    def test_multi_character_abbreviation(self):
        with pytest.raises(MarginConfigError):
            validate_duration_table([DurationUnit('sec', 'second', 'seconds', 1)])

    def test_default_table_is_valid(self):
        validate_duration_table(DEFAULT_DURATION_TABLE)


class TestCustomTable:
    """A caller-supplied table is walked the same way."""

    def test_two_unit_table(self):
        table = [DurationUnit('h', 'hour', 'hours', 3600), DurationUnit('m', 'minute', 'minutes', 60)]
        assert format_duration(7200, table, 1) == "  2h"
        assert format_duration(30, table, 1) == "  1m"
