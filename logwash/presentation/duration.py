"""
Duration — Relative age formatting for margins

Turns elapsed seconds into a short fixed-width string such as "  3d"
or "  3 days", using an ordered table of units (longest first).
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..core.errors import MarginConfigError


@dataclass(frozen=True)
class DurationUnit:
    """One row of a duration table."""
    abbreviation: str
    singular: str
    plural: str
    seconds: int

    def label(self, count: int) -> str:
        return self.singular if count == 1 else self.plural


DEFAULT_DURATION_TABLE: Tuple[DurationUnit, ...] = (
    DurationUnit('Y', 'year', 'years', round(60 * 60 * 24 * 365.2425)),
    DurationUnit('M', 'month', 'months', round(60 * 60 * 24 * 30.436875)),
    DurationUnit('w', 'week', 'weeks', 60 * 60 * 24 * 7),
    DurationUnit('d', 'day', 'days', 60 * 60 * 24),
    DurationUnit('h', 'hour', 'hours', 60 * 60),
    DurationUnit('m', 'minute', 'minutes', 60),
    DurationUnit('s', 'second', 'seconds', 1),
)

COUNT_WIDTH = 3


def longest_label(table: Sequence[DurationUnit]) -> int:
    """Width of the longest singular or plural label in the table."""
    return max((max(len(u.singular), len(u.plural)) for u in table), default=0)


def validate_duration_table(table: Sequence[DurationUnit]) -> None:
    """
    Reject tables the formatter cannot walk.

    Raises:
        MarginConfigError: empty table, non-positive unit, or units not
                           strictly descending by seconds
    """
    if not table:
        raise MarginConfigError("Duration table is empty")
    previous = None
    for unit in table:
        if len(unit.abbreviation) != 1:
            raise MarginConfigError(
                f"Unit abbreviation must be one character, got {unit.abbreviation!r}"
            )
        if unit.seconds <= 0:
            raise MarginConfigError(f"Unit '{unit.singular}' has non-positive length {unit.seconds}")
        if previous is not None and unit.seconds >= previous.seconds:
            raise MarginConfigError(
                f"Duration table must be strictly descending: "
                f"'{unit.singular}' ({unit.seconds}s) follows '{previous.singular}' ({previous.seconds}s)"
            )
        previous = unit


def duration_width(unit_width: int) -> int:
    """Rendered width of format_duration() output for a unit width."""
    if unit_width == 1:
        return COUNT_WIDTH + 1
    return COUNT_WIDTH + 1 + unit_width


def format_duration(seconds: int, table: Sequence[DurationUnit], unit_width: int) -> str:
    """
    Format a non-negative duration with the first unit that fits.

    Walks the table from its head and uses the first unit whose quotient
    is at least 1, or the last unit. The count is rounded half-up.

    Args:
        seconds: Elapsed seconds (>= 0)
        table: Units ordered longest first
        unit_width: 1 for abbreviated units, else the label column width

    Returns:
        "%3d%c" when unit_width == 1, else "%3d %-<unit_width>s"

    Examples:
        format_duration(90, DEFAULT_DURATION_TABLE, 1)   -> "  2m"
        format_duration(86400, DEFAULT_DURATION_TABLE, 7) -> "  1 day    "
    """
    if seconds < 0:
        raise ValueError(f"Duration must be non-negative, got {seconds}")
    if not table:
        raise MarginConfigError("Duration table is empty")

    unit, rest = table[0], table[1:]
    if rest and seconds / unit.seconds < 1:
        return format_duration(seconds, rest, unit_width)

    count = int(seconds / unit.seconds + 0.5)
    if unit_width == 1:
        return f"{count:{COUNT_WIDTH}d}{unit.abbreviation}"
    return f"{count:{COUNT_WIDTH}d} {unit.label(count):<{unit_width}}"
