"""
Margin — Fixed-width author/age annotations beside washed lines

A margin line looks like:

    Jane Doe             3d

author (truncated with an ellipsis), a space, the relative age and one
trailing glyph column. Lines without author and date (continuations)
get a blank filler.

Minimum viable width: duration_width + 3 (one author column, the space,
the duration and the glyph column). Below it the annotator drops the
author and renders only the age, unless strict mode asks it to raise.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from ..core.errors import MarginConfigError, TruncationOverflow
from .duration import (
    DurationUnit, DEFAULT_DURATION_TABLE,
    format_duration, duration_width, longest_label, validate_duration_table,
)
from .symbols import SymbolSet, truncate, get_symbols

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarginSpec:
    """Margin geometry. Read-only during a wash pass."""
    total_width: int = 25
    unit_width: int = 1
    duration_table: Tuple[DurationUnit, ...] = DEFAULT_DURATION_TABLE
    glyph: str = " "
    show_author: bool = True

    @property
    def duration_width(self) -> int:
        return duration_width(self.unit_width)

    @property
    def min_width(self) -> int:
        return self.duration_width + 3

    @property
    def author_width(self) -> int:
        return self.total_width - self.duration_width - 2

    def validate(self) -> "MarginSpec":
        """
        Check the spec before any wash pass uses it.

        Returns:
            self, for chaining

        Raises:
            MarginConfigError: on an invalid table, unit width or total width
        """
        validate_duration_table(self.duration_table)
        longest = longest_label(self.duration_table)
        if self.unit_width != 1 and self.unit_width != longest:
            raise MarginConfigError(
                f"unit_width must be 1 or {longest} (longest unit label), got {self.unit_width}"
            )
        if self.total_width < 1:
            raise MarginConfigError(f"total_width must be positive, got {self.total_width}")
        if len(self.glyph) != 1:
            raise MarginConfigError(f"Margin glyph must be one character, got {self.glyph!r}")
        return self

    @classmethod
    def abbreviated(cls, total_width: int = 25,
                    duration_table: Sequence[DurationUnit] = DEFAULT_DURATION_TABLE) -> "MarginSpec":
        return cls(total_width=total_width, unit_width=1, duration_table=tuple(duration_table))

    @classmethod
    def spelled_out(cls, total_width: int = 30,
                    duration_table: Sequence[DurationUnit] = DEFAULT_DURATION_TABLE) -> "MarginSpec":
        table = tuple(duration_table)
        return cls(total_width=total_width, unit_width=longest_label(table), duration_table=table)


DEFAULT_MARGIN_SPEC = MarginSpec()


class MarginAnnotator:
    """
    Produce margin strings from an author and a timestamp.

    The clock is injectable so ages are reproducible in tests.
    """

    def __init__(
        self,
        spec: Optional[MarginSpec] = None,
        symbols: Optional[SymbolSet] = None,
        clock: Optional[Callable[[], float]] = None,
        strict: bool = False,
    ):
        """
        Args:
            spec: Margin geometry (DEFAULT_MARGIN_SPEC if None)
            symbols: Supplies the truncation ellipsis (auto-detect if None)
            clock: Returns "now" in epoch seconds (time.time if None)
            strict: Raise TruncationOverflow instead of narrowing

        Raises:
            MarginConfigError: If the spec is invalid
        """
        self.spec = (spec or DEFAULT_MARGIN_SPEC).validate()
        self.symbols = symbols or get_symbols()
        self.clock = clock or time.time
        self.strict = strict

    def blank(self) -> str:
        """Filler for lines without author or date of their own."""
        return " " * (self.spec.total_width - 1)

    def age(self, timestamp: int) -> str:
        seconds = abs(int(self.clock() - timestamp))
        return format_duration(seconds, self.spec.duration_table, self.spec.unit_width)

    def annotate(self, author: Optional[str] = None, timestamp: Optional[int] = None) -> str:
        """
        Build the margin for one line.

        Args:
            author: Author name, or None
            timestamp: Epoch seconds, or None

        Returns:
            - neither: total_width - 1 spaces
            - timestamp only: age plus the glyph column
            - both: exactly total_width characters
        """
        spec = self.spec
        if author is None and timestamp is None:
            return self.blank()

        if not spec.show_author:
            author = None
        duration = self.age(timestamp) if timestamp is not None else " " * spec.duration_width

        if author is None:
            return f"{duration}{spec.glyph}"

        if spec.total_width < spec.min_width:
            if self.strict:
                raise TruncationOverflow(spec.total_width, spec.min_width, "no room for the author")
            logger.debug("Margin width %d below %d, dropping author", spec.total_width, spec.min_width)
            return f"{duration}{spec.glyph}"

        width = spec.author_width
        name = truncate(author, width, self.symbols.ellipsis)
        return f"{name:<{width}} {duration}{spec.glyph}"
