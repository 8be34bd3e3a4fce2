"""
LogWashingEngine — Raw history text in, records plus margins out

Composes the LineWasher with a MarginAnnotator. Holds only read-only
configuration, so one engine can serve any number of sequential passes;
every pass gets its own buffer and WashState.
"""

import logging
from typing import Callable, List, Optional, Union

from ..presentation.margin import MarginSpec, MarginAnnotator, DEFAULT_MARGIN_SPEC
from ..presentation.symbols import SymbolSet, get_symbols
from .buffer import LineBuffer
from .records import (
    RecordStyle, CommitRecord, RenderedLine, LineKind, WashState, WashResult,
)
from .washer import LineWasher, RenderOptions, DiffWasher

logger = logging.getLogger(__name__)


class LogWashingEngine:
    """
    Wash raw history output into a structured, annotated document.

    Usage:
        engine = LogWashingEngine(MarginSpec(total_width=25))
        result = engine.wash(raw, "log", abbrev_length=7, limit=256)
        for line, margin in zip(result.lines, result.margins):
            ...
    """

    def __init__(
        self,
        margin_spec: Optional[MarginSpec] = None,
        options: Optional[RenderOptions] = None,
        symbols: Optional[SymbolSet] = None,
        diff_washer: Optional[DiffWasher] = None,
        clock: Optional[Callable[[], float]] = None,
        strict_margin: bool = False,
    ):
        """
        Args:
            margin_spec: Margin geometry (validated here, before any pass)
            options: Presentation switches
            symbols: Glyphs for graph translation, ellipsis and sentinel
            diff_washer: Renderer for diffstat blocks under Log headings
            clock: "Now" for margin ages (time.time if None)
            strict_margin: Raise TruncationOverflow instead of narrowing

        Raises:
            MarginConfigError: If margin_spec is invalid
        """
        self.options = options or RenderOptions()
        self.symbols = symbols or get_symbols()
        self.margin_spec = (margin_spec or DEFAULT_MARGIN_SPEC).validate()
        self.clock = clock
        self.strict_margin = strict_margin
        self.washer = LineWasher(self.options, self.symbols, diff_washer)
        self.annotator = MarginAnnotator(self.margin_spec, self.symbols, clock, strict_margin)

    def wash(
        self,
        raw_text: Union[str, LineBuffer],
        style: Union[str, RecordStyle],
        abbrev_length: int = 7,
        limit: Optional[int] = None,
        margin_spec: Optional[MarginSpec] = None,
    ) -> WashResult:
        """
        Run one wash pass.

        Args:
            raw_text: Raw query output, or a prepared LineBuffer
            style: Grammar variant of the text
            abbrev_length: Hash abbreviation length
            limit: Maximum Log records before the sentinel (None = unlimited)
            margin_spec: Override the engine's margin geometry for this pass

        Returns:
            WashResult with records, rendered lines and parallel margins

        Raises:
            GrammarMismatch: On a line that is not a record of style
            MarginConfigError: If margin_spec is invalid
        """
        style = RecordStyle.parse(style)
        annotator = self.annotator
        if margin_spec is not None:
            annotator = MarginAnnotator(margin_spec, self.symbols, self.clock, self.strict_margin)

        if isinstance(raw_text, LineBuffer):
            buffer = raw_text
        else:
            buffer = LineBuffer.from_text(raw_text, color=self.options.color)

        # A prepared buffer may already hold lines from an earlier pass
        start = len(buffer.rendered)
        state = WashState(limit=limit if style is RecordStyle.LOG else None)
        records, _ = self.washer.wash(None, style, abbrev_length, state=state, buffer=buffer)

        lines = buffer.rendered[start:]
        margins = [self._margin(line, records, style, annotator) for line in lines]
        logger.debug("Pass produced %d records and %d lines", len(records), len(lines))
        return WashResult(
            records=records,
            lines=lines,
            margins=margins,
            state=state,
            sentinel=state.sentinel,
            remaining=buffer.remaining_exact,
        )

    def _margin(self, line: RenderedLine, records: List[CommitRecord],
                style: RecordStyle, annotator: MarginAnnotator) -> Optional[str]:
        """Margin for one rendered line (None where no margin applies)."""
        if not self.options.show_margin or not style.has_margin:
            return None
        if line.kind is LineKind.SENTINEL:
            return None
        if line.kind is LineKind.CONTINUATION:
            return annotator.blank()
        record = records[line.record_index]
        return annotator.annotate(record.author, record.timestamp)
