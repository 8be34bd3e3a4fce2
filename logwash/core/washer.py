"""
LineWasher — Sequential rewrite of raw history into records

One pass walks the buffer from the top:

    anchor line  -> match style grammar, capture slots, render heading
    (Log only)   -> wash the continuation block under the heading
    repeat until end of text or, for Log, until the record limit

Every line must belong to a record. A line that does not match the
grammar at the cursor aborts the pass with GrammarMismatch; skipping it
would shift the hash/ref/message slots of every later record.

Continuation of a Log record is an explicit state machine:

    AT_HEADING ──\\x00──> IN_HEADER ──> AT_HEADING
        │ ──---/blank+diff──> IN_DIFFSTAT ──> DONE
        │ ──anchor or end───> DONE
        └──anything else────> IN_MESSAGE_BODY ──> DONE
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from rich.text import Text

from ..presentation.color import (
    HASH_STYLE, SENTINEL_STYLE, VERDICT_STYLES, CHERRY_STYLES, SIDE_STYLES, GPG_STYLES,
)
from ..presentation.refs import DEFAULT_REMOTES, parse_refs, simplify_labels, render_refs
from ..presentation.symbols import SymbolSet, GraphGlyphTranslator, IDENTITY, get_symbols
from .buffer import LineBuffer
from .errors import GrammarMismatch
from .grammar import GrammarMatch, RecordGrammar, grammar_for, parse_timestamp
from .records import (
    RecordStyle, CommitRecord, RecordDraft, RenderedLine, LineKind,
    SentinelRecord, WashState, GpgStatus, CherryMarker, SideMarker,
)
from .reflog import DEFAULT_COLUMN_WIDTH, ReflogSubject, classify, normalize_subject

logger = logging.getLogger(__name__)


# NUL (git "%x00"). Form feed and the ASCII separators are ordinary
# message characters, so they cannot mark a header.
HEADER_DELIMITER = "\x00"


class BodyState(Enum):
    AT_HEADING = "at-heading"
    IN_HEADER = "in-header"
    IN_DIFFSTAT = "in-diffstat"
    IN_MESSAGE_BODY = "in-message-body"
    DONE = "done"


@dataclass(frozen=True)
class RenderOptions:
    """Presentation switches for one engine. Read-only during a pass."""
    color: bool = False
    refs_after_message: bool = False
    align_hash: bool = True
    translate_graph: bool = True
    extended_header: bool = False
    show_margin: bool = True
    reverse: bool = False
    reflog_column: int = DEFAULT_COLUMN_WIDTH
    remotes: Tuple[str, ...] = DEFAULT_REMOTES
    simplify_refs: bool = False


class DiffWasher:
    """
    Renders a diffstat or diff block found under a Log heading.

    The block arrives as one unit: every raw line between the opener and
    the next anchor. The default keeps the lines as they are; subclass and
    override wash() to restyle them.
    """

    def wash(self, lines: List[Text]) -> List[Text]:
        return list(lines)


def _split_graph(line: Text, exact: str, width: int) -> Tuple[Text, Text, str]:
    """
    Split a continuation line at the heading's graph width.

    git pads every line under a commit to the same graph column count,
    so whatever follows those columns is message text, even when it
    starts with a graph character.

    Returns:
        (graph columns, styled rest, exact rest)
    """
    return line[:width], line[width:], exact[width:]


class LineWasher:
    """
    Consume raw history text and emit CommitRecords.

    Usage:
        washer = LineWasher(RenderOptions(align_hash=False))
        buffer = LineBuffer.from_text(raw)
        records, limit_reached = washer.wash(raw, RecordStyle.LOG, limit=256, buffer=buffer)
        for line in buffer.rendered:
            print(line.plain)
    """

    def __init__(
        self,
        options: Optional[RenderOptions] = None,
        symbols: Optional[SymbolSet] = None,
        diff_washer: Optional[DiffWasher] = None,
    ):
        self.options = options or RenderOptions()
        self.symbols = symbols or get_symbols()
        self.diff_washer = diff_washer or DiffWasher()
        if self.options.translate_graph:
            self.translator = GraphGlyphTranslator.for_symbols(self.symbols)
        else:
            self.translator = IDENTITY

    # =========================================================================
    # Pass
    # =========================================================================

    def wash(
        self,
        raw_text: Optional[str],
        style: Union[str, RecordStyle],
        abbrev_length: int = 7,
        limit: Optional[int] = None,
        state: Optional[WashState] = None,
        buffer: Optional[LineBuffer] = None,
    ) -> Tuple[List[CommitRecord], bool]:
        """
        Wash one block of raw text.

        Args:
            raw_text: Output of the history query (ignored when buffer is given)
            style: Which grammar produced the text
            abbrev_length: Hash abbreviation length, used for alignment
            limit: Maximum records for Log style (None = unlimited)
            state: Counters to continue from (fresh if None)
            buffer: Buffer to rewrite in place; rendered lines stay in it

        Returns:
            (records, limit_reached)

        Raises:
            GrammarMismatch: If a line at the cursor is not a record of style
        """
        style = RecordStyle.parse(style)
        if buffer is None:
            buffer = LineBuffer.from_text(raw_text or "", color=self.options.color)
        if state is None:
            state = WashState(limit=limit)
        elif limit is not None:
            state.limit = limit
        if style is not RecordStyle.LOG and state.limit is not None:
            logger.debug("Record limit applies to log style only, ignoring it for %s", style.value)

        buffer.trim_trailing_blank()
        if self.options.reverse:
            buffer.reverse_remaining()

        grammar = grammar_for(style)
        records: List[CommitRecord] = []
        logger.debug("Washing %s text from line %d", style.value, buffer.line_number)

        while not buffer.at_end():
            if style is RecordStyle.LOG and state.at_limit:
                break
            exact = buffer.peek_exact()
            found = grammar.match(exact)
            if found is None:
                raise GrammarMismatch(style.value, buffer.offset, buffer.line_number, exact)
            line = buffer.delete_line()
            state.records_emitted += 1

            subject = None
            if style is RecordStyle.REFLOG and found.slot('reflog_subject'):
                subject = classify(normalize_subject(found.slot('reflog_subject')))
            draft = RecordDraft(self._build_record(found, style, state, subject))
            index = len(records)
            buffer.insert(RenderedLine(
                kind=LineKind.COMMIT,
                text=self._render_heading(draft.record, line, grammar, found, abbrev_length, subject),
                record_index=index,
            ))
            if style is RecordStyle.LOG:
                self._wash_body(buffer, grammar, draft, index, abbrev_length)
            records.append(draft.finalize())

        if style is RecordStyle.LOG and state.at_limit:
            state.limit_reached = True
            state.sentinel = self._insert_sentinel(buffer, state.limit)
            logger.debug("Limit of %d records reached, %d raw lines left", state.limit, len(buffer.remaining))

        logger.debug("Washed %d %s records", len(records), style.value)
        return records, state.limit_reached

    # =========================================================================
    # Headings
    # =========================================================================

    def _build_record(self, found: GrammarMatch, style: RecordStyle, state: WashState,
                      subject: Optional[ReflogSubject]) -> CommitRecord:
        """Turn captured slots into a record, dropping grammar scaffolding."""
        author = found.slot('author')
        if author is not None and not author.strip():
            # Stash lists put a bare separator in the author slot
            author = None

        date = found.slot('reflog_date') if style is RecordStyle.REFLOG else found.slot('date')
        cherry = found.slot('cherry_marker')
        side = found.slot('side_marker')

        fields = dict(
            hash=found.slot('hash'),
            message=found.slot('message') or "",
            style=style,
            refs=found.slot('refs'),
            graph_prefix=found.slot('graph') or None,
            author=author,
            timestamp=parse_timestamp(date),
            gpg_status=GpgStatus.from_letter(found.slot('gpg_status')),
            cherry_marker=CherryMarker(cherry) if cherry else None,
            side_marker=SideMarker(side) if side else None,
        )

        if style is RecordStyle.BISECT_LOG:
            fields['bisect_verdict'] = found.slot('reflog_subject').rstrip(':')
        elif style is RecordStyle.REFLOG:
            fields['reflog_index'] = state.records_emitted - 1
            if subject is not None:
                fields['reflog_category_label'] = subject.category.value
                fields['reflog_text'] = subject.text

        return CommitRecord(**fields)

    @staticmethod
    def _segment(line: Text, shown: Optional[GrammarMatch], found: GrammarMatch, name: str) -> Text:
        """Styled slice of a slot, or its exact text unstyled when the display line differs."""
        if shown is not None:
            return line[shown.match.start(name):shown.match.end(name)]
        return Text(found.slot(name) or "")

    def _render_heading(self, record: CommitRecord, line: Text,
                        grammar: RecordGrammar, found: GrammarMatch, abbrev_length: int,
                        subject: Optional[ReflogSubject] = None) -> Text:
        """Build the styled replacement for an anchor line."""
        options = self.options
        heading = Text()
        # Offsets into the display text, which lacks control characters
        shown = grammar.match(line.plain)

        if record.cherry_marker is not None:
            heading.append(record.cherry_marker.value, style=CHERRY_STYLES[record.cherry_marker])
            heading.append(" ")
        if record.side_marker is not None:
            heading.append(record.side_marker.value, style=SIDE_STYLES[record.side_marker])
            heading.append(" ")

        short_hash = record.hash
        if record.style is RecordStyle.BISECT_LOG:
            short_hash = short_hash[:abbrev_length]
        hash_text = Text(short_hash, style=GPG_STYLES.get(record.gpg_status, HASH_STYLE))

        graph = None
        if record.graph_prefix is not None:
            graph = self.translator.translate(self._segment(line, shown, found, 'graph'))

        if options.align_hash:
            heading.append_text(hash_text)
            heading.append(" ")
            if graph is not None:
                heading.append_text(graph)
        else:
            if graph is not None:
                heading.append_text(graph)
            heading.append_text(hash_text)
            heading.append(" ")

        refs = self._render_refs(record)
        if refs is not None and not options.refs_after_message:
            heading.append_text(refs)
            heading.append(" ")

        if record.bisect_verdict is not None:
            heading.append(record.bisect_verdict, style=VERDICT_STYLES.get(record.bisect_verdict, ""))
            heading.append(" ")

        if record.reflog_index is not None:
            heading.append(f"{record.reflog_index:<2} ")
            if subject is not None:
                heading.append_text(subject.render(options.reflog_column))

        if record.message:
            heading.append_text(self._segment(line, shown, found, 'message'))

        if refs is not None and options.refs_after_message:
            heading.append(" ")
            heading.append_text(refs)

        return heading

    def _render_refs(self, record: CommitRecord) -> Optional[Text]:
        if not record.refs:
            return None
        labels = parse_refs(record.refs, self.options.remotes)
        if self.options.simplify_refs:
            labels = simplify_labels(labels)
        return render_refs(labels)

    def _insert_sentinel(self, buffer: LineBuffer, limit: int) -> SentinelRecord:
        text = f"{self.symbols.more} More history beyond {limit} commits"
        buffer.insert(RenderedLine(
            kind=LineKind.SENTINEL,
            text=Text(text, style=SENTINEL_STYLE),
            section="sentinel",
        ))
        return SentinelRecord(limit=limit, text=text)

    # =========================================================================
    # Continuation (Log)
    # =========================================================================

    def _wash_body(self, buffer: LineBuffer, grammar: RecordGrammar,
                   draft: RecordDraft, index: int, abbrev_length: int) -> None:
        pad = " " * (abbrev_length + 1) if self.options.align_hash else ""
        width = len(draft.record.graph_prefix or "")

        state = BodyState.AT_HEADING
        while state is not BodyState.DONE:
            if state is BodyState.AT_HEADING:
                state = self._next_state(buffer, grammar, width)
            elif state is BodyState.IN_HEADER:
                self._wash_header(buffer, grammar, draft, index, pad, width)
                state = BodyState.AT_HEADING
            elif state is BodyState.IN_DIFFSTAT:
                self._wash_diffstat(buffer, grammar, draft, index, pad, width)
                state = BodyState.DONE
            elif state is BodyState.IN_MESSAGE_BODY:
                self._wash_message(buffer, grammar, draft, index, pad, width)
                state = BodyState.DONE

    def _next_state(self, buffer: LineBuffer, grammar: RecordGrammar, width: int) -> BodyState:
        """Decide what the lines under a heading are."""
        exact = buffer.peek_exact()
        if exact is None or grammar.matches(exact):
            return BodyState.DONE

        rest = exact[width:]
        if self.options.extended_header and rest.startswith(HEADER_DELIMITER):
            return BodyState.IN_HEADER
        if rest.startswith("---"):
            return BodyState.IN_DIFFSTAT
        if not rest.strip():
            following = buffer.peek_exact(1)
            if following is not None:
                next_rest = following[width:]
                if next_rest.startswith(" ") or next_rest.startswith("diff"):
                    return BodyState.IN_DIFFSTAT
        return BodyState.IN_MESSAGE_BODY

    def _continuation(self, prefix: Text, rest: Text, pad: str) -> Text:
        text = Text(pad)
        text.append_text(self.translator.translate(prefix))
        text.append_text(rest)
        return text

    def _take(self, buffer: LineBuffer, width: int) -> Tuple[Text, Text, str]:
        """Consume the line at the cursor, split at the graph width."""
        exact = buffer.peek_exact()
        return _split_graph(buffer.delete_line(), exact, width)

    def _wash_header(self, buffer: LineBuffer, grammar: RecordGrammar, draft: RecordDraft,
                     index: int, pad: str, width: int) -> None:
        """
        Consume a delimited header block as a nested sub-section.

        An unclosed header ends at the next anchor or at the end of text.
        """
        first = True
        while not buffer.at_end():
            if not first and grammar.matches(buffer.peek_exact()):
                break
            prefix, rest, exact = self._take(buffer, width)
            if first:
                rest = rest[len(HEADER_DELIMITER):]
                exact = exact[len(HEADER_DELIMITER):]
                first = False
            cut = exact.find(HEADER_DELIMITER)
            if cut >= 0:
                exact = exact[:cut]
                shown_cut = rest.plain.find(HEADER_DELIMITER)
                if shown_cut >= 0:
                    rest = rest[:shown_cut]
            if exact.strip():
                draft.header.append(exact)
                buffer.insert(RenderedLine(
                    kind=LineKind.CONTINUATION,
                    text=self._continuation(prefix, rest, pad),
                    record_index=index,
                    section="header",
                    depth=1,
                ))
            if cut >= 0:
                return
        logger.debug("Extended header of %s not closed", draft.record.hash)

    def _wash_diffstat(self, buffer: LineBuffer, grammar: RecordGrammar,
                       draft: RecordDraft, index: int, pad: str, width: int) -> None:
        """Hand the block up to the next anchor to the diff washer, graph columns removed."""
        buffer.delete_line()
        prefixes: List[Text] = []
        block: List[Text] = []
        while not buffer.at_end() and not grammar.matches(buffer.peek_exact()):
            prefix, rest, exact = self._take(buffer, width)
            prefixes.append(prefix)
            block.append(rest)
            draft.diffstat.append(exact)

        for position, text in enumerate(self.diff_washer.wash(block)):
            prefix = prefixes[position] if position < len(prefixes) else Text()
            buffer.insert(RenderedLine(
                kind=LineKind.CONTINUATION,
                text=self._continuation(prefix, text, pad),
                record_index=index,
                section="diffstat",
            ))

    def _wash_message(self, buffer: LineBuffer, grammar: RecordGrammar,
                      draft: RecordDraft, index: int, pad: str, width: int) -> None:
        """Free-form lines up to the next anchor continue the message."""
        last = None
        while not buffer.at_end() and not grammar.matches(buffer.peek_exact()):
            last = self._take(buffer, width)
            prefix, rest, exact = last
            if exact.strip():
                draft.body.append(exact)
            buffer.insert(RenderedLine(
                kind=LineKind.CONTINUATION,
                text=self._continuation(prefix, rest, pad),
                record_index=index,
                section="message",
            ))

        if not width or last is None or buffer.at_end():
            return
        prefix, _, exact = last
        if not exact.strip():
            return
        glyphs = prefix.plain.rstrip()
        if glyphs and '/' not in glyphs and '\\' not in glyphs:
            # Origin omitted the separator between this body and the next record
            logger.debug("Recovering graph separator after %s", draft.record.hash)
            buffer.insert(RenderedLine(
                kind=LineKind.CONTINUATION,
                text=Text(pad) + self.translator.translate(prefix[:len(glyphs)]),
                record_index=index,
                section="separator",
            ))
