"""
Grammar — Record patterns for each history query style

Each style is washed with exactly one anchored pattern. The pattern
captures the byte-exact substrings (hash, refs, message) into named
slots and leaves the scaffolding (brackets, parentheses, separators)
outside the groups.

Slots:
    graph, hash, refs, gpg_status, author, date, message,
    cherry_marker, side_marker, reflog_date, reflog_subject

A slot the grammar does not define reads as None.
"""

import re
from dataclasses import dataclass
from typing import Optional, FrozenSet

from .records import RecordStyle


SLOTS = (
    'graph', 'hash', 'refs', 'gpg_status', 'author', 'date', 'message',
    'cherry_marker', 'side_marker', 'reflog_date', 'reflog_subject',
)

# Characters git uses to draw the commit graph in front of a heading
GRAPH_CHARS = r'-_/|\\*o. '

LOG_HEADING_RE = re.compile(
    r'^(?P<graph>[' + GRAPH_CHARS + r']*)'
    r'(?P<hash>[0-9a-fA-F]+) '
    r'(?:\((?P<refs>[^()]+)\) )?'
    r'(?P<gpg_status>[BGUXYREN])?'
    r'\[(?P<author>[^\]]*)\]'
    r'\[(?P<date>[^\]]*)\]'
    r'(?P<message>.*)$'
)

CHERRY_RE = re.compile(
    r'^(?P<cherry_marker>[-+]) '
    r'(?P<hash>[0-9a-fA-F]+) '
    r'(?P<message>.*)$'
)

MODULE_RE = re.compile(
    r'^(?:(?P<side_marker>[<>]) )?'
    r'(?P<hash>[0-9a-fA-F]+) '
    r'(?P<message>.*)$'
)

# The single space is the author slot: stash lists carry no author
STASH_RE = re.compile(
    r'^(?P<hash>[^ ]+)'
    r'(?P<author> )'
    r'(?P<date>[^ ]+) '
    r'(?P<message>.*)$'
)

BISECT_VISUAL_RE = re.compile(
    r'^(?P<hash>[0-9a-fA-F]+) '
    r'(?:\((?P<refs>[^()]+)\) )?'
    r'(?P<message>.*)$'
)

BISECT_LOG_RE = re.compile(
    r'^# (?P<reflog_subject>bad:|skip:|good:) '
    r'\[(?P<hash>[^\]]+)\] '
    r'(?P<message>.*)$'
)

# An entry without a subject is "<hash>  " (second alternative)
REFLOG_RE = re.compile(
    r'^(?P<hash>[^ ]+) '
    r'(?:[^@]+@\{(?P<reflog_date>[^}]+)\} '
    r'(?P<reflog_subject>merge |autosave |restart |[^:]+: )?'
    r'(?P<message>.*)'
    r'| )$'
)

# "1700000000" or "1700000000 +0100"
TIMESTAMP_RE = re.compile(r'^(?P<seconds>-?\d+)(?: (?P<sign>[+-])(?P<hours>\d\d)(?P<minutes>\d\d))?$')


@dataclass(frozen=True)
class GrammarMatch:
    """A successful anchor match with uniform slot access."""
    grammar: "RecordGrammar"
    match: re.Match

    def slot(self, name: str) -> Optional[str]:
        """Captured text of a slot, or None when absent from the grammar or the line."""
        if name not in self.grammar.slots:
            return None
        return self.match.group(name)

    @property
    def end(self) -> int:
        return self.match.end()


@dataclass(frozen=True)
class RecordGrammar:
    """The anchor pattern of one style."""
    style: RecordStyle
    pattern: re.Pattern
    slots: FrozenSet[str]

    def match(self, line: str) -> Optional[GrammarMatch]:
        found = self.pattern.match(line)
        if found is None:
            return None
        return GrammarMatch(self, found)

    def matches(self, line: str) -> bool:
        return self.pattern.match(line) is not None


def _grammar(style: RecordStyle, pattern: re.Pattern) -> RecordGrammar:
    slots = frozenset(name for name in pattern.groupindex if name in SLOTS)
    return RecordGrammar(style=style, pattern=pattern, slots=slots)


LOG_GRAMMAR = _grammar(RecordStyle.LOG, LOG_HEADING_RE)
CHERRY_GRAMMAR = _grammar(RecordStyle.CHERRY, CHERRY_RE)
MODULE_GRAMMAR = _grammar(RecordStyle.MODULE, MODULE_RE)
REFLOG_GRAMMAR = _grammar(RecordStyle.REFLOG, REFLOG_RE)
STASH_GRAMMAR = _grammar(RecordStyle.STASH, STASH_RE)
BISECT_VISUAL_GRAMMAR = _grammar(RecordStyle.BISECT_VISUAL, BISECT_VISUAL_RE)
BISECT_LOG_GRAMMAR = _grammar(RecordStyle.BISECT_LOG, BISECT_LOG_RE)


def grammar_for(style: RecordStyle) -> RecordGrammar:
    """Select the record grammar for a style."""
    if style is RecordStyle.LOG:
        return LOG_GRAMMAR
    elif style is RecordStyle.CHERRY:
        return CHERRY_GRAMMAR
    elif style is RecordStyle.MODULE:
        return MODULE_GRAMMAR
    elif style is RecordStyle.REFLOG:
        return REFLOG_GRAMMAR
    elif style is RecordStyle.STASH:
        return STASH_GRAMMAR
    elif style is RecordStyle.BISECT_VISUAL:
        return BISECT_VISUAL_GRAMMAR
    elif style is RecordStyle.BISECT_LOG:
        return BISECT_LOG_GRAMMAR
    raise ValueError(f"No grammar for style {style!r}")


def parse_timestamp(date: Optional[str]) -> Optional[int]:
    """
    Parse a raw date slot into integer seconds.

    A trailing timezone offset ("+0100") is folded into the value.
    Non-numeric dates (custom formats) yield None.

    Examples:
        parse_timestamp("1700000000")        -> 1700000000
        parse_timestamp("1700000000 +0100")  -> 1700003600
        parse_timestamp("yesterday")         -> None
    """
    if not date:
        return None
    found = TIMESTAMP_RE.match(date.strip())
    if not found:
        return None
    seconds = int(found.group('seconds'))
    if found.group('sign'):
        offset = int(found.group('hours')) * 3600 + int(found.group('minutes')) * 60
        seconds += offset if found.group('sign') == '+' else -offset
    return seconds
