"""
Records — Typed output of a wash pass

A wash pass turns raw history text into:
- CommitRecord: one per matched anchor line (plus its continuation)
- SentinelRecord: "more history exists" marker appended at the limit
- RenderedLine: each line of the rewritten buffer, tagged by kind
- WashState: per-invocation counters, threaded explicitly

Margins are a side channel: WashResult.margins is parallel to
WashResult.lines and never stored on the records themselves.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, List, Tuple, Dict, Any, Union

from rich.text import Text


class RecordStyle(Enum):
    """Grammar variant of a wash pass (which query produced the text)."""
    LOG = "log"
    CHERRY = "cherry"
    MODULE = "module"
    REFLOG = "reflog"
    STASH = "stash"
    BISECT_VISUAL = "bisect-vis"
    BISECT_LOG = "bisect-log"

    @classmethod
    def parse(cls, name: Union[str, "RecordStyle"]) -> "RecordStyle":
        """Resolve a style from its value ("bisect-vis") or member name."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for style in cls:
            if key in (style.value, style.name.lower()):
                return style
        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown record style '{name}'. Valid: {valid}")

    @property
    def has_margin(self) -> bool:
        """Styles whose headings carry a date for the age margin."""
        return self in (RecordStyle.LOG, RecordStyle.REFLOG, RecordStyle.STASH)


class GpgStatus(Enum):
    GOOD = "good"
    BAD = "bad"
    UNTRUSTED = "untrusted"
    NONE = "none"

    @classmethod
    def from_letter(cls, letter: Optional[str]) -> Optional["GpgStatus"]:
        """Map git's %G? letter to a status. Empty slot means absent."""
        if not letter:
            return None
        return GPG_LETTERS.get(letter, cls.NONE)


# %G? letters: Good, Bad, Unknown validity, eXpired sig, expired keY,
# Revoked key, cannot chEck, No signature
GPG_LETTERS = {
    'G': GpgStatus.GOOD,
    'B': GpgStatus.BAD,
    'U': GpgStatus.UNTRUSTED,
    'X': GpgStatus.UNTRUSTED,
    'Y': GpgStatus.UNTRUSTED,
    'R': GpgStatus.UNTRUSTED,
    'E': GpgStatus.NONE,
    'N': GpgStatus.NONE,
}


class CherryMarker(Enum):
    APPLIED = "-"      # equivalent change already upstream
    UNMATCHED = "+"


class SideMarker(Enum):
    LEFT = "<"
    RIGHT = ">"


class LineKind(Enum):
    """Logical tag of a rendered line."""
    COMMIT = "commit-record"
    CONTINUATION = "continuation"
    SENTINEL = "sentinel"


@dataclass(frozen=True)
class CommitRecord:
    """One structured history entry. Immutable once finalized."""
    hash: str
    message: str = ""
    style: RecordStyle = RecordStyle.LOG
    refs: Optional[str] = None
    graph_prefix: Optional[str] = None
    author: Optional[str] = None
    timestamp: Optional[int] = None
    gpg_status: Optional[GpgStatus] = None
    cherry_marker: Optional[CherryMarker] = None
    side_marker: Optional[SideMarker] = None
    reflog_index: Optional[int] = None
    reflog_category_label: Optional[str] = None
    reflog_text: Optional[str] = None
    bisect_verdict: Optional[str] = None
    # Continuation blocks (plain text)
    header: Tuple[str, ...] = ()
    diffstat: Tuple[str, ...] = ()
    body: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.hash:
            raise ValueError("CommitRecord requires a non-empty hash")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output. Absent fields are omitted."""
        data: Dict[str, Any] = {"hash": self.hash, "message": self.message, "style": self.style.value}
        optional = {
            "refs": self.refs,
            "graph": self.graph_prefix,
            "author": self.author,
            "timestamp": self.timestamp,
            "gpg_status": self.gpg_status.value if self.gpg_status else None,
            "cherry": self.cherry_marker.value if self.cherry_marker else None,
            "side": self.side_marker.value if self.side_marker else None,
            "reflog_index": self.reflog_index,
            "reflog_category": self.reflog_category_label,
            "reflog_subject": self.reflog_text,
            "bisect_verdict": self.bisect_verdict,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        for name in ("header", "diffstat", "body"):
            lines = getattr(self, name)
            if lines:
                data[name] = list(lines)
        return data


@dataclass
class RecordDraft:
    """
    Mutable record under construction.

    The washer keeps extending the continuation blocks while it scans
    trailing lines, then calls finalize() once the next anchor is reached.
    """
    record: CommitRecord
    header: List[str] = field(default_factory=list)
    diffstat: List[str] = field(default_factory=list)
    body: List[str] = field(default_factory=list)

    def finalize(self) -> CommitRecord:
        if not (self.header or self.diffstat or self.body):
            return self.record
        return replace(
            self.record,
            header=tuple(self.header),
            diffstat=tuple(self.diffstat),
            body=tuple(self.body),
        )


@dataclass(frozen=True)
class SentinelRecord:
    """Synthetic terminal record: more history exists beyond the limit."""
    limit: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"sentinel": True, "limit": self.limit, "text": self.text}


@dataclass
class RenderedLine:
    """A line of the rewritten buffer."""
    kind: LineKind
    text: Text
    record_index: Optional[int] = None
    section: str = "heading"
    depth: int = 0

    @property
    def plain(self) -> str:
        return self.text.plain


@dataclass
class WashState:
    """Per-invocation counters. Destroyed when the pass returns."""
    records_emitted: int = 0
    limit: Optional[int] = None
    limit_reached: bool = False
    sentinel: Optional[SentinelRecord] = None

    @property
    def at_limit(self) -> bool:
        return self.limit is not None and self.records_emitted >= self.limit


@dataclass
class WashResult:
    """Everything one engine invocation produces."""
    records: List[CommitRecord]
    lines: List[RenderedLine]
    margins: List[Optional[str]]
    state: WashState
    sentinel: Optional[SentinelRecord] = None
    remaining: List[str] = field(default_factory=list)

    @property
    def limit_reached(self) -> bool:
        return self.state.limit_reached

    @property
    def items(self) -> List[Union[CommitRecord, SentinelRecord]]:
        """Records in order, followed by the sentinel when one was appended."""
        items: List[Union[CommitRecord, SentinelRecord]] = list(self.records)
        if self.sentinel is not None:
            items.append(self.sentinel)
        return items

    @property
    def record_margins(self) -> List[Optional[str]]:
        """Heading margin for each record, indexed like self.records."""
        margins: List[Optional[str]] = [None] * len(self.records)
        for line, margin in zip(self.lines, self.margins):
            if line.kind is LineKind.COMMIT and line.record_index is not None:
                margins[line.record_index] = margin
        return margins

    def to_dict(self) -> Dict[str, Any]:
        records = []
        for record, margin in zip(self.records, self.record_margins):
            data = record.to_dict()
            if margin is not None:
                data["margin"] = margin
            records.append(data)
        return {
            "records": records,
            "lines": [line.plain for line in self.lines],
            "records_emitted": self.state.records_emitted,
            "limit": self.state.limit,
            "limit_reached": self.state.limit_reached,
            "sentinel": self.sentinel.to_dict() if self.sentinel else None,
        }
