"""
Core — Washing engine for Logwash

Contains the record pipeline:
- Records: Typed output of a wash pass (records, sentinel, rendered lines)
- Grammar: One anchored pattern per history query style
- Reflog: Subject classification for reflog entries
- Buffer: Raw text rewritten in place
- Washer: Sequential line scanner and body state machine
- Engine: Washer plus margin annotation
- Errors: Failure taxonomy
"""

from .errors import (
    LogWashError, WasherError, GrammarMismatch, ConfigError, MarginConfigError, TruncationOverflow,
)
from .records import (
    RecordStyle, GpgStatus, CherryMarker, SideMarker, LineKind,
    CommitRecord, RecordDraft, SentinelRecord, RenderedLine, WashState, WashResult,
)
from .grammar import RecordGrammar, GrammarMatch, grammar_for, parse_timestamp
from .reflog import ReflogCategory, ReflogSubject, classify, normalize_subject
from .buffer import LineBuffer
from .washer import LineWasher, RenderOptions, DiffWasher, BodyState, HEADER_DELIMITER
from .engine import LogWashingEngine

__all__ = [
    # Errors
    "LogWashError", "WasherError", "GrammarMismatch", "ConfigError", "MarginConfigError", "TruncationOverflow",
    # Records
    "RecordStyle", "GpgStatus", "CherryMarker", "SideMarker", "LineKind",
    "CommitRecord", "RecordDraft", "SentinelRecord", "RenderedLine", "WashState", "WashResult",
    # Grammar
    "RecordGrammar", "GrammarMatch", "grammar_for", "parse_timestamp",
    # Reflog
    "ReflogCategory", "ReflogSubject", "classify", "normalize_subject",
    # Washing
    "LineBuffer", "LineWasher", "RenderOptions", "DiffWasher", "BodyState", "HEADER_DELIMITER",
    "LogWashingEngine",
]
