"""
Logwash — History output washing

Turns raw version-control history text into typed commit records, a
rewritten display buffer and a parallel author/age margin.

Styles:
- log, cherry, module, reflog, stash, bisect-vis, bisect-log

Usage:
    git log --format='%h%d %G?[%aN][%at]%s' | logwash wash --style log
    git reflog --date=raw --format='%h %gd %gs' | logwash wash --style reflog
    logwash wash history.txt --style log --limit 100 --format json
    logwash config
    logwash config --set margin.width=30
"""

__version__ = "0.1.0"

# Core layer (washing)
from .core.errors import (
    LogWashError, WasherError, GrammarMismatch, ConfigError, MarginConfigError, TruncationOverflow,
)
from .core.records import (
    RecordStyle, CommitRecord, SentinelRecord, RenderedLine, LineKind, WashState, WashResult,
)
from .core.reflog import ReflogCategory, ReflogSubject, classify
from .core.buffer import LineBuffer
from .core.washer import LineWasher, RenderOptions, DiffWasher
from .core.engine import LogWashingEngine

# Presentation layer
from .presentation.symbols import get_symbols, SymbolSet, UNICODE, ASCII, GraphGlyphTranslator
from .presentation.duration import DurationUnit, DEFAULT_DURATION_TABLE, format_duration
from .presentation.margin import MarginSpec, MarginAnnotator

# Config (stays at root)
from .config import Config, ConfigManager, get_config, MarginConfig, DisplayConfig, WashConfig

__all__ = [
    # Core
    'LogWashError', 'WasherError', 'GrammarMismatch', 'ConfigError', 'MarginConfigError', 'TruncationOverflow',
    'RecordStyle', 'CommitRecord', 'SentinelRecord', 'RenderedLine', 'LineKind', 'WashState', 'WashResult',
    'ReflogCategory', 'ReflogSubject', 'classify',
    'LineBuffer', 'LineWasher', 'RenderOptions', 'DiffWasher',
    'LogWashingEngine',
    # Presentation
    'get_symbols', 'SymbolSet', 'UNICODE', 'ASCII', 'GraphGlyphTranslator',
    'DurationUnit', 'DEFAULT_DURATION_TABLE', 'format_duration',
    'MarginSpec', 'MarginAnnotator',
    # Config
    'Config', 'ConfigManager', 'get_config', 'MarginConfig', 'DisplayConfig', 'WashConfig',
]
