"""
Shared pytest fixtures for the logwash test suite.

Raw history blocks are written in the shape the history queries emit
them, one block per style. The clock is fixed three days after the
sample commit date so margin ages are reproducible.

Usage in tests:
    def test_something(engine, log_text):
        result = engine.wash(log_text, "log")
        assert len(result.records) == 2
"""

import pytest

from logwash.core.engine import LogWashingEngine
from logwash.core.washer import LineWasher, RenderOptions
from logwash.presentation.symbols import ASCII, UNICODE


# 2023-11-14T22:13:20Z plus three days
SAMPLE_TIME = 1700000000
NOW = SAMPLE_TIME + 3 * 86400


@pytest.fixture
def clock():
    """Clock frozen three days after SAMPLE_TIME."""
    return lambda: NOW


@pytest.fixture
def engine(clock):
    """Engine with ASCII glyphs (identity graph translation) and a fixed clock."""
    return LogWashingEngine(symbols=ASCII, clock=clock)


@pytest.fixture
def unicode_engine(clock):
    """Engine with Unicode glyphs and a fixed clock."""
    return LogWashingEngine(symbols=UNICODE, clock=clock)


@pytest.fixture
def washer():
    """LineWasher with ASCII glyphs and default options."""
    return LineWasher(RenderOptions(), ASCII)


@pytest.fixture
def log_text():
    """Two plain log records without graph."""
    return (
        "abc1234 [Jane Doe][1700000000]Fix bug\n"
        "def5678 [John Roe][1699000000]Initial commit\n"
    )


@pytest.fixture
def graph_log_text():
    """Graph log with decoration and a body line between records."""
    return (
        "* abc1234 (HEAD -> main, origin/main) [Jane Doe][1700000000]Fix bug\n"
        "| Body line one\n"
        "* def5678 [John Roe][1699000000]Initial commit\n"
    )


@pytest.fixture
def reflog_text():
    return (
        "abc1234 HEAD@{1700000000} commit (amend): Fix typo\n"
        "def5678 HEAD@{1699990000} checkout: moving from main to dev\n"
        "0a1b2c3 HEAD@{1699980000} rebase -i (start): checkout origin/main\n"
    )


@pytest.fixture
def cherry_text():
    return (
        "+ abc1234 Add feature\n"
        "- def5678 Fix typo\n"
    )


@pytest.fixture
def stash_text():
    return (
        "stash@{0} 1700000000 WIP on main: abc1234 Fix bug\n"
        "stash@{1} 1699000000 On dev: experiment\n"
    )
