"""
Tests for Grammar — Record patterns per style

Each grammar must capture the byte-exact slots and leave the
scaffolding (brackets, parentheses, separators) outside them.
"""

import pytest

from logwash.core.grammar import grammar_for, parse_timestamp
from logwash.core.records import RecordStyle


class TestLogGrammar:
    """Log headings: graph, hash, refs, gpg, [author][date] message."""

    def test_plain_heading(self):
        found = grammar_for(RecordStyle.LOG).match("abc1234 [Jane Doe][1700000000]Fix bug")
        assert found is not None
        assert found.slot('graph') == ""
        assert found.slot('hash') == "abc1234"
        assert found.slot('refs') is None
        assert found.slot('author') == "Jane Doe"
        assert found.slot('date') == "1700000000"
        assert found.slot('message') == "Fix bug"

    def test_graph_and_refs(self):
        line = "* abc1234 (HEAD -> main, origin/main) [Jane Doe][1700000000]Fix bug"
        found = grammar_for(RecordStyle.LOG).match(line)
        assert found.slot('graph') == "* "
        assert found.slot('refs') == "HEAD -> main, origin/main"
        assert found.slot('message') == "Fix bug"

    def test_gpg_letter(self):
        found = grammar_for(RecordStyle.LOG).match("abc1234 G[Jane Doe][1700000000]Signed")
        assert found.slot('gpg_status') == "G"
        assert found.slot('author') == "Jane Doe"

    def test_nested_graph(self):
        found = grammar_for(RecordStyle.LOG).match("| * abc1234 [A][1]msg")
        assert found.slot('graph') == "| * "

    def test_body_line_is_not_an_anchor(self):
        assert not grammar_for(RecordStyle.LOG).matches("| Body line one")
        assert not grammar_for(RecordStyle.LOG).matches("")

    def test_slot_outside_grammar_is_none(self):
        found = grammar_for(RecordStyle.LOG).match("abc1234 [A][1]msg")
        assert found.slot('cherry_marker') is None
        assert found.slot('reflog_subject') is None


class TestOtherGrammars:
    """Cherry, module, stash, bisect and reflog patterns."""

    def test_cherry(self):
        found = grammar_for(RecordStyle.CHERRY).match("+ abc1234 Add feature")
        assert found.slot('cherry_marker') == "+"
        assert found.slot('hash') == "abc1234"
        assert found.slot('message') == "Add feature"

    def test_cherry_requires_marker(self):
        assert grammar_for(RecordStyle.CHERRY).match("abc1234 Add feature") is None

    def test_module_with_side(self):
        found = grammar_for(RecordStyle.MODULE).match("> abc1234 Bump lib")
        assert found.slot('side_marker') == ">"
        assert found.slot('message') == "Bump lib"

    def test_module_without_side(self):
        found = grammar_for(RecordStyle.MODULE).match("abc1234 Bump lib")
        assert found.slot('side_marker') is None
        assert found.slot('hash') == "abc1234"

    def test_stash_author_is_separator(self):
        found = grammar_for(RecordStyle.STASH).match("stash@{0} 1700000000 WIP on main: abc1234 Fix bug")
        assert found.slot('hash') == "stash@{0}"
        assert found.slot('author') == " "
        assert found.slot('date') == "1700000000"
        assert found.slot('message') == "WIP on main: abc1234 Fix bug"

    def test_bisect_visual(self):
        found = grammar_for(RecordStyle.BISECT_VISUAL).match("abc1234 (refs/bisect/bad) Break things")
        assert found.slot('refs') == "refs/bisect/bad"
        assert found.slot('message') == "Break things"

    def test_bisect_log(self):
        line = "# bad: [0123456789abcdef0123456789abcdef01234567] Break things"
        found = grammar_for(RecordStyle.BISECT_LOG).match(line)
        assert found.slot('reflog_subject') == "bad:"
        assert found.slot('hash') == "0123456789abcdef0123456789abcdef01234567"
        assert found.slot('message') == "Break things"

    def test_bisect_log_rejects_other_comments(self):
        assert grammar_for(RecordStyle.BISECT_LOG).match("# status: waiting") is None


class TestReflogGrammar:
    """Reflog entries with and without a subject."""

    def test_subject_with_colon(self):
        found = grammar_for(RecordStyle.REFLOG).match("abc1234 HEAD@{1700000000} commit (amend): Fix typo")
        assert found.slot('hash') == "abc1234"
        assert found.slot('reflog_date') == "1700000000"
        assert found.slot('reflog_subject') == "commit (amend): "
        assert found.slot('message') == "Fix typo"

    def test_subject_stops_at_first_colon(self):
        found = grammar_for(RecordStyle.REFLOG).match(
            "0a1b2c3 HEAD@{1699980000} rebase -i (start): checkout origin/main")
        assert found.slot('reflog_subject') == "rebase -i (start): "
        assert found.slot('message') == "checkout origin/main"

    def test_bare_merge_subject(self):
        found = grammar_for(RecordStyle.REFLOG).match("abc1234 HEAD@{1} merge dev")
        assert found.slot('reflog_subject') == "merge "
        assert found.slot('message') == "dev"

    def test_entry_without_subject(self):
        found = grammar_for(RecordStyle.REFLOG).match("abc1234  ")
        assert found is not None
        assert found.slot('hash') == "abc1234"
        assert found.slot('reflog_date') is None
        assert found.slot('reflog_subject') is None


class TestGrammarFor:
    def test_every_style_has_a_grammar(self):
        for style in RecordStyle:
            assert grammar_for(style).style is style

    def test_style_parse(self):
        assert RecordStyle.parse("bisect-vis") is RecordStyle.BISECT_VISUAL
        assert RecordStyle.parse("BISECT_LOG") is RecordStyle.BISECT_LOG

    def test_unknown_style(self):
        with pytest.raises(ValueError, match="Unknown record style"):
            RecordStyle.parse("blame")


class TestParseTimestamp:
    """Date slot to integer seconds."""

    def test_plain(self):
        assert parse_timestamp("1700000000") == 1700000000

    def test_positive_offset(self):
        assert parse_timestamp("1700000000 +0100") == 1700003600

    def test_negative_offset(self):
        assert parse_timestamp("1700000000 -0130") == 1700000000 - 5400

    def test_non_numeric(self):
        assert parse_timestamp("yesterday") is None

    def test_empty(self):
        assert parse_timestamp("") is None
        assert parse_timestamp(None) is None
