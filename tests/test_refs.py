"""
Tests for Refs — Decoration labels
"""

from logwash.presentation.refs import (
    RefKind, RefLabel, parse_refs, simplify_labels, render_refs,
)


class TestParseRefs:
    """Decoration string to typed labels."""

    def test_current_branch_and_remote(self):
        labels = parse_refs("HEAD -> main, origin/main")
        assert labels == [
            RefLabel("main", RefKind.CURRENT),
            RefLabel("origin/main", RefKind.REMOTE),
        ]

    def test_tag_and_detached_head(self):
        labels = parse_refs("HEAD, tag: v1.0, feature")
        assert [l.kind for l in labels] == [RefKind.HEAD, RefKind.TAG, RefKind.LOCAL]
        assert labels[1].name == "v1.0"

    def test_custom_remotes(self):
        labels = parse_refs("upstream/main, origin/main", remotes=("upstream",))
        assert labels[0].kind is RefKind.REMOTE
        assert labels[1].kind is RefKind.LOCAL

    def test_full_remote_ref(self):
        labels = parse_refs("refs/remotes/fork/dev")
        assert labels == [RefLabel("fork/dev", RefKind.REMOTE)]

    def test_empty_parts_skipped(self):
        assert parse_refs(" , main") == [RefLabel("main", RefKind.LOCAL)]


class TestSimplify:
    def test_remote_twin_dropped(self):
        labels = simplify_labels(parse_refs("HEAD -> main, origin/main, origin/dev"))
        assert [l.name for l in labels] == ["main", "origin/dev"]


class TestRenderRefs:
    def test_space_separated_with_styles(self):
        text = render_refs(parse_refs("HEAD -> main, tag: v1.0"))
        assert text.plain == "main v1.0"
        assert [(s.start, s.end, s.style) for s in text.spans] == [
            (0, 4, "bold green"), (5, 9, "yellow"),
        ]

    def test_no_labels(self):
        assert render_refs([]).plain == ""
