"""
Refs — Ref decoration labels

Splits git's decoration ("HEAD -> main, origin/main, tag: v1.0") into
typed labels and renders them as a styled run of names.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence

from rich.text import Text


class RefKind(Enum):
    HEAD = "head"          # detached HEAD
    CURRENT = "current"    # branch HEAD points at
    LOCAL = "local"
    REMOTE = "remote"
    TAG = "tag"


REF_STYLES = {
    RefKind.HEAD: "bold cyan",
    RefKind.CURRENT: "bold green",
    RefKind.LOCAL: "green",
    RefKind.REMOTE: "cyan",
    RefKind.TAG: "yellow",
}

DEFAULT_REMOTES = ("origin",)


@dataclass(frozen=True)
class RefLabel:
    name: str
    kind: RefKind


def parse_refs(decoration: str, remotes: Sequence[str] = DEFAULT_REMOTES) -> List[RefLabel]:
    """
    Parse a decoration string (without its parentheses).

    Args:
        decoration: e.g. "HEAD -> main, origin/main, tag: v1.0"
        remotes: Remote names; "<remote>/<branch>" parts are remote labels

    Returns:
        Labels in decoration order
    """
    labels = []
    for part in decoration.split(","):
        part = part.strip()
        if not part:
            continue
        if part.startswith("HEAD -> "):
            labels.append(RefLabel(part[len("HEAD -> "):], RefKind.CURRENT))
        elif part == "HEAD":
            labels.append(RefLabel(part, RefKind.HEAD))
        elif part.startswith("tag: "):
            labels.append(RefLabel(part[len("tag: "):], RefKind.TAG))
        elif part.startswith("refs/remotes/"):
            labels.append(RefLabel(part[len("refs/remotes/"):], RefKind.REMOTE))
        elif any(part.startswith(f"{remote}/") for remote in remotes):
            labels.append(RefLabel(part, RefKind.REMOTE))
        else:
            labels.append(RefLabel(part, RefKind.LOCAL))
    return labels


def simplify_labels(labels: Iterable[RefLabel]) -> List[RefLabel]:
    """Omit remote branches that point at the same commit as a local branch of the same name."""
    labels = list(labels)
    local = {l.name for l in labels if l.kind in (RefKind.LOCAL, RefKind.CURRENT)}
    return [
        l for l in labels
        if not (l.kind is RefKind.REMOTE and l.name.split("/", 1)[-1] in local)
    ]


def render_refs(labels: Iterable[RefLabel]) -> Text:
    """Space-separated styled label names."""
    rendered = Text()
    for i, label in enumerate(labels):
        if i:
            rendered.append(" ")
        rendered.append(label.name, style=REF_STYLES[label.kind])
    return rendered
