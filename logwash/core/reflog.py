"""
Reflog — Subject classification for reflog entries

A reflog subject such as "rebase -i (start)" or "commit (amend)" is split
into command, options and type, then mapped to a display category.

Colon handling (implementation-defined): the washer strips the trailing
": " that separates the subject from the message, and classify() strips
one trailing colon from the command token, so "checkout: moving from a
to b" classifies as checkout.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from rich.text import Text


class ReflogCategory(Enum):
    COMMIT = "commit"
    AMEND = "amend"
    MERGE = "merge"
    CHECKOUT = "checkout"
    RESET = "reset"
    REBASE = "rebase"
    CHERRY_PICK = "cherry-pick"
    REMOTE = "remote"
    OTHER = "other"


# Keyed by the label used for "commit" entries (their type) or by command
REFLOG_LABELS = {
    "commit": ReflogCategory.COMMIT,
    "amend": ReflogCategory.AMEND,
    "merge": ReflogCategory.MERGE,
    "checkout": ReflogCategory.CHECKOUT,
    "branch": ReflogCategory.CHECKOUT,
    "reset": ReflogCategory.RESET,
    "rebase": ReflogCategory.REBASE,
    "cherry-pick": ReflogCategory.CHERRY_PICK,
    "initial": ReflogCategory.COMMIT,
    "pull": ReflogCategory.REMOTE,
    "clone": ReflogCategory.REMOTE,
    "autosave": ReflogCategory.COMMIT,
    "restart": ReflogCategory.RESET,
}

CATEGORY_STYLES = {
    ReflogCategory.COMMIT: "green",
    ReflogCategory.AMEND: "magenta",
    ReflogCategory.MERGE: "green",
    ReflogCategory.CHECKOUT: "blue",
    ReflogCategory.RESET: "red",
    ReflogCategory.REBASE: "magenta",
    ReflogCategory.CHERRY_PICK: "green",
    ReflogCategory.REMOTE: "cyan",
    ReflogCategory.OTHER: "cyan",
}

DEFAULT_COLUMN_WIDTH = 16

SUBJECT_RE = re.compile(
    r'(?P<command>[^ ]+) ?'
    r'(?P<option>(?: ?-[^ ]+)+)?'
    r'(?: ?\((?P<type>[^)]+)\))?'
)


@dataclass(frozen=True)
class ReflogSubject:
    """Parsed reflog subject."""
    command: str
    options: Tuple[str, ...]
    type: Optional[str]
    label: str
    text: str
    category: ReflogCategory

    @property
    def option(self) -> Optional[str]:
        """Options as they appeared, space-joined (None if absent)."""
        return " ".join(self.options) if self.options else None

    def format(self, width: int = DEFAULT_COLUMN_WIDTH) -> str:
        """Text right-padded to the reflog column, plus one separating space."""
        return f"{self.text:<{width}} "

    def render(self, width: int = DEFAULT_COLUMN_WIDTH) -> Text:
        """Styled column cell for the washed buffer."""
        cell = Text(self.text, style=CATEGORY_STYLES[self.category])
        cell.append(" " * max(0, width - len(self.text)) + " ")
        return cell


def normalize_subject(raw: str) -> str:
    """
    Drop the separator a reflog grammar leaves on the subject slot.

    "commit (amend): " -> "commit (amend)"
    "merge "           -> "merge"
    """
    if raw.endswith(": "):
        return raw[:-2]
    if raw.endswith(" "):
        return raw[:-1]
    return raw


def classify(raw_subject: str) -> ReflogSubject:
    """
    Classify a reflog subject. Never fails.

    Examples:
        classify("commit (initial)")   -> label "initial", category COMMIT
        classify("rebase -i (start)")  -> text "rebase -i (start)", category REBASE
        classify("pull")               -> category REMOTE
    """
    found = SUBJECT_RE.match(raw_subject or "")
    if found is None:
        return ReflogSubject(
            command="", options=(), type=None, label="", text="",
            category=ReflogCategory.OTHER,
        )

    command = found.group('command')
    if len(command) > 1 and command.endswith(':'):
        command = command[:-1]
    options = tuple((found.group('option') or "").split())
    kind = found.group('type')

    if command == "commit":
        label = kind or command
        text = label
    else:
        label = command
        parts = [command, *options]
        if kind:
            parts.append(f"({kind})")
        text = " ".join(parts)

    category = REFLOG_LABELS.get(label, ReflogCategory.OTHER)
    return ReflogSubject(
        command=command, options=options, type=kind,
        label=label, text=text, category=category,
    )
