"""
Errors — Failure taxonomy for washing and margin configuration

Grammar and configuration errors abort the current operation and carry
enough context to trace the upstream argument-construction bug.
The classifier and the glyph translator never raise.
"""

from typing import Optional


class LogWashError(Exception):
    """Base class for all logwash failures."""
    pass


class WasherError(LogWashError):
    """Raised when a wash pass cannot continue."""
    pass


class GrammarMismatch(WasherError):
    """
    Text at the cursor does not match the style's record grammar.

    Fatal to the pass: skipping the line would desynchronize the
    hash/ref/message slots of every following record.
    """

    SNIPPET_LENGTH = 60

    def __init__(self, style: str, offset: int, line_number: int, snippet: str):
        self.style = style
        self.offset = offset
        self.line_number = line_number
        if len(snippet) > self.SNIPPET_LENGTH:
            snippet = snippet[:self.SNIPPET_LENGTH] + "..."
        self.snippet = snippet
        super().__init__(
            f"{style} grammar does not match line {line_number} "
            f"(offset {offset}): {snippet!r}"
        )


class ConfigError(LogWashError, ValueError):
    """Configuration rejected: a malformed value or an invalid setting."""
    pass


class MarginConfigError(ConfigError):
    """Margin specification rejected before any wash pass runs."""
    pass



class TruncationOverflow(LogWashError):
    """
    Margin width cannot fit the requested annotation.

    Only raised by a strict MarginAnnotator. The default annotator falls
    back to the narrowest valid rendering instead.
    """

    def __init__(self, total_width: int, min_width: int, detail: Optional[str] = None):
        self.total_width = total_width
        self.min_width = min_width
        message = f"Margin width {total_width} is below the minimum of {min_width}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
