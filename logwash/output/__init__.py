"""
Output Module — View Layer for Logwash

Separates data from presentation (MVC-lite pattern).
Commands return OutputSpec, renderers handle display.

Usage:
    from logwash.output import OutputSpec, render

    # In command:
    return OutputSpec(data=result, title="History")

    # In CLI layer:
    output = render(spec, format="text", symbols=symbols)
    print(output)
"""

from dataclasses import dataclass
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet

# Re-export for convenience
from .base import BaseRenderer
from .text import TextRenderer
from .json import JsonRenderer


# =============================================================================
# OutputSpec — Data envelope for rendering
# =============================================================================

@dataclass
class OutputSpec:
    """
    Data envelope that commands return for rendering.

    Attributes:
        data: A WashResult (or any to_dict()-able structure for json)
        shape: Rendering hint - "text" | "json" | "auto"
        title: Optional header line
        empty_message: Message when there is nothing to show
    """
    data: Any
    shape: str = "auto"
    title: Optional[str] = None
    empty_message: str = "No records."


# =============================================================================
# Format Registry
# =============================================================================

# Maps format name to renderer class
RENDERERS = {
    "text": TextRenderer,
    "json": JsonRenderer,
}


# =============================================================================
# Main Render Function
# =============================================================================

def get_renderer(format: str, symbols: "SymbolSet", width: int = None,
                 full: bool = False, color: bool = False) -> BaseRenderer:
    """
    Get appropriate renderer instance.

    Raises:
        ValueError: If format is invalid
    """
    if format not in RENDERERS:
        valid = ", ".join(RENDERERS.keys())
        raise ValueError(f"Unknown format '{format}'. Valid: {valid}")

    renderer_class = RENDERERS[format]
    return renderer_class(symbols=symbols, width=width, full=full, color=color)


def render(
    spec: OutputSpec,
    format: str = "auto",
    symbols: "SymbolSet" = None,
    width: int = None,
    full: bool = False,
    color: bool = False,
) -> str:
    """
    Render OutputSpec to formatted string.

    This is the main entry point for the output system.

    Args:
        spec: OutputSpec from command
        format: "auto" | "text" | "json"
        symbols: SymbolSet for visual elements (auto-detect if None)
        width: Terminal width (auto-detect if None)
        full: If True, don't truncate content
        color: Emit ANSI styles in text output

    Returns:
        Formatted string ready for printing
    """
    import shutil
    from ..presentation.symbols import get_symbols

    if symbols is None:
        symbols = get_symbols()
    if width is None:
        width = shutil.get_terminal_size().columns

    if format == "auto":
        effective_format = spec.shape if spec.shape in RENDERERS else "text"
    else:
        effective_format = format

    renderer = get_renderer(effective_format, symbols, width, full, color)
    return renderer.render(spec)


__all__ = [
    "OutputSpec", "render", "get_renderer",
    "BaseRenderer", "TextRenderer", "JsonRenderer",
    "RENDERERS",
]
