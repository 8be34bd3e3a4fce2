"""
BaseRenderer — Abstract base class for output renderers

All renderers inherit from this class and implement render().
Provides the shared symbol set, terminal width and output switches.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import shutil

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet
    from . import OutputSpec


class BaseRenderer(ABC):
    """
    Abstract base class for all output renderers.

    Provides:
    - Symbol set access (Unicode/ASCII)
    - Terminal width detection

    Subclasses must implement render() method.
    """

    def __init__(
        self,
        symbols: "SymbolSet" = None,
        width: int = None,
        full: bool = False,
        color: bool = False,
    ):
        """
        Initialize renderer.

        Args:
            symbols: SymbolSet for visual elements (auto-detect if None)
            width: Terminal width (auto-detect if None)
            full: If True, don't truncate content
            color: Emit ANSI styles (text renderers only)
        """
        from ..presentation.symbols import get_symbols

        self.symbols = symbols or get_symbols()
        self.width = width or shutil.get_terminal_size().columns
        self.full = full
        self.color = color

    @abstractmethod
    def render(self, spec: "OutputSpec") -> str:
        """
        Render OutputSpec to formatted string.

        Args:
            spec: OutputSpec with data and hints

        Returns:
            Formatted string for output
        """
        pass
