"""
WashCommand — Wash raw history text from a file or stdin

    git log --format='%h%d %G?[%aN][%at]%s' | logwash wash --style log
    git reflog --date=raw --format='%h %gd %gs' | logwash wash --style reflog
    logwash wash reflog.txt --style reflog --format json
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from ..commands.base import BaseCommand
from ..core.engine import LogWashingEngine
from ..core.errors import ConfigError
from ..core.records import RecordStyle
from ..output import OutputSpec, render
from ..presentation.duration import longest_label
from ..presentation.symbols import get_symbols, safe_print


class WashCommand(BaseCommand):
    """Run one wash pass and print the result."""

    def read_source(self, source: Optional[str]) -> str:
        """Raw text from a file path, or stdin for None / "-"."""
        if source is None or source == "-":
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8", errors="replace")

    def wash(
        self,
        source: Optional[str],
        style: str,
        limit: Optional[int] = None,
        abbrev: Optional[int] = None,
        color: bool = False,
        refs_after: bool = False,
        no_align: bool = False,
        no_margin: bool = False,
        extended_header: bool = False,
        reverse: bool = False,
        margin_width: Optional[int] = None,
        spelled_out: bool = False,
        symbols: Optional[str] = None,
        output_format: Optional[str] = None,
    ) -> int:
        """
        Wash and print.

        Command-line flags override configuration; unset flags fall back
        to the loaded config.

        Returns:
            Exit status (0 on success)

        Raises:
            LogWashError: On malformed input or an invalid margin
            ConfigError: If the loaded configuration is invalid
        """
        config = self.config
        error = config.validate()
        if error:
            raise ConfigError(error)
        symbol_set = get_symbols(symbols) if symbols else self.symbols

        overrides = {}
        if refs_after:
            overrides["refs_after_message"] = True
        if no_align:
            overrides["align_hash"] = False
        if no_margin:
            overrides["show_margin"] = False
        if extended_header:
            overrides["extended_header"] = True
        if reverse:
            overrides["reverse"] = True
        options = config.render_options(color=color, **overrides)

        spec = config.margin_spec()
        if margin_width is not None:
            spec = replace(spec, total_width=margin_width)
        if spelled_out:
            spec = replace(spec, unit_width=longest_label(spec.duration_table))

        engine = LogWashingEngine(spec, options, symbol_set)
        result = engine.wash(
            self.read_source(source),
            RecordStyle.parse(style),
            abbrev_length=abbrev if abbrev is not None else config.wash.abbrev_length,
            limit=limit if limit is not None else config.wash.limit,
        )

        output = render(
            OutputSpec(data=result),
            format=output_format or config.display.format,
            symbols=symbol_set,
            full=True,
            color=color,
        )
        safe_print(output)
        return 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'wash'


def register_parser(subparsers):
    """Register wash command parser."""
    styles = [style.value for style in RecordStyle]
    p = subparsers.add_parser('wash', help='Wash raw history text into records')
    p.add_argument('source', nargs='?', default=None,
                   help='File with raw history text (default: stdin)')
    p.add_argument('--style', '-s', default='log', choices=styles,
                   help='Query style that produced the text (default: log)')
    p.add_argument('--limit', '-n', type=int, default=None,
                   help='Stop after N log records and append a sentinel')
    p.add_argument('--abbrev', type=int, default=None,
                   help='Hash abbreviation length used for alignment')
    p.add_argument('--color', action='store_true',
                   help='Input carries ANSI colors; keep them in text output')
    p.add_argument('--refs-after', action='store_true',
                   help='Show ref labels after the message')
    p.add_argument('--no-align', action='store_true',
                   help='Render the graph before the hash')
    p.add_argument('--no-margin', action='store_true',
                   help='Omit the author/age margin')
    p.add_argument('--extended-header', action='store_true',
                   help='Recognize NUL-delimited header blocks under log headings')
    p.add_argument('--reverse', action='store_true',
                   help='Reverse record order (e.g. oldest-last cherry output)')
    p.add_argument('--margin-width', type=int, default=None,
                   help='Total margin width')
    p.add_argument('--spelled-out', action='store_true',
                   help='Spell out age units ("3 days" instead of "3d")')
    p.add_argument('--symbols', choices=['unicode', 'ascii', 'auto'], default=None,
                   help='Glyph set for graph and ellipsis')
    p.add_argument('--format', '-f', dest='output_format', choices=['text', 'json'], default=None,
                   help='Output format (default: from config)')
    return p


def handle(cli, args):
    """Handle wash command dispatch."""
    return cli._wash_cmd.wash(
        args.source,
        args.style,
        limit=args.limit,
        abbrev=args.abbrev,
        color=args.color,
        refs_after=args.refs_after,
        no_align=args.no_align,
        no_margin=args.no_margin,
        extended_header=args.extended_header,
        reverse=args.reverse,
        margin_width=args.margin_width,
        spelled_out=args.spelled_out,
        symbols=args.symbols,
        output_format=args.output_format,
    )
