"""
CLI — Command interface

    logwash wash [FILE] --style log [--limit N] [--format json]
    logwash config [--set KEY=VALUE] [--user]

Washing errors (malformed input, invalid margin) are reported on stderr
with a non-zero exit status.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from .core.errors import LogWashError
from .presentation.symbols import get_symbols
from .commands.wash_cmd import WashCommand
from .commands.config_cmd import ConfigCommand
from . import __version__

logger = logging.getLogger(__name__)


class LogWashCLI:
    """Command-line interface for the history washer."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()

        error = self.config.validate()
        if error:
            logger.warning("Configuration problem: %s", error)

        # Initialize symbols based on config
        self.symbols = get_symbols(self.config.display.symbols)

        self._wash_cmd = WashCommand(self)
        self._config_cmd = ConfigCommand(self)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the logwash CLI.

    Uses command registry pattern for modular command handling.
    Parser definitions and dispatch logic are in individual command modules.
    """
    parser = argparse.ArgumentParser(
        prog="logwash",
        description="logwash -- Wash raw history output into records",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("LOGWASH_PROJECT_PATH", "."),
        help='Project directory for .logwash/config.yaml (default: LOGWASH_PROJECT_PATH or current)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'logwash {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    from .commands import register_all, dispatch
    register_all(subparsers)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        cli = LogWashCLI(Path(args.project))
        return dispatch(args.command, cli, args) or 0
    except (LogWashError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
