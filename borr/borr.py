"""
borr Main Module.

This module serves as the command line entry point for borr, a parser for
human-authored translation files with sections, multi-line fields, inline
comments and `${name}` variables.

Features:
- Prints the metadata and expanded contents of a language file
- Reads single translations, optionally with custom variable expanders
- Checks files strictly for lines the grammar ignores
- Handles graceful termination on user interruption

Examples:
    Show a language file:
        $ borr show en_GB.borr

    Read one translation:
        $ borr get en_GB.borr normal_tests copyright_info
        $ borr get en_GB.borr greetings welcome -D site=example.com

    Check a file:
        $ borr check en_GB.borr
"""

import signal
import sys
from types import FrameType
from typing import Optional

import click

from borr.commands.app import cli
from borr.config.settings import __version__, console

cli = click.version_option(__version__, "-V", "--version", prog_name="borr")(cli)


def signal_handle(sig: int, frame: Optional[FrameType]) -> None:
    """Signal handler for graceful interruption.

    Args:
        sig: Signal number
        frame: Current stack frame
    """
    console.print("\n[bold cyan]Interrupt received. Exiting.[/bold cyan]")
    sys.exit(130)


def main() -> None:
    """Main entry point for the borr command line."""
    signal.signal(signal.SIGINT, signal_handle)
    cli(prog_name="borr")


if __name__ == "__main__":
    main()
