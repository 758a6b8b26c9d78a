"""
Defines the main Click command group for borr.

This module provides:
- The root `cli` command group for the application.
- Integration with Rich-enhanced Click classes (`RichGroup`).
- Registration of subcommands from other modules.

Usage:
Import `cli` to initialize and run the command-line interface.
"""

import click
from borr.commands.base import RichGroup
from borr.commands.document import show, sections, get, check


@click.group(
    cls=RichGroup,
    help="""
    borr Language Files

    Inspect translation files with subcommands.
    """,
)
def cli() -> None:
    """
    The root Click command group for borr.
    """
    pass


# Explicitly annotate `cli` as `click.Group` for static type checking
cli: click.Group = cli

# Register subcommands
cli.add_command(show)
cli.add_command(sections)
cli.add_command(get)
cli.add_command(check)
