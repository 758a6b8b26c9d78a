"""
Language File Commands

This module provides CLI commands for inspecting borr language files.

Commands:
- show <file>: Print metadata and every section with expanded values.
- sections <file>: List sections and their field counts.
- get <file> <section> <field>: Print a single translation.
- check <file>: Parse strictly and list the lines the grammar ignored.
"""

from pathlib import Path
from rich.markup import escape
import click
from borr.commands.base import RichCommand, rich_help
from borr.config.settings import console
from borr.lib.builder import document_fromFile
from borr.lib.document import TranslationDocument
from borr.lib.errors import BorrError, CyclicExpansion
from borr.lib.log import LOG
from borr.lib.registry import ExpanderRegistry


def _document_load(
    path: Path, registry: ExpanderRegistry | None = None, strict: bool | None = None
) -> TranslationDocument:
    """
    Parse a language file, turning failures into a printed error and exit code 1.

    :param path: The language file.
    :param registry: Optional expander registry for the document.
    :param strict: Whether to collect parse warnings.
    :return: The parsed document.
    :raises click.exceptions.Exit: If the file cannot be read or parsed.
    """
    try:
        return document_fromFile(path, registry=registry, strict=strict)
    except (BorrError, OSError) as e:
        LOG(f"Failed to parse language file {path}: {e}")
        console.print(
            f"[bold red]Failed to parse language file:[/bold red] {escape(str(e))}"
        )
        raise click.exceptions.Exit(1)


def _defines_parse(defines: tuple[str, ...]) -> ExpanderRegistry:
    """
    Build a registry holding one constant expander per NAME=VALUE definition.

    :param defines: Definitions given on the command line.
    :return: A fresh registry.
    :raises click.BadParameter: If a definition has no '='.
    """
    registry: ExpanderRegistry = ExpanderRegistry()
    for define in defines:
        name, sep, value = define.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"'{define}' is not of the form NAME=VALUE", param_hint="-D"
            )
        registry.expander_add(name, lambda _name, value=value: value)
    return registry


@click.command(
    cls=RichCommand,
    short_help="Show a language file",
    help=rich_help(
        command="show",
        description="Show the metadata and all expanded translations of a language file.",
        usage="borr show <file>",
        args={"<file>": "The language file to show."},
    ),
)
@click.argument("file", type=click.Path(path_type=Path))
def show(file: Path) -> None:
    """
    Print id, description, version and every section of a language file.

    :param file: The language file.
    """
    document: TranslationDocument = _document_load(file)

    console.print(f"[bold cyan]Selected language:[/bold cyan] {escape(document.langId)}")
    console.print(
        f"[bold cyan]Language description:[/bold cyan] {escape(document.langDescription)}"
    )
    console.print(
        f"[bold cyan]Language version:[/bold cyan] {document.langVersion or 'unknown'}\n"
    )

    for section, fields in document.sections.items():
        console.print(f"[bold yellow]\\[{section}][/bold yellow]")
        for field in fields:
            try:
                value: str | None = document.field_get(section, field)
                console.print(f"    [green]{field}[/green]: {escape(value or '')}", emoji=False)
            except CyclicExpansion as e:
                LOG(f"Error expanding {section}:{field}: {e}")
                console.print(f"    [green]{field}[/green]: [bold red]{escape(str(e))}[/bold red]")


@click.command(
    cls=RichCommand,
    short_help="List sections",
    help=rich_help(
        command="sections",
        description="List the sections of a language file.",
        usage="borr sections <file>",
        args={"<file>": "The language file to inspect."},
    ),
)
@click.argument("file", type=click.Path(path_type=Path))
def sections(file: Path) -> None:
    """
    List section names and how many fields each one holds.

    :param file: The language file.
    """
    document: TranslationDocument = _document_load(file)

    if not document.sections:
        console.print("[bold yellow]No sections found.[/bold yellow]")
        return

    for section, fields in document.sections.items():
        console.print(f"[cyan]{section}[/cyan]: {len(fields)} field(s)")


@click.command(
    cls=RichCommand,
    short_help="Get a translation",
    help=rich_help(
        command="get",
        description="Print a single translation, with variables expanded.",
        usage="borr get <file> <section> <field> [--raw] [-D NAME=VALUE ...]",
        args={
            "<file>": "The language file to read.",
            "<section>": "The section holding the translation.",
            "<field>": "The name of the translation.",
            "--raw": "Do not expand variables.",
            "-D NAME=VALUE": "Expand ${NAME} to VALUE (repeatable).",
        },
    ),
)
@click.argument("file", type=click.Path(path_type=Path))
@click.argument("section", type=str)
@click.argument("field", type=str)
@click.option("--raw", is_flag=True, default=False, help="Do not expand variables.")
@click.option(
    "-D",
    "--define",
    "defines",
    multiple=True,
    metavar="NAME=VALUE",
    help="Custom variable expansion.",
)
def get(file: Path, section: str, field: str, raw: bool, defines: tuple[str, ...]) -> None:
    """
    Print one translation; exit with code 1 if it does not exist.

    :param file: The language file.
    :param section: The section name.
    :param field: The field name.
    :param raw: Skip variable expansion.
    :param defines: NAME=VALUE custom expanders.
    """
    registry: ExpanderRegistry = _defines_parse(defines)
    document: TranslationDocument = _document_load(file, registry=registry)

    try:
        value: str | None = document.field_get(section, field, expand=not raw)
    except CyclicExpansion as e:
        LOG(f"Error expanding {section}:{field}: {e}")
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise click.exceptions.Exit(1)

    if value is None:
        console.print(
            f"[bold red]Translation '{escape(section)}:{escape(field)}' not found.[/bold red]"
        )
        raise click.exceptions.Exit(1)

    console.print(escape(value), highlight=False, emoji=False)


@click.command(
    cls=RichCommand,
    short_help="Check a language file",
    help=rich_help(
        command="check",
        description="Parse a language file strictly and list ignored lines.",
        usage="borr check <file>",
        args={"<file>": "The language file to check."},
    ),
)
@click.argument("file", type=click.Path(path_type=Path))
def check(file: Path) -> None:
    """
    Report lines the permissive grammar ignores; exit with code 1 if any.

    :param file: The language file.
    """
    document: TranslationDocument = _document_load(file, strict=True)

    if not document.warnings:
        console.print(f"[bold green]{escape(str(file))}: no problems found.[/bold green]")
        return

    for warning in document.warnings:
        console.print(
            f"[bold yellow]{escape(str(file))}:[/bold yellow] {escape(str(warning))}",
            emoji=False,
        )
    raise click.exceptions.Exit(1)
