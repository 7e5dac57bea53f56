"""docindex CLI — run generated documentation data files and inspect the result."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from docindex import __version__
from docindex.config import LOG_LEVEL_ENV, RegistrarTiming
from docindex.exceptions import ConfigError

console = Console()
err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default="WARNING",
    envvar=LOG_LEVEL_ENV,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity",
)
def main(log_level: str):
    """docindex — implementor registry and sidebar index for documentation pages.

    Runs the data files a documentation generator emits (implementor lists
    and sidebar indexes) against an in-process page, the way a browser
    would load them, and shows what the page ends up holding.
    """
    _configure_logging(log_level)


def _report_failures(view) -> None:
    """Print files that could not be loaded and exit non-zero if there were any."""
    if not view.failed:
        return
    for result in view.failed:
        err_console.print(f"[red]Failed to load:[/] {escape(result.error)}")
    sys.exit(1)


# ── Implementors ─────────────────────────────────────────────────────


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--registrar-first", is_flag=True, help="Install the registrar before running the files")
@click.option("--json", "as_json", is_flag=True, help="Print the registry as JSON")
def implementors(files: tuple, registrar_first: bool, as_json: bool):
    """Run implementor data files and list the registered implementors."""
    from docindex.host import assemble_page

    timing = RegistrarTiming.FIRST if registrar_first else RegistrarTiming.LAST
    view = assemble_page(list(files), timing=timing)

    if as_json:
        from docindex.export import registry_to_model

        click.echo(registry_to_model(view.registrar).model_dump_json(indent=2))
    else:
        _print_implementors(view.registrar)
        if view.parked:
            console.print(f"[dim]{view.parked} file(s) parked until the registrar was installed[/]")

    _report_failures(view)


def _print_implementors(registrar) -> None:
    if not registrar.total():
        console.print("[yellow]No implementors registered.[/]")
        return

    title = f"Implementors of {registrar.capability}" if registrar.capability else "Implementors"
    table = Table(title=f"{title} ({registrar.total()} in {len(registrar.crates())} crates)")
    table.add_column("Crate", style="cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Type")
    table.add_column("Implementation")

    for crate, records in registrar.state.items():
        for record in records:
            table.add_row(
                crate,
                record.item_kind.value,
                escape(record.path) or "-",
                escape(record.label),
            )

    console.print(table)


# ── Sidebar ──────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the index as JSON")
def sidebar(file: str, as_json: bool):
    """Run a sidebar data file and show the index it builds."""
    from docindex.host import assemble_page

    view = assemble_page([file])
    _report_failures(view)

    index = view.sidebar.index
    if index is None:
        console.print("[yellow]No sidebar index was built.[/]")
        sys.exit(1)

    if as_json:
        from docindex.export import sidebar_to_model

        click.echo(sidebar_to_model(index).model_dump_json(indent=2))
        return

    _print_sidebar(index)


def _print_sidebar(index) -> None:
    table = Table(title=f"Sidebar: {index.crate} ({index.item_count} items)")
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Description", style="dim")

    for kind, items in index.items.items():
        for item in items:
            table.add_row(kind, escape(item.name), escape(item.description[:60]))

    console.print(table)


# ── Page ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the whole page as JSON")
def page(manifest: str, as_json: bool):
    """Assemble a page from a YAML manifest."""
    from docindex.config import load_config
    from docindex.host import assemble_from_config

    try:
        config = load_config(manifest)
        _configure_logging(config.log_level)
        view = assemble_from_config(config)
    except ConfigError as e:
        err_console.print(f"[red]Failed to assemble page:[/] {escape(str(e))}")
        sys.exit(1)

    if as_json:
        from docindex.export import page_to_model

        click.echo(page_to_model(view).model_dump_json(indent=2))
        _report_failures(view)
        return

    console.print(f"\n[bold blue]docindex[/] — Page: {config.title}\n")
    if view.sidebar.index is not None:
        _print_sidebar(view.sidebar.index)
    _print_implementors(view.registrar)
    _report_failures(view)


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("files", nargs=-1, required=True)
def validate(files: tuple):
    """Check generated data files for malformed payloads."""
    from docindex.validator import validate_data_file

    failed = False
    for path in files:
        issues = validate_data_file(path)
        if issues:
            failed = True
            console.print(f"  [red]x[/] {path}")
            for issue in issues:
                console.print(f"      {escape(issue)}")
        else:
            console.print(f"  [green]v[/] {path}")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
