"""jarenum CLI - list the enum types packaged in a Java archive."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from jarenum import __version__
from jarenum.archive.traversal import scan_archive
from jarenum.classfile.enums import EnumExtractor
from jarenum.config import (
    get_class_name_regex,
    get_filter_script,
    get_layout,
    get_marker_descriptor,
    load_config,
)
from jarenum.errors import JarEnumError
from jarenum.filters.builtin import build_filter
from jarenum.output.json_writer import load_report, report_to_json, write_report
from jarenum.output.tree import build_report_tree, build_summary_tree, display_tree

app = typer.Typer(
    name="jarenum",
    help="Report the enum types contained in a Java archive",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
# stdout is reserved for the JSON report
console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"jarenum version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Report the enum types contained in a Java archive."""


@app.command()
def scan(
    jarfile: Path = typer.Argument(
        ...,
        help="Jar file to scan",
    ),
    class_name_regex: Optional[str] = typer.Option(
        None,
        "--class-name-regex",
        "-r",
        help="Only parse classes whose internal name matches this regex",
    ),
    script: Optional[Path] = typer.Option(
        None,
        "--script",
        "-s",
        help="Python file defining accepts(class_name) -> bool",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a jarenum TOML config file",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the JSON report here instead of stdout",
    ),
    tree: bool = typer.Option(
        False,
        "--tree",
        "-t",
        help="Show the enums as a tree",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every archive and enum visited",
    ),
) -> None:
    """Scan a jar (and the jars nested in it) for enum types."""
    _configure_logging(verbose)

    try:
        config_data = load_config(config) if config else {}

        # Command-line filter options replace the configured filter entirely
        if class_name_regex is not None or script is not None:
            pattern, script_path = class_name_regex, script
        else:
            pattern = get_class_name_regex(config_data)
            script_path = get_filter_script(config_data, config.parent if config else None)

        class_filter = build_filter(pattern, script_path)
        report = scan_archive(
            jarfile,
            class_filter,
            layout=get_layout(config_data),
            extractor=EnumExtractor(get_marker_descriptor(config_data)),
        )
    except JarEnumError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    data = report.to_dict()

    if output is None:
        typer.echo(report_to_json(report))
    else:
        write_report(report, output)
        console.print(Panel.fit("[bold blue]jarenum - Enum Scan[/]"))
        display_tree(build_summary_tree(data))
        console.print(f"[green]Report saved to:[/] {escape(str(output))}")

    if tree:
        display_tree(build_report_tree(data["enums"], title=jarfile.name))


@app.command()
def show(
    report_path: Path = typer.Argument(
        ...,
        help="Path to a JSON report written by 'jarenum scan --output'",
    ),
) -> None:
    """Display a previously written report."""
    if not report_path.exists():
        console.print(f"[red]Report file not found:[/] {escape(str(report_path))}")
        raise typer.Exit(1)

    try:
        data = load_report(report_path)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/] {escape(str(report_path))} is not a JSON report: {escape(str(e))}")
        raise typer.Exit(1)

    display_tree(build_summary_tree(data))
    display_tree(build_report_tree(data.get("enums", [])))
