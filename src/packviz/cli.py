"""CLI interface for packviz using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from packviz import __description__, __version__
from packviz.config import LogLevel, find_config_file, load_config
from packviz.errors import MissingNodeError
from packviz.graph import GraphBuilder, default_exporter
from packviz.parser import load_packages

app = typer.Typer(
    name="packviz",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

# Status output goes to stderr so rendered graphs can be piped from stdout
console = Console(stderr=True)


def _setup_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.to_logging(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"packviz version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """packviz - Package dependency graphs for modularized codebases."""


@app.command()
def graph(
    manifest: Annotated[
        Path,
        typer.Argument(help="Package manifest (JSON), relative paths resolve against --root")
    ],
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Application root directory (default: current)")
    ] = Path("."),
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output file path (default: stdout)")
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: dot, mermaid (default: dot)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .packviz.json)")
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", "-l", help="Log level: error, warn, info, debug")
    ] = None,
) -> None:
    """Generate the package dependency graph."""
    root_path = root.resolve()

    try:
        packviz_config = load_config(config or find_config_file(root_path))
    except ValueError as e:
        _fail(str(e))

    try:
        level = LogLevel(log_level.lower()) if log_level else LogLevel(packviz_config.logging.level)
    except ValueError:
        _fail(f"Invalid log level '{log_level}'. Must be one of: {', '.join(lvl.value for lvl in LogLevel)}")
    _setup_logging(level)

    exporter = default_exporter()
    output_format = format or packviz_config.output.format
    if output_format not in exporter.renderers:
        _fail(f"Invalid format '{output_format}'. Must be one of: {', '.join(exporter.renderers)}")

    try:
        packages = load_packages(manifest, root_path)
        spec = GraphBuilder(packages, options=packviz_config.style_options, root_path=root_path).build()
        rendered = exporter.render(spec, output_format)
    except (MissingNodeError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    output_path = out or packviz_config.output.path
    if output_path is None:
        typer.echo(rendered)
        return

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(rendered)

    console.print(f"[green]Graph generated:[/green] {output_file}")
    console.print(f"[dim]{len(spec.nodes)} nodes, {len(spec.clusters)} clusters, {len(spec.edges)} edges[/dim]")


if __name__ == "__main__":
    app()
