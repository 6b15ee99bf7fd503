# sitewright/cli/main.py
"""
Command-line interface for sitewright.
"""
import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sitewright import __version__
from sitewright.config import config_manager
from sitewright.generation.archive import package_output_directory
from sitewright.generation.builder import ProjectBuilder
from sitewright.generation.errors import GenerationError
from sitewright.generation.facade import GenerationFacade
from sitewright.generation.models import BuildOutcome, OutputKind
from sitewright.generation.writer import output_directory_for
from sitewright.utils.logging import setup_logging, get_logger

app = typer.Typer(help="sitewright: turn model output into runnable web projects")
logger = get_logger(__name__)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    """Display version information and exit."""
    if value:
        console.print(f"sitewright version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug mode"),
    log_file: bool = typer.Option(True, "--log-file/--no-log-file", help="Also log to files"),
    version: bool = typer.Option(
        False, "--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """sitewright: turn model output into runnable web projects"""
    debug = debug or config_manager.config.debug
    config_manager.config.debug = debug
    setup_logging(debug=debug, log_to_file=log_file)


def _parse_kind(kind: str) -> OutputKind:
    try:
        return OutputKind.parse(kind)
    except GenerationError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _print_build(outcome: BuildOutcome, show_log: bool = False) -> None:
    if not outcome.attempted:
        console.print(f"[yellow]Build skipped:[/yellow] {outcome.log}")
        return

    table = Table(title="Build Steps")
    table.add_column("Step", style="cyan")
    table.add_column("Command")
    table.add_column("Result")
    table.add_column("Time", justify="right")
    for step in outcome.steps:
        if step.timed_out:
            result = "[red]timed out[/red]"
        elif step.succeeded:
            result = "[green]ok[/green]"
        else:
            result = f"[red]exit {step.returncode}[/red]"
        table.add_row(step.name, " ".join(step.command), result, f"{step.duration:.1f}s")
    console.print(table)

    if outcome.succeeded:
        console.print(f"[green]Build succeeded[/green] ({outcome.artifact_dir or 'no artifacts found'})")
    else:
        console.print("[yellow]Build failed; the generated source is still available.[/yellow]")
    if show_log and outcome.log:
        console.print(Panel(outcome.log, title="Build Log", expand=False))


@app.command()
def generate(
    kind: str = typer.Argument(..., help="Output kind: html, multi_file or vue_project"),
    app_id: str = typer.Argument(..., help="Application identifier"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="File with the model response (default: stdin)"),
    root: Optional[Path] = typer.Option(None, "--root", help="Output root directory"),
    show_log: bool = typer.Option(False, "--show-log", help="Print the build log"),
):
    """Materialize a complete model response."""
    output_kind = _parse_kind(kind)
    text = input_file.read_text(encoding="utf-8") if input_file else sys.stdin.read()

    facade = GenerationFacade(root=root)
    try:
        result = asyncio.run(facade.generate_and_save(text, output_kind, _coerce_app_id(app_id)))
    except (GenerationError, OSError) as e:
        err_console.print(Panel(f"[bold red]Generation failed:[/bold red] {e}", title="Error", expand=False))
        raise typer.Exit(1)

    console.print(Panel(
        f"[bold green]Saved {output_kind.description}[/bold green]\n{result.absolute_path()}",
        title="sitewright",
        expand=False,
    ))
    for name in result.written_files:
        console.print(f"  [cyan]{name}[/cyan]")
    if result.build is not None:
        _print_build(result.build, show_log)


@app.command()
def stream(
    kind: str = typer.Argument(..., help="Output kind: html, multi_file or vue_project"),
    app_id: str = typer.Argument(..., help="Application identifier"),
    root: Optional[Path] = typer.Option(None, "--root", help="Output root directory"),
):
    """Echo stdin line by line while accumulating it, then save on end of input."""
    output_kind = _parse_kind(kind)
    facade = GenerationFacade(root=root)

    async def _run():
        session_stream = facade.generate_and_save_stream(iter(sys.stdin.readline, ""), output_kind, _coerce_app_id(app_id))
        async for chunk in session_stream:
            sys.stdout.write(chunk)
            sys.stdout.flush()

    try:
        asyncio.run(_run())
    except GenerationError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    directory = output_directory_for(output_kind, _coerce_app_id(app_id), root)
    if directory.exists():
        err_console.print(f"[green]Output directory:[/green] {directory.absolute_path()}")
    else:
        err_console.print("[yellow]No output directory was produced; see the log for details.[/yellow]")


@app.command()
def build(
    path: Path = typer.Argument(..., help="Project directory"),
    show_log: bool = typer.Option(False, "--show-log", help="Print the build log"),
):
    """Install dependencies and build a framework project."""
    with console.status("[bold green]Building project...[/bold green]"):
        outcome = asyncio.run(ProjectBuilder().build(path))
    _print_build(outcome, show_log)
    if outcome.attempted and not outcome.succeeded:
        raise typer.Exit(1)


@app.command()
def package(
    kind: str = typer.Argument(..., help="Output kind"),
    app_id: str = typer.Argument(..., help="Application identifier"),
    root: Optional[Path] = typer.Option(None, "--root", help="Output root directory"),
    dest: Optional[Path] = typer.Option(None, "--dest", help="Directory for the zip archive"),
):
    """Zip a generated project for download."""
    directory = output_directory_for(_parse_kind(kind), _coerce_app_id(app_id), root)
    try:
        archive_path = package_output_directory(directory, dest)
    except FileNotFoundError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Archive written:[/green] {archive_path}")


@app.command()
def clean(path: Path = typer.Argument(..., help="Project directory")):
    """Remove installed dependencies and build output from a project."""
    removed = ProjectBuilder().clean_build_cache(path)
    if not removed:
        console.print("[yellow]Nothing to clean[/yellow]")
    for item in removed:
        console.print(f"[green]Removed[/green] {item}")


@app.command()
def doctor():
    """Check that node and npm are available for framework builds."""
    report = asyncio.run(ProjectBuilder().check_build_environment())
    table = Table(title="Build Environment")
    table.add_column("Tool", style="cyan")
    table.add_column("Version")
    for tool in ("node", "npm"):
        table.add_row(tool, report.get(tool) or "[red]not found[/red]")
    console.print(table)
    if not report["available"]:
        raise typer.Exit(1)


@app.command("config")
def show_config(
    save: bool = typer.Option(False, "--save", help="Write the effective configuration to the config file"),
):
    """Show the effective configuration."""
    config = config_manager.config
    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("output.root", str(config.output.root))
    table.add_row("output.download_dir", str(config.output.download_dir))
    table.add_row("build.install_command", " ".join(config.build.install_command))
    table.add_row("build.build_command", " ".join(config.build.build_command))
    table.add_row("build.install_timeout", f"{config.build.install_timeout:g}s")
    table.add_row("build.build_timeout", f"{config.build.build_timeout:g}s")
    table.add_row("debug", str(config.debug))
    console.print(table)

    if save:
        path = config_manager.save_config()
        console.print(f"[green]Configuration saved to {path}[/green]")


def _coerce_app_id(app_id: str):
    return int(app_id) if app_id.isdigit() else app_id
