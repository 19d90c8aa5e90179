"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Any, Callable, List, Optional

import typer
from rich.console import Console

from wpspawn.cli.commands import compile_site, show_steps, validate_site
from wpspawn.loader import SiteLoader, SiteLoadError
from wpspawn.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="wpspawn",
    help="wpspawn - Compile WordPress site definitions into pod templates",
    add_completion=False,
)

# Errors go to stderr, manifests to stdout
console = Console(stderr=True)


def _run_cli_command(handler: Callable[..., Any], config: Optional[Path], log_level: Optional[str], **kwargs: Any):
    """Helper to run a CLI command with a site loader and error handling."""
    try:
        loader = SiteLoader(config_path=config)
        setup_logging(log_level or loader.load_config().log_level)
        handler(loader, **kwargs)
    except (SiteLoadError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command("compile")
def compile_command(
    site_file: Path = typer.Argument(..., help="Site definition file"),
    command: Optional[List[str]] = typer.Argument(
        None, help="Command to run (job shape only)"
    ),
    shape: str = typer.Option("web", "--shape", "-t", help="Workload shape (web, job)"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the manifest to a file"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Compiler configuration file"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level"),
):
    """Compile a site into a pod template."""
    _run_cli_command(
        compile_site,
        config=config,
        log_level=log_level,
        site_file=site_file,
        shape=shape,
        command=command,
        output=output,
    )


@app.command("steps")
def steps_command(
    site_file: Path = typer.Argument(..., help="Site definition file"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Compiler configuration file"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level"),
):
    """List the init steps generated for a site."""
    _run_cli_command(show_steps, config=config, log_level=log_level, site_file=site_file)


@app.command("validate")
def validate_command(
    site_file: Path = typer.Argument(..., help="Site definition file"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Compiler configuration file"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level"),
):
    """Validate a site definition."""
    _run_cli_command(validate_site, config=config, log_level=log_level, site_file=site_file)


def main():
    """Main entry point for CLI."""
    app()
