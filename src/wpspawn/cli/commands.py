"""Command implementations for CLI."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from wpspawn.compiler.assembler import PodTemplateAssembler
from wpspawn.compiler.init_steps import init_step_stages
from wpspawn.compiler.sources import resolve_code_source, resolve_media_backend, resolve_media_source
from wpspawn.loader import SiteLoader, dump_manifest


console = Console()
stderr_console = Console(stderr=True)


def compile_site(
    loader: SiteLoader,
    site_file: Path,
    shape: str = "web",
    command: Optional[List[str]] = None,
    output: Optional[Path] = None,
):
    """Compile a site file into a pod template manifest."""
    config = loader.load_config()
    site = loader.load_site(site_file)

    template = PodTemplateAssembler(config).assemble(site, shape, command or ())
    manifest = dump_manifest(template)

    if output:
        output.write_text(manifest)
        stderr_console.print(f"[green]✓[/green] Wrote {shape} pod template to {output}")
    else:
        typer.echo(manifest, nl=False)


def show_steps(loader: SiteLoader, site_file: Path):
    """Show the init steps generated for a site."""
    config = loader.load_config()
    site = loader.load_site(site_file)

    table = Table(title=f"Init steps for {site.namespace}/{site.name}")
    table.add_column("#", justify="right")
    table.add_column("Stage", style="cyan")
    table.add_column("Container", style="magenta")
    table.add_column("Image", style="dim", max_width=60)

    position = 1
    for stage in init_step_stages(site, config).stages:
        for container in stage.items:
            table.add_row(str(position), stage.name, container.name, container.image or "")
            position += 1

    if position == 1:
        console.print(f"[yellow]No init steps for {site.namespace}/{site.name}[/yellow]")
        return

    console.print(table)


def validate_site(loader: SiteLoader, site_file: Path):
    """Validate a site file and summarize its resolved sources."""
    loader.load_config()
    site = loader.load_site(site_file)

    code = resolve_code_source(site)
    media = resolve_media_source(site)
    backend = resolve_media_backend(site)

    console.print(f"[green]✓[/green] Site {site.namespace}/{site.name} is valid")
    console.print(f"  Domain: {site.main_domain}")
    console.print(f"  Routes: {', '.join(site.routes())}")
    console.print(f"  Code source: {code.kind if code else 'none'}")
    console.print(f"  Media source: {media.kind if media else 'none'}")
    console.print(f"  Media backend: {backend.kind if backend else 'none'}")
