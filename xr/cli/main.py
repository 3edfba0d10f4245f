"""Main CLI entry point for xr.

Implements git-like command structure:
- xr search TITLE
- xr extras HREF
- xr match DIRECTORY
- xr config (set|list)
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from xr.config import Config
from xr.parsers.sanitize import format_title_for_search
from xr.utils.errors import ConfigError, MatchCancelled, XrError
from xr.utils.logging import configure_logging

console = Console()

EXIT_CANCELLED = 130


def get_config() -> Optional[Config]:
    """
    Get configuration instance with error handling.

    Returns:
        Config | None: Config instance or None if error
    """
    try:
        return Config()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        return None


def get_workflow(ctx, config: Config):
    """Build the extras workflow from the global options."""
    from xr.workflows import ExtrasRenameWorkflow

    return ExtrasRenameWorkflow(
        config=config,
        console=console,
        verbose=ctx.obj.get("verbose", False),
        dry_run=ctx.obj.get("dry_run", False),
    )


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be renamed without making changes",
)
@click.pass_context
def cli(ctx, verbose: bool, dry_run: bool):
    """xr - match ripped DVD extras to their titles by duration and rename them."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["dry_run"] = dry_run

    try:
        level = Config().get("logging", "level")
    except ConfigError:
        level = None
    configure_logging(verbose=verbose, level=level)


# ============================================================================
# Catalog Commands
# ============================================================================


@cli.command()
@click.argument("title")
@click.option("--year", "-y", default="", help="Release year filter")
@click.option("--director", "-d", default="", help="Director filter")
@click.pass_context
def search(ctx, title: str, year: str, director: str):
    """
    Search the catalog for releases.

    TITLE: Film or show title
    """
    config = get_config()
    if config is None:
        sys.exit(1)

    from xr.workflows.extras import build_client, render_search_results

    try:
        client = build_client(config)
        results = client.search(format_title_for_search(title), director=director, year=year)

        if not results:
            suffix = f" ({year})" if year else ""
            console.print(f"[yellow]No releases found for '{title}'{suffix}.[/yellow]")
            sys.exit(0)

        console.print(render_search_results(results))
        console.print("Use 'xr extras <reference>' to list a release's extras.")

    except XrError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@cli.command()
@click.argument("href")
def extras(href: str):
    """
    List the extras of a release.

    HREF: Release reference from 'xr search' (e.g. film.php?fid=1234)
    """
    config = get_config()
    if config is None:
        sys.exit(1)

    from xr.workflows.extras import build_client, render_extras

    try:
        entries = build_client(config).get_extras(href)

        if not entries:
            console.print("[yellow]No extras found for this release.[/yellow]")
            sys.exit(0)

        console.print(render_extras(entries))

    except XrError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


# ============================================================================
# Match Command
# ============================================================================


@cli.command()
@click.argument(
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    required=False,
    default=None,
)
@click.option("--dvd", "href", help="Release reference (skips the interactive search)")
@click.option("--title", "-t", help="Release title to search for")
@click.option("--year", "-y", default="", help="Release year filter for the search")
@click.option("--director", "-d", default="", help="Director filter for the search")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Skip confirmation prompts and take the first candidate on collisions",
)
@click.pass_context
def match(
    ctx,
    directory: Optional[Path],
    href: Optional[str],
    title: Optional[str],
    year: str,
    director: str,
    force: bool,
):
    """
    Match video files to a release's extras and rename them.

    DIRECTORY: Folder with the ripped extras (defaults to current directory)
    """
    source_path = directory or Path.cwd()

    if not href and not title:
        console.print("[red]Error:[/red] Provide --dvd <reference> or --title <title>")
        sys.exit(1)

    config = get_config()
    if config is None:
        sys.exit(1)

    try:
        workflow = get_workflow(ctx, config)
        success = workflow.run(
            directory=source_path,
            href=href,
            title=title,
            year=year,
            director=director,
            force=force,
        )

        sys.exit(0 if success else 1)

    except MatchCancelled:
        console.print("[yellow]Matching cancelled.[/yellow]")
        sys.exit(EXIT_CANCELLED)
    except XrError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


# ============================================================================
# Config Commands
# ============================================================================


@cli.group()
def config():
    """Manage configuration."""
    pass


@config.command()
@click.argument("key")
@click.argument("value")
@click.option(
    "--target",
    type=click.Choice(["local", "user"]),
    help="Target config location (local or user)",
)
@click.pass_context
def set(ctx, key: str, value: str, target: Optional[str]):
    """
    Set a configuration value.

    KEY: Configuration key in format 'section.key'
    VALUE: Value to set
    """
    cfg = get_config()
    if cfg is None:
        sys.exit(1)

    try:
        if "." not in key:
            console.print(
                "[red]Error:[/red] Key must be in format 'section.key' "
                "(e.g., 'matching.tolerance')"
            )
            sys.exit(1)

        section, key_name = key.rsplit(".", 1)

        if ctx.obj.get("dry_run"):
            console.print(f"[yellow]Dry run:[/yellow] Would set {section}.{key_name} = {value}")
        else:
            cfg.set(section, key_name, value)
            cfg.save(target=target)
            console.print(f"[green]✓[/green] Set {section}.{key_name} = {value}")

    except XrError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@config.command("list")
@click.option(
    "--section",
    "-s",
    help="Show only specific section",
)
def list_config(section: Optional[str]):
    """Display configuration values."""
    cfg = get_config()
    if cfg is None:
        sys.exit(1)

    sections = [section] if section else cfg.get_sections()

    for sec in sections:
        items = cfg.get_all(sec)

        if not items:
            console.print(f"[yellow]Section '{sec}' is empty or does not exist.[/yellow]")
            continue

        table = Table(title=f"Section: {sec}")
        table.add_column("Key", style="cyan")
        table.add_column("Value")

        for key, value in items.items():
            table.add_row(key, value)

        console.print(table)

    if cfg.config_path is None:
        console.print("[dim]No configuration file found; showing defaults.[/dim]")
    else:
        console.print(f"[dim]Loaded from {cfg.config_path}[/dim]")


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
