"""Extras renaming workflow with interactive steps."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from prompt_toolkit import prompt
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from xr.catalog import CatalogCache, CatalogEntry, CatalogError, CatalogSearchResult, DVDCompareClient
from xr.config import Config
from xr.media.cache import DurationCache
from xr.media.matcher import CancelToken, MatchEngine, MatchRecord
from xr.media.renamer import build_target_path, rename_video_file, strip_extension
from xr.parsers.sanitize import format_title_for_search, sanitize_filename
from xr.utils.errors import ValidationError, XrError

logger = logging.getLogger(__name__)


@dataclass
class RenameAction:
    """A confirmed rename of one matched file."""

    record: MatchRecord
    new_title: str  # without extension

    @property
    def source(self) -> Path:
        return Path(self.record.full_path)

    @property
    def destination(self) -> Path:
        return build_target_path(self.record.full_path, self.new_title)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "source": str(self.source),
            "destination": str(self.destination),
            "collision": self.record.has_collision,
        }


def build_client(config: Config) -> DVDCompareClient:
    """Create a catalog client from configuration."""
    cache = CatalogCache(
        ttl=timedelta(days=config.get_int("catalog", "cache_ttl_days", fallback=7)),
        enabled=config.get_bool("catalog", "cache_enabled", fallback=True),
    )
    return DVDCompareClient(
        cache=cache,
        timeout=config.get_int("catalog", "timeout", fallback=DVDCompareClient.DEFAULT_TIMEOUT),
    )


class ExtrasRenameWorkflow:
    """Interactive workflow for matching a folder of extras and renaming them."""

    def __init__(
        self,
        config: Config,
        console: Optional[Console] = None,
        verbose: bool = False,
        dry_run: bool = False,
        client: Optional[DVDCompareClient] = None,
        engine: Optional[MatchEngine] = None,
    ):
        """Initialize extras rename workflow.

        Args:
            config: Configuration instance
            console: Rich console for output
            verbose: Enable verbose output
            dry_run: Preview renames without executing
            client: Catalog client (built from config if omitted)
            engine: Match engine (built from config if omitted)
        """
        self.config = config
        self.console = console or Console()
        self.verbose = verbose
        self.dry_run = dry_run

        self.client = client if client is not None else build_client(config)
        self.engine = (
            engine
            if engine is not None
            else MatchEngine(cache=DurationCache(), tolerance=config.tolerance)
        )

    def run(
        self,
        directory: Path,
        href: Optional[str] = None,
        title: Optional[str] = None,
        year: str = "",
        director: str = "",
        force: bool = False,
    ) -> bool:
        """Run the complete workflow.

        Args:
            directory: Folder containing the ripped extras
            href: Release page reference; searched for interactively if omitted
            title: Release title to search for when no href is given
            year: Year filter for the search
            director: Director filter for the search
            force: Skip confirmations and take the first candidate on collisions

        Returns:
            bool: True if every planned rename succeeded

        Raises:
            MatchCancelled: If matching was interrupted
        """
        try:
            # Step 1: Resolve the release
            if not href:
                if not title:
                    raise XrError("Either a release reference or a title to search for is required")
                release = self.select_release(title, year=year, director=director)
                if release is None:
                    self.console.print("[yellow]Search cancelled.[/yellow]")
                    return False
                href = release.href

            # Step 2: Load extras
            extras = self.load_extras(href)
            if not extras:
                self.console.print("[red]No extras found for this release.[/red]")
                return False

            # Step 3: Match files by duration
            matches = self.match(directory, extras)
            if not matches:
                self.console.print("[yellow]No video files matched the extras by duration.[/yellow]")
                return True

            self.display_matches(matches)

            # Step 4: Resolve collisions and build plan
            actions = self.plan_renames(matches, force=force)
            if not actions:
                self.console.print("[yellow]Nothing to rename.[/yellow]")
                return True

            # Step 5: Confirm and execute
            if not self._confirm_plan(actions, force):
                self.console.print("[yellow]Rename cancelled.[/yellow]")
                return False

            return self.execute(actions)

        except CatalogError as e:
            self.console.print(f"[red]Catalog error:[/red] {e}")
            return False
        except XrError as e:
            self.console.print(f"[red]Error:[/red] {e}")
            return False

    def select_release(
        self, title: str, year: str = "", director: str = ""
    ) -> Optional[CatalogSearchResult]:
        """Search the catalog and let the user pick a release.

        Returns:
            CatalogSearchResult | None: Selected release, or None if cancelled
        """
        search_title = format_title_for_search(title)
        self.console.print(f"\n[bold]Searching for: {search_title}[/bold]")

        results = self.client.search(search_title, director=director, year=year)
        if not results:
            suffix = f" ({year})" if year else ""
            self.console.print(f"[yellow]No releases found for '{title}'{suffix}.[/yellow]")
            return None

        self.console.print(render_search_results(results))

        if len(results) == 1:
            return results[0]

        try:
            choice = prompt("\nSelect release (number, or 'q' to quit): ", default="1").strip()
        except (KeyboardInterrupt, EOFError):
            return None

        if choice.lower() == "q" or not choice:
            return None

        try:
            index = int(choice) - 1
        except ValueError:
            self.console.print("[red]Invalid input.[/red]")
            return None

        if not 0 <= index < len(results):
            self.console.print("[red]Invalid selection.[/red]")
            return None

        return results[index]

    def load_extras(self, href: str) -> List[CatalogEntry]:
        """Fetch and list the extras of a release."""
        self.console.print(f"[dim]Loading extras from {self.client.page_url(href)}[/dim]")
        extras = self.client.get_extras(href)

        if extras:
            self.console.print(f"[green]✓[/green] Loaded {len(extras)} extra(s)")
            if self.verbose:
                self.console.print(render_extras(extras))

        return extras

    def match(self, directory: Path, extras: Sequence[CatalogEntry]) -> List[MatchRecord]:
        """Run the match engine on a worker thread, streaming its progress.

        Ctrl-C while waiting requests cancellation; the worker stops at its
        next check and MatchCancelled is raised here.

        Raises:
            MatchCancelled: If the run was interrupted
        """
        token = CancelToken()

        def on_progress(message: str, total: int, processed: int) -> None:
            self.console.print(message, markup=False, highlight=False)

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="xr-match") as executor:
            future = executor.submit(
                self.engine.match_directory, directory, extras, on_progress, token
            )
            try:
                return future.result()
            except KeyboardInterrupt:
                logger.info("Cancellation requested")
                token.cancel()
                return future.result()

    def display_matches(self, matches: Sequence[MatchRecord]) -> None:
        """Print a table of matched files."""
        self.console.print(render_matches(matches))

    def plan_renames(self, matches: Sequence[MatchRecord], force: bool = False) -> List[RenameAction]:
        """Pick a title for every match, asking the user to settle collisions.

        Args:
            matches: Records from the match engine
            force: Take the first candidate instead of prompting

        Returns:
            List[RenameAction]: Renames to perform, skipped files omitted
        """
        actions: List[RenameAction] = []

        for record in matches:
            if record.has_collision and not force:
                chosen = self._choose_candidate(record)
                if chosen is None:
                    self.console.print(f"[dim]Skipping {record.video_file}[/dim]")
                    continue
            else:
                chosen = record.extra_title

            try:
                new_title = sanitize_filename(strip_extension(chosen))
            except ValidationError as e:
                logger.warning(f"Unusable title for {record.video_file}: {e}")
                self.console.print(
                    f"[yellow]Skipping {record.video_file}: "
                    f"'{escape(chosen)}' is not a usable filename[/yellow]"
                )
                continue

            action = RenameAction(record=record, new_title=new_title)
            if action.destination == action.source:
                self.console.print(f"[dim]{record.video_file} already has this name[/dim]")
                continue

            logger.debug(f"Planned rename: {action.to_dict()}")
            actions.append(action)

        return actions

    def _choose_candidate(self, record: MatchRecord) -> Optional[str]:
        """Prompt for one of a collision's candidate titles."""
        self.console.print(
            f"\n[bold yellow]⚠ {record.video_file}[/bold yellow] "
            f"({record.video_duration:.1f}s) matches {len(record.candidate_titles)} extras:"
        )
        for idx, title in enumerate(record.candidate_titles, 1):
            self.console.print(f"  [cyan]{idx}[/cyan]: {title}")
        self.console.print("  [cyan]s[/cyan]: Skip this file")

        try:
            choice = prompt("Your choice: ", default="1").strip().lower()
        except (KeyboardInterrupt, EOFError):
            return None

        if choice in ("s", ""):
            return None

        try:
            index = int(choice) - 1
        except ValueError:
            self.console.print("[red]Invalid input.[/red]")
            return None

        if not 0 <= index < len(record.candidate_titles):
            self.console.print("[red]Invalid selection.[/red]")
            return None

        return record.candidate_titles[index]

    def _confirm_plan(self, actions: Sequence[RenameAction], force: bool) -> bool:
        """Show the planned renames and ask for confirmation."""
        table = Table(title="Planned Renames")
        table.add_column("Current", style="dim")
        table.add_column("New Name", style="green")

        for action in actions:
            table.add_row(action.source.name, action.destination.name)

        self.console.print(table)

        if force or self.dry_run:
            return True

        try:
            confirm = prompt("\nRename these files? [Y/n]: ", default="y").strip().lower()
        except (KeyboardInterrupt, EOFError):
            return False

        return confirm in ("y", "yes", "")

    def execute(self, actions: Sequence[RenameAction]) -> bool:
        """Perform the renames.

        Returns:
            bool: True if every rename succeeded
        """
        if self.dry_run:
            for action in actions:
                self.console.print(
                    f"[yellow]Dry run:[/yellow] Would rename '{action.source.name}' "
                    f"to '{action.destination.name}'"
                )
            return True

        failures = 0
        for action in actions:
            if rename_video_file(action.source, action.new_title):
                self.console.print(
                    f"[green]✓[/green] Renamed '{action.source.name}' to '{action.destination.name}'"
                )
            else:
                failures += 1
                self.console.print(f"[red]✗[/red] Could not rename '{action.source.name}'")

        if failures:
            self.console.print(f"[red]{failures} rename(s) failed.[/red]")

        return failures == 0


def render_search_results(results: Sequence[CatalogSearchResult]) -> Table:
    """Build a table of catalog search results."""
    table = Table(title="Releases")
    table.add_column("#", style="cyan", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Reference", style="dim")
    table.add_column("Winner", style="green")

    for idx, result in enumerate(results, 1):
        table.add_row(str(idx), result.title, result.href, result.winner)

    return table


def render_extras(extras: Sequence[CatalogEntry]) -> Table:
    """Build a table of a release's extras."""
    table = Table(title="Extras")
    table.add_column("#", style="cyan", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Duration", style="yellow")

    for idx, extra in enumerate(extras, 1):
        table.add_row(str(idx), extra.title, extra.duration_text)

    return table


def render_matches(matches: Sequence[MatchRecord]) -> Table:
    """Build a table of match records, flagging collisions."""
    table = Table(title="Matches")
    table.add_column("File", style="bold")
    table.add_column("Extra")
    table.add_column("Video", style="yellow")
    table.add_column("Extra Duration", style="yellow")
    table.add_column("Diff", style="dim")

    for record in matches:
        if record.has_collision:
            extra = "\n".join(escape(title) for title in record.candidate_titles)
            extra = f"[bold yellow]COLLISION[/bold yellow]\n{extra}"
        else:
            extra = escape(record.extra_title)

        table.add_row(
            record.video_file,
            extra,
            f"{record.video_duration:.1f}s",
            record.extra_duration_text,
            f"{record.duration_difference:.2f}s",
        )

    return table
