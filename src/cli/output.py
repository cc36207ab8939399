"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
status messages, spinners for network calls, the page sidebar listing and
the markdown preview of a single page. Supports verbosity levels and the
--no-color flag.
"""

from datetime import datetime
from typing import Iterator, Optional, Sequence
from contextlib import contextmanager

from rich.console import Console
from rich.live import Live
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table

from src.models.page import Page
from src.page_store.hierarchy import VisiblePage
from src.sync.models import SyncConfig, SyncStatus


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Page created")
        >>> with handler.spinner("Pushing backup..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Display message without markup processing."""
        self.console.print(message, markup=False)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_page_list(
        self,
        entries: Sequence[VisiblePage],
        selected_id: Optional[str] = None,
        query: str = "",
    ) -> None:
        """Display the sidebar listing as an indented table.

        Args:
            entries: Visible pages with their depth
            selected_id: Id of the selected page, marked and bold when listed
            query: Active search query (shown in the title)
        """
        if not entries:
            self.console.print(f"[yellow]No pages match '{query}'[/yellow]")
            return

        title = f"Pages matching '{query}'" if query else "Pages"
        table = Table(title=title, show_lines=False)
        table.add_column("", no_wrap=True)
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Title")
        table.add_column("Updated", no_wrap=True)

        for entry in entries:
            page = entry.page
            star = "★ " if page.is_favorite else ""
            label = "  " * entry.depth + star + escape(page.title)
            selected = page.page_id == selected_id
            table.add_row(
                "▸" if selected else "",
                page.page_id,
                label,
                format_time(page),
                style="bold" if selected else None,
            )

        self.console.print(table)

    def print_page(self, page: Page, raw: bool = False) -> None:
        """Display one page with a markdown preview of its content.

        Args:
            page: Page to display
            raw: Print the markdown source instead of rendering it
        """
        star = " ★" if page.is_favorite else ""
        subtitle = f"{page.page_id} · updated {format_time(page)}"
        if raw:
            self.console.print(f"[bold]{escape(page.title)}[/bold]{star}")
            self.console.print(f"[dim]{subtitle}[/dim]")
            self.print(page.content)
            return

        body = Markdown(page.content) if page.content.strip() else "[dim](empty page)[/dim]"
        self.console.print(Panel(body, title=f"{escape(page.title)}{star}", subtitle=subtitle))

    def print_sync_status(self, config: SyncConfig) -> None:
        """Display the sync configuration state without revealing the token."""
        labels = {
            SyncStatus.UNCONFIGURED: "[yellow]not configured[/yellow]",
            SyncStatus.CONFIGURED_NO_REMOTE: "[blue]token set, no backup yet[/blue]",
            SyncStatus.CONFIGURED_WITH_REMOTE: "[green]ready[/green]",
        }
        self.console.print(f"Sync: {labels[config.status]}")
        if config.store_id:
            self.console.print(f"  Gist: {config.store_id}")


def format_time(page: Page) -> str:
    """Short local timestamp: 'Today HH:MM' or 'YYYY-MM-DD'."""
    local = page.updated_at.astimezone()
    now = datetime.now(local.tzinfo)
    if local.date() == now.date():
        return local.strftime("Today %H:%M")
    return local.strftime("%Y-%m-%d")
