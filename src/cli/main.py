"""Main CLI entry point for the notion-lite command.

This module provides the Typer application that serves as the entry point
for the notion-lite command-line tool. Each subcommand is one committed
operation: it opens the notebook, applies the change through the notebook
session (which persists it), and reports the result. Every failure is
caught at the command boundary and turned into one error message and a
non-zero exit code; nothing is mutated on failure.
"""

import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.models import AppConfig, ExitCode
from src.cli.output import OutputHandler
from src.gist_client.api_wrapper import GistAPIWrapper
from src.gist_client.errors import InvalidCredentialsError, TransportError
from src.models.errors import DecodeError, NotebookError
from src.models.page import Block, BlockType, new_id
from src.notebook.session import NotebookSession, PagePatch
from src.persistence.kv_store import KeyValueStore
from src.persistence.repository import PageRepository
from src.sync.backup_sync import BackupSync
from src.sync.config_manager import SyncConfigManager
from src.sync.errors import SyncNotConfiguredError
from src.sync.gist_backup import GistBackup

VERSION = "0.1.0"
DEFAULT_DATA_DIR = os.path.join("~", ".notion-lite")

app = typer.Typer(
    name="notion-lite",
    help="""A small notebook of markdown pages with optional gist backup.

QUICK START:
  notion-lite list                          # Show the page tree
  notion-lite new --title "Groceries"       # Create a page
  notion-lite edit <id> --content "- milk"  # Edit a page
  notion-lite sync-setup --token <token>    # Configure gist backup
  notion-lite push / notion-lite pull       # Back up / restore""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class CLIContext:
    """Options shared by every subcommand."""
    data_dir: str
    output: OutputHandler
    _config: Optional[AppConfig] = field(default=None, repr=False)

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            self._config = ConfigLoader.load(
                os.path.join(self.data_dir, ConfigLoader.DEFAULT_CONFIG_FILE)
            )
        return self._config

    def kv_store(self) -> KeyValueStore:
        return KeyValueStore(os.path.join(self.data_dir, self.config.storage_file))

    def open_session(self) -> NotebookSession:
        store = self.kv_store()
        self.output.debug(f"Notebook file: {store.file_path}")
        session = NotebookSession(PageRepository(store))
        session.open()
        return session

    def config_manager(self) -> SyncConfigManager:
        return SyncConfigManager(self.kv_store())

    def backup_sync(self) -> BackupSync:
        api = GistAPIWrapper(
            api_url=self.config.api_url,
            timeout=self.config.request_timeout,
        )
        backup = GistBackup(
            api,
            file_name=self.config.backup_file_name,
            description=self.config.gist_description,
        )
        return BackupSync(self.config_manager(), backup)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"notion-lite_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@contextmanager
def _command_boundary(output: OutputHandler, operation: str) -> Iterator[None]:
    """Turn any failure of a command into one message and an exit code."""
    try:
        yield
    except typer.Exit:
        raise
    except SyncNotConfiguredError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.NOT_CONFIGURED)
    except InvalidCredentialsError as e:
        logger.error(f"{operation} failed: {e}")
        output.error(f"{operation} failed: {e}")
        raise typer.Exit(ExitCode.AUTH_ERROR)
    except TransportError as e:
        logger.error(f"{operation} failed: {e}")
        output.error(f"{operation} failed: {e}")
        raise typer.Exit(ExitCode.NETWORK_ERROR)
    except DecodeError as e:
        logger.error(f"{operation} failed: {e}")
        output.error(f"{operation} failed: {e}")
        raise typer.Exit(ExitCode.DECODE_ERROR)
    except (NotebookError, ValueError, OSError) as e:
        logger.error(f"{operation} failed: {e}")
        output.error(f"{operation} failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except Exception as e:
        logger.exception(f"Unexpected error during {operation}")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"notion-lite version {VERSION}")
        raise typer.Exit()


def _read_text_argument(path: str) -> str:
    """Read text from a file path, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Optional[str] = typer.Option(
        None,
        "--data-dir",
        envvar="NOTION_LITE_HOME",
        help="Directory holding config.yaml and the page store (default: ~/.notion-lite)",
        metavar="DIR",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """A small notebook of markdown pages with optional gist backup."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIContext(
        data_dir=os.path.expanduser(data_dir or DEFAULT_DATA_DIR),
        output=OutputHandler(verbosity=verbosity, no_color=no_color),
    )


@app.command("list")
def list_pages(
    ctx: typer.Context,
    query: str = typer.Option("", "--query", "-q", help="Only show pages containing this text"),
    select: Optional[str] = typer.Option(
        None, "--select", "-s", help="Page id to mark (default: first listed page)"
    ),
) -> None:
    """Show pages as a tree (or a flat list of search results)."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "List pages"):
        session = state.open_session()
        entries = session.visible(query)
        selected = session.selected(select, query)
        if select and (selected is None or selected.page_id != select):
            state.output.warning(f"Page {select} is not listed")
        state.output.print_page_list(
            entries,
            selected_id=selected.page_id if selected else None,
            query=query.strip(),
        )
        state.output.info(f"{len(entries)} of {len(session.store)} page(s) listed")


@app.command("show")
def show_page(
    ctx: typer.Context,
    page_id: Optional[str] = typer.Argument(None, help="Page id (default: first listed page)"),
    query: str = typer.Option("", "--query", "-q", help="Resolve the page among search results"),
    raw: bool = typer.Option(False, "--raw", help="Print markdown source instead of a preview"),
) -> None:
    """Preview one page."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Show page"):
        session = state.open_session()
        page = session.selected(page_id, query)
        if page is None:
            state.output.warning(f"No pages match '{query}'")
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        if page_id and page.page_id != page_id:
            state.output.warning(f"Page {page_id} is not listed, showing {page.page_id}")
        state.output.print_page(page, raw=raw)


@app.command("new")
def new_page(
    ctx: typer.Context,
    parent: Optional[str] = typer.Option(None, "--parent", "-p", help="Parent page id"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Initial title"),
) -> None:
    """Create a new page."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Create page"):
        session = state.open_session()
        page = session.create_page(parent)
        if title is not None:
            page = session.edit_page(page.page_id, PagePatch(title=title))
        state.output.success(f"Created page {page.page_id} ({page.title})")


@app.command("edit")
def edit_page(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page id"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New markdown content"),
    content_file: Optional[str] = typer.Option(
        None,
        "--content-file",
        "-f",
        help="Read new content from a file ('-' for stdin)",
    ),
) -> None:
    """Change the title and/or content of a page."""
    state: CLIContext = ctx.obj
    if content is not None and content_file is not None:
        state.output.error("Use either --content or --content-file, not both")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    with _command_boundary(state.output, "Edit page"):
        if content_file is not None:
            content = _read_text_argument(content_file)
        patch = PagePatch(title=title, content=content)
        if patch.is_empty():
            state.output.warning("Nothing to change (use --title, --content or --content-file)")
            return
        session = state.open_session()
        page = session.edit_page(page_id, patch)
        state.output.success(f"Updated page {page.page_id} ({page.title})")


@app.command("add-block")
def add_block(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page id"),
    text: str = typer.Argument(..., help="Block text"),
    block_type: BlockType = typer.Option(BlockType.PARAGRAPH, "--type", help="Block type"),
    checked: bool = typer.Option(False, "--checked", help="Mark a todo block as done"),
) -> None:
    """Append a block to a page."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Add block"):
        session = state.open_session()
        block = Block(block_id=new_id(), type=block_type, text=text, checked=checked)
        session.append_block(page_id, block)
        state.output.success(f"Added {block_type.value} block to page {page_id}")


@app.command("delete")
def delete_page(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page id (its sub-pages are deleted too)"),
) -> None:
    """Delete a page and all of its sub-pages."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Delete page"):
        session = state.open_session()
        removed = session.delete_page(page_id)
        if not removed:
            state.output.warning(
                f"Page {page_id} was not deleted (unknown page, or it would leave the notebook empty)"
            )
            return
        state.output.success(f"Deleted {len(removed)} page(s)")


@app.command("favorite")
def toggle_favorite(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page id"),
) -> None:
    """Pin or unpin a page."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Toggle favorite"):
        session = state.open_session()
        page = session.toggle_favorite(page_id)
        verb = "Pinned" if page.is_favorite else "Unpinned"
        state.output.success(f"{verb} page {page.page_id} ({page.title})")


@app.command("export")
def export_pages(
    ctx: typer.Context,
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout"
    ),
) -> None:
    """Export all pages as a JSON array."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Export"):
        session = state.open_session()
        data = session.export_json()
        if output_file is None:
            typer.echo(data)
            return
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(data)
        state.output.success(f"Exported {len(session.store)} page(s) to {output_file}")


@app.command("import")
def import_pages(
    ctx: typer.Context,
    input_file: str = typer.Argument(..., help="JSON file exported by this app ('-' for stdin)"),
) -> None:
    """Replace all pages with pages from a JSON export."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Import"):
        text = _read_text_argument(input_file)
        session = state.open_session()
        count = session.import_json(text)
        if count == 0:
            state.output.warning("Import contained no pages, nothing changed")
            return
        state.output.success(f"Imported {count} page(s)")


@app.command("sync-setup")
def sync_setup(
    ctx: typer.Context,
    token: str = typer.Option(..., "--token", help="GitHub token with gist scope", prompt=True, hide_input=True),
    gist_id: str = typer.Option("", "--gist-id", help="Existing backup gist id (blank: create on first push)"),
) -> None:
    """Save the backup token and gist id."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Sync setup"):
        if gist_id.strip():
            GistAPIWrapper._validate_gist_id(gist_id)
        config = state.config_manager().save(token, gist_id)
        state.output.success("Sync config saved")
        state.output.print_sync_status(config)


@app.command("sync-status")
def sync_status(ctx: typer.Context) -> None:
    """Show whether backup sync is configured."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Sync status"):
        state.output.print_sync_status(state.config_manager().load())


@app.command("push")
def push_backup(ctx: typer.Context) -> None:
    """Back up all pages to the gist (creating it on first push)."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Cloud push"):
        session = state.open_session()
        sync = state.backup_sync()
        with state.output.spinner("Pushing backup..."):
            gist_id = session.push_backup(sync)
        state.output.success(f"Cloud push success (Gist: {gist_id})")


@app.command("pull")
def pull_backup(ctx: typer.Context) -> None:
    """Replace all pages with the gist backup."""
    state: CLIContext = ctx.obj
    with _command_boundary(state.output, "Cloud pull"):
        session = state.open_session()
        sync = state.backup_sync()
        with state.output.spinner("Pulling backup..."):
            count = session.pull_backup(sync)
        state.output.success(f"Cloud pull success ({count} pages)")


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
