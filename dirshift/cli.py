"""CLI entrypoints."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from dirshift.processors.filesystem import LocalDirectoryLister, LocalFileSystem, calculate_directory_stats
from dirshift.processors.rename_processor import RenameProcessor, has_empty_results, validate_pattern
from dirshift.settings import DEFAULT_BROWSER_PAGE_SIZE, DEFAULT_DEBOUNCE_MS, Settings
from dirshift.ui.browser import FileBrowserController
from dirshift.ui.rename_editor import RenameEditor
from dirshift.ui.terminal import RichTerminal


console = Console()

# Rows of the textual diff printed by the `rename` command
MAX_PREVIEW_ROWS = 10


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group(context_settings=dict(show_default=True), invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable verbose (debug) logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """dirshift - Browse folders and batch-rename them with a live preview.

    Without a command, starts the interactive browser in the current directory.
    """
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        ctx.invoke(browse)


@cli.command("browse")
@click.argument("root", type=click.Path(file_okay=False, path_type=Path), default=".")
@click.option(
    "--page-size",
    type=click.IntRange(min=1),
    default=DEFAULT_BROWSER_PAGE_SIZE,
    envvar="DIRSHIFT_PAGE_SIZE",
    help="Rows shown in the file browser list.",
)
@click.option(
    "--debounce-ms",
    type=click.IntRange(min=0),
    default=DEFAULT_DEBOUNCE_MS,
    envvar="DIRSHIFT_DEBOUNCE_MS",
    help="Minimum delay between preview updates while typing.",
)
@click.option(
    "--editor",
    "editor_command",
    type=str,
    default="code",
    envvar="DIRSHIFT_EDITOR",
    help="Command used by 'Open in Editor'.",
)
@click.option(
    "--terminal",
    "terminal_command",
    type=str,
    default="x-terminal-emulator",
    envvar="DIRSHIFT_TERMINAL",
    help="Command used by 'Open in Terminal'.",
)
def browse(
    root: Path,
    page_size: int,
    debounce_ms: int,
    editor_command: str,
    terminal_command: str,
) -> None:
    """Browse ROOT interactively; navigation never goes above it."""
    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] Directory not found: {escape(str(root))}")
        raise SystemExit(1)

    settings = Settings(
        browser_page_size=page_size,
        debounce_ms=debounce_ms,
        editor_command=editor_command,
        terminal_command=terminal_command,
    )
    terminal = RichTerminal(console)
    lister = LocalDirectoryLister()
    processor = RenameProcessor(lister=lister, filesystem=LocalFileSystem())
    controller = FileBrowserController(
        lister=lister,
        rename_editor=RenameEditor(processor, terminal, settings=settings),
        terminal=terminal,
        settings=settings,
    )

    try:
        session = controller.run(root)
    except KeyboardInterrupt:
        console.print()
        console.print("[yellow]Interrupted.[/yellow]")
        raise SystemExit(130) from None
    except Exception as e:
        console.print_exception()
        raise SystemExit(1) from e

    console.clear()
    console.print(
        f"[bold green]Session finished.[/bold green] Renamed [cyan]{session.renamed_count}[/cyan] folder(s)."
    )


@cli.command("rename")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "-s",
    "--search",
    "pattern",
    type=str,
    required=True,
    help="Search pattern (regex) to match in folder names.",
)
@click.option(
    "-r",
    "--replace",
    "replacement",
    type=str,
    default="",
    help="Replacement text; may reference groups as \\1 or \\g<name>. Empty removes the match.",
)
@click.option("--literal", is_flag=True, default=False, help="Match the search text literally instead of as a regex.")
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    default=False,
    help="Apply renames without asking for confirmation.",
)
def rename(path: Path, pattern: str, replacement: str, literal: bool, yes: bool) -> None:
    """Rename the child folders of PATH by pattern replacement.

    Examples:

        dirshift rename ./Photos -s "IMG_"

        dirshift rename ./Shows -s "^(\\d{4})_(.*)" -r "\\2 (\\1)"
    """
    if not path.is_dir():
        console.print(f"[bold red]Error:[/bold red] Directory not found: {escape(str(path))}")
        raise SystemExit(1)

    processor = RenameProcessor()
    previews = processor.generate_preview(path, pattern, replacement, use_regex=not literal)

    if not previews:
        console.print("[cyan]No folders found in the specified directory.[/cyan]")
        return

    if not literal:
        is_valid, message = validate_pattern(pattern)
        if not is_valid:
            console.print(f"[yellow]Warning:[/yellow] {escape(message)}", highlight=False)
    if has_empty_results(previews):
        console.print("[dim]Some names would become empty; those folders are skipped.[/dim]")

    changing = [p for p in previews if p.will_change]
    if not changing:
        console.print("[cyan]No folders will be renamed (pattern not found).[/cyan]")
        return

    console.print(f"[bold]Preview:[/bold] {len(changing)} folder(s) will be renamed")
    console.print(f"[bold]Search:[/bold] {escape(pattern)}", highlight=False)
    console.print(f"[bold]Replace:[/bold] {escape(replacement) or '(empty)'}", highlight=False)
    console.print()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Original", style="cyan")
    table.add_column("New Name", style="green")
    table.add_column("Status")

    for preview in changing[:MAX_PREVIEW_ROWS]:
        status = "[orange1]conflict[/orange1]" if preview.has_conflict else "[green]ok[/green]"
        table.add_row(Text(preview.original_name), Text(preview.new_name), status)

    console.print(table)
    if len(changing) > MAX_PREVIEW_ROWS:
        console.print(f"  ... and {len(changing) - MAX_PREVIEW_ROWS} more")
    console.print()

    if not yes and not click.confirm("Apply these changes?", default=False):
        console.print("[yellow]Aborted. No folders were renamed.[/yellow]")
        return

    outcome = processor.apply_renames(previews)

    if outcome.successful:
        console.print(f"[bold green]Successfully renamed {outcome.successful} folder(s).[/bold green]")
    if outcome.has_errors:
        console.print(f"[bold red]Failed to rename {outcome.failed} folder(s).[/bold red]")
        for error in outcome.errors:
            console.print(Text(f"  • {error}", style="dim"))
        raise SystemExit(1)


@cli.command("stats")
@click.argument("path", type=click.Path(path_type=Path))
def stats(path: Path) -> None:
    """Display size, file and folder counts for PATH (recursive)."""
    if not path.is_dir():
        console.print(f"[bold red]Error:[/bold red] Directory not found: {escape(str(path))}")
        raise SystemExit(1)

    console.print(f"[bold]Analyzing:[/bold] {escape(str(path))}")
    console.print()

    with console.status("Calculating size..."):
        result = calculate_directory_stats(path)

    console.print(f"[bold]Size:[/bold] {result.formatted_size}")
    console.print(f"[bold]Files:[/bold] {result.file_count:,}")
    console.print(f"[bold]Folders:[/bold] {result.folder_count:,}")
