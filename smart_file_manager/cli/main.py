"""Main CLI interface for the Smart File Manager."""

import click
import csv
import io
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..core.categories import category_for, category_table
from ..core.config import setup_config
from ..core.logging_config import setup_logging
from ..core.models import FileRecord, OrganizeResult
from ..core.scanner import FileScanner, validate_directory
from ..core.organizer import FileOrganizer
from ..core.searcher import FileSearcher
from ..core.exceptions import (
    FileManagerError, FileSystemError, AccessDeniedError, PathNotFoundError,
    NotADirectoryPathError, ConfigurationError
)

console = Console()
err_console = Console(stderr=True)

OUTPUT_FORMATS = click.Choice(["table", "json", "csv"])


@click.group()
@click.version_option(version=__version__)
@click.option('--config', '-c', type=click.Path(path_type=Path),
              help='Configuration file path')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level (overrides config)')
@click.option('--log-file', type=click.Path(path_type=Path),
              help='Activity log file path (overrides config)')
@click.pass_context
def cli(ctx, config, log_level, log_file):
    """Smart File Manager - scan, organize, search and find duplicate files."""
    config_manager = setup_config(config)
    app_config = config_manager.get_config()

    logging_config = app_config.logging
    if log_level or log_file:
        logging_config = replace(
            logging_config,
            level=log_level or logging_config.level,
            file_path=log_file or logging_config.file_path,
        )

    logging_manager = setup_logging(logging_config)
    logging_manager.session_started()
    ctx.call_on_close(logging_manager.shutdown)

    ctx.ensure_object(dict)
    ctx.obj['config'] = app_config
    ctx.obj['config_manager'] = config_manager
    ctx.obj['logger'] = logging_manager.get_logger('activity')
    ctx.obj['log_file'] = logging_manager.log_file_path


def _open_scanner(ctx, directory: Optional[Path]) -> FileScanner:
    """Validate the target directory and return a scanner for it."""
    app_config = ctx.obj['config']
    directory = app_config.resolve_directory(directory)

    try:
        validate_directory(directory)
    except FileManagerError as e:
        handle_cli_error(e, "directory validation")
        raise click.Abort()

    # The open activity log is never collected
    log_file = ctx.obj.get('log_file')
    return FileScanner(directory, logger=ctx.obj['logger'],
                       exclude=[log_file] if log_file else None)


def _scan_files(scanner: FileScanner) -> List[FileRecord]:
    result = scanner.scan()
    for error in result.errors[:10]:
        err_console.print(f"[yellow]Warning: {escape(str(error))}[/yellow]")
    return result.files


@cli.command()
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.option("--format", "-f", "output_format", type=OUTPUT_FORMATS, default="table", help="Output format")
@click.pass_context
def scan(ctx, directory: Optional[Path], output_format: str):
    """Scan a directory and list the files in it."""
    scanner = _open_scanner(ctx, directory)
    result = scanner.scan()

    if output_format != "table":
        _display_file_results(result.files, output_format)
        return

    console.print(f"[bold blue]Scanning directory:[/bold blue] {escape(str(scanner.directory))}")
    if result.count > 0:
        _display_file_results(result.files, output_format)
        console.print(f"\n[bold green]✓ Found {result.count} files[/bold green] in {result.duration:.2f} seconds")
    else:
        console.print("[yellow]No files found or directory is empty.[/yellow]")

    if result.errors:
        console.print(f"[bold yellow]Warnings: {len(result.errors)}[/bold yellow]")
        for error in result.errors[:10]:
            console.print(f"  [yellow]- {escape(str(error))}[/yellow]")


@cli.command()
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option("--dry-run", is_flag=True, help="Show what would be moved without moving anything")
@click.pass_context
def organize(ctx, directory: Optional[Path], yes: bool, dry_run: bool):
    """Move files into category subfolders by extension."""
    app_config = ctx.obj['config']
    dry_run = dry_run or app_config.organize.dry_run

    scanner = _open_scanner(ctx, directory)
    files = _scan_files(scanner)
    _organize_files(ctx, scanner, files, confirm=app_config.organize.confirm and not yes, dry_run=dry_run)


def _organize_files(ctx, scanner: FileScanner, files: List[FileRecord], confirm: bool, dry_run: bool):
    if not files:
        console.print("[yellow]No files to organize. Scan a directory with files first.[/yellow]")
        return

    console.print(f"Ready to organize [bold]{len(files)}[/bold] files.")
    console.print("Files will be moved into category-based subfolders.")

    if confirm and not dry_run:
        if not click.confirm("Proceed with organization?", default=False):
            console.print("[yellow]Organization cancelled.[/yellow]")
            return

    organizer = FileOrganizer(logger=ctx.obj['logger'])
    result = organizer.organize(files, scanner.directory, dry_run=dry_run)
    _display_organize_result(result)

    if not dry_run:
        console.print("Rescanning directory...")
        rescan = scanner.scan()
        console.print(f"{rescan.count} files remain in {escape(str(scanner.directory))}")


@cli.command()
@click.argument("term")
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.option("--format", "-f", "output_format", type=OUTPUT_FORMATS, default="table", help="Output format")
@click.pass_context
def search(ctx, term: str, directory: Optional[Path], output_format: str):
    """Search scanned files by name (case-insensitive substring)."""
    if not term:
        raise click.BadParameter("Search term cannot be empty.", param_hint="TERM")

    scanner = _open_scanner(ctx, directory)
    files = _scan_files(scanner)

    searcher = FileSearcher(logger=ctx.obj['logger'])
    results = searcher.search_by_name(files, term)
    _show_search_results(results, output_format)


def _show_search_results(results: List[FileRecord], output_format: str):
    if output_format != "table":
        _display_file_results(results, output_format)
        return

    if not results:
        console.print("[yellow]No files found matching your search.[/yellow]")
        return

    _display_file_results(results, output_format)
    console.print(f"\n[bold green]Found {len(results)} file(s)[/bold green]")


@cli.command()
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.option("--format", "-f", "output_format", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.pass_context
def duplicates(ctx, directory: Optional[Path], output_format: str):
    """Find files sharing the same name and size."""
    scanner = _open_scanner(ctx, directory)
    files = _scan_files(scanner)

    searcher = FileSearcher(logger=ctx.obj['logger'])
    groups = searcher.find_duplicates(files)
    _display_duplicates(groups, output_format)


@cli.command()
def categories():
    """Show which extensions go into which folder."""
    _display_categories()


@cli.command()
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.pass_context
def shell(ctx, directory: Optional[Path]):
    """Interactive menu over a directory."""
    scanner = _open_scanner(ctx, directory)
    searcher = FileSearcher(logger=ctx.obj['logger'])
    logger = ctx.obj['logger']
    logger.info("Menu system initialized")

    while True:
        _display_main_menu(scanner)
        choice = click.prompt("Enter your choice", type=int, default=0, show_default=False)

        try:
            if choice == 0:
                break
            elif choice == 1:
                result = scanner.scan()
                if result.count > 0:
                    console.print(f"[green]Found {result.count} files![/green]")
                else:
                    console.print("[yellow]No files found or directory is empty.[/yellow]")
            elif choice == 2:
                _organize_files(ctx, scanner, scanner.files, confirm=True, dry_run=False)
            elif choice == 3:
                if not _require_files(scanner):
                    continue
                term = click.prompt("Enter filename to search", default="", show_default=False)
                if not term:
                    console.print("[red]Search term cannot be empty.[/red]")
                    continue
                _show_search_results(searcher.search_by_name(scanner.files, term), "table")
            elif choice == 4:
                if not _require_files(scanner):
                    continue
                _display_duplicates(searcher.find_duplicates(scanner.files), "table")
            elif choice == 5:
                if not _require_files(scanner):
                    continue
                _display_file_results(scanner.files, "table")
                console.print(f"\n[bold]{len(scanner.files)} files total[/bold]")
            elif choice == 6:
                new_directory = click.prompt("Enter new directory path", default="", show_default=False)
                if not new_directory:
                    console.print("[red]Directory path cannot be empty.[/red]")
                    continue
                try:
                    scanner.change_directory(validate_directory(new_directory))
                except FileManagerError as e:
                    handle_cli_error(e, "change directory")
                    continue
                console.print(f"[green]Directory changed to {escape(str(scanner.directory))}. Please scan again.[/green]")
            elif choice == 7:
                _display_categories()
            else:
                console.print("[red]Invalid choice! Please enter 0-7.[/red]")
        except FileManagerError as e:
            handle_cli_error(e, "menu action")

    console.print("Thank you for using Smart File Manager!")
    logger.info("Application terminated normally")


def _require_files(scanner: FileScanner) -> bool:
    if scanner.files:
        return True
    console.print("[yellow]No files scanned yet. Please scan directory first.[/yellow]")
    return False


def _display_main_menu(scanner: FileScanner):
    console.print(f"\n[bold]Current Directory:[/bold] {escape(str(scanner.directory))}")
    console.print("  1. Scan Directory")
    console.print("  2. Organize Files by Extension")
    console.print("  3. Search Files by Name")
    console.print("  4. Find Duplicate Files")
    console.print("  5. Display All Files")
    console.print("  6. Change Directory")
    console.print("  7. View Category Mappings")
    console.print("  0. Exit")


@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command('show')
@click.pass_context
def show_config(ctx):
    """Show current configuration."""
    app_config = ctx.obj['config']

    console.print("[bold blue]Current Configuration:[/bold blue]\n")

    console.print("[bold]General:[/bold]")
    console.print(f"  Default directory: {escape(str(app_config.default_directory))}")

    console.print("\n[bold]Organize:[/bold]")
    console.print(f"  Confirm: {app_config.organize.confirm}")
    console.print(f"  Dry run: {app_config.organize.dry_run}")

    console.print("\n[bold]Logging:[/bold]")
    console.print(f"  Level: {app_config.logging.level}")
    console.print(f"  File enabled: {app_config.logging.file_enabled}")
    console.print(f"  File path: {escape(str(app_config.logging.file_path))}")
    console.print(f"  Console enabled: {app_config.logging.console_enabled}")


@config.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_config(ctx, key, value):
    """Set a configuration value. Use dot notation for nested keys (e.g., organize.confirm)."""
    config_manager = ctx.obj['config_manager']
    app_config = ctx.obj['config']

    try:
        keys = key.split('.')
        if keys == ['default_directory']:
            target, setting = app_config, 'default_directory'
        elif len(keys) == 2 and keys[0] in ('logging', 'organize'):
            section, setting = keys
            target = getattr(app_config, section)
            if not hasattr(target, setting):
                raise ConfigurationError(f"Unknown setting '{setting}' in section '{section}'")
        else:
            raise ConfigurationError(f"Unknown configuration key: {key}")

        current_value = getattr(target, setting)

        if isinstance(current_value, bool):
            converted_value = value.lower() in ('true', '1', 'yes', 'on')
        elif setting in ('default_directory', 'file_path'):
            converted_value = Path(value)
        else:
            converted_value = value

        setattr(target, setting, converted_value)
        config_manager.save_to_file()

        console.print(f"[green]✓[/green] Set {key} = {escape(str(converted_value))}")

    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise click.Abort()


@config.command('reset')
@click.confirmation_option(prompt='Are you sure you want to reset all configuration to defaults?')
@click.pass_context
def reset_config(ctx):
    """Reset configuration to default values."""
    ctx.obj['config_manager'].reset_to_defaults()
    console.print("[green]✓ Configuration reset to defaults[/green]")


@config.command('export')
@click.argument('file_path', type=click.Path(path_type=Path))
@click.pass_context
def export_config(ctx, file_path):
    """Export configuration to JSON file."""
    try:
        ctx.obj['config_manager'].export_to_json(file_path)
    except OSError as e:
        console.print(f"[red]Error exporting configuration:[/red] {escape(str(e))}")
        raise click.Abort()
    console.print(f"[green]✓ Configuration exported to {escape(str(file_path))}[/green]")


def _record_to_dict(file_record: FileRecord) -> Dict[str, object]:
    return {
        "name": file_record.name,
        "path": str(file_record.path),
        "extension": file_record.extension,
        "size": file_record.size,
        "category": category_for(file_record.extension),
    }


def _display_file_results(results: List[FileRecord], format: str):
    """Display file results in the specified format."""
    if format == "json":
        click.echo(json.dumps([_record_to_dict(r) for r in results], indent=2))

    elif format == "csv":
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["Name", "Path", "Extension", "Size", "Category"])
        for file_record in results:
            row = _record_to_dict(file_record)
            writer.writerow([row["name"], row["path"], row["extension"], row["size"], row["category"]])
        click.echo(output.getvalue().strip())

    else:
        if not results:
            return
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Filename", style="cyan", no_wrap=False, max_width=40)
        table.add_column("Size", justify="right")
        table.add_column("Extension", style="green")
        table.add_column("Category", style="blue")

        for file_record in results:
            table.add_row(
                escape(file_record.name),
                _format_file_size(file_record.size),
                file_record.extension,
                category_for(file_record.extension),
            )

        console.print(table)


def _display_duplicates(groups: Dict[str, List[FileRecord]], format: str):
    if format == "json":
        click.echo(json.dumps(
            {signature: [_record_to_dict(r) for r in records] for signature, records in groups.items()},
            indent=2,
        ))
        return

    if not groups:
        console.print("[green]✓ No duplicate files found![/green]")
        return

    console.print(f"[bold]Duplicate files ({len(groups)} groups)[/bold]")
    for number, records in enumerate(groups.values(), start=1):
        console.print(f"\n[bold cyan]Duplicate Group #{number}[/bold cyan] ({len(records)} files):")
        for file_record in records:
            console.print(f"  {escape(file_record.name)} ({file_record.size} bytes)")
            console.print(f"    [dim]Path: {escape(str(file_record.path))}[/dim]")


def _display_organize_result(result: OrganizeResult):
    if result.dry_run:
        console.print("[bold yellow]DRY RUN: no files were moved[/bold yellow]")
        for file_record, destination in result.moved:
            console.print(f"  {escape(file_record.name)} -> {destination.parent.name}/")
        console.print(f"\n{result.moved_count} files would be moved.")
    else:
        console.print(f"\n[bold green]✓ Organization complete![/bold green] {result.moved_count} files moved.")

    if result.skipped:
        console.print(f"[yellow]Skipped {len(result.skipped)} files:[/yellow]")
        for file_record, reason in result.skipped[:20]:
            console.print(f"  [yellow]- {escape(file_record.name)}: {escape(reason)}[/yellow]")
        if len(result.skipped) > 20:
            console.print(f"  [dim]... and {len(result.skipped) - 20} more[/dim]")


def _display_categories():
    table = Table(title="Extension Category Mappings", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="cyan")
    table.add_column("Extensions")
    for label, extensions in category_table().items():
        table.add_row(label, ", ".join(extensions))
    table.add_row("Others", "[dim]anything else[/dim]")
    console.print(table)


def _format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f}MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f}GB"


def handle_cli_error(error: Exception, operation: str = "operation") -> None:
    """
    Handle CLI errors with appropriate user feedback.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed
    """
    if isinstance(error, PathNotFoundError):
        console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
        console.print("[yellow]Please check that the path exists and is accessible.[/yellow]")
    elif isinstance(error, NotADirectoryPathError):
        console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
        console.print("[yellow]Please give a directory, not a file.[/yellow]")
    elif isinstance(error, AccessDeniedError):
        console.print(f"[bold red]Permission Error:[/bold red] {escape(str(error))}")
        console.print("[yellow]Please check file/directory permissions or run with appropriate privileges.[/yellow]")
    elif isinstance(error, FileSystemError):
        console.print(f"[bold red]File System Error:[/bold red] {escape(str(error))}")
    elif isinstance(error, FileManagerError):
        console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    else:
        console.print(f"[bold red]Unexpected Error:[/bold red] {escape(str(error))}")
        console.print("[yellow]An unexpected error occurred. Please check the logs for more details.[/yellow]")

    logging.getLogger(__name__).error(f"CLI error in {operation}: {error}")


if __name__ == "__main__":
    cli()
