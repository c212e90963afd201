"""
Command-line interface for WinPDFMerge.
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from winpdfmerge import __version__
from winpdfmerge.config import DEFAULT_PRESET, PRESETS, MergeSettings
from winpdfmerge.exceptions import WinPDFMergeError
from winpdfmerge.info import get_artifact_info
from winpdfmerge.pipeline import MergePipeline
from winpdfmerge.utils import sizeof_fmt

console = Console()

USAGE_EXIT_CODE = 1


def _configure_logging(verbose):
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _artifact_row(table, label, path):
    info = get_artifact_info(path)
    pages = str(info.num_pages) if info.num_pages is not None else "?"
    table.add_row(label, str(info.path), sizeof_fmt(info.size_bytes), pages)


@click.command()
@click.version_option(version=__version__)
@click.argument('folder', required=False, type=click.Path())
@click.option(
    '--preset', '-p',
    default=DEFAULT_PRESET,
    show_default=True,
    envvar='WINPDFMERGE_PRESET',
    type=click.Choice(PRESETS, case_sensitive=False),
    help='Ghostscript quality preset for the email copy'
)
@click.option(
    '--output-dir', '-o',
    default=None,
    envvar='WINPDFMERGE_OUTPUT_DIR',
    type=click.Path(file_okay=False),
    help='Folder for the merged PDFs and the log (default: program folder)'
)
@click.option(
    '--no-email',
    is_flag=True,
    help='Only produce the lossless PDF'
)
@click.option(
    '--pdftk',
    'pdftk_path',
    default=None,
    envvar='WINPDFMERGE_PDFTK',
    help='Path to the pdftk executable'
)
@click.option(
    '--gs',
    'gs_path',
    default=None,
    envvar='WINPDFMERGE_GS',
    help='Path to the Ghostscript executable'
)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
@click.pass_context
def cli(ctx, folder, preset, output_dir, no_email, pdftk_path, gs_path, verbose):
    """
    Merge all PDFs in FOLDER into one lossless PDF plus a smaller email copy.

    Files are merged in natural order (doc2 before doc10). The results and a
    log of every command are written next to the program.

    Examples:

        winpdfmerge "C:\\Scans\\Invoices"

        winpdfmerge ./scans --preset ebook -o ./merged
    """
    if folder is None:
        click.echo(ctx.get_usage())
        ctx.exit(USAGE_EXIT_CODE)

    _configure_logging(verbose)

    settings = MergeSettings(
        preset=preset,
        email_copy=not no_email,
        output_dir=output_dir,
        pdftk_path=pdftk_path,
        gs_path=gs_path,
    )

    try:
        console.print(f"\n[bold cyan]Merging PDFs in {folder}...[/bold cyan]")
        result = MergePipeline(settings=settings).run(folder)
    except WinPDFMergeError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        if e.log_path is not None:
            console.print(f"[dim]Log: {e.log_path}[/dim]")
        sys.exit(e.exit_code)

    table = Table(title="WinPDFMerge Results")
    table.add_column("Artifact", style="cyan", no_wrap=True)
    table.add_column("Path", style="green")
    table.add_column("Size", justify="right")
    table.add_column("Pages", justify="right")
    _artifact_row(table, "Lossless", result.master_path)
    if result.email_path is not None:
        _artifact_row(table, "Email", result.email_path)

    console.print()
    console.print(table)

    if result.email_status == "failed":
        console.print("[yellow]! Email copy failed; only the lossless PDF was created.[/yellow]")
    elif result.email_status == "tool-missing":
        console.print("[yellow]! Ghostscript not found; email copy skipped.[/yellow]")

    console.print(f"\n[bold green]✓ Merged {len(result.inputs)} file(s)[/bold green]")
    console.print(f"[dim]Log: {result.log_path}[/dim]")
    console.print()


def main():
    cli()


if __name__ == '__main__':
    main()
