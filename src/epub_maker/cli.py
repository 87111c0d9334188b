"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from epub_maker.commands.build import execute_build
from epub_maker.commands.info import execute_info, execute_styles
from epub_maker.commands.merge import execute_merge
from epub_maker.commands.split import execute_split
from epub_maker.commands.unpack import execute_unpack
from epub_maker.models.options import DecodeOptions

app = typer.Typer(
    name="epub-maker",
    help="Build EPUB books from projects and unpack EPUB books into projects.",
    add_completion=False,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Build EPUB books from projects and unpack EPUB books into projects."""
    configure_logging(verbose)


def _require_file(path: Path) -> None:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/]")
        raise typer.Exit(1)


@app.command()
def build(
    project_path: Annotated[Path, typer.Argument(help="Project JSON file")],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory (default: next to the project)"),
    ] = None,
) -> None:
    """Build an EPUB from a project file."""
    _require_file(project_path)
    try:
        execute_build(project_path, output_dir, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def unpack(
    book_path: Annotated[Path, typer.Argument(help="EPUB file to unpack")],
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Project JSON file to write"),
    ] = None,
    clean: Annotated[
        bool,
        typer.Option("--clean", help="Strip scripts, inline styles and wrapper spans"),
    ] = False,
    strip_images: Annotated[
        bool,
        typer.Option("--strip-images", help="Remove all images from chapters"),
    ] = False,
) -> None:
    """Unpack an EPUB into an editable project file."""
    _require_file(book_path)
    options = DecodeOptions(clean_html=clean, remove_images=strip_images)
    try:
        execute_unpack(book_path, output_path, options, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def merge(
    book_paths: Annotated[list[Path], typer.Argument(help="EPUB files to merge")],
    output_path: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file (.epub or project .json)"),
    ],
    clean: Annotated[
        bool,
        typer.Option("--clean", help="Strip scripts, inline styles and wrapper spans"),
    ] = False,
    strip_images: Annotated[
        bool,
        typer.Option("--strip-images", help="Remove all images from chapters"),
    ] = False,
) -> None:
    """Merge several EPUB files, ordered by file name."""
    for path in book_paths:
        _require_file(path)
    options = DecodeOptions(clean_html=clean, remove_images=strip_images)
    try:
        execute_merge(book_paths, output_path, options, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def split(
    text_path: Annotated[Path, typer.Argument(help="Plain-text novel")],
    pattern: Annotated[
        Optional[str],
        typer.Option("--pattern", "-p", help="Regular expression matching chapter headings"),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Project JSON file to write"),
    ] = None,
) -> None:
    """Split a text file into chapters and save it as a project."""
    _require_file(text_path)
    try:
        execute_split(text_path, pattern, output_path, console)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def info(
    book_path: Annotated[Path, typer.Argument(help="EPUB file to inspect")],
) -> None:
    """Show book metadata and chapters."""
    _require_file(book_path)
    try:
        execute_info(book_path, console)
    except Exception as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)


@app.command()
def styles() -> None:
    """List preset book styles."""
    execute_styles(console)


if __name__ == "__main__":
    app()
