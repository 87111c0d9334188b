"""Merge command implementation."""

from pathlib import Path

from rich.console import Console
from rich.table import Table

from epub_maker.core.encoder import EpubEncoder
from epub_maker.core.merger import merge_epubs
from epub_maker.core.project_file import save_project
from epub_maker.models.options import DecodeOptions


def execute_merge(
    book_paths: list[Path],
    output_path: Path,
    options: DecodeOptions,
    console: Console,
) -> Path:
    """Merge EPUB files into one project, or straight into one EPUB.

    The output suffix decides the format: ``.epub`` builds the archive,
    anything else saves the project as JSON.
    """
    project = merge_epubs(book_paths, options)

    table = Table(title="Merged Books", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("File", style="white")
    for i, path in enumerate(sorted(book_paths, key=lambda p: p.name), 1):
        table.add_row(str(i), path.name)
    console.print(table)

    if output_path.suffix.lower() == ".epub":
        built = EpubEncoder(project).build()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(built.content)
    else:
        save_project(project, output_path)

    console.print(
        f"[green]Merged {len(book_paths)} file(s) into {output_path}[/] "
        f"[dim]({len(project.chapters)} chapters, {len(project.images)} images)[/]"
    )
    return output_path
