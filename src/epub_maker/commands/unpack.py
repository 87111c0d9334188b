"""Unpack command implementation."""

from pathlib import Path

from rich.console import Console

from epub_maker.core.decoder import decode_epub
from epub_maker.core.project_file import PROJECT_SUFFIX, save_project
from epub_maker.models.options import DecodeOptions


def default_project_path(book_path: Path) -> Path:
    return book_path.with_suffix(PROJECT_SUFFIX)


def execute_unpack(
    book_path: Path,
    output_path: Path | None,
    options: DecodeOptions,
    console: Console,
) -> Path:
    """Decode an EPUB and save it as an editable project file."""
    result = decode_epub(book_path, options)
    project = result.project

    output_path = output_path or default_project_path(book_path)
    save_project(project, output_path)

    console.print(f"[green]Unpacked {book_path.name} to {output_path}[/]")
    console.print(
        f"[dim]{len(project.chapters)} chapters, {len(project.images)} images, "
        f"{len(project.extra_files)} extra files[/]"
    )
    if project.cover_id:
        console.print(f"[dim]Cover: image {project.cover_id}[/]")
    return output_path
