"""Split command implementation."""

from pathlib import Path

from rich.console import Console
from rich.table import Table

from epub_maker.core.project_file import PROJECT_SUFFIX, save_project
from epub_maker.core.text_splitter import project_from_text


def execute_split(
    text_path: Path,
    pattern: str | None,
    output_path: Path | None,
    console: Console,
) -> Path:
    """Turn a plain-text novel into a project with one chapter per heading."""
    text = text_path.read_text(encoding="utf-8")
    project = project_from_text(text, text_path.stem, pattern)

    output_path = output_path or text_path.with_suffix(PROJECT_SUFFIX)
    save_project(project, output_path)

    table = Table(title="Chapters", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    for i, chapter in enumerate(project.chapters, 1):
        table.add_row(str(i), chapter.title)
    console.print(table)

    console.print(f"[green]Saved {len(project.chapters)} chapters to {output_path}[/]")
    return output_path
