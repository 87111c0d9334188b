"""Info and styles command implementations."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from epub_maker.core.decoder import decode_epub
from epub_maker.core.styles import PRESET_STYLES
from epub_maker.models.project import Project


def display_metadata(project: Project, console: Console) -> None:
    metadata = project.metadata
    info_lines = [
        f"[bold]{metadata.title}[/]",
        f"[dim]Author:[/] {metadata.creator}",
        f"[dim]Language:[/] {metadata.language}",
        f"[dim]Date:[/] {metadata.date}",
    ]
    if metadata.publisher:
        info_lines.append(f"[dim]Publisher:[/] {metadata.publisher}")
    if metadata.series:
        info_lines.append(f"[dim]Series:[/] {metadata.series}")
    if metadata.subjects:
        info_lines.append(f"[dim]Subjects:[/] {', '.join(metadata.subjects)}")
    info_lines.append(
        f"[dim]Images:[/] {len(project.images)}"
        + (f" (cover: {project.cover_id})" if project.cover_id else "")
    )
    if metadata.description:
        info_lines.append("")
        info_lines.append(metadata.description)

    console.print(Panel("\n".join(info_lines), title="Book Info", border_style="blue"))


def display_chapters(project: Project, console: Console) -> None:
    table = Table(title="Chapters", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Headings", justify="right", style="green")

    for i, chapter in enumerate(project.chapters, 1):
        table.add_row(str(i), chapter.title, str(len(chapter.sub_items)))

    console.print(table)


def execute_info(book_path: Path, console: Console) -> Project:
    """Show metadata and chapter list of an EPUB."""
    project = decode_epub(book_path).project
    console.print()
    display_metadata(project, console)
    console.print()
    display_chapters(project, console)
    return project


def execute_styles(console: Console) -> None:
    table = Table(title="Preset Styles", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    for style in PRESET_STYLES:
        table.add_row(style.id, style.name)
    console.print(table)
