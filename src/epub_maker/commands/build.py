"""Build command implementation."""

from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from epub_maker.core.encoder import EpubEncoder
from epub_maker.core.project_file import load_project


def execute_build(project_path: Path, output_dir: Path | None, console: Console) -> Path:
    """Encode a saved project into an EPUB file."""
    project = load_project(project_path)
    output_dir = output_dir or project_path.parent

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Building {project.metadata.title}...", total=None)
        built = EpubEncoder(project).build()

    path = built.write(output_dir)
    console.print(
        f"[green]Built {path}[/] "
        f"[dim]({len(project.chapters)} chapters, {len(project.images)} images)[/]"
    )
    return path
