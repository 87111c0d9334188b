"""Save and load projects as JSON."""

import logging
from pathlib import Path

from pydantic import ValidationError

from epub_maker.core.errors import EpubError
from epub_maker.models.project import Project

log = logging.getLogger(__name__)

PROJECT_SUFFIX = ".json"


class ProjectFileError(EpubError):
    """Project file is missing or does not hold a valid project."""


def save_project(project: Project, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(project.model_dump_json(indent=2), encoding="utf-8")
    log.debug("Saved project to %s", path)
    return path


def load_project(path: Path) -> Project:
    """Read a project saved by ``save_project``."""
    if not path.exists():
        raise ProjectFileError(f"Project file not found: {path}")
    try:
        return Project.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ProjectFileError(f"Invalid project file {path}: {e}") from e
