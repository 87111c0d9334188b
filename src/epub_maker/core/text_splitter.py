"""Split plain text into chapters by matching heading lines."""

import logging
import re
import uuid
from html import escape

from epub_maker.models.project import Chapter, Project

log = logging.getLogger(__name__)

DEFAULT_CHAPTER_PATTERN = (
    r"^\s*(Chapter\s+\d+|第[0-9一二三四五六七八九十百千]+[章回节]|序章|尾声|引子"
    r"|[（(][0-9一二三四五六七八九十百千]+[)）])"
)
LEADING_TITLE = "Start"
FALLBACK_TITLE = "Chapter 1"


def compile_chapter_pattern(pattern: str | None = None) -> re.Pattern:
    """Compile a user pattern, falling back to the default when it is invalid."""
    if pattern and pattern.strip():
        try:
            return re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            log.warning("Invalid chapter pattern %r (%s), using the default", pattern, e)
    return re.compile(DEFAULT_CHAPTER_PATTERN, re.IGNORECASE)


def _chapter(title: str, paragraphs: list[str]) -> Chapter:
    body = "".join(f"<p>{escape(line, quote=False)}</p>" for line in paragraphs)
    return Chapter(
        id=uuid.uuid4().hex,
        title=title,
        content=f"<h1>{escape(title, quote=False)}</h1>\n{body}",
        level=1,
    )


def split_text_into_chapters(text: str, pattern: str | None = None) -> list[Chapter]:
    """Start a new chapter at every line matching ``pattern``.

    Text before the first heading is kept as a chapter titled ``Start``
    only if it holds anything. Blank input yields one empty ``Chapter 1``.
    """
    regex = compile_chapter_pattern(pattern)
    chapters: list[Chapter] = []
    title = LEADING_TITLE
    paragraphs: list[str] = []

    for line in text.split("\n"):
        trimmed = line.strip()
        if regex.search(trimmed):
            if paragraphs or title != LEADING_TITLE:
                chapters.append(_chapter(title, paragraphs))
            title = trimmed
            paragraphs = []
        elif trimmed:
            paragraphs.append(trimmed)

    if paragraphs or title != LEADING_TITLE:
        chapters.append(_chapter(title, paragraphs))

    if not chapters:
        return [_chapter(FALLBACK_TITLE, [])]
    return chapters


def project_from_text(text: str, title: str, pattern: str | None = None) -> Project:
    """Fresh project holding the chapters found in ``text``."""
    project = Project.new()
    if title:
        project.metadata.title = title
    project.chapters = split_text_into_chapters(text, pattern)
    return project
