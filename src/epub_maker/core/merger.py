"""Combine several EPUB files into one project."""

import logging
from pathlib import Path

from epub_maker.core.decoder import decode_epub
from epub_maker.core.errors import EpubError, MergeError
from epub_maker.models.options import DecodeOptions
from epub_maker.models.project import Metadata, Project

log = logging.getLogger(__name__)


def merged_default_metadata() -> Metadata:
    """Metadata of a merge that has not taken any from a source book yet."""
    return Metadata(
        title="合并书籍合集",
        creator="多位作者",
        language="zh",
        description="由多个 EPUB 文件合并而成。",
        subjects=["合集"],
    )


def _unique_name(name: str, taken: set[str]) -> str:
    """Append ``_2``, ``_3`` ... before the extension until ``name`` is free."""
    stem, dot, suffix = name.rpartition(".")
    if not dot:
        stem, suffix = name, ""
    number = 2
    candidate = name
    while candidate in taken:
        candidate = f"{stem}_{number}{dot}{suffix}"
        number += 1
    return candidate


def _merge_extra_files(merged: Project, book: Project, source: str) -> None:
    """Add a book's extra files, scoped to that book's chapters.

    A file identical to one already merged under the same name only widens
    that file's scope. Any other clash of filename or id is renamed.
    """
    chapter_ids = [chapter.id for chapter in book.chapters]
    by_filename = {extra.filename: extra for extra in merged.extra_files}

    for extra in book.extra_files:
        targets = chapter_ids if extra.target_chapter_ids is None else extra.target_chapter_ids

        existing = by_filename.get(extra.filename)
        if (
            existing is not None
            and existing.content == extra.content
            and existing.type == extra.type
        ):
            if existing.target_chapter_ids is not None:
                existing.target_chapter_ids.extend(targets)
            continue

        filename = _unique_name(extra.filename, set(by_filename))
        extra_id = _unique_name(extra.id, {e.id for e in merged.extra_files})
        if filename != extra.filename:
            log.info("Renamed %s from %s to %s", extra.filename, source, filename)

        added = extra.model_copy(
            update={"id": extra_id, "filename": filename, "target_chapter_ids": list(targets)}
        )
        merged.extra_files.append(added)
        by_filename[filename] = added


def merge_epubs(paths: list[Path], options: DecodeOptions | None = None) -> Project:
    """Decode every file, sorted by name, and concatenate the results.

    Image numbering continues across books so asset ids never collide.
    Metadata and cover come from the first book that has them. Any file
    that fails to decode aborts the whole merge.
    """
    options = options or DecodeOptions()
    merged = Project(metadata=merged_default_metadata())
    next_image_id = options.image_start_id
    metadata_taken = False

    for path in sorted(paths, key=lambda p: p.name):
        book_options = options.model_copy(update={"image_start_id": next_image_id})
        try:
            result = decode_epub(path, book_options)
        except (EpubError, OSError) as e:
            raise MergeError(path.name, str(e)) from e

        book = result.project
        next_image_id = result.next_image_id

        merged.chapters.extend(book.chapters)
        merged.images.extend(book.images)
        _merge_extra_files(merged, book, path.name)
        if book.custom_css:
            merged.custom_css += f"\n/* From {path.name} */\n{book.custom_css}"

        if not metadata_taken:
            merged.metadata = book.metadata
            metadata_taken = True
        if merged.cover is None and book.cover:
            merged.cover = book.cover
            merged.cover_id = book.cover_id

        log.info("Merged %s (%d chapters)", path.name, len(book.chapters))

    return merged
