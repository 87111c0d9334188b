"""Build a complete EPUB archive from a project."""

import io
import logging
import re
import uuid
import zipfile
from dataclasses import dataclass
from pathlib import Path

from epub_maker.core.assets import AssetIndex, decode_data_url, image_href
from epub_maker.core.cover import plan_cover
from epub_maker.core.documents import (
    render_chapter_document,
    render_cover_page,
    render_nav_page,
)
from epub_maker.core.navigation import build_nav_points, render_ncx
from epub_maker.core.package import (
    COVER_PAGE_FILENAME,
    NAV_PAGE_FILENAME,
    NCX_FILENAME,
    OEBPS_DIR,
    OPF_FILENAME,
    STYLE_FILENAME,
    PackageBuilder,
    chapter_filename,
    render_opf,
)
from epub_maker.core.styles import build_stylesheet
from epub_maker.models.project import Project

log = logging.getLogger(__name__)

MIMETYPE = "application/epub+zip"
CONTAINER_PATH = "META-INF/container.xml"
CONTAINER_XML = f"""<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
   <rootfiles>
      <rootfile full-path="{OEBPS_DIR}/{OPF_FILENAME}" media-type="application/oebps-package+xml"/>
   </rootfiles>
</container>"""


@dataclass
class BuiltEpub:
    """Finished archive, held in memory."""

    filename: str
    content: bytes

    def write(self, directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.content)
        return path


def archive_filename(project: Project) -> str:
    """Download name of the archive, derived from the book title."""
    stem = re.sub(r"[/\\]", "_", project.metadata.title) or "ebook"
    return f"{stem}.epub"


class EpubEncoder:
    """Write a project as an EPUB 2 archive.

    Image references in chapter markup are not validated; ones that match
    no library image are exported unchanged.
    """

    def __init__(self, project: Project, uid: str | None = None):
        self.project = project
        self.uid = uid or f"urn:uuid:{uuid.uuid4()}"

    def build(self) -> BuiltEpub:
        project = self.project
        assets = AssetIndex(project.images)
        cover = plan_cover(project, assets)

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            # mimetype must be the first entry and stored uncompressed
            zf.writestr("mimetype", MIMETYPE, compress_type=zipfile.ZIP_STORED)
            zf.writestr(CONTAINER_PATH, CONTAINER_XML)

            def write(name: str, data: str | bytes) -> None:
                zf.writestr(f"{OEBPS_DIR}/{name}", data)

            write(STYLE_FILENAME, build_stylesheet(project))

            for extra in project.extra_files:
                if extra.is_active:
                    write(extra.filename, extra.content)

            for image in project.images:
                write(image_href(image.id, image.type), decode_data_url(image.data))

            if cover is not None:
                if not cover.from_library:
                    write(cover.href, cover.payload or b"")
                write(COVER_PAGE_FILENAME, render_cover_page(cover.href))
                log.debug("Cover written as %s (meta id %s)", cover.href, cover.meta_id)

            for index, chapter in enumerate(project.chapters):
                write(
                    chapter_filename(index),
                    render_chapter_document(chapter, assets, project.extra_files),
                )

            write(NAV_PAGE_FILENAME, render_nav_page(project.chapters))

            package = PackageBuilder(project, assets, cover, self.uid).build()
            write(OPF_FILENAME, render_opf(package))

            nav_points = build_nav_points(project.chapters, has_cover=cover is not None)
            write(NCX_FILENAME, render_ncx(nav_points, self.uid, project.metadata.title))

        log.info(
            "Built EPUB with %d chapters and %d images",
            len(project.chapters),
            len(project.images),
        )
        return BuiltEpub(filename=archive_filename(project), content=buffer.getvalue())


def build_epub(project: Project) -> BuiltEpub:
    return EpubEncoder(project).build()


def write_epub(project: Project, directory: Path) -> Path:
    """Build the archive and save it under ``directory``."""
    return build_epub(project).write(directory)
