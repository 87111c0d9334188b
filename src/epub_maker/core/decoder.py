"""Parse an EPUB archive back into an editable project."""

import datetime
import io
import logging
import re
import uuid
import warnings
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import unquote

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from lxml import etree

from epub_maker.core.assets import (
    base64_payload_size,
    build_data_url,
    format_asset_id,
    image_href,
    split_data_url,
)
from epub_maker.core.cover import resolve_cover
from epub_maker.core.errors import InvalidEpubError
from epub_maker.core.package import DC_NS, EXTRA_ITEM_PREFIX, XHTML_MEDIA_TYPE
from epub_maker.core.paths import parent_dir, resolve_href
from epub_maker.models.options import DecodeOptions
from epub_maker.models.project import (
    Chapter,
    ExtraFile,
    ImageAsset,
    Metadata,
    Project,
    TocItem,
)

# Suppress XML parsing warnings - EPUB files often use XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

log = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"
PRIMARY_STYLESHEETS = {"style.css", "main.css", "stylesheet.css"}
GENERATED_PAGE_TYPES = {"cover", "toc"}

_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


@dataclass
class ManifestEntry:
    """Manifest item with its href resolved to an archive path."""

    id: str
    href: str
    media_type: str
    zip_path: str


@dataclass
class DecodeResult:
    """Imported project plus the next free image number."""

    project: Project
    next_image_id: int


def _read_text(zf: zipfile.ZipFile, name: str) -> str:
    return zf.read(name).decode("utf-8", errors="replace")


def _element_text(element: etree._Element | None) -> str:
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


def _normalize_date(value: str) -> str:
    """Reduce an OPF date to ``YYYY-MM-DD``; unreadable dates become today."""
    today = datetime.date.today().isoformat()
    if not value:
        return today
    if re.fullmatch(r"\d{4}", value):
        return f"{value}-01-01"
    if re.fullmatch(r"\d{4}-\d{2}", value):
        return f"{value}-01"
    try:
        return datetime.date.fromisoformat(value[:10]).isoformat()
    except ValueError:
        log.debug("Unreadable date %r, using today", value)
        return today


def _new_chapter_id() -> str:
    return uuid.uuid4().hex


def _new_heading_id() -> str:
    return f"heading-{uuid.uuid4().hex[:9]}"


class EpubDecoder:
    """Read an EPUB held in memory into a ``Project``."""

    def __init__(
        self,
        data: bytes,
        source_name: str = "book.epub",
        options: DecodeOptions | None = None,
    ):
        self.data = data
        self.source_name = source_name
        self.options = options or DecodeOptions()

    def decode(self) -> DecodeResult:
        try:
            zf = zipfile.ZipFile(io.BytesIO(self.data))
        except zipfile.BadZipFile as e:
            raise InvalidEpubError(
                f"Invalid EPUB: {self.source_name} is not a zip archive."
            ) from e

        with zf:
            try:
                opf_path = self._find_opf_path(zf)
                opf_dir = parent_dir(opf_path)
                opf_root = self._read_package(zf, opf_path)

                metadata = self._parse_metadata(opf_root)
                entries = self._parse_manifest(opf_root, opf_dir)

                images, images_by_path, next_image_id = self._extract_images(
                    zf, entries, self.options.image_start_id
                )
                custom_css, extra_files = self._extract_stylesheets(zf, entries)
                chapters = self._extract_chapters(
                    zf, opf_root, opf_dir, entries, images_by_path
                )
            except (zipfile.BadZipFile, zlib.error) as e:
                # CRC mismatch or broken deflate stream in a member
                raise InvalidEpubError(
                    f"Invalid EPUB: {self.source_name} has a corrupt entry: {e}"
                ) from e

        cover_meta = opf_root.find(".//{*}meta[@name='cover']")
        cover_image = resolve_cover(
            cover_meta.get("content") if cover_meta is not None else None,
            {entry.id: entry.zip_path for entry in entries},
            images_by_path,
        )

        log.info(
            "Decoded %s: %d chapters, %d images",
            self.source_name,
            len(chapters),
            len(images),
        )
        project = Project(
            metadata=metadata,
            chapters=chapters,
            images=images,
            extra_files=extra_files,
            cover=cover_image.data if cover_image else None,
            cover_id=cover_image.id if cover_image else None,
            custom_css=custom_css,
        )
        return DecodeResult(project=project, next_image_id=next_image_id)

    def _find_opf_path(self, zf: zipfile.ZipFile) -> str:
        try:
            container = zf.read(CONTAINER_PATH)
        except KeyError as e:
            raise InvalidEpubError(
                f"Invalid EPUB: {CONTAINER_PATH} not found."
            ) from e
        try:
            root = etree.fromstring(container, _XML_PARSER)
        except etree.XMLSyntaxError as e:
            raise InvalidEpubError(
                f"Invalid EPUB: {CONTAINER_PATH} could not be parsed: {e}"
            ) from e

        rootfile = root.find(".//{*}rootfile")
        opf_path = rootfile.get("full-path") if rootfile is not None else None
        if not opf_path:
            raise InvalidEpubError(
                "Invalid EPUB: OPF file path not found in container.xml."
            )
        return opf_path

    def _read_package(self, zf: zipfile.ZipFile, opf_path: str) -> etree._Element:
        try:
            raw = zf.read(opf_path)
        except KeyError as e:
            raise InvalidEpubError(f"Invalid EPUB: OPF file not found at {opf_path}.") from e
        try:
            return etree.fromstring(raw, _XML_PARSER)
        except etree.XMLSyntaxError as e:
            raise InvalidEpubError(
                f"Invalid EPUB: OPF file {opf_path} could not be parsed: {e}"
            ) from e

    def _parse_metadata(self, opf_root: etree._Element) -> Metadata:
        """Read Dublin Core fields, falling back to defaults for missing ones."""
        metadata_el = opf_root.find("{*}metadata")
        if metadata_el is None:
            metadata_el = etree.Element("metadata")

        def dc(name: str) -> str:
            return _element_text(metadata_el.find(f"{{{DC_NS}}}{name}"))

        subjects = [
            text
            for text in (_element_text(el) for el in metadata_el.iter(f"{{{DC_NS}}}subject"))
            if text
        ]
        series_el = metadata_el.find("{*}meta[@name='calibre:series']")

        return Metadata(
            title=dc("title") or re.sub(r"\.epub$", "", self.source_name, flags=re.IGNORECASE),
            creator=dc("creator") or "Unknown Author",
            language=dc("language") or "en",
            description=dc("description"),
            publisher=dc("publisher"),
            date=_normalize_date(dc("date")),
            series=series_el.get("content", "") if series_el is not None else "",
            subjects=subjects,
        )

    def _parse_manifest(self, opf_root: etree._Element, opf_dir: str) -> list[ManifestEntry]:
        entries = []
        for item in opf_root.iter("{*}item"):
            item_id = item.get("id")
            href = unquote(item.get("href") or "")
            media_type = item.get("media-type")
            if not (item_id and href and media_type):
                continue
            entries.append(
                ManifestEntry(item_id, href, media_type, resolve_href(opf_dir, href))
            )
        return entries

    def _extract_images(
        self,
        zf: zipfile.ZipFile,
        entries: list[ManifestEntry],
        next_image_id: int,
    ) -> tuple[list[ImageAsset], dict[str, ImageAsset], int]:
        """Extract manifest images, numbering them from ``next_image_id``.

        Returns the images, a lookup keyed by archive path and the next free
        image number.
        """
        images: list[ImageAsset] = []
        by_path: dict[str, ImageAsset] = {}

        for entry in entries:
            if not entry.media_type.startswith("image/"):
                continue
            try:
                data = zf.read(entry.zip_path)
            except KeyError:
                log.warning("Skipping %s: listed in manifest but not in archive", entry.zip_path)
                continue

            asset_id = format_asset_id(next_image_id)
            next_image_id += 1

            data_url = build_data_url(entry.media_type, data)
            _, payload = split_data_url(data_url)
            asset = ImageAsset(
                id=asset_id,
                name=PurePosixPath(entry.href).name or "image",
                data=data_url,
                type=entry.media_type,
                dimensions="N/A",
                size=base64_payload_size(payload),
            )
            images.append(asset)
            by_path[entry.zip_path] = asset

        return images, by_path, next_image_id

    def _extract_stylesheets(
        self, zf: zipfile.ZipFile, entries: list[ManifestEntry]
    ) -> tuple[str, list[ExtraFile]]:
        """Split stylesheets into the merged custom CSS and auxiliary files."""
        custom_css = ""
        extra_files: list[ExtraFile] = []

        for entry in entries:
            if entry.media_type != "text/css":
                continue
            try:
                text = _read_text(zf, entry.zip_path)
            except KeyError:
                log.warning("Skipping %s: listed in manifest but not in archive", entry.zip_path)
                continue

            filename = PurePosixPath(entry.href).name
            if filename.lower() in PRIMARY_STYLESHEETS:
                custom_css += text + "\n"
            else:
                extra_files.append(
                    ExtraFile(
                        id=entry.id.removeprefix(EXTRA_ITEM_PREFIX),
                        filename=filename,
                        content=text,
                        type="css",
                        is_active=True,
                    )
                )

        return custom_css, extra_files

    def _generated_pages(self, opf_root: etree._Element, opf_dir: str) -> set[str]:
        """Archive paths of the cover and contents pages named by the guide."""
        if self.options.include_guide_pages:
            return set()
        pages = set()
        for reference in opf_root.iter("{*}reference"):
            href = reference.get("href")
            if reference.get("type") in GENERATED_PAGE_TYPES and href:
                pages.add(resolve_href(opf_dir, unquote(href.split("#", 1)[0])))
        return pages

    def _extract_chapters(
        self,
        zf: zipfile.ZipFile,
        opf_root: etree._Element,
        opf_dir: str,
        entries: list[ManifestEntry],
        images_by_path: dict[str, ImageAsset],
    ) -> list[Chapter]:
        items = {entry.id: entry for entry in entries}
        skipped = self._generated_pages(opf_root, opf_dir)
        chapters = []

        for index, itemref in enumerate(opf_root.iter("{*}itemref")):
            entry = items.get(itemref.get("idref") or "")
            if entry is None or entry.media_type != XHTML_MEDIA_TYPE:
                continue
            if entry.zip_path in skipped:
                log.debug("Skipping generated page %s", entry.zip_path)
                continue
            try:
                raw = zf.read(entry.zip_path)
            except KeyError:
                log.warning("Skipping %s: listed in manifest but not in archive", entry.zip_path)
                continue
            chapters.append(self._parse_chapter(raw, index, entry, images_by_path))

        return chapters

    def _parse_chapter(
        self,
        raw: bytes,
        index: int,
        entry: ManifestEntry,
        images_by_path: dict[str, ImageAsset],
    ) -> Chapter:
        soup = BeautifulSoup(raw, "lxml")
        chapter_dir = parent_dir(entry.zip_path)

        images = soup.find_all(["img", "image"])
        for img in images:
            src_attr = "src" if img.name == "img" else "href"
            src = img.get(src_attr) or img.get("xlink:href")
            if not src:
                continue
            asset = images_by_path.get(resolve_href(chapter_dir, unquote(src)))
            if asset is None:
                continue
            img[src_attr] = image_href(asset.id, asset.type)
            img["data-id"] = asset.id
            img["data-filename"] = asset.name

        if self.options.remove_images:
            for img in images:
                img.decompose()

        if self.options.clean_html:
            _clean_markup(soup)

        title, sub_items = _outline_from_headings(soup)
        if title is None:
            title_tag = soup.find("title")
            title = title_tag.get_text().strip() if title_tag else ""
            title = title or f"Chapter {index + 1}"

        body = soup.body
        content = body.decode_contents() if body is not None else str(soup)
        return Chapter(
            id=_new_chapter_id(),
            title=title,
            content=content,
            level=1,
            sub_items=sub_items,
        )


def _clean_markup(soup: BeautifulSoup) -> None:
    """Strip scripting, styling and wrapper elements so the book theme applies."""
    for tag in soup(["script", "style", "link", "meta", "br"]):
        tag.decompose()
    for tag in soup(["span", "font"]):
        tag.unwrap()
    body = soup.body or soup
    for element in body.find_all(True):
        element.attrs.pop("style", None)
        element.attrs.pop("class", None)


def _outline_from_headings(soup: BeautifulSoup) -> tuple[str | None, list[TocItem]]:
    """First h1 is the chapter title; later h1/h2 headings become TOC items.

    Headings without an id get one, so the items can link to them.
    """
    title = None
    sub_items: list[TocItem] = []
    for heading in soup.find_all(["h1", "h2"]):
        if not heading.get("id"):
            heading["id"] = _new_heading_id()
        text = heading.get_text().strip() or "Untitled"
        if heading.name == "h1" and title is None:
            title = text
        elif heading.name == "h1":
            sub_items.append(TocItem(id=heading["id"], text=text, level=1))
        else:
            sub_items.append(TocItem(id=heading["id"], text=text, level=2))
    return title, sub_items


def decode_epub(path: Path, options: DecodeOptions | None = None) -> DecodeResult:
    """Read and decode an EPUB file from disk."""
    return EpubDecoder(path.read_bytes(), path.name, options).decode()
