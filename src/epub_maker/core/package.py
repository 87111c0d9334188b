"""Manifest, spine, guide and metadata of the OPF package document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lxml import etree

from epub_maker.core.assets import AssetIndex, image_href, image_item_id
from epub_maker.models.project import Metadata, Project

if TYPE_CHECKING:
    from epub_maker.core.cover import CoverPlan

OEBPS_DIR = "OEBPS"
OPF_FILENAME = "content.opf"
NCX_FILENAME = "toc.ncx"
NAV_PAGE_FILENAME = "toc.xhtml"
STYLE_FILENAME = "style.css"
COVER_PAGE_FILENAME = "cover.xhtml"

XHTML_MEDIA_TYPE = "application/xhtml+xml"
CSS_MEDIA_TYPE = "text/css"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
XML_MEDIA_TYPE = "application/xml"

OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"
BOOK_ID = "BookId"
EXTRA_ITEM_PREFIX = "extra_"


def chapter_filename(index: int) -> str:
    return f"chapter_{index}.xhtml"


def chapter_item_id(index: int) -> str:
    return f"chapter_{index}"


def extra_item_id(extra_id: str) -> str:
    return f"{EXTRA_ITEM_PREFIX}{extra_id}"


@dataclass
class ManifestItem:
    """Resource listed in the manifest."""

    id: str
    href: str
    media_type: str


@dataclass
class GuideReference:
    type: str
    title: str
    href: str


@dataclass
class PackageDocument:
    """Everything needed to render ``content.opf``."""

    metadata: Metadata
    uid: str
    manifest: list[ManifestItem] = field(default_factory=list)
    spine: list[str] = field(default_factory=list)  # manifest idrefs
    guide: list[GuideReference] = field(default_factory=list)
    cover_meta_id: str | None = None


class PackageBuilder:
    """Assemble package entries from a project in dependency order."""

    def __init__(
        self,
        project: Project,
        assets: AssetIndex,
        cover: CoverPlan | None,
        uid: str,
    ):
        self.project = project
        self.assets = assets
        self.cover = cover
        self.uid = uid

    def build(self) -> PackageDocument:
        return PackageDocument(
            metadata=self.project.metadata,
            uid=self.uid,
            manifest=self._manifest(),
            spine=self._spine(),
            guide=self._guide(),
            cover_meta_id=self.cover.meta_id if self.cover else None,
        )

    def _manifest(self) -> list[ManifestItem]:
        items: list[ManifestItem] = []

        if self.cover:
            if self.cover.standalone is not None:
                items.append(self.cover.standalone)
            items.append(ManifestItem("cover", COVER_PAGE_FILENAME, XHTML_MEDIA_TYPE))

        items.append(ManifestItem("toc", NAV_PAGE_FILENAME, XHTML_MEDIA_TYPE))
        items.append(ManifestItem("style", STYLE_FILENAME, CSS_MEDIA_TYPE))
        items.append(ManifestItem("ncx", NCX_FILENAME, NCX_MEDIA_TYPE))

        for extra in self.project.extra_files:
            if not extra.is_active:
                continue
            media_type = CSS_MEDIA_TYPE if extra.type == "css" else XML_MEDIA_TYPE
            items.append(ManifestItem(extra_item_id(extra.id), extra.filename, media_type))

        for image in self.project.images:
            if image.id in self.assets.by_id:
                items.append(
                    ManifestItem(
                        image_item_id(image.id),
                        image_href(image.id, image.type),
                        image.type,
                    )
                )

        for index, _ in enumerate(self.project.chapters):
            items.append(
                ManifestItem(chapter_item_id(index), chapter_filename(index), XHTML_MEDIA_TYPE)
            )

        return items

    def _spine(self) -> list[str]:
        spine = ["cover"] if self.cover else []
        spine.append("toc")
        spine.extend(chapter_item_id(i) for i, _ in enumerate(self.project.chapters))
        return spine

    def _guide(self) -> list[GuideReference]:
        guide = []
        if self.cover:
            guide.append(GuideReference("cover", "Cover", COVER_PAGE_FILENAME))
        guide.append(GuideReference("toc", "Table of Contents", NAV_PAGE_FILENAME))
        return guide


def _dc(
    parent: etree._Element, name: str, text: str, **opf_attrs: str
) -> etree._Element:
    # opf:* attributes get a local xmlns:opf so package elements keep the default namespace
    nsmap = {"opf": OPF_NS} if opf_attrs else None
    element = etree.SubElement(parent, f"{{{DC_NS}}}{name}", nsmap=nsmap)
    element.text = text
    for attr, value in opf_attrs.items():
        element.set(f"{{{OPF_NS}}}{attr}", value)
    return element


def render_opf(package: PackageDocument) -> bytes:
    """Serialize a package document to ``content.opf`` bytes."""
    root = etree.Element(
        f"{{{OPF_NS}}}package",
        nsmap={None: OPF_NS},
        attrib={"unique-identifier": BOOK_ID, "version": "2.0"},
    )
    metadata_el = etree.SubElement(
        root, f"{{{OPF_NS}}}metadata", nsmap={"dc": DC_NS}
    )

    meta = package.metadata
    _dc(metadata_el, "title", meta.title)
    _dc(metadata_el, "creator", meta.creator, role="aut")
    _dc(metadata_el, "language", meta.language)
    _dc(metadata_el, "identifier", package.uid, scheme="UUID").set("id", BOOK_ID)
    _dc(metadata_el, "description", meta.description)
    if meta.publisher:
        _dc(metadata_el, "publisher", meta.publisher)
    if meta.date:
        _dc(metadata_el, "date", meta.date)
    if meta.series:
        etree.SubElement(
            metadata_el, f"{{{OPF_NS}}}meta", name="calibre:series", content=meta.series
        )
    for subject in meta.subjects:
        _dc(metadata_el, "subject", subject)
    if package.cover_meta_id:
        etree.SubElement(
            metadata_el, f"{{{OPF_NS}}}meta", name="cover", content=package.cover_meta_id
        )

    manifest_el = etree.SubElement(root, f"{{{OPF_NS}}}manifest")
    for item in package.manifest:
        etree.SubElement(
            manifest_el,
            f"{{{OPF_NS}}}item",
            attrib={"id": item.id, "href": item.href, "media-type": item.media_type},
        )

    spine_el = etree.SubElement(root, f"{{{OPF_NS}}}spine", toc="ncx")
    for idref in package.spine:
        etree.SubElement(spine_el, f"{{{OPF_NS}}}itemref", idref=idref)

    guide_el = etree.SubElement(root, f"{{{OPF_NS}}}guide")
    for ref in package.guide:
        etree.SubElement(
            guide_el,
            f"{{{OPF_NS}}}reference",
            type=ref.type,
            title=ref.title,
            href=ref.href,
        )

    return etree.tostring(root, xml_declaration=True, encoding="utf-8", pretty_print=True)
