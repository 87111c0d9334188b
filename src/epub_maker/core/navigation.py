"""Legacy NCX navigation built from the flat, leveled chapter list."""

from dataclasses import dataclass, field

from lxml import etree

from epub_maker.core.package import (
    COVER_PAGE_FILENAME,
    NAV_PAGE_FILENAME,
    chapter_filename,
)
from epub_maker.models.project import Chapter

NCX_NS = "http://www.daisy.org/z3986/2005/ncx/"
NAV_PAGE_LABEL = "目录"
COVER_LABEL = "Cover"


@dataclass
class NavPoint:
    """One entry of the navMap, possibly holding nested entries."""

    id: str
    play_order: int
    label: str
    src: str
    children: list["NavPoint"] = field(default_factory=list)


class NavigationBuilder:
    """Nest chapters into a two-level tree with an open/close state machine.

    ``current_level`` is 0 before any chapter, 1 while a top-level entry is
    open and 2 while a nested entry is open. The play-order counter is
    shared by every entry added through the builder.
    """

    def __init__(self, start_play_order: int = 1):
        self.points: list[NavPoint] = []
        self.current_level = 0
        self._play_order = start_play_order
        self._open: list[NavPoint] = []

    def _next_point(self, point_id: str, label: str, src: str) -> NavPoint:
        point = NavPoint(point_id, self._play_order, label, src)
        self._play_order += 1
        return point

    def _close(self, count: int) -> None:
        for _ in range(count):
            self._open.pop()

    def add_page(self, point_id: str, label: str, src: str) -> NavPoint:
        """Add a top-level entry for a generated page (cover, contents)."""
        point = self._next_point(point_id, label, src)
        self.points.append(point)
        return point

    def add_chapter(self, index: int, chapter: Chapter) -> NavPoint:
        point = self._next_point(f"navPoint-{index}", chapter.title, chapter_filename(index))

        if chapter.level == 1:
            if self.current_level == 2:
                self._close(2)
            elif self.current_level == 1:
                self._close(1)
            self.points.append(point)
            self._open.append(point)
            self.current_level = 1
            return point

        if self.current_level == 2:
            self._close(1)
        if self.current_level == 0:
            # no enclosing entry: keep it top-level without opening a scope
            self.points.append(point)
            return point
        self._open[-1].children.append(point)
        self._open.append(point)
        self.current_level = 2
        return point

    def add_chapters(self, chapters: list[Chapter]) -> list[NavPoint]:
        for index, chapter in enumerate(chapters):
            if chapter.exclude_from_toc:
                continue
            self.add_chapter(index, chapter)
        self.finish()
        return self.points

    def finish(self) -> None:
        """Flush any scopes still open after the last chapter."""
        self._close(len(self._open))
        self.current_level = 0


def build_nav_points(chapters: list[Chapter], has_cover: bool) -> list[NavPoint]:
    """Cover entry, contents-page entry, then the nested chapter entries."""
    builder = NavigationBuilder()
    if has_cover:
        builder.add_page("navPoint-cover", COVER_LABEL, COVER_PAGE_FILENAME)
    builder.add_page("navPoint-toc", NAV_PAGE_LABEL, NAV_PAGE_FILENAME)
    return builder.add_chapters(chapters)


def _append_nav_point(parent: etree._Element, point: NavPoint) -> None:
    element = etree.SubElement(
        parent, f"{{{NCX_NS}}}navPoint", id=point.id, playOrder=str(point.play_order)
    )
    label = etree.SubElement(element, f"{{{NCX_NS}}}navLabel")
    etree.SubElement(label, f"{{{NCX_NS}}}text").text = point.label
    etree.SubElement(element, f"{{{NCX_NS}}}content", src=point.src)
    for child in point.children:
        _append_nav_point(element, child)


def render_ncx(points: list[NavPoint], uid: str, title: str) -> bytes:
    """Serialize navigation entries to ``toc.ncx`` bytes."""
    root = etree.Element(f"{{{NCX_NS}}}ncx", nsmap={None: NCX_NS}, version="2005-1")
    head = etree.SubElement(root, f"{{{NCX_NS}}}head")
    for name, content in (
        ("dtb:uid", uid),
        ("dtb:depth", "2"),
        ("dtb:totalPageCount", "0"),
        ("dtb:maxPageNumber", "0"),
    ):
        etree.SubElement(head, f"{{{NCX_NS}}}meta", name=name, content=content)

    doc_title = etree.SubElement(root, f"{{{NCX_NS}}}docTitle")
    etree.SubElement(doc_title, f"{{{NCX_NS}}}text").text = title

    nav_map = etree.SubElement(root, f"{{{NCX_NS}}}navMap")
    for point in points:
        _append_nav_point(nav_map, point)

    return etree.tostring(root, xml_declaration=True, encoding="utf-8", pretty_print=True)
