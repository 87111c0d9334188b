"""XHTML content documents: chapters, the cover page and the contents page."""

from html import escape

from epub_maker.core.assets import AssetIndex
from epub_maker.core.package import STYLE_FILENAME, chapter_filename
from epub_maker.core.sanitizer import fix_xhtml
from epub_maker.models.project import Chapter, ExtraFile

NAV_PAGE_HEADING = "目录"

_XHTML_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
  <title>{title}</title>
  {links}
</head>
<body{body_attrs}>
  {body}
</body>
</html>"""


def _stylesheet_link(href: str) -> str:
    return f'<link rel="stylesheet" type="text/css" href="{escape(href)}"/>'


def _xhtml_document(
    title: str, body: str, stylesheets: list[str], body_class: str | None = None
) -> str:
    return _XHTML_TEMPLATE.format(
        title=escape(title, quote=False),
        links="\n  ".join(_stylesheet_link(href) for href in stylesheets),
        body_attrs=f' class="{body_class}"' if body_class else "",
        body=body,
    )


def chapter_stylesheets(chapter: Chapter, extra_files: list[ExtraFile]) -> list[str]:
    """Global stylesheet plus every active extra stylesheet scoped to the chapter."""
    links = [STYLE_FILENAME]
    for extra in extra_files:
        if extra.type != "css" or not extra.is_active:
            continue
        if extra.target_chapter_ids is None or chapter.id in extra.target_chapter_ids:
            links.append(extra.filename)
    return links


def render_chapter_document(
    chapter: Chapter, assets: AssetIndex, extra_files: list[ExtraFile]
) -> str:
    """Build the XHTML file for a chapter.

    Image references are pointed at archive paths before the markup is
    sanitized; references that resolve to nothing are kept unchanged.
    """
    body = fix_xhtml(assets.rewrite_references(chapter.content))
    return _xhtml_document(chapter.title, body, chapter_stylesheets(chapter, extra_files))


def render_cover_page(cover_href: str) -> str:
    body = (
        '<div class="cover-container">\n'
        f'     <img src="{escape(cover_href)}" alt="Cover Image" class="cover-image" />\n'
        "  </div>"
    )
    return _xhtml_document("Cover", body, [STYLE_FILENAME], body_class="cover-page")


def render_nav_page(chapters: list[Chapter]) -> str:
    """Flat, visual table of contents linking every listed chapter."""
    items = []
    for index, chapter in enumerate(chapters):
        if chapter.exclude_from_toc:
            continue
        indent_class = "toc-level-2" if chapter.level == 2 else "toc-level-1"
        items.append(
            f'<li class="toc-item {indent_class}">'
            f'<a class="toc-link" href="{chapter_filename(index)}">'
            f"{escape(chapter.title, quote=False)}</a></li>"
        )
    body = (
        f"<h1>{NAV_PAGE_HEADING}</h1>\n"
        '  <ul class="toc-list">\n'
        "    " + "\n    ".join(items) + "\n"
        "  </ul>"
    )
    return _xhtml_document("Table of Contents", body, [STYLE_FILENAME])
