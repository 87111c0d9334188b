from __future__ import annotations

import datetime
import zipfile
from pathlib import Path

import pytest

from epub_maker.core.decoder import EpubDecoder, decode_epub
from epub_maker.core.errors import InvalidEpubError
from epub_maker.models import DecodeOptions

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF_XML = """<?xml version="1.0" encoding="UTF-8"?>
<package version="2.0" unique-identifier="id" xmlns="http://www.idpf.org/2007/opf">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:title>Sample Book</dc:title>
    <dc:creator>Sample Author</dc:creator>
    <dc:language>ja</dc:language>
    <dc:publisher>Test Press</dc:publisher>
    <dc:date>2019-03-04T00:00:00Z</dc:date>
    <dc:subject>Fiction</dc:subject>
    <dc:subject>Test</dc:subject>
    <meta name="calibre:series" content="Series A"/>
    <meta name="cover" content="cover-img"/>
  </metadata>
  <manifest>
    <item id="cover-img" href="Images/cover.jpg" media-type="image/jpeg"/>
    <item id="pic" href="Images/pic%201.png" media-type="image/png"/>
    <item id="missing" href="Images/missing.png" media-type="image/png"/>
    <item id="css" href="Styles/style.css" media-type="text/css"/>
    <item id="fonts" href="Styles/fonts.css" media-type="text/css"/>
    <item id="titlepage" href="Text/cover.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch1" href="Text/ch1.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch2" href="Text/ch2.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch3" href="Text/ch3.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
  <spine>
    <itemref idref="titlepage"/>
    <itemref idref="ch1"/>
    <itemref idref="ch2"/>
    <itemref idref="ch3"/>
  </spine>
  <guide>
    <reference type="cover" title="Cover" href="Text/cover.xhtml"/>
  </guide>
</package>
"""

COVER_HTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml"><head><title>Cover</title></head>
<body><img src="../Images/cover.jpg" alt=""/></body></html>
"""

CH1_HTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml"><head><title>ignored</title></head>
<body>
<h1>Chapter <b>One</b></h1>
<p>Text <img src="../Images/pic%201.png" alt=""/></p>
<h2 id="s1">Section</h2>
<h1>Interlude</h1>
<h2>Other</h2>
</body></html>
"""

CH2_HTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml"><head><title>Second</title>
<link rel="stylesheet" href="../Styles/style.css"/></head>
<body><p style="color:red" class="x"><span>Hi</span><font>there</font><br/>end</p>
<script>alert(1)</script></body></html>
"""

CH3_HTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml"><head></head><body><p>No title</p></body></html>
"""


def _write_epub(path: Path, files: dict[str, str | bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip")
        for name, data in files.items():
            zf.writestr(name, data)
    return path


@pytest.fixture
def sample_files(png_bytes: bytes, jpeg_bytes: bytes) -> dict[str, str | bytes]:
    return {
        "META-INF/container.xml": CONTAINER_XML,
        "OPS/content.opf": OPF_XML,
        "OPS/Images/cover.jpg": jpeg_bytes,
        "OPS/Images/pic 1.png": png_bytes,
        "OPS/Styles/style.css": "p { color: blue; }",
        "OPS/Styles/fonts.css": "@font-face {}",
        "OPS/Text/cover.xhtml": COVER_HTML,
        "OPS/Text/ch1.xhtml": CH1_HTML,
        "OPS/Text/ch2.xhtml": CH2_HTML,
        "OPS/Text/ch3.xhtml": CH3_HTML,
    }


@pytest.fixture
def sample_epub(tmp_path: Path, sample_files: dict[str, str | bytes]) -> Path:
    return _write_epub(tmp_path / "sample.epub", sample_files)


def test_metadata(sample_epub: Path) -> None:
    metadata = decode_epub(sample_epub).project.metadata

    assert metadata.title == "Sample Book"
    assert metadata.creator == "Sample Author"
    assert metadata.language == "ja"
    assert metadata.publisher == "Test Press"
    assert metadata.date == "2019-03-04"
    assert metadata.subjects == ["Fiction", "Test"]
    assert metadata.series == "Series A"


def test_metadata_fallbacks(tmp_path: Path, sample_files: dict[str, str | bytes]) -> None:
    files = sample_files
    files["OPS/content.opf"] = """<?xml version="1.0"?>
<package version="2.0" xmlns="http://www.idpf.org/2007/opf">
  <metadata/>
  <manifest/>
  <spine/>
</package>"""
    path = _write_epub(tmp_path / "My Novel.epub", files)

    project = decode_epub(path).project

    assert project.metadata.title == "My Novel"
    assert project.metadata.creator == "Unknown Author"
    assert project.metadata.language == "en"
    assert project.metadata.date == datetime.date.today().isoformat()
    assert project.chapters == []
    assert project.cover is None


def test_images_are_numbered_in_manifest_order(sample_epub: Path, png_bytes: bytes) -> None:
    result = decode_epub(sample_epub)
    images = result.project.images

    assert [image.id for image in images] == ["001", "002"]
    assert [image.name for image in images] == ["cover.jpg", "pic 1.png"]
    assert images[1].type == "image/png"
    assert images[1].size == len(png_bytes)
    assert images[1].dimensions == "N/A"
    assert result.next_image_id == 3


def test_image_start_id_is_threaded(sample_epub: Path) -> None:
    result = decode_epub(sample_epub, DecodeOptions(image_start_id=7))

    assert [image.id for image in result.project.images] == ["007", "008"]
    assert result.next_image_id == 9
    assert result.project.cover_id == "007"


def test_cover(sample_epub: Path) -> None:
    project = decode_epub(sample_epub).project

    assert project.cover_id == "001"
    assert project.cover.startswith("data:image/jpeg;base64,")


def test_stylesheets(sample_epub: Path) -> None:
    project = decode_epub(sample_epub).project

    assert "p { color: blue; }" in project.custom_css
    assert [extra.filename for extra in project.extra_files] == ["fonts.css"]
    assert project.extra_files[0].content == "@font-face {}"


def test_chapters_follow_spine_and_skip_cover_page(sample_epub: Path) -> None:
    chapters = decode_epub(sample_epub).project.chapters

    assert [c.title for c in chapters] == ["Chapter One", "Second", "Chapter 4"]
    assert len({c.id for c in chapters}) == 3
    assert all(c.level == 1 for c in chapters)


def test_guide_pages_can_be_kept(sample_epub: Path) -> None:
    options = DecodeOptions(include_guide_pages=True)
    chapters = decode_epub(sample_epub, options).project.chapters

    assert [c.title for c in chapters][0] == "Cover"
    assert len(chapters) == 4


def test_image_references_are_rewritten(sample_epub: Path) -> None:
    content = decode_epub(sample_epub).project.chapters[0].content

    assert 'src="images/img_002.png"' in content
    assert 'data-id="002"' in content
    assert 'data-filename="pic 1.png"' in content
    assert "<body" not in content


def test_headings_become_toc_items(sample_epub: Path) -> None:
    chapter = decode_epub(sample_epub).project.chapters[0]

    assert [(item.text, item.level) for item in chapter.sub_items] == [
        ("Section", 2),
        ("Interlude", 1),
        ("Other", 2),
    ]
    assert chapter.sub_items[0].id == "s1"
    generated = chapter.sub_items[2].id
    assert generated.startswith("heading-")
    assert f'id="{generated}"' in chapter.content


def test_markup_is_kept_without_clean_mode(sample_epub: Path) -> None:
    content = decode_epub(sample_epub).project.chapters[1].content

    assert 'style="color:red"' in content
    assert "<span>" in content
    assert "<script>" in content


def test_clean_mode(sample_epub: Path) -> None:
    content = decode_epub(sample_epub, DecodeOptions(clean_html=True)).project.chapters[1].content

    assert "style=" not in content
    assert "class=" not in content
    assert "<span" not in content
    assert "<font" not in content
    assert "<script" not in content
    assert "<br" not in content
    assert "Hi" in content
    assert "there" in content


def test_remove_images(sample_epub: Path) -> None:
    result = decode_epub(sample_epub, DecodeOptions(remove_images=True))

    assert "<img" not in result.project.chapters[0].content
    assert len(result.project.images) == 2


def test_missing_resource_is_skipped(tmp_path: Path, sample_files: dict[str, str | bytes]) -> None:
    files = sample_files
    del files["OPS/Text/ch3.xhtml"]
    del files["OPS/Images/cover.jpg"]
    path = _write_epub(tmp_path / "partial.epub", files)

    result = decode_epub(path)

    assert [image.name for image in result.project.images] == ["pic 1.png"]
    assert len(result.project.chapters) == 2
    assert result.project.cover is None
    assert result.project.cover_id is None


def test_opf_at_archive_root(tmp_path: Path, png_bytes: bytes) -> None:
    files = {
        "META-INF/container.xml": CONTAINER_XML.replace("OPS/content.opf", "content.opf"),
        "content.opf": OPF_XML.replace('href="Text/', 'href="').replace('href="Images/', 'href="'),
        "ch1.xhtml": CH1_HTML.replace("../Images/", ""),
        "pic 1.png": png_bytes,
    }
    path = _write_epub(tmp_path / "flat.epub", files)

    project = decode_epub(path).project

    assert [image.name for image in project.images] == ["pic 1.png"]
    assert [c.title for c in project.chapters] == ["Chapter One"]
    assert 'src="images/img_001.png"' in project.chapters[0].content


def test_not_a_zip() -> None:
    with pytest.raises(InvalidEpubError):
        EpubDecoder(b"plain text", "x.epub").decode()


def test_missing_container(tmp_path: Path, sample_files: dict[str, str | bytes]) -> None:
    files = sample_files
    del files["META-INF/container.xml"]
    path = _write_epub(tmp_path / "bad.epub", files)

    with pytest.raises(InvalidEpubError, match="container.xml"):
        decode_epub(path)


def test_unparsable_container(tmp_path: Path, sample_files: dict[str, str | bytes]) -> None:
    files = sample_files
    files["META-INF/container.xml"] = "<container"
    path = _write_epub(tmp_path / "bad.epub", files)

    with pytest.raises(InvalidEpubError):
        decode_epub(path)


def test_container_without_rootfile(tmp_path: Path, sample_files: dict[str, str | bytes]) -> None:
    files = sample_files
    files["META-INF/container.xml"] = CONTAINER_XML.replace(
        'full-path="OPS/content.opf" ', ""
    )
    path = _write_epub(tmp_path / "bad.epub", files)

    with pytest.raises(InvalidEpubError, match="OPF file path"):
        decode_epub(path)


def test_missing_package_document(tmp_path: Path, sample_files: dict[str, str | bytes]) -> None:
    files = sample_files
    del files["OPS/content.opf"]
    path = _write_epub(tmp_path / "bad.epub", files)

    with pytest.raises(ValueError, match="OPS/content.opf"):
        decode_epub(path)


def test_corrupt_member_is_an_invalid_epub(
    tmp_path: Path, sample_files: dict[str, str | bytes]
) -> None:
    path = _write_epub(tmp_path / "corrupt.epub", sample_files)
    # members are stored, so flipping stylesheet bytes breaks only their CRC
    path.write_bytes(path.read_bytes().replace(b"color: blue", b"color: blux"))

    with pytest.raises(InvalidEpubError, match="corrupt entry"):
        decode_epub(path)
