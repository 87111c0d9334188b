from __future__ import annotations

import pytest

from epub_maker.core.assets import build_data_url
from epub_maker.models import Chapter, ExtraFile, ImageAsset, Metadata, Project

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def png_data_url(png_bytes: bytes) -> str:
    return build_data_url("image/png", png_bytes)


@pytest.fixture
def jpeg_data_url(jpeg_bytes: bytes) -> str:
    return build_data_url("image/jpeg", jpeg_bytes)


@pytest.fixture
def sample_project(png_data_url: str, png_bytes: bytes) -> Project:
    image = ImageAsset(
        id="001",
        name="figure.png",
        data=png_data_url,
        type="image/png",
        size=len(png_bytes),
    )
    chapters = [
        Chapter(id="c1", title="Part One", content="<p>Intro & welcome<br></p>", level=1),
        Chapter(
            id="c2",
            title="Section A",
            content='<p><img data-id="001" data-filename="figure.png" src="blob:local"></p>',
            level=2,
        ),
        Chapter(id="c3", title="Section B", content="<p>B</p>", level=2),
        Chapter(id="c4", title="Part Two", content="<p>Two</p>", level=1),
    ]
    metadata = Metadata(
        title="Sample Book",
        creator="Sample Author",
        language="en",
        description="A test book.",
        publisher="Test Press",
        date="2024-05-06",
        series="Samples",
        subjects=["Fiction", "Test"],
    )
    return Project(
        metadata=metadata,
        chapters=chapters,
        images=[image],
        cover_id="001",
        extra_files=[
            ExtraFile(id="fonts", filename="fonts.css", content="body {}", target_chapter_ids=["c1"])
        ],
        custom_css="p { margin: 0; }",
    )
