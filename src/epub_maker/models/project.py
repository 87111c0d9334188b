"""Data models for the editable book project."""

import datetime
from typing import Literal

from pydantic import BaseModel, Field


class TocItem(BaseModel):
    """Heading inside a chapter that appears in the directory."""

    id: str  # HTML id attribute of the heading, never regenerated
    text: str
    level: Literal[1, 2] = 2


class Chapter(BaseModel):
    """Chapter content and outline position."""

    id: str
    title: str
    content: str = ""  # body markup
    level: Literal[1, 2] = 1
    sub_items: list[TocItem] = Field(default_factory=list)
    exclude_from_toc: bool = False


class Metadata(BaseModel):
    """Book-level metadata."""

    title: str
    creator: str
    language: str = "zh"
    description: str = ""
    publisher: str = ""
    date: str = Field(default_factory=lambda: datetime.date.today().isoformat())
    series: str = ""
    subjects: list[str] = Field(default_factory=list)


class ImageAsset(BaseModel):
    """Image from the project library, embedded as a base64 data URL."""

    id: str  # sequential, zero-padded
    name: str  # original display name
    data: str
    type: str  # mime type
    dimensions: str = "N/A"
    size: int = 0


class ExtraFile(BaseModel):
    """Auxiliary stylesheet or XML file shipped alongside the chapters."""

    id: str
    filename: str
    content: str = ""
    type: Literal["css", "text", "xml"] = "css"
    is_active: bool = True
    # None means the file applies to every chapter
    target_chapter_ids: list[str] | None = None


class Project(BaseModel):
    """Complete book project."""

    metadata: Metadata
    chapters: list[Chapter] = Field(default_factory=list)
    images: list[ImageAsset] = Field(default_factory=list)
    extra_files: list[ExtraFile] = Field(default_factory=list)
    cover: str | None = None  # data URL of a standalone cover
    cover_id: str | None = None  # id of a library image used as cover
    active_style_id: str = "classic"
    is_preset_style_active: bool = True
    custom_css: str = ""

    @classmethod
    def new(cls) -> "Project":
        """Return the fresh-start project."""
        return cls(metadata=Metadata(title="未命名书籍", creator="未知作者"))

    def find_image(self, image_id: str | None) -> ImageAsset | None:
        if image_id is None:
            return None
        for image in self.images:
            if image.id == image_id:
                return image
        return None
