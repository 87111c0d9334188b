"""Data models."""

from epub_maker.models.options import DecodeOptions
from epub_maker.models.project import (
    Chapter,
    ExtraFile,
    ImageAsset,
    Metadata,
    Project,
    TocItem,
)
from epub_maker.models.style import BookStyle

__all__ = [
    # Project models
    "TocItem",
    "Chapter",
    "Metadata",
    "ImageAsset",
    "ExtraFile",
    "Project",
    # Options
    "DecodeOptions",
    # Styles
    "BookStyle",
]
