"""Data model for preset book themes."""

from pydantic import BaseModel


class BookStyle(BaseModel):
    """Preset stylesheet selectable for a project."""

    id: str
    name: str
    css: str
