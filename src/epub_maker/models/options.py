"""Options controlling EPUB import."""

from pydantic import BaseModel, Field


class DecodeOptions(BaseModel):
    """How an EPUB is turned back into a project."""

    image_start_id: int = Field(default=1, ge=0)
    clean_html: bool = False  # strip scripts, inline styles and wrapper spans
    remove_images: bool = False
    # import cover/contents pages named by the guide as ordinary chapters
    include_guide_pages: bool = False
