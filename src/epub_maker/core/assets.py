"""Deterministic naming and lookup of embedded images."""

import base64
import logging

from bs4 import BeautifulSoup

from epub_maker.models.project import ImageAsset

log = logging.getLogger(__name__)

IMAGES_DIR = "images"
ASSET_ID_WIDTH = 3


def format_asset_id(number: int) -> str:
    """Zero-pad a sequential image number into an asset id."""
    return str(number).zfill(ASSET_ID_WIDTH)


def image_extension(mime_type: str) -> str:
    """File extension used in the archive for a MIME type."""
    if "png" in mime_type:
        return "png"
    if "gif" in mime_type:
        return "gif"
    if "webp" in mime_type:
        return "webp"
    return "jpg"


def image_filename(asset_id: str, mime_type: str) -> str:
    return f"img_{asset_id}.{image_extension(mime_type)}"


def image_href(asset_id: str, mime_type: str) -> str:
    """Archive path of an image relative to the package directory."""
    return f"{IMAGES_DIR}/{image_filename(asset_id, mime_type)}"


def image_item_id(asset_id: str) -> str:
    return f"img_{asset_id}"


def base64_payload_size(payload: str) -> int:
    """Decoded byte size of a base64 string, accounting for padding."""
    return (len(payload) * 3) // 4 - payload.count("=")


def split_data_url(data_url: str) -> tuple[str, str]:
    """Split ``data:<mime>;base64,<payload>`` into (mime, payload).

    Strings without a header are treated as a bare payload with empty mime.
    """
    header, sep, payload = data_url.partition(",")
    if not sep:
        return "", data_url
    mime_type = header.removeprefix("data:").split(";", 1)[0]
    return mime_type, payload


def build_data_url(mime_type: str, data: bytes) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def decode_data_url(data_url: str) -> bytes:
    _, payload = split_data_url(data_url)
    return base64.b64decode(payload)


class AssetIndex:
    """Lookup tables from image references to archive filenames.

    ``by_id`` is authoritative; ``by_name`` serves markup written before
    images carried canonical ids.
    """

    def __init__(self, images: list[ImageAsset]):
        self.by_name: dict[str, str] = {}
        self.by_id: dict[str, str] = {}
        for image in images:
            filename = image_filename(image.id, image.type)
            self.by_name[image.name] = filename
            self.by_id[image.id] = filename

    def lookup(self, asset_id: str | None, name: str | None) -> str | None:
        """Return the archive filename for a reference, or None."""
        if asset_id and asset_id in self.by_id:
            return self.by_id[asset_id]
        if name and name in self.by_name:
            return self.by_name[name]
        return None

    def rewrite_references(self, html: str) -> str:
        """Point every resolvable ``<img>`` at its archive path.

        Images whose ``data-id``/``data-filename`` match nothing keep their
        original ``src``.
        """
        soup = BeautifulSoup(html, "html.parser")
        for img in soup.find_all("img"):
            filename = self.lookup(img.get("data-id"), img.get("data-filename"))
            if filename is None:
                log.debug("Unresolved image reference: %s", img.get("data-id"))
                continue
            img["src"] = f"{IMAGES_DIR}/{filename}"
        return str(soup)
