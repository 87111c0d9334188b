"""Decide how the book cover is stored, in both directions."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from epub_maker.core.assets import (
    AssetIndex,
    IMAGES_DIR,
    decode_data_url,
    image_item_id,
)
from epub_maker.core.package import ManifestItem
from epub_maker.models.project import ImageAsset, Project

log = logging.getLogger(__name__)

STANDALONE_COVER_ID = "cover-image"


@dataclass
class CoverPlan:
    """Where the cover image lives in the archive and how it is referenced."""

    href: str  # path relative to the package directory
    meta_id: str  # manifest id for <meta name="cover">
    standalone: ManifestItem | None = None  # separate manifest item, if written
    payload: bytes | None = None  # bytes of the standalone file

    @property
    def from_library(self) -> bool:
        return self.standalone is None


def plan_cover(project: Project, assets: AssetIndex) -> CoverPlan | None:
    """Pick the cover for export.

    A library image referenced by ``cover_id`` is reused as-is. Otherwise a
    standalone ``cover`` payload becomes its own top-level file.
    """
    if project.cover_id:
        image = project.find_image(project.cover_id)
        filename = assets.by_id.get(project.cover_id) if image else None
        if filename:
            return CoverPlan(
                href=f"{IMAGES_DIR}/{filename}",
                meta_id=image_item_id(project.cover_id),
            )
        log.debug("Cover reference %s not found in image library", project.cover_id)

    if project.cover:
        is_png = project.cover.startswith("data:image/png")
        href = "cover.png" if is_png else "cover.jpg"
        media_type = "image/png" if is_png else "image/jpeg"
        return CoverPlan(
            href=href,
            meta_id=STANDALONE_COVER_ID,
            standalone=ManifestItem(STANDALONE_COVER_ID, href, media_type),
            payload=decode_data_url(project.cover),
        )

    return None


def resolve_cover(
    cover_meta_id: str | None,
    item_paths: Mapping[str, str],
    images_by_path: Mapping[str, ImageAsset],
) -> ImageAsset | None:
    """Follow ``<meta name="cover">`` to an extracted image.

    Any broken link in the chain means the book simply has no cover.
    """
    if not cover_meta_id:
        return None
    zip_path = item_paths.get(cover_meta_id)
    if zip_path is None:
        log.debug("Cover item %s missing from manifest", cover_meta_id)
        return None
    return images_by_path.get(zip_path)
