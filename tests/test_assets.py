from __future__ import annotations

from epub_maker.core.assets import (
    AssetIndex,
    base64_payload_size,
    decode_data_url,
    format_asset_id,
    image_extension,
    image_filename,
    image_href,
    image_item_id,
    split_data_url,
)
from epub_maker.models import ImageAsset


def test_format_asset_id_zero_pads() -> None:
    assert format_asset_id(1) == "001"
    assert format_asset_id(42) == "042"
    assert format_asset_id(1234) == "1234"


def test_image_naming() -> None:
    assert image_extension("image/png") == "png"
    assert image_extension("image/gif") == "gif"
    assert image_extension("image/webp") == "webp"
    assert image_extension("image/jpeg") == "jpg"
    assert image_extension("image/svg+xml") == "jpg"
    assert image_filename("001", "image/png") == "img_001.png"
    assert image_href("007", "image/jpeg") == "images/img_007.jpg"
    assert image_item_id("003") == "img_003"


def test_base64_payload_size_accounts_for_padding() -> None:
    assert base64_payload_size("aGVsbG8=") == 5
    assert base64_payload_size("aGk=") == 2
    assert base64_payload_size("YWJj") == 3


def test_split_data_url(png_data_url: str, png_bytes: bytes) -> None:
    mime, payload = split_data_url(png_data_url)
    assert mime == "image/png"
    assert base64_payload_size(payload) == len(png_bytes)
    assert split_data_url("QUJD") == ("", "QUJD")
    assert decode_data_url(png_data_url) == png_bytes


def _index(png_data_url: str) -> AssetIndex:
    return AssetIndex(
        [ImageAsset(id="001", name="pic.png", data=png_data_url, type="image/png")]
    )


def test_rewrite_references_by_id(png_data_url: str) -> None:
    html = _index(png_data_url).rewrite_references('<p><img data-id="001" src="blob:x"/></p>')
    assert 'src="images/img_001.png"' in html
    assert "blob:x" not in html


def test_rewrite_references_falls_back_to_filename(png_data_url: str) -> None:
    html = _index(png_data_url).rewrite_references('<img data-filename="pic.png" src="old.png"/>')
    assert 'src="images/img_001.png"' in html


def test_unresolved_references_are_preserved(png_data_url: str) -> None:
    html = _index(png_data_url).rewrite_references('<img data-id="999" src="keep.png"/>')
    assert 'src="keep.png"' in html
