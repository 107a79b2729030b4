"""Upload storage and multipart form parsing."""

from __future__ import annotations

import io

import pytest
from starlette.datastructures import Headers, UploadFile

from codemart.interfaces.http.forms import build_update_input, parse_flag, parse_price
from codemart.modules.assets import AssetFileStorage, split_csv
from codemart.modules.common.errors import ValidationFailedError


def upload(name: str, payload: bytes, content_type: str) -> UploadFile:
    return UploadFile(file=io.BytesIO(payload), filename=name, headers=Headers({"content-type": content_type}))


async def test_store_and_discard(tmp_path) -> None:
    storage = AssetFileStorage(tmp_path, public_prefix="/uploads/")

    url = await storage.store(upload("my kit.zip", b"PK data", "application/zip"))

    name = url.rsplit("/", 1)[1]
    assert url.startswith("/uploads/")
    assert name.endswith("-my_kit.zip")
    assert (tmp_path / name).read_bytes() == b"PK data"

    storage.discard(url)
    assert not (tmp_path / name).exists()


async def test_oversized_upload_leaves_nothing_behind(tmp_path) -> None:
    storage = AssetFileStorage(tmp_path, max_bytes=4)

    with pytest.raises(ValidationFailedError, match="File too large"):
        await storage.store(upload("big.png", b"0123456789", "image/png"))

    assert list(tmp_path.iterdir()) == []


async def test_empty_upload_is_rejected(tmp_path) -> None:
    storage = AssetFileStorage(tmp_path)

    with pytest.raises(ValidationFailedError, match="empty"):
        await storage.store(upload("empty.zip", b"", "application/zip"))


def test_discard_ignores_foreign_urls(tmp_path) -> None:
    outside = tmp_path / "keep.txt"
    outside.write_text("stay")

    AssetFileStorage(tmp_path / "uploads").discard("https://cdn.example.com/keep.txt")

    assert outside.exists()


def test_form_helpers() -> None:
    assert parse_flag("TRUE") is True
    assert parse_flag("false") is False
    assert parse_flag("maybe") is None
    assert parse_price(" ") is None
    assert parse_price("12.5") == 12.5
    assert split_csv(" a, ,b,") == ["a", "b"]
    with pytest.raises(ValidationFailedError):
        parse_price("-1")
    with pytest.raises(ValidationFailedError):
        parse_price("cheap")


def test_update_input_treats_blanks_as_unset() -> None:
    payload = build_update_input(
        title="",
        description=None,
        category=" ",
        price=None,
        is_free=None,
        demo_url="",
        tags="",
        features=None,
        technologies=None,
        requirements=None,
    )

    assert payload.title is None
    assert payload.category is None
    assert payload.tags is None
    assert payload.is_free is None
