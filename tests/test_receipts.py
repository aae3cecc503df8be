"""Mini README: Tests for the local receipt store.

These tests confirm uploads are renamed and size/extension checked, that
listing, downloading and deleting work on the stored names, and that names
trying to leave the receipts directory are refused.
"""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from fintrack.storage import ReceiptStore, describe_size, file_kind


@pytest.fixture()
def store(tmp_path: Path) -> ReceiptStore:
    return ReceiptStore(
        storage_directory=tmp_path / "receipts",
        max_bytes=64,
        public_base_url="http://files.example.org/",
    )


def test_upload_round_trip(store: ReceiptStore) -> None:
    name = store.upload("Invoice March.PDF", b"%PDF-1.4 invoice")
    assert re.fullmatch(r"\d+_[0-9a-f]{12}\.pdf", name)

    listed = store.list()
    assert [stored.name for stored in listed] == [name]
    assert listed[0].size == len(b"%PDF-1.4 invoice")
    assert listed[0].as_dict()["kind"] == "pdf"

    assert store.download(name) == b"%PDF-1.4 invoice"
    assert store.get_public_url(name) == f"http://files.example.org/receipts/{name}"

    store.delete(name)
    assert store.list() == []
    with pytest.raises(FileNotFoundError):
        store.download(name)


def test_same_original_name_never_collides(store: ReceiptStore) -> None:
    first = store.upload("scan.png", b"one")
    second = store.upload("scan.png", b"two")
    assert first != second
    assert len(store.list()) == 2


@pytest.mark.parametrize(
    ("original_name", "data"),
    [
        ("notes.txt", b"text"),
        ("no-extension", b"data"),
        ("huge.jpg", b"x" * 65),
    ],
)
def test_upload_rejects_bad_files(store: ReceiptStore, original_name: str, data: bytes) -> None:
    with pytest.raises(ValueError):
        store.upload(original_name, data)


@pytest.mark.parametrize("name", ["../secret.pdf", "nested/receipt.pdf", ""])
def test_names_cannot_escape_the_store(store: ReceiptStore, name: str) -> None:
    with pytest.raises(ValueError):
        store.download(name)


def test_delete_missing_receipt(store: ReceiptStore) -> None:
    with pytest.raises(FileNotFoundError):
        store.delete("1700000000000_abcdefabcdef.pdf")


def test_size_and_kind_helpers() -> None:
    assert describe_size(None) == "Unknown size"
    assert describe_size(500) == "500 Bytes"
    assert describe_size(1536) == "1.5 KB"
    assert describe_size(5 * 1024 * 1024) == "5 MB"
    assert file_kind("photo.JPEG") == "image"
    assert file_kind("statement.pdf") == "pdf"
    assert file_kind("archive.zip") == "other"
