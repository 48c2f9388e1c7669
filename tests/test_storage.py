"""
Tests for the on-disk blob store.
"""
import io
import re
from unittest.mock import patch

import pytest
from fastapi import UploadFile

from regs_insight.uploads.storage import BlobStorage


def make_upload(filename: str, content: bytes) -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=filename)


def test_generated_name_keeps_extension():
    name = BlobStorage.generate_name("Quarterly Report.PDF")
    assert re.fullmatch(r"\d+-\d+\.PDF", name)


def test_generated_name_without_extension():
    assert re.fullmatch(r"\d+-\d+", BlobStorage.generate_name("README"))


def test_generated_names_differ():
    names = {BlobStorage.generate_name("a.txt") for _ in range(50)}
    assert len(names) > 1


@pytest.mark.asyncio
async def test_save_writes_bytes_under_relative_path(storage):
    blob = await storage.save(make_upload("notes.txt", b"hello"))

    assert blob.original_filename == "notes.txt"
    assert blob.file_path.startswith("uploads/")
    assert blob.file_path.endswith(".txt")
    assert not blob.file_path.startswith("/")
    assert storage.resolve(blob.file_path).read_bytes() == b"hello"


def test_resolve_stays_inside_root(storage):
    assert storage.resolve("uploads/../../etc/passwd") == storage.root / "passwd"
    assert storage.resolve("uploads\\x.txt") == storage.root / "x.txt"


@pytest.mark.asyncio
async def test_remove_deletes_file(storage):
    blob = await storage.save(make_upload("a.bin", b"\x00\x01"))

    assert await storage.remove(blob.file_path) is True
    assert not storage.resolve(blob.file_path).exists()


@pytest.mark.asyncio
async def test_remove_missing_file_is_reported_not_raised(storage):
    assert await storage.remove("uploads/does-not-exist.txt") is False
    assert await storage.remove(None) is False


@pytest.mark.asyncio
async def test_remove_failure_is_swallowed(storage):
    blob = await storage.save(make_upload("a.bin", b"data"))

    with patch("regs_insight.uploads.storage.os.remove", side_effect=PermissionError("denied")):
        assert await storage.remove(blob.file_path) is False

    assert storage.resolve(blob.file_path).exists()
