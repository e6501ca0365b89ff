# tests/storage/test_blobs.py
import io
import re
from pathlib import Path

import pytest

from docvault.exceptions import BlobNotFoundError
from docvault.storage.blobs import BlobStore, sanitize_filename

KEY_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}_(.+)$")


@pytest.mark.asyncio
async def test_store_creates_directory_and_writes_content(blob_store, uploads_dir):
    """Test storing a blob into a directory that does not exist yet"""
    assert not uploads_dir.exists()

    storage_key = await blob_store.store("test.txt", io.BytesIO(b"test file content"))

    assert uploads_dir.exists()
    assert (uploads_dir / storage_key).read_bytes() == b"test file content"
    assert KEY_PATTERN.match(storage_key).group(1) == "test.txt"


@pytest.mark.asyncio
async def test_store_generates_unique_keys(blob_store):
    first = await blob_store.store("same.txt", io.BytesIO(b"a"))
    second = await blob_store.store("same.txt", io.BytesIO(b"b"))

    assert first != second
    with blob_store.open(first) as stream:
        assert stream.read() == b"a"
    with blob_store.open(second) as stream:
        assert stream.read() == b"b"


@pytest.mark.asyncio
async def test_store_strips_directories_from_filename(blob_store, uploads_dir):
    storage_key = await blob_store.store("../../etc/passwd", io.BytesIO(b"x"))

    assert KEY_PATTERN.match(storage_key).group(1) == "passwd"
    assert (uploads_dir / storage_key).exists()


def test_open_missing_blob(blob_store):
    with pytest.raises(BlobNotFoundError):
        blob_store.open("does-not-exist.txt")


def test_open_rejects_keys_outside_root(blob_store, uploads_dir):
    uploads_dir.mkdir(parents=True)
    (uploads_dir.parent / "secret.txt").write_bytes(b"secret")

    with pytest.raises(BlobNotFoundError):
        blob_store.open("../secret.txt")


@pytest.mark.asyncio
async def test_delete_is_idempotent(blob_store):
    storage_key = await blob_store.store("gone.txt", io.BytesIO(b"bye"))

    await blob_store.delete(storage_key)
    assert not blob_store.exists(storage_key)

    await blob_store.delete(storage_key)


@pytest.mark.parametrize("filename,expected", [
    ("report.pdf", "report.pdf"),
    ("C:\\Users\\me\\scan.png", "scan.png"),
    ("dir/sub/file.txt", "file.txt"),
    ("", "file"),
    (None, "file"),
    ("..", "file"),
])
def test_sanitize_filename(filename, expected):
    assert sanitize_filename(filename) == expected


def test_store_with_explicit_root(tmp_path):
    store = BlobStore(tmp_path / "nested" / "blobs")
    assert store.root == tmp_path / "nested" / "blobs"
    assert not store.exists("anything")


@pytest.mark.asyncio
async def test_delete_tolerates_blob_removed_concurrently(blob_store, monkeypatch):
    """A blob that vanishes between lookup and unlink is not an error"""
    storage_key = await blob_store.store("race.txt", io.BytesIO(b"x"))
    original_unlink = Path.unlink

    def unlink_after_other_delete(self, *args, **kwargs):
        original_unlink(self)
        return original_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", unlink_after_other_delete)

    await blob_store.delete(storage_key)

    assert not blob_store.exists(storage_key)
