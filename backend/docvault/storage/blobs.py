# backend/docvault/storage/blobs.py
import shutil
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

from ..exceptions import BlobNotFoundError
from ..utils.logging import storage_logger


def sanitize_filename(filename: str | None) -> str:
    """Reduce a client supplied filename to a single safe path component"""
    name = (filename or "").replace("\\", "/").split("/")[-1].strip()
    if name in ("", ".", ".."):
        return "file"
    return name


class BlobStore:
    """Raw file contents kept in a flat directory under random keys"""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _resolve(self, storage_key: str) -> Path:
        path = (self.root / storage_key).resolve()
        if path.parent != self.root.resolve():
            raise BlobNotFoundError(storage_key)
        return path

    async def store(self, original_filename: str | None, stream: BinaryIO) -> str:
        """Write ``stream`` under a fresh key and return the key"""
        storage_key = f"{uuid4()}_{sanitize_filename(original_filename)}"
        self.root.mkdir(parents=True, exist_ok=True)
        file_path = self.root / storage_key

        try:
            with file_path.open("wb") as buffer:
                shutil.copyfileobj(stream, buffer)
        except OSError as e:
            storage_logger.error("Failed to write blob", extra={
                "storage_key": storage_key,
                "error": str(e)
            })
            file_path.unlink(missing_ok=True)
            raise

        storage_logger.debug("Stored blob", extra={
            "storage_key": storage_key,
            "bytes_written": file_path.stat().st_size
        })
        return storage_key

    def open(self, storage_key: str) -> BinaryIO:
        path = self._resolve(storage_key)
        if not path.is_file():
            storage_logger.warning("Blob missing on disk", extra={"storage_key": storage_key})
            raise BlobNotFoundError(storage_key)
        return path.open("rb")

    def exists(self, storage_key: str) -> bool:
        try:
            return self._resolve(storage_key).is_file()
        except BlobNotFoundError:
            return False

    async def delete(self, storage_key: str) -> None:
        """Remove a blob; missing blobs are ignored"""
        try:
            path = self._resolve(storage_key)
        except BlobNotFoundError:
            return

        try:
            path.unlink()
        except FileNotFoundError:
            # Already gone, possibly removed by a concurrent delete
            return

        storage_logger.info("Deleted blob", extra={"storage_key": storage_key})
