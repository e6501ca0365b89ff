# backend/docvault/storage/__init__.py
from .blobs import BlobStore, sanitize_filename

__all__ = ["BlobStore", "sanitize_filename"]
