# backend/docvault/schemas/__init__.py
from .document import Document, DocumentStats

__all__ = ["Document", "DocumentStats"]
