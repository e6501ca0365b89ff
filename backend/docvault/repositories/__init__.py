# backend/docvault/repositories/__init__.py
from .documents import DocumentRepository

__all__ = ["DocumentRepository"]
