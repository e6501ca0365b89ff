# backend/docvault/services/__init__.py
from .documents import DocumentService

__all__ = ["DocumentService"]
