# backend/docvault/api/__init__.py
from .documents import router as documents_router

__all__ = ["documents_router"]
