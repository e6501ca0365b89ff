# backend/docvault/utils/__init__.py
