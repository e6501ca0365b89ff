# backend/docvault/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .repositories.documents import DocumentRepository
from .services.documents import DocumentService
from .storage.blobs import BlobStore


def get_blob_store() -> BlobStore:
    return BlobStore(settings.UPLOADS_PATH)


def get_document_service(
        db: Session = Depends(get_db),
        blob_store: BlobStore = Depends(get_blob_store)
) -> DocumentService:
    return DocumentService(DocumentRepository(db), blob_store)
