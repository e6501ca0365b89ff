# backend/docvault/services/documents.py
from datetime import datetime, timedelta
from typing import BinaryIO, List, Optional, Tuple

from ..config import settings
from ..exceptions import DocumentNotFoundError, ValidationError
from ..models.document import Document
from ..repositories.documents import DocumentRepository
from ..storage.blobs import BlobStore
from ..utils.logging import service_logger


class DocumentService:
    """Coordinates the metadata table and the blob directory.

    The two stores are not updated atomically. Upload writes the blob first
    and removes it again if the row is rejected. Delete removes the blob
    first and leaves the row in place when that fails.
    """

    def __init__(self, repository: DocumentRepository, blob_store: BlobStore):
        self.repository = repository
        self.blob_store = blob_store

    def list_documents(self) -> List[Document]:
        return self.repository.list_all()

    def get_document(self, document_id: int) -> Document:
        document = self.repository.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    async def upload_document(
            self,
            name: Optional[str],
            stream: BinaryIO,
            original_filename: Optional[str],
            content_type: Optional[str],
            size: Optional[int],
            description: Optional[str] = None
    ) -> Document:
        storage_key = await self.blob_store.store(original_filename, stream)

        document = Document(
            name=name,
            file_name=original_filename,
            description=description,
            file_type=content_type,
            file_size=size,
            file_path=storage_key
        )

        try:
            document = self.repository.insert(document)
        except ValidationError:
            service_logger.warning("Discarding blob of rejected document", extra={
                "storage_key": storage_key
            })
            await self.blob_store.delete(storage_key)
            raise

        service_logger.info("Stored document", extra={
            "document_id": document.id,
            "storage_key": storage_key,
            "file_size": size
        })
        return document

    def open_download(self, document_id: int) -> Tuple[Document, BinaryIO]:
        document = self.get_document(document_id)
        return document, self.blob_store.open(document.file_path)

    async def delete_document(self, document_id: int) -> None:
        document = self.get_document(document_id)

        # A failure here propagates and keeps the row
        await self.blob_store.delete(document.file_path)
        self.repository.delete_by_id(document_id)

        service_logger.info("Deleted document", extra={
            "document_id": document_id,
            "storage_key": document.file_path
        })

    def search_documents(self, query: str) -> List[Document]:
        return self.repository.search_by_name(query)

    def search_by_file_type(self, query: str) -> List[Document]:
        return self.repository.search_by_file_type(query)

    def get_stats(self, now: Optional[datetime] = None) -> dict:
        since = (now or datetime.now()) - timedelta(days=settings.RECENT_UPLOAD_DAYS)
        return self.repository.stats(since)
