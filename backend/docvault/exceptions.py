# backend/docvault/exceptions.py


class DocVaultError(Exception):
    """Base class for document store errors"""


class ValidationError(DocVaultError):
    """A document violated a table constraint (blank name or file name)"""


class NotFoundError(DocVaultError):
    pass


class DocumentNotFoundError(NotFoundError):
    def __init__(self, document_id: int):
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class BlobNotFoundError(NotFoundError):
    def __init__(self, storage_key: str):
        super().__init__(f"Blob {storage_key} not found")
        self.storage_key = storage_key
