# backend/docvault/repositories/documents.py
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import ValidationError
from ..models.document import Document
from ..utils.logging import db_logger

LIKE_ESCAPE = "\\"


def _contains_pattern(substring: str) -> str:
    """Build a LIKE pattern that matches ``substring`` literally"""
    escaped = (
        substring.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


class DocumentRepository:
    """Persistence for document metadata rows"""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, document: Document) -> Document:
        try:
            self.db.add(document)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            db_logger.warning("Document rejected by table constraints", extra={
                "document_name": document.name,
                "file_name": document.file_name,
                "error": str(e.orig)
            })
            raise ValidationError(str(e.orig)) from e

        self.db.refresh(document)
        return document

    def get_by_id(self, document_id: int) -> Optional[Document]:
        return self.db.query(Document).filter(Document.id == document_id).first()

    def list_all(self) -> List[Document]:
        return self.db.query(Document).order_by(Document.id).all()

    def search_by_name(self, substring: str) -> List[Document]:
        return (
            self.db.query(Document)
            .filter(Document.name.ilike(_contains_pattern(substring), escape=LIKE_ESCAPE))
            .order_by(Document.id)
            .all()
        )

    def search_by_file_type(self, substring: str) -> List[Document]:
        return (
            self.db.query(Document)
            .filter(Document.file_type.ilike(_contains_pattern(substring), escape=LIKE_ESCAPE))
            .order_by(Document.id)
            .all()
        )

    def delete_by_id(self, document_id: int) -> bool:
        document = self.get_by_id(document_id)
        if document is None:
            return False

        self.db.delete(document)
        self.db.commit()
        return True

    def stats(self, since: datetime) -> Dict:
        total_documents, total_size = self.db.query(
            func.count(Document.id),
            func.coalesce(func.sum(Document.file_size), 0)
        ).one()

        recent_uploads = self.db.query(func.count(Document.id)) \
            .filter(Document.upload_date >= since) \
            .scalar()

        file_types = {}
        rows = self.db.query(Document.file_type, func.count(Document.id)) \
            .group_by(Document.file_type) \
            .all()
        for file_type, count in rows:
            key = file_type or "Unknown"
            file_types[key] = file_types.get(key, 0) + count

        return {
            "total_documents": total_documents,
            "total_size": int(total_size),
            "recent_uploads": recent_uploads,
            "file_types": file_types,
        }
