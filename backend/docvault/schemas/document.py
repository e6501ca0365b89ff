# backend/docvault/schemas/document.py
from datetime import datetime
from typing import Dict, Optional
from .base import BaseSchema

class DocumentBase(BaseSchema):
    name: str
    description: Optional[str] = None

class Document(DocumentBase):
    id: int
    file_name: str
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    file_path: str
    upload_date: datetime

class DocumentStats(BaseSchema):
    total_documents: int = 0
    total_size: int = 0
    recent_uploads: int = 0
    file_types: Dict[str, int] = {}
