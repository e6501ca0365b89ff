# backend/docvault/models/document.py
from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Integer, String, Text
from ..database import Base

class Document(Base):
    __tablename__ = "documents"
    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ck_documents_name_not_blank"),
        CheckConstraint("length(trim(file_name)) > 0", name="ck_documents_file_name_not_blank"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    file_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    file_type = Column(String(255), nullable=True)
    file_size = Column(BigInteger, nullable=True)
    file_path = Column(String(512), nullable=False, unique=True)
    upload_date = Column(DateTime, nullable=False)

    def __init__(self, **kwargs):
        # Upload date is fixed when the object is built, not when it is flushed
        kwargs.setdefault("upload_date", datetime.now())
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<Document(id={self.id}, name='{self.name}', file_path='{self.file_path}')>"
