# tests/conftest.py
import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from docvault.main import app
from docvault.database import Base, get_db
from docvault.dependencies import get_blob_store
from docvault.models import Document
from docvault.repositories.documents import DocumentRepository
from docvault.services.documents import DocumentService
from docvault.storage.blobs import BlobStore

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

@pytest.fixture
def engine():
    """Create a fresh in-memory database engine for each test"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()

@pytest.fixture
def db_session(engine):
    """Creates a new database session for a test"""
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()

@pytest.fixture
def uploads_dir():
    """Temporary directory standing in for the upload directory"""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir) / "uploads"
    shutil.rmtree(temp_dir)

@pytest.fixture
def blob_store(uploads_dir):
    return BlobStore(uploads_dir)

@pytest.fixture
def repository(db_session):
    return DocumentRepository(db_session)

@pytest.fixture
def document_service(repository, blob_store):
    return DocumentService(repository, blob_store)

@pytest.fixture
def client(db_session, blob_store):
    """Test client using the test database and upload directory"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def sample_document(db_session, uploads_dir):
    """Create a stored document together with its blob"""
    uploads_dir.mkdir(parents=True, exist_ok=True)
    storage_key = "0f8c1e9a-sample_notes.txt"
    (uploads_dir / storage_key).write_bytes(b"sample notes content")

    document = Document(
        name="Meeting Notes",
        file_name="notes.txt",
        description="Weekly sync",
        file_type="text/plain",
        file_size=20,
        file_path=storage_key
    )
    db_session.add(document)
    db_session.commit()
    db_session.refresh(document)
    return document

@pytest.fixture
def upload(client):
    """Upload helper returning the raw response"""
    def _upload(name, content=b"content", filename="file.txt", content_type="text/plain", description=None):
        data = {"name": name}
        if description is not None:
            data["description"] = description
        return client.post(
            "/api/documents/upload",
            files={"file": (filename, content, content_type)},
            data=data
        )
    return _upload
