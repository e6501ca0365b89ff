# backend/docvault/api/documents.py
import time
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from fastapi.responses import StreamingResponse

from ..config import settings
from ..dependencies import get_document_service
from ..exceptions import NotFoundError, ValidationError
from ..schemas.document import Document as DocumentSchema, DocumentStats
from ..services.documents import DocumentService
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/documents", tags=["documents"])


def content_disposition(filename: str) -> str:
    """Attachment header for ``filename``; non-ASCII names use RFC 5987 encoding"""
    quoted = quote(filename)
    if quoted == filename:
        return f'attachment; filename="{filename}"'

    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace('"', "_").replace("\\", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"


def _iter_stream(stream, chunk_size: int):
    with stream:
        while chunk := stream.read(chunk_size):
            yield chunk


@router.get("", response_model=List[DocumentSchema])
async def list_documents(service: DocumentService = Depends(get_document_service)):
    api_logger.info("Listing documents", extra={"operation": "list_documents"})

    try:
        start_time = time.time()
        documents = service.list_documents()

        execution_time = time.time() - start_time
        api_logger.info("Successfully listed documents", extra={
            "document_count": len(documents),
            "execution_time_ms": round(execution_time * 1000, 2)
        })
        return documents

    except Exception as e:
        api_logger.error("Error listing documents", extra={"error": str(e)})
        raise


@router.get("/search", response_model=List[DocumentSchema])
async def search_documents(query: str, service: DocumentService = Depends(get_document_service)):
    api_logger.info("Searching documents by name", extra={"query": query})

    try:
        documents = service.search_documents(query)

        api_logger.debug("Search finished", extra={
            "query": query,
            "match_count": len(documents)
        })
        return documents

    except Exception as e:
        api_logger.error("Error searching documents", extra={
            "query": query,
            "error": str(e)
        })
        raise


@router.get("/search/type", response_model=List[DocumentSchema])
async def search_documents_by_type(query: str, service: DocumentService = Depends(get_document_service)):
    api_logger.info("Searching documents by file type", extra={"query": query})

    try:
        return service.search_by_file_type(query)
    except Exception as e:
        api_logger.error("Error searching documents by file type", extra={
            "query": query,
            "error": str(e)
        })
        raise


@router.get("/stats", response_model=DocumentStats)
async def get_document_stats(service: DocumentService = Depends(get_document_service)):
    try:
        return service.get_stats()
    except Exception as e:
        api_logger.error("Error computing document stats", extra={"error": str(e)})
        raise


@router.post("/upload", response_model=DocumentSchema)
async def upload_document(
        file: UploadFile = File(...),
        name: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        service: DocumentService = Depends(get_document_service)
):
    api_logger.info("Uploading document", extra={
        "document_name": name,
        "file_name": file.filename,
        "content_type": file.content_type,
        "file_size": file.size
    })

    try:
        start_time = time.time()
        document = await service.upload_document(
            name=name,
            stream=file.file,
            original_filename=file.filename,
            content_type=file.content_type,
            size=file.size,
            description=description
        )

        execution_time = time.time() - start_time
        api_logger.info("Successfully uploaded document", extra={
            "document_id": document.id,
            "storage_key": document.file_path,
            "execution_time_ms": round(execution_time * 1000, 2)
        })
        return document

    except ValidationError as e:
        api_logger.warning("Rejected document upload", extra={
            "document_name": name,
            "file_name": file.filename,
            "error": str(e)
        })
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    except OSError as e:
        api_logger.error("I/O error while storing upload", extra={
            "file_name": file.filename,
            "error_type": type(e).__name__,
            "error_message": str(e)
        }, exc_info=True)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        api_logger.error("Error uploading document", extra={
            "file_name": file.filename,
            "error": str(e)
        })
        raise


@router.get("/download/{document_id}")
async def download_document(document_id: int, service: DocumentService = Depends(get_document_service)):
    api_logger.info("Downloading document", extra={"document_id": document_id})

    try:
        document, stream = service.open_download(document_id)
    except NotFoundError as e:
        api_logger.warning("Download target not found", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    except OSError as e:
        api_logger.error("Could not open blob", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    except Exception as e:
        api_logger.error("Error preparing download", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise

    return StreamingResponse(
        _iter_stream(stream, settings.DOWNLOAD_CHUNK_SIZE),
        media_type="application/octet-stream",
        headers={"Content-Disposition": content_disposition(document.file_name)}
    )


@router.get("/{document_id}", response_model=DocumentSchema)
async def get_document(document_id: int, service: DocumentService = Depends(get_document_service)):
    api_logger.info("Retrieving document", extra={"document_id": document_id})

    try:
        return service.get_document(document_id)
    except NotFoundError:
        api_logger.warning("Document not found", extra={"document_id": document_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    except Exception as e:
        api_logger.error("Error retrieving document", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise


@router.delete("/{document_id}")
async def delete_document(document_id: int, service: DocumentService = Depends(get_document_service)):
    api_logger.info("Deleting document", extra={"document_id": document_id})

    try:
        await service.delete_document(document_id)
    except NotFoundError:
        api_logger.warning("Document not found for deletion", extra={"document_id": document_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    except OSError as e:
        api_logger.error("Failed to delete document blob", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        api_logger.error("Error deleting document", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise

    api_logger.info(f"Successfully deleted document {document_id}")
    return Response(status_code=status.HTTP_200_OK)
