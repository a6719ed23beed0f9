"""
Document API endpoints.

Exposed endpoints:
- POST   /document/upload                     - Upload a document (multipart field "file")
- GET    /document/download/{documentName}    - Download a document
- GET    /document/documentsList              - List stored documents
- DELETE /document/delete/{documentName}      - Delete a document

Every failure is answered with 400 and either a plain message or, for
rejected uploads, a map of violation code -> messages.
"""

import urllib.parse
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse, Response
from loguru import logger

from documents.gateway import DocumentGateway
from documents.models import DocumentDescriptor, Failure, UploadedDocument

router = APIRouter(prefix="/document", tags=["document"])


def get_document_gateway(request: Request) -> DocumentGateway:
    """Gateway built at startup and stored on the application state."""
    return request.app.state.document_gateway


def failure_response(failure: Failure) -> JSONResponse:
    logger.debug(f"Responding 400 ({failure.kind.value})")
    return JSONResponse(status_code=400, content=failure.message)


@router.post("/upload", response_model=str, responses={400: {"description": "Invalid document or upload error"}})
async def upload_document(
    file: Optional[UploadFile] = File(None),
    gateway: DocumentGateway = Depends(get_document_gateway)
):
    """
    Upload a document to the object store.

    Returns:
        Absolute URI of the stored document
    """
    document = None
    if file is not None:
        document = UploadedDocument(
            filename=file.filename,
            content_type=file.content_type,
            source=file,
            size=file.size
        )

    result = await gateway.upload(document)
    if not result.ok:
        return failure_response(result)
    return result.payload


@router.get("/download/", include_in_schema=False)
@router.get("/download/{document_name}", responses={400: {"description": "Missing, unknown or unreadable document"}})
async def download_document(
    document_name: str = "",
    gateway: DocumentGateway = Depends(get_document_gateway)
):
    """
    Download a document as a binary body tagged with its stored content type.
    """
    result = await gateway.download(document_name)
    if not result.ok:
        return failure_response(result)

    document = result.payload
    quoted = urllib.parse.quote(document.name)
    fallback = document.name.encode("ascii", "replace").decode("ascii").replace("\"", "_")
    return Response(
        content=document.content,
        media_type=document.content_type or "application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"}
    )


@router.get("/documentsList", response_model=List[DocumentDescriptor])
async def list_documents(gateway: DocumentGateway = Depends(get_document_gateway)):
    """
    List stored documents (name, content type, length).
    """
    result = await gateway.list_documents()
    if not result.ok:
        return failure_response(result)
    return result.payload


@router.delete("/delete/", include_in_schema=False)
@router.delete("/delete/{document_name}", response_model=str)
async def delete_document(
    document_name: str = "",
    gateway: DocumentGateway = Depends(get_document_gateway)
):
    """
    Delete a document from the object store.
    """
    result = await gateway.delete(document_name)
    if not result.ok:
        return failure_response(result)
    return result.payload
