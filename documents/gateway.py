"""
Document gateway: the single orchestration point for upload, download, list
and delete.

Every operation returns a Success or a Failure and never raises. Exceptions
from buffering or from the object store are logged here, once, and converted
to a Failure carrying a fixed, non-leaking message.
"""

import asyncio
from typing import List, Optional

from loguru import logger

from documents.models import (
    DocumentDescriptor,
    Failure,
    FailureKind,
    Result,
    Success,
    UploadedDocument,
)
from documents.validation import ValidationPolicy
from storage.object_store.interfaces import ObjectStore

READ_CHUNK_SIZE = 16 * 1024


def document_basename(filename: Optional[str]) -> str:
    """Strip any directory component (either separator) from an upload filename."""
    if not filename:
        return ""
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    # Relative path segments never name a document
    if name in (".", ".."):
        return ""
    return name


async def read_content(document: UploadedDocument, limit: Optional[int] = None) -> bytes:
    """
    Buffer an upload body into memory.

    Reads in fixed-size chunks. When `limit` is given, reading stops as soon
    as more than `limit` bytes have been seen.
    """
    buffer = bytearray()
    while True:
        chunk = await document.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if limit is not None and len(buffer) > limit:
            break
    return bytes(buffer)


class DocumentGateway:
    """Stateless orchestrator over an object store and a validation policy."""

    def __init__(self, store: ObjectStore, policy: ValidationPolicy):
        self.store = store
        self.policy = policy
        self.logger = logger

    @staticmethod
    def _describe(document: Optional[UploadedDocument]) -> Optional[DocumentDescriptor]:
        """Metadata-only descriptor used for validation. A negative declared size counts as unknown."""
        if document is None or not document.filename:
            return None
        size = document.size if document.size is not None and document.size >= 0 else None
        return DocumentDescriptor(
            name=document.filename,
            content_type=document.content_type,
            length=size
        )

    async def upload(self, document: Optional[UploadedDocument]) -> Result[str]:
        outcome = self.policy.validate(self._describe(document))
        if outcome:
            self.logger.warning(f"[UPLOAD] Rejected document: {sorted(outcome)}")
            return Failure(FailureKind.VALIDATION_FAILED, outcome)

        original_name = document.filename
        try:
            content = await read_content(document, limit=self.policy.max_size_bytes)

            descriptor = DocumentDescriptor(
                name=document_basename(original_name),
                content_type=document.content_type,
                length=len(content),
                content=content
            )

            # Declared size may be missing or wrong; check what was actually read
            outcome = self.policy.validate(descriptor)
            if outcome:
                self.logger.warning(f"[UPLOAD] Rejected document after reading body: {sorted(outcome)}")
                return Failure(FailureKind.VALIDATION_FAILED, outcome)

            stored = await asyncio.to_thread(
                self.store.put, descriptor.name, descriptor.content, descriptor.content_type
            )
            self.logger.info(f"[UPLOAD] Stored {stored.key} ({descriptor.length} bytes) at {stored.location}")
            return Success(stored.location)

        except Exception:
            message = f"failed to upload document : {original_name} "
            self.logger.exception(f"[UPLOAD] {message}")
            return Failure(FailureKind.UPLOAD_ERROR, message)

    async def download(self, document_name: Optional[str]) -> Result[DocumentDescriptor]:
        if not document_name:
            return Failure(FailureKind.BAD_REQUEST, "Please provide a document name")

        try:
            if not await asyncio.to_thread(self.store.exists, document_name):
                self.logger.warning(f"[DOWNLOAD] Document not found: {document_name}")
                return Failure(FailureKind.NOT_FOUND, "Requested document Doesn't exist")

            stored = await asyncio.to_thread(self.store.get, document_name)
            self.logger.info(f"[DOWNLOAD] Fetched {document_name} ({len(stored.content)} bytes)")
            return Success(DocumentDescriptor(
                name=document_name,
                content_type=stored.content_type,
                length=len(stored.content),
                content=stored.content
            ))

        except Exception:
            message = f"Error downloading document:  {document_name}"
            self.logger.exception(f"[DOWNLOAD] {message}")
            return Failure(FailureKind.DOWNLOAD_ERROR, message)

    async def list_documents(self) -> Result[List[DocumentDescriptor]]:
        try:
            summaries = await asyncio.to_thread(self.store.list)
            documents = [
                DocumentDescriptor(name=s.name, content_type=s.content_type, length=s.length)
                for s in summaries
            ]
            self.logger.info(f"[LIST] {len(documents)} documents")
            return Success(documents)

        except Exception:
            message = "Error getting documents list"
            self.logger.exception(f"[LIST] {message}")
            return Failure(FailureKind.LIST_ERROR, message)

    async def delete(self, document_name: Optional[str]) -> Result[str]:
        if not document_name:
            return Failure(FailureKind.BAD_REQUEST, "Document name not provided")

        try:
            if not await asyncio.to_thread(self.store.exists, document_name):
                self.logger.warning(f"[DELETE] Document not found: {document_name}")
                return Failure(FailureKind.NOT_FOUND, "Document doesn't exist")

            if await asyncio.to_thread(self.store.delete, document_name):
                self.logger.info(f"[DELETE] Deleted {document_name}")
                return Success(f"Document : {document_name} deleted successfully")

            # Removed by someone else between the existence check and the delete
            self.logger.warning(f"[DELETE] Store reported nothing to delete for {document_name}")
            return Failure(FailureKind.DELETE_FAILED, f"Unable to delete document : {document_name}")

        except Exception:
            message = f"failed to delete document : {document_name} "
            self.logger.exception(f"[DELETE] {message}")
            return Failure(FailureKind.DELETE_ERROR, message)
