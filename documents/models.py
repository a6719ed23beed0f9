"""
Data model and result types shared by the document gateway and its HTTP layer.

- DocumentDescriptor: name / content type / length / content of one document
- StoredObjectRef: store key plus the absolute location returned by a write
- UploadedDocument: raw upload handed over by the HTTP layer
- Success / Failure: tagged results returned by every gateway operation
"""

import io
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storage.object_store.interfaces import StoredObjectRef


# ============ Documents ============

class DocumentDescriptor(BaseModel):
    """
    One document as seen by the gateway.

    `content` is only populated while a document is materialised in memory
    (upload, download) and is never serialized.

    Example (listing entry):
        {
            "documentName": "contract.pdf",
            "contentType": "application/pdf",
            "documentLength": 52341
        }
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, alias="documentName")
    content_type: Optional[str] = Field(None, alias="contentType")
    length: Optional[int] = Field(None, ge=0, alias="documentLength")
    content: Optional[bytes] = Field(None, exclude=True, repr=False)

    @model_validator(mode="after")
    def check_content_length(self):
        if self.content is not None and self.length is not None and len(self.content) != self.length:
            raise ValueError(
                f"content has {len(self.content)} bytes but length is {self.length}"
            )
        return self


class _BytesSource:
    """Async reader over an in-memory body."""

    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


@dataclass
class UploadedDocument:
    """
    Raw upload handed to the gateway.

    `source` is anything with an async `read(size)` (FastAPI's UploadFile).
    `size` is the declared byte count and may be unknown.

    Callers outside the HTTP layer (batch imports, scripts) that already hold
    the body in memory build one with `from_bytes`.
    """
    filename: str
    content_type: Optional[str]
    source: Any
    size: Optional[int] = None

    @classmethod
    def from_bytes(cls, filename: str, content_type: Optional[str], data: bytes,
                   size: Optional[int] = None) -> "UploadedDocument":
        return cls(
            filename=filename,
            content_type=content_type,
            source=_BytesSource(data),
            size=len(data) if size is None else size
        )

    async def read(self, size: int = -1) -> bytes:
        return await self.source.read(size)


# ============ Results ============

ValidationOutcome = Dict[str, List[str]]

T = TypeVar("T")


class FailureKind(str, Enum):
    VALIDATION_FAILED = "ValidationFailed"
    BAD_REQUEST = "BadRequest"
    NOT_FOUND = "NotFound"
    DELETE_FAILED = "DeleteFailed"
    UPLOAD_ERROR = "UploadError"
    DOWNLOAD_ERROR = "DownloadError"
    LIST_ERROR = "ListError"
    DELETE_ERROR = "DeleteError"


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    # Plain message, or the violation map for ValidationFailed
    message: Union[str, ValidationOutcome] = field(default="")

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]
