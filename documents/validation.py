"""
Upload validation policy.

A ValidationPolicy is built once at startup from configuration and is
read-only afterwards. Validating a document returns a ValidationOutcome:
violation code -> messages. An empty outcome means the document is accepted.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from documents.models import DocumentDescriptor, ValidationOutcome

NO_DOCUMENT = "NoDocument"
DOCUMENT_SIZE_EXCEEDED = "DocumentSizeExceeded"
INVALID_DOCUMENT_TYPE = "InvalidDocumentType"


@dataclass(frozen=True)
class ValidationPolicy:
    """Size and type rules a document must satisfy to be stored."""
    max_size_bytes: int
    allowed_content_types: frozenset

    def __post_init__(self):
        if isinstance(self.max_size_bytes, bool) or not isinstance(self.max_size_bytes, int):
            raise ValueError(f"max_size_bytes must be an integer, got {self.max_size_bytes!r}")
        if self.max_size_bytes <= 0:
            raise ValueError(f"max_size_bytes must be positive, got {self.max_size_bytes}")
        # Accept any iterable of types but always hold a frozenset
        object.__setattr__(self, "allowed_content_types", frozenset(self.allowed_content_types))

    @classmethod
    def create(cls, max_size_bytes: int, allowed_content_types: Iterable[str]) -> "ValidationPolicy":
        return cls(max_size_bytes=max_size_bytes, allowed_content_types=frozenset(allowed_content_types))

    def validate(self, descriptor: Optional[DocumentDescriptor]) -> ValidationOutcome:
        return validate_document(self, descriptor)


def validate_document(policy: ValidationPolicy,
                      descriptor: Optional[DocumentDescriptor]) -> ValidationOutcome:
    """
    Check a document against the policy.

    Args:
        policy: Size/type rules
        descriptor: Document metadata, or None when nothing was uploaded

    Returns:
        Violation map. Size and type are checked independently, so both codes
        can be present at once.

    Example:
        validate_document(policy, DocumentDescriptor(name="a.json",
                                                     content_type="application/json",
                                                     length=10))
        # {'InvalidDocumentType': ['Uploaded Document type is not supported']}
    """
    outcome: ValidationOutcome = {}

    if descriptor is None:
        add_violation(outcome, NO_DOCUMENT, "Document not uploaded")
        return outcome

    if descriptor.length is not None and descriptor.length > policy.max_size_bytes:
        add_violation(
            outcome,
            DOCUMENT_SIZE_EXCEEDED,
            f"Document size is bigger than maximum allowed document size {policy.max_size_bytes}"
        )

    if descriptor.content_type not in policy.allowed_content_types:
        add_violation(outcome, INVALID_DOCUMENT_TYPE, "Uploaded Document type is not supported")

    return outcome


def add_violation(outcome: ValidationOutcome, code: str, message: str) -> None:
    outcome.setdefault(code, []).append(message)
