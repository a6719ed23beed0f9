"""
Object store capability contract consumed by the document gateway.

One logical container, objects keyed by document name. Implementations raise
on backend failures; callers decide how those failures are reported.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class StoredObject:
    """Content and content type of a fetched object."""
    content: bytes
    content_type: str


@dataclass(frozen=True)
class StoredObjectRef:
    """Identity of a written object: its key and absolute location."""
    key: str
    location: str


@dataclass
class ObjectSummary:
    """Listing entry for one stored object (content omitted)."""
    name: str
    content_type: Optional[str]
    length: Optional[int]


class ObjectStore(ABC):
    """Abstract base class for document object stores."""

    @abstractmethod
    def ensure_container(self) -> None:
        """Create the backing container if it does not exist yet."""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether an object is stored under key."""
        pass

    @abstractmethod
    def get(self, key: str) -> StoredObject:
        """Fetch the full content of the object stored under key."""
        pass

    @abstractmethod
    def put(self, key: str, content: bytes, content_type: str) -> StoredObjectRef:
        """Store content under key and return a reference to it."""
        pass

    @abstractmethod
    def list(self) -> List[ObjectSummary]:
        """List every object in the container."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete the object under key. True iff it existed and was removed."""
        pass
