"""
In-memory object store.

Used for local development (no Azure account configured) and as the fake
store in tests. Contents are lost when the process exits.
"""

import threading
from typing import Dict, List, Tuple

from storage.object_store.interfaces import (
    ObjectStore,
    ObjectSummary,
    StoredObject,
    StoredObjectRef,
)


class InMemoryObjectStore(ObjectStore):
    """Dict-backed object store keyed by document name."""

    def __init__(self, container_name: str = "documents"):
        self.container_name = container_name
        self._objects: Dict[str, Tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def ensure_container(self) -> None:
        pass

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._objects

    def get(self, key: str) -> StoredObject:
        with self._lock:
            if key not in self._objects:
                raise KeyError(f"Object '{key}' not found in container '{self.container_name}'")
            content, content_type = self._objects[key]
        return StoredObject(content=content, content_type=content_type)

    def put(self, key: str, content: bytes, content_type: str) -> StoredObjectRef:
        with self._lock:
            self._objects[key] = (bytes(content), content_type)
        return StoredObjectRef(key=key, location=f"memory://{self.container_name}/{key}")

    def list(self) -> List[ObjectSummary]:
        with self._lock:
            return [
                ObjectSummary(name=name, content_type=content_type, length=len(content))
                for name, (content, content_type) in sorted(self._objects.items())
            ]

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._objects.pop(key, None) is not None
