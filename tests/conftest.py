"""Shared fixtures for the document service tests."""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from apps.api.main import create_app
from documents.gateway import DocumentGateway
from documents.validation import ValidationPolicy
from storage.object_store.memory import InMemoryObjectStore

MAX_SIZE = 5 * 1024 * 1024


class RecordingStore(InMemoryObjectStore):
    """
    In-memory store that records calls and can be told to fail.

    `failures` maps an operation name to the exception it should raise.
    `delete_result` forces the return value of delete (simulates a race).
    """

    def __init__(self, failures: Optional[Dict[str, Exception]] = None,
                 delete_result: Optional[bool] = None):
        super().__init__(container_name="test-docs")
        self.failures = failures or {}
        self.delete_result = delete_result
        self.calls: List[str] = []

    def _record(self, op: str) -> None:
        self.calls.append(op)
        if op in self.failures:
            raise self.failures[op]

    def exists(self, key):
        self._record("exists")
        return super().exists(key)

    def get(self, key):
        self._record("get")
        return super().get(key)

    def put(self, key, content, content_type):
        self._record("put")
        return super().put(key, content, content_type)

    def list(self):
        self._record("list")
        return super().list()

    def delete(self, key):
        self._record("delete")
        removed = super().delete(key)
        return removed if self.delete_result is None else self.delete_result


@pytest.fixture
def policy():
    return ValidationPolicy.create(MAX_SIZE, ["application/pdf"])


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def gateway(store, policy):
    return DocumentGateway(store=store, policy=policy)


@pytest.fixture
def client(store, policy):
    app = create_app(store=store, policy=policy)
    with TestClient(app) as test_client:
        yield test_client
