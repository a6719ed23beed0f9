"""Tests for DocumentGateway orchestration and its result contract."""

import pytest

from documents.gateway import DocumentGateway, document_basename, read_content
from documents.models import DocumentDescriptor, FailureKind, UploadedDocument
from storage.object_store.interfaces import StoredObjectRef
from tests.conftest import MAX_SIZE, RecordingStore


class FailingSource:
    async def read(self, size=-1):
        raise IOError("connection reset")


class FixedLocationStore(RecordingStore):
    def put(self, key, content, content_type):
        super().put(key, content, content_type)
        return StoredObjectRef(key=key, location=f"http://WindowsAzure.co.uk/{key}")


def pdf_upload(filename="Test.pdf", data=b"Test Content", size=None, content_type="application/pdf"):
    return UploadedDocument.from_bytes(filename, content_type, data, size=size)


@pytest.mark.asyncio
class TestUpload:

    async def test_conforming_pdf_returns_store_location_unchanged(self, policy):
        store = FixedLocationStore()
        gateway = DocumentGateway(store=store, policy=policy)

        result = await gateway.upload(pdf_upload(size=2 * 1024 * 1024))

        assert result.ok
        assert result.payload == "http://WindowsAzure.co.uk/Test.pdf"

    async def test_upload_persists_content_and_type(self, gateway, store):
        await gateway.upload(pdf_upload(data=b"%PDF-1.7 body"))

        stored = store.get("Test.pdf")
        assert stored.content == b"%PDF-1.7 body"
        assert stored.content_type == "application/pdf"

    async def test_json_file_fails_with_only_type_violation(self, gateway, store):
        result = await gateway.upload(
            pdf_upload(filename="Test.json", content_type="application/json", size=10 * 1024)
        )

        assert not result.ok
        assert result.kind == FailureKind.VALIDATION_FAILED
        assert result.message == {"InvalidDocumentType": ["Uploaded Document type is not supported"]}
        assert "put" not in store.calls

    async def test_oversized_declared_length_fails(self, gateway, store):
        result = await gateway.upload(pdf_upload(size=1024 * 1024 * 1024))

        assert result.kind == FailureKind.VALIDATION_FAILED
        assert result.message["DocumentSizeExceeded"] == [
            "Document size is bigger than maximum allowed document size 5242880"
        ]
        assert store.calls == []

    async def test_oversized_body_with_unknown_declared_size(self, gateway, store):
        document = UploadedDocument.from_bytes("big.pdf", "application/pdf", b"x" * (MAX_SIZE + 10))
        document.size = None

        result = await gateway.upload(document)

        assert result.kind == FailureKind.VALIDATION_FAILED
        assert "DocumentSizeExceeded" in result.message
        assert "put" not in store.calls

    async def test_missing_document(self, gateway):
        result = await gateway.upload(None)

        assert result.kind == FailureKind.VALIDATION_FAILED
        assert result.message == {"NoDocument": ["Document not uploaded"]}

    async def test_path_components_stripped_from_key(self, gateway, store):
        result = await gateway.upload(pdf_upload(filename="../../etc/secrets.pdf"))

        assert result.ok
        assert result.payload == "memory://test-docs/secrets.pdf"
        assert store.exists("secrets.pdf")

    async def test_windows_path_components_stripped(self, gateway, store):
        await gateway.upload(pdf_upload(filename="C:\\Users\\me\\report.pdf"))

        assert [s.name for s in store.list()] == ["report.pdf"]

    async def test_store_exception_becomes_upload_error(self, policy):
        store = RecordingStore(failures={"put": PermissionError("Not Authorised")})
        gateway = DocumentGateway(store=store, policy=policy)

        result = await gateway.upload(pdf_upload())

        assert result.kind == FailureKind.UPLOAD_ERROR
        assert result.message == "failed to upload document : Test.pdf "

    async def test_error_message_uses_original_file_name(self, policy):
        store = RecordingStore(failures={"put": RuntimeError("boom")})
        gateway = DocumentGateway(store=store, policy=policy)

        result = await gateway.upload(pdf_upload(filename="dir/Test.pdf"))

        assert result.message == "failed to upload document : dir/Test.pdf "

    async def test_buffering_failure_becomes_upload_error(self, gateway, store):
        document = UploadedDocument(
            filename="Test.pdf", content_type="application/pdf", source=FailingSource(), size=12
        )

        result = await gateway.upload(document)

        assert result.kind == FailureKind.UPLOAD_ERROR
        assert "put" not in store.calls

    async def test_negative_declared_size_is_treated_as_unknown(self, gateway, store):
        result = await gateway.upload(pdf_upload(data=b"x", size=-1))

        assert result.ok
        assert store.get("Test.pdf").content == b"x"

    async def test_negative_declared_size_still_checks_body(self, gateway, store):
        result = await gateway.upload(pdf_upload(data=b"x" * (MAX_SIZE + 1), size=-1))

        assert result.kind == FailureKind.VALIDATION_FAILED
        assert "DocumentSizeExceeded" in result.message
        assert "put" not in store.calls

    @pytest.mark.parametrize("filename", ["x/..", "..", ".", "a\\."])
    async def test_relative_segment_names_are_not_stored(self, gateway, store, filename):
        result = await gateway.upload(pdf_upload(filename=filename))

        assert result.kind == FailureKind.UPLOAD_ERROR
        assert result.message == f"failed to upload document : {filename} "
        assert store.list() == []

    async def test_empty_basename_becomes_upload_error(self, gateway, store):
        result = await gateway.upload(pdf_upload(filename="folder/"))

        assert result.kind == FailureKind.UPLOAD_ERROR
        assert result.message == "failed to upload document : folder/ "
        assert "put" not in store.calls


@pytest.mark.asyncio
class TestDownload:

    async def test_returns_document_with_content_and_type(self, gateway, store):
        store.put("Test.pdf", b"This is test document string", "application/pdf")

        result = await gateway.download("Test.pdf")

        assert result.ok
        document = result.payload
        assert document.name == "Test.pdf"
        assert document.content == b"This is test document string"
        assert document.content_type == "application/pdf"
        assert document.length == len(b"This is test document string")

    @pytest.mark.parametrize("name", ["", None])
    async def test_empty_name_short_circuits(self, gateway, store, name):
        result = await gateway.download(name)

        assert result.kind == FailureKind.BAD_REQUEST
        assert result.message == "Please provide a document name"
        assert store.calls == []

    async def test_missing_document(self, gateway, store):
        result = await gateway.download("missing.pdf")

        assert result.kind == FailureKind.NOT_FOUND
        assert result.message == "Requested document Doesn't exist"
        assert "get" not in store.calls

    async def test_exists_error(self, policy):
        store = RecordingStore(failures={"exists": ConnectionError("unreachable")})
        gateway = DocumentGateway(store=store, policy=policy)

        result = await gateway.download("Test.pdf")

        assert result.kind == FailureKind.DOWNLOAD_ERROR
        assert result.message == "Error downloading document:  Test.pdf"

    async def test_get_error_after_exists(self, policy):
        store = RecordingStore(failures={"get": ConnectionError("blob vanished")})
        store.put("Test.pdf", b"data", "application/pdf")
        gateway = DocumentGateway(store=store, policy=policy)

        result = await gateway.download("Test.pdf")

        assert result.kind == FailureKind.DOWNLOAD_ERROR
        assert result.message == "Error downloading document:  Test.pdf"


@pytest.mark.asyncio
class TestList:

    async def test_empty_store_returns_empty_list(self, gateway):
        result = await gateway.list_documents()

        assert result.ok
        assert result.payload == []

    async def test_lists_descriptors_without_content(self, gateway, store):
        store.put("a.pdf", b"12345", "application/pdf")
        store.put("b.pdf", b"123", "application/pdf")

        result = await gateway.list_documents()

        assert result.payload == [
            DocumentDescriptor(name="a.pdf", content_type="application/pdf", length=5),
            DocumentDescriptor(name="b.pdf", content_type="application/pdf", length=3),
        ]
        assert all(d.content is None for d in result.payload)

    async def test_store_error(self, policy):
        store = RecordingStore(failures={"list": TimeoutError()})
        gateway = DocumentGateway(store=store, policy=policy)

        result = await gateway.list_documents()

        assert result.kind == FailureKind.LIST_ERROR
        assert result.message == "Error getting documents list"


@pytest.mark.asyncio
class TestDelete:

    async def test_deletes_existing_document(self, gateway, store):
        store.put("Test.pdf", b"data", "application/pdf")

        result = await gateway.delete("Test.pdf")

        assert result.ok
        assert result.payload == "Document : Test.pdf deleted successfully"
        assert not store.exists("Test.pdf")

    @pytest.mark.parametrize("name", ["", None])
    async def test_empty_name(self, gateway, store, name):
        result = await gateway.delete(name)

        assert result.kind == FailureKind.BAD_REQUEST
        assert result.message == "Document name not provided"
        assert store.calls == []

    async def test_missing_document_does_not_call_delete(self, gateway, store):
        result = await gateway.delete("missing.pdf")

        assert result.kind == FailureKind.NOT_FOUND
        assert result.message == "Document doesn't exist"
        assert "delete" not in store.calls

    async def test_store_reports_nothing_removed(self, policy):
        store = RecordingStore(delete_result=False)
        store.put("Test.pdf", b"data", "application/pdf")
        gateway = DocumentGateway(store=store, policy=policy)

        result = await gateway.delete("Test.pdf")

        assert result.kind == FailureKind.DELETE_FAILED
        assert result.message == "Unable to delete document : Test.pdf"

    async def test_store_error(self, policy):
        store = RecordingStore(failures={"delete": RuntimeError("boom")})
        store.put("Test.pdf", b"data", "application/pdf")
        gateway = DocumentGateway(store=store, policy=policy)

        result = await gateway.delete("Test.pdf")

        assert result.kind == FailureKind.DELETE_ERROR
        assert result.message == "failed to delete document : Test.pdf "

    async def test_second_delete_resolves_to_not_found(self, gateway, store):
        store.put("Test.pdf", b"data", "application/pdf")

        first = await gateway.delete("Test.pdf")
        second = await gateway.delete("Test.pdf")

        assert first.ok
        assert second.kind == FailureKind.NOT_FOUND
        assert store.calls.count("delete") == 1


class TestHelpers:

    @pytest.mark.parametrize("filename,expected", [
        ("Test.pdf", "Test.pdf"),
        ("a/b/c.pdf", "c.pdf"),
        ("a\\b\\c.pdf", "c.pdf"),
        ("../x.pdf", "x.pdf"),
        ("x/..", ""),
        ("..", ""),
        (".", ""),
        ("dir\\.", ""),
        ("..pdf", "..pdf"),
        ("", ""),
        (None, ""),
    ])
    def test_document_basename(self, filename, expected):
        assert document_basename(filename) == expected

    @pytest.mark.asyncio
    async def test_read_content_stops_past_limit(self):
        document = UploadedDocument.from_bytes("a.pdf", "application/pdf", b"x" * 100_000)

        content = await read_content(document, limit=20_000)

        assert 20_000 < len(content) < 100_000

    @pytest.mark.asyncio
    async def test_read_content_reads_everything(self):
        data = bytes(range(256)) * 200
        document = UploadedDocument.from_bytes("a.pdf", "application/pdf", data)

        assert await read_content(document) == data
