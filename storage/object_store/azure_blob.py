"""
Azure Blob Storage adapter for the document object store.

Documents live as block blobs in a single container. The blob name is the
document name and the blob's content settings carry the declared content type.
"""

from typing import List, Optional

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContainerClient, ContentSettings
from loguru import logger

from storage.object_store.interfaces import (
    ObjectStore,
    ObjectSummary,
    StoredObject,
    StoredObjectRef,
)


class AzureBlobObjectStore(ObjectStore):

    def __init__(self,
                 connection_string: Optional[str] = None,
                 container_name: str = "documents",
                 strict_exists: bool = True,
                 container_client: Optional[ContainerClient] = None
                 ):
        self.container_name = container_name
        self.strict_exists = strict_exists
        self.logger = logger

        if container_client is not None:
            self.container_client = container_client
        else:
            if not connection_string or not connection_string.strip():
                raise ValueError("Azure storage connection string not set")
            self.container_client = ContainerClient.from_connection_string(
                connection_string.strip(),
                container_name=container_name
            )

    def ensure_container(self) -> None:
        try:
            self.container_client.create_container()
            self.logger.info(f"✓ Created blob container '{self.container_name}'")
        except ResourceExistsError:
            self.logger.debug(f"Blob container '{self.container_name}' already exists")

    def exists(self, key: str) -> bool:
        blob_client = self.container_client.get_blob_client(key)
        if not self.strict_exists:
            # Legacy handle semantics: a resolvable client counts as existing
            return blob_client is not None
        return bool(blob_client.exists())

    def get(self, key: str) -> StoredObject:
        downloader = self.container_client.get_blob_client(key).download_blob()
        content = downloader.readall()
        content_type = downloader.properties.content_settings.content_type
        return StoredObject(content=content, content_type=content_type)

    def put(self, key: str, content: bytes, content_type: str) -> StoredObjectRef:
        blob_client = self.container_client.get_blob_client(key)
        blob_client.upload_blob(
            content,
            overwrite=True,
            content_settings=ContentSettings(content_type=content_type)
        )
        return StoredObjectRef(key=key, location=blob_client.url)

    def list(self) -> List[ObjectSummary]:
        return [
            ObjectSummary(
                name=blob.name,
                content_type=blob.content_settings.content_type if blob.content_settings else None,
                length=blob.size
            )
            for blob in self.container_client.list_blobs()
        ]

    def delete(self, key: str) -> bool:
        try:
            self.container_client.delete_blob(key)
        except ResourceNotFoundError:
            return False
        return True
