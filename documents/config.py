"""
Configuration for the document service.

Settings come from environment variables (a .env file is honoured), then from
an optional YAML file, then from defaults. The YAML layout is:

    blobStorageConfig:
      connectionString: "DefaultEndpointsProtocol=https;..."
      containerName: documents
    maxDocumentSizeAllowed: 5242880
    supportedTypes:
      - application/pdf
    strictExistsCheck: true
    storeBackend: azure
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import dotenv
import yaml
from loguru import logger

from documents.validation import ValidationPolicy
from storage.object_store.azure_blob import AzureBlobObjectStore
from storage.object_store.interfaces import ObjectStore
from storage.object_store.memory import InMemoryObjectStore

dotenv.load_dotenv()

DEFAULT_CONFIG_PATH = "configs/documents.yaml"
DEFAULT_CONTAINER_NAME = "documents"
DEFAULT_MAX_DOCUMENT_SIZE = 5 * 1024 * 1024
DEFAULT_SUPPORTED_TYPES = ["application/pdf"]
STORE_BACKENDS = ("azure", "memory")


class BlobStorageConfig:
    """Object store connection settings"""

    def __init__(self, connection_string: Optional[str] = None, container_name: str = DEFAULT_CONTAINER_NAME):
        self.connection_string = connection_string
        self.container_name = container_name


class DocumentConfig:
    """
    Document service configuration.

    Usage:
        config = DocumentConfig()
        policy = config.to_policy()
        store = build_object_store(config)
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or os.getenv("DOCUMENT_CONFIG_PATH", DEFAULT_CONFIG_PATH)
        file_config = self._load_file(self.config_path)
        blob_config = file_config.get("blobStorageConfig") or {}

        self.blob_storage = BlobStorageConfig(
            connection_string=os.getenv("AZURE_STORAGE_CONNECTION_STRING") or blob_config.get("connectionString"),
            container_name=(
                os.getenv("AZURE_BLOB_CONTAINER")
                or blob_config.get("containerName")
                or DEFAULT_CONTAINER_NAME
            ),
        )

        max_size = os.getenv("MAX_DOCUMENT_SIZE_ALLOWED", file_config.get("maxDocumentSizeAllowed"))
        self.max_document_size_allowed = int(max_size) if max_size is not None else DEFAULT_MAX_DOCUMENT_SIZE

        supported = os.getenv("SUPPORTED_DOCUMENT_TYPES")
        if supported is not None:
            self.supported_types = self._split_types(supported)
        else:
            self.supported_types = list(file_config.get("supportedTypes") or DEFAULT_SUPPORTED_TYPES)

        strict = os.getenv("STRICT_EXISTS_CHECK")
        if strict is not None:
            self.strict_exists_check = strict.lower() == "true"
        else:
            self.strict_exists_check = str(file_config.get("strictExistsCheck", True)).lower() == "true"

        default_backend = "azure" if self.blob_storage.connection_string else "memory"
        self.store_backend = (
            os.getenv("DOCUMENT_STORE_BACKEND") or file_config.get("storeBackend") or default_backend
        ).lower()
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(f"Unknown document store backend: {self.store_backend}")

        logger.info(
            f"Document config: backend={self.store_backend}, "
            f"container={self.blob_storage.container_name}, "
            f"max_size={self.max_document_size_allowed}, "
            f"supported_types={self.supported_types}"
        )

    @staticmethod
    def _load_file(config_path: str) -> Dict[str, Any]:
        path = Path(config_path)
        if not path.is_file():
            logger.debug(f"No document config file at {config_path}, using environment and defaults")
            return {}
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _split_types(value: str) -> List[str]:
        return [t.strip() for t in value.split(",") if t.strip()]

    def to_policy(self) -> ValidationPolicy:
        """Build the immutable validation policy."""
        return ValidationPolicy.create(self.max_document_size_allowed, self.supported_types)


def build_object_store(config: DocumentConfig) -> ObjectStore:
    """Create the object store adapter selected by configuration."""
    if config.store_backend == "azure":
        if not config.blob_storage.connection_string:
            raise ValueError("AZURE_STORAGE_CONNECTION_STRING not configured")
        return AzureBlobObjectStore(
            connection_string=config.blob_storage.connection_string,
            container_name=config.blob_storage.container_name,
            strict_exists=config.strict_exists_check,
        )

    logger.warning("Using in-memory document store, documents will not survive a restart")
    return InMemoryObjectStore(container_name=config.blob_storage.container_name)
