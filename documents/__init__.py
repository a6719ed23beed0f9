from documents import config
from documents import doc_routes
from documents import gateway
from documents import models
from documents import validation

from documents.config import (BlobStorageConfig, DocumentConfig,
                              build_object_store,)
from documents.doc_routes import (get_document_gateway, router,)
from documents.gateway import (DocumentGateway, document_basename,
                               read_content,)
from documents.models import (DocumentDescriptor, Failure, FailureKind,
                              Result, StoredObjectRef, Success,
                              UploadedDocument, ValidationOutcome,)
from documents.validation import (ValidationPolicy, validate_document,)

__all__ = ['BlobStorageConfig', 'DocumentConfig', 'DocumentDescriptor',
           'DocumentGateway', 'Failure', 'FailureKind', 'Result',
           'StoredObjectRef', 'Success', 'UploadedDocument',
           'ValidationOutcome', 'ValidationPolicy', 'build_object_store',
           'config', 'doc_routes', 'document_basename', 'gateway',
           'get_document_gateway', 'models', 'read_content', 'router',
           'validate_document', 'validation']
