from storage.object_store import azure_blob
from storage.object_store import interfaces
from storage.object_store import memory

from storage.object_store.azure_blob import (AzureBlobObjectStore,)
from storage.object_store.interfaces import (ObjectStore, ObjectSummary,
                                             StoredObject, StoredObjectRef,)
from storage.object_store.memory import (InMemoryObjectStore,)

__all__ = ['AzureBlobObjectStore', 'InMemoryObjectStore', 'ObjectStore',
           'ObjectSummary', 'StoredObject', 'StoredObjectRef', 'azure_blob',
           'interfaces', 'memory']
