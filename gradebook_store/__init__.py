from .models import DailyPlan, Snapshot
from .store import (
    DocumentStore,
    HttpDocumentStore,
    JsonDocumentStore,
    MemoryDocumentStore,
    StorageError,
    get_store,
)
