from .draft_store import (
    DraftNotFoundError, DraftStore, DraftStoreError, InMemoryDraftStore,
    StaleDraftStateError
)

__all__ = [
    "DraftNotFoundError",
    "DraftStore",
    "DraftStoreError",
    "InMemoryDraftStore",
    "StaleDraftStateError",
]
