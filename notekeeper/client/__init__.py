"""
Notes Store Client Module.

Thin async HTTP layer (httpx) over the remote Notes Store:
GET/POST /notes, PUT/DELETE /notes/{id}. All failures surface as StoreError.
"""

from notekeeper.client.store import (
    NotesStore,
    NotesStoreClient,
)

__all__ = [
    "NotesStore",
    "NotesStoreClient",
]
