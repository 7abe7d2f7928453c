"""In-memory record store.

Four ordered collections (users, events, locations, participants) held by a
single ``RecordStore`` object that is created at startup and injected into
the services. Lookups follow the store's identifier matching mode.
"""

from .collection import Record, RecordCollection, get_id_matcher, match_exact, match_numeric, parse_int
from .loader import load_store
from .record_store import COLLECTION_KEYS, RecordStore

__all__ = [
    "COLLECTION_KEYS",
    "Record",
    "RecordCollection",
    "RecordStore",
    "get_id_matcher",
    "load_store",
    "match_exact",
    "match_numeric",
    "parse_int",
]
