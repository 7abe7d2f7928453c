"""The record store: one collection per entity kind."""

from collections.abc import Mapping
from typing import Any

from event_server.constants import (
    ENTITY_EVENT,
    ENTITY_LOCATION,
    ENTITY_PARTICIPANT,
    ENTITY_USER,
    ID_LOOKUP_EXACT,
)
from event_server.store.collection import Record, RecordCollection, get_id_matcher

# Dataset key for each entity kind
COLLECTION_KEYS = {
    ENTITY_USER: "users",
    ENTITY_EVENT: "events",
    ENTITY_LOCATION: "locations",
    ENTITY_PARTICIPANT: "participants",
}


class RecordStore:
    """Owns the four collections of the server.

    The store is created once at startup and handed to every service that
    needs it; nothing reaches it through module state.
    """

    def __init__(self, data: Mapping[str, list[Record]] | None = None, id_lookup: str = ID_LOOKUP_EXACT):
        data = data or {}
        matcher = get_id_matcher(id_lookup)
        self.id_lookup = id_lookup
        self._collections = {
            entity: RecordCollection(entity, data.get(key), matcher) for entity, key in COLLECTION_KEYS.items()
        }

    @property
    def users(self) -> RecordCollection:
        return self._collections[ENTITY_USER]

    @property
    def events(self) -> RecordCollection:
        return self._collections[ENTITY_EVENT]

    @property
    def locations(self) -> RecordCollection:
        return self._collections[ENTITY_LOCATION]

    @property
    def participants(self) -> RecordCollection:
        return self._collections[ENTITY_PARTICIPANT]

    def collection(self, entity: str) -> RecordCollection:
        """Get the collection of an entity kind.

        Raises:
            KeyError: If the entity kind is unknown
        """
        try:
            return self._collections[entity]
        except KeyError:
            raise KeyError(f"Unknown entity: {entity}") from None

    def counts(self) -> dict[str, int]:
        """Return the number of records per collection, keyed by dataset key."""
        return {COLLECTION_KEYS[entity]: len(collection) for entity, collection in self._collections.items()}

    def all_ids(self) -> list[Any]:
        """Return the identifiers of every stored record."""
        return [record_id for collection in self._collections.values() for record_id in collection.ids()]
