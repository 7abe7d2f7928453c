"""Record services: list, get, create, update and delete per entity kind."""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from event_server.constants import (
    ENTITY_EVENT,
    ENTITY_LOCATION,
    ENTITY_PARTICIPANT,
    ENTITY_USER,
    EVENT_CREATED,
    PARTICIPANT_ADDED,
    USER_CREATED,
)
from event_server.event_bus import EventBus
from event_server.exceptions import ResourceNotFoundError
from event_server.store import Record, RecordCollection, RecordStore
from event_server.utils.id_generator import IdAllocator

RecordId = str | int


class RecordService:
    """CRUD operations over one collection of the record store.

    Subclasses pick the entity kind and, optionally, the channel that newly
    created records are published on.
    """

    entity: str
    created_channel: str | None = None

    def __init__(self, store: RecordStore, event_bus: EventBus, id_allocator: IdAllocator):
        self.store = store
        self.event_bus = event_bus
        self.id_allocator = id_allocator

    @property
    def collection(self) -> RecordCollection:
        return self.store.collection(self.entity)

    def list_records(self) -> list[Record]:
        """Return every record of the collection, in insertion order."""
        return self.collection.all()

    def get_record(self, record_id: RecordId) -> Record | None:
        """Return the record with the given id, or None when there is none."""
        record = self.collection.find_by_id(record_id)
        if record is None:
            logger.debug(f"Service: get {self.entity} - not found: {record_id}")
        return record

    async def create_record(self, fields: Mapping[str, Any]) -> Record:
        """Create a record with a fresh identifier.

        The record is appended to the collection and, when the entity has a
        creation channel, published before it is returned.

        Args:
            fields: Field values of the new record, without an id

        Returns:
            The stored record
        """
        record = {"id": self.id_allocator.new_id()}
        record.update((key, value) for key, value in fields.items() if key != "id")
        self.collection.insert(record)
        logger.debug(f"Service: create {self.entity} - stored {record['id']}")

        if self.created_channel is not None:
            await self.event_bus.publish_and_wait(self.created_channel, record)

        return record

    def update_record(self, record_id: RecordId, fields: Mapping[str, Any]) -> Record:
        """Merge the given fields over a stored record.

        Every field present in ``fields`` replaces the stored value, None
        included. Absent fields and the id are preserved.

        Raises:
            ResourceNotFoundError: If no record has the given id
        """
        existing = self.collection.find_by_id(record_id)
        if existing is None:
            raise ResourceNotFoundError(self.entity, record_id)

        merged = {**existing}
        merged.update((key, value) for key, value in fields.items() if key != "id")
        self.collection.replace_at(record_id, merged)

        logger.debug(f"Service: update {self.entity} {record_id} - fields {sorted(fields)}")
        return merged

    def delete_record(self, record_id: RecordId) -> Record:
        """Remove a record and return it.

        Raises:
            ResourceNotFoundError: If no record has the given id
        """
        removed = self.collection.remove_by_id(record_id)
        logger.debug(f"Service: delete {self.entity} {record_id}")
        return removed

    def delete_all_records(self) -> dict[str, int]:
        """Empty the collection and report how many records were removed."""
        count = self.collection.clear()
        logger.debug(f"Service: delete all {self.entity} - removed {count}")
        return {"count": count}


class UserService(RecordService):
    entity = ENTITY_USER
    created_channel = USER_CREATED


class EventService(RecordService):
    entity = ENTITY_EVENT
    created_channel = EVENT_CREATED


class LocationService(RecordService):
    """Locations are never published on creation."""

    entity = ENTITY_LOCATION


class ParticipantService(RecordService):
    entity = ENTITY_PARTICIPANT
    created_channel = PARTICIPANT_ADDED


RECORD_SERVICES: tuple[type[RecordService], ...] = (UserService, EventService, LocationService, ParticipantService)
