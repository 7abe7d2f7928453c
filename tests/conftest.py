"""Shared fixtures: a small seeded store and the objects built around it."""

import pytest

from event_server.constants import CHANNELS
from event_server.event_bus import EventBus
from event_server.services.di import register_all_services
from event_server.services.registry import ServiceRegistry
from event_server.store import RecordStore
from event_server.utils.id_generator import IdAllocator


@pytest.fixture
def seed_data() -> dict:
    """Fresh seed records for every test."""
    return {
        "users": [
            {"id": 1, "username": "alice", "email": "alice@example.com"},
            {"id": 2, "username": "bora", "email": "bora@example.com"},
        ],
        "events": [
            {
                "id": 1,
                "title": "Python Meetup",
                "desc": "Talks",
                "date": "2026-11-05",
                "from": "18:30",
                "to": "21:00",
                "location_id": 1,
                "user_id": 1,
            }
        ],
        "locations": [
            {"id": 1, "name": "Tech Hub", "desc": "Third floor", "lat": 41.0082, "lng": 28.9784},
        ],
        "participants": [
            {"id": 1, "user_id": 2, "event_id": 1},
            {"id": 2, "user_id": 1, "event_id": 1},
        ],
    }


@pytest.fixture
def store(seed_data: dict) -> RecordStore:
    return RecordStore(seed_data)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus(channels=CHANNELS)


@pytest.fixture
def id_allocator(store: RecordStore) -> IdAllocator:
    allocator = IdAllocator()
    allocator.reserve(store.all_ids())
    return allocator


@pytest.fixture
def registry(store: RecordStore, event_bus: EventBus, id_allocator: IdAllocator) -> ServiceRegistry:
    registry = ServiceRegistry()
    register_all_services(registry, store, event_bus, id_allocator)
    return registry
