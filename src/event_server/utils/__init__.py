"""Utility functions for the event server."""

from event_server.utils.id_generator import IdAllocator, generate_short_id, generate_uuid, to_base36

__all__ = [
    "IdAllocator",
    "generate_short_id",
    "generate_uuid",
    "to_base36",
]
