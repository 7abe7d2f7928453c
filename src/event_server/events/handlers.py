"""Record creation handlers.

This module contains handlers that respond to records published on the
creation channels.
"""

from typing import Any

from loguru import logger

from event_server.event_bus.core import EventHandler


class RecordCreatedLogHandler(EventHandler[dict[str, Any]]):
    """Writes an audit line for every created record published on a channel."""

    def __init__(self, entity: str):
        self.entity = entity
        self.count = 0

    async def handle(self, payload: dict[str, Any]) -> str:
        """Log the creation.

        Args:
            payload: The created record

        Returns:
            The identifier of the created record
        """
        self.count += 1
        record_id = str(payload.get("id"))
        logger.info(f"New {self.entity.lower()} created (ID: {record_id})")
        return record_id
