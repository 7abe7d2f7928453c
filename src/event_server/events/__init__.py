"""Event handlers for the event server.

Handlers listen on the creation channels of the event bus alongside the
GraphQL subscribers.
"""

from loguru import logger

from event_server.constants import (
    ENTITY_EVENT,
    ENTITY_PARTICIPANT,
    ENTITY_USER,
    EVENT_CREATED,
    PARTICIPANT_ADDED,
    USER_CREATED,
)
from event_server.event_bus import EventBus
from event_server.events.handlers import RecordCreatedLogHandler

__all__ = [
    "RecordCreatedLogHandler",
    "register_event_handlers",
]

# Creation channel per entity kind; locations are not published
CREATION_CHANNELS = {
    ENTITY_USER: USER_CREATED,
    ENTITY_EVENT: EVENT_CREATED,
    ENTITY_PARTICIPANT: PARTICIPANT_ADDED,
}


def register_event_handlers(event_bus: EventBus) -> dict[str, RecordCreatedLogHandler]:
    """Register the creation audit handlers on the event bus.

    Args:
        event_bus: The application's event bus

    Returns:
        The registered handlers keyed by channel
    """
    logger.debug("Registering event handlers in event bus")

    handlers = {}
    for entity, channel in CREATION_CHANNELS.items():
        handler = RecordCreatedLogHandler(entity)
        event_bus.on(channel, handler)
        handlers[channel] = handler

    logger.info("Event handlers registered successfully")
    return handlers
