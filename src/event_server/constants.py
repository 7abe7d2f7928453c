"""Global constants for the event server.

Entity names and event bus channel names are shared by the store, the
services and the GraphQL schema, so they live here instead of being
repeated as string literals.
"""

# Entity kinds
ENTITY_USER = "User"
ENTITY_EVENT = "Event"
ENTITY_LOCATION = "Location"
ENTITY_PARTICIPANT = "Participant"

ENTITIES = (ENTITY_USER, ENTITY_EVENT, ENTITY_LOCATION, ENTITY_PARTICIPANT)

# Event bus channels
USER_CREATED = "userCreated"
USER_UPDATED = "userUpdated"
USER_DELETED = "userDeleted"
EVENT_CREATED = "eventCreated"
EVENT_UPDATED = "eventUpdated"
EVENT_DELETED = "eventDeleted"
LOCATION_CREATED = "locationCreated"
LOCATION_UPDATED = "locationUpdated"
LOCATION_DELETED = "locationDeleted"
PARTICIPANT_ADDED = "participantAdded"
PARTICIPANT_UPDATED = "participantUpdated"
PARTICIPANT_DELETED = "participantDeleted"

# Declared channels, only the creation channels of users, events and
# participants are published to
CHANNELS = (
    USER_CREATED,
    USER_UPDATED,
    USER_DELETED,
    EVENT_CREATED,
    EVENT_UPDATED,
    EVENT_DELETED,
    LOCATION_CREATED,
    LOCATION_UPDATED,
    LOCATION_DELETED,
    PARTICIPANT_ADDED,
    PARTICIPANT_UPDATED,
    PARTICIPANT_DELETED,
)

# Identifier lookup modes
ID_LOOKUP_EXACT = "exact"
ID_LOOKUP_NUMERIC = "numeric"

# Identifier generation strategies
ID_STRATEGY_UUID = "uuid"
ID_STRATEGY_SHORT = "short"
