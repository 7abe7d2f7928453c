"""GraphQL types for the event server.

Records are stored as dictionaries; ``from_record`` turns one into its
GraphQL object and ``input_fields`` turns an input object back into the
record fields it carries. Update inputs default every field to ``UNSET`` so
an omitted field can be told apart from an explicit ``null``.
"""

import dataclasses
from collections.abc import Mapping
from typing import Any

import strawberry
from strawberry import UNSET

# Python attribute names that differ from the stored record keys
RECORD_KEYS = {"from_": "from"}


@strawberry.type
class User:
    """A user."""

    id: strawberry.ID
    username: str
    email: str


@strawberry.type
class Event:
    """An event hosted by a user at a location."""

    id: strawberry.ID
    title: str
    desc: str
    date: str
    from_: str = strawberry.field(name="from")
    to: str
    location_id: int
    user_id: strawberry.ID


@strawberry.type
class Location:
    """A named place with coordinates."""

    id: strawberry.ID
    name: str
    desc: str
    lat: float
    lng: float


@strawberry.type
class Participant:
    """A user taking part in an event."""

    id: strawberry.ID
    user_id: strawberry.ID
    event_id: strawberry.ID


@strawberry.type
class DeleteAllOutput:
    """Number of records removed by a delete-all mutation."""

    count: int


@strawberry.input
class CreatedUserInput:
    username: str
    email: str


@strawberry.input
class UpdatedUserInput:
    username: str | None = UNSET
    email: str | None = UNSET


@strawberry.input
class CreatedEventInput:
    title: str
    desc: str
    date: str
    from_: str = strawberry.field(name="from")
    to: str
    location_id: int
    user_id: strawberry.ID


@strawberry.input
class UpdatedEventInput:
    title: str | None = UNSET
    desc: str | None = UNSET
    date: str | None = UNSET
    from_: str | None = strawberry.field(name="from", default=UNSET)
    to: str | None = UNSET
    location_id: int | None = UNSET
    user_id: strawberry.ID | None = UNSET


@strawberry.input
class CreatedLocationInput:
    name: str
    desc: str
    lat: float
    lng: float


@strawberry.input
class UpdatedLocationInput:
    name: str | None = UNSET
    desc: str | None = UNSET
    lat: float | None = UNSET
    lng: float | None = UNSET


@strawberry.input
class CreatedParticipantInput:
    user_id: strawberry.ID
    event_id: strawberry.ID


@strawberry.input
class UpdatedParticipantInput:
    user_id: strawberry.ID | None = UNSET
    event_id: strawberry.ID | None = UNSET


def from_record[T](graphql_type: type[T], record: Mapping[str, Any]) -> T:
    """Build a GraphQL object from a stored record.

    Record keys the type does not declare are ignored.

    Args:
        graphql_type: One of the strawberry output types
        record: The stored record

    Returns:
        An instance of ``graphql_type``
    """
    values = {field.name: record.get(RECORD_KEYS.get(field.name, field.name)) for field in dataclasses.fields(graphql_type)}
    return graphql_type(**values)


def input_fields(data: Any) -> dict[str, Any]:
    """Return the record fields set on an input object, keyed by record key."""
    values = {}
    for field in dataclasses.fields(data):
        value = getattr(data, field.name)
        if value is UNSET:
            continue
        values[RECORD_KEYS.get(field.name, field.name)] = value
    return values
