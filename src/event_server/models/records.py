"""Record models for the seed dataset.

Records live in the store as plain dictionaries. These models only check the
shape of the seed file when it is loaded; they are dumped back to
dictionaries (by alias, so ``from_`` becomes ``from``) before insertion.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

RecordId = int | str


class RecordBase(BaseModel):
    """Base model for a stored record."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: RecordId


class UserRecord(RecordBase):
    """A user."""

    username: str
    email: str


class EventRecord(RecordBase):
    """An event hosted by a user at a location."""

    title: str
    desc: str
    date: str
    from_: str = Field(alias="from")
    to: str
    location_id: int
    user_id: RecordId


class LocationRecord(RecordBase):
    """A named place with coordinates."""

    name: str
    desc: str
    lat: float
    lng: float


class ParticipantRecord(RecordBase):
    """Join record between a user and an event."""

    user_id: RecordId
    event_id: RecordId


class Dataset(BaseModel):
    """The seed file: one list per collection."""

    users: list[UserRecord] = []
    events: list[EventRecord] = []
    locations: list[LocationRecord] = []
    participants: list[ParticipantRecord] = []

    def collections(self) -> dict[str, list[dict[str, Any]]]:
        """Return the records of every collection as plain dictionaries."""
        return {
            "users": [record.model_dump(by_alias=True) for record in self.users],
            "events": [record.model_dump(by_alias=True) for record in self.events],
            "locations": [record.model_dump(by_alias=True) for record in self.locations],
            "participants": [record.model_dump(by_alias=True) for record in self.participants],
        }
