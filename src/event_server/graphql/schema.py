"""GraphQL schema for the event server.

Field names are exposed verbatim (``location_id``, ``createdUser``), so the
schema is built with automatic camel-casing turned off.
"""

from collections.abc import AsyncGenerator
from contextlib import aclosing

import strawberry
from loguru import logger
from strawberry.schema.config import StrawberryConfig

from event_server.constants import EVENT_CREATED, PARTICIPANT_ADDED, USER_CREATED
from event_server.event_bus import EventBus
from event_server.graphql.types import (
    CreatedEventInput,
    CreatedLocationInput,
    CreatedParticipantInput,
    CreatedUserInput,
    DeleteAllOutput,
    Event,
    Location,
    Participant,
    UpdatedEventInput,
    UpdatedLocationInput,
    UpdatedParticipantInput,
    UpdatedUserInput,
    User,
    from_record,
    input_fields,
)
from event_server.services.record_service import EventService, LocationService, ParticipantService, UserService


@strawberry.type
class Query:
    """Root query type for the GraphQL schema.

    Single-record lookups return null when nothing matches instead of
    raising an error.
    """

    @strawberry.field
    async def users(self, info: strawberry.Info) -> list[User]:
        """Get all users."""
        logger.debug("GraphQL query: users")
        return [from_record(User, record) for record in info.context.service(UserService).list_records()]

    @strawberry.field
    async def user(self, info: strawberry.Info, id: strawberry.ID) -> User | None:
        """Get a user by ID.

        Args:
            info: GraphQL resolver info
            id: ID of the user to retrieve

        Returns:
            User object if found, None otherwise
        """
        logger.debug(f"GraphQL query: user with id={id}")
        record = info.context.service(UserService).get_record(id)
        return from_record(User, record) if record is not None else None

    @strawberry.field
    async def events(self, info: strawberry.Info) -> list[Event]:
        """Get all events."""
        logger.debug("GraphQL query: events")
        return [from_record(Event, record) for record in info.context.service(EventService).list_records()]

    @strawberry.field
    async def event(self, info: strawberry.Info, id: strawberry.ID) -> Event | None:
        """Get an event by ID, or None if not found."""
        logger.debug(f"GraphQL query: event with id={id}")
        record = info.context.service(EventService).get_record(id)
        return from_record(Event, record) if record is not None else None

    @strawberry.field
    async def locations(self, info: strawberry.Info) -> list[Location]:
        """Get all locations."""
        logger.debug("GraphQL query: locations")
        return [from_record(Location, record) for record in info.context.service(LocationService).list_records()]

    @strawberry.field
    async def location(self, info: strawberry.Info, id: strawberry.ID) -> Location | None:
        """Get a location by ID, or None if not found."""
        logger.debug(f"GraphQL query: location with id={id}")
        record = info.context.service(LocationService).get_record(id)
        return from_record(Location, record) if record is not None else None

    @strawberry.field
    async def participants(self, info: strawberry.Info) -> list[Participant]:
        """Get all participants."""
        logger.debug("GraphQL query: participants")
        return [from_record(Participant, record) for record in info.context.service(ParticipantService).list_records()]

    @strawberry.field
    async def participant(self, info: strawberry.Info, id: strawberry.ID) -> Participant | None:
        """Get a participant by ID, or None if not found."""
        logger.debug(f"GraphQL query: participant with id={id}")
        record = info.context.service(ParticipantService).get_record(id)
        return from_record(Participant, record) if record is not None else None


@strawberry.type
class Mutation:
    """Root mutation type for the GraphQL schema.

    Update and delete mutations fail with a "<Entity> not found" error when
    no record has the given ID. Delete-all never fails.
    """

    # User

    @strawberry.mutation(name="createdUser")
    async def created_user(self, info: strawberry.Info, data: CreatedUserInput) -> User:
        """Create a new user and publish it on userCreated.

        Args:
            info: GraphQL resolver info
            data: Field values of the new user

        Returns:
            The created User with its generated ID
        """
        logger.debug("GraphQL mutation: createdUser")
        record = await info.context.service(UserService).create_record(input_fields(data))
        logger.debug(f"GraphQL mutation result: createdUser returned {record['id']}")
        return from_record(User, record)

    @strawberry.mutation(name="updatedUser")
    async def updated_user(self, info: strawberry.Info, id: strawberry.ID, data: UpdatedUserInput) -> User:
        """Update the fields of a user that are present in the input.

        Args:
            info: GraphQL resolver info
            id: ID of the user to update
            data: Fields to overwrite; omitted fields keep their value

        Returns:
            The updated User
        """
        logger.debug(f"GraphQL mutation: updatedUser with id={id}")
        record = info.context.service(UserService).update_record(id, input_fields(data))
        return from_record(User, record)

    @strawberry.mutation(name="updateUser", deprecation_reason="Use updatedUser")
    async def update_user(self, info: strawberry.Info, id: strawberry.ID, data: UpdatedUserInput) -> User:
        """Former name of updatedUser."""
        logger.debug(f"GraphQL mutation: updateUser with id={id}")
        record = info.context.service(UserService).update_record(id, input_fields(data))
        return from_record(User, record)

    @strawberry.mutation(name="deletedUser")
    async def deleted_user(self, info: strawberry.Info, id: strawberry.ID) -> User:
        """Delete a user and return it as it was before removal."""
        logger.debug(f"GraphQL mutation: deletedUser with id={id}")
        return from_record(User, info.context.service(UserService).delete_record(id))

    @strawberry.mutation(name="deletedAllUser")
    async def deleted_all_user(self, info: strawberry.Info) -> DeleteAllOutput:
        """Delete every user."""
        logger.debug("GraphQL mutation: deletedAllUser")
        return DeleteAllOutput(**info.context.service(UserService).delete_all_records())

    # Event

    @strawberry.mutation(name="createdEvent")
    async def created_event(self, info: strawberry.Info, data: CreatedEventInput) -> Event:
        """Create a new event and publish it on eventCreated."""
        logger.debug("GraphQL mutation: createdEvent")
        record = await info.context.service(EventService).create_record(input_fields(data))
        logger.debug(f"GraphQL mutation result: createdEvent returned {record['id']}")
        return from_record(Event, record)

    @strawberry.mutation(name="updatedEvent")
    async def updated_event(self, info: strawberry.Info, id: strawberry.ID, data: UpdatedEventInput) -> Event:
        """Update the fields of an event that are present in the input."""
        logger.debug(f"GraphQL mutation: updatedEvent with id={id}")
        record = info.context.service(EventService).update_record(id, input_fields(data))
        return from_record(Event, record)

    @strawberry.mutation(name="deletedEvent")
    async def deleted_event(self, info: strawberry.Info, id: strawberry.ID) -> Event:
        """Delete an event and return it as it was before removal."""
        logger.debug(f"GraphQL mutation: deletedEvent with id={id}")
        return from_record(Event, info.context.service(EventService).delete_record(id))

    @strawberry.mutation(name="deletedAllEvent")
    async def deleted_all_event(self, info: strawberry.Info) -> DeleteAllOutput:
        """Delete every event."""
        logger.debug("GraphQL mutation: deletedAllEvent")
        return DeleteAllOutput(**info.context.service(EventService).delete_all_records())

    # Location

    @strawberry.mutation(name="createdLocation")
    async def created_location(self, info: strawberry.Info, data: CreatedLocationInput) -> Location:
        """Create a new location. Locations are not published to subscribers."""
        logger.debug("GraphQL mutation: createdLocation")
        record = await info.context.service(LocationService).create_record(input_fields(data))
        logger.debug(f"GraphQL mutation result: createdLocation returned {record['id']}")
        return from_record(Location, record)

    @strawberry.mutation(name="updatedLocation")
    async def updated_location(self, info: strawberry.Info, id: strawberry.ID, data: UpdatedLocationInput) -> Location:
        """Update the fields of a location that are present in the input."""
        logger.debug(f"GraphQL mutation: updatedLocation with id={id}")
        record = info.context.service(LocationService).update_record(id, input_fields(data))
        return from_record(Location, record)

    @strawberry.mutation(name="deletedLocation")
    async def deleted_location(self, info: strawberry.Info, id: strawberry.ID) -> Location:
        """Delete a location and return it as it was before removal."""
        logger.debug(f"GraphQL mutation: deletedLocation with id={id}")
        return from_record(Location, info.context.service(LocationService).delete_record(id))

    @strawberry.mutation(name="deletedAllLocation")
    async def deleted_all_location(self, info: strawberry.Info) -> DeleteAllOutput:
        """Delete every location."""
        logger.debug("GraphQL mutation: deletedAllLocation")
        return DeleteAllOutput(**info.context.service(LocationService).delete_all_records())

    # Participant

    @strawberry.mutation(name="createdParticipant")
    async def created_participant(self, info: strawberry.Info, data: CreatedParticipantInput) -> Participant:
        """Create a new participant and publish it on participantAdded."""
        logger.debug("GraphQL mutation: createdParticipant")
        record = await info.context.service(ParticipantService).create_record(input_fields(data))
        logger.debug(f"GraphQL mutation result: createdParticipant returned {record['id']}")
        return from_record(Participant, record)

    @strawberry.mutation(name="updatedParticipant")
    async def updated_participant(
        self, info: strawberry.Info, id: strawberry.ID, data: UpdatedParticipantInput
    ) -> Participant:
        """Update the fields of a participant that are present in the input."""
        logger.debug(f"GraphQL mutation: updatedParticipant with id={id}")
        record = info.context.service(ParticipantService).update_record(id, input_fields(data))
        return from_record(Participant, record)

    @strawberry.mutation(name="deletedParticipant")
    async def deleted_participant(self, info: strawberry.Info, id: strawberry.ID) -> Participant:
        """Delete a participant and return it as it was before removal."""
        logger.debug(f"GraphQL mutation: deletedParticipant with id={id}")
        return from_record(Participant, info.context.service(ParticipantService).delete_record(id))

    @strawberry.mutation(name="deletedAllParticipant")
    async def deleted_all_participant(self, info: strawberry.Info) -> DeleteAllOutput:
        """Delete every participant."""
        logger.debug("GraphQL mutation: deletedAllParticipant")
        return DeleteAllOutput(**info.context.service(ParticipantService).delete_all_records())


@strawberry.type
class Subscription:
    """Root subscription type for the GraphQL schema.

    Each subscriber receives the records created after it subscribed, in
    creation order, until it disconnects.
    """

    @strawberry.subscription(name="userCreated")
    async def user_created(self, info: strawberry.Info) -> AsyncGenerator[User, None]:
        """Stream newly created users."""
        logger.debug("GraphQL subscription: userCreated")
        async with aclosing(info.context.service(EventBus).listen(USER_CREATED)) as stream:
            async for record in stream:
                yield from_record(User, record)

    @strawberry.subscription(name="eventCreated")
    async def event_created(self, info: strawberry.Info) -> AsyncGenerator[Event, None]:
        """Stream newly created events."""
        logger.debug("GraphQL subscription: eventCreated")
        async with aclosing(info.context.service(EventBus).listen(EVENT_CREATED)) as stream:
            async for record in stream:
                yield from_record(Event, record)

    @strawberry.subscription(name="participantAdded")
    async def participant_added(self, info: strawberry.Info) -> AsyncGenerator[Participant, None]:
        """Stream newly created participants."""
        logger.debug("GraphQL subscription: participantAdded")
        async with aclosing(info.context.service(EventBus).listen(PARTICIPANT_ADDED)) as stream:
            async for record in stream:
                yield from_record(Participant, record)


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
    config=StrawberryConfig(auto_camel_case=False),
)
