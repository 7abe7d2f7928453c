"""Health check API endpoint."""

from fastapi import APIRouter, Request
from loguru import logger
from pydantic import BaseModel, Field

from event_server.event_bus import EventBus
from event_server.store import RecordStore
from event_server.utils.version import VersionInfo, get_version

router = APIRouter(tags=["System"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version_info: VersionInfo
    records: dict[str, int] = Field(default_factory=dict, description="Number of records per collection")
    subscribers: dict[str, int] = Field(default_factory=dict, description="Attached subscribers per channel")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "ok",
                "version_info": {"version": "0.1.0", "full_version": "0.1.0", "local": None, "is_dev": False},
                "records": {"users": 4, "events": 3, "locations": 3, "participants": 5},
                "subscribers": {"userCreated": 1},
            }
        }
    }


@router.get("/health-check", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        HealthResponse: Server status, record counts and live subscriber counts.
    """
    logger.debug("Health check requested")

    registry = request.app.state.registry
    store = registry.get(RecordStore)
    event_bus = registry.get(EventBus)

    subscribers = {
        channel: count
        for channel in event_bus.get_registered_channels()
        if (count := event_bus.get_subscriber_count(channel)) > 0
    }

    return HealthResponse(
        status="ok",
        version_info=get_version(),
        records=store.counts(),
        subscribers=subscribers,
    )
