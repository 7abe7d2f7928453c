"""Version API endpoint."""

from fastapi import APIRouter

from event_server.utils.version import VersionInfo, get_version

router = APIRouter(tags=["System"])


@router.get("", response_model=VersionInfo)
async def get_version_endpoint() -> VersionInfo:
    """Get the version of the running server."""
    return get_version()
