"""Version utility module for the event server."""

import re
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

from loguru import logger
from pydantic import BaseModel

DISTRIBUTION_NAME = "event-server"
FALLBACK_VERSION = "0.1.0-dev"


class VersionInfo(BaseModel):
    """Version information model."""

    full_version: str
    version: str
    local: str | None = None
    is_dev: bool = False


@lru_cache
def get_version() -> VersionInfo:
    """Get the version of the installed distribution.

    Falls back to a development version when the package is imported from a
    source checkout that was never installed.
    """
    try:
        full_version = version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        logger.warning(f"Distribution {DISTRIBUTION_NAME} not installed, using {FALLBACK_VERSION}")
        full_version = FALLBACK_VERSION

    return parse_version(full_version)


def parse_version(full_version: str) -> VersionInfo:
    """Split a PEP 440 version string into its reported parts.

    Examples:
        >>> parse_version("1.2.3+g1a2b3c").local
        'g1a2b3c'
        >>> parse_version("1.2.3.dev4").is_dev
        True
    """
    base_match = re.match(r"^(\d+\.\d+\.\d+)", full_version)
    base_version = base_match.group(1) if base_match else full_version

    local_match = re.search(r"\+(.+)$", full_version)

    return VersionInfo(
        full_version=full_version,
        version=base_version,
        local=local_match.group(1) if local_match else None,
        is_dev="dev" in full_version,
    )
