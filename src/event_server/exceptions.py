"""Common exceptions for the server.

This module contains reusable exception classes that can be used
across different services and modules.
"""

from pathlib import Path


class ResourceNotFoundError(Exception):
    """Raised when a resource doesn't exist.

    Generic exception for any record that cannot be found by its identifier.
    GraphQL reports the message to the caller unchanged.
    """

    def __init__(self, resource_type: str, identifier: str | int):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class DatasetLoadError(Exception):
    """Raised when the seed dataset cannot be read or validated."""

    def __init__(self, source: str | Path, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load dataset from {source}: {reason}")
