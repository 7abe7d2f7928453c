"""GraphQL context with service registry integration."""

from typing import Any, TypeVar

from strawberry.fastapi import BaseContext

from event_server.services.registry import ServiceRegistry

T = TypeVar("T")


class GraphQLContext(BaseContext):
    """GraphQL context giving resolvers access to the application's services."""

    def __init__(self, registry: ServiceRegistry, **kwargs: Any):
        """Initialize the GraphQL context.

        Args:
            registry: The service registry of the application serving the request
            **kwargs: Additional context values
        """
        super().__init__()
        self._registry = registry

        # Add any additional context values
        for key, value in kwargs.items():
            setattr(self, key, value)

    def service(self, service_type: type[T]) -> T:
        """Get a service by type from the registry.

        Args:
            service_type: The type of the service to retrieve

        Returns:
            An instance of the requested service

        Raises:
            KeyError: If the requested service is not registered in the registry
        """
        try:
            return self._registry.get(service_type)
        except KeyError as e:
            raise KeyError(f"Service {service_type.__name__} not registered") from e
