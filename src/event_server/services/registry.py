"""Service registry for dependency injection."""

from collections.abc import Callable
from typing import Any, TypeVar, cast

T = TypeVar("T")
ServiceFactory = Callable[[], T]
ServiceProvider = T | ServiceFactory[T]


class ServiceRegistry:
    """Registry for all shared services with support for singletons and factories.

    One registry is created per application so that every app (and every
    test) owns its store, bus and services.
    """

    def __init__(self):
        """Initialize an empty service registry."""
        self._services: dict[str, ServiceProvider[Any]] = {}
        self._factories: set[str] = set()

    def register_singleton(self, service_type: type[T], instance: T) -> None:
        """Register a singleton instance by its type.

        Args:
            service_type: The type of the service to register
            instance: The singleton instance to register
        """
        self._services[service_type.__name__] = instance
        self._factories.discard(service_type.__name__)

    def register_factory(self, service_type: type[T], factory: ServiceFactory[T]) -> None:
        """Register a factory function by its type.

        Args:
            service_type: The type of the service to register
            factory: The factory function that creates instances of the service
        """
        self._services[service_type.__name__] = factory
        self._factories.add(service_type.__name__)

    def is_registered(self, service_type: type) -> bool:
        """Check whether a service type has a provider."""
        return service_type.__name__ in self._services

    def get(self, service_type: type[T]) -> T:
        """Get a service instance by type.

        Args:
            service_type: The type of the service to retrieve

        Returns:
            An instance of the requested service

        Raises:
            KeyError: If the requested service is not registered
        """
        service_name = service_type.__name__

        if service_name not in self._services:
            raise KeyError(f"Service {service_name} not registered")

        provider = self._services[service_name]

        if service_name in self._factories:
            return cast(ServiceFactory[T], provider)()

        return cast(T, provider)

    def clear(self) -> None:
        """Remove every registered provider."""
        self._services.clear()
        self._factories.clear()
