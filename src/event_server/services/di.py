"""Dependency injection setup module.

This module provides centralized service registration for both the
FastAPI server and the CLI.
"""

from loguru import logger

from event_server.event_bus import EventBus
from event_server.services.record_service import RECORD_SERVICES
from event_server.services.registry import ServiceRegistry
from event_server.settings import Settings
from event_server.store import RecordStore
from event_server.utils.id_generator import IdAllocator


def register_core_services(
    registry: ServiceRegistry,
    store: RecordStore,
    event_bus: EventBus,
    id_allocator: IdAllocator,
    settings: Settings | None = None,
) -> None:
    """Register the shared building blocks as singletons.

    Args:
        registry: Service registry instance to register services in
        store: The record store owned by this application
        event_bus: The event bus owned by this application
        id_allocator: The identifier allocator owned by this application
        settings: Settings the application was built with
    """
    logger.debug("Registering core services in DI container")

    registry.register_singleton(RecordStore, store)
    registry.register_singleton(EventBus, event_bus)
    registry.register_singleton(IdAllocator, id_allocator)
    if settings is not None:
        registry.register_singleton(Settings, settings)


def register_app_services(registry: ServiceRegistry, store: RecordStore, event_bus: EventBus, id_allocator: IdAllocator) -> None:
    """Register the record services.

    The services are stateless apart from the objects they are built with,
    so one instance per entity kind is registered as a singleton.

    Args:
        registry: Service registry instance to register services in
        store: The record store the services operate on
        event_bus: The event bus creations are published on
        id_allocator: The allocator for new record identifiers
    """
    logger.debug("Registering application services in DI container")

    for service_type in RECORD_SERVICES:
        registry.register_singleton(service_type, service_type(store, event_bus, id_allocator))


def register_all_services(
    registry: ServiceRegistry,
    store: RecordStore,
    event_bus: EventBus,
    id_allocator: IdAllocator,
    settings: Settings | None = None,
) -> None:
    """Register all services in the service registry.

    This is a convenience function that registers both core and application services.
    """
    register_core_services(registry, store, event_bus, id_allocator, settings)
    register_app_services(registry, store, event_bus, id_allocator)
