"""Main FastAPI application module."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from event_server.api.health_check import router as health_router
from event_server.api.ping import router as ping_router
from event_server.api.version import router as version_router
from event_server.constants import CHANNELS
from event_server.event_bus import EventBus
from event_server.events import register_event_handlers
from event_server.graphql.graphql_router import create_graphql_router
from event_server.logging import setup_logging, setup_uvicorn_logging
from event_server.services.di import register_all_services
from event_server.services.registry import ServiceRegistry
from event_server.settings import Settings, get_settings
from event_server.store import RecordStore, load_store
from event_server.utils.id_generator import IdAllocator
from event_server.utils.version import get_version


def _log_server_endpoints_summary(settings: Settings) -> None:
    """Log the server URL and available endpoints.

    Args:
        settings: Application settings containing host and port
    """
    server_url = f"http://{settings.host}:{settings.port}"
    logger.info(f"Server running at: {server_url}")

    endpoints = [
        ("GraphQL", "/graphql"),
        ("Health Check", "/health-check"),
        ("Ping", "/ping"),
        ("Version", "/version"),
        ("API Docs", "/docs"),
    ]

    logger.info("Available endpoints:")
    for name, path in endpoints:
        logger.info(f"   {name}: {server_url}{path}")
    logger.info(f"   GraphQL subscriptions: ws://{settings.host}:{settings.port}/graphql")


def build_services(registry: ServiceRegistry, settings: Settings, store: RecordStore | None = None) -> RecordStore:
    """Create the store, event bus and allocator and register them with the services.

    Args:
        registry: Service registry of the application
        settings: Application settings
        store: Pre-built store to serve; None loads the configured dataset

    Returns:
        The record store being served
    """
    if store is None:
        store = load_store(settings.data_file, id_lookup=settings.id_lookup)

    id_allocator = IdAllocator(strategy=settings.id_strategy)
    id_allocator.reserve(store.all_ids())

    event_bus = EventBus(channels=CHANNELS, isolate_events=settings.isolate_events)
    register_event_handlers(event_bus)

    logger.info("Registering services in the service registry")
    register_all_services(registry, store, event_bus, id_allocator, settings)
    return store


def create_app(settings: Settings | None = None, store: RecordStore | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to use; defaults to the cached process settings
        store: Record store to serve; None loads the dataset at startup

    Returns:
        The configured FastAPI application
    """
    settings = settings or get_settings()
    registry = ServiceRegistry()

    @asynccontextmanager
    async def app_lifespan(_app: FastAPI):
        """Handle startup and shutdown events for the application."""
        build_services(registry, settings, store)
        _log_server_endpoints_summary(settings)

        yield

        logger.info("Event server shutting down")
        registry.get(EventBus).shutdown()
        registry.clear()

    app = FastAPI(
        lifespan=app_lifespan,
        title="Event server",
        description="In-memory GraphQL API for users, events, locations and participants",
        version=get_version().version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.registry = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # System endpoints
    app.include_router(health_router, prefix="")
    app.include_router(ping_router, prefix="")
    app.include_router(version_router, prefix="/version")

    app.include_router(create_graphql_router(graphql_ide=settings.graphql_ide), prefix="/graphql")

    return app


def create_app_from_settings() -> FastAPI:
    """Application factory for uvicorn: configures logging, then builds the app."""
    settings = get_settings()
    setup_logging(settings.log_level, serialize=settings.log_json)
    setup_uvicorn_logging()
    return create_app(settings)
