"""Main entry point for the event server using Typer and Pydantic Settings."""

from pathlib import Path

import typer
import uvicorn
from loguru import logger

from event_server.exceptions import DatasetLoadError
from event_server.logging import setup_logging
from event_server.settings import get_settings
from event_server.store import load_store

app = typer.Typer(
    name="event-server",
    help="In-memory GraphQL event server",
    no_args_is_help=True,
)


HOST_OPTION = typer.Option(
    None,
    help="Host to bind the server to (overrides EVENT_SERVER_HOST)",
    metavar="<server>",
)  # fmt: skip
PORT_OPTION = typer.Option(
    None,
    help="Port to bind the server to (overrides EVENT_SERVER_PORT)",
    metavar="<port>",
)  # fmt: skip
RELOAD_OPTION = typer.Option(
    None,
    help="Enable/disable auto-reload (overrides EVENT_SERVER_RELOAD)",
)  # fmt: skip
LOG_LEVEL_OPTION = typer.Option(
    None,
    help="Log level (overrides EVENT_SERVER_LOG_LEVEL)",
    metavar="<level>",
    case_sensitive=False,
)  # fmt: skip
DATA_FILE_OPTION = typer.Option(
    None,
    "--data-file",
    help="Seed dataset JSON file (overrides EVENT_SERVER_DATA_FILE)",
    metavar="<path>",
)  # fmt: skip
ID_LOOKUP_OPTION = typer.Option(
    None,
    "--id-lookup",
    help="Identifier lookup: 'exact' or legacy 'numeric' (overrides EVENT_SERVER_ID_LOOKUP)",
    metavar="<mode>",
)  # fmt: skip


def _update_settings(
    host: str | None = None,
    port: int | None = None,
    log_level: str | None = None,
    reload: bool | None = None,
    data_file: Path | None = None,
    id_lookup: str | None = None,
) -> None:
    """Update settings with CLI overrides.

    Args:
        host: Host override
        port: Port override
        log_level: Log level override
        reload: Reload override
        data_file: Seed dataset override
        id_lookup: Identifier lookup mode override
    """
    settings = get_settings()

    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if log_level is not None:
        settings.log_level = log_level.upper()
    if reload is not None:
        settings.reload = reload
    if data_file is not None:
        settings.data_file = data_file
    if id_lookup is not None:
        settings.id_lookup = id_lookup.lower()


@app.command()
def run(
    host: str = HOST_OPTION,
    port: int = PORT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
    reload: bool = RELOAD_OPTION,
    data_file: Path = DATA_FILE_OPTION,
    id_lookup: str = ID_LOOKUP_OPTION,
) -> None:
    """Run the event server."""
    _update_settings(host, port, log_level, reload, data_file, id_lookup)
    settings = get_settings()

    setup_logging(settings.log_level, serialize=settings.log_json)

    logger.info(f"Starting event server on {settings.host}:{settings.port}")
    logger.info(f"Dataset: {settings.data_file or 'bundled'}")
    logger.info(f"Reload: {settings.reload}")

    uvicorn.run(
        "event_server.app:create_app_from_settings",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def check(
    log_level: str = LOG_LEVEL_OPTION,
    data_file: Path = DATA_FILE_OPTION,
) -> None:
    """Load and validate the seed dataset, then exit."""
    _update_settings(log_level=log_level, data_file=data_file)
    settings = get_settings()

    setup_logging(settings.log_level, serialize=settings.log_json)

    logger.info("Checking dataset")
    try:
        store = load_store(settings.data_file, id_lookup=settings.id_lookup)
    except DatasetLoadError as e:
        logger.error(f"Dataset check failed: {e}")
        raise SystemExit(1) from None

    for name, count in store.counts().items():
        logger.info(f"   {name}: {count}")
    logger.info("Dataset check completed successfully")


if __name__ == "__main__":
    app()
