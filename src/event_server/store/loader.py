"""Seed dataset loading."""

import json
from importlib.resources import files
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from event_server.constants import ID_LOOKUP_EXACT
from event_server.exceptions import DatasetLoadError
from event_server.models.records import Dataset
from event_server.store.record_store import RecordStore

BUNDLED_DATASET = "data.json"


def read_dataset(path: Path | None = None) -> dict[str, Any]:
    """Read the raw seed JSON.

    Args:
        path: Seed file, or None for the dataset bundled with the package

    Raises:
        DatasetLoadError: If the file is missing or not valid JSON
    """
    if path is None:
        resource = files("event_server.data").joinpath(BUNDLED_DATASET)
        source: str | Path = f"<bundled {BUNDLED_DATASET}>"
        try:
            text = resource.read_text(encoding="utf-8")
        except OSError as e:
            raise DatasetLoadError(source, str(e)) from e
    else:
        source = path
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise DatasetLoadError(source, str(e)) from e

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise DatasetLoadError(source, f"invalid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise DatasetLoadError(source, "top-level value must be an object")

    logger.debug(f"Read dataset from {source}")
    return raw


def parse_dataset(raw: dict[str, Any], source: str | Path = "<memory>") -> Dataset:
    """Validate raw seed data.

    Raises:
        DatasetLoadError: If a record does not match its model
    """
    try:
        return Dataset.model_validate(raw)
    except ValidationError as e:
        raise DatasetLoadError(source, f"{e.error_count()} invalid record field(s): {e.errors()[0]['loc']}") from e


def load_store(path: Path | None = None, id_lookup: str = ID_LOOKUP_EXACT) -> RecordStore:
    """Build a record store from the seed dataset.

    Args:
        path: Seed file, or None for the bundled dataset
        id_lookup: Identifier lookup mode of the store's collections

    Returns:
        A populated RecordStore
    """
    dataset = parse_dataset(read_dataset(path), path or BUNDLED_DATASET)
    store = RecordStore(dataset.collections(), id_lookup=id_lookup)
    logger.info(f"Loaded dataset: {store.counts()}")
    return store
