"""Ordered in-memory record collections.

A collection is a mutable, insertion-ordered list of records. Each record is
a dictionary with an ``id`` key that is unique within the collection.

Identifier matching is pluggable:

- ``match_exact`` compares the string form of the stored and requested ids,
  so seeded integer ids and generated string ids are both reachable.
- ``match_numeric`` reproduces the legacy behavior: the requested id is
  coerced like JavaScript ``parseInt`` and only compared with stored integer
  ids. Records created at runtime carry string ids and can never match.
"""

import re
from collections.abc import Callable
from typing import Any

from loguru import logger

from event_server.constants import ID_LOOKUP_EXACT, ID_LOOKUP_NUMERIC
from event_server.exceptions import ResourceNotFoundError

Record = dict[str, Any]
RecordId = str | int
IdMatcher = Callable[[Any, RecordId], bool]

# ASCII digits only; a 0x prefix switches to base 16
_LEADING_INTEGER = re.compile(r"^\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|([0-9]+))")


def parse_int(value: Any) -> int | None:
    """Coerce a value to an integer the way ``parseInt`` does.

    Leading whitespace and a sign are accepted, trailing garbage is ignored,
    and anything without leading ASCII digits is not a number (``None``).
    A ``0x`` prefix reads the digits that follow as hexadecimal.

    Examples:
        >>> parse_int("42")
        42
        >>> parse_int(" 7abc")
        7
        >>> parse_int("0x1A")
        26
        >>> parse_int("abc") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INTEGER.match(str(value))
    if match is None:
        return None
    sign, hex_digits, digits = match.groups()
    if hex_digits is not None:
        if not hex_digits:
            return None
        number = int(hex_digits, 16)
    else:
        number = int(digits)
    return -number if sign == "-" else number


def match_exact(stored: Any, requested: RecordId) -> bool:
    """Match ids by their string form."""
    return str(stored) == str(requested)


def match_numeric(stored: Any, requested: RecordId) -> bool:
    """Match only integer stored ids against the integer-coerced request."""
    if isinstance(stored, bool) or not isinstance(stored, int):
        return False
    return stored == parse_int(requested)


ID_MATCHERS: dict[str, IdMatcher] = {
    ID_LOOKUP_EXACT: match_exact,
    ID_LOOKUP_NUMERIC: match_numeric,
}


def get_id_matcher(mode: str) -> IdMatcher:
    """Get the id matcher for a lookup mode.

    Raises:
        ValueError: If the mode is unknown
    """
    try:
        return ID_MATCHERS[mode]
    except KeyError:
        raise ValueError(f"Unknown id lookup mode: {mode}. Valid: {', '.join(sorted(ID_MATCHERS))}") from None


class RecordCollection:
    """Insertion-ordered collection of records of one entity kind."""

    def __init__(self, entity: str, records: list[Record] | None = None, matcher: IdMatcher = match_exact):
        self.entity = entity
        self._records: list[Record] = list(records or [])
        self._matches = matcher

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"RecordCollection({self.entity!r}, size={len(self._records)})"

    def all(self) -> list[Record]:
        """Return the live list of records (not a snapshot)."""
        return self._records

    def ids(self) -> list[Any]:
        """Return the stored identifiers in collection order."""
        return [record.get("id") for record in self._records]

    def index_of(self, record_id: RecordId) -> int | None:
        """Return the position of the first record matching ``record_id``."""
        for index, record in enumerate(self._records):
            if self._matches(record.get("id"), record_id):
                return index
        return None

    def find_by_id(self, record_id: RecordId) -> Record | None:
        """Return the first record matching ``record_id``, or None."""
        index = self.index_of(record_id)
        return self._records[index] if index is not None else None

    def insert(self, record: Record) -> Record:
        """Append a record; it is reachable through ``all`` from now on."""
        self._records.append(record)
        logger.trace(f"{self.entity} inserted: {record.get('id')}")
        return record

    def replace_at(self, record_id: RecordId, merged: Record) -> Record:
        """Overwrite the record matching ``record_id`` in place.

        Raises:
            ResourceNotFoundError: If no record matches
        """
        index = self.index_of(record_id)
        if index is None:
            raise ResourceNotFoundError(self.entity, record_id)
        self._records[index] = merged
        return merged

    def remove_by_id(self, record_id: RecordId) -> Record:
        """Remove the record matching ``record_id`` and return it.

        Raises:
            ResourceNotFoundError: If no record matches
        """
        index = self.index_of(record_id)
        if index is None:
            raise ResourceNotFoundError(self.entity, record_id)
        return self._records.pop(index)

    def clear(self) -> int:
        """Remove every record and return how many were removed."""
        count = len(self._records)
        self._records.clear()
        return count
