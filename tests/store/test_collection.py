"""Tests for record collections and identifier matching."""

import pytest

from event_server.exceptions import ResourceNotFoundError
from event_server.store import RecordCollection, RecordStore, get_id_matcher, match_exact, match_numeric, parse_int


@pytest.mark.parametrize(
    "value,expected",
    [
        ("42", 42),
        (42, 42),
        (" 7", 7),
        ("-3", -3),
        ("12abc", 12),
        ("abc", None),
        ("", None),
        ("6f1c2d7e-uuid", 6),
        (True, None),
        ("\u0663", None),  # Arabic-Indic digit three
        ("1\u0663", 1),
        ("0x10", 16),
        ("0X1a", 26),
        ("-0x10", -16),
        ("0x", None),
        ("0xg", None),
        ("007", 7),
    ],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected


def test_match_exact_compares_string_forms():
    assert match_exact(1, "1")
    assert match_exact("abc", "abc")
    assert not match_exact(1, "01")
    assert not match_exact("abc", "abd")


def test_match_numeric_only_reaches_integer_ids():
    assert match_numeric(1, "1")
    assert match_numeric(1, " 1x")
    assert match_numeric(16, "0x10")
    assert not match_numeric(3, "\u0663")
    assert not match_numeric("1", "1")  # string ids never match
    assert not match_numeric("6f1c2d7e", "6f1c2d7e")
    assert not match_numeric(True, "1")


def test_get_id_matcher_unknown_mode():
    with pytest.raises(ValueError, match="Unknown id lookup mode"):
        get_id_matcher("fuzzy")


class TestRecordCollection:
    """Tests for RecordCollection operations."""

    @pytest.fixture
    def collection(self) -> RecordCollection:
        return RecordCollection(
            "Location",
            [
                {"id": 1, "name": "Tech Hub"},
                {"id": 2, "name": "Library"},
            ],
        )

    def test_all_returns_live_list(self, collection):
        records = collection.all()
        collection.insert({"id": "x", "name": "Cafe"})
        assert records[-1]["id"] == "x"
        assert len(collection) == 3

    def test_find_by_id(self, collection):
        assert collection.find_by_id("2")["name"] == "Library"
        assert collection.find_by_id(2)["name"] == "Library"
        assert collection.find_by_id("99") is None

    def test_find_returns_first_match(self):
        collection = RecordCollection("User", [{"id": 1, "n": "first"}, {"id": "1", "n": "second"}])
        assert collection.find_by_id("1")["n"] == "first"

    def test_insert_preserves_order(self, collection):
        collection.insert({"id": "a"})
        collection.insert({"id": "b"})
        assert collection.ids() == [1, 2, "a", "b"]

    def test_replace_at_keeps_position(self, collection):
        merged = {"id": 1, "name": "Renamed"}
        assert collection.replace_at("1", merged) is merged
        assert collection.all()[0] is merged
        assert len(collection) == 2

    def test_replace_at_missing(self, collection):
        with pytest.raises(ResourceNotFoundError, match="Location not found: 7"):
            collection.replace_at("7", {"id": 7})

    def test_remove_by_id(self, collection):
        removed = collection.remove_by_id("1")
        assert removed == {"id": 1, "name": "Tech Hub"}
        assert collection.ids() == [2]

        with pytest.raises(ResourceNotFoundError):
            collection.remove_by_id("1")

    def test_clear_returns_count(self, collection):
        assert collection.clear() == 2
        assert collection.all() == []
        assert collection.clear() == 0

    def test_numeric_matcher_hides_string_ids(self):
        collection = RecordCollection("User", [{"id": 1}], matcher=match_numeric)
        collection.insert({"id": "0b6f3c2e-4a1d-4e5f-9c8b-7a6d5e4f3c2b"})
        assert collection.find_by_id("1") == {"id": 1}
        assert collection.find_by_id("0b6f3c2e-4a1d-4e5f-9c8b-7a6d5e4f3c2b") is None


class TestRecordStore:
    """Tests for the RecordStore container."""

    def test_collections_by_attribute_and_name(self, store):
        assert store.users is store.collection("User")
        assert store.events is store.collection("Event")
        assert store.locations is store.collection("Location")
        assert store.participants is store.collection("Participant")

    def test_unknown_entity(self, store):
        with pytest.raises(KeyError, match="Unknown entity: Venue"):
            store.collection("Venue")

    def test_counts(self, store):
        assert store.counts() == {"users": 2, "events": 1, "locations": 1, "participants": 2}

    def test_collections_are_independent(self, store):
        store.users.clear()
        assert store.counts()["users"] == 0
        assert store.counts()["participants"] == 2

    def test_empty_store(self):
        store = RecordStore()
        assert store.counts() == {"users": 0, "events": 0, "locations": 0, "participants": 0}
        assert store.all_ids() == []

    def test_numeric_lookup_mode(self, seed_data):
        store = RecordStore(seed_data, id_lookup="numeric")
        store.users.insert({"id": "generated", "username": "x", "email": "x@x"})
        assert store.users.find_by_id("1")["username"] == "alice"
        assert store.users.find_by_id("generated") is None

    @pytest.mark.parametrize("loose_id", ["01", "1.0", " 1", "1abc"])
    def test_loose_ids_only_match_in_numeric_mode(self, seed_data, loose_id):
        assert RecordStore(seed_data).users.find_by_id(loose_id) is None
        assert RecordStore(seed_data, id_lookup="numeric").users.find_by_id(loose_id)["username"] == "alice"
