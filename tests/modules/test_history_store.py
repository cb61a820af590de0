"""Tests for EventHistoryStore, ItemEvent serialization and backends."""

import json

import pytest
from datetime import datetime, UTC, timedelta

from leave_behind import Coordinate
from leave_behind.modules.history import (
    EventHistoryStore,
    HistoryBackend,
    ItemEvent,
    JsonFileBackend,
)


@pytest.fixture
def base_time():
    """Fixed base time for deterministic tests."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


def make_event(item, place, timestamp):
    return ItemEvent(
        item_name=item,
        place_name=place,
        coordinate=Coordinate(37.0, -122.0),
        timestamp=timestamp,
    )


class MemoryBackend(HistoryBackend):
    """Backend that keeps saves in memory."""

    def __init__(self, initial=None):
        self.stored = list(initial or [])
        self.saves = 0

    def load(self):
        return list(self.stored)

    def save(self, events):
        self.saves += 1
        self.stored = list(events)


class BrokenBackend(HistoryBackend):
    """Backend whose storage always fails."""

    def load(self):
        raise OSError("disk unavailable")

    def save(self, events):
        raise OSError("disk unavailable")


class UnreadableBackend(MemoryBackend):
    """Backend holding stored events that can't be read back."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.readable = False

    def load(self):
        if not self.readable:
            raise OSError("permission denied")
        return super().load()


class TestItemEvent:
    """Test ItemEvent serialization."""

    def test_to_dict_shape(self, base_time):
        """Test the persisted field names."""
        event = make_event("Keys", "Home", base_time)

        assert event.to_dict() == {
            "itemName": "Keys",
            "placeName": "Home",
            "coordinate": {"latitude": 37.0, "longitude": -122.0},
            "timestamp": 1736942400000,
        }

    def test_from_dict(self, base_time):
        """Test reading the persisted shape back."""
        data = {
            "itemName": "Keys",
            "placeName": "Home",
            "coordinate": {"latitude": 37.0, "longitude": -122.0},
            "timestamp": 1736942400000,
        }

        assert ItemEvent.from_dict(data) == make_event("Keys", "Home", base_time)

    def test_naive_timestamp_is_utc(self, base_time):
        """Test a naive timestamp is read as UTC, not local time."""
        event = make_event("Keys", "Home", base_time.replace(tzinfo=None))

        assert event.timestamp == base_time
        assert event.timestamp_ms == 1736942400000


class TestEventHistoryStore:
    """Test the append-only log."""

    def test_append_preserves_order(self, base_time):
        """Test events come back in append order."""
        store = EventHistoryStore()
        store.append(make_event("Keys", "Home", base_time))
        store.append_all(
            [
                make_event("Keys", "Office", base_time + timedelta(hours=1)),
                make_event("Wallet", "Office", base_time + timedelta(hours=1)),
            ]
        )

        assert [(e.item_name, e.place_name) for e in store.all_events()] == [
            ("Keys", "Home"),
            ("Keys", "Office"),
            ("Wallet", "Office"),
        ]
        assert len(store) == 3

    def test_no_dedup(self, base_time):
        """Test identical events are all kept."""
        store = EventHistoryStore()
        event = make_event("Keys", "Home", base_time)

        store.append(event)
        store.append(event)

        assert len(store) == 2

    def test_out_of_order_rejected(self, base_time):
        """Test an event older than the last one raises and changes nothing."""
        store = EventHistoryStore()
        store.append(make_event("Keys", "Home", base_time))

        with pytest.raises(ValueError, match="older than"):
            store.append(make_event("Keys", "Office", base_time - timedelta(seconds=1)))

        assert len(store) == 1

    def test_append_all_is_atomic(self, base_time):
        """Test a batch with an out-of-order event is rejected whole."""
        store = EventHistoryStore()

        with pytest.raises(ValueError):
            store.append_all(
                [
                    make_event("Keys", "Home", base_time),
                    make_event("Wallet", "Home", base_time - timedelta(minutes=1)),
                ]
            )

        assert len(store) == 0

    def test_events_for_item(self, base_time):
        """Test filtering by item."""
        store = EventHistoryStore()
        store.append_all(
            [make_event("Keys", "Home", base_time), make_event("Wallet", "Home", base_time)]
        )

        assert [e.item_name for e in store.events_for_item("Wallet")] == ["Wallet"]

    def test_all_events_is_a_copy(self, base_time):
        """Test callers can't mutate the log through all_events()."""
        store = EventHistoryStore()
        store.append(make_event("Keys", "Home", base_time))

        store.all_events().clear()

        assert len(store) == 1

    def test_clear(self, base_time):
        """Test clearing the log."""
        store = EventHistoryStore()
        store.append(make_event("Keys", "Home", base_time))

        store.clear()

        assert store.all_events() == []


class TestPersistence:
    """Test backend interaction."""

    def test_saves_after_every_mutation(self, base_time):
        """Test append, append_all and clear each save the full log."""
        backend = MemoryBackend()
        store = EventHistoryStore(backend)

        store.append(make_event("Keys", "Home", base_time))
        store.append_all([make_event("Wallet", "Home", base_time)])
        assert backend.saves == 2
        assert len(backend.stored) == 2

        store.clear()
        assert backend.saves == 3
        assert backend.stored == []

    def test_empty_batch_does_not_save(self):
        """Test appending nothing skips the save."""
        backend = MemoryBackend()
        EventHistoryStore(backend).append_all([])

        assert backend.saves == 0

    def test_load(self, base_time):
        """Test loading replaces in-memory history."""
        backend = MemoryBackend([make_event("Keys", "Home", base_time)])
        store = EventHistoryStore(backend)

        assert store.load() == 1
        assert store.all_events()[0].place_name == "Home"

    def test_load_without_backend(self):
        """Test loading with no backend is a no-op."""
        assert EventHistoryStore().load() == 0

    def test_backend_failures_are_contained(self, base_time):
        """Test load/save errors are logged, not raised."""
        store = EventHistoryStore(BrokenBackend())

        assert store.load() == 0
        store.append(make_event("Keys", "Home", base_time))

        assert len(store) == 1

    def test_failed_load_keeps_stored_history(self, base_time):
        """Test appends after a failed load don't overwrite what the backend holds."""
        stored = [make_event("Keys", "Home", base_time - timedelta(days=i)) for i in range(5, 0, -1)]
        backend = UnreadableBackend(stored)
        store = EventHistoryStore(backend)

        assert store.load() == 0
        store.append(make_event("Keys", "Office", base_time))

        assert len(store) == 1
        assert backend.saves == 0
        assert backend.stored == stored

    def test_successful_reload_resumes_saving(self, base_time):
        """Test saving resumes once the backend can be read again."""
        stored = [make_event("Keys", "Home", base_time)]
        backend = UnreadableBackend(stored)
        store = EventHistoryStore(backend)
        store.load()

        backend.readable = True
        assert store.load() == 1
        store.append(make_event("Keys", "Office", base_time + timedelta(hours=1)))

        assert [e.place_name for e in backend.stored] == ["Home", "Office"]

    def test_clear_after_failed_load_saves(self, base_time):
        """Test an explicit clear still erases the stored copy."""
        backend = UnreadableBackend([make_event("Keys", "Home", base_time)])
        store = EventHistoryStore(backend)
        store.load()

        store.clear()

        assert backend.stored == []


class TestJsonFileBackend:
    """Test the JSON file backend."""

    def test_missing_file_loads_empty(self, tmp_path):
        """Test a fresh install has empty history."""
        backend = JsonFileBackend(tmp_path / "history.json")

        assert backend.load() == []

    def test_save_and_reload(self, tmp_path, base_time):
        """Test history written by one store is read by the next."""
        path = tmp_path / "data" / "history.json"
        store = EventHistoryStore(JsonFileBackend(path))
        store.append(make_event("Keys", "Home", base_time))

        with path.open(encoding="utf-8") as f:
            assert json.load(f)[0]["itemName"] == "Keys"

        reloaded = EventHistoryStore(JsonFileBackend(path))
        reloaded.load()
        assert reloaded.all_events() == [make_event("Keys", "Home", base_time)]

    def test_corrupt_file_is_contained(self, tmp_path):
        """Test an unreadable file leaves the store empty instead of raising."""
        path = tmp_path / "history.json"
        path.write_text("{not json", encoding="utf-8")

        store = EventHistoryStore(JsonFileBackend(path))

        assert store.load() == 0
        assert len(store) == 0
