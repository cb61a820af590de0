"""Tests for the recovery recommender and map helpers."""

import pytest
from datetime import datetime, UTC, timedelta

from leave_behind import Coordinate
from leave_behind.modules.history import ItemEvent
from leave_behind.modules.recovery import (
    NO_DATA_MESSAGE,
    RecoverySuggestion,
    describe_suggestion,
    format_suggestions,
    heatmap_points,
    latest_sightings,
    suggest,
)


@pytest.fixture
def now():
    """Fixed reference time."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


def ev(item, place, timestamp, lat=37.0, lng=-122.0):
    return ItemEvent(
        item_name=item,
        place_name=place,
        coordinate=Coordinate(lat, lng),
        timestamp=timestamp,
    )


class TestSuggest:
    """Test suggest() scoring and ranking."""

    def test_single_event(self, now):
        """Test one event yields exactly one suggestion for its place."""
        history = [ev("Keys", "Home", now - timedelta(minutes=10))]

        result = suggest("Keys", history, now)

        assert len(result) == 1
        assert result[0].place_name == "Home"
        assert result[0].last_seen == now - timedelta(minutes=10)
        assert result[0].score == pytest.approx(0.6 * 0.1 + 0.4 * 1)

    def test_empty_history(self, now):
        """Test no events for the item yields an empty list."""
        history = [ev("Wallet", "Home", now)]

        assert suggest("Keys", history, now) == []
        assert suggest("Keys", [], now) == []

    def test_item_match_is_exact(self, now):
        """Test item names are matched exactly."""
        history = [ev("keys", "Home", now)]

        assert suggest("Keys", history, now) == []

    def test_recency_floor(self, now):
        """Test events less than a minute old get full recency without dividing by zero."""
        history = [ev("Keys", "Home", now)]

        result = suggest("Keys", history, now)

        assert result[0].score == pytest.approx(1.0)

    def test_future_event_uses_floor(self, now):
        """Test an event stamped after now is treated as one minute ago."""
        history = [ev("Keys", "Home", now + timedelta(minutes=5))]

        assert suggest("Keys", history, now)[0].score == pytest.approx(1.0)

    def test_fractional_minutes(self, now):
        """Test recency uses fractional minutes."""
        history = [ev("Keys", "Home", now - timedelta(seconds=150))]

        assert suggest("Keys", history, now)[0].score == pytest.approx(0.6 / 2.5 + 0.4)

    def test_more_events_rank_higher(self, now):
        """Test with equal recency, the place with more events wins."""
        t = now - timedelta(minutes=5)
        history = [
            ev("Keys", "Cafe", t),
            ev("Keys", "Office", t),
            ev("Keys", "Office", t),
        ]

        result = suggest("Keys", history, now)

        assert [s.place_name for s in result] == ["Office", "Cafe"]
        assert result[0].score == pytest.approx(0.6 * 0.2 + 0.4 * 2)
        assert result[1].score == pytest.approx(0.6 * 0.2 + 0.4 * 1)

    def test_best_event_per_place(self, now):
        """Test a place keeps its highest-scoring (most recent) event."""
        history = [
            ev("Keys", "Home", now - timedelta(minutes=60)),
            ev("Keys", "Home", now - timedelta(minutes=2)),
        ]

        result = suggest("Keys", history, now)

        assert len(result) == 1
        assert result[0].last_seen == now - timedelta(minutes=2)
        assert result[0].score == pytest.approx(0.6 / 2 + 0.4 * 2)

    def test_recent_sighting_outranks_old_one(self, now):
        """Test with equal counts, the more recent place wins."""
        history = [
            ev("Keys", "Home", now - timedelta(days=1)),
            ev("Keys", "Gym", now),
        ]

        result = suggest("Keys", history, now)

        assert [s.place_name for s in result] == ["Gym", "Home"]

    def test_ties_keep_first_encounter_order(self, now):
        """Test equal scores keep the order places first appear in history."""
        t = now - timedelta(minutes=5)
        history = [ev("Keys", "Library", t), ev("Keys", "Cafe", t), ev("Keys", "Bank", t)]

        result = suggest("Keys", history, now)

        assert [s.place_name for s in result] == ["Library", "Cafe", "Bank"]

    def test_equal_scores_keep_earlier_event(self, now):
        """Test a later event with the same score doesn't replace last_seen."""
        t = now - timedelta(seconds=20)
        history = [ev("Keys", "Home", t), ev("Keys", "Home", now)]

        result = suggest("Keys", history, now)

        assert result[0].last_seen == t

    def test_other_items_ignored(self, now):
        """Test events for other items don't affect frequency."""
        t = now - timedelta(minutes=5)
        history = [
            ev("Wallet", "Cafe", t),
            ev("Wallet", "Cafe", t),
            ev("Keys", "Cafe", t),
            ev("Keys", "Office", t),
        ]

        result = suggest("Keys", history, now)

        assert all(s.score == pytest.approx(0.6 * 0.2 + 0.4) for s in result)


class TestFormatting:
    """Test display helpers."""

    def test_describe_suggestion(self, now):
        """Test the display line."""
        s = RecoverySuggestion(place_name="Home", score=1.0, last_seen=now - timedelta(minutes=5, seconds=30))

        assert describe_suggestion(s, now) == "Home (last seen 5 mins ago)"

    def test_format_suggestions(self, now):
        """Test one line per suggestion."""
        suggestions = [
            RecoverySuggestion("Office", 1.2, now - timedelta(minutes=3)),
            RecoverySuggestion("Home", 0.5, now - timedelta(hours=2)),
        ]

        assert format_suggestions(suggestions, now) == (
            "Office (last seen 3 mins ago)\nHome (last seen 120 mins ago)"
        )

    def test_format_no_suggestions(self, now):
        """Test the no-data message."""
        assert format_suggestions([], now) == NO_DATA_MESSAGE


class TestSightings:
    """Test map helpers."""

    def test_latest_sightings(self, now):
        """Test the latest event per item is kept."""
        history = [
            ev("Keys", "Home", now - timedelta(hours=2)),
            ev("Wallet", "Home", now - timedelta(hours=2)),
            ev("Keys", "Office", now - timedelta(hours=1), lat=37.1),
        ]

        latest = latest_sightings(history)

        assert list(latest) == ["Keys", "Wallet"]
        assert latest["Keys"].place_name == "Office"
        assert latest["Wallet"].place_name == "Home"

    def test_latest_sightings_tie_keeps_first(self, now):
        """Test equal timestamps keep the earlier logged event."""
        history = [ev("Keys", "Home", now), ev("Keys", "Office", now)]

        assert latest_sightings(history)["Keys"].place_name == "Home"

    def test_heatmap_points(self, now):
        """Test one unit-weight point per event."""
        history = [ev("Keys", "Home", now), ev("Wallet", "Office", now, lat=37.1)]

        points = heatmap_points(history)

        assert [p.coordinate.latitude for p in points] == [37.0, 37.1]
        assert all(p.weight == 1.0 for p in points)
