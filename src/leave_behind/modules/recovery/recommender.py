"""The recovery recommender: "where did I last leave X?".

Scores every logged event for the item and keeps the best event per place:

    recency = 1 / max(1, minutes_ago)
    freq    = number of events for the item at that place
    score   = 0.6 * recency + 0.4 * freq

Frequency is counted per event over the filtered events rather than cached
per place; the resulting number is the same for every event at a place.
"""

import logging
from datetime import datetime
from typing import Dict, List, Sequence

from leave_behind.modules.history.models import ItemEvent

from .models import RecoverySuggestion

_LOGGER = logging.getLogger(__name__)

RECENCY_WEIGHT = 0.6
FREQUENCY_WEIGHT = 0.4
NO_DATA_MESSAGE = "No history found for this item."


def suggest(
    item_name: str,
    history: Sequence[ItemEvent],
    now: datetime,
) -> List[RecoverySuggestion]:
    """Rank the places where an item was logged.

    Args:
        item_name: Item to look for (exact match).
        history: Full event history in append order.
        now: Reference time for recency.

    Returns:
        Suggestions sorted by descending score. Ties keep the order in which
        places were first encountered in history. Empty if the item was never
        logged.
    """
    matching = [e for e in history if e.item_name == item_name]
    if not matching:
        _LOGGER.debug(f"No history for item {item_name!r}")
        return []

    candidates: Dict[str, RecoverySuggestion] = {}

    for event in matching:
        minutes_ago = (now - event.timestamp).total_seconds() / 60.0
        recency = 1.0 / max(1.0, minutes_ago)
        freq = sum(1 for e in matching if e.place_name == event.place_name)
        score = RECENCY_WEIGHT * recency + FREQUENCY_WEIGHT * freq

        best = candidates.get(event.place_name)
        if best is None or score > best.score:
            candidates[event.place_name] = RecoverySuggestion(
                place_name=event.place_name,
                score=score,
                last_seen=event.timestamp,
            )

    # sorted() is stable, so equal scores keep first-encounter order
    ranked = sorted(candidates.values(), key=lambda s: s.score, reverse=True)
    _LOGGER.debug(
        f"Suggestions for {item_name!r}: "
        + ", ".join(f"{s.place_name}={s.score:.3f}" for s in ranked)
    )
    return ranked


def describe_suggestion(suggestion: RecoverySuggestion, now: datetime) -> str:
    """One display line, e.g. "Home (last seen 5 mins ago)"."""
    return f"{suggestion.place_name} (last seen {suggestion.minutes_since(now)} mins ago)"


def format_suggestions(suggestions: Sequence[RecoverySuggestion], now: datetime) -> str:
    """Multi-line display text for a suggestion list."""
    if not suggestions:
        return NO_DATA_MESSAGE
    return "\n".join(describe_suggestion(s, now) for s in suggestions)
