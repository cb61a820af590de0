"""Map-oriented views of the event history."""

from typing import Dict, List, Sequence

from leave_behind.modules.history.models import ItemEvent

from .models import HeatmapPoint


def latest_sightings(history: Sequence[ItemEvent]) -> Dict[str, ItemEvent]:
    """
    Latest event per item (one map marker per item).

    On equal timestamps the earlier logged event wins.

    Returns:
        Mapping of item name to its latest event, in first-seen item order
    """
    latest: Dict[str, ItemEvent] = {}
    for event in history:
        current = latest.get(event.item_name)
        if current is None or event.timestamp > current.timestamp:
            latest[event.item_name] = event
    return latest


def heatmap_points(history: Sequence[ItemEvent]) -> List[HeatmapPoint]:
    """One unit-weight point per logged event."""
    return [HeatmapPoint(coordinate=event.coordinate) for event in history]
