"""
Recovery module for leave-behind.

Answers "where did I last leave X?" from the event history.

Features:
- Recency/frequency ranking of candidate places
- Display helpers ("Home (last seen 5 mins ago)")
- Latest sighting per item and heatmap points for map views
"""

from .models import HeatmapPoint, RecoverySuggestion
from .recommender import (
    FREQUENCY_WEIGHT,
    NO_DATA_MESSAGE,
    RECENCY_WEIGHT,
    describe_suggestion,
    format_suggestions,
    suggest,
)
from .sightings import heatmap_points, latest_sightings

__all__ = [
    "RecoverySuggestion",
    "HeatmapPoint",
    "suggest",
    "describe_suggestion",
    "format_suggestions",
    "latest_sightings",
    "heatmap_points",
    "RECENCY_WEIGHT",
    "FREQUENCY_WEIGHT",
    "NO_DATA_MESSAGE",
]
