"""
Base class for leave-behind modules.

A module subscribes to tracker events when attached and may carry runtime
state that the host persists between runs.
"""

from abc import ABC, abstractmethod
from typing import Dict


class PlaceModule(ABC):
    """Plug-in attached to the event bus and place registry of a TrackingSession."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Key under which this module's state is dumped."""
        pass

    @abstractmethod
    def attach(self, bus, registry) -> None:
        """
        Subscribe to events and keep references to bus and registry.

        Args:
            bus: EventBus instance
            registry: PlaceRegistry instance
        """
        pass

    def dump_state(self) -> Dict:
        """Serialize runtime state (empty for stateless modules)."""
        return {}

    def restore_state(self, state: Dict) -> None:
        """Restore runtime state from dump_state() output."""
        pass
