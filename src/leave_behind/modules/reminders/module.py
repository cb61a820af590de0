"""ReminderModule - Remind the user what to take when leaving a place."""

import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Dict, Optional, Sequence

from leave_behind.modules.base import PlaceModule
from leave_behind.core.bus import Event, EventBus, EventFilter
from leave_behind.core.registry import PlaceRegistry
from leave_behind.modules.items.ledger import ItemLedger

from .models import Reminder
from .policy import DEFAULT_MIN_SESSION_SECONDS, SessionPolicy

logger = logging.getLogger(__name__)


class ReminderSink(ABC):
    """
    Host-supplied reminder delivery (push notification, alert, ...).

    Delivery is best-effort and fire-and-forget: exceptions are logged by the
    module and never reach the tracker.
    """

    @abstractmethod
    def deliver(self, place_name: str, item_names: Sequence[str]) -> None:
        """Deliver a reminder for leaving place_name."""
        pass


class ReminderModule(PlaceModule):
    """
    Reminder module.

    On presence.left, applies the SessionPolicy to the dwell time and, if the
    session was long enough, delivers the always-take items to the sink.

    Events Consumed:
    - presence.left

    Events Emitted:
    - reminder.triggered: A reminder was delivered (payload = Reminder.to_dict())

    Per-place overrides live in the place's module config:
        {"enabled": False}                -> never remind for this place
        {"min_session_seconds": 120}      -> place-specific threshold
    """

    def __init__(
        self,
        ledger: ItemLedger,
        sink: Optional[ReminderSink] = None,
        policy: Optional[SessionPolicy] = None,
    ) -> None:
        self._bus: Optional[EventBus] = None
        self._registry: Optional[PlaceRegistry] = None
        self._ledger = ledger
        self._sink = sink
        self._policy = policy or SessionPolicy()
        self._enabled = True
        self._last_reminder: Optional[Reminder] = None

    @property
    def id(self) -> str:
        return "reminders"

    @property
    def CURRENT_CONFIG_VERSION(self) -> int:
        return 1

    def attach(self, bus: EventBus, registry: PlaceRegistry) -> None:
        """Attach to tracker components."""
        self._bus = bus
        self._registry = registry

        bus.subscribe(
            handler=self._on_left,
            event_filter=EventFilter(event_type="presence.left"),
        )

        logger.info("ReminderModule attached")

    def default_config(self) -> Dict:
        """Return default configuration."""
        return {
            "version": self.CURRENT_CONFIG_VERSION,
            "enabled": True,
            "min_session_seconds": DEFAULT_MIN_SESSION_SECONDS,
        }

    def set_config(self, config: Dict) -> None:
        """
        Replace module-wide configuration; missing keys take their defaults.

        Takes effect on the next presence.left evaluation. A config written
        for another version is ignored.

        Raises:
            ValueError: If min_session_seconds is negative
        """
        merged = {**self.default_config(), **config}
        if merged["version"] != self.CURRENT_CONFIG_VERSION:
            logger.warning(f"Ignoring reminder config version {merged['version']}")
            return

        self._policy.min_session_seconds = merged["min_session_seconds"]
        self._enabled = merged["enabled"]
        logger.info(
            f"Reminder config: enabled={self._enabled}, "
            f"min_session_seconds={self._policy.min_session_seconds}"
        )

    def get_config(self) -> Dict:
        return {
            "version": self.CURRENT_CONFIG_VERSION,
            "enabled": self._enabled,
            "min_session_seconds": self._policy.min_session_seconds,
        }

    @property
    def min_session_seconds(self) -> int:
        return self._policy.min_session_seconds

    @min_session_seconds.setter
    def min_session_seconds(self, value: int) -> None:
        self._policy.min_session_seconds = value

    @property
    def last_reminder(self) -> Optional[Reminder]:
        """The most recently delivered reminder, if any."""
        return self._last_reminder

    def set_sink(self, sink: Optional[ReminderSink]) -> None:
        self._sink = sink

    # Event Handling

    def _on_left(self, event: Event) -> None:
        """Evaluate a completed session."""
        place_name = event.payload["place_name"]
        dwell_seconds = event.payload["dwell_seconds"]

        if not self._enabled:
            logger.debug(f"Reminders disabled; ignoring exit from {place_name}")
            return

        place_config = self._place_config(event.place_id)
        if not place_config.get("enabled", True):
            logger.debug(f"Reminders disabled for {event.place_id}")
            return

        threshold = place_config.get("min_session_seconds")
        if not self._policy.should_remind(timedelta(seconds=dwell_seconds), threshold):
            logger.debug(
                f"Short session at {place_name} ({dwell_seconds}s); no reminder"
            )
            return

        self.remind(place_name, dwell_seconds, place_id=event.place_id)

    def _place_config(self, place_id: Optional[str]) -> Dict:
        if not self._registry or not place_id:
            return {}
        return self._registry.get_module_config(place_id, self.id) or {}

    # Delivery

    def remind(
        self, place_name: str, dwell_seconds: int, place_id: Optional[str] = None
    ) -> Reminder:
        """
        Build and deliver a reminder, bypassing the session policy.

        Args:
            place_name: Name of the place being left
            dwell_seconds: Whole seconds spent inside
            place_id: Optional place ID for the emitted event

        Returns:
            The delivered Reminder
        """
        reminder = Reminder.build(place_name, dwell_seconds, self._ledger.candidates_always())
        self._last_reminder = reminder

        logger.info(
            f"Reminder for leaving {place_name} after {dwell_seconds}s: "
            f"{len(reminder.item_names)} items"
        )

        if self._sink:
            try:
                self._sink.deliver(place_name, list(reminder.item_names))
            except Exception as e:
                logger.error(f"Reminder delivery failed for {place_name}: {e}", exc_info=True)

        if self._bus:
            self._bus.publish(
                Event(
                    type="reminder.triggered",
                    source=self.id,
                    place_id=place_id,
                    payload=reminder.to_dict(),
                )
            )

        return reminder

    # State Persistence

    def dump_state(self) -> Dict:
        """Dump module-wide config (the only runtime state this module keeps)."""
        return {"version": 1, "config": self.get_config()}

    def restore_state(self, state: Dict) -> None:
        """Restore config from dump_state() output."""
        version = state.get("version", 1)
        if version != 1:
            logger.warning(f"Unknown state version {version}, resetting")
            return

        if "config" in state:
            self.set_config(state["config"])
