"""
TrackingSession: the single owner of all tracker state.

Builds the bus, registry, ledger and history, attaches the modules, and
exposes the operations a host UI needs. All mutation happens through this
object on one logical thread.
"""

import logging
from datetime import datetime, UTC
from typing import Dict, List, Optional

from leave_behind.core.bus import EventBus
from leave_behind.core.place import Place
from leave_behind.core.registry import PlaceRegistry
from leave_behind.modules.base import PlaceModule
from leave_behind.modules.history import EventHistoryStore, HistoryBackend
from leave_behind.modules.items import ItemLedger, ItemsModule
from leave_behind.modules.presence import (
    PresenceModule,
    PresenceTransition,
    TrackingStatus,
)
from leave_behind.modules.recovery import RecoverySuggestion, suggest
from leave_behind.modules.reminders import (
    DEFAULT_MIN_SESSION_SECONDS,
    Reminder,
    ReminderModule,
    ReminderSink,
    SessionPolicy,
)

logger = logging.getLogger(__name__)


class TrackingSession:
    """
    One user's tracking session.

    Data flow:
        sample -> PresenceModule -> presence.entered -> ItemsModule -> history
                                 -> presence.left    -> ReminderModule -> sink

    Recovery queries read the history on demand and never touch tracking state.
    """

    def __init__(
        self,
        reminder_sink: Optional[ReminderSink] = None,
        history_backend: Optional[HistoryBackend] = None,
        min_session_seconds: int = DEFAULT_MIN_SESSION_SECONDS,
    ) -> None:
        """
        Build and wire a session.

        Args:
            reminder_sink: Where reminders are delivered (optional)
            history_backend: Persistence for the event history (optional)
            min_session_seconds: Minimum dwell before leaving triggers a reminder
        """
        self.bus = EventBus()
        self.registry = PlaceRegistry()
        self.ledger = ItemLedger()
        self.history = EventHistoryStore(history_backend)

        self.presence = PresenceModule()
        self.items = ItemsModule(self.ledger, self.history)
        self.reminders = ReminderModule(
            self.ledger,
            sink=reminder_sink,
            policy=SessionPolicy(min_session_seconds),
        )

        self._modules: List[PlaceModule] = [self.presence, self.items, self.reminders]
        for module in self._modules:
            module.attach(self.bus, self.registry)

        self.history.load()
        logger.info("Tracking session ready")

    # Lifecycle

    def start(self) -> None:
        """Start accepting position samples."""
        self.presence.start()

    def stop(self) -> None:
        """Stop tracking. An active session is discarded without a reminder."""
        self.presence.stop()

    @property
    def is_tracking(self) -> bool:
        return self.presence.is_tracking

    @property
    def status(self) -> TrackingStatus:
        return self.presence.status

    @property
    def current_place(self) -> Optional[Place]:
        return self.presence.current_place

    # Samples

    def handle_sample(
        self,
        latitude: float,
        longitude: float,
        captured_at: Optional[datetime] = None,
    ) -> Optional[PresenceTransition]:
        """Feed one position sample; see PresenceModule.handle_sample()."""
        return self.presence.handle_sample(latitude, longitude, captured_at)

    # Configuration

    @property
    def min_session_seconds(self) -> int:
        return self.reminders.min_session_seconds

    @min_session_seconds.setter
    def min_session_seconds(self, value: int) -> None:
        self.reminders.min_session_seconds = value
        logger.info(f"min_session_seconds set to {value}")

    # Recovery

    def recover(self, item_name: str, now: Optional[datetime] = None) -> List[RecoverySuggestion]:
        """
        Rank places where an item was last logged.

        Args:
            item_name: Item to look for
            now: Reference time (defaults to now, UTC)

        Returns:
            Suggestions, best first (empty if the item has no history)
        """
        return suggest(item_name, self.history.all_events(), now or datetime.now(UTC))

    # Manual testing

    def simulate_leaving(self, now: Optional[datetime] = None) -> Reminder:
        """
        Deliver a reminder as if the user just left a place.

        If inside a place, that session is closed silently and its real dwell
        is reported. Otherwise the first registered place is used with a dwell
        just over the minimum session length. The session policy is bypassed.

        Raises:
            ValueError: If outside every place and no places are registered
        """
        now = now or datetime.now(UTC)
        session = self.presence.end_session()

        if session:
            place = session.place
            dwell_seconds = max(0, int((now - session.entered_at).total_seconds()))
        else:
            places = self.registry.all_places()
            if not places:
                raise ValueError("No places set; add a place before testing")
            place = places[0]
            dwell_seconds = self.reminders.min_session_seconds + 1

        return self.reminders.remind(place.name, dwell_seconds, place_id=place.id)

    # State Persistence

    def dump_state(self) -> Dict:
        """
        Dump module state for persistence (history is persisted by its backend).

        Returns:
            State dictionary
        """
        return {
            "version": 1,
            "modules": {module.id: module.dump_state() for module in self._modules},
        }

    def restore_state(self, state: Dict) -> None:
        """
        Restore module state from dump_state() output.

        Args:
            state: State dictionary
        """
        version = state.get("version", 1)
        if version != 1:
            logger.warning(f"Unknown state version {version}, resetting")
            return

        modules_state = state.get("modules", {})
        for module in self._modules:
            if module.id in modules_state:
                module.restore_state(modules_state[module.id])
