"""PresenceModule - Track which place the user is currently in."""

import logging
from datetime import datetime, UTC
from typing import Optional

from leave_behind.modules.base import PlaceModule
from leave_behind.core.bus import Event, EventBus, EventFilter
from leave_behind.core.geo import Coordinate, InvalidSample
from leave_behind.core.place import Place
from leave_behind.core.registry import PlaceRegistry

from .engine import PresenceEngine
from .models import PresenceSession, PresenceTransition, TrackingStatus, TransitionType

logger = logging.getLogger(__name__)


class PresenceModule(PlaceModule):
    """
    Presence tracking module.

    Wraps the PresenceEngine with a start/stop lifecycle and bus integration.

    Events Emitted:
    - presence.entered: A sample fell inside a place while outside
    - presence.left: A sample fell outside every place while inside

    Events Consumed:
    - position.updated: Position samples from the host (payload latitude/longitude,
      event timestamp = capture time)

    Note: Samples delivered while tracking is stopped are ignored. Stopping
    abandons any active session without emitting presence.left.
    """

    def __init__(self) -> None:
        self._bus: Optional[EventBus] = None
        self._registry: Optional[PlaceRegistry] = None
        self._engine: Optional[PresenceEngine] = None
        self._tracking = False

    @property
    def id(self) -> str:
        return "presence"

    def attach(self, bus: EventBus, registry: PlaceRegistry) -> None:
        """Attach to tracker components."""
        self._bus = bus
        self._registry = registry
        self._engine = PresenceEngine(registry)

        bus.subscribe(
            handler=self._on_position_updated,
            event_filter=EventFilter(event_type="position.updated"),
        )

        logger.info("PresenceModule attached")

    # Lifecycle

    def start(self) -> None:
        """
        Start accepting position samples.

        Raises:
            RuntimeError: If the module is not attached
        """
        if not self._engine:
            raise RuntimeError("PresenceModule not attached to PlaceRegistry")

        if self._tracking:
            return

        self._tracking = True
        logger.info("Tracking started")

    def stop(self) -> None:
        """Stop tracking and silently abandon any active session."""
        if self._engine:
            abandoned = self._engine.reset()
            if abandoned:
                logger.info(f"Tracking stopped inside {abandoned.place.id}; session discarded")

        if self._tracking:
            self._tracking = False
            logger.info("Tracking stopped")

    @property
    def is_tracking(self) -> bool:
        return self._tracking

    @property
    def status(self) -> TrackingStatus:
        """Current tracker status."""
        if not self._tracking:
            return TrackingStatus.IDLE
        if self.session:
            return TrackingStatus.INSIDE
        return TrackingStatus.WATCHING

    @property
    def session(self) -> Optional[PresenceSession]:
        """The active session, if any."""
        return self._engine.state.session if self._engine else None

    @property
    def current_place(self) -> Optional[Place]:
        """The place the user is currently inside, if any."""
        session = self.session
        return session.place if session else None

    def end_session(self) -> Optional[PresenceSession]:
        """
        Close the active session without emitting presence.left.

        Returns:
            The closed session or None if outside
        """
        if not self._engine:
            return None

        closed = self._engine.end_session()
        if closed:
            logger.info(f"Session at {closed.place.id} closed manually")
        return closed

    # Samples

    def handle_sample(
        self,
        latitude: float,
        longitude: float,
        captured_at: Optional[datetime] = None,
    ) -> Optional[PresenceTransition]:
        """
        Feed one position sample into the tracker.

        Args:
            latitude: Sample latitude in degrees
            longitude: Sample longitude in degrees
            captured_at: Capture time (defaults to now; naive values are read as UTC)

        Returns:
            The transition produced, or None

        Raises:
            RuntimeError: If the module is not attached
        """
        if not self._engine:
            raise RuntimeError("PresenceModule not attached to PlaceRegistry")

        if not self._tracking:
            logger.debug("Ignoring sample while tracking is stopped")
            return None

        now = captured_at or datetime.now(UTC)
        if now.tzinfo is None:
            # Naive capture times are taken as UTC
            now = now.replace(tzinfo=UTC)
        coordinate = Coordinate(latitude=latitude, longitude=longitude)

        try:
            transition = self._engine.handle_sample(coordinate, now)
        except InvalidSample as e:
            logger.warning(f"Dropping invalid sample: {e}")
            return None

        if transition:
            self._publish_transition(transition)

        return transition

    def _publish_transition(self, transition: PresenceTransition) -> None:
        if not self._bus:
            return

        place = transition.place
        payload = {
            "place_name": place.name,
            "latitude": place.center.latitude,
            "longitude": place.center.longitude,
            "radius_meters": place.radius_meters,
        }
        if transition.kind is TransitionType.LEFT:
            payload["dwell_seconds"] = transition.dwell_seconds

        self._bus.publish(
            Event(
                type=f"presence.{transition.kind.value}",
                source=self.id,
                place_id=place.id,
                payload=payload,
                timestamp=transition.timestamp,
            )
        )

    def _on_position_updated(self, event: Event) -> None:
        """Handle a position sample published by the host."""
        latitude = event.payload.get("latitude")
        longitude = event.payload.get("longitude")
        if latitude is None or longitude is None:
            logger.warning(f"position.updated from {event.source} is missing coordinates")
            return

        self.handle_sample(latitude, longitude, captured_at=event.timestamp)
