"""The Core Logic Engine for presence tracking.

This module contains the pure state machine. It accepts position samples and
their capture time, and returns at most one transition per sample. It has no
internal timers: a user who never produces another sample never leaves.
"""

import logging
from dataclasses import replace
from datetime import datetime

from leave_behind.core.geo import Coordinate
from leave_behind.core.registry import PlaceRegistry

from .models import PresenceSession, PresenceState, PresenceTransition, TransitionType

_LOGGER = logging.getLogger(__name__)


class PresenceEngine:
    """The functional core of the presence tracker.

    States are Outside (no session) and Inside(session). Only loss of
    containment ends a session; a sample inside another place while a session
    is active does not switch sessions.
    """

    def __init__(
        self,
        registry: PlaceRegistry,
        initial_state: PresenceState | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Places to match samples against, scanned in registration order.
            initial_state: Optional starting state.
        """
        self.registry = registry
        self.state = initial_state or PresenceState()

    def handle_sample(self, coordinate: Coordinate, now: datetime) -> PresenceTransition | None:
        """Process a single position sample.

        Args:
            coordinate: The sampled position.
            now: Capture time of the sample (time-agnostic).

        Returns:
            The resulting transition, or None.

        Raises:
            InvalidSample: If the coordinate is out of range. State is unchanged.
        """
        coordinate.validate()

        last = self.state.last_sample_at
        if last is not None and now < last:
            _LOGGER.warning(f"Dropping out-of-order sample at {now} (last sample at {last})")
            return None

        match = self.registry.find_containing(coordinate)
        session = self.state.session

        if match is not None and session is None:
            self.state = PresenceState(
                session=PresenceSession(place=match, entered_at=now),
                last_sample_at=now,
            )
            _LOGGER.info(f"Entered {match.id} ({match.name}) at {now}")
            return PresenceTransition(kind=TransitionType.ENTERED, place=match, timestamp=now)

        if match is None and session is not None:
            dwell = now - session.entered_at
            self.state = PresenceState(session=None, last_sample_at=now)
            _LOGGER.info(
                f"Left {session.place.id} ({session.place.name}) after {dwell.total_seconds():.0f}s"
            )
            return PresenceTransition(
                kind=TransitionType.LEFT,
                place=session.place,
                timestamp=now,
                dwell=dwell,
            )

        self.state = replace(self.state, last_sample_at=now)
        return None

    def end_session(self) -> PresenceSession | None:
        """Close the active session silently, keeping the sample clock.

        Returns:
            The closed session, if there was one.
        """
        closed = self.state.session
        self.state = replace(self.state, session=None)
        return closed

    def reset(self) -> PresenceSession | None:
        """Drop all state without producing a transition.

        Returns:
            The abandoned session, if there was one.
        """
        abandoned = self.state.session
        self.state = PresenceState()
        if abandoned:
            _LOGGER.debug(f"Abandoned session at {abandoned.place.id}")
        return abandoned
