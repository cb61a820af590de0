"""Dwell-time gating for reminders.

Short sessions are usually GPS jitter across a boundary, so a reminder
is only due once the dwell reaches the minimum session length.
"""

from datetime import timedelta

DEFAULT_MIN_SESSION_SECONDS = 30


class SessionPolicy:
    """Decides whether a completed session deserves a reminder."""

    def __init__(self, min_session_seconds: int = DEFAULT_MIN_SESSION_SECONDS) -> None:
        self.min_session_seconds = min_session_seconds

    @property
    def min_session_seconds(self) -> int:
        return self._min_session_seconds

    @min_session_seconds.setter
    def min_session_seconds(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"min_session_seconds must be >= 0 (got {value})")
        self._min_session_seconds = value

    def should_remind(self, dwell: timedelta, min_session_seconds: int | None = None) -> bool:
        """True if the dwell, floored to whole seconds, meets the threshold.

        Args:
            dwell: Time spent inside the place.
            min_session_seconds: Optional per-place threshold overriding the default.
        """
        threshold = self._min_session_seconds if min_session_seconds is None else min_session_seconds
        return int(dwell.total_seconds()) >= threshold
