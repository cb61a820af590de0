"""
Reminders module for leave-behind.

Turns presence.left into a "take with you" reminder when the dwell time
was long enough.

Features:
- Minimum session length (default 30s), mutable at runtime
- Per-place enable/threshold overrides
- Best-effort delivery through a host-supplied ReminderSink
"""

from .module import ReminderModule, ReminderSink
from .models import Reminder, format_body
from .policy import DEFAULT_MIN_SESSION_SECONDS, SessionPolicy

__all__ = [
    "ReminderModule",
    "ReminderSink",
    "Reminder",
    "format_body",
    "SessionPolicy",
    "DEFAULT_MIN_SESSION_SECONDS",
]
