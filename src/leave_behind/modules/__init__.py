"""
Modules package for leave-behind.

Modules are plug-ins that add behavior on top of the place registry.
"""

from leave_behind.modules.base import PlaceModule

__all__ = ["PlaceModule"]
