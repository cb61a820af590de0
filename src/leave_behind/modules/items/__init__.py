"""
Items module for leave-behind.

Keeps the list of items the user carries and logs them at every arrival.

Features:
- Ledger keyed by item name (names are unique)
- Always-take flag selects the reminder candidates
- Every ledger item is logged on presence.entered, not just always-take ones
"""

from .module import ItemsModule
from .ledger import ItemLedger
from .models import Item

__all__ = [
    "ItemsModule",
    "ItemLedger",
    "Item",
]
