"""Database models for the SlotSwap platform."""

from .slot import OWNER_SETTABLE_STATUSES, Slot, SlotStatus
from .swap_request import SwapRequest, SwapRequestStatus
from .user import User

__all__ = [
    "OWNER_SETTABLE_STATUSES",
    "Slot",
    "SlotStatus",
    "SwapRequest",
    "SwapRequestStatus",
    "User",
]
