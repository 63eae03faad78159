"""
FastAPI dependencies for the SlotSwap API.
"""

from .auth import get_current_user, get_current_user_id
from .database import get_db
from .services import get_slot_service, get_swap_service

__all__ = [
    "get_current_user",
    "get_current_user_id",
    "get_db",
    "get_slot_service",
    "get_swap_service",
]
