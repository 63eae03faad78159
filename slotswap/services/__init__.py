"""Business logic layer."""

from .base import BaseService
from .slot_service import SlotService
from .swap_service import SwapService

__all__ = ["BaseService", "SlotService", "SwapService"]
