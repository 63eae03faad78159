"""Request/response schemas."""

from .base import MessageResponse, StandardizedModel, StrictRequestModel
from .slot import SlotCreate, SlotResponse, SlotUpdate, SwappableSlotResponse
from .swap import (
    SwapRequestCreate,
    SwapRequestDetailResponse,
    SwapRequestResponse,
    SwapResponseCreate,
)

__all__ = [
    "MessageResponse",
    "SlotCreate",
    "SlotResponse",
    "SlotUpdate",
    "StandardizedModel",
    "StrictRequestModel",
    "SwapRequestCreate",
    "SwapRequestDetailResponse",
    "SwapRequestResponse",
    "SwapResponseCreate",
    "SwappableSlotResponse",
]
