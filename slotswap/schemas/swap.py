"""
Pydantic schemas for swap negotiation.

Defines request and response models for the swap API endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, StrictBool

from ..models.swap_request import SwapRequestStatus
from .base import StandardizedModel, StrictRequestModel
from .slot import SlotResponse


class SwapRequestCreate(StrictRequestModel):
    """Propose swapping one of the caller's slots for another user's slot."""

    my_slot_id: str = Field(..., min_length=1, description="Caller's offered slot")
    their_slot_id: str = Field(..., min_length=1, description="Requested slot")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "mySlotId": "01K2K8CVN3A55280PFKJD9YHKV",
                "theirSlotId": "01K2K8D1R7XQ3M8Y0B6T2C4N5P",
            }
        }
    )


class SwapResponseCreate(StrictRequestModel):
    """Answer to a pending swap request."""

    accept: StrictBool = Field(..., description="True to accept, False to reject")


class SwapRequestResponse(StandardizedModel):
    """Persisted swap request shape."""

    id: str = Field(..., description="Swap request ID (ULID)")
    requester_id: str
    responder_id: str
    my_slot_id: str
    their_slot_id: str
    status: SwapRequestStatus
    created_at: datetime


class SwapRequestDetailResponse(SwapRequestResponse):
    """Swap request with names and both slot snapshots resolved."""

    requester_name: Optional[str] = None
    responder_name: Optional[str] = None
    my_slot: Optional[SlotResponse] = None
    their_slot: Optional[SlotResponse] = None
    responded_at: Optional[datetime] = None
