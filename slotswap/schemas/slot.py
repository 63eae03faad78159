"""
Pydantic schemas for calendar slots.

Defines request and response models for the slot (event) API endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, ConfigDict, Field

from ..models.slot import SlotStatus
from .base import StandardizedModel, StrictRequestModel


class SlotCreate(StrictRequestModel):
    """Create a slot owned by the caller."""

    title: str = Field(..., min_length=1, max_length=255, description="Slot title")
    start_time: datetime = Field(..., description="Start instant (ISO 8601)")
    end_time: datetime = Field(..., description="End instant (ISO 8601)")
    status: SlotStatus = Field(SlotStatus.BUSY, description="BUSY or SWAPPABLE")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Team standup",
                "startTime": "2026-11-02T09:00:00Z",
                "endTime": "2026-11-02T09:30:00Z",
                "status": "SWAPPABLE",
            }
        }
    )


class SlotUpdate(StrictRequestModel):
    """Partial update of a slot; omitted fields are left unchanged."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[SlotStatus] = Field(None, description="BUSY or SWAPPABLE")


class SlotResponse(StandardizedModel):
    """Persisted slot shape."""

    id: str = Field(..., description="Slot ID (ULID)")
    owner: str = Field(
        ...,
        validation_alias=AliasChoices("owner_id", "ownerId", "owner"),
        serialization_alias="owner",
        description="Owner user ID",
    )
    title: str
    start_time: datetime
    end_time: datetime
    status: SlotStatus


class SwappableSlotResponse(SlotResponse):
    """Marketplace listing entry with the owner's display name."""

    owner_name: Optional[str] = Field(None, description="Owner display name")
