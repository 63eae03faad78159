"""
API routes for the caller's own calendar slots ("events").

Owner-side CRUD plus the BUSY <-> SWAPPABLE toggle (via PUT with a status).
"""

import logging
from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ..api.dependencies.auth import get_current_user_id
from ..api.dependencies.services import get_slot_service
from ..core.exceptions import DomainException
from ..models.slot import SlotStatus
from ..schemas.base import MessageResponse
from ..schemas.slot import SlotCreate, SlotResponse, SlotUpdate
from ..services.slot_service import SlotService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("", response_model=SlotResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: SlotCreate,
    current_user_id: str = Depends(get_current_user_id),
    slot_service: SlotService = Depends(get_slot_service),
) -> SlotResponse:
    """Create a slot owned by the caller."""
    try:
        slot = slot_service.create_slot(
            owner_id=current_user_id,
            title=payload.title,
            start_time=payload.start_time,
            end_time=payload.end_time,
            status=SlotStatus(payload.status),
        )
        return SlotResponse.model_validate(slot)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=List[SlotResponse])
def list_events(
    current_user_id: str = Depends(get_current_user_id),
    slot_service: SlotService = Depends(get_slot_service),
) -> List[SlotResponse]:
    slots = slot_service.list_slots(current_user_id)
    return [SlotResponse.model_validate(slot) for slot in slots]


@router.get("/{slot_id}", response_model=SlotResponse)
def get_event(
    slot_id: str = Path(..., description="Slot ID"),
    current_user_id: str = Depends(get_current_user_id),
    slot_service: SlotService = Depends(get_slot_service),
) -> SlotResponse:
    try:
        return SlotResponse.model_validate(slot_service.get_slot(current_user_id, slot_id))
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/{slot_id}", response_model=SlotResponse)
def update_event(
    payload: SlotUpdate,
    slot_id: str = Path(..., description="Slot ID"),
    current_user_id: str = Depends(get_current_user_id),
    slot_service: SlotService = Depends(get_slot_service),
) -> SlotResponse:
    """
    Partially update one of the caller's slots.

    Slots locked by a pending swap request are rejected with 400.
    """
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("status") is not None:
        changes["status"] = SlotStatus(changes["status"])
    try:
        slot = slot_service.update_slot(current_user_id, slot_id, **changes)
        return SlotResponse.model_validate(slot)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{slot_id}", response_model=MessageResponse)
def delete_event(
    slot_id: str = Path(..., description="Slot ID"),
    current_user_id: str = Depends(get_current_user_id),
    slot_service: SlotService = Depends(get_slot_service),
) -> MessageResponse:
    """
    Delete one of the caller's slots.

    Returns 400 while the slot is locked by a pending swap request. A slot
    referenced by any swap request, pending or answered, can never be
    deleted: swap history is permanent, so such slots also get 400.
    """
    try:
        slot_service.delete_slot(current_user_id, slot_id)
    except DomainException as e:
        handle_domain_exception(e)
    logger.info(f"Slot {slot_id} deleted by {current_user_id}")
    return MessageResponse(message="Event deleted")
