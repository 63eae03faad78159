"""
API routes for swap negotiation.

Marketplace listing, the caller's request history, and the propose /
respond endpoints that drive the swap state machine.
"""

import logging
from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ..api.dependencies.auth import get_current_user_id
from ..api.dependencies.services import get_swap_service
from ..core.exceptions import DomainException
from ..schemas.slot import SwappableSlotResponse
from ..schemas.swap import (
    SwapRequestCreate,
    SwapRequestDetailResponse,
    SwapRequestResponse,
    SwapResponseCreate,
)
from ..services.swap_service import SwapService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["swaps"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/swappable-slots", response_model=List[SwappableSlotResponse])
def list_swappable_slots(
    current_user_id: str = Depends(get_current_user_id),
    swap_service: SwapService = Depends(get_swap_service),
) -> List[SwappableSlotResponse]:
    """Slots other users have offered for swapping."""
    try:
        slots = swap_service.list_swappable_slots(current_user_id)
        return [SwappableSlotResponse.model_validate(slot) for slot in slots]
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/my-requests", response_model=List[SwapRequestDetailResponse])
def list_my_requests(
    current_user_id: str = Depends(get_current_user_id),
    swap_service: SwapService = Depends(get_swap_service),
) -> List[SwapRequestDetailResponse]:
    """Swap requests the caller sent or received, newest first."""
    try:
        requests = swap_service.list_swap_requests(current_user_id)
        return [SwapRequestDetailResponse.model_validate(item) for item in requests]
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/swap-request",
    response_model=SwapRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_swap_request(
    payload: SwapRequestCreate,
    current_user_id: str = Depends(get_current_user_id),
    swap_service: SwapService = Depends(get_swap_service),
) -> SwapRequestResponse:
    """
    Propose swapping one of the caller's slots for another user's slot.

    Both slots must be SWAPPABLE; on success both become SWAP_PENDING.
    """
    try:
        swap_request = swap_service.propose_swap(
            requester_id=current_user_id,
            my_slot_id=payload.my_slot_id,
            their_slot_id=payload.their_slot_id,
        )
        return SwapRequestResponse.model_validate(swap_request)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/swap-response/{request_id}", response_model=SwapRequestDetailResponse)
def respond_to_swap_request(
    payload: SwapResponseCreate,
    request_id: str = Path(..., description="Swap request ID"),
    current_user_id: str = Depends(get_current_user_id),
    swap_service: SwapService = Depends(get_swap_service),
) -> SwapRequestDetailResponse:
    """Accept or reject a swap request addressed to the caller."""
    try:
        swap_request = swap_service.respond_to_swap(
            responder_id=current_user_id,
            request_id=request_id,
            accept=payload.accept,
        )
        return SwapRequestDetailResponse.model_validate(swap_request)
    except DomainException as e:
        handle_domain_exception(e)
