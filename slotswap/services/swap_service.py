# slotswap/services/swap_service.py
"""
Swap Negotiation Service for the SlotSwap platform

Owns the swap request lifecycle and drives the paired slot status changes:

    propose:  both slots SWAPPABLE -> SWAP_PENDING, request created PENDING
    accept:   request -> ACCEPTED, owners exchanged, both slots -> BUSY
    reject:   request -> REJECTED, both slots -> SWAPPABLE

Every precondition is checked before anything is written. The writes of
one operation run in a single transaction and use conditional updates, so
a caller that lost a race to a concurrent request fails cleanly instead of
overwriting the winner.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import (
    DuplicateRequestException,
    InvalidStateException,
    NotAuthorizedException,
    SlotNotFoundException,
    SwapRequestNotFoundException,
)
from ..models.slot import Slot, SlotStatus, utcnow
from ..models.swap_request import SwapRequest, SwapRequestStatus
from ..repositories.factory import RepositoryFactory
from ..repositories.slot_repository import SlotRepository
from ..repositories.swap_request_repository import SwapRequestRepository
from .base import BaseService

logger = logging.getLogger(__name__)

BOTH_SLOTS_SWAPPABLE = "Both slots must be swappable"
ALREADY_RESPONDED = "Request already responded to"


class SwapService(BaseService):
    """
    Service for negotiating one-to-one slot swaps.

    The caller's identity is always an explicit argument; the service never
    reads request-scoped state.
    """

    def __init__(
        self,
        db: Session,
        slot_repository: Optional[SlotRepository] = None,
        swap_request_repository: Optional[SwapRequestRepository] = None,
    ):
        """Initialize swap service with dependencies."""
        super().__init__(db)
        self.slot_repository = slot_repository or RepositoryFactory.create_slot_repository(db)
        self.swap_request_repository = (
            swap_request_repository or RepositoryFactory.create_swap_request_repository(db)
        )

    @BaseService.measure_operation("propose_swap")
    def propose_swap(self, requester_id: str, my_slot_id: str, their_slot_id: str) -> SwapRequest:
        """
        Propose exchanging the requester's slot for another user's slot.

        Args:
            requester_id: Authenticated caller
            my_slot_id: Slot the requester offers (must be theirs)
            their_slot_id: Slot the requester wants

        Returns:
            The created PENDING swap request

        Raises:
            SlotNotFoundException: If either slot does not exist
            NotAuthorizedException: If the requester does not own ``my_slot_id``
            InvalidStateException: If either slot is not SWAPPABLE, or both
                belong to the requester
            DuplicateRequestException: If the same request is already pending
            PersistenceException: If the store fails
        """
        self.log_operation(
            "propose_swap",
            requester_id=requester_id,
            my_slot_id=my_slot_id,
            their_slot_id=their_slot_id,
        )

        my_slot, their_slot = self._load_slot_pair(my_slot_id, their_slot_id)

        if my_slot.owner_id != requester_id:
            raise NotAuthorizedException("Not authorized to swap this slot")

        if my_slot.status != SlotStatus.SWAPPABLE or their_slot.status != SlotStatus.SWAPPABLE:
            raise InvalidStateException(
                BOTH_SLOTS_SWAPPABLE,
                details={
                    "my_slot_status": SlotStatus(my_slot.status).value,
                    "their_slot_status": SlotStatus(their_slot.status).value,
                },
            )

        responder_id = their_slot.owner_id
        if responder_id == requester_id:
            raise InvalidStateException("Cannot swap slots you already own")

        if self.swap_request_repository.find_pending(
            requester_id, responder_id, my_slot_id, their_slot_id
        ):
            raise DuplicateRequestException()

        with self.transaction("propose_swap"):
            locked = self.slot_repository.transition_status(
                my_slot_id,
                SlotStatus.SWAPPABLE,
                SlotStatus.SWAP_PENDING,
                expected_owner_id=requester_id,
            ) and self.slot_repository.transition_status(
                their_slot_id,
                SlotStatus.SWAPPABLE,
                SlotStatus.SWAP_PENDING,
                expected_owner_id=responder_id,
            )
            if not locked:
                # Another request claimed one of the slots after validation
                raise InvalidStateException(BOTH_SLOTS_SWAPPABLE)

            try:
                swap_request = self.swap_request_repository.create(
                    requester_id=requester_id,
                    responder_id=responder_id,
                    my_slot_id=my_slot_id,
                    their_slot_id=their_slot_id,
                    status=SwapRequestStatus.PENDING,
                )
            except IntegrityError as e:
                raise DuplicateRequestException() from e

        self.logger.info(
            f"Swap request {swap_request.id} created: {my_slot_id} <-> {their_slot_id}"
        )
        return swap_request

    @BaseService.measure_operation("respond_to_swap")
    def respond_to_swap(self, responder_id: str, request_id: str, accept: bool) -> SwapRequest:
        """
        Accept or reject a pending swap request.

        Accepting exchanges the two slots' owners and marks both BUSY.
        Rejecting returns both slots to SWAPPABLE with owners unchanged.

        Args:
            responder_id: Authenticated caller (must be the request's responder)
            request_id: Swap request to answer
            accept: True to accept, False to reject

        Returns:
            The updated swap request

        Raises:
            SwapRequestNotFoundException: If the request does not exist
            NotAuthorizedException: If the caller is not the responder
            InvalidStateException: If the request is no longer PENDING
            PersistenceException: If the store fails
        """
        self.log_operation(
            "respond_to_swap", responder_id=responder_id, request_id=request_id, accept=accept
        )

        swap_request = self.swap_request_repository.get_by_id(request_id, load_relationships=False)
        if not swap_request:
            raise SwapRequestNotFoundException(request_id)

        if swap_request.responder_id != responder_id:
            raise NotAuthorizedException("Not authorized to respond to this request")

        if SwapRequestStatus(swap_request.status).is_terminal:
            raise InvalidStateException(ALREADY_RESPONDED)

        requester_id = swap_request.requester_id
        my_slot_id = swap_request.my_slot_id
        their_slot_id = swap_request.their_slot_id
        new_status = SwapRequestStatus.ACCEPTED if accept else SwapRequestStatus.REJECTED

        with self.transaction("respond_to_swap"):
            if not self.swap_request_repository.transition_status(
                request_id,
                SwapRequestStatus.PENDING,
                new_status,
                responded_at=utcnow(),
            ):
                raise InvalidStateException(ALREADY_RESPONDED)

            if accept:
                resolved = self.slot_repository.transition_status(
                    my_slot_id,
                    SlotStatus.SWAP_PENDING,
                    SlotStatus.BUSY,
                    expected_owner_id=requester_id,
                    new_owner_id=responder_id,
                ) and self.slot_repository.transition_status(
                    their_slot_id,
                    SlotStatus.SWAP_PENDING,
                    SlotStatus.BUSY,
                    expected_owner_id=responder_id,
                    new_owner_id=requester_id,
                )
            else:
                resolved = self.slot_repository.transition_status(
                    my_slot_id,
                    SlotStatus.SWAP_PENDING,
                    SlotStatus.SWAPPABLE,
                    expected_owner_id=requester_id,
                ) and self.slot_repository.transition_status(
                    their_slot_id,
                    SlotStatus.SWAP_PENDING,
                    SlotStatus.SWAPPABLE,
                    expected_owner_id=responder_id,
                )
            if not resolved:
                raise InvalidStateException("Swap slots are no longer pending")

        self.logger.info(f"Swap request {request_id} {new_status.value.lower()}")
        return self.swap_request_repository.get_by_id(request_id)

    @BaseService.measure_operation("list_swap_requests")
    def list_swap_requests(self, user_id: str) -> List[SwapRequest]:
        """
        Requests the user sent or received, with names and slots resolved.

        Read-only.
        """
        return self.swap_request_repository.list_for_user(user_id)

    @BaseService.measure_operation("list_swappable_slots")
    def list_swappable_slots(self, user_id: str) -> List[Slot]:
        """SWAPPABLE slots owned by anyone but the caller."""
        return self.slot_repository.find_swappable(user_id)

    def _load_slot_pair(self, my_slot_id: str, their_slot_id: str) -> Tuple[Slot, Slot]:
        my_slot = self.slot_repository.get_by_id(my_slot_id, load_relationships=False)
        their_slot = self.slot_repository.get_by_id(their_slot_id, load_relationships=False)
        missing = [
            slot_id
            for slot_id, slot in ((my_slot_id, my_slot), (their_slot_id, their_slot))
            if slot is None
        ]
        if missing:
            raise SlotNotFoundException("One or both slots not found", slot_ids=missing)
        return my_slot, their_slot
