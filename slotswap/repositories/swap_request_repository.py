# slotswap/repositories/swap_request_repository.py
"""
Swap Request Repository for the SlotSwap platform

Handles all database operations for swap requests: creation, lookup,
the pending-duplicate check and the conditional PENDING -> terminal
transition.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.slot import Slot
from ..models.swap_request import SwapRequest, SwapRequestStatus
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SwapRequestRepository(BaseRepository[SwapRequest]):
    """Repository for swap requests."""

    def __init__(self, db: Session):
        """Initialize with SwapRequest model."""
        super().__init__(db, SwapRequest)
        self.logger = logging.getLogger(__name__)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            joinedload(SwapRequest.requester),
            joinedload(SwapRequest.responder),
            joinedload(SwapRequest.my_slot).joinedload(Slot.owner),
            joinedload(SwapRequest.their_slot).joinedload(Slot.owner),
        )

    def find_pending(
        self,
        requester_id: str,
        responder_id: str,
        my_slot_id: str,
        their_slot_id: str,
    ) -> Optional[SwapRequest]:
        """
        Find the PENDING request for an exact ordered tuple, if any.

        Returns:
            The pending request or None
        """
        try:
            return (
                self.db.query(SwapRequest)
                .filter(
                    SwapRequest.requester_id == requester_id,
                    SwapRequest.responder_id == responder_id,
                    SwapRequest.my_slot_id == my_slot_id,
                    SwapRequest.their_slot_id == their_slot_id,
                    SwapRequest.status == SwapRequestStatus.PENDING,
                )
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking pending swap request: {str(e)}")
            raise RepositoryException(f"Failed to check pending swap request: {str(e)}")

    def list_for_user(self, user_id: str) -> List[SwapRequest]:
        """
        All requests the user sent or received, newest first.

        Names and slot snapshots are eagerly loaded for the listing.
        """
        query = self._apply_eager_loading(
            self.db.query(SwapRequest).filter(
                or_(SwapRequest.requester_id == user_id, SwapRequest.responder_id == user_id)
            )
        ).order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc())
        return self._execute_query(query)

    def transition_status(
        self,
        request_id: str,
        from_status: SwapRequestStatus,
        to_status: SwapRequestStatus,
        *,
        responded_at: Optional[datetime] = None,
    ) -> bool:
        """
        Atomically move a request out of ``from_status``.

        Returns:
            True if the request was updated, False if it had already moved on
        """
        stmt = (
            update(SwapRequest)
            .where(SwapRequest.id == request_id, SwapRequest.status == from_status)
            .values(status=to_status, responded_at=responded_at)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.logger.error(f"Error transitioning swap request {request_id}: {str(e)}")
            raise RepositoryException(f"Failed to update swap request: {str(e)}")
        updated = result.rowcount == 1
        if updated:
            self._expire_cached(request_id)
        return updated

    def exists_for_slot(self, slot_id: str) -> bool:
        """Whether any request, in any status, references the slot."""
        try:
            return (
                self.db.query(SwapRequest.id)
                .filter(
                    or_(SwapRequest.my_slot_id == slot_id, SwapRequest.their_slot_id == slot_id)
                )
                .first()
                is not None
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking swap history for slot {slot_id}: {str(e)}")
            raise RepositoryException(f"Failed to check swap history: {str(e)}")
