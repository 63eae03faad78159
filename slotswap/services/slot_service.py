# slotswap/services/slot_service.py
"""
Slot Service for the SlotSwap platform

Owner-side calendar management: create, list, edit and delete one's own
slots, including the manual BUSY <-> SWAPPABLE toggle. A slot locked by a
pending swap (SWAP_PENDING) cannot be edited or deleted by its owner; only
the swap service moves it out of that state.
"""

from datetime import datetime
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import InvalidStateException, SlotNotFoundException, ValidationException
from ..core.timezone_utils import is_valid_range, to_utc
from ..models.slot import OWNER_SETTABLE_STATUSES, Slot, SlotStatus
from ..repositories.factory import RepositoryFactory
from ..repositories.slot_repository import SlotRepository
from ..repositories.swap_request_repository import SwapRequestRepository
from .base import BaseService

logger = logging.getLogger(__name__)

SLOT_LOCKED = "Slot is locked by a pending swap request"


class SlotService(BaseService):
    """Service for an owner's own calendar slots."""

    def __init__(
        self,
        db: Session,
        slot_repository: Optional[SlotRepository] = None,
        swap_request_repository: Optional[SwapRequestRepository] = None,
    ):
        super().__init__(db)
        self.slot_repository = slot_repository or RepositoryFactory.create_slot_repository(db)
        self.swap_request_repository = (
            swap_request_repository or RepositoryFactory.create_swap_request_repository(db)
        )

    @BaseService.measure_operation("create_slot")
    def create_slot(
        self,
        owner_id: str,
        title: str,
        start_time: datetime,
        end_time: datetime,
        status: SlotStatus = SlotStatus.BUSY,
    ) -> Slot:
        """
        Create a slot for the owner.

        Raises:
            InvalidStateException: If ``status`` is SWAP_PENDING
            ValidationException: If the time range is empty or inverted
        """
        self.log_operation("create_slot", owner_id=owner_id)
        self._validate_owner_status(status)
        self._validate_range(start_time, end_time)

        with self.transaction("create_slot"):
            slot = self.slot_repository.create(
                owner_id=owner_id,
                title=title,
                start_time=to_utc(start_time),
                end_time=to_utc(end_time),
                status=status,
            )
        return slot

    @BaseService.measure_operation("list_slots")
    def list_slots(self, owner_id: str) -> List[Slot]:
        """All of the owner's slots, in insertion order."""
        return self.slot_repository.list_for_owner(owner_id)

    @BaseService.measure_operation("get_slot")
    def get_slot(self, owner_id: str, slot_id: str) -> Slot:
        """
        Fetch one of the owner's slots.

        Slots owned by someone else are reported as missing.
        """
        slot = self.slot_repository.get_by_id(slot_id, load_relationships=False)
        if slot is None or slot.owner_id != owner_id:
            raise SlotNotFoundException(slot_ids=[slot_id])
        return slot

    @BaseService.measure_operation("update_slot")
    def update_slot(
        self,
        owner_id: str,
        slot_id: str,
        *,
        title: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        status: Optional[SlotStatus] = None,
    ) -> Slot:
        """
        Partially update one of the owner's slots.

        The write is conditional on the status read here, so a swap proposed
        in the meantime wins and this call fails with InvalidStateException.

        Raises:
            SlotNotFoundException: If the slot is missing or not the caller's
            InvalidStateException: If the slot is SWAP_PENDING or the requested
                status is not owner-settable
            ValidationException: If the resulting time range is invalid
        """
        self.log_operation("update_slot", owner_id=owner_id, slot_id=slot_id)
        slot = self.get_slot(owner_id, slot_id)
        current_status = SlotStatus(slot.status)

        if slot.is_swap_pending:
            raise InvalidStateException(SLOT_LOCKED)
        if status is not None:
            self._validate_owner_status(status)

        changes: Dict[str, Any] = {}
        if title is not None:
            changes["title"] = title
        if start_time is not None:
            changes["start_time"] = to_utc(start_time)
        if end_time is not None:
            changes["end_time"] = to_utc(end_time)
        if status is not None and status != current_status:
            changes["status"] = status

        if not changes:
            return slot

        self._validate_range(
            changes.get("start_time", slot.start_time), changes.get("end_time", slot.end_time)
        )

        with self.transaction("update_slot"):
            if not self.slot_repository.update_if_status(
                slot_id, current_status, expected_owner_id=owner_id, **changes
            ):
                raise InvalidStateException(SLOT_LOCKED)

        return self.get_slot(owner_id, slot_id)

    @BaseService.measure_operation("delete_slot")
    def delete_slot(self, owner_id: str, slot_id: str) -> None:
        """
        Delete one of the owner's slots.

        Slots locked by a pending swap, or referenced by past swap requests,
        cannot be deleted.

        Raises:
            SlotNotFoundException: If the slot is missing or not the caller's
            InvalidStateException: If the slot is SWAP_PENDING or has swap history
        """
        self.log_operation("delete_slot", owner_id=owner_id, slot_id=slot_id)
        slot = self.get_slot(owner_id, slot_id)

        if slot.is_swap_pending:
            raise InvalidStateException("Cannot delete a slot with a pending swap request")
        if self.swap_request_repository.exists_for_slot(slot_id):
            raise InvalidStateException("Cannot delete a slot referenced by swap history")

        with self.transaction("delete_slot"):
            if not self.slot_repository.delete_unless_pending(slot_id, owner_id):
                raise InvalidStateException("Cannot delete a slot with a pending swap request")

    @staticmethod
    def _validate_owner_status(status: SlotStatus) -> None:
        if status not in OWNER_SETTABLE_STATUSES:
            raise InvalidStateException(
                "Slot status can only be set to BUSY or SWAPPABLE",
                details={"status": SlotStatus(status).value},
            )

    @staticmethod
    def _validate_range(start_time: datetime, end_time: datetime) -> None:
        if not is_valid_range(start_time, end_time):
            raise ValidationException(
                "endTime must be after startTime",
                code="INVALID_TIME_RANGE",
            )
