# slotswap/repositories/slot_repository.py
"""
Slot Repository for the SlotSwap platform

Owns every query against the ``slots`` table. Status and ownership changes
driven by the swap flow go through ``transition_status``: a single
conditional UPDATE that only matches while the slot is still in the
expected state, so two racing callers cannot both win.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.slot import Slot, SlotStatus, utcnow
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SlotRepository(BaseRepository[Slot]):
    """
    Repository for calendar slots.

    Lookups, the swappable-slot marketplace query and the conditional
    status transition used by the swap service.
    """

    def __init__(self, db: Session):
        """Initialize with Slot model."""
        super().__init__(db, Slot)
        self.logger = logging.getLogger(__name__)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Slot.owner))

    def list_for_owner(self, owner_id: str) -> List[Slot]:
        """All slots owned by a user, in insertion order."""
        query = (
            self.db.query(Slot)
            .filter(Slot.owner_id == owner_id)
            .order_by(Slot.created_at.asc(), Slot.id.asc())
        )
        return self._execute_query(query)

    def find_swappable(self, excluding_owner_id: str) -> List[Slot]:
        """
        Marketplace listing: every SWAPPABLE slot not owned by the caller.

        The owner relationship is eagerly loaded so callers can read
        ``slot.owner_name`` without extra queries.

        Args:
            excluding_owner_id: The caller; their own slots are left out

        Returns:
            Slots in insertion order
        """
        query = (
            self.db.query(Slot)
            .options(joinedload(Slot.owner))
            .filter(
                Slot.status == SlotStatus.SWAPPABLE,
                Slot.owner_id != excluding_owner_id,
            )
            .order_by(Slot.created_at.asc(), Slot.id.asc())
        )
        return self._execute_query(query)

    def transition_status(
        self,
        slot_id: str,
        from_status: SlotStatus,
        to_status: SlotStatus,
        *,
        expected_owner_id: Optional[str] = None,
        new_owner_id: Optional[str] = None,
    ) -> bool:
        """
        Atomically move a slot from one status to another.

        Equivalent to ``UPDATE slots SET status=:to WHERE id=:id AND
        status=:from [AND owner_id=:expected]``. Nothing is written when the
        slot is no longer in ``from_status`` (or changed hands).

        Args:
            slot_id: Slot to update
            from_status: Status the slot must currently have
            to_status: Status to set
            expected_owner_id: Optional owner guard
            new_owner_id: Optional new owner to assign in the same statement

        Returns:
            True if exactly one row was updated, False otherwise
        """
        values: Dict[str, Any] = {"status": to_status}
        if new_owner_id is not None:
            values["owner_id"] = new_owner_id
        updated = self.update_if_status(
            slot_id, from_status, expected_owner_id=expected_owner_id, **values
        )
        if not updated:
            self.logger.info(
                f"Slot {slot_id} not in {from_status.value}; transition to {to_status.value} skipped"
            )
        return updated

    def update_if_status(
        self,
        slot_id: str,
        expected_status: SlotStatus,
        *,
        expected_owner_id: Optional[str] = None,
        **values: Any,
    ) -> bool:
        """
        Conditional UPDATE guarded on the slot's current status (and owner).

        Returns:
            True if exactly one row was updated
        """
        values["updated_at"] = utcnow()
        stmt = update(Slot).where(Slot.id == slot_id, Slot.status == expected_status)
        if expected_owner_id is not None:
            stmt = stmt.where(Slot.owner_id == expected_owner_id)
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        try:
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating slot {slot_id}: {str(e)}")
            raise RepositoryException(f"Failed to update slot: {str(e)}")

        updated = result.rowcount == 1
        if updated:
            self._expire_cached(slot_id)
        return updated

    def delete_unless_pending(self, slot_id: str, owner_id: str) -> bool:
        """
        Delete an owner's slot unless it is locked by a pending swap.

        Returns:
            True if the row was deleted
        """
        stmt = (
            delete(Slot)
            .where(
                Slot.id == slot_id,
                Slot.owner_id == owner_id,
                Slot.status != SlotStatus.SWAP_PENDING,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting slot {slot_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete slot: {str(e)}")

        deleted = result.rowcount == 1
        if deleted:
            cached = self.db.identity_map.get(Session.identity_key(Slot, slot_id))
            if cached is not None:
                self.db.expunge(cached)
        return deleted
