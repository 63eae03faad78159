# slotswap/models/slot.py
"""
Slot model for the SlotSwap platform.

A slot is a bounded calendar interval owned by exactly one user. Its status
says whether it is open to trade:

    BUSY <-> SWAPPABLE        manual toggle by the owner
    SWAPPABLE -> SWAP_PENDING  swap proposed (both slots)
    SWAP_PENDING -> BUSY       swap accepted (both slots, owners exchanged)
    SWAP_PENDING -> SWAPPABLE  swap rejected (both slots)

SWAP_PENDING is only entered or left through the swap service.
"""

from datetime import datetime, timezone
from enum import Enum
import logging

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .base_enum import create_safe_enum
from .types import UTCDateTime

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SlotStatus(str, Enum):
    """Slot tradeability statuses."""

    BUSY = "BUSY"  # Not open to trade
    SWAPPABLE = "SWAPPABLE"  # Available for a trade proposal
    SWAP_PENDING = "SWAP_PENDING"  # Locked by an outstanding swap request


# Statuses an owner may set directly
OWNER_SETTABLE_STATUSES = frozenset({SlotStatus.BUSY, SlotStatus.SWAPPABLE})


class Slot(Base):
    """
    Calendar interval with a tradeability status.

    The swap service mutates only ``status`` and, on acceptance, ``owner_id``.
    """

    __tablename__ = "slots"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    owner_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)
    status = Column(
        create_safe_enum(SlotStatus, "slot_status"),
        nullable=False,
        default=SlotStatus.BUSY,
        index=True,
    )

    created_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(UTCDateTime, onupdate=utcnow, nullable=True)

    owner = relationship("User", back_populates="slots", foreign_keys=[owner_id])

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_slots_time_order"),
        Index("ix_slots_status_owner", "status", "owner_id"),
    )

    @property
    def owner_name(self) -> str | None:
        return self.owner.name if self.owner is not None else None

    @property
    def is_swap_pending(self) -> bool:
        return self.status == SlotStatus.SWAP_PENDING

    def __repr__(self) -> str:
        return f"<Slot {self.id} owner={self.owner_id} status={self.status}>"
