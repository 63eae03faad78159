# slotswap/models/swap_request.py
"""
SwapRequest model for the SlotSwap platform.

A swap request proposes exchanging ownership of two slots held by two
different users. It is created PENDING and answered exactly once; ACCEPTED
and REJECTED are terminal. Requests are never deleted.
"""

from enum import Enum
import logging

from sqlalchemy import Column, ForeignKey, Index, String, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .base_enum import create_safe_enum
from .slot import utcnow
from .types import UTCDateTime

logger = logging.getLogger(__name__)


class SwapRequestStatus(str, Enum):
    """Swap request lifecycle statuses."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not SwapRequestStatus.PENDING


_PENDING_ONLY = text("status = 'PENDING'")


class SwapRequest(Base):
    """
    One proposed exchange between a requester's slot ("my slot") and a
    responder's slot ("their slot").

    ``requester_id`` / ``responder_id`` snapshot the slot owners at creation
    time; they are not rewritten when ownership changes on acceptance.
    """

    __tablename__ = "swap_requests"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    requester_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    responder_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    my_slot_id = Column(String(26), ForeignKey("slots.id"), nullable=False, index=True)
    their_slot_id = Column(String(26), ForeignKey("slots.id"), nullable=False, index=True)
    status = Column(
        create_safe_enum(SwapRequestStatus, "swap_request_status"),
        nullable=False,
        default=SwapRequestStatus.PENDING,
        index=True,
    )

    created_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())
    responded_at = Column(UTCDateTime, nullable=True)

    requester = relationship("User", foreign_keys=[requester_id])
    responder = relationship("User", foreign_keys=[responder_id])
    my_slot = relationship("Slot", foreign_keys=[my_slot_id])
    their_slot = relationship("Slot", foreign_keys=[their_slot_id])

    __table_args__ = (
        # At most one PENDING request per ordered (requester, responder, my, their) tuple
        Index(
            "uq_swap_requests_pending_tuple",
            "requester_id",
            "responder_id",
            "my_slot_id",
            "their_slot_id",
            unique=True,
            sqlite_where=_PENDING_ONLY,
            postgresql_where=_PENDING_ONLY,
        ),
    )

    @property
    def requester_name(self) -> str | None:
        return self.requester.name if self.requester is not None else None

    @property
    def responder_name(self) -> str | None:
        return self.responder.name if self.responder is not None else None

    def __repr__(self) -> str:
        return f"<SwapRequest {self.id} {self.my_slot_id}<->{self.their_slot_id} {self.status}>"
