# slotswap/models/user.py
"""
User model for the SlotSwap platform.

Credentials live with the upstream authentication service; this table only
holds what swap listings need to resolve (a display name).
"""

import logging

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime

logger = logging.getLogger(__name__)


class User(Base):
    """
    Calendar owner.

    Attributes:
        id: ULID primary key (matches the id injected by the identity header)
        name: Display name shown to other users
        email: Unique contact address
        created_at: Account creation timestamp

    Relationships:
        slots: One-to-many with Slot
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    created_at = Column(UTCDateTime, server_default=func.now(), nullable=False)

    slots = relationship("Slot", back_populates="owner", foreign_keys="Slot.owner_id")

    def __repr__(self) -> str:
        return f"<User {self.id} {self.name!r}>"
