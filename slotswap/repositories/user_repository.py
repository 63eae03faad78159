"""
User Repository for the SlotSwap platform

Read access to users for identity resolution and display names.
"""

import logging

from sqlalchemy.orm import Session

from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for users."""

    def __init__(self, db: Session):
        super().__init__(db, User)
