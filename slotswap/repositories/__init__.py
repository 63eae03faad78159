"""Data access layer."""

from .base_repository import BaseRepository, IRepository
from .factory import RepositoryFactory
from .slot_repository import SlotRepository
from .swap_request_repository import SwapRequestRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "IRepository",
    "RepositoryFactory",
    "SlotRepository",
    "SwapRequestRepository",
    "UserRepository",
]
