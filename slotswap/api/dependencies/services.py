"""
Service layer dependencies for dependency injection.

Each request gets service instances bound to its own database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.slot_service import SlotService
from ...services.swap_service import SwapService
from .database import get_db


def get_slot_service(db: Session = Depends(get_db)) -> SlotService:
    """Get slot service instance for the request session."""
    return SlotService(db)


def get_swap_service(db: Session = Depends(get_db)) -> SwapService:
    """
    Get swap service instance with all dependencies.

    Args:
        db: Database session

    Returns:
        SwapService instance
    """
    return SwapService(db)
