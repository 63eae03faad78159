"""
Caller identity dependencies.

Authentication happens upstream; the gateway forwards the authenticated
user id in a trusted header (``settings.identity_header``). These
dependencies resolve that header to a known user or fail with 401.
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ...core.config import settings
from ...core.exceptions import NotAuthorizedException
from ...core.ulid_helper import is_valid_ulid
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Resolve the calling user from the identity header.

    Raises:
        HTTPException: 401 if the header is missing, malformed or names an
            unknown user
    """
    user_id = (request.headers.get(settings.identity_header) or "").strip()
    if not user_id:
        raise NotAuthorizedException("Authentication required").to_http_exception()
    if not is_valid_ulid(user_id):
        logger.warning(
            "Rejected request with malformed identity",
            extra={"event": "malformed_identity", "route": request.url.path},
        )
        raise NotAuthorizedException("Authentication required").to_http_exception()

    user = RepositoryFactory.create_user_repository(db).get_by_id(user_id)
    if user is None:
        logger.warning(
            "Rejected request for unknown user",
            extra={"event": "unknown_identity", "route": request.url.path, "user_id": user_id},
        )
        raise NotAuthorizedException("Authentication required").to_http_exception()
    return user


def get_current_user_id(current_user: User = Depends(get_current_user)) -> str:
    return current_user.id
