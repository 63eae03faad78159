# slotswap/core/exceptions.py
"""
Domain-specific exceptions for the SlotSwap platform.

These exceptions carry a stable ``code`` alongside the human message so
the API layer can translate them into consistent HTTP responses.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Convert to an HTTPException using the class status code."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedException(DomainException):
    """Raised when the caller is not allowed to act on a resource."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific swap exceptions


class SlotNotFoundException(NotFoundException):
    """Raised when one or both slot ids do not resolve."""

    def __init__(self, message: Optional[str] = None, *, slot_ids: Optional[list] = None):
        super().__init__(
            message=message or "Slot not found",
            code="SLOT_NOT_FOUND",
            details={"slot_ids": slot_ids} if slot_ids else {},
        )


class SwapRequestNotFoundException(NotFoundException):
    """Raised when a swap request id does not resolve."""

    def __init__(self, request_id: str):
        super().__init__(
            message="Swap request not found",
            code="REQUEST_NOT_FOUND",
            details={"request_id": request_id},
        )


class NotAuthorizedException(UnauthorizedException):
    """Raised when the caller is not the owner/responder of the referenced entity."""

    def __init__(self, message: str):
        super().__init__(message=message, code="NOT_AUTHORIZED")


class InvalidStateException(ValidationException):
    """Raised when a status precondition fails."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="INVALID_STATE", details=details)


class DuplicateRequestException(ValidationException):
    """Raised when an identical pending swap request already exists."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message=message or "Swap request already exists",
            code="DUPLICATE_REQUEST",
        )


class PersistenceException(ServiceException):
    """Raised when the underlying store fails during an operation."""

    def __init__(self, message: str, *, operation: Optional[str] = None):
        super().__init__(
            message=message,
            code="PERSISTENCE_ERROR",
            details={"operation": operation} if operation else {},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
