# tests/core/test_exceptions.py
import pytest

from slotswap.core.exceptions import (
    DomainException,
    DuplicateRequestException,
    InvalidStateException,
    NotAuthorizedException,
    PersistenceException,
    SlotNotFoundException,
    SwapRequestNotFoundException,
)


@pytest.mark.parametrize(
    "exc, status_code, code",
    [
        (SlotNotFoundException(slot_ids=["a"]), 404, "SLOT_NOT_FOUND"),
        (SwapRequestNotFoundException("r1"), 404, "REQUEST_NOT_FOUND"),
        (NotAuthorizedException("nope"), 401, "NOT_AUTHORIZED"),
        (InvalidStateException("bad"), 400, "INVALID_STATE"),
        (DuplicateRequestException(), 400, "DUPLICATE_REQUEST"),
        (PersistenceException("db down"), 500, "PERSISTENCE_ERROR"),
    ],
)
def test_http_mapping(exc, status_code, code):
    http_exc = exc.to_http_exception()

    assert http_exc.status_code == status_code
    assert http_exc.detail["code"] == code
    assert http_exc.detail["message"] == exc.message


def test_code_defaults_to_class_name():
    exc = DomainException("generic")

    assert exc.code == "DomainException"
    assert exc.details == {}
    assert str(exc) == "generic"


def test_details_are_carried():
    exc = SwapRequestNotFoundException("01J00000000000000000000000")

    assert exc.to_http_exception().detail["details"] == {
        "request_id": "01J00000000000000000000000"
    }


def test_duplicate_default_message():
    assert DuplicateRequestException().message == "Swap request already exists"
