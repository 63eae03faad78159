# tests/models/test_models.py
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest

from slotswap.models import OWNER_SETTABLE_STATUSES, Slot, SlotStatus, SwapRequestStatus
from slotswap.models.base_enum import create_safe_enum


class NotAString(Enum):
    ONE = 1


def test_safe_enum_stores_values():
    column_type = create_safe_enum(SlotStatus, "slot_status")

    assert column_type.enums == ["BUSY", "SWAPPABLE", "SWAP_PENDING"]
    assert column_type.length == len("SWAP_PENDING")


def test_safe_enum_rejects_non_str_enums():
    with pytest.raises(TypeError):
        create_safe_enum(NotAString, "not_a_string")


def test_owner_settable_statuses_exclude_swap_pending():
    assert SlotStatus.SWAP_PENDING not in OWNER_SETTABLE_STATUSES
    assert OWNER_SETTABLE_STATUSES == {SlotStatus.BUSY, SlotStatus.SWAPPABLE}


def test_terminal_request_statuses():
    assert not SwapRequestStatus.PENDING.is_terminal
    assert SwapRequestStatus.ACCEPTED.is_terminal
    assert SwapRequestStatus.REJECTED.is_terminal


def test_slot_owner_name_and_pending_flag(db, user_one, make_slot):
    slot = make_slot(user_one, status=SlotStatus.SWAP_PENDING)

    loaded = db.query(Slot).filter(Slot.id == slot.id).one()

    assert loaded.owner_name == "Ada One"
    assert loaded.is_swap_pending
    assert user_one.slots == [loaded]


def test_datetimes_read_back_in_utc(db, user_one, make_slot):
    local_start = datetime(2026, 11, 2, 9, 0, tzinfo=timezone(timedelta(hours=2)))
    slot = make_slot(user_one, start_time=local_start)

    loaded = db.query(Slot).populate_existing().filter(Slot.id == slot.id).one()

    assert loaded.start_time == datetime(2026, 11, 2, 7, 0, tzinfo=timezone.utc)
    assert loaded.start_time.utcoffset() == timedelta(0)
    assert loaded.created_at.tzinfo is not None
    assert user_one.created_at.tzinfo is not None
