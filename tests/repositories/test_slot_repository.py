# tests/repositories/test_slot_repository.py
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from slotswap.models import Slot, SlotStatus
from slotswap.repositories import RepositoryFactory, SlotRepository


@pytest.fixture
def slot_repository(db) -> SlotRepository:
    return RepositoryFactory.create_slot_repository(db)


def test_get_by_id_eager_loads_owner(slot_repository, user_one, make_slot):
    slot = make_slot(user_one)

    loaded = slot_repository.get_by_id(slot.id)

    assert loaded.owner_name == "Ada One"


def test_get_by_id_missing_returns_none(slot_repository):
    assert slot_repository.get_by_id("01J00000000000000000000000") is None


def test_transition_status_applies_when_expected_status_matches(
    db, slot_repository, user_one, make_slot
):
    slot = make_slot(user_one)

    assert slot_repository.transition_status(slot.id, SlotStatus.SWAPPABLE, SlotStatus.SWAP_PENDING)
    db.commit()

    # Identity-map copy is refreshed on next access
    assert slot.status == SlotStatus.SWAP_PENDING


def test_transition_status_is_noop_when_status_differs(db, slot_repository, user_one, make_slot):
    slot = make_slot(user_one, status=SlotStatus.BUSY)

    assert not slot_repository.transition_status(
        slot.id, SlotStatus.SWAPPABLE, SlotStatus.SWAP_PENDING
    )
    db.commit()

    assert slot_repository.get_by_id(slot.id).status == SlotStatus.BUSY


def test_transition_status_guards_owner_and_reassigns(
    db, slot_repository, user_one, user_two, make_slot
):
    slot = make_slot(user_one, status=SlotStatus.SWAP_PENDING)

    assert not slot_repository.transition_status(
        slot.id,
        SlotStatus.SWAP_PENDING,
        SlotStatus.BUSY,
        expected_owner_id=user_two.id,
        new_owner_id=user_one.id,
    )
    assert slot_repository.transition_status(
        slot.id,
        SlotStatus.SWAP_PENDING,
        SlotStatus.BUSY,
        expected_owner_id=user_one.id,
        new_owner_id=user_two.id,
    )
    db.commit()

    reloaded = slot_repository.get_by_id(slot.id)
    assert reloaded.owner_id == user_two.id
    assert reloaded.status == SlotStatus.BUSY


def test_find_swappable_excludes_caller(slot_repository, user_one, user_two, make_slot):
    make_slot(user_one)
    make_slot(user_two, status=SlotStatus.SWAP_PENDING)
    offered = make_slot(user_two)

    results = slot_repository.find_swappable(user_one.id)

    assert [s.id for s in results] == [offered.id]


def test_delete_unless_pending(db, slot_repository, user_one, make_slot):
    pending = make_slot(user_one, status=SlotStatus.SWAP_PENDING)
    free = make_slot(user_one, status=SlotStatus.BUSY)

    assert not slot_repository.delete_unless_pending(pending.id, user_one.id)
    assert slot_repository.delete_unless_pending(free.id, user_one.id)
    db.commit()

    assert slot_repository.get_by_id(pending.id) is not None
    assert slot_repository.get_by_id(free.id) is None


def test_delete_unless_pending_requires_owner(slot_repository, user_one, user_two, make_slot):
    slot = make_slot(user_one, status=SlotStatus.BUSY)

    assert not slot_repository.delete_unless_pending(slot.id, user_two.id)


def test_check_constraint_rejects_inverted_range(db, user_one):
    start = datetime(2026, 11, 5, 10, 0, tzinfo=timezone.utc)
    db.add(
        Slot(
            owner_id=user_one.id,
            title="Backwards",
            start_time=start,
            end_time=start - timedelta(hours=1),
        )
    )

    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_save_persists_full_state(db, slot_repository, user_one, make_slot):
    slot = make_slot(user_one, title="Before")
    slot.title = "After"

    slot_repository.save(slot)
    db.commit()

    assert slot_repository.get_by_id(slot.id).title == "After"
