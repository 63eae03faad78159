# tests/core/test_ulid_helper.py
from slotswap.core.ulid_helper import generate_ulid, is_valid_ulid, parse_ulid


def test_generate_ulid_is_valid_and_unique():
    first = generate_ulid()
    second = generate_ulid()

    assert len(first) == 26
    assert first != second
    assert is_valid_ulid(first)


def test_parse_ulid_rejects_garbage():
    assert parse_ulid("not-a-ulid") is None
    assert not is_valid_ulid("")
