"""
Safe enum helpers for SQLAlchemy.

Status columns persist enum VALUES (``"SWAP_PENDING"``), never Python
member names, so raw SQL conditional updates and ORM reads agree on the
stored text.

Usage:
    from slotswap.models.base_enum import create_safe_enum

    class Slot(Base):
        status = Column(
            create_safe_enum(SlotStatus, "slot_status"),
            nullable=False,
            default=SlotStatus.BUSY,
        )

Note:
    All Python enums for database storage should inherit from (str, Enum)
    and define values explicitly.
"""

from enum import Enum
from typing import Sequence, Type

from sqlalchemy import Enum as SAEnum


def create_safe_enum(
    enum_class: Type[Enum],
    name: str,
    *,
    native_enum: bool = False,
    validate_strings: bool = True,
) -> SAEnum:
    """
    Create a SQLAlchemy Enum that stores enum values (not names).

    Args:
        enum_class: The Python Enum class to use
        name: Type / check-constraint name
        native_enum: Whether to use a backend-native enum type. Defaults to
                     False so the same column works on SQLite and PostgreSQL.
        validate_strings: Whether to validate string values (default True)

    Returns:
        SQLAlchemy Enum column type configured for value-based storage
    """
    verify_enum_consistency(enum_class)
    return SAEnum(
        enum_class,
        name=name,
        native_enum=native_enum,
        create_constraint=True,
        validate_strings=validate_strings,
        values_callable=_get_enum_values,
        length=max(len(value) for value in _get_enum_values(enum_class)),
    )


def _get_enum_values(enum_class: Type[Enum]) -> Sequence[str]:
    return [member.value for member in enum_class]


def verify_enum_consistency(enum_class: Type[Enum]) -> None:
    """
    Verify that an enum is safe for database storage.

    Raises:
        TypeError: If the enum does not inherit from str or a value is not a string
    """
    if not issubclass(enum_class, str):
        raise TypeError(f"{enum_class.__name__} must inherit from (str, Enum)")
    for member in enum_class:
        if not isinstance(member.value, str) or not member.value:
            raise TypeError(f"{enum_class.__name__}.{member.name} must have a non-empty str value")
