from __future__ import annotations

import enum
from typing import Any, Dict, List, Optional, Type, TypeVar

E = TypeVar("E", bound=enum.Enum)


class DescriptionEnum(enum.Enum):
    """
    Enum whose members carry a human readable description.

    Usage:
        class OrderStatus(DescriptionEnum):
            PENDING = (0, "Waiting for payment")
            PAID = (1, "Paid")

        OrderStatus.PAID.value        # 1
        OrderStatus.PAID.description  # "Paid"
    """

    def __new__(cls, value: Any, description: str = ""):
        obj = object.__new__(cls)
        obj._value_ = value
        obj.description = description
        return obj


# PUBLIC_INTERFACE
def get_description(member: enum.Enum) -> str:
    """Return the member's description, falling back to its name."""
    return getattr(member, "description", None) or member.name


# PUBLIC_INTERFACE
def parse_enum(enum_cls: Type[E], value: Any, default: Optional[E] = None) -> Optional[E]:
    """
    Resolve value to a member of enum_cls by value, or by name ignoring case.

    Returns default when nothing matches.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        pass
    if isinstance(value, str):
        wanted = value.strip().lower()
        for name, member in enum_cls.__members__.items():
            if name.lower() == wanted:
                return member
    return default


# PUBLIC_INTERFACE
def enum_options(enum_cls: Type[enum.Enum]) -> List[Dict[str, Any]]:
    """List members as {value, name, description} dicts, e.g. for select boxes."""
    return [
        {"value": m.value, "name": m.name, "description": get_description(m)}
        for m in enum_cls
    ]
