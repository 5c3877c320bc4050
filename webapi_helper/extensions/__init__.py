"""
Small helpers: Unix timestamp conversion, fire-and-forget tasks and enum
descriptions.
"""

from .datetimes import (  # noqa: F401
    from_timestamp,
    from_timestamp_ms,
    now_timestamp,
    now_timestamp_ms,
    to_timestamp,
    to_timestamp_ms,
)
from .enums import DescriptionEnum, enum_options, get_description, parse_enum  # noqa: F401
from .tasks import fire_and_forget, safe_fire_and_forget  # noqa: F401
