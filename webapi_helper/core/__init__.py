"""
Core web utilities: settings, logging, JWT and password helpers, encryption,
exceptions and the global exception handlers.
"""

from .exceptions import (  # noqa: F401
    BusinessException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
)
from .handlers import register_exception_handlers  # noqa: F401
from .security import JwtHelper, JwtOptions  # noqa: F401
