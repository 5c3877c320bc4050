from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from webapi_helper.core.exceptions import UnauthorizedException
from webapi_helper.core.security import JwtHelper, get_jwt_options

logger = logging.getLogger(__name__)

# OAuth2 bearer (used by docs); login endpoint path referenced here
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


# PUBLIC_INTERFACE
def get_jwt_helper() -> JwtHelper:
    """Return a JwtHelper built from the environment. Override in apps/tests as needed."""
    return JwtHelper(get_jwt_options())


# PUBLIC_INTERFACE
async def get_current_claims(
    token: Optional[str] = Depends(oauth2_scheme),
    helper: JwtHelper = Depends(get_jwt_helper),
) -> Dict[str, Any]:
    """
    Validate the Authorization bearer token and return its claims.

    Raises:
        UnauthorizedException: token missing, expired or invalid.
    """
    if not token:
        raise UnauthorizedException("Missing bearer token")
    try:
        return helper.decode_token(token)
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise UnauthorizedException("Invalid token") from exc


# PUBLIC_INTERFACE
async def get_current_subject(claims: Dict[str, Any] = Depends(get_current_claims)) -> str:
    """Return the 'sub' claim of the current token."""
    subject = claims.get("sub")
    if not subject:
        raise UnauthorizedException("Invalid token")
    return str(subject)
