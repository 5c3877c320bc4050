from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from fastapi import status

from webapi_helper.schemas.result import ResultCode

T = TypeVar("T")


class BusinessException(Exception, Generic[T]):
    """
    Application error carrying a result code and a typed payload.

    The global exception handler turns it into ApiResult.fail(message, code, data)
    returned with status_code.
    """

    default_code: int = ResultCode.FAILED
    default_status: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        data: Optional[T] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = int(code if code is not None else self.default_code)
        self.data = data
        self.status_code = status_code or self.default_status

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r})"


class NotFoundException(BusinessException[Any]):
    """Requested resource does not exist."""
    default_code = ResultCode.NOT_FOUND
    default_status = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Any = None, **kwargs: Any) -> None:
        self.resource = resource
        self.resource_id = resource_id
        message = resource
        if resource_id is not None:
            message += f" with id '{resource_id}'"
        super().__init__(message + " not found", **kwargs)


class UnauthorizedException(BusinessException[Any]):
    """Missing or invalid credentials."""
    default_code = ResultCode.UNAUTHORIZED
    default_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ForbiddenException(BusinessException[Any]):
    """Authenticated caller lacks permission."""
    default_code = ResultCode.FORBIDDEN
    default_status = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
