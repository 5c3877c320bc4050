"""
Public Pydantic schemas: the ApiResult envelope, paging models and entity
read models.
"""

from .common import AuditEntityRead, EntityRead  # noqa: F401
from .result import ApiResult, PagedResult, Pagination, ResultCode  # noqa: F401
