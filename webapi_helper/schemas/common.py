from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class IDModel(BaseModel):
    """Base schema exposing a UUID primary key."""
    id: UUID = Field(..., description="Unique identifier")


class Timestamps(BaseModel):
    """Common timestamp fields as Unix epoch seconds."""
    created_at: int = Field(..., description="Creation time (epoch seconds)")
    updated_at: Optional[int] = Field(default=None, description="Last update time (epoch seconds)")
    deleted_at: Optional[int] = Field(default=None, description="Soft-delete time (epoch seconds)")


# PUBLIC_INTERFACE
class EntityRead(IDModel, Timestamps):
    """Read model for BaseEntity subclasses."""
    model_config = ConfigDict(from_attributes=True)


# PUBLIC_INTERFACE
class AuditEntityRead(EntityRead):
    """Read model for AuditEntity subclasses."""
    created_by: Optional[str] = Field(default=None)
    updated_by: Optional[str] = Field(default=None)
