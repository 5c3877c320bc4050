"""
Repository layer for data access.

BaseRepository wraps an AsyncSession with generic CRUD, paging and soft-delete
helpers; applications subclass it per entity and add their own queries.
"""

from .base import BaseRepository  # noqa: F401
