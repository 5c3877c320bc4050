"""Shared pytest fixtures and sample entities for webapi_helper tests."""

from __future__ import annotations

from typing import AsyncIterator, Optional

import pytest
from sqlalchemy import Integer, String
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from webapi_helper.core.security import JwtHelper, JwtOptions
from webapi_helper.db import (
    AuditEntity,
    BaseEntity,
    DbOptions,
    DbType,
    create_all,
    dispose_database,
    get_session_maker,
    init_database,
)


class Note(BaseEntity):
    __tablename__ = "test_notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    rank: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Article(AuditEntity):
    __tablename__ = "test_articles"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)


@pytest.fixture
def sqlite_options() -> DbOptions:
    return DbOptions(connection_string=":memory:", db_type=DbType.SQLITE)


@pytest.fixture
async def session(sqlite_options: DbOptions) -> AsyncIterator[AsyncSession]:
    """AsyncSession on a fresh in-memory SQLite database with all tables created."""
    init_database(sqlite_options)
    await create_all()
    try:
        async with get_session_maker()() as s:
            yield s
    finally:
        await dispose_database()


@pytest.fixture
def jwt_options() -> JwtOptions:
    return JwtOptions(
        secret_key="test-secret-key-0123456789",
        issuer="webapi-helper-tests",
        audience="tests",
        expire_minutes=30,
    )


@pytest.fixture
def jwt_helper(jwt_options: JwtOptions) -> JwtHelper:
    return JwtHelper(jwt_options)
