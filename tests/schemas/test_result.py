"""Tests for ApiResult, PagedResult and the entity read schemas."""

from __future__ import annotations

import uuid

import pytest
from pydantic import ValidationError

from webapi_helper.schemas import ApiResult, AuditEntityRead, EntityRead, PagedResult, Pagination, ResultCode
from tests.conftest import Article


class TestApiResult:
    def test_ok(self) -> None:
        result = ApiResult.ok({"id": 1})
        assert result.success is True
        assert result.data == {"id": 1}
        assert result.code == 0
        assert result.message == "success"

    def test_ok_without_data(self) -> None:
        result = ApiResult.ok(message="done")
        assert result.data is None
        assert result.message == "done"

    def test_fail(self) -> None:
        result = ApiResult.fail("bad input", code=ResultCode.VALIDATION_ERROR, data=["name"])
        assert result.success is False
        assert result.code == 422
        assert result.data == ["name"]

    def test_fail_default_code(self) -> None:
        assert ApiResult.fail("nope").code == ResultCode.FAILED

    def test_json_shape(self) -> None:
        dumped = ApiResult.fail("x", code=7).model_dump(mode="json")
        assert dumped == {"success": False, "data": None, "message": "x", "code": 7}

    def test_parametrized_validates_payload(self) -> None:
        assert ApiResult[int].ok(5).data == 5
        with pytest.raises(ValidationError):
            ApiResult[int].ok("not a number")


class TestPagedResult:
    @pytest.mark.parametrize(("total", "size", "pages"), [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2)])
    def test_total_pages(self, total: int, size: int, pages: int) -> None:
        assert PagedResult(items=[], total=total, page_index=1, page_size=size).total_pages == pages

    def test_total_pages_serialized(self) -> None:
        dumped = PagedResult(items=[1, 2], total=5, page_index=1, page_size=2).model_dump()
        assert dumped["total_pages"] == 3

    def test_rejects_zero_page_size(self) -> None:
        with pytest.raises(ValidationError):
            PagedResult(items=[], total=0, page_index=1, page_size=0)


class TestPagination:
    def test_offset(self) -> None:
        assert Pagination(page_index=3, page_size=20).offset == 40

    def test_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Pagination(page_index=0)
        with pytest.raises(ValidationError):
            Pagination(page_size=1001)


class TestEntityRead:
    def test_from_entity(self) -> None:
        article = Article(id=uuid.uuid4(), title="t", created_at=100, created_by="amy")
        read = AuditEntityRead.model_validate(article)
        assert read.id == article.id
        assert read.created_at == 100
        assert read.created_by == "amy"
        assert read.deleted_at is None

    def test_base_read_ignores_audit_fields(self) -> None:
        article = Article(id=uuid.uuid4(), title="t", created_at=1, created_by="amy")
        assert "created_by" not in EntityRead.model_validate(article).model_dump()
