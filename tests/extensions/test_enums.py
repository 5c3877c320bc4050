"""Tests for enum description helpers."""

from __future__ import annotations

import enum

from webapi_helper.extensions.enums import DescriptionEnum, enum_options, get_description, parse_enum


class OrderStatus(DescriptionEnum):
    PENDING = (0, "Waiting for payment")
    PAID = (1, "Paid")
    CANCELLED = (2,)


class Color(enum.Enum):
    RED = "r"
    GREEN = "g"


class TestDescriptionEnum:
    def test_value_and_description(self) -> None:
        assert OrderStatus.PAID.value == 1
        assert OrderStatus.PAID.description == "Paid"
        assert OrderStatus(0) is OrderStatus.PENDING

    def test_get_description_falls_back_to_name(self) -> None:
        assert get_description(OrderStatus.PENDING) == "Waiting for payment"
        assert get_description(OrderStatus.CANCELLED) == "CANCELLED"
        assert get_description(Color.RED) == "RED"


class TestParseEnum:
    def test_by_value(self) -> None:
        assert parse_enum(OrderStatus, 1) is OrderStatus.PAID
        assert parse_enum(Color, "g") is Color.GREEN

    def test_by_name_case_insensitive(self) -> None:
        assert parse_enum(OrderStatus, "paid") is OrderStatus.PAID
        assert parse_enum(Color, " Red ") is Color.RED

    def test_member_passthrough(self) -> None:
        assert parse_enum(Color, Color.RED) is Color.RED

    def test_default(self) -> None:
        assert parse_enum(Color, "blue") is None
        assert parse_enum(Color, "blue", Color.RED) is Color.RED


class TestOptions:
    def test_enum_options(self) -> None:
        assert enum_options(OrderStatus) == [
            {"value": 0, "name": "PENDING", "description": "Waiting for payment"},
            {"value": 1, "name": "PAID", "description": "Paid"},
            {"value": 2, "name": "CANCELLED", "description": "CANCELLED"},
        ]
