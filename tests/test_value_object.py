"""Tests for ValueObject."""

from __future__ import annotations

import pytest

from abstract_record_base import AttributeAccessError, ErrorCode, OperationResult

from .conftest import Point


class TestValueObject:
    """Tests for value object creation."""

    def test_omitted_attributes_are_validated_as_none(self, result: OperationResult) -> None:
        """Test that a missing required value is reported."""
        assert Point.create_from_dto({}, "", result) is None
        assert result.get_errors() == {ErrorCode.VALIDATION: {"x": ["The {x} must be an integer."]}}

    def test_omitted_optional_attribute_is_none(self, result: OperationResult) -> None:
        point = Point.create_from_dto({"x": 1}, "", result)

        assert point is not None
        assert point.y is None

    def test_value_object_has_no_setter(self, result: OperationResult) -> None:
        point = Point.create_from_dto({"x": 1}, "", result)

        assert not hasattr(point, "set_attributes")
        with pytest.raises(AttributeAccessError):
            point.x = 2

    def test_equal_input_gives_equal_attributes(self, result: OperationResult) -> None:
        first = Point.create_from_dto({"x": "1", "y": 2}, "", result)
        second = Point.create_from_dto({"x": 1, "y": "2"}, "", result)

        assert first.get_attributes() == second.get_attributes()
