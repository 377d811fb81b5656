"""Tests for DataTransferObject and PartialDTO."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from abstract_record_base import AttributeAccessError, DataTransferObject, PartialDTO

from .conftest import PointDTO

# =============================================================================
# Test DTOs
# =============================================================================


class LineDTO(DataTransferObject):
    start: PointDTO
    end: PointDTO | None = None
    label: str = ""


class ProfileDTO(PartialDTO):
    name: str | None = None
    age: int | None = None
    home: PointDTO | None = None


class AccountDTO(DataTransferObject):
    login: str
    profile: ProfileDTO
    homes: list[PointDTO] = []


# =============================================================================
# DataTransferObject Tests
# =============================================================================


class TestDataTransferObject:
    """Tests for the DTO base class."""

    def test_attribute_list(self) -> None:
        assert LineDTO.attribute_list() == ["start", "end", "label"]

    def test_create_from_array_skips_unknown_keys(self) -> None:
        dto = PointDTO.create_from_array({"x": 1, "y": 2, "z": 3})

        assert dto == PointDTO(x=1, y=2)

    def test_nested_dto_from_mapping(self) -> None:
        """Test that nested DTO fields accept plain mappings."""
        dto = LineDTO.create_from_array({"start": {"x": 1}, "end": PointDTO(x=2, y=3)})

        assert dto.start == PointDTO(x=1)
        assert dto.end == PointDTO(x=2, y=3)

    def test_get_attributes_flattens_nested(self) -> None:
        dto = LineDTO.create_from_array({"start": {"x": 1}, "label": "a"})

        assert dto.get_attributes() == {
            "start": {"x": 1, "y": None},
            "end": None,
            "label": "a",
        }

    def test_get_attributes_subset(self) -> None:
        dto = LineDTO.create_from_array({"start": {"x": 1}, "label": "a"})

        assert dto.get_attributes(["label", "unknown"]) == {"label": "a"}

    def test_dto_is_frozen(self) -> None:
        """Test that DTO attributes cannot be reassigned."""
        dto = PointDTO(x=1)

        with pytest.raises(ValidationError):
            dto.x = 2  # type: ignore[misc]

    def test_dto_values_are_not_validated_by_records(self) -> None:
        """Test that a DTO keeps raw values as given."""
        dto = LineDTO.create_from_array({"start": {"x": 1}, "label": "   222   "})

        assert dto.label == "   222   "

    def test_dto_to_array(self) -> None:
        dto = PointDTO(x=1)

        assert DataTransferObject.dto_to_array(dto) == {"x": 1, "y": None}
        assert DataTransferObject.dto_to_array({"x": 1}) == {"x": 1}

    def test_nested_partial_dto_keeps_work_set(self) -> None:
        """Test that a nested PartialDTO is flattened to its work set only."""
        dto = AccountDTO.create_from_array({"login": "ann", "profile": {"name": "Ann"}})

        assert DataTransferObject.dto_to_array(dto) == {
            "login": "ann",
            "profile": {"name": "Ann"},
            "homes": [],
        }

    def test_dtos_in_lists_are_flattened(self) -> None:
        dto = AccountDTO.create_from_array(
            {"login": "ann", "profile": {}, "homes": [{"x": 1}, PointDTO(x=2, y=3)]}
        )

        assert dto.get_attributes(["profile", "homes"]) == {
            "profile": {},
            "homes": [{"x": 1, "y": None}, {"x": 2, "y": 3}],
        }

    def test_get_attribute(self) -> None:
        dto = PointDTO(x=1)

        assert dto.get_attribute("y") is None
        with pytest.raises(AttributeAccessError, match=r"Undefined attribute: PointDTO\.z"):
            dto.get_attribute("z")


# =============================================================================
# PartialDTO Tests
# =============================================================================


class TestPartialDTO:
    """Tests for DTOs created with part of their attributes."""

    def test_work_attributes(self) -> None:
        dto = ProfileDTO.create_from_array({"age": 30, "name": "Ann"})

        assert dto.work_attributes == ["name", "age"]
        assert dto.is_attribute_set("age")
        assert not dto.is_attribute_set("home")

    def test_unset_attributes_read_as_default(self) -> None:
        dto = ProfileDTO.create_from_array({"name": "Ann"})

        assert dto.age is None

    def test_get_attribute_outside_work_set_is_denied(self) -> None:
        dto = ProfileDTO.create_from_array({"name": "Ann"})

        assert dto.get_attribute("name") == "Ann"
        with pytest.raises(AttributeAccessError, match=r"unset attribute .*ProfileDTO\.age"):
            dto.get_attribute("age")
        with pytest.raises(AttributeAccessError, match="Undefined attribute"):
            dto.get_attribute("unknown")

    def test_get_attributes_only_returns_work_set(self) -> None:
        dto = ProfileDTO.create_from_array({"name": "Ann"})

        assert dto.get_attributes() == {"name": "Ann"}

    def test_explicit_none_is_in_work_set(self) -> None:
        """Test that an attribute passed as None is still part of the work set."""
        dto = ProfileDTO.create_from_array({"name": None})

        assert dto.get_attributes() == {"name": None}

    def test_nested_dto_is_flattened(self) -> None:
        dto = ProfileDTO.create_from_array({"home": {"x": 1, "y": 2}})

        assert dto.get_attributes() == {"home": {"x": 1, "y": 2}}
        assert DataTransferObject.dto_to_array(dto) == {"home": {"x": 1, "y": 2}}

    def test_subset_within_work_set(self) -> None:
        dto = ProfileDTO.create_from_array({"name": "Ann", "age": 30})

        assert dto.get_attributes(["age", "home"]) == {"age": 30}


# =============================================================================
# Property-Based Tests
# =============================================================================


class TestDTOProperties:
    """Property-based tests for DTOs."""

    @given(
        fields=st.dictionaries(
            keys=st.sampled_from(["name", "age"]),
            values=st.none(),
            max_size=2,
        )
    )
    @settings(max_examples=30)
    def test_work_set_matches_given_keys(self, fields: dict[str, None]) -> None:
        """Property: the work set is exactly the keys passed on creation."""
        dto = ProfileDTO.create_from_array(fields)

        assert set(dto.get_attributes()) == set(fields)

    @given(x=st.integers(), y=st.one_of(st.none(), st.integers()))
    @settings(max_examples=50)
    def test_flatten_and_rebuild(self, x: int, y: int | None) -> None:
        """Property: a flattened DTO rebuilds an equal DTO."""
        dto = PointDTO(x=x, y=y)

        assert PointDTO.create_from_array(dto.get_attributes()) == dto
