"""Person name value object."""

from __future__ import annotations

from typing import Any

from abstract_record_base.dto import DataTransferObject
from abstract_record_base.results import OperationResult
from abstract_record_base.value_object import ValueObject

__all__ = ["FullName", "FullNameDTO"]


class FullNameDTO(DataTransferObject):
    first: str
    middle: str | None
    last: str | None


class FullName(ValueObject):
    dto_class = FullNameDTO

    first: str
    middle: str | None
    last: str | None

    @classmethod
    def attribute_specifications(cls) -> dict[str, dict[str, Any]]:
        return {
            "first": {"validators": ["is_string", "trim", "not_empty"]},
            "middle": {"validators": ["nullable_string", "trim", "empty_to_null"]},
            "last": {"validators": ["nullable_string", "trim", "empty_to_null"]},
        }

    @classmethod
    def create(
        cls,
        first: str,
        middle: str | None,
        last: str | None,
        record_path: str,
        result: OperationResult,
    ) -> FullName | None:
        return cls.internal_create(
            {"first": first, "middle": middle, "last": last}, record_path, result
        )
