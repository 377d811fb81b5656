"""Base class for value objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from abstract_record_base.results import OperationResult
from abstract_record_base.valid_record import ValidRecord

__all__ = ["ValueObject"]

ValueObjectT = TypeVar("ValueObjectT", bound="ValueObject")


class ValueObject(ValidRecord):
    """Immutable record whose omitted attributes are validated as None.

    Every attribute always goes through its validator chain on creation,
    so a missing required value is reported rather than left unset.
    """

    @classmethod
    def internal_create(
        cls: type[ValueObjectT],
        values: Mapping[str, Any],
        record_path: str,
        result: OperationResult,
    ) -> ValueObjectT | None:
        return super().internal_create(
            {**dict.fromkeys(cls.attribute_list()), **values}, record_path, result
        )
