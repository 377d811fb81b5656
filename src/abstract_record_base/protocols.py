"""Protocols for type checking.

DataTransferInterface is the capability nested records must provide;
AttributeValidator describes the validator call signature.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from abstract_record_base.dto import DataTransferObject
    from abstract_record_base.results import OperationResult


@runtime_checkable
class DataTransferInterface(Protocol):
    """Protocol for records that can be built from and converted to DTOs.

    Every class used as the ``class`` specification of an attribute must
    implement it.
    """

    @classmethod
    def create_from_dto(
        cls,
        values: Mapping[str, Any] | DataTransferObject,
        record_path: str,
        result: OperationResult,
    ) -> Any:
        """Create a record, or return None if validation fails."""
        ...

    def to_dto(self, attributes: list[str] | None = None) -> Any:
        """Convert to a DTO or to a plain mapping."""
        ...


class AttributeValidator(Protocol):
    """Call signature of attribute validators.

    The validator may normalise ``values[attribute]`` in place and returns
    whether the value is valid.
    """

    def __call__(
        self,
        attribute: str,
        path: str,
        values: dict[str, Any],
        result: OperationResult | None = None,
    ) -> bool: ...
