"""Data Transfer Objects.

Provides DataTransferObject, a frozen Pydantic model used as the plain
structural counterpart of a record, and PartialDTO, which only exposes
the attributes it was created with.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from abstract_record_base.exceptions import AttributeAccessError

__all__ = ["DataTransferObject", "PartialDTO"]


class DataTransferObject(BaseModel):
    """Base class for Data Transfer Objects (DTO).

    Attributes are the model fields. Nested DTO fields accept either DTO
    instances or plain mappings, so a whole tree can be created from one
    mapping with `create_from_array()` and flattened back with
    `dto_to_array()`.

    Example:
        class PhoneDTO(DataTransferObject):
            country: str
            code: str
            number: str

        class UserDTO(DataTransferObject):
            id: str
            phone: PhoneDTO | None

        dto = UserDTO.create_from_array(
            {"id": "1", "phone": {"country": "+7", "code": "800", "number": "1234567"}}
        )
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    @classmethod
    def attribute_list(cls) -> list[str]:
        """Return the DTO attribute names."""
        return list(cls.model_fields)

    @classmethod
    def create_from_array(cls, values: Mapping[str, Any]) -> DataTransferObject:
        """Create a DTO from a mapping.

        Keys that are not DTO attributes are skipped.
        """
        known = set(cls.attribute_list())
        return cls(**{key: value for key, value in values.items() if key in known})

    @staticmethod
    def dto_to_array(dto: Mapping[str, Any] | DataTransferObject) -> dict[str, Any]:
        """Flatten a DTO (including nested DTOs) into a plain dict.

        Mappings are returned as a dict copy.
        """
        if isinstance(dto, DataTransferObject):
            return dto.get_attributes()
        return dict(dto)

    def internal_get_attributes(self, attributes: Iterable[str] | None = None) -> dict[str, Any]:
        """Return ``{attribute: value}`` with nested DTOs flattened.

        Each nested DTO is flattened through its own `get_attributes()`,
        so a nested PartialDTO contributes only its work set.
        """
        names = self._attribute_names()
        if attributes is not None:
            wanted = set(attributes)
            names = [name for name in names if name in wanted]
        return {name: _flatten(getattr(self, name)) for name in names}

    def _attribute_names(self) -> list[str]:
        return self.attribute_list()

    def get_attribute(self, attribute: str) -> Any:
        """Return one attribute value as stored on the DTO."""
        if attribute not in self.attribute_list():
            raise AttributeAccessError(f"Undefined attribute: {type(self).__qualname__}.{attribute}")
        return getattr(self, attribute)

    def get_attributes(self, attributes: Iterable[str] | None = None) -> dict[str, Any]:
        """Return attribute values; unknown names are skipped."""
        return self.internal_get_attributes(attributes)


class PartialDTO(DataTransferObject):
    """DTO that can be created with only part of its attributes.

    The attributes passed on creation form the work set (Pydantic's
    ``model_fields_set``); only they are returned by `get_attributes()`.
    Attributes that may be omitted must declare a default.

    `get_attribute()` denies access to attributes outside the work set.
    Plain attribute access (``dto.name``) is Pydantic's and still reads
    the declared default.

    Example:
        class UserDTO(PartialDTO):
            id: str | None = None
            name: str | None = None

        dto = UserDTO.create_from_array({"name": "Guest"})
        dto.get_attributes()  # {"name": "Guest"}
        dto.get_attribute("id")  # raises AttributeAccessError
    """

    @property
    def work_attributes(self) -> list[str]:
        """Return the attributes that were set, in declaration order."""
        return [name for name in self.attribute_list() if name in self.model_fields_set]

    def is_attribute_set(self, attribute: str) -> bool:
        """Check whether ``attribute`` belongs to the work set."""
        return attribute in self.model_fields_set

    def _attribute_names(self) -> list[str]:
        return self.work_attributes

    def get_attribute(self, attribute: str) -> Any:
        if attribute in self.attribute_list() and not self.is_attribute_set(attribute):
            raise AttributeAccessError(
                f"Access to unset attribute in partial-set mode is denied: "
                f"{type(self).__qualname__}.{attribute}"
            )
        return super().get_attribute(attribute)


def _flatten(value: Any) -> Any:
    if isinstance(value, DataTransferObject):
        return value.get_attributes()
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return {key: _flatten(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(_flatten(item) for item in value)
    return value
