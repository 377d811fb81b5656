"""Base class for all records.

Provides AbstractRecord, which implements:
- Attribute list and attribute specifications.
- Bulk reading of attribute values, including nested records
  (see `internal_get_attributes()`).
- Read-only access control: attributes can be read but never assigned or
  deleted directly, and unknown attributes are rejected.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from enum import IntFlag
from typing import Any, ClassVar

from abstract_record_base.exceptions import AttributeAccessError, RecordConfigurationError
from abstract_record_base.metadata import class_cached, declared_attributes

__all__ = ["AbstractRecord", "GetterOption"]


class GetterOption(IntFlag):
    """Options for bulk reading of attribute values."""

    NONE = 0
    CLONE_OBJECTS = 1 << 0
    """Shallow-copy attribute values on reading."""

    USE_DATA_TRANSFER_INTERFACE = 1 << 1
    """Read nested records through their ``to_dto()``."""


class AbstractRecord:
    """Base class for all records.

    Attributes are declared as class annotations and listed, with their
    specifications, by `attribute_specifications()`:

        class Phone(AbstractRecord):
            country: str
            code: str

            @classmethod
            def attribute_specifications(cls):
                return {
                    "country": {"validators": ["is_string"]},
                    "code": None,
                }

    Specification kinds are defined by subclasses. To inherit the
    specifications of a parent class, merge them explicitly:
    ``{**super().attribute_specifications(), "extra": {...}}``.
    """

    GETTER_DEFAULT_OPTIONS: ClassVar[GetterOption] = GetterOption.NONE

    @classmethod
    def attribute_specifications(cls) -> Mapping[str, Mapping[str, Any] | None]:
        """Return ``{attribute: {specification: value}}``.

        Empty specifications may be given as None or ``{}``.
        """
        return {}

    @classmethod
    def extract_specification_values(cls, specification: str) -> dict[str, Any]:
        """Extract one specification from `attribute_specifications()`.

        Args:
            specification: Name of the specification to extract.

        Returns:
            ``{attribute: value}`` for attributes declaring the specification.
        """
        extracted: dict[str, Any] = {}
        for attribute, specifications in cls.attribute_specifications().items():
            if specifications and specification in specifications:
                extracted[attribute] = specifications[specification]
        return extracted

    @classmethod
    def extract_attribute_list(cls) -> list[Any]:
        """Extract attribute names from `attribute_specifications()`."""
        return list(cls.attribute_specifications())

    @classmethod
    def attributes(cls) -> list[Any]:
        """Return the unverified attribute names.

        Override to list attributes without specifications. Prefer
        `attribute_list()` for the verified list.
        """
        return cls.extract_attribute_list()

    @class_cached
    def attribute_list(cls) -> list[str]:
        """Return the verified attribute names.

        Raises:
            RecordConfigurationError: If a name is not a string or is not
                annotated on the class.
        """
        attribute_list = list(cls.attributes())
        declared = cls.declared_attributes()
        for attribute in attribute_list:
            if not isinstance(attribute, str):
                raise RecordConfigurationError(
                    f"Invalid attribute {attribute!r} at {cls.__qualname__}.attributes()."
                )
            if attribute not in declared:
                raise RecordConfigurationError(
                    f"Invalid attribute {attribute!r} at {cls.__qualname__}.attributes(). "
                    "Attribute is not declared."
                )
        return attribute_list

    @classmethod
    def declared_attributes(cls) -> set[str]:
        """Return the names annotated as instance attributes."""
        return declared_attributes(cls)

    @classmethod
    def normalize_attribute_list(cls, attributes: Iterable[str] | None) -> list[str]:
        """Return verified attribute names, optionally restricted to ``attributes``.

        Unknown names are skipped; declaration order is kept.
        """
        if attributes is None:
            return cls.attribute_list()
        wanted = set(attributes)
        return [attribute for attribute in cls.attribute_list() if attribute in wanted]

    def get_attribute(self, attribute: str, options: GetterOption) -> Any:
        """Return one attribute value for bulk reading.

        Nested records are returned as their own attribute mappings.
        With CLONE_OBJECTS, other values are shallow-copied.
        """
        value = self.__dict__.get(attribute)
        if isinstance(value, AbstractRecord):
            return value.internal_get_attributes(None, options)
        if options & GetterOption.CLONE_OBJECTS and value is not None:
            return copy.copy(value)
        return value

    def internal_get_attributes(
        self,
        attributes: Iterable[str] | None = None,
        options: GetterOption | None = None,
    ) -> dict[str, Any]:
        """Return ``{attribute: value}``; unknown names are skipped."""
        if options is None:
            options = self.GETTER_DEFAULT_OPTIONS
        return {
            attribute: self.get_attribute(attribute, options)
            for attribute in self.normalize_attribute_list(attributes)
        }

    def get_attributes(self, attributes: Iterable[str] | None = None) -> dict[str, Any]:
        """Return attribute values in bulk.

        Args:
            attributes: Names to return. Defaults to all attributes.

        Returns:
            ``{attribute: value}``.
        """
        return self.internal_get_attributes(attributes)

    def is_attribute_valid(self, attribute: str) -> bool:
        """Check whether ``attribute`` may be read from this record."""
        return attribute in self.attribute_list()

    def __getattr__(self, attribute: str) -> Any:
        # Only called when normal lookup fails.
        if attribute.startswith("__"):
            raise AttributeError(attribute)
        if attribute in type(self).attribute_list():
            raise AttributeAccessError(
                f"Attribute is not set: {type(self).__qualname__}.{attribute}"
            )
        raise AttributeAccessError(f"Undefined attribute: {type(self).__qualname__}.{attribute}")

    def __setattr__(self, attribute: str, value: Any) -> None:
        self._deny_write(attribute)

    def __delattr__(self, attribute: str) -> None:
        self._deny_write(attribute)

    def _deny_write(self, attribute: str) -> None:
        if attribute in self.attribute_list():
            raise AttributeAccessError(
                f"Direct access to attribute is denied: {type(self).__qualname__}.{attribute}"
            )
        raise AttributeAccessError(f"Undefined attribute: {type(self).__qualname__}.{attribute}")
