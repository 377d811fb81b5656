"""Records with attribute validation.

Provides ValidRecord, which implements:
- Validation of new attribute values, including nested records, before a
  record is created or updated (see `validate_attribute_values()`).
- Creating or updating a record from a mapping with an all-or-nothing
  commit (see `internal_create()` and `internal_set_attributes()`).
- Creating a record from a DTO (see `create_from_dto()`).
- Converting a record, including nested records, to a DTO (see `to_dto()`).

Supported attribute specifications:
- ``class``: record class of the attribute; mappings and DTOs are turned
  into nested records automatically.
- ``validators``: ordered validator chain of the attribute.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, TypeVar

from abstract_record_base.abstract_record import AbstractRecord, GetterOption
from abstract_record_base.dto import DataTransferObject
from abstract_record_base.events import RecordEvent, RecordEventType
from abstract_record_base.exceptions import RecordConfigurationError
from abstract_record_base.metadata import class_cached, normalize_callables
from abstract_record_base.protocols import AttributeValidator, DataTransferInterface
from abstract_record_base.results import ErrorCode, OperationResult
from abstract_record_base.validators import BaseValidators

__all__ = ["ValidRecord"]

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound="ValidRecord")


class ValidRecord(AbstractRecord):
    """Record with attribute validation.

    Instances are created only through factory class methods and are
    either fully valid or not created at all. Updating goes through the
    same pipeline: prepare, validate, then assign every value at once.

    Example:
        class FullName(ValueObject):
            dto_class = FullNameDTO

            first: str
            last: str | None

            @classmethod
            def attribute_specifications(cls):
                return {
                    "first": {"validators": ["is_string", "trim", "not_empty"]},
                    "last": {"validators": ["nullable_string", "trim", "empty_to_null"]},
                }

        result = OperationResult()
        name = FullName.create_from_dto({"first": " Ann "}, "", result)
        name.first  # "Ann"
    """

    dto_class: ClassVar[type[DataTransferObject] | None] = None
    """DTO class returned by `to_dto()`; None returns a plain dict."""

    GETTER_DEFAULT_OPTIONS: ClassVar[GetterOption] = (
        AbstractRecord.GETTER_DEFAULT_OPTIONS
        | GetterOption.USE_DATA_TRANSFER_INTERFACE
        | GetterOption.CLONE_OBJECTS
    )

    STRICT_VALIDATOR_NAMES: ClassVar[bool] = True
    """Whether inline validators must be given a string name."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(
            f"{type(self).__qualname__} records are created through factory methods, "
            "e.g. create_from_dto()."
        )

    @classmethod
    def _new(cls: type[RecordT], record_path: str) -> RecordT:
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_record_path", record_path)
        return instance

    @property
    def record_path(self) -> str:
        """Path of this record in its containment tree ('' for a root record)."""
        return self.__dict__["_record_path"]

    @classmethod
    def internal_create(
        cls: type[RecordT],
        values: Mapping[str, Any],
        record_path: str,
        result: OperationResult,
    ) -> RecordT | None:
        """Create a record from a mapping of attribute values.

        Args:
            values: ``{attribute: value}``; unknown keys are skipped.
            record_path: Path of the new record, used to qualify error keys.
            result: Error sink.

        Returns:
            The new record, or None if any value is invalid.
        """
        instance = cls._new(record_path)
        if instance.internal_set_attributes(values, result):
            return instance
        return None

    @classmethod
    def create_from_dto(
        cls: type[RecordT],
        values: Mapping[str, Any] | DataTransferObject,
        record_path: str,
        result: OperationResult,
    ) -> RecordT | None:
        """Create a record from a DTO or a mapping.

        DTOs are flattened to plain mappings (nested DTOs included) first.

        Returns:
            The new record, or None if any value is invalid.
        """
        return cls.internal_create(DataTransferObject.dto_to_array(values), record_path, result)

    def to_dto(self, attributes: Iterable[str] | None = None) -> DataTransferObject | dict[str, Any]:
        """Convert the record to its DTO, or to a dict if `dto_class` is unset.

        Args:
            attributes: Names to include. Defaults to all attributes.
        """
        values = self.internal_get_attributes(attributes)
        if self.dto_class is not None:
            return self.dto_class.create_from_array(values)
        return values

    @classmethod
    def classes(cls) -> dict[str, Any]:
        """Return ``{attribute: record_class}`` from the ``class`` specifications."""
        return cls.extract_specification_values("class")

    @class_cached
    def attribute_classes(cls) -> dict[str, type[DataTransferInterface]]:
        """Return the verified attribute classes.

        Raises:
            RecordConfigurationError: If a class does not implement
                DataTransferInterface.
        """
        attribute_classes = cls.classes()
        for attribute, attribute_class in attribute_classes.items():
            if not (
                isinstance(attribute_class, type)
                and issubclass(attribute_class, DataTransferInterface)
            ):
                raise RecordConfigurationError(
                    f"Invalid class at {cls.__qualname__}.{attribute}. "
                    "The class must implement DataTransferInterface."
                )
        return attribute_classes

    @classmethod
    def validators_map(cls) -> Mapping[str, AttributeValidator]:
        """Return the named validators available to specifications."""
        return BaseValidators.callable_map()

    @class_cached
    def attribute_validators_map(cls) -> dict[str, AttributeValidator]:
        """Return the verified validators map.

        Raises:
            RecordConfigurationError: If a name is not a string or a
                validator is not callable.
        """
        validators_map = dict(cls.validators_map())
        for name, validator in validators_map.items():
            if not isinstance(name, str):
                raise RecordConfigurationError(
                    f"Invalid validator name {name!r} at {cls.__qualname__}.validators_map()."
                )
            if not callable(validator):
                raise RecordConfigurationError(
                    f"Invalid validator {name!r} at {cls.__qualname__}.validators_map(). "
                    "The validator must be callable."
                )
        return validators_map

    @classmethod
    def validators(cls) -> dict[str, Any]:
        """Return the raw ``validators`` specifications."""
        return cls.extract_specification_values("validators")

    @class_cached
    def attribute_validators(cls) -> dict[str, dict[str, AttributeValidator]]:
        """Return ``{attribute: {validator_name: validator}}``.

        Attributes without validators are omitted.

        Raises:
            RecordConfigurationError: If a validator reference cannot be
                resolved or an inline validator has no name.
        """
        validators_map = cls.attribute_validators_map()
        attribute_validators: dict[str, dict[str, AttributeValidator]] = {}
        for attribute, references in cls.validators().items():
            resolved = normalize_callables(
                cls,
                references,
                callable_only=True,
                strict_names=cls.STRICT_VALIDATOR_NAMES,
                spec_name="validators",
                attribute=attribute,
                callable_map=validators_map,
            )
            if resolved:
                attribute_validators[attribute] = resolved
        return attribute_validators

    def get_attribute(self, attribute: str, options: GetterOption) -> Any:
        value = self.__dict__.get(attribute)
        if options & GetterOption.USE_DATA_TRANSFER_INTERFACE and isinstance(
            value, DataTransferInterface
        ):
            return value.to_dto()
        return super().get_attribute(attribute, options)

    def prepare_attribute_value(
        self, attribute: str, values: dict[str, Any], result: OperationResult
    ) -> bool:
        """Turn mappings and DTOs into nested records for ``class`` attributes.

        Returns:
            False if the nested record could not be created or the value
            has an invalid type.
        """
        attribute_class = self.attribute_classes().get(attribute)
        value = values[attribute]
        if attribute_class is None or value is None or isinstance(value, attribute_class):
            return True

        path = result.full_name(attribute, self.record_path)
        if isinstance(value, (Mapping, DataTransferObject)):
            values[attribute] = attribute_class.create_from_dto(value, path, result)
            return values[attribute] is not None

        result.add_error(
            ErrorCode.VALIDATION,
            path,
            f"The {result.full_name(attribute, self.record_path, True)} type is invalid.",
        )
        values[attribute] = None
        return False

    def prepare_attribute_values(self, values: dict[str, Any], result: OperationResult) -> bool:
        """Prepare every value of the batch; failed attributes are removed."""
        ok = True
        for attribute in list(values):
            if not self.prepare_attribute_value(attribute, values, result):
                ok = False
                del values[attribute]
        return ok

    def validate_attribute_values(self, values: dict[str, Any], result: OperationResult) -> bool:
        """Run each attribute's validator chain over the batch.

        A chain stops at its first failing validator and the attribute is
        removed from the batch; other attributes are still validated.
        """
        ok = True
        for attribute, validators in self.attribute_validators().items():
            if attribute not in values:
                continue
            for validator in validators.values():
                if not validator(attribute, self.record_path, values, result):
                    ok = False
                    del values[attribute]
                    break
        return ok

    def internal_set_attributes(self, values: Mapping[str, Any], result: OperationResult) -> bool:
        """Validate a batch of new values and assign them all, or none.

        Args:
            values: ``{attribute: value}``; unknown keys are skipped.
            result: Error sink.

        Returns:
            True if every value was valid and has been assigned.
        """
        known = set(self.attribute_list())
        batch = {attribute: value for attribute, value in values.items() if attribute in known}

        result.notify(
            RecordEvent(
                event_type=RecordEventType.VALIDATION_STARTED,
                source=self,
                data={"record_path": self.record_path, "attributes": list(batch)},
            )
        )

        ok = self.prepare_attribute_values(batch, result)
        ok = self.validate_attribute_values(batch, result) and ok

        result.notify(
            RecordEvent(
                event_type=RecordEventType.VALIDATION_COMPLETED,
                source=self,
                data={"record_path": self.record_path, "is_valid": ok},
            )
        )

        if not ok:
            logger.debug(
                "Rejected %s attributes at %r", type(self).__qualname__, self.record_path
            )
            return False

        for attribute, value in batch.items():
            object.__setattr__(self, attribute, value)

        result.notify(
            RecordEvent(
                event_type=RecordEventType.ATTRIBUTES_ASSIGNED,
                source=self,
                data={"record_path": self.record_path, "attributes": list(batch)},
            )
        )
        return True

    def __repr__(self) -> str:
        values = ", ".join(
            f"{attribute}={self.__dict__[attribute]!r}"
            for attribute in self.attribute_list()
            if attribute in self.__dict__
        )
        return f"{type(self).__qualname__}({values})"
