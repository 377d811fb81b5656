"""Base class for entity states.

Provides EntityState, a mutable ValidRecord with defaults, getters,
setters, generators and attribute options.

Supported attribute specifications, in addition to ``class`` and
``validators``:
- ``default``: default value used on creation. Either a literal, a
  zero-argument callable, or the name of a static/class method; callables
  are invoked on every creation (see `attribute_defaults()`).
- ``getter``: ``getter(attribute, value, options)`` applied when reading
  attributes in bulk (`get_attributes()`, `to_dto()`).
- ``setter``: ``setter(attribute, path, values, result) -> bool`` used in
  place of the default preparation of a new value.
- ``generator``: ``generator(value_or_none) -> value`` called on every
  update, even when the attribute is not in the batch.
- ``options``: AttributeOption flags (READONLY, PRIMARY_KEY).
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from enum import IntFlag
from typing import Any, ClassVar, TypeVar

from abstract_record_base.abstract_record import GetterOption
from abstract_record_base.dto import DataTransferObject
from abstract_record_base.events import RecordEvent, RecordEventType
from abstract_record_base.exceptions import RecordConfigurationError
from abstract_record_base.metadata import class_cached, normalize_callables
from abstract_record_base.results import OperationResult
from abstract_record_base.valid_record import ValidRecord

__all__ = ["AttributeOption", "EntityState"]

logger = logging.getLogger(__name__)

EntityStateT = TypeVar("EntityStateT", bound="EntityState")


class AttributeOption(IntFlag):
    """Attribute option flags of entity states."""

    NONE = 0
    READONLY = 1 << 0
    """The attribute cannot change once it holds a non-None value."""

    PRIMARY_KEY = 1 << 1
    """The attribute is part of the primary key."""


class EntityState(ValidRecord):
    """Base class for entity states.

    Example:
        class UserState(EntityState):
            dto_class = UserStateDTO

            id: str
            created_at: datetime

            @classmethod
            def attribute_specifications(cls):
                return {
                    "id": {
                        "validators": ["is_string", "trim", "not_empty"],
                        "options": AttributeOption.READONLY | AttributeOption.PRIMARY_KEY,
                    },
                    "created_at": {
                        "default": lambda: int(time.time()),
                        "validators": ["date_time"],
                        "getter": "timestamp_getter",
                    },
                }

        result = OperationResult()
        user = UserState.create_from_dto({"id": "u1"}, "", result)
        user.set_attributes({"id": "u2"}, result)  # id is read-only: skipped
    """

    READONLY_WARNING: ClassVar[str] = "Can not modify read-only attribute"
    """Warning logged when a read-only attribute is dropped; empty disables it."""

    @classmethod
    def internal_create(
        cls: type[EntityStateT],
        values: Mapping[str, Any],
        record_path: str,
        result: OperationResult,
    ) -> EntityStateT | None:
        return super().internal_create(
            {**cls.attribute_defaults(), **values}, record_path, result
        )

    def set_attributes(
        self, values: Mapping[str, Any] | DataTransferObject, result: OperationResult
    ) -> bool:
        """Validate new attribute values and assign them all, or none.

        Args:
            values: Mapping or DTO of new values; unknown keys are skipped.
            result: Error sink.

        Returns:
            True if every value was valid and has been assigned.
        """
        return self.internal_set_attributes(DataTransferObject.dto_to_array(values), result)

    # Options

    @classmethod
    def options(cls) -> dict[str, Any]:
        """Return the raw ``options`` specifications."""
        return cls.extract_specification_values("options")

    @class_cached
    def attribute_options(cls) -> dict[str, AttributeOption]:
        """Return ``{attribute: AttributeOption}`` for every attribute.

        Raises:
            RecordConfigurationError: If options are not integer flags.
        """
        attribute_options = dict.fromkeys(cls.attribute_list(), AttributeOption.NONE)
        for attribute, option in cls.options().items():
            if isinstance(option, bool) or not isinstance(option, int):
                raise RecordConfigurationError(
                    f"Invalid options at {cls.__qualname__}.{attribute}. "
                    "The attribute options must be an integer."
                )
            attribute_options[attribute] = AttributeOption(option)
        return attribute_options

    @classmethod
    def primary_key_candidates(cls) -> list[str]:
        """Return the attributes flagged PRIMARY_KEY."""
        return [
            attribute
            for attribute, option in cls.attribute_options().items()
            if option & AttributeOption.PRIMARY_KEY
        ]

    @class_cached
    def primary_key_attributes(cls) -> list[str]:
        """Return the verified primary key attribute names.

        Raises:
            RecordConfigurationError: If a name is not a record attribute.
        """
        primary_key = list(cls.primary_key_candidates())
        attribute_list = cls.attribute_list()
        for attribute in primary_key:
            if attribute not in attribute_list:
                raise RecordConfigurationError(
                    f"Unknown attribute {attribute!r} in {cls.__qualname__}.primary_key_candidates()."
                )
        return primary_key

    def primary_key(self) -> dict[str, Any]:
        """Return the current primary key values."""
        return {attribute: self.__dict__.get(attribute) for attribute in self.primary_key_attributes()}

    @classmethod
    def is_readonly_attribute(cls, attribute: str) -> bool:
        option = cls.attribute_options().get(attribute, AttributeOption.NONE)
        return bool(option & AttributeOption.READONLY)

    # Defaults

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        """Return the raw ``default`` specifications."""
        return cls.extract_specification_values("default")

    @class_cached
    def _defaults_callable(cls) -> dict[str, Callable[[], Any]]:
        return normalize_callables(
            cls,
            cls.defaults(),
            callable_only=False,
            strict_names=True,
            spec_name="default",
        )

    @class_cached
    def _defaults_static(cls) -> dict[str, Any]:
        # Attributes without a default, and those with a callable one, get None.
        callables = cls._defaults_callable()
        static = dict.fromkeys(cls.attribute_list())
        static.update(
            {attribute: value for attribute, value in cls.defaults().items() if attribute not in callables}
        )
        return static

    @classmethod
    def attribute_defaults(cls) -> dict[str, Any]:
        """Return default values for every attribute.

        Static defaults are copied; callable defaults are invoked once per
        call. Attributes without a default get None.
        """
        defaults = copy.deepcopy(cls._defaults_static())
        for attribute, default in cls._defaults_callable().items():
            defaults[attribute] = default()
        return defaults

    # Getters, setters, generators

    @classmethod
    def getters(cls) -> dict[str, Any]:
        return cls.extract_specification_values("getter")

    @class_cached
    def attribute_getters(cls) -> dict[str, Callable[..., Any]]:
        """Return ``{attribute: getter}``."""
        return normalize_callables(
            cls, cls.getters(), callable_only=True, strict_names=True, spec_name="getter"
        )

    @classmethod
    def setters(cls) -> dict[str, Any]:
        return cls.extract_specification_values("setter")

    @class_cached
    def attribute_setters(cls) -> dict[str, Callable[..., bool]]:
        """Return ``{attribute: setter}``."""
        return normalize_callables(
            cls, cls.setters(), callable_only=True, strict_names=True, spec_name="setter"
        )

    @classmethod
    def generators(cls) -> dict[str, Any]:
        return cls.extract_specification_values("generator")

    @class_cached
    def attribute_generators(cls) -> dict[str, Callable[[Any], Any]]:
        """Return ``{attribute: generator}``."""
        return normalize_callables(
            cls, cls.generators(), callable_only=True, strict_names=True, spec_name="generator"
        )

    # Pipeline

    def get_attribute(self, attribute: str, options: GetterOption) -> Any:
        getter = self.attribute_getters().get(attribute)
        if getter is not None:
            return getter(attribute, self.__dict__.get(attribute), options)
        return super().get_attribute(attribute, options)

    def prepare_attribute_value(
        self, attribute: str, values: dict[str, Any], result: OperationResult
    ) -> bool:
        setter = self.attribute_setters().get(attribute)
        if setter is not None:
            return setter(attribute, self.record_path, values, result)
        return super().prepare_attribute_value(attribute, values, result)

    def exclude_readonly_attributes(
        self, values: dict[str, Any], result: OperationResult, warning: str = ""
    ) -> None:
        """Drop read-only attributes that already hold a non-None value."""
        for attribute in list(values):
            if self.is_readonly_attribute(attribute) and self.__dict__.get(attribute) is not None:
                del values[attribute]
                if warning:
                    logger.warning("%s %s.%s", warning, type(self).__qualname__, attribute)
                result.notify(
                    RecordEvent(
                        event_type=RecordEventType.READONLY_SKIPPED,
                        source=self,
                        data={"record_path": self.record_path, "attribute": attribute},
                    )
                )

    def prepare_attribute_values(self, values: dict[str, Any], result: OperationResult) -> bool:
        """Exclude read-only attributes, prepare values, then run generators."""
        self.exclude_readonly_attributes(values, result, self.READONLY_WARNING)
        ok = super().prepare_attribute_values(values, result)
        for attribute, generator in self.attribute_generators().items():
            values[attribute] = generator(values.get(attribute))
        return ok
