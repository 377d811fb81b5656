"""Base attribute validators.

Stateless validation and normalization functions for record attribute
values, exposed by name through `BaseValidators.callable_map()`.

Every validator has the signature::

    validator(attribute, path, values, result=None) -> bool

where ``values`` is the batch of new attribute values. A validator may
normalize ``values[attribute]`` in place. On failure it adds exactly one
message to ``result`` keyed by the path-qualified attribute name.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from email_validator import EmailNotValidError, validate_email

from abstract_record_base.exceptions import RecordConfigurationError
from abstract_record_base.metadata import class_cached
from abstract_record_base.results import ErrorCode, OperationResult

__all__ = ["BaseValidators"]

_INT_RE = re.compile(r"[+-]?(0|[1-9][0-9]*)")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_THOUSANDS_FLOAT_RE = re.compile(r"[+-]?[0-9]{1,3}(,[0-9]{3})+(\.[0-9]+)?")
_COMMA_FLOAT_RE = re.compile(r"[+-]?[0-9]+,[0-9]+")

_TRUE_STRINGS = frozenset({"1", "true", "on", "yes"})
_FALSE_STRINGS = frozenset({"0", "false", "off", "no", ""})

_SCALAR_TYPES = (str, bytes, bool, int, float, complex, Decimal)
_CONTAINER_TYPES = (list, tuple, dict, set, frozenset)


class BaseValidators:
    """Built-in attribute validators.

    Subclass and override `map()` to add validators, then return the
    subclass map from a record's ``validators_map()``.

    Example:
        class Phone(ValueObject):
            code: str

            @classmethod
            def attribute_specifications(cls):
                return {"code": {"validators": ["is_string", "trim", "not_empty"]}}
    """

    @classmethod
    def map(cls) -> dict[str, Callable[..., bool]]:
        """Return the validator name -> validator map."""
        return {
            "empty_to_null": cls.empty_to_null,
            "trim": cls.trim,
            "not_null": cls.not_null,
            "not_empty": cls.not_empty,
            "is_string": cls.is_string,
            "nullable_string": cls.nullable_string,
            "is_int": cls.is_int,
            "nullable_int": cls.nullable_int,
            "is_float": cls.is_float,
            "nullable_float": cls.nullable_float,
            "is_bool": cls.is_bool,
            "nullable_bool": cls.nullable_bool,
            "email": cls.email,
            "nullable_email": cls.nullable_email,
            "object": cls.object,
            "nullable_object": cls.nullable_object,
            "date_time": cls.date_time,
            "nullable_date_time": cls.nullable_date_time,
        }

    @class_cached
    def callable_map(cls) -> dict[str, Callable[..., bool]]:
        """Return the verified validator map.

        Raises:
            RecordConfigurationError: If a name is not a string or a
                validator is not callable.
        """
        validators = cls.map()
        for name, validator in validators.items():
            if not isinstance(name, str):
                raise RecordConfigurationError(
                    f"Invalid validator name {name!r} at {cls.__qualname__}.map(). "
                    "The validator name must be a string."
                )
            if not callable(validator):
                raise RecordConfigurationError(
                    f"Invalid validator {name!r} at {cls.__qualname__}.map(). "
                    "The validator must be callable."
                )
        return validators

    @staticmethod
    def _add_error(
        result: OperationResult | None, attribute: str, path: str, message: str
    ) -> None:
        """Add a validation error; ``{}`` in message is the wrapped full name."""
        if result is None:
            return
        result.add_error(
            ErrorCode.VALIDATION,
            result.full_name(attribute, path),
            message.format(result.full_name(attribute, path, True)),
        )

    @classmethod
    def is_empty(cls, value: Any) -> bool:
        """Check for None, empty strings and empty containers."""
        if value is None:
            return True
        if isinstance(value, (str, bytes, *_CONTAINER_TYPES)):
            return len(value) == 0
        return False

    @staticmethod
    def parse_int(value: Any) -> int | None:
        """Parse an integer; return None if the value is not one."""
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        if isinstance(value, str):
            text = value.strip()
            if _INT_RE.fullmatch(text):
                try:
                    return int(text)
                except ValueError:
                    # past the interpreter's integer string conversion limit
                    return None
        return None

    @staticmethod
    def parse_float(value: Any) -> float | None:
        """Parse a finite float; return None if the value is not one."""
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float, Decimal)):
            raw = value
        elif isinstance(value, str):
            raw = value.strip()
            if _THOUSANDS_FLOAT_RE.fullmatch(raw):
                raw = raw.replace(",", "")
            elif _COMMA_FLOAT_RE.fullmatch(raw):
                raw = raw.replace(",", ".")
            elif not _FLOAT_RE.fullmatch(raw):
                return None
        else:
            return None
        try:
            parsed = float(raw)
        except (OverflowError, ValueError):
            return None
        return parsed if math.isfinite(parsed) else None

    @staticmethod
    def parse_bool(value: Any) -> bool | None:
        """Parse a boolean; return None if the value is not one."""
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
        return None

    @classmethod
    def empty_to_null(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        """Replace empty values with None."""
        if cls.is_empty(values[attribute]):
            values[attribute] = None
        return True

    @classmethod
    def trim(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        """Strip surrounding whitespace from string values."""
        if isinstance(values[attribute], str):
            values[attribute] = values[attribute].strip()
        return True

    @classmethod
    def not_null(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        if values[attribute] is None:
            cls._add_error(result, attribute, path, "The {} cannot be blank.")
            return False
        return True

    @classmethod
    def not_empty(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        if cls.is_empty(values[attribute]):
            cls._add_error(result, attribute, path, "The {} cannot be blank.")
            return False
        return True

    @classmethod
    def is_string(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        """Accept strings; convert None and numbers to strings."""
        value = values[attribute]
        if value is None:
            values[attribute] = ""
        elif isinstance(value, str):
            pass
        elif isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            values[attribute] = str(value)
        else:
            cls._add_error(result, attribute, path, "The {} must be a string.")
            return False
        return True

    @classmethod
    def nullable_string(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return values[attribute] is None or cls.is_string(attribute, path, values, result)

    @classmethod
    def is_int(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        parsed = cls.parse_int(values[attribute])
        if parsed is None:
            cls._add_error(result, attribute, path, "The {} must be an integer.")
            return False
        values[attribute] = parsed
        return True

    @classmethod
    def nullable_int(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return values[attribute] is None or cls.is_int(attribute, path, values, result)

    @classmethod
    def is_float(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        parsed = cls.parse_float(values[attribute])
        if parsed is None:
            cls._add_error(result, attribute, path, "The {} must be a float.")
            return False
        values[attribute] = parsed
        return True

    @classmethod
    def nullable_float(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return values[attribute] is None or cls.is_float(attribute, path, values, result)

    @classmethod
    def is_bool(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        parsed = cls.parse_bool(values[attribute])
        if parsed is None:
            cls._add_error(result, attribute, path, "The {} must be a boolean.")
            return False
        values[attribute] = parsed
        return True

    @classmethod
    def nullable_bool(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return values[attribute] is None or cls.is_bool(attribute, path, values, result)

    @classmethod
    def email(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        """Check the email address syntax (no deliverability check)."""
        value = values[attribute]
        try:
            if not isinstance(value, str):
                raise EmailNotValidError("The email address must be a string.")
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            cls._add_error(result, attribute, path, "{} is not a valid email address.")
            return False
        return True

    @classmethod
    def nullable_email(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return values[attribute] is None or cls.email(attribute, path, values, result)

    @classmethod
    def object(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        """Reject None, scalars and builtin containers."""
        value = values[attribute]
        if value is None or isinstance(value, (*_SCALAR_TYPES, *_CONTAINER_TYPES)):
            cls._add_error(result, attribute, path, "The {} is invalid.")
            return False
        return True

    @classmethod
    def nullable_object(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return values[attribute] is None or cls.object(attribute, path, values, result)

    @classmethod
    def date_time(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        """Accept datetimes; convert Unix timestamps to UTC datetimes."""
        value = values[attribute]
        if isinstance(value, datetime):
            return True
        timestamp = cls.parse_int(value)
        converted = None
        if timestamp is not None:
            try:
                converted = datetime.fromtimestamp(timestamp, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                pass
        if converted is None:
            cls._add_error(result, attribute, path, "The {} must be a timestamp.")
            return False
        values[attribute] = converted
        return True

    @classmethod
    def nullable_date_time(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return values[attribute] is None or cls.date_time(attribute, path, values, result)
