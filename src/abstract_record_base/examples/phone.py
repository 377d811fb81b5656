"""Phone number value object."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, cast

from abstract_record_base.dto import DataTransferObject
from abstract_record_base.results import ErrorCode, OperationResult
from abstract_record_base.value_object import ValueObject

__all__ = ["Phone", "PhoneDTO", "PhoneWithDTO"]

_COUNTRY_RE = re.compile(r"\+\d{1,3}")
_CODE_RE = re.compile(r"\d{3}")
_NUMBER_RE = re.compile(r"\d{7,8}")


class PhoneDTO(DataTransferObject):
    country: str
    code: str
    number: str


def _check(
    pattern: re.Pattern[str],
    attribute: str,
    path: str,
    values: dict[str, Any],
    result: OperationResult | None,
) -> bool:
    if pattern.fullmatch(values[attribute]):
        return True
    if result is not None:
        result.add_error(
            ErrorCode.VALIDATION,
            result.full_name(attribute, path),
            f"Invalid {result.full_name(attribute, path, True)}.",
        )
    return False


class Phone(ValueObject):
    """Phone number: country prefix, area code and subscriber number."""

    country: str
    code: str
    number: str

    @classmethod
    def attribute_specifications(cls) -> dict[str, dict[str, Any]]:
        return {
            "country": {"validators": ["is_string", "trim", "not_empty", "validate_country"]},
            "code": {"validators": ["is_string", "trim", "not_empty", "validate_code"]},
            "number": {"validators": ["is_string", "trim", "not_empty", "validate_number"]},
        }

    @classmethod
    def create(
        cls,
        country: str,
        code: str,
        number: str,
        record_path: str,
        result: OperationResult,
    ) -> Phone | None:
        return cls.internal_create(
            {"country": country, "code": code, "number": number}, record_path, result
        )

    @staticmethod
    def validate_country(
        attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return _check(_COUNTRY_RE, attribute, path, values, result)

    @staticmethod
    def validate_code(
        attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return _check(_CODE_RE, attribute, path, values, result)

    @staticmethod
    def validate_number(
        attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return _check(_NUMBER_RE, attribute, path, values, result)


class PhoneWithDTO(Phone):
    """Phone that converts to PhoneDTO."""

    dto_class = PhoneDTO

    def to_dto(self, attributes: Iterable[str] | None = None) -> PhoneDTO:
        return cast(PhoneDTO, super().to_dto(attributes))
