"""User entity state."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Any

from abstract_record_base.abstract_record import GetterOption
from abstract_record_base.dto import PartialDTO
from abstract_record_base.entity_state import AttributeOption, EntityState
from abstract_record_base.examples.full_name import FullName, FullNameDTO
from abstract_record_base.examples.password import Password, PasswordDTO
from abstract_record_base.examples.phone import PhoneDTO, PhoneWithDTO
from abstract_record_base.results import OperationResult

__all__ = ["UserState", "UserStateDTO"]


class UserStateDTO(PartialDTO):
    id: str | None = None
    login: str | None = None
    password: PasswordDTO | None = None
    full_name: FullNameDTO | None = None
    phone: PhoneDTO | None = None
    email: str | None = None
    active: bool | None = None
    created_at: int | None = None
    updated_at: int | None = None


class UserState(EntityState):
    """State of a user account.

    ``created_at`` defaults to the creation time and ``updated_at`` is
    regenerated on every update unless a value is passed. Both are read
    as Unix timestamps.
    """

    dto_class = UserStateDTO

    id: str
    login: str
    password: Password
    full_name: FullName
    phone: PhoneWithDTO | None
    email: str | None
    active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def attribute_specifications(cls) -> dict[str, dict[str, Any]]:
        return {
            "id": {
                "validators": ["is_string", "trim", "not_empty"],
                "options": AttributeOption.READONLY | AttributeOption.PRIMARY_KEY,
            },
            "login": {
                "validators": ["is_string", "trim", "not_empty", "validate_login"],
            },
            "password": {
                "class": Password,
                "default": {},
                "validators": ["not_null"],
            },
            "full_name": {
                "class": FullName,
                "default": {},
                "validators": ["not_null"],
            },
            "phone": {
                "class": PhoneWithDTO,
            },
            "email": {
                "validators": ["nullable_string", "trim", "empty_to_null", "nullable_email"],
            },
            "active": {
                "default": True,
                "validators": ["is_bool"],
            },
            "created_at": {
                "default": lambda: int(time.time()),
                "validators": ["date_time"],
                "getter": "timestamp",
            },
            "updated_at": {
                "generator": lambda value: int(time.time()) if value is None else value,
                "validators": ["date_time"],
                "getter": "timestamp",
            },
        }

    @classmethod
    def create(
        cls,
        id: str | None,
        login: str,
        password: Password,
        full_name: FullName,
        phone: PhoneWithDTO | None,
        email: str | None,
        active: bool,
        record_path: str,
        result: OperationResult,
    ) -> UserState | None:
        return cls.internal_create(
            {
                "id": id,
                "login": login,
                "password": password,
                "full_name": full_name,
                "phone": phone,
                "email": email,
                "active": active,
            },
            record_path,
            result,
        )

    @staticmethod
    def validate_login(
        attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        """Store the login lowercased.

        Logins are matched case-insensitively, so ``"Guest"`` and
        ``"guest"`` name the same user. Runs after ``not_empty``, so the
        value is always a non-blank string here.
        """
        values[attribute] = values[attribute].lower()
        return True

    @staticmethod
    def timestamp(attribute: str, value: datetime | None, options: GetterOption) -> int | None:
        return None if value is None else int(value.timestamp())
