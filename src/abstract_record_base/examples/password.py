"""Password value object.

Stores an Argon2id hash of the HMAC-SHA256 peppered password. The plain
password is validated and hashed before the record is created, so the
hash itself only goes through idempotent validators.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from abstract_record_base.dto import DataTransferObject
from abstract_record_base.results import ErrorCode, OperationResult
from abstract_record_base.validators import BaseValidators
from abstract_record_base.value_object import ValueObject

__all__ = ["Password", "PasswordDTO"]

_PEPPER = b"fd+glk?erjgw;j-a3;hj*ld4o0@17%5tjsd#flkb5~9yt4w0y=9t"

# Argon2id hash of the peppered password "Correct user password".
_DUMMY_HASH = (
    "$argon2id$v=19$m=65536,t=4,p=1$VlpnNkNOWHg2M1ZjMkh0Uw"
    "$toe55HtnfudzsoYnTm77khvQ4C/keKkUXYbGP+ZzKkk"
)
_DUMMY_PASSWORD = "Wrong user password"

_hasher = PasswordHasher()


class PasswordDTO(DataTransferObject):
    hash: str


class Password(ValueObject):
    """Hashed password.

    Example:
        result = OperationResult()
        password = Password.create_new("Guest password", "password", result)
        Password.verify("Guest password", password.hash)  # True
    """

    dto_class = PasswordDTO

    MIN_LENGTH = 8
    MAX_LENGTH = 32

    hash: str

    @classmethod
    def attribute_specifications(cls) -> dict[str, dict[str, Any]]:
        return {
            "hash": {"validators": ["is_string", "trim", "not_empty"]},
        }

    @classmethod
    def create_new(cls, password: Any, record_path: str, result: OperationResult) -> Password | None:
        """Validate and hash a plain password.

        A None password is replaced with a random one, which gives a
        record no one can log in with.
        """
        if password is not None:
            values = {"password": password}
            if not cls.validate_password("password", record_path, values, result):
                return None
            password = values["password"]

        return cls.load_hash(cls.password_hash(password), record_path, result)

    @classmethod
    def load_hash(cls, hashed: Any, record_path: str, result: OperationResult) -> Password | None:
        """Wrap an existing password hash."""
        return cls.internal_create({"hash": hashed}, record_path, result)

    @classmethod
    def validate_password_value(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        if not cls.MIN_LENGTH <= len(values[attribute]) <= cls.MAX_LENGTH:
            if result is not None:
                result.add_error(
                    ErrorCode.VALIDATION,
                    result.full_name(attribute, path),
                    f"The {result.full_name(attribute, path, True)} must be from "
                    f"{cls.MIN_LENGTH} to {cls.MAX_LENGTH} characters.",
                )
            return False
        return True

    @classmethod
    def validate_password(
        cls, attribute: str, path: str, values: dict[str, Any], result: OperationResult | None = None
    ) -> bool:
        return (
            BaseValidators.is_string(attribute, path, values, result)
            and BaseValidators.trim(attribute, path, values, result)
            and cls.validate_password_value(attribute, path, values, result)
        )

    @staticmethod
    def _peppered_password(password: str) -> str:
        return hmac.new(_PEPPER, password.encode(), hashlib.sha256).hexdigest()

    @classmethod
    def password_hash(cls, password: str | None) -> str:
        return _hasher.hash(cls._peppered_password(password or secrets.token_hex(16)))

    @classmethod
    def password_verify(cls, password: str | None, hashed: str | None) -> bool:
        if not password or not hashed:
            return False
        try:
            return _hasher.verify(hashed, cls._peppered_password(password))
        except (VerificationError, InvalidHashError):
            return False

    @staticmethod
    def verifiable_password_filter(password: Any) -> str | None:
        values = {"password": password}
        if BaseValidators.is_string("password", "", values):
            return values["password"].strip()
        return None

    @classmethod
    def verify(cls, password: Any, hashed: str | None) -> bool:
        """Check a plain password against a hash.

        Empty or invalid input is checked against a dummy hash so the
        Argon2 computation runs either way.
        """
        password = cls.verifiable_password_filter(password)

        if not password or not hashed:
            hashed = _DUMMY_HASH
            password = _DUMMY_PASSWORD

        return cls.password_verify(password, hashed)

    def is_equal(self, password: Any) -> bool:
        """Check a plain password against this hash.

        Unlike `verify()`, empty input returns immediately.
        """
        return self.password_verify(self.verifiable_password_filter(password), self.hash)
