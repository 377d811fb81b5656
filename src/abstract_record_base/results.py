"""Operation result container.

Accumulates errors produced while creating or updating records, grouped by
error code and by the path-qualified attribute name they relate to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from abstract_record_base.events import ObservableMixin, RecordEvent, RecordEventType

__all__ = ["ErrorCode", "OperationResult"]


class ErrorCode(IntEnum):
    """Stable error codes used as the first level of `OperationResult.errors`."""

    UNDEFINED = -1
    SUCCESS = 0
    INPUT_DATA = 1
    ACCESS_DENIED = 2
    VALIDATION = 3
    NOT_FOUND = 4
    ALREADY_EXISTS = 5


@dataclass(eq=False)
class OperationResult(ObservableMixin):
    """Caller-owned error accumulator passed through record operations.

    Errors are stored as ``{code: {key: [messages]}}``. Use path-qualified
    attribute names (see `full_name()`) as keys for errors on attribute
    values, or the root key `DELIMITER` for general errors.

    Example:
        result = OperationResult()
        phone = Phone.create("ree", " 0  ", "123", "", result)
        if not result.is_success():
            print(result.get_errors()[ErrorCode.VALIDATION])
    """

    UNDEFINED_ERROR: ClassVar[ErrorCode] = ErrorCode.UNDEFINED
    SUCCESS: ClassVar[ErrorCode] = ErrorCode.SUCCESS
    INPUT_DATA_ERROR: ClassVar[ErrorCode] = ErrorCode.INPUT_DATA
    ACCESS_DENIED: ClassVar[ErrorCode] = ErrorCode.ACCESS_DENIED
    VALIDATION_ERROR: ClassVar[ErrorCode] = ErrorCode.VALIDATION
    NOT_FOUND: ClassVar[ErrorCode] = ErrorCode.NOT_FOUND
    ALREADY_EXISTS: ClassVar[ErrorCode] = ErrorCode.ALREADY_EXISTS

    DELIMITER: ClassVar[str] = "."
    """Separator between path segments; also the root key for general errors."""

    FULL_NAME_WRAPPER: ClassVar[tuple[str, str]] = ("{", "}")

    errors: dict[int, dict[str, list[str]]] = field(default_factory=dict)
    has_errors: bool = False

    def is_success(self) -> bool:
        """Check that no error with a non-success code has been added."""
        return not self.has_errors

    def get_errors(self) -> dict[int, dict[str, list[str]]]:
        """Get all errors as ``{code: {key: [messages]}}``."""
        return self.errors

    def add_error(self, code: int, key: str, message: str) -> None:
        """Add an error message.

        Empty messages are ignored. An empty key is replaced with the
        root key `DELIMITER`.

        Args:
            code: Error code (see `ErrorCode`).
            key: Path-qualified attribute name, or empty for a general error.
            message: Human-readable error message.

        Note:
            This method emits a RecordEventType.ERROR_ADDED event
            to all registered observers.
        """
        if not message:
            return

        if not key:
            key = self.DELIMITER

        self.has_errors = self.has_errors or code != ErrorCode.SUCCESS
        self.errors.setdefault(code, {}).setdefault(key, []).append(message)

        self.notify(
            RecordEvent(
                event_type=RecordEventType.ERROR_ADDED,
                source=self,
                data={"code": code, "key": key, "message": message},
            )
        )

    def merge(self, other: OperationResult) -> OperationResult:
        """Merge another result into this one.

        This method mutates the current instance in-place. Observers are
        not notified for merged errors.

        Args:
            other: Another OperationResult to merge into this one.

        Returns:
            Self, for method chaining.
        """
        for code, keyed in other.errors.items():
            target = self.errors.setdefault(code, {})
            for key, messages in keyed.items():
                target.setdefault(key, []).extend(messages)
        self.has_errors = self.has_errors or other.has_errors
        return self

    def messages(self, code: int | None = None) -> list[tuple[str, str]]:
        """Get ``(key, message)`` pairs, optionally filtered by error code."""
        pairs: list[tuple[str, str]] = []
        for error_code, keyed in self.errors.items():
            if code is not None and error_code != code:
                continue
            for key, messages in keyed.items():
                pairs.extend((key, message) for message in messages)
        return pairs

    @classmethod
    def full_name(cls, name: str, path: str, add_wrapper: bool = False) -> str:
        """Return the full name of an element, including its path.

        Args:
            name: Element name.
            path: Path of the containing record ('' for the root).
            add_wrapper: Whether to wrap the result in braces.

        Returns:
            ``path.name``, or ``name`` when the path is empty.
        """
        prefix, suffix = cls.FULL_NAME_WRAPPER if add_wrapper else ("", "")
        return prefix + (f"{path}{cls.DELIMITER}" if path else "") + name + suffix
