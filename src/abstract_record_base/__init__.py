"""Validated records, value objects, entity states and DTOs."""

from abstract_record_base.abstract_record import AbstractRecord, GetterOption
from abstract_record_base.dto import DataTransferObject, PartialDTO
from abstract_record_base.entity_state import AttributeOption, EntityState
from abstract_record_base.events import (
    ObservableMixin,
    RecordEvent,
    RecordEventType,
    RecordObserver,
)
from abstract_record_base.exceptions import AttributeAccessError, RecordConfigurationError
from abstract_record_base.protocols import AttributeValidator, DataTransferInterface
from abstract_record_base.results import ErrorCode, OperationResult
from abstract_record_base.rich_observers import ConsoleErrorObserver, error_table
from abstract_record_base.valid_record import ValidRecord
from abstract_record_base.validators import BaseValidators
from abstract_record_base.value_object import ValueObject

__version__ = "0.1.0"

__all__ = [
    # Records
    "AbstractRecord",
    "ValidRecord",
    "ValueObject",
    "EntityState",
    "GetterOption",
    "AttributeOption",
    # DTOs
    "DataTransferObject",
    "PartialDTO",
    "DataTransferInterface",
    # Results
    "ErrorCode",
    "OperationResult",
    # Validators
    "AttributeValidator",
    "BaseValidators",
    # Events
    "ObservableMixin",
    "RecordEvent",
    "RecordEventType",
    "RecordObserver",
    # Rich reporting
    "ConsoleErrorObserver",
    "error_table",
    # Exceptions
    "AttributeAccessError",
    "RecordConfigurationError",
]
