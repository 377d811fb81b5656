"""Observer pattern implementation for record events.

Provides event types, observer protocol, and mixin for adding observer
support to operation results and anything else that emits record events.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "RecordEventType",
    "RecordEvent",
    "RecordObserver",
    "ObservableMixin",
]


class RecordEventType(Enum):
    """Types of record events that can be observed."""

    ERROR_ADDED = auto()
    """Emitted when an error is added to an operation result."""

    VALIDATION_STARTED = auto()
    """Emitted when a record starts processing a batch of attribute values."""

    VALIDATION_COMPLETED = auto()
    """Emitted when a record finishes preparing and validating a batch."""

    ATTRIBUTES_ASSIGNED = auto()
    """Emitted when a validated batch has been committed to a record."""

    READONLY_SKIPPED = auto()
    """Emitted when a read-only attribute is dropped from a batch."""


@dataclass
class RecordEvent:
    """A record event that can be observed.

    Attributes:
        event_type: The type of event that occurred.
        source: The object that emitted the event (record or result).
        data: Event-specific data dictionary.

    Example:
        event = RecordEvent(
            event_type=RecordEventType.ERROR_ADDED,
            source=result,
            data={"code": 3, "key": "phone.code", "message": "Invalid {phone.code}."}
        )
    """

    event_type: RecordEventType
    source: object
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class RecordObserver(Protocol):
    """Protocol for record event observers.

    Implement this protocol to receive record events. Observers
    can be used for logging, metrics collection, console reports, etc.

    Example:
        class PrintingObserver:
            def on_event(self, event: RecordEvent) -> None:
                print(f"{event.event_type.name}: {event.data}")
    """

    def on_event(self, event: RecordEvent) -> None:
        """Handle a record event.

        Args:
            event: The record event to handle.
        """
        ...


class ObservableMixin:
    """Mixin class to add observer support to any class.

    Classes that include this mixin can emit events that observers
    will receive.

    Example:
        result = OperationResult()
        result.add_observer(PrintingObserver())
        Phone.create("+7", "800", "1234567", "", result)
    """

    _observers: list[RecordObserver]

    def _ensure_observers(self) -> None:
        """Ensure the observers list is initialized."""
        if not hasattr(self, "_observers") or self._observers is None:
            self._observers = []

    def add_observer(self, observer: RecordObserver) -> None:
        """Add an observer to receive record events.

        Args:
            observer: An object implementing the RecordObserver protocol.
        """
        self._ensure_observers()
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: RecordObserver) -> None:
        """Remove an observer from receiving record events.

        Args:
            observer: The observer to remove.
        """
        self._ensure_observers()
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self, event: RecordEvent) -> None:
        """Notify all observers of a record event.

        Args:
            event: The record event to broadcast to observers.
        """
        self._ensure_observers()
        for observer in self._observers:
            observer.on_event(event)

    @property
    def observers(self) -> list[RecordObserver]:
        """Get a copy of the current observers list."""
        self._ensure_observers()
        return self._observers.copy()

    def clear_observers(self) -> None:
        """Remove all observers."""
        self._ensure_observers()
        self._observers.clear()
