"""Tests for Rich-based error reporting: ConsoleErrorObserver and error_table."""

from __future__ import annotations

import io
from typing import Any

from hypothesis import given, settings
from hypothesis import strategies as st
from rich.console import Console
from rich.table import Table

from abstract_record_base import (
    ConsoleErrorObserver,
    ErrorCode,
    OperationResult,
    RecordEvent,
    RecordEventType,
    RecordObserver,
    error_table,
)
from abstract_record_base.examples import Phone

from .conftest import Segment

# =============================================================================
# Helper Functions
# =============================================================================


def make_console() -> tuple[Console, io.StringIO]:
    """Create a plain-text console writing to a buffer."""
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


def make_event(event_type: RecordEventType, data: dict[str, Any] | None = None) -> RecordEvent:
    """Create a RecordEvent for testing."""
    return RecordEvent(event_type=event_type, source=None, data=data or {})


def render(table: Table) -> str:
    console, buffer = make_console()
    console.print(table)
    return buffer.getvalue()


# =============================================================================
# ConsoleErrorObserver Tests
# =============================================================================


class TestConsoleErrorObserver:
    """Tests for printing errors as they are added."""

    def test_is_record_observer(self) -> None:
        console, _ = make_console()

        assert isinstance(ConsoleErrorObserver(console), RecordObserver)

    def test_default_console(self) -> None:
        observer = ConsoleErrorObserver()

        assert isinstance(observer._console, Console)
        assert observer.error_count == 0

    def test_prints_errors(self) -> None:
        console, buffer = make_console()
        observer = ConsoleErrorObserver(console)
        result = OperationResult()
        result.add_observer(observer)

        Phone.create("ree", " 0  ", "123", "contact", result)

        output = buffer.getvalue()
        assert observer.error_count == 3
        assert "✗ contact.country: Invalid {contact.country}." in output
        assert "✗ contact.code: Invalid {contact.code}." in output
        assert "✗ contact.number: Invalid {contact.number}." in output

    def test_markup_in_messages_is_escaped(self) -> None:
        console, buffer = make_console()
        observer = ConsoleErrorObserver(console)

        observer.on_event(
            make_event(
                RecordEventType.ERROR_ADDED,
                {"code": ErrorCode.VALIDATION, "key": "tags[0]", "message": "[bold]raw[/bold]"},
            )
        )

        assert "tags[0]: [bold]raw[/bold]" in buffer.getvalue()

    def test_assignments_hidden_by_default(self) -> None:
        console, buffer = make_console()
        observer = ConsoleErrorObserver(console)

        observer.on_event(
            make_event(RecordEventType.ATTRIBUTES_ASSIGNED, {"record_path": "", "attributes": ["x"]})
        )

        assert buffer.getvalue() == ""

    def test_show_assignments(self) -> None:
        console, buffer = make_console()
        result = OperationResult()
        result.add_observer(ConsoleErrorObserver(console, show_assignments=True))

        Segment.create_from_dto({"start": {"x": 1}, "label": "a"}, "", result)

        output = buffer.getvalue()
        assert "✓ start: x, y" in output
        assert "✓ <root>: start, end, label" in output

    def test_other_events_are_ignored(self) -> None:
        console, buffer = make_console()
        observer = ConsoleErrorObserver(console, show_assignments=True)

        observer.on_event(make_event(RecordEventType.VALIDATION_STARTED))
        observer.on_event(make_event(RecordEventType.READONLY_SKIPPED))

        assert buffer.getvalue() == ""
        assert observer.error_count == 0

    @given(count=st.integers(min_value=0, max_value=10))
    @settings(max_examples=20)
    def test_error_count_matches(self, count: int) -> None:
        """Property: the observer counts every added error."""
        console, _ = make_console()
        observer = ConsoleErrorObserver(console)
        result = OperationResult()
        result.add_observer(observer)

        for i in range(count):
            result.add_error(ErrorCode.INPUT_DATA, f"field{i}", "message")

        assert observer.error_count == count


# =============================================================================
# error_table Tests
# =============================================================================


class TestErrorTable:
    """Tests for rendering all errors of a result."""

    def test_table_rows(self) -> None:
        result = OperationResult()
        Phone.create("ree", "222", "1234567", "", result)
        result.add_error(ErrorCode.NOT_FOUND, "", "User not found.")

        table = error_table(result)

        assert isinstance(table, Table)
        assert table.row_count == 2
        output = render(table)
        assert "VALIDATION" in output
        assert "Invalid {country}." in output
        assert "NOT_FOUND" in output
        assert "User not found." in output

    def test_empty_result(self) -> None:
        table = error_table(OperationResult(), title="Report")

        assert table.title == "Report"
        assert table.row_count == 1
        assert "No errors" in render(table)

    def test_unknown_code(self) -> None:
        result = OperationResult()
        result.add_error(42, "x", "custom")

        assert "42" in render(error_table(result))
