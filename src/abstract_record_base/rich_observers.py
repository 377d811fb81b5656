"""Rich-based reporting of record errors.

Provides a console observer that prints errors as they are added to an
OperationResult, and a table renderer for all errors of a result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from abstract_record_base.events import RecordEvent, RecordEventType, RecordObserver
from abstract_record_base.results import ErrorCode, OperationResult

if TYPE_CHECKING:
    from rich.console import Console
    from rich.table import Table

__all__ = ["ConsoleErrorObserver", "error_table"]


def _code_name(code: int) -> str:
    try:
        return ErrorCode(code).name
    except ValueError:
        return str(code)


def error_table(result: OperationResult, title: str = "Errors") -> Table:
    """Render all errors of a result as a Rich table.

    Args:
        result: The result to render.
        title: Table title.

    Returns:
        Table with one row per message (code, key, message).

    Example:
        from rich.console import Console

        Console().print(error_table(result))
    """
    from rich.markup import escape
    from rich.table import Table

    table = Table(
        title=title,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Code", style="red", width=14)
    table.add_column("Attribute", style="cyan")
    table.add_column("Message", style="yellow")

    for code, keyed in result.get_errors().items():
        for key, messages in keyed.items():
            for message in messages:
                table.add_row(_code_name(code), escape(key), escape(message))

    if table.row_count == 0:
        table.add_row("-", "-", "No errors")

    return table


class ConsoleErrorObserver(RecordObserver):
    """Print errors to a Rich console as they are added.

    Example:
        result = OperationResult()
        result.add_observer(ConsoleErrorObserver())
        Phone.create("ree", " 0  ", "123", "", result)
    """

    def __init__(self, console: Console | None = None, show_assignments: bool = False) -> None:
        """Initialize the observer.

        Args:
            console: Rich Console instance. If None, creates a new one.
            show_assignments: Also print a line when a record commits values.
        """
        from rich.console import Console

        self._console = console or Console()
        self._show_assignments = show_assignments
        self._error_count = 0

    @property
    def error_count(self) -> int:
        """Number of errors printed so far."""
        return self._error_count

    def on_event(self, event: RecordEvent) -> None:
        """Handle record events.

        Args:
            event: The record event to handle.
        """
        from rich.markup import escape

        if event.event_type == RecordEventType.ERROR_ADDED:
            self._error_count += 1
            key = escape(str(event.data.get("key", "")))
            message = escape(str(event.data.get("message", "")))
            self._console.print(
                f"[red]✗[/] [cyan]{key}[/]: {message}",
                markup=True,
                highlight=False,
            )

        elif event.event_type == RecordEventType.ATTRIBUTES_ASSIGNED and self._show_assignments:
            attributes = ", ".join(event.data.get("attributes", []))
            path = event.data.get("record_path") or "<root>"
            self._console.print(f"[green]✓[/] {path}: {attributes}", highlight=False)
