"""Shared fixtures, sample records and Hypothesis strategies for tests."""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Any

import pytest
from hypothesis import strategies as st

from abstract_record_base import (
    AttributeOption,
    DataTransferObject,
    EntityState,
    ErrorCode,
    GetterOption,
    OperationResult,
    PartialDTO,
    RecordEvent,
    RecordEventType,
    ValueObject,
)

# -----------------------------------------------------------------------------
# Hypothesis Strategies
# -----------------------------------------------------------------------------

# Strategy for attribute names (letters and numbers only)
attribute_names = st.text(
    min_size=1,
    max_size=30,
    alphabet=st.characters(whitelist_categories=("L", "N")),
)

# Strategy for record paths: '' or dot-joined attribute names
record_paths = st.one_of(
    st.just(""),
    st.lists(attribute_names, min_size=1, max_size=4).map(".".join),
)

# Strategy for messages
messages = st.text(min_size=1, max_size=200)

# Strategy for error codes
error_codes = st.sampled_from(list(ErrorCode))

# Strategy for non-success error codes
failure_codes = st.sampled_from([code for code in ErrorCode if code != ErrorCode.SUCCESS])


# -----------------------------------------------------------------------------
# Test Observers
# -----------------------------------------------------------------------------


class RecordingObserver:
    """Observer that records all events for testing."""

    def __init__(self) -> None:
        self.events: list[RecordEvent] = []

    def on_event(self, event: RecordEvent) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()

    @property
    def event_types(self) -> list[RecordEventType]:
        return [e.event_type for e in self.events]


# -----------------------------------------------------------------------------
# Test Record Classes
# -----------------------------------------------------------------------------


class PointDTO(DataTransferObject):
    x: int
    y: int | None = None


class Point(ValueObject):
    """Value object with one required and one optional integer."""

    dto_class = PointDTO

    x: int
    y: int | None

    @classmethod
    def attribute_specifications(cls) -> dict[str, Any]:
        return {
            "x": {"validators": ["is_int"]},
            "y": {"validators": ["nullable_int"]},
        }


class Segment(ValueObject):
    """Value object with nested Points and no DTO class."""

    start: Point
    end: Point | None
    label: str

    @classmethod
    def attribute_specifications(cls) -> dict[str, Any]:
        return {
            "start": {"class": Point, "validators": ["not_null"]},
            "end": {"class": Point},
            "label": {"validators": ["is_string", "trim"]},
        }


_tokens = itertools.count(1)


class ArticleDTO(PartialDTO):
    id: int | None = None
    title: str | None = None
    slug: str | None = None
    tags: list[str] | None = None
    token: int | None = None
    stamp: str | None = None
    published_at: str | None = None


class Article(EntityState):
    """Entity state using every attribute specification."""

    dto_class = ArticleDTO

    id: int
    title: str
    slug: str
    tags: list[str]
    token: int
    stamp: str
    published_at: datetime | None

    @classmethod
    def attribute_specifications(cls) -> dict[str, Any]:
        return {
            "id": {
                "validators": ["is_int"],
                "options": AttributeOption.READONLY | AttributeOption.PRIMARY_KEY,
            },
            "title": {"validators": ["is_string", "trim", "not_empty"]},
            "slug": {"setter": "slug_setter", "validators": ["not_empty"]},
            "tags": {"default": []},
            "token": {"default": "next_token", "validators": ["is_int"]},
            "stamp": {"generator": lambda value: "auto" if value is None else value},
            "published_at": {"validators": ["nullable_date_time"], "getter": "iso_getter"},
        }

    @staticmethod
    def next_token() -> int:
        return next(_tokens)

    @staticmethod
    def slug_setter(
        attribute: str, path: str, values: dict[str, Any], result: OperationResult
    ) -> bool:
        value = values[attribute]
        if not isinstance(value, str):
            result.add_error(
                ErrorCode.VALIDATION,
                result.full_name(attribute, path),
                f"The {result.full_name(attribute, path, True)} must be text.",
            )
            return False
        values[attribute] = "-".join(value.lower().split())
        return True

    @staticmethod
    def iso_getter(attribute: str, value: datetime | None, options: GetterOption) -> str | None:
        return None if value is None else value.isoformat()


# -----------------------------------------------------------------------------
# Pytest Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def result() -> OperationResult:
    """Create a fresh OperationResult."""
    return OperationResult()


@pytest.fixture
def recording_observer() -> RecordingObserver:
    """Create a RecordingObserver instance."""
    return RecordingObserver()


@pytest.fixture
def article(result: OperationResult) -> Article:
    """Create a valid Article."""
    article = Article.create_from_dto({"id": 1, "title": "Hello", "slug": "Hello World"}, "", result)
    assert article is not None, result.get_errors()
    return article
