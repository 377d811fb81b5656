"""Per-class metadata resolution helpers.

Record metadata (attribute lists, classes, validators, defaults, ...) is
derived once per concrete class from its attribute specifications and kept
for the lifetime of the process.
"""

from __future__ import annotations

import functools
import inspect
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, TypeVar, get_origin

from abstract_record_base.exceptions import RecordConfigurationError

__all__ = ["class_cached", "declared_attributes", "normalize_callables"]

logger = logging.getLogger(__name__)

R = TypeVar("R")

# Re-entrant: building one table may need another (validators need the map).
_cache_lock = threading.RLock()


def class_cached(func: Callable[[Any], R]) -> classmethod:  # type: ignore[type-arg]
    """Turn ``func(cls)`` into a classmethod memoized per concrete class.

    The first call for a class computes the value under a process-wide lock;
    later calls read the cache without locking. A call that raises leaves no
    entry behind.

    Example:
        class Record:
            @class_cached
            def attribute_list(cls) -> list[str]:
                return list(cls.attribute_specifications())
    """
    cache: dict[type, R] = {}

    @functools.wraps(func)
    def wrapper(cls: type) -> R:
        try:
            return cache[cls]
        except KeyError:
            pass
        with _cache_lock:
            if cls not in cache:
                cache[cls] = func(cls)
                logger.debug("Resolved %s.%s", cls.__qualname__, func.__name__)
            return cache[cls]

    wrapper.cache_clear = cache.clear  # type: ignore[attr-defined]
    return classmethod(wrapper)


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def declared_attributes(cls: type) -> set[str]:
    """Names annotated as instance attributes on ``cls`` or its bases."""
    names: set[str] = set()
    for klass in cls.__mro__:
        for name, annotation in inspect.get_annotations(klass).items():
            if not _is_class_var(annotation):
                names.add(name)
    return names


def _iter_references(values: Any) -> list[tuple[str | None, Any]]:
    """Flatten a specification value into ``(key, reference)`` pairs.

    Accepts a mapping ``{name: reference}``, a list/tuple whose items are
    references or ``(name, reference)`` pairs, or a single reference.
    """
    if values is None:
        return []
    if isinstance(values, Mapping):
        return [(str(key), value) for key, value in values.items()]
    if isinstance(values, (list, tuple)):
        pairs: list[tuple[str | None, Any]] = []
        for item in values:
            if (
                isinstance(item, tuple)
                and len(item) == 2
                and isinstance(item[0], str)
                and callable(item[1])
            ):
                pairs.append((item[0], item[1]))
            else:
                pairs.append((None, item))
        return pairs
    return [(None, values)]


def normalize_callables(
    owner: type,
    values: Any,
    *,
    callable_only: bool,
    strict_names: bool,
    spec_name: str,
    attribute: str | None = None,
    callable_map: Mapping[str, Callable[..., Any]] | None = None,
) -> dict[str, Any]:
    """Resolve heterogeneous callable references into a ``{name: value}`` table.

    A reference is resolved, in order, as:

    1. a string key of ``callable_map``;
    2. a string naming a callable attribute (static or class method) of ``owner``;
    3. an inline callable, which must have a string key when ``strict_names``
       is set (unnamed ones are keyed ``"#<position>"`` otherwise).

    Unresolvable references raise RecordConfigurationError when
    ``callable_only`` is set; otherwise they are skipped.

    Args:
        owner: Record class the references belong to.
        values: The specification value (see `_iter_references()`).
        callable_only: Whether every reference must resolve to a callable.
        strict_names: Whether inline callables must be given a string key.
        spec_name: Specification name, for error messages.
        attribute: Attribute name, for error messages.
        callable_map: Named callables (e.g. the validators map).

    Returns:
        Ordered mapping of names to callables.

    Raises:
        RecordConfigurationError: If a reference cannot be resolved.
    """
    result: dict[str, Any] = {}

    for position, (key, value) in enumerate(_iter_references(values)):
        where = f"{owner.__qualname__}.{attribute or key or ''}[{spec_name}]"
        if isinstance(value, str) and callable_map is not None and value in callable_map:
            result[key or value] = callable_map[value]
        elif isinstance(value, str) and callable(getattr(owner, value, None)):
            result[key or value] = getattr(owner, value)
        elif callable(value):
            if key is None:
                if strict_names:
                    raise RecordConfigurationError(
                        f"Inline callable #{position} must be given a string name at {where}."
                    )
                key = f"#{position}"
            result[key] = value
        elif callable_only:
            raise RecordConfigurationError(f"Invalid callable {value!r} at {where}.")

    return result
