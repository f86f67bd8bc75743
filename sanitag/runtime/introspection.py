# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Minimal dynamic-value abstraction used by the traversal engine.

Every runtime value is classified into exactly one :class:`Kind`. Records are
dataclass instances; their fields carry tags in ``dataclasses.field``
metadata. Python has no explicit pointers, so the only "reference" state the
engine distinguishes is the absent reference ``None``.
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import numbers
from collections.abc import MutableMapping, MutableSequence, Sized
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple


class Kind(enum.Enum):
    """Shape of a value as seen by the traversal engine."""

    ABSENT = "absent"
    RECORD = "record"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STRING = "string"
    SCALAR = "scalar"


@dataclass(frozen=True)
class FieldInfo:
    """Static description of one record field."""

    name: str
    tag: Optional[str]
    settable: bool


_MISSING = object()


def is_record(value: Any) -> bool:
    """Return True for dataclass *instances* (dataclass types are not records)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_frozen(record: Any) -> bool:
    params = getattr(type(record), "__dataclass_params__", None)
    return bool(getattr(params, "frozen", False))


def classify(value: Any) -> Kind:
    """Return the :class:`Kind` of *value*."""
    if value is None:
        return Kind.ABSENT
    if isinstance(value, str):
        return Kind.STRING
    if is_record(value):
        return Kind.RECORD
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Kind.SCALAR
    if isinstance(value, MutableMapping):
        return Kind.MAPPING
    if isinstance(value, (tuple, MutableSequence)):
        return Kind.SEQUENCE
    return Kind.SCALAR


def is_zero(value: Any) -> bool:
    """Return True if *value* is the zero value of its type.

    Zero values are ``None``, numeric zero (including ``False``), empty sized
    containers and strings, and records whose fields are all zero. A field
    holding a record is a non-absent reference and therefore never zero.
    """
    if value is None:
        return True
    if is_record(value):
        return all(_is_shallow_zero(getattr(value, f.name, _MISSING)) for f in dataclasses.fields(value))
    return _is_shallow_zero(value)


def _is_shallow_zero(value: Any) -> bool:
    if value is None or value is _MISSING:
        return True
    if is_record(value):
        return False
    if isinstance(value, numbers.Number):
        try:
            return bool(value == 0)
        except (TypeError, ValueError):
            return False
    if isinstance(value, Sized):
        return len(value) == 0
    return False


@functools.lru_cache(maxsize=1024)
def _describe_fields(cls: type, tag_key: str, frozen: bool) -> Tuple[FieldInfo, ...]:
    described = []
    for f in dataclasses.fields(cls):
        tag = f.metadata.get(tag_key) if f.metadata else None
        settable = not f.name.startswith("_") and (f.init or not frozen)
        described.append(FieldInfo(name=f.name, tag=tag, settable=settable))
    return tuple(described)


def record_fields(record: Any, tag_key: str) -> Tuple[FieldInfo, ...]:
    """Describe the fields of *record*, reading each tag under *tag_key*.

    Private fields (leading underscore) are never settable. On frozen records
    only ``init=True`` fields are settable, since changes are applied through
    ``dataclasses.replace``.
    """
    return _describe_fields(type(record), tag_key, is_frozen(record))


def rebuild_sequence(original: tuple, items: Iterable[Any]) -> tuple:
    """Build a tuple of the same type as *original* holding *items*."""
    cls = type(original)
    if hasattr(cls, "_make"):
        return cls._make(items)
    if cls is tuple:
        return tuple(items)
    return cls(items)


__all__ = [
    "Kind",
    "FieldInfo",
    "classify",
    "is_frozen",
    "is_record",
    "is_zero",
    "record_fields",
    "rebuild_sequence",
]
