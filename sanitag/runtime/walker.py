# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Recursive, tag-driven traversal engine.

A :class:`Walker` is created for a single call and discarded afterwards; the
only shared collaborator is the policy lookup. ``walk(value)`` returns the
value the parent slot must hold once traversal is done:

* mutable records, lists and dicts are mutated in place and returned as-is;
* immutable composites (tuples, frozen records) are rebuilt only when
  something beneath them changed, and the caller writes the new object back
  into its own slot.

Traversal stops at the first error. Nothing is rolled back: fields rewritten
before the failure keep their new values.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, MutableMapping, MutableSequence, Set

from ..config import DEFAULT_MAX_DEPTH
from ..exceptions import RecursionLimitExceeded
from ..policy.base import Policy
from ..telemetry.metrics import field_sanitized_total
from .dispatch import Action, resolve_directive
from .introspection import (
    Kind,
    classify,
    is_frozen,
    is_zero,
    rebuild_sequence,
    record_fields,
)

_MISSING = object()


class Walker:
    """Walk one value graph, applying tag directives along the way.

    Args:
        lookup: Resolves a policy name, raising ``PolicyNotFoundError``.
        tag_key: Metadata key holding the policy name on record fields.
        max_depth: Maximum number of nested composites on one path.
    """

    def __init__(
        self,
        lookup: Callable[[str], Policy],
        tag_key: str,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._lookup = lookup
        self._tag_key = tag_key
        self._max_depth = max_depth
        self._active: Set[int] = set()
        self._depth = 0
        self._deepest = 0
        self._handlers: Dict[Kind, Callable[[Any], Any]] = {
            Kind.RECORD: self._walk_record,
            Kind.SEQUENCE: self._walk_sequence,
            Kind.MAPPING: self._walk_mapping,
        }

    def walk(self, value: Any) -> Any:
        """Sanitize *value* and return what its slot must hold afterwards."""
        if is_zero(value):
            return value

        handler = self._handlers.get(classify(value))
        if handler is None:
            # Absent references, strings without a field and scalars.
            return value

        node_id = id(value)
        if node_id in self._active:
            raise RecursionLimitExceeded(
                self._depth, f"reference cycle through {type(value).__qualname__}"
            )
        if self._depth >= self._max_depth:
            raise RecursionLimitExceeded(
                self._depth, f"nesting exceeds max_depth={self._max_depth}"
            )

        self._active.add(node_id)
        self._depth += 1
        if self._depth > self._deepest:
            self._deepest = self._depth
        try:
            return handler(value)
        finally:
            self._depth -= 1
            self._active.discard(node_id)

    @property
    def deepest(self) -> int:
        """Deepest nesting level reached so far."""
        return self._deepest

    def _walk_record(self, record: Any) -> Any:
        frozen = is_frozen(record)
        changes: Dict[str, Any] = {}

        for info in record_fields(record, self._tag_key):
            if not info.settable:
                continue

            current = getattr(record, info.name, _MISSING)
            if current is _MISSING:
                continue

            directive = resolve_directive(info.tag, current)
            if directive.action is Action.SKIP:
                continue
            if directive.action is Action.APPLY:
                updated = self._apply(directive.policy, current)
            else:
                updated = self.walk(current)

            if updated is current:
                continue
            if frozen:
                changes[info.name] = updated
            else:
                setattr(record, info.name, updated)

        if changes:
            return dataclasses.replace(record, **changes)
        return record

    def _apply(self, policy_name: str, text: str) -> str:
        policy = self._lookup(policy_name)
        sanitized = policy.sanitize(text)
        field_sanitized_total.add(1, {"policy": policy_name})
        return sanitized

    def _walk_sequence(self, sequence: Any) -> Any:
        if isinstance(sequence, tuple):
            items = [self.walk(item) for item in sequence]
            if all(new is old for new, old in zip(items, sequence)):
                return sequence
            return rebuild_sequence(sequence, items)

        mutable: MutableSequence = sequence
        for index in range(len(mutable)):
            item = mutable[index]
            updated = self.walk(item)
            if updated is not item:
                mutable[index] = updated
        return mutable

    def _walk_mapping(self, mapping: MutableMapping) -> MutableMapping:
        # Values are read out, walked and written back under the same key;
        # keys themselves are never touched.
        for key in list(mapping.keys()):
            value = mapping[key]
            updated = self.walk(value)
            if updated is not value:
                mapping[key] = updated
        return mapping


__all__ = ["Walker"]
