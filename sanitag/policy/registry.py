# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Thread-safe registry of named sanitization policies.

Lookups share a reader/writer lock and never block each other; ``add`` and
``remove`` take it exclusively. The lock only spans the dictionary access, so
a slow or re-entrant policy (one that itself sanitizes through the same
registry) can neither stall writers nor deadlock.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Mapping, Optional

from ..config import SKIP_MARKER
from ..exceptions import ConfigurationError, PolicyNotFoundError, ReservedNameError
from ..telemetry.metrics import policy_not_found_total, registry_policies
from .base import Policy, PolicyLike, as_policy

logger = logging.getLogger(__name__)


class _ReadWriteLock:
    """Many readers or one writer. Waiting writers hold off new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class PolicyRegistry:
    """Mapping of policy name to :class:`Policy` safe for concurrent use.

    The name ``"-"`` is reserved for the skip marker and can never be a key.

    Example:
        ```python
        registry = PolicyRegistry({"upper": str.upper})
        registry.lookup("upper").sanitize("abc")  # "ABC"
        ```
    """

    def __init__(self, policies: Optional[Mapping[str, PolicyLike]] = None):
        self._lock = _ReadWriteLock()
        self._policies: Dict[str, Policy] = {}
        for name, policy in (policies or {}).items():
            self.add(name, policy)

    def add(self, name: str, policy: PolicyLike) -> None:
        """Register *policy* under *name*, replacing any previous entry.

        Raises:
            ReservedNameError: If *name* is the skip marker ``"-"``.
            ConfigurationError: If *name* is empty or *policy* is not usable.
        """
        if name == SKIP_MARKER:
            logger.error("Refusing to register policy under reserved name %r", name)
            raise ReservedNameError(name)
        if not isinstance(name, str) or not name:
            logger.error("Refusing to register policy under invalid name %r", name)
            raise ConfigurationError(f"policy name must be a non-empty string, got {name!r}")

        resolved = as_policy(policy)

        with self._lock.write_locked():
            replaced = name in self._policies
            self._policies[name] = resolved

        if not replaced:
            registry_policies.add(1)
        logger.debug("Registered sanitization policy '%s' (replaced=%s)", name, replaced)

    def remove(self, name: str) -> None:
        """Unregister *name*; removing an unknown name is a no-op."""
        with self._lock.write_locked():
            removed = self._policies.pop(name, None) is not None

        if removed:
            registry_policies.add(-1)
            logger.debug("Removed sanitization policy '%s'", name)

    def lookup(self, name: str) -> Policy:
        """Return the policy registered under *name*.

        Raises:
            PolicyNotFoundError: If no policy is registered under *name*.
        """
        with self._lock.read_locked():
            policy = self._policies.get(name)

        if policy is None:
            policy_not_found_total.add(1)
            raise PolicyNotFoundError(name)
        return policy

    def names(self) -> List[str]:
        """Return a sorted snapshot of the registered policy names."""
        with self._lock.read_locked():
            return sorted(self._policies)

    def __contains__(self, name: object) -> bool:
        with self._lock.read_locked():
            return name in self._policies

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._policies)

    def __repr__(self) -> str:
        return f"PolicyRegistry(names={self.names()!r})"


__all__ = ["PolicyRegistry"]
