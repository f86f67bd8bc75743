# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for the sanitag package.

Every error raised by the library derives from :class:`SanitagError` so
callers can catch the whole family in one place:

* :class:`ConfigurationError` – invalid registration / configuration,
  including :class:`ReservedNameError` for the ``"-"`` skip marker.
* :class:`InvalidInputError` – ``sanitize_value`` received something that is
  not a mutable dataclass instance.
* :class:`PolicyNotFoundError` – a tag or a direct call names an unknown policy.
* :class:`RecursionLimitExceeded` – the value graph is cyclic or too deep.
"""

from __future__ import annotations

from typing import Optional


class SanitagError(Exception):
    """Base class for all sanitag errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(SanitagError):
    """Raised when a sanitizer or registry is configured incorrectly."""


class ReservedNameError(ConfigurationError):
    """Raised when a policy is registered under the reserved skip marker."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'policy name "{name}" is reserved for skipping sanitization')


class InvalidInputError(SanitagError):
    """Raised when the root handed to ``sanitize_value`` cannot be sanitized in place."""

    def __init__(self, value_type: type, reason: Optional[str] = None):
        self.value_type = value_type
        message = f"expected dataclass instance, got {value_type.__qualname__}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PolicyNotFoundError(SanitagError):
    """Raised when a requested sanitization policy is not registered."""

    def __init__(self, policy: str):
        self.policy = policy
        super().__init__(f'policy "{policy}": sanitization policy not found')


class RecursionLimitExceeded(SanitagError):
    """Raised when traversal meets a reference cycle or nests deeper than allowed."""

    def __init__(self, depth: int, reason: str):
        self.depth = depth
        super().__init__(f"traversal aborted at depth {depth}: {reason}")


__all__ = [
    "SanitagError",
    "ConfigurationError",
    "ReservedNameError",
    "InvalidInputError",
    "PolicyNotFoundError",
    "RecursionLimitExceeded",
]
