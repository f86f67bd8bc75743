# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Sanitizer facade and the process-wide default instance.

A :class:`Sanitizer` pairs a :class:`~sanitag.policy.PolicyRegistry` with the
traversal engine. Fields opt in to sanitization through dataclass metadata:

.. code-block:: python

    from dataclasses import dataclass, field
    import sanitag

    @dataclass
    class Character:
        name: str = field(metadata={"sanitize": "strict"})
        bio: str = sanitag.policy_field("ugc", default="")

    character = Character(name="<script>x</script>Rick <b>Sanchez</b>")
    sanitag.sanitize_value(character)
    assert character.name == "Rick Sanchez"

The module-level helpers delegate to :func:`default`, which can be swapped
with :func:`set_default`. A call that has already fetched the default keeps
using that instance until it returns.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
import threading
import time
from typing import Any, List, Mapping, Optional

import anyio

from .config import DEFAULT_TAG_KEY, default_max_depth, default_tag_key
from .exceptions import (
    ConfigurationError,
    InvalidInputError,
    PolicyNotFoundError,
    RecursionLimitExceeded,
)
from .policy.base import PolicyLike
from .policy.html import strict_policy, ugc_policy
from .policy.registry import PolicyRegistry
from .runtime.introspection import is_frozen, is_record, is_zero
from .runtime.walker import Walker
from .telemetry import get_tracer, record_call_metrics

logger = logging.getLogger(__name__)


class Sanitizer:
    """Tag-driven sanitizer for nested dataclass values.

    :param policies: Optional mapping of policy name to a policy object (anything
                     with ``sanitize(text) -> str``) or a plain callable.
    :param tag_key: Metadata key read from dataclass fields. Defaults to
                    ``SANITAG_TAG_KEY`` or ``"sanitize"``.
    :param max_depth: Nesting depth at which traversal aborts with
                      :class:`~sanitag.exceptions.RecursionLimitExceeded`.
                      Defaults to ``SANITAG_MAX_DEPTH`` or 200.
    :raises ReservedNameError: If a policy is named ``"-"``.
    """

    def __init__(
        self,
        policies: Optional[Mapping[str, PolicyLike]] = None,
        *,
        tag_key: Optional[str] = None,
        max_depth: Optional[int] = None,
    ):
        if tag_key is not None and (not isinstance(tag_key, str) or not tag_key):
            logger.error("Invalid sanitizer tag key: %r", tag_key)
            raise ConfigurationError(f"tag_key must be a non-empty string, got {tag_key!r}")
        if max_depth is not None and (
            not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth <= 0
        ):
            logger.error("Invalid sanitizer max_depth: %r", max_depth)
            raise ConfigurationError(f"max_depth must be a positive int, got {max_depth!r}")

        self._tag_key = tag_key or default_tag_key()
        self._max_depth = max_depth or default_max_depth()
        self._registry = PolicyRegistry(policies)

    @property
    def tag_key(self) -> str:
        return self._tag_key

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def registry(self) -> PolicyRegistry:
        return self._registry

    def add(self, name: str, policy: PolicyLike) -> None:
        """Register *policy* under *name*. The name ``"-"`` is rejected."""
        self._registry.add(name, policy)

    def remove(self, name: str) -> None:
        """Remove the policy registered under *name*, if any."""
        self._registry.remove(name)

    def policy_names(self) -> List[str]:
        return self._registry.names()

    def sanitize_string(self, policy: str, text: str) -> str:
        """Apply the policy registered as *policy* to *text*.

        Raises:
            PolicyNotFoundError: If *policy* is not registered.
        """
        started_at = time.perf_counter()
        try:
            result = self._registry.lookup(policy).sanitize(text)
        except PolicyNotFoundError:
            record_call_metrics("sanitize_string", "policy_not_found", started_at)
            raise
        except Exception:
            record_call_metrics("sanitize_string", "error", started_at)
            raise
        record_call_metrics("sanitize_string", "success", started_at)
        return result

    def sanitize_value(self, value: Any) -> None:
        """Sanitize every tagged string field reachable from *value*, in place.

        ``None`` and records whose fields are all zero (frozen or not) are
        accepted as no-ops.

        Raises:
            InvalidInputError: If *value* is not a mutable dataclass instance.
            PolicyNotFoundError: If a tag names an unregistered policy. Fields
                rewritten before the failure keep their new values.
            RecursionLimitExceeded: On reference cycles or excessive nesting.
        """
        if value is None:
            return
        if not is_record(value):
            raise InvalidInputError(type(value))
        if is_zero(value):
            return
        if is_frozen(value):
            raise InvalidInputError(type(value), "frozen dataclasses cannot be sanitized in place")

        started_at = time.perf_counter()
        status = "success"
        with get_tracer("sanitag").start_as_current_span(
            "sanitag.sanitize_value",
            attributes={"sanitag.type": type(value).__qualname__, "sanitag.tag_key": self._tag_key},
        ):
            logger.debug("Sanitizing %s with tag key '%s'", type(value).__qualname__, self._tag_key)
            walker = Walker(self._registry.lookup, self._tag_key, self._max_depth)
            try:
                walker.walk(value)
            except PolicyNotFoundError:
                status = "policy_not_found"
                raise
            except RecursionLimitExceeded:
                status = "recursion_limit"
                raise
            except RecursionError as exc:
                status = "recursion_limit"
                raise RecursionLimitExceeded(
                    walker.deepest, "nesting exceeds the interpreter recursion limit"
                ) from exc
            except Exception:
                status = "error"
                raise
            finally:
                record_call_metrics("sanitize_value", status, started_at)
                logger.debug("Finished sanitizing %s (status=%s)", type(value).__qualname__, status)

    async def asanitize_string(self, policy: str, text: str) -> str:
        """Async variant of :meth:`sanitize_string`, run in a worker thread."""
        return await anyio.to_thread.run_sync(functools.partial(self.sanitize_string, policy, text))

    async def asanitize_value(self, value: Any) -> None:
        """Async variant of :meth:`sanitize_value`, run in a worker thread."""
        await anyio.to_thread.run_sync(functools.partial(self.sanitize_value, value))

    def __repr__(self) -> str:
        return f"Sanitizer(tag_key={self._tag_key!r}, policies={self.policy_names()!r})"


def policy_field(policy: str, *, key: str = DEFAULT_TAG_KEY, **field_kwargs: Any) -> Any:
    """Return a ``dataclasses.field`` tagged with *policy* under *key*.

    Extra keyword arguments are forwarded to ``dataclasses.field``; any
    ``metadata`` passed in is preserved alongside the tag.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[key] = policy
    return dataclasses.field(metadata=metadata, **field_kwargs)


# ==============================================================================
# Process-wide default instance
# ==============================================================================

_DEFAULT_LOCK = threading.Lock()
_DEFAULT: Sanitizer = Sanitizer({"strict": strict_policy(), "ugc": ugc_policy()})


def default() -> Sanitizer:
    """Return the process-wide default sanitizer.

    The initial instance carries the ``"strict"`` and ``"ugc"`` HTML policies.
    """
    return _DEFAULT


def set_default(sanitizer: Sanitizer) -> Sanitizer:
    """Replace the process-wide default sanitizer and return the previous one."""
    global _DEFAULT
    if not isinstance(sanitizer, Sanitizer):
        logger.error("Refusing to install %r as default sanitizer", sanitizer)
        raise ConfigurationError(
            f"default sanitizer must be a Sanitizer, got {type(sanitizer).__qualname__}"
        )
    with _DEFAULT_LOCK:
        previous, _DEFAULT = _DEFAULT, sanitizer
    logger.debug("Default sanitizer replaced: %r", sanitizer)
    return previous


def sanitize_string(policy: str, text: str) -> str:
    """Apply *policy* to *text* using the default sanitizer."""
    return default().sanitize_string(policy, text)


def sanitize_value(value: Any) -> None:
    """Sanitize *value* in place using the default sanitizer."""
    default().sanitize_value(value)


async def asanitize_string(policy: str, text: str) -> str:
    return await default().asanitize_string(policy, text)


async def asanitize_value(value: Any) -> None:
    await default().asanitize_value(value)


__all__ = [
    "Sanitizer",
    "policy_field",
    "default",
    "set_default",
    "sanitize_string",
    "sanitize_value",
    "asanitize_string",
    "asanitize_value",
]
