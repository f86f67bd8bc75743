# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Policy protocol and adapters.

A policy is anything exposing ``sanitize(text) -> str``. Plain callables are
accepted wherever a policy is expected and are wrapped in :class:`PolicyFunc`.
Policies may be invoked from several threads at once; the engine never holds
a lock around them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Union, runtime_checkable

from ..exceptions import ConfigurationError


@runtime_checkable
class Policy(Protocol):
    """A named text transformation, opaque to the traversal engine."""

    def sanitize(self, text: str) -> str:
        ...


@dataclass(frozen=True)
class PolicyFunc:
    """Adapt a ``str -> str`` callable to the :class:`Policy` protocol."""

    func: Callable[[str], str]

    def sanitize(self, text: str) -> str:
        return self.func(text)


PolicyLike = Union[Policy, Callable[[str], str]]


def as_policy(candidate: Any) -> Policy:
    """Return *candidate* as a :class:`Policy`, wrapping bare callables.

    Raises:
        ConfigurationError: If *candidate* is neither a policy nor callable.
    """
    if callable(getattr(candidate, "sanitize", None)):
        return candidate
    if callable(candidate):
        return PolicyFunc(candidate)
    raise ConfigurationError(
        f"policy must expose sanitize(text) or be callable, got {type(candidate).__qualname__}"
    )


__all__ = ["Policy", "PolicyFunc", "PolicyLike", "as_policy"]
