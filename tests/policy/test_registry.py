# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Unit tests for PolicyRegistry (registration, removal, lookup)."""

from __future__ import annotations

import pytest

from sanitag.exceptions import ConfigurationError, PolicyNotFoundError, ReservedNameError
from sanitag.policy import PolicyFunc, PolicyRegistry


class _Upper:
    def sanitize(self, text: str) -> str:
        return text.upper()


def test_lookup_returns_registered_policy():
    policy = _Upper()
    registry = PolicyRegistry({"upper": policy})

    assert registry.lookup("upper") is policy
    assert "upper" in registry
    assert len(registry) == 1


def test_plain_callables_are_wrapped_in_policy_func():
    registry = PolicyRegistry()
    registry.add("noop", lambda s: s)

    resolved = registry.lookup("noop")
    assert isinstance(resolved, PolicyFunc)
    assert resolved.sanitize("<b>x</b>") == "<b>x</b>"


def test_add_overwrites_existing_policy():
    registry = PolicyRegistry({"p": lambda s: "first"})
    registry.add("p", lambda s: "second")

    assert registry.lookup("p").sanitize("x") == "second"
    assert registry.names() == ["p"]


def test_lookup_unknown_policy_raises():
    registry = PolicyRegistry()

    with pytest.raises(PolicyNotFoundError) as error:
        registry.lookup("missing")

    assert error.value.policy == "missing"
    assert 'policy "missing": sanitization policy not found' in str(error.value)


def test_remove_unregisters_policy():
    registry = PolicyRegistry({"removeme": lambda s: s})
    registry.remove("removeme")

    assert "removeme" not in registry
    with pytest.raises(PolicyNotFoundError):
        registry.lookup("removeme")


def test_remove_absent_name_is_noop():
    registry = PolicyRegistry({"keep": lambda s: s})
    registry.remove("never-registered")

    assert registry.names() == ["keep"]


@pytest.mark.parametrize("initial", [{}, {"strict": str.strip}, {"a": str.lower, "b": str.upper}])
def test_reserved_name_always_rejected(initial):
    registry = PolicyRegistry(initial)

    with pytest.raises(ReservedNameError) as error:
        registry.add("-", lambda s: s)

    assert isinstance(error.value, ConfigurationError)
    assert error.value.name == "-"
    assert "-" not in registry
    assert registry.names() == sorted(initial)


def test_reserved_name_rejected_at_construction():
    with pytest.raises(ReservedNameError):
        PolicyRegistry({"-": lambda s: s})


@pytest.mark.parametrize("name", ["", None, 42])
def test_invalid_names_rejected(name):
    with pytest.raises(ConfigurationError):
        PolicyRegistry().add(name, lambda s: s)


def test_non_callable_policy_rejected():
    with pytest.raises(ConfigurationError, match="sanitize"):
        PolicyRegistry().add("broken", "not a policy")


def test_names_returns_sorted_snapshot():
    registry = PolicyRegistry({"ugc": str.strip, "strict": str.strip, "custom": str.strip})
    names = registry.names()

    registry.remove("ugc")

    assert names == ["custom", "strict", "ugc"]
    assert registry.names() == ["custom", "strict"]
