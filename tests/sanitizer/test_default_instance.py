# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Tests for the process-wide default sanitizer and module-level helpers.

Every test that swaps the default uses the ``restore_default`` fixture so the
original instance is reinstated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

import sanitag
from sanitag import Sanitizer, policy_field
from sanitag.exceptions import ConfigurationError, PolicyNotFoundError

XSS = "<script>alert('xss')</script>Hello <b>World</b>"


def test_default_has_strict_policy(restore_default):
    assert sanitag.default().sanitize_string("strict", XSS) == "Hello World"


def test_default_has_ugc_policy(restore_default):
    assert sanitag.default().sanitize_string("ugc", XSS) == "Hello <b>World</b>"


def test_default_policy_names(restore_default):
    assert sanitag.default().policy_names() == ["strict", "ugc"]


def test_set_default_swaps_instance(restore_default):
    custom = Sanitizer({"custom": lambda s: "CUSTOM: " + s})

    previous = sanitag.set_default(custom)

    assert previous is restore_default
    assert sanitag.default() is custom
    assert sanitag.sanitize_string("custom", "test") == "CUSTOM: test"
    with pytest.raises(PolicyNotFoundError):
        sanitag.sanitize_string("strict", "test")


def test_set_default_rejects_non_sanitizer(restore_default):
    with pytest.raises(ConfigurationError):
        sanitag.set_default(object())

    assert sanitag.default() is restore_default


def test_global_sanitize_string_call(restore_default):
    assert sanitag.sanitize_string("strict", XSS) == "Hello World"


def test_global_sanitize_value_call(restore_default):
    @dataclass
    class Form:
        field_value: str = policy_field("strict", default="")

    value = Form(field_value=XSS)
    sanitag.sanitize_value(value)

    assert value.field_value == "Hello World"


def test_captured_instance_survives_swap(restore_default):
    captured = sanitag.default()
    sanitag.set_default(Sanitizer())

    assert captured.sanitize_string("strict", "<b>x</b>") == "x"


def test_sanitize_string_unknown_policy(restore_default):
    with pytest.raises(PolicyNotFoundError) as error:
        sanitag.sanitize_string("unknown", "Hello World")

    assert error.value.policy == "unknown"
