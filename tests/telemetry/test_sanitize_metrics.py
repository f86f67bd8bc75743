# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Tests that sanitize calls feed the OpenTelemetry instruments."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

import sanitag.policy.registry as registry_module
import sanitag.runtime.walker as walker_module
import sanitag.telemetry.metrics as metrics_module
from sanitag import PolicyNotFoundError, Sanitizer, policy_field
from sanitag.telemetry import record_call_metrics


class RecordingInstrument:
    def __init__(self):
        self.calls = []

    def add(self, amount, attributes=None):
        self.calls.append((amount, dict(attributes or {})))

    def record(self, amount, attributes=None):
        self.calls.append((amount, dict(attributes or {})))


class ExplodingInstrument:
    def add(self, amount, attributes=None):
        raise RuntimeError("exporter down")

    def record(self, amount, attributes=None):
        raise RuntimeError("exporter down")


@dataclass
class Profile:
    name: str = policy_field("upper", default="")
    bio: str = policy_field("missing", default="")


@pytest.fixture()
def instruments(monkeypatch):
    recorded = {
        "calls": RecordingInstrument(),
        "latency": RecordingInstrument(),
        "fields": RecordingInstrument(),
        "not_found": RecordingInstrument(),
    }
    monkeypatch.setattr(metrics_module, "sanitize_call_total", recorded["calls"])
    monkeypatch.setattr(metrics_module, "sanitize_latency_ms", recorded["latency"])
    monkeypatch.setattr(walker_module, "field_sanitized_total", recorded["fields"])
    monkeypatch.setattr(registry_module, "policy_not_found_total", recorded["not_found"])
    return recorded


def test_successful_value_call(instruments):
    sanitizer = Sanitizer({"upper": str.upper, "missing": str.strip})

    sanitizer.sanitize_value(Profile(name="rick", bio=" b "))

    assert instruments["calls"].calls == [
        (1, {"operation": "sanitize_value", "status": "success"})
    ]
    assert [attrs["policy"] for _, attrs in instruments["fields"].calls] == ["upper", "missing"]
    (latency, attrs), = instruments["latency"].calls
    assert latency >= 0
    assert attrs == {"operation": "sanitize_value"}


def test_missing_policy_is_counted(instruments):
    sanitizer = Sanitizer({"upper": str.upper})

    with pytest.raises(PolicyNotFoundError):
        sanitizer.sanitize_value(Profile(name="rick", bio="b"))

    assert instruments["not_found"].calls == [(1, {})]
    assert instruments["calls"].calls == [
        (1, {"operation": "sanitize_value", "status": "policy_not_found"})
    ]


def test_string_call_outcomes(instruments):
    sanitizer = Sanitizer({"upper": str.upper})

    sanitizer.sanitize_string("upper", "x")
    with pytest.raises(PolicyNotFoundError):
        sanitizer.sanitize_string("nope", "x")

    statuses = [attrs["status"] for _, attrs in instruments["calls"].calls]
    assert statuses == ["success", "policy_not_found"]


def test_zero_record_records_nothing(instruments):
    Sanitizer().sanitize_value(Profile())

    assert instruments["calls"].calls == []


def test_broken_exporter_does_not_leak(monkeypatch):
    monkeypatch.setattr(metrics_module, "sanitize_call_total", ExplodingInstrument())
    monkeypatch.setattr(metrics_module, "sanitize_latency_ms", ExplodingInstrument())

    record_call_metrics("sanitize_string", "success", 0.0)

    assert Sanitizer({"upper": str.upper}).sanitize_string("upper", "x") == "X"
