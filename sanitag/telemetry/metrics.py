# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for the sanitag package."""

from __future__ import annotations

import time

from .runtime import meter

field_sanitized_total = meter.create_counter(
    name="sanitag.field.sanitized.total",
    description="Counts record fields rewritten by a sanitization policy.",
    unit="1",
)

policy_not_found_total = meter.create_counter(
    name="sanitag.policy.not_found.total",
    description="Counts lookups of a policy name that is not registered.",
    unit="1",
)

sanitize_call_total = meter.create_counter(
    name="sanitag.sanitize.call.total",
    description="Counts sanitize_string / sanitize_value calls partitioned by outcome.",
    unit="1",
)

sanitize_latency_ms = meter.create_histogram(
    name="sanitag.sanitize.latency.ms",
    description="Time spent inside a single sanitize_string / sanitize_value call.",
    unit="ms",
)

registry_policies = meter.create_up_down_counter(
    name="sanitag.registry.policies",
    description="Number of policies currently registered across all registries.",
    unit="1",
)


# ==============================================================================
# Call Metrics Recording
# ==============================================================================


def record_call_metrics(operation: str, status: str, started_at: float) -> None:
    """Record latency and outcome for one public sanitize call.

    Args:
        operation: ``"sanitize_string"`` or ``"sanitize_value"``
        status: Call outcome (``"success"``, ``"policy_not_found"``, ``"error"``, ...)
        started_at: Timestamp from time.perf_counter() when the call started
    """
    duration_ms = (time.perf_counter() - started_at) * 1000.0
    try:
        sanitize_latency_ms.record(duration_ms, {"operation": operation})
        sanitize_call_total.add(1, {"operation": operation, "status": status})
    except Exception:
        # Telemetry must never interfere with user code
        pass


__all__ = [
    "field_sanitized_total",
    "policy_not_found_total",
    "sanitize_call_total",
    "sanitize_latency_ms",
    "registry_policies",
    "record_call_metrics",
]
