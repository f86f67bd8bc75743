"""Telemetry package - OpenTelemetry meter, tracer and instruments."""

from .runtime import get_tracer, meter
from .metrics import (
    field_sanitized_total,
    policy_not_found_total,
    record_call_metrics,
    registry_policies,
    sanitize_call_total,
    sanitize_latency_ms,
)

__all__ = [
    "get_tracer",
    "meter",
    "field_sanitized_total",
    "policy_not_found_total",
    "record_call_metrics",
    "registry_policies",
    "sanitize_call_total",
    "sanitize_latency_ms",
]
