"""Runtime package - value introspection, field dispatch and traversal."""

from .dispatch import Action, Directive, resolve_directive
from .introspection import FieldInfo, Kind, classify, is_record, is_zero, record_fields
from .walker import Walker

__all__ = [
    "Action",
    "Directive",
    "resolve_directive",
    "FieldInfo",
    "Kind",
    "classify",
    "is_record",
    "is_zero",
    "record_fields",
    "Walker",
]
