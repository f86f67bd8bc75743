# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Per-field directive resolution."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from ..config import SKIP_MARKER


class Action(enum.Enum):
    SKIP = "skip"
    APPLY = "apply"
    RECURSE = "recurse"


@dataclass(frozen=True)
class Directive:
    """What the engine does with one record field."""

    action: Action
    policy: Optional[str] = None


SKIP = Directive(Action.SKIP)
RECURSE = Directive(Action.RECURSE)


def resolve_directive(tag: Optional[str], value: Any) -> Directive:
    """Resolve the directive for a field holding *value* tagged with *tag*.

    ``"-"`` skips the field and everything beneath it. A non-empty tag on a
    string applies that policy. Anything else is recursed into, so nested
    composites are always searched for deeper tags; recursing into an
    untagged string is a no-op.
    """
    if tag == SKIP_MARKER:
        return SKIP
    if tag and isinstance(value, str):
        return Directive(Action.APPLY, tag)
    return RECURSE


__all__ = ["Action", "Directive", "SKIP", "RECURSE", "resolve_directive"]
