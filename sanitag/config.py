# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Package-wide constants and environment-driven defaults.

Environment variables (read when a ``Sanitizer`` is built without explicit values):

* ``SANITAG_TAG_KEY`` – metadata key holding the policy name (default ``"sanitize"``).
* ``SANITAG_MAX_DEPTH`` – maximum nesting depth before traversal aborts (default 200).
"""

from __future__ import annotations

import logging
import os
from typing import Final

logger = logging.getLogger(__name__)

DEFAULT_TAG_KEY: Final[str] = "sanitize"
SKIP_MARKER: Final[str] = "-"
DEFAULT_MAX_DEPTH: Final[int] = 200

TAG_KEY_ENV: Final[str] = "SANITAG_TAG_KEY"
MAX_DEPTH_ENV: Final[str] = "SANITAG_MAX_DEPTH"


def default_tag_key() -> str:
    """Return the tag key configured via ``SANITAG_TAG_KEY`` or the built-in default."""

    return os.getenv(TAG_KEY_ENV, "").strip() or DEFAULT_TAG_KEY


def default_max_depth() -> int:
    """Return the depth limit configured via ``SANITAG_MAX_DEPTH``.

    Malformed or non-positive values are ignored with a warning.
    """

    raw = os.getenv(MAX_DEPTH_ENV)
    if raw is None or raw.strip() == "":
        return DEFAULT_MAX_DEPTH

    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed %s value: %r", MAX_DEPTH_ENV, raw)
        return DEFAULT_MAX_DEPTH

    if value <= 0:
        logger.warning("Ignoring non-positive %s value: %r", MAX_DEPTH_ENV, raw)
        return DEFAULT_MAX_DEPTH

    return value


__all__ = [
    "DEFAULT_TAG_KEY",
    "SKIP_MARKER",
    "DEFAULT_MAX_DEPTH",
    "TAG_KEY_ENV",
    "MAX_DEPTH_ENV",
    "default_tag_key",
    "default_max_depth",
]
