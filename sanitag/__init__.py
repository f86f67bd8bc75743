# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""sanitag - tag-driven sanitization of nested dataclass values.

Mark dataclass fields with a policy name under the ``"sanitize"`` metadata key
(or ``"-"`` to skip a whole subtree) and sanitize everything in one call::

    sanitag.sanitize_value(obj)
    sanitag.sanitize_string("strict", "<b>hi</b>")
"""

from .config import DEFAULT_TAG_KEY, SKIP_MARKER
from .exceptions import (
    ConfigurationError,
    InvalidInputError,
    PolicyNotFoundError,
    RecursionLimitExceeded,
    ReservedNameError,
    SanitagError,
)
from .policy import (
    AllowListPolicy,
    Policy,
    PolicyFunc,
    PolicyRegistry,
    strict_policy,
    ugc_policy,
)
from .sanitizer import (
    Sanitizer,
    asanitize_string,
    asanitize_value,
    default,
    policy_field,
    sanitize_string,
    sanitize_value,
    set_default,
)

__all__ = [
    "DEFAULT_TAG_KEY",
    "SKIP_MARKER",
    "SanitagError",
    "ConfigurationError",
    "ReservedNameError",
    "InvalidInputError",
    "PolicyNotFoundError",
    "RecursionLimitExceeded",
    "Policy",
    "PolicyFunc",
    "PolicyRegistry",
    "AllowListPolicy",
    "strict_policy",
    "ugc_policy",
    "Sanitizer",
    "policy_field",
    "default",
    "set_default",
    "sanitize_string",
    "sanitize_value",
    "asanitize_string",
    "asanitize_value",
]
