"""Policy package - named text transformations and their registry."""

from .base import Policy, PolicyFunc, PolicyLike, as_policy
from .html import AllowListPolicy, strict_policy, ugc_policy
from .registry import PolicyRegistry

__all__ = [
    "Policy",
    "PolicyFunc",
    "PolicyLike",
    "as_policy",
    "AllowListPolicy",
    "strict_policy",
    "ugc_policy",
    "PolicyRegistry",
]
