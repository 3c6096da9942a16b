"""
Permission name matching.

A trailing `*` makes a name a prefix pattern, on either side:

    permission_matches("admin.posts", "admin.posts")  -> True   (literal)
    permission_matches("admin.posts", "admin.*")      -> True   (query is a pattern)
    permission_matches("admin.*", "admin.posts")      -> True   (grant is a pattern)
    permission_matches("admin.posts", "site.*")       -> False
"""

from collections.abc import Iterable
from typing import Any

WILDCARD = "*"


def permission_matches(granted: str, requested: str) -> bool:
    """True if a permission named `granted` satisfies a check for `requested`."""
    if granted == requested:
        return True
    if requested.endswith(WILDCARD) and granted.startswith(requested[:-1]):
        return True
    if granted.endswith(WILDCARD) and requested.startswith(granted[:-1]):
        return True
    return False


def any_permission_matches(permissions: Iterable[Any], requested: str) -> bool:
    return any(permission_matches(perm.name, requested) for perm in permissions)
