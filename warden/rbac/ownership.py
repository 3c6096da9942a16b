"""Record ownership check (`user.owns(post)`)."""

import re
from collections.abc import Mapping
from typing import Any

_MISSING = object()


def default_foreign_key(user: Any) -> str:
    """`User` → `user_id`, `AdminUser` → `admin_user_id`."""
    name = type(user).__name__
    snake = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()
    return f"{snake}_id"


def owns(user: Any, record: Any, foreign_key_name: str | None = None) -> bool:
    """True iff `record[foreign_key_name]` equals the user's primary key."""
    key = foreign_key_name or default_foreign_key(user)
    if isinstance(record, Mapping):
        value = record.get(key, _MISSING)
    else:
        value = getattr(record, key, _MISSING)
    if value is _MISSING:
        return False
    return value == user.get_key()
