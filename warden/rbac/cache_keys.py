"""Cache key construction for role / permission lookups.

All keys follow the pattern {prefix}:{lookup}:{id}, one key per
(entity kind, entity id).  The resolver reads these keys and the
mutation helpers forget exactly the same keys.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheKeys:
    """Centralized cache key construction.

    Attributes:
        prefix: Cache key prefix (Settings.CACHE_KEY_PREFIX).

    Example:
        keys = CacheKeys(prefix="warden")
        keys.roles_for_user(4)        # "warden:roles_for_user:4"
        keys.permissions_for_role(2)  # "warden:permissions_for_role:2"
    """

    prefix: str

    def roles_for_user(self, user_id: int) -> str:
        return f"{self.prefix}:roles_for_user:{user_id}"

    def permissions_for_user(self, user_id: int) -> str:
        return f"{self.prefix}:permissions_for_user:{user_id}"

    def permissions_for_role(self, role_id: int) -> str:
        return f"{self.prefix}:permissions_for_role:{role_id}"

    def for_user(self, user_id: int) -> tuple[str, str]:
        """Every key holding a view of this user's roles or permissions."""
        return self.roles_for_user(user_id), self.permissions_for_user(user_id)
