"""
Authorization resolver — answers "does this user have role / permission X".

Every lookup goes through the cache gateway (`remember`) so repeated
checks inside the TTL window never touch the database:

- a user's roles are cached under `roles_for_user:<user id>`,
- a role's permissions under `permissions_for_role:<role id>`,
- a user's direct permissions under `permissions_for_user:<user id>`.

The TTL (minutes) is read from the injected Settings on every
cache-populating call, so changing `settings.CACHE_TTL` at runtime
applies to the next lookup.

Multi-name checks are OR by default and AND with `require_all=True`.
Both forms stop as soon as the answer is known.  An empty list is
vacuously true under AND and false under OR.  Unknown names never
match and never raise.

Usage:
    resolver = AuthorizationResolver(cache, settings)
    resolver.has_role(user, "admin")
    resolver.can(user, ["posts.edit", "posts.publish"], require_all=True)
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from warden.core.cache import CacheGateway
from warden.core.config import Settings
from warden.core.errors import InvalidAbilityArgument
from warden.rbac.cache_keys import CacheKeys
from warden.rbac.matching import any_permission_matches

Names = str | Sequence[str]

RETURN_TYPES = ("boolean", "array", "both")


def _split_names(names: Names) -> list[str]:
    """`"a, b"` or `["a", "b"]` → `["a", "b"]`."""
    if isinstance(names, str):
        return [name.strip() for name in names.split(",") if name.strip()]
    return list(names)


def _check_each(names: Sequence[str], check: Callable[[str], bool], require_all: bool) -> bool:
    for name in names:
        matched = check(name)
        if matched and not require_all:
            return True
        if not matched and require_all:
            return False
    # All passed under AND; none passed under OR.
    return require_all


@dataclass(frozen=True)
class CachedRole:
    """Session-free copy of a role, safe to keep across requests."""

    id: int
    name: str


@dataclass(frozen=True)
class CachedPermission:
    id: int
    name: str


def _snapshot_permissions(permissions: Iterable[Any]) -> list[CachedPermission]:
    return [CachedPermission(p.get_key(), p.name) for p in permissions]


class AuthorizationResolver:
    def __init__(self, cache: CacheGateway, settings: Settings):
        self.cache = cache
        self.settings = settings
        self.keys = CacheKeys(prefix=settings.CACHE_KEY_PREFIX)

    def _ttl(self) -> int:
        return int(self.settings.CACHE_TTL)

    # ── Cached lookups ───────────────────────────────────────────────
    # Only snapshots are cached: ORM rows expire with the session that
    # loaded them.
    def cached_roles(self, user: Any) -> list[CachedRole]:
        return self.cache.remember(
            self.keys.roles_for_user(user.get_key()),
            self._ttl(),
            lambda: [CachedRole(r.get_key(), r.name) for r in user.role_association().get()],
        )

    def cached_permissions(self, role: Any) -> list[CachedPermission]:
        return self._role_permissions(role.get_key(), lambda: role)

    def cached_user_permissions(self, user: Any) -> list[CachedPermission]:
        return self.cache.remember(
            self.keys.permissions_for_user(user.get_key()),
            self._ttl(),
            lambda: _snapshot_permissions(user.permission_association().get()),
        )

    def _role_permissions(
        self, role_id: int, load_role: Callable[[], Any]
    ) -> list[CachedPermission]:
        def produce() -> list[CachedPermission]:
            role = load_role()
            if role is None:
                return []
            return _snapshot_permissions(role.permission_association().get())

        return self.cache.remember(self.keys.permissions_for_role(role_id), self._ttl(), produce)

    # ── Checks ───────────────────────────────────────────────────────
    def has_role(self, user: Any, name: Names, require_all: bool = False) -> bool:
        """True if the user has the role (or any / all of the roles)."""
        if not isinstance(name, str):
            return _check_each(name, lambda n: self.has_role(user, n), require_all)

        return any(role.name == name for role in self.cached_roles(user))

    def can(self, user: Any, permission: Names, require_all: bool = False) -> bool:
        """
        True if any of the user's roles grants the permission (or any /
        all of the permissions).  Wildcards match in both directions.
        """
        if not isinstance(permission, str):
            return _check_each(permission, lambda p: self.can(user, p), require_all)

        roles = user.role_association()
        for role in self.cached_roles(user):
            granted = self._role_permissions(role.id, lambda role_id=role.id: roles.load(role_id))
            if any_permission_matches(granted, permission):
                return True

        if self.settings.USE_DIRECT_PERMISSIONS:
            return any_permission_matches(self.cached_user_permissions(user), permission)
        return False

    def role_has_permission(self, role: Any, permission: Names, require_all: bool = False) -> bool:
        if not isinstance(permission, str):
            return _check_each(
                permission, lambda p: self.role_has_permission(role, p), require_all
            )
        return any_permission_matches(self.cached_permissions(role), permission)

    def ability(
        self,
        user: Any,
        roles: Names,
        permissions: Names,
        validate_all: bool = False,
        return_type: str = "boolean",
    ) -> bool | dict[str, dict[str, bool]] | tuple[bool, dict[str, dict[str, bool]]]:
        """
        Check roles and permissions together.

        `roles` / `permissions` accept a list or a comma-separated string.
        With `validate_all` every check must pass, otherwise one is enough.

        `return_type`:
            "boolean" → the overall answer
            "array"   → {"roles": {name: bool}, "permissions": {name: bool}}
            "both"    → (answer, that dict)
        """
        if not isinstance(validate_all, bool):
            raise InvalidAbilityArgument(
                f"validate_all must be a bool, got {type(validate_all).__name__}"
            )
        if return_type not in RETURN_TYPES:
            raise InvalidAbilityArgument(
                f"return_type must be one of {', '.join(RETURN_TYPES)}, got {return_type!r}"
            )

        checks = {
            "roles": {name: self.has_role(user, name) for name in _split_names(roles)},
            "permissions": {name: self.can(user, name) for name in _split_names(permissions)},
        }
        results = [*checks["roles"].values(), *checks["permissions"].values()]
        allowed = all(results) if validate_all else any(results)

        if return_type == "boolean":
            return allowed
        if return_type == "array":
            return checks
        return allowed, checks
