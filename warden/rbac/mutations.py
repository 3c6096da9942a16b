"""
Association mutations — attach / detach / sync roles and permissions.

Every user-side write forgets both of the user's cached views (role list
and direct-permission list), whether or not the link actually changed.
Role-side writes forget the role's cached permission list.  The keys are
the ones `AuthorizationResolver` reads, built by the same `CacheKeys`.

Arguments naming a role / permission may be an entity, a mapping with
an `id` field, or an integer id (see `resolve_key`).  Every method
returns the user (or role) it was called on:

    user = manager.attach_role(user, admin)
    user = manager.attach_roles(user, [{"id": 2}, 3])
"""

import logging
from collections.abc import Iterable
from typing import Any

from warden.core.cache import CacheGateway
from warden.core.config import Settings
from warden.rbac.cache_keys import CacheKeys
from warden.rbac.identifiers import resolve_key

logger = logging.getLogger("rbac")


class AssociationManager:
    def __init__(self, cache: CacheGateway, settings: Settings):
        self.cache = cache
        self.settings = settings
        self.keys = CacheKeys(prefix=settings.CACHE_KEY_PREFIX)

    # ── Cache invalidation ───────────────────────────────────────────
    def _forget_user(self, user: Any) -> None:
        for key in self.keys.for_user(user.get_key()):
            self.cache.forget(key)
        logger.debug("Cache cleared for user %s", user.get_key())

    def _forget_role(self, role: Any) -> None:
        self.cache.forget(self.keys.permissions_for_role(role.get_key()))
        logger.debug("Cache cleared for role %s", role.get_key())

    # ── User ↔ Role ──────────────────────────────────────────────────
    def attach_role(self, user: Any, role: Any) -> Any:
        role_id = resolve_key(role)
        user.role_association().attach(role_id)
        logger.debug("Attached role %s to user %s", role_id, user.get_key())
        self._forget_user(user)
        return user

    def detach_role(self, user: Any, role: Any) -> Any:
        role_id = resolve_key(role)
        user.role_association().detach(role_id)
        logger.debug("Detached role %s from user %s", role_id, user.get_key())
        self._forget_user(user)
        return user

    def attach_roles(self, user: Any, roles: Iterable[Any]) -> Any:
        for role in roles:
            self.attach_role(user, role)
        return user

    def detach_roles(self, user: Any, roles: Iterable[Any] | None = None) -> Any:
        """Detach the given roles — or every role the user has when omitted."""
        if roles is None:
            roles = list(user.role_association().get())
        for role in roles:
            self.detach_role(user, role)
        return user

    def sync_roles(self, user: Any, role_ids: Iterable[Any]) -> Any:
        """Replace the user's roles with exactly `role_ids`."""
        changes = user.role_association().sync([resolve_key(r) for r in role_ids])
        logger.debug("Synced roles for user %s: %s", user.get_key(), changes)
        self._forget_user(user)
        return user

    # ── User ↔ Permission (direct) ───────────────────────────────────
    def attach_permission(self, user: Any, permission: Any) -> Any:
        permission_id = resolve_key(permission)
        user.permission_association().attach(permission_id)
        logger.debug("Attached permission %s to user %s", permission_id, user.get_key())
        self._forget_user(user)
        return user

    def detach_permission(self, user: Any, permission: Any) -> Any:
        permission_id = resolve_key(permission)
        user.permission_association().detach(permission_id)
        logger.debug("Detached permission %s from user %s", permission_id, user.get_key())
        self._forget_user(user)
        return user

    def attach_permissions(self, user: Any, permissions: Iterable[Any]) -> Any:
        for permission in permissions:
            self.attach_permission(user, permission)
        return user

    def detach_permissions(self, user: Any, permissions: Iterable[Any] | None = None) -> Any:
        if permissions is None:
            permissions = list(user.permission_association().get())
        for permission in permissions:
            self.detach_permission(user, permission)
        return user

    def sync_permissions(self, user: Any, permission_ids: Iterable[Any]) -> Any:
        changes = user.permission_association().sync([resolve_key(p) for p in permission_ids])
        logger.debug("Synced permissions for user %s: %s", user.get_key(), changes)
        self._forget_user(user)
        return user

    # ── Role ↔ Permission ────────────────────────────────────────────
    def attach_permission_to_role(self, role: Any, permission: Any) -> Any:
        permission_id = resolve_key(permission)
        role.permission_association().attach(permission_id)
        logger.debug("Attached permission %s to role %s", permission_id, role.get_key())
        self._forget_role(role)
        return role

    def detach_permission_from_role(self, role: Any, permission: Any) -> Any:
        permission_id = resolve_key(permission)
        role.permission_association().detach(permission_id)
        logger.debug("Detached permission %s from role %s", permission_id, role.get_key())
        self._forget_role(role)
        return role

    def attach_permissions_to_role(self, role: Any, permissions: Iterable[Any]) -> Any:
        for permission in permissions:
            self.attach_permission_to_role(role, permission)
        return role

    def detach_permissions_from_role(
        self, role: Any, permissions: Iterable[Any] | None = None
    ) -> Any:
        if permissions is None:
            permissions = list(role.permission_association().get())
        for permission in permissions:
            self.detach_permission_from_role(role, permission)
        return role

    def sync_role_permissions(self, role: Any, permission_ids: Iterable[Any]) -> Any:
        changes = role.permission_association().sync([resolve_key(p) for p in permission_ids])
        logger.debug("Synced permissions for role %s: %s", role.get_key(), changes)
        self._forget_role(role)
        return role
