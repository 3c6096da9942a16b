"""
User-side mixin.

Mix `RoleUserMixin` into the host's user model to give it link-table
views of its roles and direct permissions plus the `owns()` check.

The model must:
- live in the `users` table (the association tables reference `users.id`),
- declare `roles` / `permissions` relationships over `user_roles` /
  `user_permissions`,
- expose `get_key()` (provided by `IntegerPrimaryKeyMixin`).

Role / permission checks themselves live on `AuthorizationResolver`,
and writes on `AssociationManager`, so the model stays free of cache
and configuration state.
"""

from typing import Any

from sqlalchemy.orm import Session

from warden.rbac.ownership import owns
from warden.rbac.stores import TableAssociationStore


class RoleUserMixin:
    def role_association(self, session: Session | None = None) -> TableAssociationStore:
        from warden.models.role import user_roles

        return TableAssociationStore(self, "roles", user_roles, "user_id", "role_id", session)

    def permission_association(self, session: Session | None = None) -> TableAssociationStore:
        from warden.models.role import user_permissions

        return TableAssociationStore(
            self, "permissions", user_permissions, "user_id", "permission_id", session
        )

    def owns(self, record: Any, foreign_key_name: str | None = None) -> bool:
        return owns(self, record, foreign_key_name)
