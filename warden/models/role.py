from __future__ import annotations

"""
Role model & association tables.

Roles are named groups of permissions.  The many-to-many tables
`user_roles`, `role_permissions` and `user_permissions` are plain
association tables (no extra columns), keyed by the pair of foreign ids.
"""

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship

from typing import TYPE_CHECKING

from warden.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin
from warden.rbac.stores import TableAssociationStore

if TYPE_CHECKING:
    from warden.models.permission import Permission
    from warden.models.user import User

# ── Association tables ───────────────────────────────────────────────
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)

user_permissions = Table(
    "user_permissions",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    description: Mapped[str | None] = mapped_column(String(256), nullable=True)

    # ── Relationships ────────────────────────────────────────────────
    users: Mapped[list["User"]] = relationship(  # noqa: F821
        secondary=user_roles,
        back_populates="roles",
        lazy="selectin",
    )
    permissions: Mapped[list["Permission"]] = relationship(  # noqa: F821
        secondary=role_permissions,
        back_populates="roles",
        lazy="selectin",
    )

    def permission_association(self, session: Session | None = None) -> TableAssociationStore:
        """Link-table view of this role's permissions."""
        return TableAssociationStore(
            self, "permissions", role_permissions, "role_id", "permission_id", session
        )

    def __repr__(self) -> str:
        return f"<Role {self.name}>"
