from __future__ import annotations

"""
User model.

Design decisions:
- Roles are attached via a many-to-many so new roles can be added
  without schema changes.
- Permissions can also be attached directly to a user; whether they
  count in `can()` is controlled by Settings.USE_DIRECT_PERMISSIONS.
- Status is an ENUM (INVITED → ACTIVE → DISABLED).  Request guards
  refuse DISABLED accounts before any permission check.
"""

import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from warden.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin
from typing import TYPE_CHECKING

from warden.models.role import user_permissions, user_roles  # association tables
from warden.rbac.mixins import RoleUserMixin

if TYPE_CHECKING:
    from warden.models.permission import Permission
    from warden.models.role import Role


class UserStatus(str, enum.Enum):
    INVITED = "INVITED"
    ACTIVE = "ACTIVE"
    DISABLED = "DISABLED"


class User(Base, IntegerPrimaryKeyMixin, TimestampMixin, RoleUserMixin):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(256), unique=True, index=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(256), nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, name="user_status"),
        default=UserStatus.ACTIVE,
        nullable=False,
    )

    # ── Relationships ────────────────────────────────────────────────
    roles: Mapped[list["Role"]] = relationship(  # noqa: F821
        secondary=user_roles,
        back_populates="users",
        lazy="selectin",
    )
    permissions: Mapped[list["Permission"]] = relationship(  # noqa: F821
        secondary=user_permissions,
        back_populates="users",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"
