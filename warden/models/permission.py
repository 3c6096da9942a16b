from __future__ import annotations

"""
Permission model.

A permission is a named capability (e.g. `posts.publish`).  Names are
unique.  A name ending in `*` is a wildcard: `admin.*` grants every
`admin.<something>` check.  `display_name` is for humans only and is
never consulted when matching.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from typing import TYPE_CHECKING

from warden.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin

if TYPE_CHECKING:
    from warden.models.role import Role
    from warden.models.user import User


class Permission(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    description: Mapped[str | None] = mapped_column(String(256), nullable=True)

    # ── Relationships ────────────────────────────────────────────────
    roles: Mapped[list["Role"]] = relationship(  # noqa: F821
        secondary="role_permissions",
        back_populates="permissions",
        lazy="selectin",
    )
    users: Mapped[list["User"]] = relationship(  # noqa: F821
        secondary="user_permissions",
        back_populates="permissions",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Permission {self.name}>"
