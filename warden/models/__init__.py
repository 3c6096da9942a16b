"""
Models package — import every model so SQLAlchemy's Base.metadata
knows about all tables (needed for `create_all`).
"""

from warden.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin
from warden.models.role import Role, role_permissions, user_permissions, user_roles
from warden.models.permission import Permission
from warden.models.user import User, UserStatus

__all__ = [
    "Base",
    "IntegerPrimaryKeyMixin",
    "TimestampMixin",
    "Role",
    "user_roles",
    "role_permissions",
    "user_permissions",
    "Permission",
    "User",
    "UserStatus",
]
