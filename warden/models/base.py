"""
Declarative base & shared mixins for all models.

Every table gets:
- An auto-incrementing integer primary key.
- `created_at` / `updated_at` timestamps (UTC, auto-managed).

`get_key()` is the identity hook the association helpers use when an
entity (rather than a raw id) is passed to attach / detach.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base — all models inherit from this."""
    pass


class TimestampMixin:
    """Adds created_at / updated_at to any model that inherits it."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class IntegerPrimaryKeyMixin:
    """Adds an integer `id` primary key to any model that inherits it."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    def get_key(self) -> int:
        return self.id
