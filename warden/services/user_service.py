"""
User service — lookups used by the request guards.
"""

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from warden.models.role import Role
from warden.models.user import User


def get_user_by_id(user_id: int, db: Session) -> User:
    """Fetch the user with roles → permissions eagerly loaded, or 404."""
    stmt = (
        select(User)
        .options(
            selectinload(User.roles).selectinload(Role.permissions),
            selectinload(User.permissions),
        )
        .where(User.id == user_id)
    )
    user = db.execute(stmt).scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
