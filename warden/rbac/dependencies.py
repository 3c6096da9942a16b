"""
Request guards — role / permission enforcement for FastAPI routes.

`require_role`, `require_permission` and `require_ability` are
*dependency factories*: call one with the names to check and it returns
a FastAPI dependency that will:

1. Resolve the authenticated user (`get_current_user`).
2. Ask the `AuthorizationResolver` (cached lookups).
3. Return 403 on failure — with NO details about which names are
   missing (prevents enumeration attacks).

Authentication itself is the host's job: its middleware must set
`request.state.user_id`.  Every dependency here can be swapped through
`app.dependency_overrides`.

Usage in a route:
    @router.get("/posts", dependencies=[Depends(require_permission("posts.view"))])
    def list_posts(...): ...

Or inject the user object:
    @router.delete("/posts/{post_id}")
    def delete_post(post_id: int, user: User = Depends(require_role("admin", "editor"))): ...
"""

import logging
from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from warden.core.cache import MemoryCache
from warden.core.config import settings
from warden.core.database import get_db
from warden.models.user import User, UserStatus
from warden.rbac.mutations import AssociationManager
from warden.rbac.resolver import AuthorizationResolver, Names
from warden.services.user_service import get_user_by_id

logger = logging.getLogger("rbac")


@lru_cache
def get_cache() -> MemoryCache:
    """Process-wide cache shared by every resolver / manager."""
    return MemoryCache()


def get_resolver(cache: MemoryCache = Depends(get_cache)) -> AuthorizationResolver:
    return AuthorizationResolver(cache, settings)


def get_manager(cache: MemoryCache = Depends(get_cache)) -> AssociationManager:
    return AssociationManager(cache, settings)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Load the authenticated user.  No role / permission checks."""
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    # Non-numeric ids and unknown ids get the same answer
    try:
        user = get_user_by_id(int(user_id), db)
    except (HTTPException, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        ) from None

    # Disabled users must never pass
    if user.status == UserStatus.DISABLED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account disabled",
        )
    return user


def _deny(user: User, required: object) -> HTTPException:
    logger.warning("Access denied for user %s — required: %s", user.get_key(), required)
    # Intentionally vague — do NOT reveal which names are missing
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Insufficient permissions",
    )


class require_role:
    """
    Dependency factory.

    Can be used as:
        Depends(require_role("admin"))
        Depends(require_role("admin", "editor"))                    # any of
        Depends(require_role("admin", "auditor", require_all=True)) # all of
    """

    def __init__(self, *role_names: str, require_all: bool = False):
        self.role_names = list(role_names)
        self.require_all = require_all

    def __call__(
        self,
        user: User = Depends(get_current_user),
        resolver: AuthorizationResolver = Depends(get_resolver),
    ) -> User:
        if not resolver.has_role(user, self.role_names, require_all=self.require_all):
            raise _deny(user, self.role_names)
        return user


class require_permission:
    """
    Dependency factory.

    Can be used as:
        Depends(require_permission("posts.view"))
        Depends(require_permission("posts.edit", "posts.publish", require_all=True))
    """

    def __init__(self, *permission_names: str, require_all: bool = False):
        self.permission_names = list(permission_names)
        self.require_all = require_all

    def __call__(
        self,
        user: User = Depends(get_current_user),
        resolver: AuthorizationResolver = Depends(get_resolver),
    ) -> User:
        if not resolver.can(user, self.permission_names, require_all=self.require_all):
            raise _deny(user, self.permission_names)
        return user


class require_ability:
    """
    Dependency factory combining roles and permissions.

        Depends(require_ability("admin,owner", "posts.publish"))
    """

    def __init__(self, roles: Names, permissions: Names, validate_all: bool = False):
        self.roles = roles
        self.permissions = permissions
        self.validate_all = validate_all

    def __call__(
        self,
        user: User = Depends(get_current_user),
        resolver: AuthorizationResolver = Depends(get_resolver),
    ) -> User:
        allowed = resolver.ability(
            user, self.roles, self.permissions, validate_all=self.validate_all
        )
        if not allowed:
            raise _deny(user, {"roles": self.roles, "permissions": self.permissions})
        return user
