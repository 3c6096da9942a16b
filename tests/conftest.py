"""Pytest configuration and shared fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from warden.core.cache import MemoryCache
from warden.core.config import Settings
from warden.models import Base, Permission, Role, User, UserStatus
from warden.rbac.mutations import AssociationManager
from warden.rbac.resolver import AuthorizationResolver


class RecordingCache(MemoryCache):
    """MemoryCache that records every remember / forget call."""

    def __init__(self):
        super().__init__()
        self.remembered: list[tuple[str, int]] = []
        self.forgotten: list[str] = []

    def remember(self, key, ttl, producer):
        self.remembered.append((key, ttl))
        return super().remember(key, ttl, producer)

    def forget(self, key):
        self.forgotten.append(key)
        super().forget(key)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def settings():
    return Settings(_env_file=None, CACHE_TTL=60, CACHE_KEY_PREFIX="test")


@pytest.fixture
def cache():
    return RecordingCache()


@pytest.fixture
def resolver(cache, settings):
    return AuthorizationResolver(cache, settings)


@pytest.fixture
def manager(cache, settings):
    return AssociationManager(cache, settings)


@pytest.fixture
def make_permission(db):
    def _make(name, display_name=None):
        perm = Permission(name=name, display_name=display_name)
        db.add(perm)
        db.flush()
        return perm

    return _make


@pytest.fixture
def make_role(db, make_permission):
    def _make(name, *permission_names):
        role = Role(name=name)
        for perm_name in permission_names:
            role.permissions.append(make_permission(perm_name))
        db.add(role)
        db.flush()
        return role

    return _make


@pytest.fixture
def make_user(db):
    def _make(email="user@example.com", roles=(), status=UserStatus.ACTIVE):
        user = User(email=email, full_name=email.split("@")[0].title(), status=status)
        user.roles.extend(roles)
        db.add(user)
        db.flush()
        return user

    return _make


@pytest.fixture
def scenario(make_role, make_user):
    """RoleA grants manage_a; RoleB grants manage_b and manage_c."""
    role_a = make_role("RoleA", "manage_a")
    role_b = make_role("RoleB", "manage_b", "manage_c")
    user = make_user(roles=[role_a, role_b])
    return user, role_a, role_b
