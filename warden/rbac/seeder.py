"""
Permission & Role seeding script.

Run this once against a live database to populate the default
permissions and roles.  It is IDEMPOTENT — safe to re-run: existing
permissions and roles are left untouched, only missing ones are added.

Usage:
    python -m warden.rbac.seeder
"""

import logging

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker

from warden.core.config import settings
from warden.core.logging import configure_logging
from warden.models import Base, Permission, Role

logger = logging.getLogger("rbac.seeder")

# ────────────────────────────────────────────────────────────────────
# 1.  ROLE → PERMISSION MAPPING
#
#     Names ending in `*` are wildcard grants (see rbac.matching).
# ────────────────────────────────────────────────────────────────────
DEFAULT_ROLE_PERMISSIONS: dict[str, list[str]] = {
    "admin": ["admin.*"],
    "editor": [
        "posts.create",
        "posts.update",
        "posts.publish",
        "posts.view",
    ],
    "author": [
        "posts.create",
        "posts.update",
        "posts.view",
    ],
    "viewer": ["posts.view"],
}


def _display_name(name: str) -> str:
    return name.replace(".", " ").replace("*", "all").replace("_", " ").title()


# ────────────────────────────────────────────────────────────────────
# 2.  SEED FUNCTION (idempotent)
# ────────────────────────────────────────────────────────────────────
def seed(
    session: Session,
    role_permissions: dict[str, list[str]] = DEFAULT_ROLE_PERMISSIONS,
) -> None:
    """Create permissions & roles if they don't already exist."""

    # ── Permissions ──────────────────────────────────────────────────
    existing_perms = session.execute(select(Permission)).scalars().all()
    name_to_perm: dict[str, Permission] = {p.name: p for p in existing_perms}

    wanted = dict.fromkeys(name for names in role_permissions.values() for name in names)
    for name in wanted:
        if name not in name_to_perm:
            perm = Permission(name=name, display_name=_display_name(name))
            session.add(perm)
            name_to_perm[name] = perm

    session.flush()  # ensure IDs are available

    # ── Roles ────────────────────────────────────────────────────────
    existing_role_names = set(session.execute(select(Role.name)).scalars().all())

    created = 0
    for role_name, perm_names in role_permissions.items():
        if role_name in existing_role_names:
            continue
        role = Role(
            name=role_name,
            display_name=_display_name(role_name),
            description=f"Default {role_name} role",
        )
        role.permissions.extend(name_to_perm[name] for name in perm_names)
        session.add(role)
        created += 1

    session.commit()
    logger.info("Permission seed complete: %d permissions, %d new roles.", len(wanted), created)


# ────────────────────────────────────────────────────────────────────
# 3.  CLI entrypoint:  python -m warden.rbac.seeder
# ────────────────────────────────────────────────────────────────────
def main() -> None:
    configure_logging(settings.DEBUG)
    engine = create_engine(settings.DATABASE_URL, echo=False)
    Base.metadata.create_all(engine)
    session_factory = sessionmaker(engine, expire_on_commit=False)
    with session_factory() as session:
        seed(session)
    engine.dispose()


if __name__ == "__main__":
    main()
