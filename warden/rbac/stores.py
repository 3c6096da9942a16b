"""
Association stores — the only place that reads and writes link-table rows.

An `AssociationStore` is a view of one side of a many-to-many link for a
single owner (a user's roles, a role's permissions, ...).  The resolver
and the mutation helpers talk to this interface, never to a live
relationship collection, so a host with its own persistence can supply
its own store.

`TableAssociationStore` is the SQLAlchemy implementation.  It queries
and writes the link table with Core statements, then expires the
owner's relationship attribute so `owner.<relationship>` reloads.

An owner that is detached from any session can still be used when the
session of the current request is passed explicitly.
"""

import logging
from collections.abc import Iterable
from typing import Any, Protocol

from sqlalchemy import Table, delete, insert, inspect, select
from sqlalchemy.orm import Session, object_session

from warden.core.errors import DetachedOwner

logger = logging.getLogger("rbac")


class AssociationStore(Protocol):
    def get(self) -> list[Any]: ...

    def load(self, related_id: int) -> Any | None: ...

    def attach(self, related_id: int) -> None: ...

    def detach(self, related_id: int) -> None: ...

    def sync(self, related_ids: Iterable[int]) -> dict[str, list[int]]: ...


class TableAssociationStore:
    """
    Link-table store for `owner.<relationship>`.

    - `table`: the association table.
    - `owner_column` / `related_column`: its two foreign-key columns.
    - `session`: used when the owner itself is not in a session.
    """

    def __init__(
        self,
        owner: Any,
        relationship: str,
        table: Table,
        owner_column: str,
        related_column: str,
        session: Session | None = None,
    ):
        self.owner = owner
        self.relationship = relationship
        self.table = table
        self.owner_column = table.c[owner_column]
        self.related_column = table.c[related_column]
        self.bound_session = session

    # ── Helpers ──────────────────────────────────────────────────────
    def _session(self) -> Session:
        session = object_session(self.owner) or self.bound_session
        if session is None:
            raise DetachedOwner(
                f"{self.owner!r} is not attached to a session — "
                f"cannot read or write its {self.relationship}"
            )
        return session

    def _owner_id(self, session: Session) -> int:
        if self.owner.get_key() is None:
            session.flush()  # pending owner → assign its primary key
        return self.owner.get_key()

    def _related_model(self) -> type:
        return inspect(type(self.owner)).relationships[self.relationship].mapper.class_

    def _refresh(self, session: Session) -> None:
        if self.owner in session:
            session.expire(self.owner, [self.relationship])

    # ── Reads ────────────────────────────────────────────────────────
    def ids(self) -> set[int]:
        session = self._session()
        stmt = select(self.related_column).where(self.owner_column == self._owner_id(session))
        return set(session.execute(stmt).scalars().all())

    def get(self) -> list[Any]:
        """Entities currently linked to the owner."""
        session = self._session()
        model = self._related_model()
        linked = select(self.related_column).where(self.owner_column == self._owner_id(session))
        pk = inspect(model).primary_key[0]
        stmt = select(model).where(pk.in_(linked)).order_by(pk)
        return list(session.execute(stmt).scalars().all())

    def load(self, related_id: int) -> Any | None:
        """Fetch one related entity by id, linked or not."""
        return self._session().get(self._related_model(), related_id)

    # ── Writes ───────────────────────────────────────────────────────
    def attach(self, related_id: int) -> None:
        """Create the link unless it already exists."""
        session = self._session()
        owner_id = self._owner_id(session)
        if related_id in self.ids():
            logger.debug("%r: %s %s already attached", self.owner, self.relationship, related_id)
            return
        session.execute(
            insert(self.table).values(
                {self.owner_column.name: owner_id, self.related_column.name: related_id}
            )
        )
        self._refresh(session)

    def detach(self, related_id: int) -> None:
        """Remove the link if it exists."""
        session = self._session()
        session.execute(
            delete(self.table).where(
                self.owner_column == self._owner_id(session),
                self.related_column == related_id,
            )
        )
        self._refresh(session)

    def sync(self, related_ids: Iterable[int]) -> dict[str, list[int]]:
        """
        Make the owner's links exactly `related_ids`.

        Returns the ids that were attached and detached.
        """
        session = self._session()
        owner_id = self._owner_id(session)
        wanted = list(dict.fromkeys(related_ids))
        current = self.ids()

        detached = sorted(current - set(wanted))
        attached = [related_id for related_id in wanted if related_id not in current]

        if detached:
            session.execute(
                delete(self.table).where(
                    self.owner_column == owner_id,
                    self.related_column.in_(detached),
                )
            )
        if attached:
            session.execute(
                insert(self.table),
                [
                    {self.owner_column.name: owner_id, self.related_column.name: related_id}
                    for related_id in attached
                ],
            )
        self._refresh(session)
        return {"attached": attached, "detached": detached}
