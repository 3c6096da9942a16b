"""
Identifier resolution for attach / detach arguments.

Callers may pass any of:

- an entity exposing `get_key()` (a `Role`, a `Permission`, ...),
- a mapping with an `"id"` field (e.g. a decoded request body),
- a raw integer id.

An entity that is pending in a session gets its key by flushing that
session first.  Anything else is a programmer error and raises
`UnresolvableIdentifier` instead of being silently skipped.
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import object_session
from sqlalchemy.orm.exc import UnmappedInstanceError

from warden.core.errors import UnresolvableIdentifier


def _as_id(value: Any, original: Any) -> int:
    # bool is an int subclass; `True` is never an id
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnresolvableIdentifier(original)
    return value


def _entity_key(entity: Any) -> Any:
    key = entity.get_key()
    if key is None:
        try:
            session = object_session(entity)
        except UnmappedInstanceError:
            session = None
        if session is not None:
            session.flush()  # pending entity → assign its primary key
            key = entity.get_key()
    return key


def resolve_key(value: Any) -> int:
    """Return the integer id referenced by `value`."""
    if callable(getattr(value, "get_key", None)):
        return _as_id(_entity_key(value), value)
    if isinstance(value, Mapping):
        if "id" not in value:
            raise UnresolvableIdentifier(value)
        return _as_id(value["id"], value)
    return _as_id(value, value)
