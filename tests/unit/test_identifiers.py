"""Tests for resolve_key identifier dispatch."""

import pytest

from warden.core.errors import UnresolvableIdentifier
from warden.models import Role
from warden.rbac.identifiers import resolve_key


class Entity:
    def __init__(self, key):
        self.key = key

    def get_key(self):
        return self.key


def test_entity_uses_get_key():
    assert resolve_key(Entity(1)) == 1


def test_mapping_uses_id_field():
    assert resolve_key({"id": 2, "name": "editor"}) == 2


def test_raw_integer():
    assert resolve_key(3) == 3


def test_orm_entity(make_role):
    role = make_role("editor")
    assert resolve_key(role) == role.id


@pytest.mark.parametrize(
    "value",
    [
        {"name": "editor"},
        {"id": None},
        {"id": "2"},
        "3",
        3.0,
        None,
        True,
        [1],
        Entity(None),
    ],
)
def test_unresolvable(value):
    with pytest.raises(UnresolvableIdentifier) as exc_info:
        resolve_key(value)

    assert exc_info.value.value is value
    assert isinstance(exc_info.value, TypeError)


def test_pending_orm_entity_is_flushed(db):
    role = Role(name="pending")
    db.add(role)

    assert resolve_key(role) == role.id
    assert role.id is not None


def test_transient_orm_entity(db):
    role = Role(name="transient")

    with pytest.raises(UnresolvableIdentifier):
        resolve_key(role)
