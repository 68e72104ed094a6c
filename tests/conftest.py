"""Pytest fixtures for registry tests."""

import pytest

from kinship.errors import StorageUnavailable
from kinship.services import FamilyResolver, PersonRegistrar, RelationshipLinker
from kinship.store import EntityStore


class FailingStore(EntityStore):
    """EntityStore whose inserts fail for selected entity kinds."""

    def __init__(self, db_path: str, fail_kinds=()):
        super().__init__(db_path)
        self.fail_kinds = set(fail_kinds)

    def insert(self, kind, fields):
        if kind in self.fail_kinds:
            raise StorageUnavailable("store offline")
        return super().insert(kind, fields)


@pytest.fixture
def db_path(tmp_path):
    """Temporary database file."""
    return str(tmp_path / "kinship.db")


@pytest.fixture
def store(db_path):
    """Empty entity store."""
    return EntityStore(db_path)


@pytest.fixture
def resolver(store):
    """FamilyResolver in the default create_new mode."""
    return FamilyResolver(store, on_missing_family="create_new")


@pytest.fixture
def linker(store):
    """RelationshipLinker."""
    return RelationshipLinker(store)


@pytest.fixture
def registrar(store, resolver):
    """PersonRegistrar that only requires firstName."""
    return PersonRegistrar(store, resolver, require_last_name=False)


@pytest.fixture
def failing_store(tmp_path):
    """Factory for stores that fail inserts of the given kinds."""
    def make(*fail_kinds):
        return FailingStore(str(tmp_path / "failing.db"), fail_kinds)
    return make
