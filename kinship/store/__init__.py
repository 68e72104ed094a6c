"""Store package - document persistence for persons and families."""

from kinship.store.entity_store import EntityStore, utc_timestamp

__all__ = ["EntityStore", "utc_timestamp"]
