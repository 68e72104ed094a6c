"""
Family Resolver - guarantees a submitted person has a familyId when possible.

Resolution order:
1. A non-empty family id is trusted as-is (no existence check)
2. Otherwise a surname yields a family id:
   - create_new: a new Family is always created, even if one with the same
     name exists
   - find_or_create_by_name: an existing Family with exactly that name is
     reused, else one is created
3. Otherwise the person has no family

Store errors propagate unchanged; the registrar classifies them.
"""

from typing import Optional

from kinship.config import settings
from kinship.logging import get_logger
from kinship.models import FAMILY
from kinship.store.entity_store import EntityStore


log = get_logger(__name__)

CREATE_NEW = "create_new"
FIND_OR_CREATE_BY_NAME = "find_or_create_by_name"


class FamilyResolver:
    """Resolves or creates the family a person belongs to."""

    def __init__(self, store: EntityStore, on_missing_family: Optional[str] = None):
        self.store = store
        self.on_missing_family = on_missing_family or settings.registry.on_missing_family
        if self.on_missing_family not in (CREATE_NEW, FIND_OR_CREATE_BY_NAME):
            raise ValueError(f"Unknown on_missing_family mode: {self.on_missing_family!r}")

    def create_family(self, name: str) -> str:
        """Create a Family named name and return its id."""
        family_id = self.store.insert(FAMILY, {"name": name})
        log.info("family_created", family_id=family_id, name=name)
        return family_id

    def resolve_family(
        self,
        family_id: Optional[str] = None,
        surname: Optional[str] = None
    ) -> Optional[str]:
        """
        Return the family id for a submission.

        Args:
            family_id: Family id entered by the submitter, trusted if non-empty
            surname: Last name used to name a new family

        Returns:
            Family id, or None when neither argument is given
        """
        family_id = (family_id or "").strip()
        if family_id:
            return family_id

        surname = (surname or "").strip()
        if not surname:
            return None

        if self.on_missing_family == FIND_OR_CREATE_BY_NAME:
            existing = self.store.find_by_exact_fields(FAMILY, {"name": surname})
            if existing:
                log.info("family_reused", family_id=existing["id"], name=surname)
                return existing["id"]

        return self.create_family(surname)
