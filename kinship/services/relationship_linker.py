"""
Relationship Linker - father/mother/spouse links by display name.

A relative added from the form becomes its own Person record holding only
firstName and lastName. The subject person stores just the display string
"First Last" (plus a free-text relation label); there is no foreign key and
no back-reference from the relative to the subject.

reconcile_relatives() goes the other way: it looks up which stored display
names currently match a real Person record. It never writes.
"""

from typing import Optional

from kinship.errors import RelativeLinkFailed, StorageError, ValidationFailed
from kinship.logging import get_logger
from kinship.models import PERSON, RELATIVE_KINDS, Person, RelativeRef
from kinship.store.entity_store import EntityStore


log = get_logger(__name__)


def display_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


class RelationshipLinker:
    """Creates relative placeholder records and resolves relative names."""

    def __init__(self, store: EntityStore):
        self.store = store

    def link_relative(
        self,
        kind: str,
        first_name: str,
        last_name: str,
        relation_label: Optional[str] = None
    ) -> RelativeRef:
        """
        Create a stand-alone Person for a relative and return the link to it.

        Args:
            kind: "father", "mother" or "spouse"
            first_name: Relative's first name (required)
            last_name: Relative's last name (required)
            relation_label: Optional free-text label, e.g. "Father"

        Returns:
            RelativeRef whose display_name is "first_name last_name"

        Raises:
            ValidationFailed: kind is unknown or a name is blank (nothing stored)
            RelativeLinkFailed: the store write failed
        """
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()

        errors = {}
        if kind not in RELATIVE_KINDS:
            errors["kind"] = f"Must be one of {', '.join(RELATIVE_KINDS)}"
        if not first_name:
            errors["firstName"] = "First name is required"
        if not last_name:
            errors["lastName"] = "Last name is required"
        if errors:
            raise ValidationFailed(errors)

        name = display_name(first_name, last_name)
        try:
            person_id = self.store.insert(PERSON, {"firstName": first_name, "lastName": last_name})
        except StorageError as e:
            log.error("relative_link_failed", kind=kind, display_name=name, error=str(e))
            raise RelativeLinkFailed(kind, name) from e

        log.info("relative_linked", kind=kind, person_id=person_id, display_name=name)
        return RelativeRef(
            kind=kind,
            display_name=name,
            relation_label=(relation_label or "").strip() or None,
            person_id=person_id,
        )

    def find_by_display_name(self, name: str) -> Optional[Person]:
        """
        Find a Person whose "firstName lastName" equals name.

        Either part may itself contain spaces, so every split point is tried
        from left to right; the first match wins.
        """
        name = (name or "").strip()
        parts = name.split(" ")
        for i in range(1, len(parts)):
            criteria = {
                "firstName": " ".join(parts[:i]),
                "lastName": " ".join(parts[i:]),
            }
            doc = self.store.find_by_exact_fields(PERSON, criteria)
            if doc:
                return Person.from_document(doc)
        return None

    def reconcile_relatives(self, person: Person) -> list[RelativeRef]:
        """
        Return the person's relatives with person_id filled in where a
        matching Person record exists. Unmatched relatives keep person_id None.
        """
        refs = []
        for ref in person.relatives:
            match = self.find_by_display_name(ref.display_name)
            refs.append(RelativeRef(
                kind=ref.kind,
                display_name=ref.display_name,
                relation_label=ref.relation_label,
                person_id=match.id if match else None,
            ))
        return refs
