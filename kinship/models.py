"""
Data models for person and family records.

Models:
- PersonForm: immutable submission carrying the raw form fields
- Person: stored biographical record
- Family: named grouping a person may reference
- RelativeRef: denormalized father/mother/spouse link

Documents are stored with camelCase keys (firstName, familyId, ...) and
absent fields are omitted rather than stored as null.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


PERSON = "Person"
FAMILY = "Family"

RelativeKind = Literal["father", "mother", "spouse"]
RELATIVE_KINDS = ("father", "mother", "spouse")


@dataclass(frozen=True)
class RelativeRef:
    """Link from a person to a relative, by display name."""
    kind: str
    display_name: str
    relation_label: Optional[str] = None
    person_id: Optional[str] = None  # set when a matching Person record is known


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        """Convert to a store document (camelCase keys, no nulls, no id)."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})


class _PersonFields(_Document):
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    email: Optional[str] = None
    family_id: Optional[str] = None
    place_of_birth: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    religion: Optional[str] = None
    language: Optional[str] = None
    ethnicity: Optional[str] = None
    birth_date: Optional[str] = None  # ISO format YYYY-MM-DD
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    occupation: Optional[str] = None
    tell_me_more: Optional[str] = None
    father_name: Optional[str] = None
    father_relation: Optional[str] = None
    mother_name: Optional[str] = None
    mother_relation: Optional[str] = None
    spouse_name: Optional[str] = None
    spouse_relation: Optional[str] = None

    @property
    def full_name(self) -> str:
        """Return full name."""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def relatives(self) -> list[RelativeRef]:
        """Relatives recorded on this person, in father/mother/spouse order."""
        refs = []
        for kind in RELATIVE_KINDS:
            name = getattr(self, f"{kind}_name")
            if name:
                refs.append(RelativeRef(kind, name, getattr(self, f"{kind}_relation")))
        return refs


class PersonForm(_PersonFields):
    """
    A single person submission.

    Accepts camelCase (firstName) or snake_case (first_name) keys. Strings
    are stripped and blank values become None, so an untouched form field is
    treated the same as a missing one. Instances are frozen; use
    with_relative() to derive a new form.
    """

    model_config = ConfigDict(frozen=True)

    first_name: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _strip_blank(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    def with_relative(self, ref: RelativeRef) -> "PersonForm":
        """Return a copy with the relative's display name (and label) set."""
        update = {f"{ref.kind}_name": ref.display_name}
        if ref.relation_label:
            update[f"{ref.kind}_relation"] = ref.relation_label
        return self.model_copy(update=update)


class Person(_PersonFields):
    """Stored person record."""

    id: str
    first_name: str
    created_at: str
    updated_at: str

    @classmethod
    def from_document(cls, doc: dict) -> "Person":
        return cls.model_validate(doc)


class Family(_Document):
    """Family group referenced by persons through familyId."""

    id: str
    name: str
    created_at: str
    updated_at: str

    @classmethod
    def from_document(cls, doc: dict) -> "Family":
        return cls.model_validate(doc)


# =============================================================================
# CONSTANTS (for UI dropdowns and validation)
# =============================================================================

GENDER_OPTIONS = {
    "male": "Male",
    "female": "Female",
    "other": "Other",
    "prefer-not-to-say": "Prefer not to say",
}

MARITAL_STATUS_OPTIONS = {
    "single": "Single",
    "married": "Married",
    "divorced": "Divorced",
    "widowed": "Widowed",
    "separated": "Separated",
}

# Suggested relation labels; labels are free text and not checked against this
RELATION_OPTIONS = [
    "Father",
    "Mother",
    "Son",
    "Daughter",
    "Brother",
    "Sister",
    "Husband",
    "Wife",
    "Grandfather",
    "Grandmother",
    "Uncle",
    "Aunt",
    "Cousin",
    "Friend",
    "Other",
]
