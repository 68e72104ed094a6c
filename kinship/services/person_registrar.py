"""
Person Registrar - validates and stores one person submission.

Pipeline (linear, no retries):
    validate → resolve family → assemble record → insert Person → person id

The family write and the person write are two independent store calls.
They are NOT atomic as a pair and nothing is compensated: if the person
insert fails after a family was created, that family stays in the store.
Relatives are linked beforehand by RelationshipLinker and arrive here only
as display strings already set on the form.
"""

import re
from datetime import date
from typing import Mapping, Optional

from pydantic import ValidationError

from kinship.config import settings
from kinship.errors import (
    FamilyCreationFailed,
    PersistenceFailed,
    StorageError,
    ValidationFailed,
)
from kinship.logging import get_logger
from kinship.models import GENDER_OPTIONS, PERSON, PersonForm
from kinship.services.family_resolver import FamilyResolver
from kinship.store.entity_store import EntityStore


log = get_logger(__name__)

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def is_iso_date(value: str) -> bool:
    """True for a real calendar date written exactly as YYYY-MM-DD."""
    if not _ISO_DATE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_form(form: PersonForm, require_last_name: bool = False) -> dict[str, str]:
    """Return field errors keyed by form field name; empty when valid."""
    errors = {}
    if not form.first_name:
        errors["firstName"] = "First name is required"
    if require_last_name and not form.last_name:
        errors["lastName"] = "Last name is required"
    if form.gender and form.gender not in GENDER_OPTIONS:
        errors["gender"] = f"Must be one of {', '.join(GENDER_OPTIONS)}"
    if form.birth_date and not is_iso_date(form.birth_date):
        errors["birthDate"] = "Must be an ISO date (YYYY-MM-DD)"
    return errors


class PersonRegistrar:
    """Registers persons, creating their family on the way when needed."""

    def __init__(
        self,
        store: EntityStore,
        resolver: Optional[FamilyResolver] = None,
        require_last_name: Optional[bool] = None
    ):
        self.store = store
        self.resolver = resolver or FamilyResolver(store)
        if require_last_name is None:
            require_last_name = settings.registry.require_last_name
        self.require_last_name = require_last_name

    def submit(self, fields: Mapping) -> str:
        """Build a PersonForm from raw form fields and register it."""
        try:
            form = PersonForm.model_validate(dict(fields))
        except ValidationError as e:
            errors = {
                ".".join(str(part) for part in err["loc"]): err["msg"]
                for err in e.errors()
            }
            raise ValidationFailed(errors) from e
        return self.register_person(form)

    def register_person(self, form: PersonForm) -> str:
        """
        Register one person and return the new person id.

        Raises:
            ValidationFailed: required field blank or malformed (no writes)
            FamilyCreationFailed: family resolution failed (no person written)
            PersistenceFailed: person write failed (family may already exist)
        """
        errors = validate_form(form, self.require_last_name)
        if errors:
            log.info("registration_rejected", field_errors=errors)
            raise ValidationFailed(errors)

        try:
            family_id = self.resolver.resolve_family(form.family_id, form.last_name)
        except StorageError as e:
            log.error("family_creation_failed", surname=form.last_name, error=str(e))
            raise FamilyCreationFailed(form.last_name) from e

        record = form.to_document()
        record.pop("familyId", None)
        if family_id:
            record["familyId"] = family_id

        try:
            person_id = self.store.insert(PERSON, record)
        except StorageError as e:
            log.error("person_persist_failed", family_id=family_id, error=str(e))
            raise PersistenceFailed(f"Could not store person: {e}", family_id=family_id) from e

        log.info("person_registered", person_id=person_id, name=form.full_name, family_id=family_id)
        return person_id
