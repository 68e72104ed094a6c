"""
Seed script for the kinship registry - populates the store with a sample family.

This script:
1. Removes the configured database file
2. Adds father, mother and spouse records through the relationship linker
3. Registers the main person with those relatives attached
4. Registers a second person into the same family by family id

Run this script to start with a clean slate:
    python seed_data.py
"""

from pathlib import Path

from kinship.config import settings
from kinship.logging import configure_from_settings, get_logger
from kinship.models import FAMILY, PERSON, PersonForm
from kinship.services import FamilyResolver, PersonRegistrar, RelationshipLinker
from kinship.store import EntityStore


log = get_logger("seed_data")


def clear_database(db_path: str):
    """Remove the database file to start fresh."""
    path = Path(db_path)
    if path.exists():
        path.unlink()
        log.info("database_deleted", path=str(path))
    else:
        log.info("database_not_found", path=str(path))


def seed_sample_data(store: EntityStore) -> str:
    """Create the sample family and return the main person's id."""
    linker = RelationshipLinker(store)
    registrar = PersonRegistrar(store, FamilyResolver(store))

    form = PersonForm(
        first_name="Tejas",
        last_name="Kawthalkar",
        birth_date="1985-04-12",
        gender="male",
        marital_status="married",
        occupation="Software Engineer",
        city="Pune",
        state="Maharashtra",
        country="India",
        language="Marathi",
        tell_me_more="Enjoys cricket and reading.",
    )
    for kind, first, last, label in [
        ("father", "Sanjay", "Kawthalkar", "Father"),
        ("mother", "Anjali", "Kawthalkar", "Mother"),
        ("spouse", "Priya", "Kawthalkar", "Wife"),
    ]:
        form = form.with_relative(linker.link_relative(kind, first, last, label))

    person_id = registrar.register_person(form)
    person = store.get_by_id(PERSON, person_id)

    registrar.register_person(PersonForm(
        first_name="Aarav",
        last_name="Kawthalkar",
        birth_date="2010-08-03",
        family_id=person["familyId"],
        father_name="Tejas Kawthalkar",
        father_relation="Father",
        mother_name="Priya Kawthalkar",
        mother_relation="Mother",
    ))
    return person_id


if __name__ == "__main__":
    configure_from_settings()
    clear_database(settings.database.path)
    store = EntityStore(settings.database.path)
    seed_sample_data(store)
    log.info(
        "seed_complete",
        persons=len(store.list_all(PERSON)),
        families=len(store.list_all(FAMILY)),
    )
