"""Seed script test."""

from kinship.models import FAMILY, PERSON
from seed_data import seed_sample_data


def test_seed_sample_data(store):
    person_id = seed_sample_data(store)

    person = store.get_by_id(PERSON, person_id)
    assert person["fatherName"] == "Sanjay Kawthalkar"
    assert person["spouseRelation"] == "Wife"

    # main person, three relatives, one child
    persons = store.list_all(PERSON)
    assert len(persons) == 5
    assert len(store.list_all(FAMILY)) == 1
    in_family = [p for p in persons if p.get("familyId") == person["familyId"]]
    assert {p["firstName"] for p in in_family} == {"Tejas", "Aarav"}
