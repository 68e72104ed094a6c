"""Relationship linker tests: relative placeholders and reconciliation."""

import pytest

from kinship.errors import RelativeLinkFailed, StorageUnavailable, ValidationFailed
from kinship.models import PERSON, Person, PersonForm, RelativeRef
from kinship.services import RelationshipLinker


class TestLinkRelative:
    """Tests for link_relative."""

    def test_creates_standalone_person(self, store, linker):
        ref = linker.link_relative("father", "Jane", "Doe")

        assert ref.display_name == "Jane Doe"
        assert ref.kind == "father"
        doc = store.get_by_id(PERSON, ref.person_id)
        assert doc["firstName"] == "Jane"
        assert doc["lastName"] == "Doe"
        assert "familyId" not in doc

    def test_only_names_are_stored(self, store, linker):
        ref = linker.link_relative("spouse", "Sam", "Lee", "Husband")
        doc = store.get_by_id(PERSON, ref.person_id)
        assert set(doc) == {"id", "firstName", "lastName", "createdAt", "updatedAt"}
        assert ref.relation_label == "Husband"

    def test_names_are_trimmed(self, store, linker):
        ref = linker.link_relative("mother", "  Mary ", " Major  ")
        assert ref.display_name == "Mary Major"
        assert store.get_by_id(PERSON, ref.person_id)["firstName"] == "Mary"

    @pytest.mark.parametrize("first, last", [("", "Doe"), ("Jane", "  "), (None, None)])
    def test_blank_names_rejected(self, store, linker, first, last):
        with pytest.raises(ValidationFailed):
            linker.link_relative("father", first, last)
        assert store.list_all(PERSON) == []

    def test_unknown_kind_rejected(self, store, linker):
        with pytest.raises(ValidationFailed) as exc_info:
            linker.link_relative("cousin", "Jane", "Doe")
        assert "kind" in exc_info.value.field_errors
        assert store.list_all(PERSON) == []

    def test_store_failure(self, failing_store):
        linker = RelationshipLinker(failing_store(PERSON))

        with pytest.raises(RelativeLinkFailed) as exc_info:
            linker.link_relative("mother", "Mary", "Major")
        assert exc_info.value.display_name == "Mary Major"
        assert isinstance(exc_info.value.__cause__, StorageUnavailable)


class TestAttachToForm:
    """Tests for PersonForm.with_relative."""

    def test_sets_display_name_and_label(self, linker):
        form = PersonForm(first_name="Alice", last_name="Smith")
        ref = linker.link_relative("father", "John", "Smith", "Father")

        linked = form.with_relative(ref)

        assert linked.father_name == "John Smith"
        assert linked.father_relation == "Father"
        assert form.father_name is None

    def test_keeps_existing_label_when_ref_has_none(self):
        form = PersonForm(first_name="Alice", spouse_relation="Husband")
        linked = form.with_relative(RelativeRef("spouse", "Sam Lee"))
        assert linked.spouse_name == "Sam Lee"
        assert linked.spouse_relation == "Husband"


class TestReconcile:
    """Tests for matching display names to stored persons."""

    def _person(self, **fields) -> Person:
        return Person(
            id="p1",
            created_at="2025-01-01T00:00:00.000Z",
            updated_at="2025-01-01T00:00:00.000Z",
            **fields,
        )

    def test_matches_linked_relative(self, linker):
        ref = linker.link_relative("father", "John", "Smith")
        person = self._person(first_name="Alice", father_name=ref.display_name, father_relation="Father")

        refs = linker.reconcile_relatives(person)

        assert len(refs) == 1
        assert refs[0].person_id == ref.person_id
        assert refs[0].relation_label == "Father"

    def test_multi_word_names(self, linker):
        ref = linker.link_relative("mother", "Mary Ann", "Van Dyke")
        person = self._person(first_name="Alice", mother_name="Mary Ann Van Dyke")

        assert linker.reconcile_relatives(person)[0].person_id == ref.person_id

    def test_unmatched_name(self, linker):
        person = self._person(first_name="Alice", spouse_name="Nobody Known")
        refs = linker.reconcile_relatives(person)
        assert refs == [RelativeRef("spouse", "Nobody Known", None, None)]

    def test_relative_order(self, linker):
        person = self._person(
            first_name="Alice",
            spouse_name="Sam Lee",
            father_name="John Smith",
            mother_name="Mary Smith",
        )
        assert [r.kind for r in linker.reconcile_relatives(person)] == ["father", "mother", "spouse"]

    def test_single_word_name_never_matches(self, store, linker):
        store.insert(PERSON, {"firstName": "Cher"})
        person = self._person(first_name="Alice", mother_name="Cher")
        assert linker.reconcile_relatives(person)[0].person_id is None
