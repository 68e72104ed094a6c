"""Services package - family resolution, relative linking, registration."""
from kinship.services.family_resolver import FamilyResolver
from kinship.services.relationship_linker import RelationshipLinker
from kinship.services.person_registrar import PersonRegistrar

__all__ = ["FamilyResolver", "RelationshipLinker", "PersonRegistrar"]
