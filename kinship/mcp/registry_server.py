"""
Registry MCP Server - FastMCP tools the form UI calls into.

Architecture:
    UI → MCP Protocol → registry_server.py → Services → EntityStore → SQLite

Tools:
- Registration: add_relative, submit_person
- Person lookups: get_person, find_person_by_name, list_persons,
  reconcile_person_relatives
- Family lookups: get_family, list_families

Every tool returns a dict with a "success" flag. Registry errors are
reported with their class name in "error_type" so the UI can tell a
validation problem from a storage failure.
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from kinship.errors import KinshipError, ValidationFailed
from kinship.models import FAMILY, PERSON, Family, Person
from kinship.services import FamilyResolver, PersonRegistrar, RelationshipLinker
from kinship.store import EntityStore


# Initialize MCP server
mcp = FastMCP("kinship-registry")

# Lazy-loaded singletons
_store: Optional[EntityStore] = None
_registrar: Optional[PersonRegistrar] = None
_linker: Optional[RelationshipLinker] = None


def get_store() -> EntityStore:
    """Get or create EntityStore instance."""
    global _store
    if _store is None:
        _store = EntityStore()
    return _store


def get_registrar() -> PersonRegistrar:
    """Get or create PersonRegistrar instance."""
    global _registrar
    if _registrar is None:
        store = get_store()
        _registrar = PersonRegistrar(store, FamilyResolver(store))
    return _registrar


def get_linker() -> RelationshipLinker:
    """Get or create RelationshipLinker instance."""
    global _linker
    if _linker is None:
        _linker = RelationshipLinker(get_store())
    return _linker


def _error(e: KinshipError) -> dict:
    """Convert a registry error into a tool response."""
    return {
        "success": False,
        "error_type": type(e).__name__,
        "error": str(e),
        "field_errors": e.field_errors if isinstance(e, ValidationFailed) else {},
    }


def _family_dict(doc: dict) -> dict:
    """Validate a family document and return it with camelCase keys."""
    return Family.from_document(doc).model_dump(by_alias=True)


# =============================================================================
# REGISTRATION TOOLS
# =============================================================================

@mcp.tool()
def add_relative(kind: str, first_name: str, last_name: str, relation_label: str = "") -> dict:
    """
    Create a stand-alone person record for a father, mother or spouse.

    Call before submit_person and put the returned display_name into
    fatherName / motherName / spouseName of the submission.

    Args:
        kind: "father", "mother" or "spouse"
        first_name: Relative's first name
        last_name: Relative's last name
        relation_label: Optional label, e.g. "Father"

    Returns:
        display_name and person_id of the new relative record
    """
    try:
        ref = get_linker().link_relative(kind, first_name, last_name, relation_label)
    except KinshipError as e:
        return _error(e)
    return {
        "success": True,
        "kind": ref.kind,
        "display_name": ref.display_name,
        "relation_label": ref.relation_label,
        "person_id": ref.person_id,
    }


@mcp.tool()
def submit_person(fields: dict) -> dict:
    """
    Register a person from the submitted form fields.

    A family named after lastName is created when familyId is empty.

    Args:
        fields: Form fields using camelCase keys (firstName, lastName, ...)

    Returns:
        person_id of the stored record
    """
    try:
        person_id = get_registrar().submit(fields)
    except KinshipError as e:
        return _error(e)
    return {"success": True, "person_id": person_id}


# =============================================================================
# PERSON TOOLS
# =============================================================================

@mcp.tool()
def get_person(person_id: str) -> dict:
    """
    Get a person by ID.

    Args:
        person_id: Person ID

    Returns:
        Person document if found
    """
    try:
        doc = get_store().get_by_id(PERSON, person_id)
    except KinshipError as e:
        return _error(e)
    if doc:
        return {"success": True, "found": True, "person": doc}
    return {"success": True, "found": False, "person": None}


@mcp.tool()
def find_person_by_name(first_name: str, last_name: str) -> dict:
    """
    Find a person by exact first and last name.

    Args:
        first_name: Exact first name
        last_name: Exact last name

    Returns:
        First matching person document
    """
    try:
        doc = get_store().find_by_exact_fields(
            PERSON, {"firstName": first_name, "lastName": last_name}
        )
    except KinshipError as e:
        return _error(e)
    return {"success": True, "found": doc is not None, "person": doc}


@mcp.tool()
def list_persons(family_id: Optional[str] = None) -> dict:
    """
    List persons, optionally only those in one family.

    Args:
        family_id: Filter by family ID

    Returns:
        List of person documents (unordered)
    """
    try:
        persons = get_store().list_all(PERSON)
    except KinshipError as e:
        return _error(e)
    if family_id:
        persons = [p for p in persons if p.get("familyId") == family_id]
    return {"success": True, "count": len(persons), "persons": persons}


@mcp.tool()
def reconcile_person_relatives(person_id: str) -> dict:
    """
    Match a person's father/mother/spouse names against stored persons.

    Args:
        person_id: Person whose relatives to reconcile

    Returns:
        One entry per recorded relative; person_id is None when unmatched
    """
    try:
        doc = get_store().get_by_id(PERSON, person_id)
        if not doc:
            return {"success": True, "found": False, "relatives": []}
        refs = get_linker().reconcile_relatives(Person.from_document(doc))
    except KinshipError as e:
        return _error(e)
    return {
        "success": True,
        "found": True,
        "relatives": [
            {
                "kind": ref.kind,
                "display_name": ref.display_name,
                "relation_label": ref.relation_label,
                "person_id": ref.person_id,
            }
            for ref in refs
        ],
    }


# =============================================================================
# FAMILY TOOLS
# =============================================================================

@mcp.tool()
def get_family(family_id: str) -> dict:
    """
    Get family by ID.

    Args:
        family_id: Family ID

    Returns:
        Family details if found
    """
    try:
        doc = get_store().get_by_id(FAMILY, family_id)
    except KinshipError as e:
        return _error(e)
    if doc:
        return {"success": True, "found": True, "family": _family_dict(doc)}
    return {"success": True, "found": False, "family": None}


@mcp.tool()
def list_families() -> dict:
    """
    List all families.

    Returns:
        List of families (unordered; names may repeat)
    """
    try:
        families = get_store().list_all(FAMILY)
    except KinshipError as e:
        return _error(e)
    return {
        "success": True,
        "count": len(families),
        "families": [_family_dict(doc) for doc in families],
    }


# =============================================================================
# SERVER ENTRY POINT
# =============================================================================

if __name__ == "__main__":
    mcp.run()
