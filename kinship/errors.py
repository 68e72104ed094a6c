"""
Error taxonomy for the kinship registry.

Store-level errors (StorageError and subclasses) are raised by the entity
store. Service-level errors wrap them once the failing step is known:

- ValidationFailed: a required field is blank or malformed, no I/O attempted
- FamilyCreationFailed: family resolution hit the store and failed
- PersistenceFailed: the final person write failed
- RelativeLinkFailed: pre-creating a relative record failed

Nothing is retried and nothing is rolled back.
"""

from typing import Dict, Optional


class KinshipError(Exception):
    """Base class for every error raised by the registry core."""


class StorageError(KinshipError):
    """The entity store could not complete an operation."""


class StorageUnavailable(StorageError):
    """The database could not be reached, opened or written."""


class StorageRejected(StorageError):
    """The store refused the document or query."""


class ValidationFailed(KinshipError):
    """One or more submitted fields are invalid."""

    def __init__(self, field_errors: Dict[str, str]):
        self.field_errors = dict(field_errors)
        summary = ", ".join(f"{k}: {v}" for k, v in self.field_errors.items())
        super().__init__(f"Validation failed ({summary})")


class FamilyCreationFailed(KinshipError):
    """Family resolution failed; the registration was aborted."""

    def __init__(self, surname: Optional[str], message: str = ""):
        self.surname = surname
        super().__init__(message or f"Could not create family {surname!r}")


class PersistenceFailed(KinshipError):
    """The person record could not be stored."""

    def __init__(self, message: str = "Could not store person", family_id: Optional[str] = None):
        # family created earlier in the same attempt, left in place
        self.family_id = family_id
        super().__init__(message)


class RelativeLinkFailed(KinshipError):
    """A relative placeholder record could not be created."""

    def __init__(self, kind: str, display_name: str):
        self.kind = kind
        self.display_name = display_name
        super().__init__(f"Could not add {kind} {display_name!r}")
