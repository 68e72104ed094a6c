"""
Entity Store - SQLite document storage for persons and families.

This is a DATA LAYER component:
- Stores schemaless JSON documents keyed by generated UUIDs
- Stamps createdAt/updatedAt on insert
- NO business logic (services decide what to write and when)

Tables:
- persons: Person documents
- families: Family documents

Every operation opens its own connection, so a single insert is atomic
but a sequence of inserts is not.
"""

import json
import re
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional

from kinship.config import settings
from kinship.errors import StorageRejected, StorageUnavailable
from kinship.logging import get_logger
from kinship.models import FAMILY, PERSON


log = get_logger(__name__)

ENTITY_TABLES = {
    PERSON: "persons",
    FAMILY: "families",
}

# Keys owned by the store; callers cannot set them
RESERVED_KEYS = ("id", "createdAt", "updatedAt")

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2025-01-31T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class EntityStore:
    """Document storage for Person and Family entities."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or settings.database.path
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Initialize one table per entity kind."""
        for table in ENTITY_TABLES.values():
            self._execute(f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    id TEXT PRIMARY KEY,
                    document TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot open {self.db_path}: {e}") from e

    def _table(self, kind: str) -> str:
        try:
            return ENTITY_TABLES[kind]
        except KeyError:
            raise StorageRejected(f"Unknown entity kind: {kind!r}") from None

    def _execute(self, sql: str, params=()) -> list:
        """Run one statement in its own transaction and return all rows."""
        try:
            with self._connect() as conn:
                return conn.execute(sql, params).fetchall()
        except sqlite3.IntegrityError as e:
            raise StorageRejected(str(e)) from e
        except sqlite3.Error as e:
            raise StorageUnavailable(str(e)) from e

    @staticmethod
    def _row_to_entity(row) -> dict:
        """Convert (id, document) row to a document with its id merged in."""
        entity_id, document = row
        return {"id": entity_id, **json.loads(document)}

    def insert(self, kind: str, fields: Mapping) -> str:
        """
        Store a new document and return its generated id.

        None values are omitted. createdAt and updatedAt are set to the same
        timestamp; any id/createdAt/updatedAt in fields is ignored.
        """
        table = self._table(kind)
        if not isinstance(fields, Mapping):
            raise StorageRejected(f"{kind} document must be a mapping, got {type(fields).__name__}")

        timestamp = utc_timestamp()
        document = {k: v for k, v in fields.items() if v is not None and k not in RESERVED_KEYS}
        document["createdAt"] = timestamp
        document["updatedAt"] = timestamp
        try:
            payload = json.dumps(document)
        except (TypeError, ValueError) as e:
            raise StorageRejected(f"{kind} document is not serializable: {e}") from e

        entity_id = str(uuid.uuid4())
        # plain INSERT: an id collision fails instead of replacing a row
        self._execute(
            f"INSERT INTO {table} (id, document, created_at, updated_at) VALUES (?, ?, ?, ?)",
            (entity_id, payload, timestamp, timestamp),
        )
        log.debug("entity_inserted", kind=kind, id=entity_id)
        return entity_id

    def get_by_id(self, kind: str, entity_id: str) -> Optional[dict]:
        """Get a document by id."""
        rows = self._execute(
            f"SELECT id, document FROM {self._table(kind)} WHERE id = ?", (entity_id,)
        )
        return self._row_to_entity(rows[0]) if rows else None

    def find_by_exact_fields(self, kind: str, criteria: Mapping[str, str]) -> Optional[dict]:
        """
        Find the first document whose fields equal all given values.

        Example:
            store.find_by_exact_fields("Person", {"firstName": "Jane", "lastName": "Doe"})
        """
        table = self._table(kind)
        if not criteria:
            raise StorageRejected("At least one field is required for a lookup")

        conditions = []
        params = []
        for name, value in criteria.items():
            if not _FIELD_NAME.match(name):
                raise StorageRejected(f"Invalid field name: {name!r}")
            conditions.append("json_extract(document, ?) = ?")
            params.extend([f"$.{name}", value])

        rows = self._execute(
            f"SELECT id, document FROM {table} WHERE {' AND '.join(conditions)} LIMIT 1",
            params,
        )
        return self._row_to_entity(rows[0]) if rows else None

    def list_all(self, kind: str) -> list[dict]:
        """Get all documents of a kind. Order is unspecified."""
        rows = self._execute(f"SELECT id, document FROM {self._table(kind)}")
        return [self._row_to_entity(row) for row in rows]
