"""Record store adapters for nesting jobs, layouts and panels.

``InMemoryRecordStore`` backs tests, the CLI and the default web app.
``SupabaseRecordStore`` talks to the hosted tables through the Supabase
client's ``table(...).insert/update/select/delete(...).execute()`` chain.
"""

from __future__ import annotations

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from cabinet_nesting.contracts.protocols import PersistenceError

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryRecordStore:
    """Dictionary-backed record store.

    Rows are kept per table in insertion order. Every read returns a copy so
    callers cannot mutate stored rows.
    """

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, dict[str, Any]]] = {}

    def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        row = dict(record)
        if not row.get("id"):
            row["id"] = str(uuid.uuid4())
        timestamp = _now()
        row.setdefault("created_at", timestamp)
        row["updated_at"] = timestamp

        rows = self._tables.setdefault(table, {})
        if row["id"] in rows:
            raise PersistenceError(
                f"Duplicate id '{row['id']}' in {table}", table=table
            )
        rows[row["id"]] = row
        logger.debug("Inserted %s row %s", table, row["id"])
        return copy.deepcopy(row)

    def update(
        self, table: str, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any]:
        row = self._tables.get(table, {}).get(record_id)
        if row is None:
            raise PersistenceError(
                f"No {table} row with id '{record_id}'", table=table
            )
        row.update(changes)
        row["updated_at"] = _now()
        logger.debug("Updated %s row %s", table, record_id)
        return copy.deepcopy(row)

    def select(self, table: str, record_id: str) -> dict[str, Any] | None:
        row = self._tables.get(table, {}).get(record_id)
        return copy.deepcopy(row) if row is not None else None

    def delete(self, table: str, record_id: str) -> None:
        self._tables.get(table, {}).pop(record_id, None)

    def records(self, table: str) -> list[dict[str, Any]]:
        """All rows of ``table`` in insertion order."""
        return [copy.deepcopy(row) for row in self._tables.get(table, {}).values()]


class SupabaseRecordStore:
    """Record store on top of a Supabase (PostgREST) client.

    Attributes:
        client: A ``supabase.Client`` or any object with the same
            ``table()`` query builder interface.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, url: str, key: str) -> SupabaseRecordStore:
        """Create a store connected to the project at ``url``."""
        from supabase import create_client

        return cls(create_client(url, key))

    def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        row = {k: v for k, v in record.items() if not (k == "id" and not v)}
        try:
            response = self.client.table(table).insert(row).execute()
        except Exception as e:
            raise PersistenceError(f"Failed to insert into {table}: {e}", table=table) from e
        return self._single(response, table, "insert")

    def update(
        self, table: str, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any]:
        payload = dict(changes)
        payload["updated_at"] = _now()
        try:
            response = (
                self.client.table(table).update(payload).eq("id", record_id).execute()
            )
        except Exception as e:
            raise PersistenceError(f"Failed to update {table}: {e}", table=table) from e
        return self._single(response, table, "update")

    def select(self, table: str, record_id: str) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(table)
                .select("*")
                .eq("id", record_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise PersistenceError(f"Failed to read {table}: {e}", table=table) from e
        return response.data[0] if response.data else None

    def delete(self, table: str, record_id: str) -> None:
        try:
            self.client.table(table).delete().eq("id", record_id).execute()
        except Exception as e:
            raise PersistenceError(f"Failed to delete from {table}: {e}", table=table) from e

    def _single(self, response: Any, table: str, operation: str) -> dict[str, Any]:
        if not response.data:
            raise PersistenceError(
                f"Supabase returned no row for {operation} on {table}", table=table
            )
        return response.data[0]
