"""SQLite storage implementation."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import TraceEvent


class IStorage(Protocol):
    """Key-value storage for bot state and trace events (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # State documents
    async def read(self, keys: list[str]) -> dict[str, dict[str, Any]]:
        """Read state documents. Missing keys are absent from the result."""
        ...

    async def write(self, changes: dict[str, dict[str, Any]]) -> None:
        """Write state documents, replacing whatever is stored."""
        ...

    async def delete(self, keys: list[str]) -> None:
        """Delete state documents."""
        ...

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        conversation_id: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    # State documents
    async def read(self, keys: list[str]) -> dict[str, dict[str, Any]]:
        """Read state documents. Missing keys are absent from the result."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        if not keys:
            return {}

        placeholders = ",".join("?" * len(keys))
        cursor = await self._conn.execute(
            f"""
            SELECT key, document
            FROM state_items
            WHERE key IN ({placeholders})
            """,
            list(keys),
        )
        rows = await cursor.fetchall()

        return {row[0]: json.loads(row[1]) for row in rows}

    async def write(self, changes: dict[str, dict[str, Any]]) -> None:
        """Write state documents, replacing whatever is stored."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        if not changes:
            return

        for key, document in changes.items():
            await self._conn.execute(
                """
                INSERT OR REPLACE INTO state_items (key, document, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                """,
                (key, json.dumps(document, ensure_ascii=False)),
            )
        await self._conn.commit()

    async def delete(self, keys: list[str]) -> None:
        """Delete state documents."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        if not keys:
            return

        placeholders = ",".join("?" * len(keys))
        await self._conn.execute(
            f"DELETE FROM state_items WHERE key IN ({placeholders})",
            list(keys),
        )
        await self._conn.commit()

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute(
            """
            INSERT INTO trace_events (id, event_type, actor, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id or str(uuid.uuid4()),
                event.event_type,
                event.actor,
                json.dumps(event.data, ensure_ascii=False),
                event.timestamp.isoformat(),
            ),
        )
        await self._conn.commit()

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        conversation_id: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters (newest first)."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        conditions = []
        params: list[Any] = []

        if after:
            if after.tzinfo is None:
                after = after.replace(tzinfo=timezone.utc)
            conditions.append("timestamp > ?")
            params.append(after.isoformat())
        if event_types:
            placeholders = ",".join("?" * len(event_types))
            conditions.append(f"event_type IN ({placeholders})")
            params.extend(event_types)
        if actor:
            conditions.append("actor = ?")
            params.append(actor)
        if conversation_id:
            conditions.append("json_extract(data, '$.conversation_id') = ?")
            params.append(conversation_id)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            {where_clause}
            ORDER BY timestamp DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await self._conn.execute(query, params)
        rows = await cursor.fetchall()

        return [
            TraceEvent(
                id=row[0],
                event_type=row[1],
                actor=row[2],
                data=json.loads(row[3]),
                timestamp=datetime.fromisoformat(row[4]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        for table in ["state_items", "trace_events"]:
            await self._conn.execute(f"DELETE FROM {table}")

        await self._conn.commit()
