"""SQLite State-Management für den Modell-Assistenten.

Speichert die im Assistenten angelegten Modelle samt Datenquelle,
Input-/Output-Schema und Trainingsstatus.  Nutzt aiosqlite für
async Zugriff.

Schema-Migrationen erfolgen über CREATE TABLE IF NOT EXISTS.
Die Datenbank liegt unter <data_dir>/wizard.db.

Tabellen:
- models: Ein Datensatz pro angelegtem Modell
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

from app.db.exceptions import InvalidStatusTransitionError, ModelNotFoundError
from app.logging_config import get_logger
from app.registry.models import (
    ModelDraft,
    ModelRecord,
    ModelStatus,
    data_source_storage_dict,
)

logger = get_logger("db")


# ---------------------------------------------------------------------------
# Schema-Definitionen
# ---------------------------------------------------------------------------

_SCHEMA_MODELS = """
CREATE TABLE IF NOT EXISTS models (
    id TEXT PRIMARY KEY,
    user_id TEXT,
    name TEXT NOT NULL,
    problem_description TEXT NOT NULL,

    -- Datenquelle als JSON ({type: csv|s3, ...})
    data_source_json TEXT NOT NULL,

    -- Schemas als JSON-Objekte
    input_schema_json TEXT NOT NULL DEFAULT '{}',
    output_schema_json TEXT NOT NULL DEFAULT '{}',

    -- Status
    status TEXT NOT NULL DEFAULT 'training',
    error_message TEXT,

    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
);
"""

# Indizes für häufige Abfragen
_INDEXES = [
    # Dashboard: neueste Modelle zuerst
    "CREATE INDEX IF NOT EXISTS idx_models_created_at "
    "ON models(created_at);",

    # Statuszähler
    "CREATE INDEX IF NOT EXISTS idx_models_status "
    "ON models(status);",
]


# ---------------------------------------------------------------------------
# Database-Klasse
# ---------------------------------------------------------------------------

class Database:
    """Async SQLite-Datenbankzugriff mit Schema-Migration.

    Verwendung:
        db = Database(path)
        await db.initialize()
        ...
        await db.close()

    Oder als Context-Manager:
        async with Database(path) as db:
            ...
    """

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self._connection: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Erstellt Verbindung, setzt PRAGMAs und führt Schema-Migration aus."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = await aiosqlite.connect(str(self._db_path))

        # WAL-Modus: Webhook schreibt, während die UI liest
        await self._connection.execute("PRAGMA journal_mode=WAL")
        self._connection.row_factory = aiosqlite.Row

        await self._migrate()
        logger.info("Datenbank initialisiert: %s", self._db_path)

    async def close(self) -> None:
        """Schließt die Datenbankverbindung."""
        if self._connection:
            await self._connection.close()
            self._connection = None
            logger.info("Datenbankverbindung geschlossen")

    async def __aenter__(self) -> Database:
        await self.initialize()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    @property
    def connection(self) -> aiosqlite.Connection:
        """Gibt die aktive Verbindung zurück.

        Raises:
            RuntimeError: Wenn die Datenbank nicht initialisiert ist.
        """
        if self._connection is None:
            raise RuntimeError(
                "Datenbank nicht initialisiert – "
                "await db.initialize() aufrufen"
            )
        return self._connection

    # --- Schema-Migration ---

    async def _migrate(self) -> None:
        """Erstellt Tabellen und Indizes falls sie nicht existieren (idempotent)."""
        conn = self.connection
        await conn.execute(_SCHEMA_MODELS)
        for idx_sql in _INDEXES:
            await conn.execute(idx_sql)
        await conn.commit()
        logger.debug("Schema-Migration abgeschlossen")

    # --- Modelle ---

    async def insert_model(
        self,
        draft: ModelDraft,
        user_id: str | None = None,
    ) -> ModelRecord:
        """Speichert einen Entwurf als neues Modell im Status "training".

        Args:
            draft: Validierter Entwurf aus dem Assistenten.
            user_id: Optionaler Besitzer.

        Returns:
            Der gespeicherte Datensatz mit generierter ID.
        """
        record = ModelRecord(**draft.model_dump(), user_id=user_id)

        await self.connection.execute(
            """
            INSERT INTO models (
                id, user_id, name, problem_description,
                data_source_json, input_schema_json, output_schema_json,
                status, error_message, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record.id,
                record.user_id,
                record.name,
                record.problem_description,
                json.dumps(data_source_storage_dict(draft.data_source)),
                json.dumps(record.input_schema),
                json.dumps(record.output_schema),
                record.status.value,
                record.error_message,
                record.created_at.isoformat(),
                record.updated_at.isoformat(),
            ),
        )
        await self.connection.commit()

        logger.info(
            "Modell gespeichert: id=%s, name='%s', quelle=%s",
            record.id, record.name, record.data_source.type,
        )
        return record

    async def get_model(self, model_id: str) -> ModelRecord | None:
        """Lädt ein Modell anhand seiner ID, None wenn nicht vorhanden."""
        cursor = await self.connection.execute(
            "SELECT * FROM models WHERE id = ?", (model_id,)
        )
        row = await cursor.fetchone()
        return _row_to_record(row) if row is not None else None

    async def list_models(self, limit: int = 50) -> list[ModelRecord]:
        """Neueste Modelle zuerst."""
        cursor = await self.connection.execute(
            "SELECT * FROM models ORDER BY created_at DESC, rowid DESC LIMIT ?", (limit,)
        )
        return [_row_to_record(row) for row in await cursor.fetchall()]

    async def update_model_status(
        self,
        model_id: str,
        status: ModelStatus,
        error_message: str | None = None,
    ) -> ModelRecord:
        """Setzt den Trainingsstatus eines Modells.

        Raises:
            ModelNotFoundError: Wenn die ID unbekannt ist.
            InvalidStatusTransitionError: Bei unerlaubtem Wechsel
                (z.B. aus einem Endzustand heraus).
        """
        # Prüfung und Schreiben in einem Statement: bei gleichzeitigen
        # Meldungen gewinnt die erste, die zweite trifft keine Zeile mehr.
        sources = [s.value for s in ModelStatus if s.can_transition_to(status)]
        updated = 0
        if sources:
            placeholders = ", ".join("?" for _ in sources)
            cursor = await self.connection.execute(
                f"""
                UPDATE models
                SET status = ?, error_message = ?, updated_at = ?
                WHERE id = ? AND status IN ({placeholders})
                """,
                (status.value, error_message,
                 datetime.now(timezone.utc).isoformat(), model_id, *sources),
            )
            updated = cursor.rowcount
            await self.connection.commit()

        record = await self.get_model(model_id)
        if record is None:
            raise ModelNotFoundError(model_id)
        if updated == 0:
            raise InvalidStatusTransitionError(
                model_id, record.status.value, status.value
            )

        logger.info("Modell %s: Status → %s", model_id, status.value)
        return record

    async def get_status_counts(self) -> dict[str, int]:
        """Anzahl Modelle je Status (alle Status-Werte als Schlüssel)."""
        counts = {status.value: 0 for status in ModelStatus}
        cursor = await self.connection.execute(
            "SELECT status, COUNT(*) AS cnt FROM models GROUP BY status"
        )
        for row in await cursor.fetchall():
            counts[row["status"]] = row["cnt"]
        return counts


def _row_to_record(row: aiosqlite.Row) -> ModelRecord:
    """Wandelt eine DB-Zeile in einen ModelRecord um."""
    return ModelRecord(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        problem_description=row["problem_description"],
        data_source=json.loads(row["data_source_json"]),
        input_schema=json.loads(row["input_schema_json"] or "{}"),
        output_schema=json.loads(row["output_schema_json"] or "{}"),
        status=ModelStatus(row["status"]),
        error_message=row["error_message"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )
