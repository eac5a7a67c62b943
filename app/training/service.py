"""Anlegen von Modellen und Anstoßen des Trainings.

Verbindet Persistenz und Trainingsdienst:
1. Entwurf speichern (Status "training")
2. Trainingsauftrag im Hintergrund senden
3. Schlägt der Auftrag fehl, wird das Modell als "failed" markiert

Das Trainingsende selbst kommt asynchron über den Status-Webhook.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from app.db.exceptions import DatabaseError
from app.logging_config import get_logger
from app.registry.models import ModelDraft, ModelRecord, ModelStatus
from app.training.exceptions import TrainingError, TrainingNotConfiguredError

if TYPE_CHECKING:
    from app.db.database import Database
    from app.training.client import TrainingClient

logger = get_logger("training")


class TrainingService:
    """Speichert Modelle und stößt deren Training an.

    Verwendung:
        service = TrainingService(database, client)
        record = await service.submit(draft)
        ...
        await service.shutdown()
    """

    def __init__(self, database: Database, client: TrainingClient | None = None) -> None:
        self._database = database
        self._client = client
        self._tasks: set[asyncio.Task[None]] = set()

    async def submit(self, draft: ModelDraft, user_id: str | None = None) -> ModelRecord:
        """Speichert den Entwurf und startet das Training im Hintergrund."""
        record = await self._database.insert_model(draft, user_id=user_id)
        self.start_training(record.id)
        return record

    def start_training(self, model_id: str) -> asyncio.Task[None]:
        """Sendet den Trainingsauftrag als Background-Task (fire-and-forget)."""
        task = asyncio.create_task(
            self._run_training(model_id),
            name=f"training-{model_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_training(self, model_id: str) -> None:
        """Sendet den Auftrag; bei Fehlern wird das Modell als failed markiert."""
        try:
            if self._client is None:
                raise TrainingNotConfiguredError()
            await self._client.start_training(model_id)
            logger.info("Training für Modell %s beauftragt", model_id)
        except TrainingError as exc:
            logger.error("Training für Modell %s konnte nicht gestartet werden: %s", model_id, exc)
            try:
                await self._database.update_model_status(
                    model_id, ModelStatus.FAILED, error_message=str(exc)
                )
            except DatabaseError as db_exc:
                # Webhook war schneller oder Datensatz fehlt
                logger.warning("Status für Modell %s nicht gesetzt: %s", model_id, db_exc)
        except Exception as exc:
            logger.exception(
                "Unerwarteter Fehler beim Trainingsauftrag für Modell %s: %s", model_id, exc
            )

    async def shutdown(self) -> None:
        """Wartet auf laufende Trainingsaufträge."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
