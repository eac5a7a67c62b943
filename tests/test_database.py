"""Tests für die SQLite-Persistenz der Modelle."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from app.db import Database, InvalidStatusTransitionError, ModelNotFoundError
from app.registry.models import ModelDraft, ModelStatus, S3DataSource


class TestInsertAndLoad:
    async def test_insert_assigns_id_and_training_status(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        record = await database.insert_model(csv_draft, user_id="user-1")

        assert record.id
        assert record.status == ModelStatus.TRAINING
        assert record.user_id == "user-1"

        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.name == "Fraud Mails"
        assert loaded.problem_description == csv_draft.problem_description
        assert loaded.input_schema == csv_draft.input_schema
        assert loaded.output_schema == csv_draft.output_schema
        assert loaded.data_source == csv_draft.data_source
        assert loaded.created_at == record.created_at

    async def test_s3_secret_survives_round_trip(
        self, database: Database, s3_draft: ModelDraft
    ) -> None:
        record = await database.insert_model(s3_draft)
        loaded = await database.get_model(record.id)

        assert loaded is not None
        assert isinstance(loaded.data_source, S3DataSource)
        assert loaded.data_source.secret_access_key.get_secret_value() == "very-secret"
        assert loaded.data_source.region == "eu-central-1"

    async def test_unknown_id(self, database: Database) -> None:
        assert await database.get_model("does-not-exist") is None

    async def test_list_newest_first(
        self, database: Database, csv_draft: ModelDraft, s3_draft: ModelDraft
    ) -> None:
        first = await database.insert_model(csv_draft)
        second = await database.insert_model(s3_draft)

        models = await database.list_models()
        assert [m.id for m in models] == [second.id, first.id]
        assert len(await database.list_models(limit=1)) == 1


class TestStatusUpdates:
    async def test_training_to_completed(self, database: Database, csv_draft: ModelDraft) -> None:
        record = await database.insert_model(csv_draft)

        updated = await database.update_model_status(record.id, ModelStatus.COMPLETED)
        assert updated.status == ModelStatus.COMPLETED
        assert updated.updated_at >= record.updated_at

        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.status == ModelStatus.COMPLETED

    async def test_failed_keeps_error_message(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        record = await database.insert_model(csv_draft)
        await database.update_model_status(record.id, ModelStatus.FAILED, "out of memory")

        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.error_message == "out of memory"

    async def test_terminal_status_is_final(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        record = await database.insert_model(csv_draft)
        await database.update_model_status(record.id, ModelStatus.COMPLETED)

        with pytest.raises(InvalidStatusTransitionError):
            await database.update_model_status(record.id, ModelStatus.FAILED)

    async def test_concurrent_updates_first_wins(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        record = await database.insert_model(csv_draft)

        results = await asyncio.gather(
            database.update_model_status(record.id, ModelStatus.COMPLETED),
            database.update_model_status(record.id, ModelStatus.FAILED, "late"),
            return_exceptions=True,
        )

        assert results[0].status == ModelStatus.COMPLETED
        assert isinstance(results[1], InvalidStatusTransitionError)
        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.status == ModelStatus.COMPLETED
        assert loaded.error_message is None

    async def test_unknown_model(self, database: Database) -> None:
        with pytest.raises(ModelNotFoundError):
            await database.update_model_status("missing", ModelStatus.COMPLETED)

    async def test_status_counts(
        self, database: Database, csv_draft: ModelDraft, s3_draft: ModelDraft
    ) -> None:
        a = await database.insert_model(csv_draft)
        await database.insert_model(s3_draft)
        await database.update_model_status(a.id, ModelStatus.FAILED)

        assert await database.get_status_counts() == {
            "training": 1,
            "completed": 0,
            "failed": 1,
        }


class TestLifecycle:
    async def test_connection_required(self, tmp_path: Path) -> None:
        db = Database(tmp_path / "x.db")
        with pytest.raises(RuntimeError):
            _ = db.connection

    async def test_migration_is_idempotent(self, tmp_path: Path, csv_draft: ModelDraft) -> None:
        path = tmp_path / "nested" / "wizard.db"
        async with Database(path) as db:
            record = await db.insert_model(csv_draft)
        async with Database(str(path)) as db:
            assert await db.get_model(record.id) is not None
