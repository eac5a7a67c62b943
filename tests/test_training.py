"""Tests für Trainings-Client, -Service und Statusabfrage."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from tenacity import wait_none

from app.db import Database, ModelNotFoundError
from app.registry.models import ModelDraft, ModelStatus
from app.training import (
    TrainingAuthError,
    TrainingClient,
    TrainingConnectionError,
    TrainingError,
    TrainingRejectedError,
    TrainingServerError,
    TrainingService,
    wait_for_terminal_status,
)


@pytest.fixture(autouse=True)
def _no_retry_wait(monkeypatch: pytest.MonkeyPatch) -> None:
    """Retries ohne Wartezeit, damit die Tests schnell bleiben."""
    monkeypatch.setattr(TrainingClient._request.retry, "wait", wait_none())


def _client(handler, token: str | None = "tok") -> TrainingClient:
    return TrainingClient(
        "http://trainer.local/", token=token, transport=httpx.MockTransport(handler)
    )


# ---------------------------------------------------------------------------
# TrainingClient
# ---------------------------------------------------------------------------


class TestTrainingClient:
    async def test_start_training_posts_model_id(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(202, json={"job_id": "job-1"})

        async with _client(handler) as client:
            result = await client.start_training("abc123")

        assert result == {"job_id": "job-1"}
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert request.url == httpx.URL("http://trainer.local/train")
        assert json.loads(request.content) == {"model_id": "abc123"}
        assert request.headers["Authorization"] == "Bearer tok"

    async def test_no_token_no_auth_header(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert "Authorization" not in request.headers
            return httpx.Response(204)

        async with _client(handler, token=None) as client:
            assert await client.start_training("x") == {}

    async def test_auth_error_not_retried(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(401, json={"detail": "bad token"})

        async with _client(handler) as client:
            with pytest.raises(TrainingAuthError) as exc_info:
                await client.start_training("x")

        assert exc_info.value.status_code == 401
        assert calls == 1

    async def test_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, text="unknown model")

        async with _client(handler) as client:
            with pytest.raises(TrainingRejectedError):
                await client.start_training("x")

    async def test_server_error_retried_then_raised(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(503)

        async with _client(handler) as client:
            with pytest.raises(TrainingServerError):
                await client.start_training("x")

        assert calls == 3

    async def test_transient_error_recovers(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"ok": True})

        async with _client(handler) as client:
            assert await client.start_training("x") == {"ok": True}
        assert calls == 2

    async def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(TrainingConnectionError):
                await client.start_training("x")

    async def test_requires_context_manager(self) -> None:
        client = TrainingClient("http://trainer.local")
        with pytest.raises(TrainingError):
            await client.start_training("x")


# ---------------------------------------------------------------------------
# TrainingService
# ---------------------------------------------------------------------------


class _FakeClient:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.started: list[str] = []

    async def start_training(self, model_id: str) -> dict:
        self.started.append(model_id)
        if self.error is not None:
            raise self.error
        return {}


class TestTrainingService:
    async def test_submit_persists_and_triggers(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        client = _FakeClient()
        service = TrainingService(database, client)  # type: ignore[arg-type]

        record = await service.submit(csv_draft)
        await service.shutdown()

        assert client.started == [record.id]
        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.status == ModelStatus.TRAINING

    async def test_trigger_failure_marks_failed(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        service = TrainingService(database, _FakeClient(TrainingServerError("down", 503)))  # type: ignore[arg-type]

        record = await service.submit(csv_draft)
        await service.shutdown()

        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.status == ModelStatus.FAILED
        assert loaded.error_message == "down"

    async def test_without_client_marks_failed(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        service = TrainingService(database, None)

        record = await service.submit(csv_draft)
        await service.shutdown()

        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.status == ModelStatus.FAILED
        assert "TRAINING_API_URL" in (loaded.error_message or "")

    async def test_webhook_first_is_not_overwritten(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        record = await database.insert_model(csv_draft)
        await database.update_model_status(record.id, ModelStatus.COMPLETED)

        service = TrainingService(database, _FakeClient(TrainingServerError("late", 500)))  # type: ignore[arg-type]
        await service.start_training(record.id)

        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.status == ModelStatus.COMPLETED

    async def test_unexpected_error_is_logged_not_raised(
        self,
        database: Database,
        csv_draft: ModelDraft,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        record = await database.insert_model(csv_draft)
        service = TrainingService(database, _FakeClient(RuntimeError("connection closed")))  # type: ignore[arg-type]

        task = service.start_training(record.id)
        with caplog.at_level("ERROR", logger="model_wizard.training"):
            await task

        assert task.exception() is None
        assert "connection closed" in caplog.text
        loaded = await database.get_model(record.id)
        assert loaded is not None
        assert loaded.status == ModelStatus.TRAINING


# ---------------------------------------------------------------------------
# wait_for_terminal_status
# ---------------------------------------------------------------------------


class TestWaitForTerminalStatus:
    async def test_returns_when_completed(
        self, database: Database, csv_draft: ModelDraft
    ) -> None:
        record = await database.insert_model(csv_draft)

        waiter = asyncio.create_task(
            wait_for_terminal_status(database, record.id, poll_interval=0.01, timeout=5)
        )
        await asyncio.sleep(0.05)
        assert not waiter.done()

        await database.update_model_status(record.id, ModelStatus.COMPLETED)
        final = await waiter
        assert final.status == ModelStatus.COMPLETED

    async def test_timeout(self, database: Database, csv_draft: ModelDraft) -> None:
        record = await database.insert_model(csv_draft)
        with pytest.raises(asyncio.TimeoutError):
            await wait_for_terminal_status(database, record.id, poll_interval=0.01, timeout=0.05)

    async def test_unknown_model(self, database: Database) -> None:
        with pytest.raises(ModelNotFoundError):
            await wait_for_terminal_status(database, "missing", poll_interval=0.01, timeout=1)
