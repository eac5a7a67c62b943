"""Tests für die Health-Checks."""

from __future__ import annotations

from pathlib import Path

import pytest

from app.config import Settings
from app.health import (
    check_sqlite_writable,
    check_training_service_reachable,
    overall_status,
)


def _checks(db: str = "ok", conn: str = "ok", training: str = "ok") -> dict:
    return {
        "database": {"status": db},
        "db_connection": {"status": conn},
        "training_service": {"status": training},
    }


class TestOverallStatus:
    def test_healthy(self) -> None:
        assert overall_status(_checks()) == "healthy"

    @pytest.mark.parametrize("training", ["not_configured", "unreachable", "error"])
    def test_degraded_without_training(self, training: str) -> None:
        assert overall_status(_checks(training=training)) == "degraded"

    def test_unhealthy_on_db_problem(self) -> None:
        assert overall_status(_checks(conn="error")) == "unhealthy"
        assert overall_status(_checks(db="error")) == "unhealthy"


class TestChecks:
    def test_sqlite_writable(self, tmp_path: Path) -> None:
        result = check_sqlite_writable(Settings(data_dir=tmp_path / "data"))
        assert result["status"] == "ok"
        assert (tmp_path / "data").is_dir()
        assert not (tmp_path / "data" / ".write_test").exists()

    async def test_training_not_configured(self) -> None:
        result = await check_training_service_reachable(Settings(training_api_url=None))
        assert result == {"status": "not_configured"}
