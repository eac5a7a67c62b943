"""Gemeinsame Fixtures für die Test-Suite."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

import pytest

from app.db.database import Database
from app.registry.models import CsvDataSource, ModelDraft, S3DataSource


@pytest.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    """Frische SQLite-Datenbank pro Test."""
    async with Database(tmp_path / "wizard.db") as db:
        yield db


@pytest.fixture
def csv_draft() -> ModelDraft:
    return ModelDraft(
        name="Fraud Mails",
        problem_description="I want to identify which company emails are fraudulent",
        data_source=CsvDataSource(file_name="mails.csv", file_size=2048),
        input_schema={"type": "object", "properties": {}, "required": []},
        output_schema={"type": "object", "properties": {}, "required": []},
    )


@pytest.fixture
def s3_draft() -> ModelDraft:
    return ModelDraft(
        name="",
        problem_description="Forecast weekly sales",
        data_source=S3DataSource(
            bucket_url="s3://sales-bucket/weekly",
            region="eu-central-1",
            access_key_id="AKIAEXAMPLE",
            secret_access_key="very-secret",
        ),
    )
