"""Pydantic-Modelle für Modell-Datensätze und Datenquellen.

Bilden die Daten ab, die der Assistent beim Anlegen eines Modells
sammelt und persistiert:
- Datenquelle (CSV-Upload oder S3-Bucket)
- Entwurf (ModelDraft) aus dem Assistenten
- Gespeicherter Datensatz (ModelRecord) mit ID und Trainingsstatus

Die Schema-Kernlogik (app.schemas) kennt diese Modelle nicht –
für sie ist die Datenquelle opak.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_MODEL_NAME = "Untitled Model"
DEFAULT_S3_REGION = "us-east-1"
S3_URL_PREFIX = "s3://"


# =============================================================================
# Status
# =============================================================================

class ModelStatus(str, Enum):
    """Trainingsstatus eines Modells."""
    TRAINING = "training"     # Angelegt, Training läuft
    COMPLETED = "completed"   # Training erfolgreich
    FAILED = "failed"         # Training fehlgeschlagen

    @property
    def is_terminal(self) -> bool:
        return self is not ModelStatus.TRAINING

    def can_transition_to(self, target: ModelStatus) -> bool:
        """Erlaubt sind nur training → completed und training → failed."""
        return self is ModelStatus.TRAINING and target.is_terminal


class DataSourceType(str, Enum):
    """Art der Trainingsdaten."""
    CSV = "csv"
    S3 = "s3"


# =============================================================================
# Datenquellen
# =============================================================================

class CsvDataSource(BaseModel):
    """Hochgeladene CSV-Datei."""
    model_config = ConfigDict(frozen=True)

    type: Literal["csv"] = "csv"
    file_name: str = Field(..., min_length=1)
    file_size: int = Field(..., ge=0)

    def public_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class S3DataSource(BaseModel):
    """S3-Bucket mit Zugangsdaten.

    Der Secret Key ist ein SecretStr und erscheint weder in repr() noch
    in Logs.  Für die Persistierung wird er explizit ausgepackt.
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["s3"] = "s3"
    bucket_url: str = Field(..., min_length=1)
    region: str = DEFAULT_S3_REGION
    access_key_id: str = Field(..., min_length=1)
    secret_access_key: SecretStr

    @field_validator("bucket_url")
    @classmethod
    def validate_bucket_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(S3_URL_PREFIX):
            raise ValueError("Bucket-URL muss mit 's3://' beginnen")
        return v

    @field_validator("region")
    @classmethod
    def default_region(cls, v: str) -> str:
        """Leere Region (leeres Eingabefeld) → Standardregion."""
        return v.strip() or DEFAULT_S3_REGION

    def public_dict(self) -> dict[str, Any]:
        """Darstellung für UI und Logs mit maskiertem Secret."""
        data = self.model_dump(mode="json")
        data["secret_access_key"] = "********"
        return data

    def storage_dict(self) -> dict[str, Any]:
        """Vollständige Darstellung für die Datenbank."""
        data = self.model_dump(mode="json")
        data["secret_access_key"] = self.secret_access_key.get_secret_value()
        return data


DataSource = Annotated[
    Union[CsvDataSource, S3DataSource],
    Field(discriminator="type"),
]


def data_source_storage_dict(source: CsvDataSource | S3DataSource) -> dict[str, Any]:
    """Datenquelle für die Persistierung serialisieren."""
    if isinstance(source, S3DataSource):
        return source.storage_dict()
    return source.model_dump(mode="json")


# =============================================================================
# Modell-Entwurf und -Datensatz
# =============================================================================

class ModelDraft(BaseModel):
    """Eingaben aus dem Assistenten, bereit zum Speichern."""

    name: str = DEFAULT_MODEL_NAME
    problem_description: str = Field(..., min_length=1)
    data_source: DataSource
    input_schema: dict[str, Any] = Field(default_factory=dict)
    output_schema: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def default_name(cls, v: str) -> str:
        return v.strip() or DEFAULT_MODEL_NAME

    @field_validator("problem_description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Problembeschreibung darf nicht leer sein")
        return v


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_model_id() -> str:
    return uuid.uuid4().hex


class ModelRecord(ModelDraft):
    """Persistierter Modell-Datensatz."""

    id: str = Field(default_factory=_new_model_id)
    user_id: str | None = None
    status: ModelStatus = ModelStatus.TRAINING
    error_message: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
