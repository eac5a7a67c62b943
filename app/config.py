"""Konfigurationsmanagement mit Pydantic Settings.

Lädt Konfiguration aus Environment-Variablen und .env-Datei.
Alle Felder haben Defaults – der Assistent startet auch ohne
Trainingsdienst (Modelle bleiben dann im Status "training" bzw.
werden als "failed" markiert).
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Erlaubte Log-Level."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    """Zentrale Konfiguration des Modell-Assistenten."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # ENV-Variablen haben Vorrang vor .env-Datei
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Server ---
    host: str = Field(default="0.0.0.0", description="Bind-Adresse des Servers")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP-Port")

    # --- Trainingsdienst ---
    training_api_url: Optional[str] = Field(
        default=None,
        description="Basis-URL des Trainingsdienstes (z.B. http://trainer:9000)",
    )
    training_api_token: Optional[str] = Field(
        default=None,
        description="Bearer-Token für den Trainingsdienst (optional)",
    )
    training_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="HTTP-Timeout für Anfragen an den Trainingsdienst",
    )
    training_wait_timeout_seconds: float = Field(
        default=600.0,
        gt=0,
        description="Maximale Wartezeit der UI auf das Trainingsende",
    )
    status_poll_interval_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Intervall, in dem die UI den Trainingsstatus abfragt",
    )

    # --- Datenquellen ---
    default_s3_region: str = Field(
        default="us-east-1",
        description="Vorbelegung des Region-Felds im Assistenten",
    )
    max_upload_mb: int = Field(
        default=100,
        ge=1,
        description="Maximale Größe eines CSV-Uploads in MB",
    )

    # --- Logging ---
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Log-Level für die Anwendung",
    )

    # --- Pfade ---
    data_dir: Path = Field(
        default=Path("/app/data"),
        description="Verzeichnis für SQLite-DB, Uploads und Logs",
    )

    @field_validator("training_api_url")
    @classmethod
    def validate_training_url(cls, v: Optional[str]) -> Optional[str]:
        """Leere URL = kein Dienst; sonst http(s) und ohne Trailing Slash."""
        if v is None or not v.strip():
            return None
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("TRAINING_API_URL muss mit http:// oder https:// beginnen")
        return v

    @property
    def training_enabled(self) -> bool:
        return self.training_api_url is not None

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def db_path(self) -> Path:
        """Pfad zur SQLite-Datenbank."""
        return self.data_dir / "wizard.db"

    @property
    def log_dir(self) -> Path:
        """Pfad zum Log-Verzeichnis."""
        return self.data_dir / "logs"

    @property
    def upload_dir(self) -> Path:
        """Ablage für hochgeladene CSV-Dateien."""
        return self.data_dir / "uploads"


# Singleton-Pattern: wird beim ersten Zugriff erstellt
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Gibt die Settings-Instanz zurück (Lazy Singleton).

    Wird beim ersten Aufruf erstellt und danach wiederverwendet.
    Wirft ValidationError bei ungültigen Werten.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
