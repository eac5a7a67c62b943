"""Zustand des Assistenten "Neues Modell".

Hält alle Eingaben der drei Schritte und die Übergänge zwischen ihnen.
Ohne NiceGUI-Abhängigkeit; wizard.py rendert nur diesen Zustand.

Schritte:
    PROBLEM → DATA_SOURCE → SCHEMA → TRAINING → SUCCESS | FAILED
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.registry.models import (
    DEFAULT_S3_REGION,
    CsvDataSource,
    DataSourceType,
    ModelDraft,
    S3DataSource,
)
from app.registry.naming import (
    csv_source_complete,
    s3_source_complete,
    suggest_model_name,
)
from app.schemas import format_schema, generate_schemas, validate_schema


class WizardStep(str, Enum):
    """Schritte des Assistenten."""
    PROBLEM = "problem"
    DATA_SOURCE = "data_source"
    SCHEMA = "schema"
    TRAINING = "training"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def number(self) -> int:
        """Nummer für die Fortschrittsanzeige (1–3, danach 3)."""
        return {
            WizardStep.PROBLEM: 1,
            WizardStep.DATA_SOURCE: 2,
        }.get(self, 3)


@dataclass
class WizardState:
    """Eingaben und aktueller Schritt des Assistenten."""

    step: WizardStep = WizardStep.PROBLEM

    # Schritt 1: Problem
    problem_description: str = ""
    model_name: str = ""
    name_manually_edited: bool = False

    # Schritt 2: Datenquelle
    data_source_type: DataSourceType = DataSourceType.CSV
    csv_file_name: str | None = None
    csv_file_size: int = 0
    s3_bucket_url: str = ""
    s3_region: str = DEFAULT_S3_REGION
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""

    # Schritt 3: Schemas (Editor-Text + Validierungsfehler)
    input_schema_text: str = ""
    output_schema_text: str = ""
    input_schema_error: str | None = None
    output_schema_error: str | None = None

    # Nach dem Absenden
    submitting: bool = False
    model_id: str | None = None
    error_message: str | None = None

    # --- Schritt 1 ---

    def set_problem_description(self, text: str) -> None:
        """Beschreibung setzen; der Name folgt, bis er manuell geändert wurde."""
        self.problem_description = text
        if not self.name_manually_edited and text:
            self.model_name = suggest_model_name(text)

    def set_model_name(self, name: str) -> None:
        self.model_name = name
        self.name_manually_edited = True

    @property
    def problem_complete(self) -> bool:
        return bool(self.problem_description.strip())

    def continue_to_data_source(self) -> bool:
        if not self.problem_complete:
            return False
        self.step = WizardStep.DATA_SOURCE
        return True

    # --- Schritt 2 ---

    def set_csv_file(self, file_name: str | None, file_size: int = 0) -> None:
        self.csv_file_name = file_name
        self.csv_file_size = file_size

    @property
    def data_source_complete(self) -> bool:
        if self.data_source_type == DataSourceType.CSV:
            return csv_source_complete(self.csv_file_name)
        return s3_source_complete(
            self.s3_bucket_url, self.s3_access_key_id, self.s3_secret_access_key
        )

    def continue_to_schema(self) -> bool:
        """Schlägt Schemas vor und wechselt zu Schritt 3.

        Bereits vorhandene Editor-Inhalte werden überschrieben, genau wie
        beim erneuten Durchlaufen des Assistenten im Browser.
        """
        if not self.data_source_complete:
            return False
        schemas = generate_schemas(self.problem_description)
        self.input_schema_text = format_schema(schemas.input)
        self.output_schema_text = format_schema(schemas.output)
        self.input_schema_error = None
        self.output_schema_error = None
        self.step = WizardStep.SCHEMA
        return True

    # --- Schritt 3 ---

    def set_input_schema(self, text: str | None) -> None:
        self.input_schema_text = text or ""
        self.input_schema_error = validate_schema(self.input_schema_text).error

    def set_output_schema(self, text: str | None) -> None:
        self.output_schema_text = text or ""
        self.output_schema_error = validate_schema(self.output_schema_text).error

    @property
    def can_submit(self) -> bool:
        return (
            not self.submitting
            and self.input_schema_error is None
            and self.output_schema_error is None
        )

    def back(self) -> None:
        """Einen Schritt zurück (nur innerhalb der Schritte 1–3)."""
        if self.step == WizardStep.DATA_SOURCE:
            self.step = WizardStep.PROBLEM
        elif self.step == WizardStep.SCHEMA:
            self.step = WizardStep.DATA_SOURCE

    # --- Absenden ---

    def build_draft(self) -> ModelDraft:
        """Erzeugt den zu speichernden Entwurf.

        Schemas werden erneut validiert; ungültige oder leere Texte
        werden als leeres Objekt gespeichert.

        Raises:
            pydantic.ValidationError: Bei unvollständiger Datenquelle.
        """
        if self.data_source_type == DataSourceType.CSV:
            source: CsvDataSource | S3DataSource = CsvDataSource(
                file_name=self.csv_file_name or "",
                file_size=self.csv_file_size,
            )
        else:
            source = S3DataSource(
                bucket_url=self.s3_bucket_url,
                region=self.s3_region,
                access_key_id=self.s3_access_key_id,
                secret_access_key=self.s3_secret_access_key,
            )

        return ModelDraft(
            name=self.model_name,
            problem_description=self.problem_description,
            data_source=source,
            input_schema=validate_schema(self.input_schema_text).parsed or {},
            output_schema=validate_schema(self.output_schema_text).parsed or {},
        )

    def begin_submit(self) -> bool:
        """Sperrt weiteres Absenden; False wenn gesperrt oder Schema ungültig."""
        if not self.can_submit:
            return False
        self.submitting = True
        return True

    def abort_submit(self) -> None:
        self.submitting = False

    def mark_submitted(self, model_id: str) -> None:
        self.submitting = False
        self.model_id = model_id
        self.step = WizardStep.TRAINING

    def mark_finished(self, succeeded: bool, error_message: str | None = None) -> None:
        self.step = WizardStep.SUCCESS if succeeded else WizardStep.FAILED
        self.error_message = error_message
