"""Modell-Register: Datensätze, Datenquellen und Assistenten-Helfer."""

from app.registry.models import (
    DEFAULT_MODEL_NAME,
    CsvDataSource,
    DataSource,
    DataSourceType,
    ModelDraft,
    ModelRecord,
    ModelStatus,
    S3DataSource,
    data_source_storage_dict,
)
from app.registry.naming import (
    csv_source_complete,
    s3_source_complete,
    suggest_model_name,
)

__all__ = [
    "DEFAULT_MODEL_NAME",
    "CsvDataSource",
    "DataSource",
    "DataSourceType",
    "ModelDraft",
    "ModelRecord",
    "ModelStatus",
    "S3DataSource",
    "data_source_storage_dict",
    "csv_source_complete",
    "s3_source_complete",
    "suggest_model_name",
]
