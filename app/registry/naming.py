"""Hilfsfunktionen für den Assistenten: Namensvorschlag und Vollständigkeit."""

from __future__ import annotations

from app.registry.models import S3_URL_PREFIX

# Anzahl Wörter aus der Beschreibung für den Namensvorschlag
NAME_WORD_COUNT = 4


def suggest_model_name(problem_description: str) -> str:
    """Leitet einen Modellnamen aus den ersten Wörtern der Beschreibung ab.

    "I want to identify fraud" → "I Want To Identify"
    """
    words = problem_description.split()[:NAME_WORD_COUNT]
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def csv_source_complete(file_name: str | None) -> bool:
    """CSV-Quelle ist vollständig, sobald eine Datei gewählt wurde."""
    return bool(file_name)


def s3_source_complete(bucket_url: str, access_key_id: str, secret_access_key: str) -> bool:
    """S3-Quelle braucht s3://-URL, Access Key ID und Secret (Region optional)."""
    return bool(
        bucket_url.strip().startswith(S3_URL_PREFIX)
        and access_key_id.strip()
        and secret_access_key.strip()
    )
