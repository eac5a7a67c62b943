"""Logging des Modell-Assistenten.

Alle Module loggen unter `model_wizard.<komponente>` (z.B.
`model_wizard.training.webhook`).  Ausgabe geht immer nach stdout,
optional zusätzlich in eine rotierende Datei im Datenverzeichnis.

Eine Zeile sieht so aus:

    2024-05-01 12:00:00 | INFO     | model_wizard.db | Modell gespeichert: ...
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


ROOT_LOGGER_NAME = "model_wizard"

COMPONENTS = ("app", "schemas", "registry", "db", "training", "ui")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_NAME = "wizard.log"
MAX_BYTES = 5 * 1024 * 1024   # 5 MB je Datei
BACKUP_COUNT = 3

# Bibliotheken, die nur Warnungen durchlassen
QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "httpx", "httpcore", "nicegui")


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    return handler


def _file_handler(log_dir: Path, formatter: logging.Formatter) -> logging.Handler:
    """Rotierender Datei-Handler; wirft OSError wenn log_dir nicht beschreibbar."""
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Richtet die Handler des Anwendungs-Loggers ein.

    Mehrfacher Aufruf ersetzt die bisherigen Handler.

    Args:
        log_level: DEBUG, INFO, WARNING oder ERROR (unbekannt → INFO).
        log_dir: Verzeichnis für wizard.log; None = nur stdout.

    Returns:
        Der Wurzel-Logger `model_wizard`.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(_console_handler(formatter))

    if log_dir is not None:
        try:
            root.addHandler(_file_handler(log_dir, formatter))
        except OSError as e:
            root.warning("Logdatei in %s nicht möglich (%s), nur stdout", log_dir, e)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def get_logger(component: str) -> logging.Logger:
    """Logger `model_wizard.<component>`.

    `component` darf Unterebenen haben ("training.webhook"), die erste
    Ebene muss aber in COMPONENTS stehen.

    Raises:
        ValueError: Bei unbekannter Komponente.
    """
    if component.split(".", 1)[0] not in COMPONENTS:
        raise ValueError(f"Unbekannte Log-Komponente: {component}")
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")
