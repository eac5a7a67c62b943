"""Tests für die Logging-Einrichtung."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from app.logging_config import LOG_FILE_NAME, get_logger, setup_logging


class TestLogging:
    def test_component_logger_name(self) -> None:
        assert get_logger("training.webhook").name == "model_wizard.training.webhook"

    def test_unknown_component(self) -> None:
        with pytest.raises(ValueError):
            get_logger("billing")

    def test_file_handler_written(self, tmp_path: Path) -> None:
        root = setup_logging("DEBUG", tmp_path / "logs")
        try:
            assert root.level == logging.DEBUG
            assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)

            get_logger("db").info("hallo")
            for handler in root.handlers:
                handler.flush()
            assert "hallo" in (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8")
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers.clear()

    def test_repeated_setup_replaces_handlers(self) -> None:
        setup_logging("INFO")
        root = setup_logging("bogus")
        try:
            assert len(root.handlers) == 1
            assert root.level == logging.INFO
        finally:
            root.handlers.clear()
