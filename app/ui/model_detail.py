"""Detailseite eines Modells: Status, Datenquelle und Schemas."""

from __future__ import annotations

from typing import Any

from nicegui import ui

from app.logging_config import get_logger
from app.schemas import schema_to_string
from app.ui.dashboard import format_timestamp
from app.ui.layout import page_layout, status_style

logger = get_logger("ui")


def _render_schema_card(title: str, schema: dict[str, Any]) -> None:
    with ui.card().classes("w-full"):
        with ui.row().classes("w-full items-center"):
            ui.label(title).classes("text-sm text-gray-500 font-medium")
            text = schema_to_string(schema)
            ui.button(
                "Kopieren",
                icon="content_copy",
                on_click=lambda t=text: (ui.clipboard.write(t), ui.notify("Kopiert")),
            ).props("flat dense size=sm").classes("ml-auto")
        if text:
            ui.code(text, language="json").classes("w-full")
        else:
            ui.label("Kein Schema hinterlegt.").classes("text-gray-400 italic")


def register(app: Any = None) -> None:
    """Registriert die Detailseite."""

    @ui.page("/models/{model_id}")
    async def model_detail_page(model_id: str) -> None:
        from app.state import get_database

        with page_layout("Modell"):
            db = get_database()
            if db is None:
                ui.label("Datenbank nicht verfügbar.").classes("text-red-600")
                return

            record = await db.get_model(model_id)
            if record is None:
                ui.label(f"Modell {model_id} nicht gefunden.").classes("text-gray-500 italic")
                return

            style = status_style(record.status.value)
            ui.label(record.name).classes("text-2xl font-bold")
            with ui.row().classes("items-center gap-2"):
                ui.icon(style["icon"]).classes(f"{style['color']} text-xl")
                ui.label(style["label"]).classes(f"{style['color']} font-semibold")
                ui.label(f"Angelegt: {format_timestamp(record.created_at)}").classes(
                    "text-sm text-gray-500 ml-4"
                )
            if record.error_message:
                ui.label(f"Fehler: {record.error_message}").classes("text-red-600 text-sm")

            with ui.card().classes("w-full"):
                ui.label("Problembeschreibung").classes("text-sm text-gray-500 font-medium")
                ui.label(record.problem_description).classes("text-gray-800")

            with ui.card().classes("w-full"):
                ui.label("Datenquelle").classes("text-sm text-gray-500 font-medium mb-2")
                for key, value in record.data_source.public_dict().items():
                    with ui.row().classes("items-center gap-4 py-1"):
                        ui.label(key).classes("text-sm text-gray-600 w-44")
                        ui.label(str(value)).classes(
                            "text-sm font-mono text-gray-800 bg-gray-50 px-2 py-1 rounded"
                        )

            _render_schema_card("Input-Schema", record.input_schema)
            _render_schema_card("Output-Schema", record.output_schema)
