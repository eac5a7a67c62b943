"""Dashboard – Startseite des Modell-Assistenten.

Zeigt auf einen Blick:
- Zähler je Trainingsstatus
- Die zuletzt angelegten Modelle als Tabelle (Link zur Detailseite)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from nicegui import ui

from app.logging_config import get_logger
from app.registry.models import ModelRecord
from app.ui.layout import page_layout, status_style

logger = get_logger("ui")

_REFRESH_INTERVAL_S = 15.0


# ---------------------------------------------------------------------------
# Hilfsfunktionen
# ---------------------------------------------------------------------------

def format_timestamp(ts: datetime | None) -> str:
    """Formatiert einen Timestamp für die Anzeige (lokal, deutsch)."""
    if ts is None:
        return "–"
    return ts.astimezone().strftime("%d.%m.%Y %H:%M:%S")


def model_table_rows(models: list[ModelRecord]) -> list[dict[str, Any]]:
    """Tabellenzeilen für die Modellliste."""
    return [
        {
            "id": model.id,
            "name": model.name,
            "status": status_style(model.status.value)["label"],
            "source": model.data_source.type.upper(),
            "created_at": format_timestamp(model.created_at),
        }
        for model in models
    ]


# ---------------------------------------------------------------------------
# Daten laden
# ---------------------------------------------------------------------------

async def _load_dashboard_data() -> dict[str, Any]:
    """Lädt Zähler und Modellliste.

    Fehlerresistent: Bei DB-Problemen werden Fallback-Werte genutzt.
    """
    from app.state import get_database

    data: dict[str, Any] = {
        "counts": {"training": 0, "completed": 0, "failed": 0},
        "models": [],
        "db_available": False,
    }

    db = get_database()
    if db is None:
        return data

    try:
        data["counts"] = await db.get_status_counts()
        data["models"] = await db.list_models(limit=50)
        data["db_available"] = True
    except Exception as exc:
        logger.warning("Dashboard-Daten konnten nicht geladen werden: %s", exc)

    return data


# ---------------------------------------------------------------------------
# UI-Komponenten
# ---------------------------------------------------------------------------

def _render_counter_cards(counts: dict[str, int]) -> None:
    """Eine Karte je Trainingsstatus."""
    with ui.row().classes("w-full gap-4 flex-wrap items-stretch"):
        for status in ("training", "completed", "failed"):
            style = status_style(status)
            with ui.card().classes("flex-1 min-w-48 h-full"):
                with ui.row().classes("items-center gap-2"):
                    ui.icon(style["icon"]).classes(f"{style['color']} text-xl")
                    ui.label(style["label"]).classes("text-sm text-gray-500")
                ui.label(str(counts.get(status, 0))).classes(
                    "text-3xl font-bold text-gray-800"
                )


def _render_model_table(models: list[ModelRecord]) -> None:
    """Tabelle der zuletzt angelegten Modelle."""
    with ui.card().classes("w-full"):
        ui.label("Modelle").classes("text-sm text-gray-500 font-medium mb-2")

        if not models:
            ui.label("Noch keine Modelle angelegt.").classes("text-gray-400 italic")
            ui.button(
                "Erstes Modell anlegen",
                icon="add",
                on_click=lambda: ui.navigate.to("/models/new"),
            ).props("flat color=primary")
            return

        columns = [
            {"name": "name", "label": "Name", "field": "name",
             "align": "left", "sortable": True},
            {"name": "status", "label": "Status", "field": "status",
             "align": "left", "sortable": True},
            {"name": "source", "label": "Datenquelle", "field": "source",
             "align": "left"},
            {"name": "created_at", "label": "Angelegt", "field": "created_at",
             "align": "left", "sortable": True},
        ]

        table = ui.table(
            columns=columns,
            rows=model_table_rows(models),
            row_key="id",
            pagination={"rowsPerPage": 10},
        ).classes("w-full")
        table.props("dense flat bordered")

        # Name als Link zur Detailseite
        table.add_slot(
            "body-cell-name",
            '''
            <q-td :props="props">
                <a :href="'/models/' + props.row.id"
                   class="text-purple-700 hover:underline font-medium">
                    {{ props.row.name }}
                </a>
            </q-td>
            ''',
        )


# ---------------------------------------------------------------------------
# Seiten-Definition
# ---------------------------------------------------------------------------

def register(app: Any = None) -> None:
    """Registriert die Dashboard-Seite."""

    @ui.page("/")
    async def dashboard_page() -> None:
        with page_layout("Dashboard", active="/"):
            content = ui.column().classes("w-full gap-4")

            async def render_content() -> None:
                content.clear()
                data = await _load_dashboard_data()
                with content:
                    if not data["db_available"]:
                        ui.label("Datenbank nicht verfügbar.").classes(
                            "text-red-600 font-medium"
                        )
                    _render_counter_cards(data["counts"])
                    _render_model_table(data["models"])

            await render_content()
            ui.timer(_REFRESH_INTERVAL_S, render_content)
