"""Seitenrahmen des Assistenten: Kopfzeile, Navigation, Inhaltsbereich.

    @ui.page("/beispiel")
    def beispiel():
        with page_layout("Beispiel", active="/"):
            ui.label("Inhalt")
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from nicegui import ui

from app.logging_config import get_logger

logger = get_logger("ui")

APP_TITLE = "Model Wizard"

# (Icon, Label, Route)
NAV_ITEMS: list[tuple[str, str, str]] = [
    ("dashboard", "Dashboard", "/"),
    ("add_circle", "Neues Modell", "/models/new"),
]

MODEL_STATUS_STYLES: dict[str, dict[str, str]] = {
    "training": {"color": "text-blue-600", "icon": "sync", "label": "Training"},
    "completed": {"color": "text-green-600", "icon": "check_circle", "label": "Fertig"},
    "failed": {"color": "text-red-600", "icon": "error", "label": "Fehlgeschlagen"},
}


def status_style(status: str) -> dict[str, str]:
    """Farbe, Icon und Label für einen Modellstatus (unbekannt → grau)."""
    style = MODEL_STATUS_STYLES.get(status)
    if style is None:
        return {"color": "text-gray-400", "icon": "help_outline", "label": status or "N/A"}
    return style


def training_service_chip() -> tuple[str, str, str]:
    """(Icon, Farbe, Text) für den Verbindungs-Chip in der Kopfzeile."""
    from app.state import get_training_client

    if get_training_client() is None:
        return "cloud_off", "text-yellow-300", "Kein Trainingsdienst"
    return "cloud_done", "text-green-300", "Trainingsdienst verbunden"


@contextmanager
def page_layout(title: str, active: str | None = None) -> Generator[None, None, None]:
    """Rahmen für eine Seite; der Seiteninhalt entsteht im `with`-Block.

    Args:
        title: Titel im Browser-Tab.
        active: Route des hervorgehobenen Navigationseintrags.
    """
    ui.page_title(f"{title} – {APP_TITLE}")

    with ui.header().classes("bg-purple-800 text-white items-center px-4 h-12"):
        ui.label(f"🧠 {APP_TITLE}").classes("text-lg font-semibold")
        icon, color, text = training_service_chip()
        with ui.row().classes(
            "ml-auto items-center gap-1 px-3 py-1 rounded-full "
            "bg-white/10 border border-white/20"
        ):
            ui.icon(icon).classes(f"{color} text-sm")
            ui.label(text).classes("text-xs text-white/90")

    with ui.row().classes("w-full min-h-screen no-wrap"):
        with ui.column().classes(
            "bg-gray-50 w-56 min-h-screen pt-4 px-2 border-r border-gray-200 flex-shrink-0"
        ):
            training_badge = None
            for nav_icon, label, route in NAV_ITEMS:
                badge = _nav_link(nav_icon, label, route, highlighted=route == active)
                if route == "/":
                    training_badge = badge
            _fill_training_badge(training_badge)

        with ui.column().classes("flex-grow p-6 max-w-6xl"):
            yield


def _nav_link(icon: str, label: str, route: str, highlighted: bool) -> ui.badge:
    """Navigationseintrag mit (zunächst unsichtbarem) Zähler-Badge."""
    row_classes = "items-center gap-3 px-3 py-2 rounded-lg w-full cursor-pointer"
    row_classes += " bg-purple-100" if highlighted else " hover:bg-purple-50"

    with ui.link(target=route).classes("no-underline w-full"):
        with ui.row().classes(row_classes):
            ui.icon(icon).classes("text-gray-600 text-lg")
            ui.label(label).classes("text-gray-700 text-sm")
            badge = ui.badge("", color="blue").props("rounded").classes("ml-auto text-xs")
            badge.set_visibility(False)
    return badge


def _fill_training_badge(badge: ui.badge | None) -> None:
    """Zeigt die Anzahl laufender Trainings am Dashboard-Eintrag."""
    if badge is None:
        return

    async def _update() -> None:
        from app.state import get_database

        db = get_database()
        if db is None:
            return
        try:
            running = (await db.get_status_counts()).get("training", 0)
        except Exception as e:
            logger.debug("Trainingszähler nicht verfügbar: %s", e)
            return
        badge.set_text(str(running))
        badge.set_visibility(running > 0)

    ui.timer(0.1, _update, once=True)
