"""Assistent "Neues Modell" – drei Schritte bis zum Training.

1. Problem: Freitext-Beschreibung, Modellname (automatisch vorgeschlagen)
2. Datenquelle: CSV-Upload oder S3-Bucket
3. Schema: Vorgeschlagene Input-/Output-Schemas prüfen und anpassen

Danach wird das Modell gespeichert, das Training angestoßen und auf
das Ergebnis gewartet.  Die Ablauflogik steckt in WizardState,
diese Seite rendert nur.
"""

from __future__ import annotations

import asyncio
import uuid
from pathlib import Path
from typing import Any, Callable

from nicegui import events, ui
from pydantic import ValidationError

from app.config import get_settings
from app.logging_config import get_logger
from app.registry.models import DataSourceType, ModelStatus
from app.schemas import match_pattern
from app.training.watcher import wait_for_terminal_status
from app.ui.layout import page_layout
from app.ui.wizard_state import WizardState, WizardStep

logger = get_logger("ui")

PRIMARY_BUTTON = "color=deep-purple unelevated"

# Wartezeit bis zur Weiterleitung auf die Detailseite
SUCCESS_REDIRECT_SECONDS = 2.0


# ---------------------------------------------------------------------------
# Fortschrittsanzeige
# ---------------------------------------------------------------------------

def _render_progress(step: WizardStep) -> None:
    current = step.number
    with ui.row().classes("w-full justify-center items-center gap-2 mb-4"):
        for number in (1, 2, 3):
            active = number <= current
            ui.label(str(number)).classes(
                "w-10 h-10 rounded-full flex items-center justify-center font-semibold "
                + ("bg-deep-purple-7 text-white" if active else "bg-gray-200 text-gray-500")
            )
            if number < 3:
                ui.element("div").classes(
                    "h-1 w-16 " + ("bg-deep-purple-7" if number < current else "bg-gray-200")
                )


# ---------------------------------------------------------------------------
# Schritt 1: Problem
# ---------------------------------------------------------------------------

def _render_problem_step(state: WizardState, rerender: Callable[[], None]) -> None:
    with ui.card().classes("w-full"):
        ui.label("Schritt 1: Problem beschreiben").classes("text-xl font-semibold")
        ui.label("Was soll Ihr Modell vorhersagen?").classes("text-gray-500")

        name_input: Any = None
        continue_button: Any = None

        def on_description(e: events.ValueChangeEventArguments) -> None:
            state.set_problem_description(e.value or "")
            if name_input is not None and not state.name_manually_edited:
                name_input.set_value(state.model_name)
            if continue_button is not None:
                continue_button.set_enabled(state.problem_complete)

        def on_name(e: events.ValueChangeEventArguments) -> None:
            # set_value() aus on_description löst ebenfalls ein Event aus
            if (e.value or "") != state.model_name:
                state.set_model_name(e.value or "")

        ui.textarea(
            "Problembeschreibung *",
            value=state.problem_description,
            placeholder="Z.B.: I want to identify which company emails are fraudulent",
            on_change=on_description,
        ).props("outlined rows=5").classes("w-full")

        name_input = ui.input(
            "Modellname",
            value=state.model_name,
            placeholder="Wird aus der Beschreibung erzeugt",
            on_change=on_name,
        ).props("outlined").classes("w-full")
        ui.label("Kann angepasst oder automatisch übernommen werden").classes(
            "text-xs text-gray-500"
        )

        def on_continue() -> None:
            if state.continue_to_data_source():
                rerender()

        continue_button = ui.button(
            "Weiter zur Datenquelle →", on_click=on_continue
        ).props(PRIMARY_BUTTON).classes("w-full")
        continue_button.set_enabled(state.problem_complete)


# ---------------------------------------------------------------------------
# Schritt 2: Datenquelle
# ---------------------------------------------------------------------------

async def _store_upload(e: events.UploadEventArguments) -> tuple[str, int]:
    """Speichert eine hochgeladene CSV-Datei im Upload-Verzeichnis."""
    settings = get_settings()
    file_name = Path(e.name).name
    content = e.content.read()
    target_dir = settings.upload_dir
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / f"{uuid.uuid4().hex}_{file_name}"
    await asyncio.to_thread(target.write_bytes, content)
    logger.info("CSV hochgeladen: %s (%d Bytes)", file_name, len(content))
    return file_name, len(content)


def _render_data_source_step(state: WizardState, rerender: Callable[[], None]) -> None:
    settings = get_settings()

    with ui.card().classes("w-full"):
        ui.label("Schritt 2: Datenquelle").classes("text-xl font-semibold")
        ui.label("Trainingsdaten verbinden").classes("text-gray-500")

        continue_button: Any = None

        def refresh_continue() -> None:
            if continue_button is not None:
                continue_button.set_enabled(state.data_source_complete)

        def on_type(e: events.ValueChangeEventArguments) -> None:
            state.data_source_type = DataSourceType(e.value)
            rerender()

        ui.radio(
            {DataSourceType.CSV.value: "CSV hochladen", DataSourceType.S3.value: "S3 verbinden"},
            value=state.data_source_type.value,
            on_change=on_type,
        ).props("inline")

        if state.data_source_type == DataSourceType.CSV:
            async def on_upload(e: events.UploadEventArguments) -> None:
                try:
                    name, size = await _store_upload(e)
                except OSError as exc:
                    logger.error("Upload fehlgeschlagen: %s", exc)
                    ui.notify(f"Upload fehlgeschlagen: {exc}", type="negative")
                    return
                state.set_csv_file(name, size)
                ui.notify(f"{name} hochgeladen", type="positive")
                refresh_continue()

            ui.upload(
                label="CSV-Datei *",
                on_upload=on_upload,
                auto_upload=True,
                max_file_size=settings.max_upload_bytes,
                on_rejected=lambda: ui.notify("Datei zu groß", type="warning"),
            ).props('accept=".csv"').classes("w-full")
            if state.csv_file_name:
                ui.label(f"Ausgewählt: {state.csv_file_name}").classes("text-sm text-gray-600")
        else:
            def bind(field: str) -> Callable[[events.ValueChangeEventArguments], None]:
                def handler(e: events.ValueChangeEventArguments) -> None:
                    setattr(state, field, e.value or "")
                    refresh_continue()
                return handler

            if not state.s3_region:
                state.s3_region = settings.default_s3_region
            ui.input("S3 Bucket URL *", value=state.s3_bucket_url,
                     placeholder="s3://my-bucket/path/to/data",
                     on_change=bind("s3_bucket_url")).props("outlined").classes("w-full")
            ui.input("AWS Region", value=state.s3_region,
                     on_change=bind("s3_region")).props("outlined").classes("w-full")
            ui.input("Access Key ID *", value=state.s3_access_key_id,
                     placeholder="AKIA...",
                     on_change=bind("s3_access_key_id")).props("outlined").classes("w-full")
            ui.input("Secret Access Key *", value=state.s3_secret_access_key,
                     password=True,
                     on_change=bind("s3_secret_access_key")).props("outlined").classes("w-full")

        def on_back() -> None:
            state.back()
            rerender()

        def on_continue() -> None:
            if state.continue_to_schema():
                result = match_pattern(state.problem_description)
                if result is not None:
                    logger.info(
                        "Schema-Vorschlag '%s' (Score %d)", result.pattern.name, result.score
                    )
                rerender()

        with ui.row().classes("w-full gap-4 pt-2"):
            ui.button("← Zurück", on_click=on_back).props("outline").classes("flex-1")
            continue_button = ui.button(
                "Weiter zum Schema →", on_click=on_continue
            ).props(PRIMARY_BUTTON).classes("flex-1")
        refresh_continue()


# ---------------------------------------------------------------------------
# Schritt 3: Schema
# ---------------------------------------------------------------------------

def _render_schema_editor(
    title: str,
    text: str,
    error: str | None,
    on_change: Callable[[str], str | None],
    after_change: Callable[[], None],
) -> None:
    """Ein JSON-Editor mit Validierungsanzeige darunter."""
    with ui.column().classes("w-full gap-1"):
        with ui.row().classes("w-full items-center"):
            ui.label(title).classes("text-base font-semibold")
            editor: Any = None
            ui.button(
                "Kopieren",
                icon="content_copy",
                on_click=lambda: (ui.clipboard.write(editor.value or ""), ui.notify("Kopiert")),
            ).props("flat dense size=sm").classes("ml-auto")

        def show(err: str | None) -> None:
            if err:
                status.set_text(f"✗ {err}")
                status.classes(replace="text-xs text-red-600")
            else:
                status.set_text("✓ Gültiges JSON")
                status.classes(replace="text-xs text-green-600")

        def handle(e: events.ValueChangeEventArguments) -> None:
            show(on_change(e.value or ""))
            after_change()

        editor = ui.textarea(value=text, on_change=handle).props(
            "outlined rows=12 spellcheck=false"
        ).classes("w-full font-mono text-sm")
        status = ui.label()
        show(error)


def _render_schema_step(
    state: WizardState,
    rerender: Callable[[], None],
    submit: Callable[[events.ClickEventArguments], Any],
) -> None:
    with ui.card().classes("w-full"):
        ui.label("Schritt 3: API-Schema festlegen").classes("text-xl font-semibold")
        ui.label(
            "Die Schemas wurden aus Ihrer Problembeschreibung vorgeschlagen "
            "und können hier angepasst werden."
        ).classes("text-gray-500")

        create_button: Any = None

        def refresh_create() -> None:
            if create_button is not None:
                create_button.set_enabled(state.can_submit)

        def set_input(value: str) -> str | None:
            state.set_input_schema(value)
            return state.input_schema_error

        def set_output(value: str) -> str | None:
            state.set_output_schema(value)
            return state.output_schema_error

        _render_schema_editor(
            "Input-Schema", state.input_schema_text, state.input_schema_error,
            set_input, refresh_create,
        )
        _render_schema_editor(
            "Output-Schema", state.output_schema_text, state.output_schema_error,
            set_output, refresh_create,
        )

        def on_back() -> None:
            state.back()
            rerender()

        with ui.row().classes("w-full gap-4 pt-2"):
            ui.button("← Zurück", on_click=on_back).props("outline").classes("flex-1")
            create_button = ui.button(
                "Modell anlegen →", on_click=submit
            ).props(PRIMARY_BUTTON).classes("flex-1")
        refresh_create()


# ---------------------------------------------------------------------------
# Training / Ergebnis
# ---------------------------------------------------------------------------

def _render_training() -> None:
    with ui.column().classes("w-full items-center gap-4 py-16"):
        ui.spinner(size="xl", color="deep-purple")
        ui.label("Modell wird trainiert").classes("text-3xl font-bold text-purple-700")
        ui.label(
            "Daten werden analysiert, Features erzeugt und das passende "
            "Modell trainiert."
        ).classes("text-gray-500 text-center max-w-md")


def _render_success(state: WizardState) -> None:
    with ui.column().classes("w-full items-center gap-4 py-16"):
        ui.icon("check_circle").classes("text-green-600 text-6xl")
        ui.label("Modell bereit!").classes("text-3xl font-bold text-green-700")
        with ui.row().classes("gap-4"):
            ui.button("Zum Dashboard", on_click=lambda: ui.navigate.to("/")).props(
                PRIMARY_BUTTON
            )
            ui.button(
                "Modell-Details →",
                on_click=lambda: ui.navigate.to(f"/models/{state.model_id}"),
            ).props("outline")
    ui.timer(
        SUCCESS_REDIRECT_SECONDS,
        lambda: ui.navigate.to(f"/models/{state.model_id}"),
        once=True,
    )


def _render_failed(state: WizardState) -> None:
    with ui.column().classes("w-full items-center gap-4 py-16"):
        ui.icon("error").classes("text-red-600 text-6xl")
        ui.label("Training fehlgeschlagen").classes("text-3xl font-bold text-red-700")
        if state.error_message:
            ui.label(state.error_message).classes("text-gray-600 text-center max-w-md")
        if state.model_id:
            ui.button(
                "Modell-Details →",
                on_click=lambda: ui.navigate.to(f"/models/{state.model_id}"),
            ).props("outline")


# ---------------------------------------------------------------------------
# Seiten-Definition
# ---------------------------------------------------------------------------

def register(app: Any = None) -> None:
    """Registriert die Assistenten-Seite."""

    @ui.page("/models/new")
    async def wizard_page() -> None:
        state = WizardState(s3_region=get_settings().default_s3_region)

        with page_layout("Neues Modell", active="/models/new"):
            ui.label("Neues Modell anlegen").classes("text-3xl font-bold")
            ui.label("Folgen Sie den Schritten, um Ihr eigenes ML-Modell zu erstellen").classes(
                "text-gray-500"
            )
            content = ui.column().classes("w-full max-w-2xl gap-4")

            def rerender() -> None:
                content.clear()
                with content:
                    if state.step == WizardStep.TRAINING:
                        _render_training()
                    elif state.step == WizardStep.SUCCESS:
                        _render_success(state)
                    elif state.step == WizardStep.FAILED:
                        _render_failed(state)
                    else:
                        _render_progress(state.step)
                        if state.step == WizardStep.PROBLEM:
                            _render_problem_step(state, rerender)
                        elif state.step == WizardStep.DATA_SOURCE:
                            _render_data_source_step(state, rerender)
                        else:
                            _render_schema_step(state, rerender, submit)

            async def submit(e: events.ClickEventArguments) -> None:
                from app.state import get_database, get_training_service

                service = get_training_service()
                db = get_database()
                if service is None or db is None:
                    ui.notify("Datenbank nicht verfügbar", type="negative")
                    return
                if not state.begin_submit():
                    return
                e.sender.disable()

                try:
                    record = await service.submit(state.build_draft())
                except ValidationError as exc:
                    state.abort_submit()
                    e.sender.enable()
                    ui.notify(f"Ungültige Eingaben: {exc.errors()[0]['msg']}", type="negative")
                    return
                except Exception as exc:
                    logger.error("Modell konnte nicht angelegt werden: %s", exc)
                    state.abort_submit()
                    e.sender.enable()
                    ui.notify(f"Fehler: {exc}", type="negative")
                    return

                state.mark_submitted(record.id)
                rerender()

                settings = get_settings()
                try:
                    final = await wait_for_terminal_status(
                        db,
                        record.id,
                        poll_interval=settings.status_poll_interval_seconds,
                        timeout=settings.training_wait_timeout_seconds,
                    )
                except asyncio.TimeoutError:
                    state.mark_finished(False, "Zeitüberschreitung beim Warten auf das Training")
                except Exception as exc:
                    logger.error("Status von Modell %s nicht abrufbar: %s", record.id, exc)
                    state.mark_finished(False, str(exc))
                else:
                    state.mark_finished(
                        final.status == ModelStatus.COMPLETED, final.error_message
                    )
                rerender()

            rerender()
