"""Web-UI Paket – NiceGUI-Seiten des Modell-Assistenten.

Stellt eine zentrale `register_pages()`-Funktion bereit, die alle
UI-Seiten beim NiceGUI-Server registriert.  Wird von `main.py`
beim Start aufgerufen.
"""

from __future__ import annotations


def register_pages() -> None:
    """Registriert alle UI-Seiten beim NiceGUI-Server.

    Muss aufgerufen werden BEVOR `ui.run()` startet, damit die
    Routen beim Server-Start bekannt sind.
    """
    from app.ui import dashboard, model_detail, wizard

    dashboard.register()
    # /models/new vor /models/{model_id}, sonst greift die Detailseite
    wizard.register()
    model_detail.register()
