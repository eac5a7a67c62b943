"""Asynchroner Client für den externen Trainingsdienst.

Der Dienst nimmt einen Trainingsauftrag für eine Modell-ID entgegen
und meldet das Ergebnis später über den Status-Webhook zurück
(siehe app.training.webhook).

Features:
- httpx AsyncClient mit Connection-Pooling
- Retry-Logik für transiente Fehler (5xx, Timeouts)
- Spezifische Exceptions für verschiedene Fehlerfälle
"""

from __future__ import annotations

from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.logging_config import get_logger
from app.training.exceptions import (
    TrainingAuthError,
    TrainingConnectionError,
    TrainingError,
    TrainingRejectedError,
    TrainingServerError,
)

logger = get_logger("training")

TRAIN_PATH = "/train"


class TrainingClient:
    """Asynchroner Client für den Trainingsdienst.

    Verwendung:
        async with TrainingClient(url, token) as client:
            await client.start_training(model_id)
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialisiert den Client.

        Args:
            base_url: URL des Dienstes ohne Trailing-Slash.
            token: Optionales Bearer-Token.
            timeout: Timeout je Request in Sekunden.
            transport: Optionaler httpx-Transport (Tests).
        """
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> TrainingClient:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def http(self) -> httpx.AsyncClient:
        """Gibt den httpx Client zurück, wirft wenn nicht initialisiert."""
        if self._http is None:
            raise TrainingError(
                "TrainingClient nicht initialisiert – bitte als async context manager verwenden"
            )
        return self._http

    # =========================================================================
    # HTTP-Basismethoden mit Fehlerbehandlung
    # =========================================================================

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Wirft spezifische Exceptions basierend auf HTTP-Status."""
        if response.is_success:
            return

        status = response.status_code
        try:
            detail = response.json()
        except ValueError:
            detail = response.text[:500]

        if status in (401, 403):
            raise TrainingAuthError(
                f"Authentifizierung fehlgeschlagen (HTTP {status}): {detail}",
                status_code=status,
            )
        if status >= 500:
            raise TrainingServerError(
                f"Serverfehler (HTTP {status}): {detail}",
                status_code=status,
            )
        raise TrainingRejectedError(
            f"Trainingsauftrag abgelehnt (HTTP {status}): {detail}",
            status_code=status,
        )

    @retry(
        retry=retry_if_exception_type((TrainingServerError, TrainingConnectionError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """HTTP-Request mit Retry bei transienten Fehlern."""
        try:
            response = await self.http.request(method, path, json=json_data)
        except httpx.TimeoutException as e:
            raise TrainingConnectionError(f"Timeout bei {method} {path}: {e}") from e
        except httpx.RequestError as e:
            raise TrainingConnectionError(
                f"Verbindungsfehler bei {method} {path}: {e}"
            ) from e

        self._raise_for_status(response)
        return response

    # =========================================================================
    # Öffentliche API
    # =========================================================================

    async def start_training(self, model_id: str) -> dict[str, Any]:
        """Beauftragt das Training eines Modells.

        Args:
            model_id: ID des gespeicherten Modell-Datensatzes.

        Returns:
            Antwort des Dienstes (leeres Dict bei leerem Body).

        Raises:
            TrainingError: Bei allen Fehlern (nach Retries).
        """
        logger.info("Trainingsauftrag für Modell %s", model_id)
        response = await self._request("POST", TRAIN_PATH, json_data={"model_id": model_id})
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
