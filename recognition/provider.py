# recognition/provider.py

"""
Cliente del proveedor de reconocimiento (AudD).

Construye el multipart (api_token, file y opcionalmente return) y hace
UNA llamada por request, sin reintentos. Timeouts, errores de red y
respuestas no-2xx se propagan como requests.RequestException.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict

import requests

from recognition.config import EXTENDED_RETURN_FIELDS, RelaySettings
from recognition.staging import StagedUpload

log = logging.getLogger(__name__)

# Hilos propios para las llamadas al proveedor: si vence el plazo el hilo
# se abandona sin bloquear el cierre del loop.
PROVIDER_WORKERS = 32
_provider_pool = ThreadPoolExecutor(max_workers=PROVIDER_WORKERS, thread_name_prefix="provider")


class ProviderError(RuntimeError):
    """El proveedor respondió algo que no es JSON."""


class ProviderTimeout(ProviderError):
    """La llamada completa al proveedor superó el plazo total."""

    def __init__(self, seconds: float):
        super().__init__(f"provider did not answer within {seconds:g}s")
        self.seconds = seconds


@dataclass(frozen=True)
class RecognitionQuery:
    api_token: str
    upload: StagedUpload
    want_extended: bool = False

    def form_fields(self) -> Dict[str, str]:
        data = {"api_token": self.api_token}
        if self.want_extended:
            data["return"] = ",".join(EXTENDED_RETURN_FIELDS)
        return data


class AuddClient:
    def __init__(self, settings: RelaySettings):
        self.url = settings.audd_api_url
        self.api_token = settings.audd_api_token
        self.timeout = settings.audd_timeout_seconds

    def build_query(self, upload: StagedUpload, want_extended: bool) -> RecognitionQuery:
        return RecognitionQuery(
            api_token=self.api_token,
            upload=upload,
            want_extended=want_extended,
        )

    def recognize(self, query: RecognitionQuery) -> Any:
        """
        Envía el audio al proveedor y devuelve el JSON decodificado
        (o None si la respuesta vino sin cuerpo).

        El archivo se manda como stream desde disco; requests no impone
        límite de tamaño ni al body enviado ni al recibido.

        Ojo: el timeout de requests es por conexión/lectura, no total.
        El plazo total lo impone quien llama (ver call_with_deadline).
        """
        log.info(
            "Consultando proveedor: %s (%d bytes, extended=%s)",
            query.upload.filename, query.upload.size, query.want_extended,
        )

        with open(query.upload.path, "rb") as audio:
            resp = requests.post(
                self.url,
                data=query.form_fields(),
                files={"file": (query.upload.filename, audio)},
                timeout=self.timeout,
            )
        resp.raise_for_status()

        if not resp.content or not resp.content.strip():
            return None

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderError(f"Respuesta inválida del proveedor: {e}") from e


async def call_with_deadline(client: AuddClient, query: RecognitionQuery) -> Any:
    """
    Ejecuta recognize() en el pool del proveedor con un plazo TOTAL de
    client.timeout segundos (conexión + envío + respuesta completa).
    Si se vence, el hilo queda abandonado y se lanza ProviderTimeout.
    """
    try:
        loop = asyncio.get_running_loop()
        return await asyncio.wait_for(
            loop.run_in_executor(_provider_pool, client.recognize, query),
            timeout=client.timeout,
        )
    except asyncio.TimeoutError as e:
        log.warning("El proveedor no respondió en %ss", client.timeout)
        raise ProviderTimeout(client.timeout) from e
