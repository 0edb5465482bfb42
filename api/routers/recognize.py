# api/routers/recognize.py

import logging
from typing import Any, Dict, Optional, Sequence

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from api.dependencies import get_provider, get_settings
from api.models.recognize import RecognizeEnvelope
from recognition.config import RelaySettings
from recognition.normalize import normalize_match
from recognition.provider import AuddClient, call_with_deadline
from recognition.results import MatchList, NoBody, SingleMatch, decode_provider_body
from recognition.staging import discard_upload, stage_upload

router = APIRouter()

log = logging.getLogger(__name__)

# Únicos valores que activan la metadata extendida (match exacto)
EXTENDED_FLAG_VALUES = ("true", "1")


def wants_extended(flag: Optional[str]) -> bool:
    return flag in EXTENDED_FLAG_VALUES


def _envelope(status_code: int, **fields: Any) -> JSONResponse:
    envelope = RecognizeEnvelope(**fields)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", exclude_unset=True),
    )


def invalid_form_response(errors: Sequence[Dict[str, Any]]) -> JSONResponse:
    """
    Traduce un error de validación del formulario a un 400 con sobre.
    Si el problema es el campo `file` (p.ej. vino como texto), cuenta como
    "no file".
    """
    if any(tuple(err.get("loc", ()))[-1:] == ("file",) for err in errors):
        return _envelope(400, success=False, message="no file")
    return _envelope(400, success=False, message="invalid form")


# ============================================================
# RECONOCIMIENTO DE UN ARCHIVO SUBIDO
# ============================================================

@router.post("/recognize")
async def recognize(
    file: Optional[UploadFile] = File(None),
    want_cover: Optional[str] = Form(None),
    settings: RelaySettings = Depends(get_settings),
    provider: AuddClient = Depends(get_provider),
):
    """
    Recibe un audio SUBIDO, lo reenvía al proveedor y devuelve:
      - 200 {success: true, result}            si hubo match
      - 200 {success: false, message, raw?}    si no hubo match
      - 400 {success: false, message}          si no vino archivo
      - 500 {success: false, message}          ante cualquier error

    El temporal se borra siempre, después de que la llamada al proveedor
    termine (bien, mal o por vencer el plazo total).
    """
    if file is None or not file.filename:
        return _envelope(400, success=False, message="no file")

    want_extended = wants_extended(want_cover)

    try:
        staged = await run_in_threadpool(stage_upload, file.file, file.filename, settings.upload_dir)

        try:
            query = provider.build_query(staged, want_extended)
            body = await call_with_deadline(provider, query)
        finally:
            await run_in_threadpool(discard_upload, staged.path)

        decoded = decode_provider_body(body)

        if isinstance(decoded, NoBody):
            return _envelope(200, success=False, message="no response from provider")

        if isinstance(decoded, (SingleMatch, MatchList)):
            return _envelope(200, success=True, result=normalize_match(decoded.match))

        log.info("Sin coincidencias para %r", file.filename)
        return _envelope(200, success=False, message="not found", raw=decoded.raw)

    except Exception as e:
        log.exception("Error procesando /recognize")
        return _envelope(500, success=False, message=str(e) or e.__class__.__name__)
