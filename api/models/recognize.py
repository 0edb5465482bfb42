# api/models/recognize.py

from pydantic import BaseModel
from typing import Any, Optional

from recognition.models import NormalizedTrack


class RecognizeEnvelope(BaseModel):
    success: bool
    result: Optional[NormalizedTrack] = None
    message: Optional[str] = None
    raw: Optional[Any] = None


class RelayStatus(BaseModel):
    message: str
    provider_url: str
    token_configured: bool
