# recognition/models.py

from pydantic import BaseModel
from typing import Any, Dict, Optional


class NormalizedTrack(BaseModel):
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    cover: Optional[str] = None
    raw: Dict[str, Any]
