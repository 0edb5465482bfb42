# recognition/config.py

"""
Configuración del relay de reconocimiento.

Todo se lee UNA vez al arrancar el proceso (RelaySettings.from_env) y el
objeto resultante es inmutable: se pasa a los handlers vía dependencias
de FastAPI, nunca se consulta os.environ desde un request.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Directorio raíz del proyecto
BASE_DIR = Path(__file__).resolve().parent.parent

# ============================================================
# PROVEEDOR (AudD)
# ============================================================

AUDD_API_URL = "https://api.audd.io/"
AUDD_TIMEOUT_SECONDS = 45.0

# Campos extra que se piden a AudD cuando el cliente quiere portada/links
EXTENDED_RETURN_FIELDS = (
    "timecode",
    "apple_music",
    "spotify",
    "deezer",
    "lyrics",
    "album",
    "release",
    "genre",
)

# ============================================================
# SERVIDOR
# ============================================================

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
STATIC_DIR = BASE_DIR / "public"


class RelaySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    audd_api_token: str = ""
    audd_api_url: str = AUDD_API_URL
    audd_timeout_seconds: float = Field(default=AUDD_TIMEOUT_SECONDS, gt=0)

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    upload_dir: Optional[Path] = None
    static_dir: Path = STATIC_DIR
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @field_validator("upload_dir", mode="before")
    @classmethod
    def _expand_upload_dir(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser().resolve()

    @field_validator("static_dir", mode="before")
    @classmethod
    def _expand_static_dir(cls, value: str | Path) -> Path:
        return Path(value).expanduser().resolve()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, str):
            origins = [o.strip() for o in value.split(",") if o.strip()]
            return origins or ["*"]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value).strip().upper() or "INFO"

    @property
    def token_configured(self) -> bool:
        return bool(self.audd_api_token)

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "RelaySettings":
        """
        Construye la configuración a partir de os.environ.

        Si existe un .env en la raíz del proyecto se carga antes, sin
        sobreescribir variables ya definidas en el entorno.
        """
        load_dotenv(dotenv_path=dotenv_path or BASE_DIR / ".env")

        return cls(
            audd_api_token=os.getenv("AUDD_API_TOKEN", ""),
            audd_api_url=os.getenv("AUDD_API_URL", AUDD_API_URL),
            audd_timeout_seconds=float(os.getenv("AUDD_TIMEOUT_SECONDS", AUDD_TIMEOUT_SECONDS)),
            host=os.getenv("HOST", DEFAULT_HOST),
            port=int(os.getenv("PORT", DEFAULT_PORT)),
            upload_dir=os.getenv("UPLOAD_DIR"),
            static_dir=os.getenv("STATIC_DIR", str(STATIC_DIR)),
            cors_origins=os.getenv("CORS_ORIGINS", "*"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
