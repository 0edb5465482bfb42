# recognition/staging.py

"""
Staging de archivos subidos.

Cada request guarda su audio en un temporal con nombre aleatorio
(NamedTemporaryFile), así que requests concurrentes pueden compartir el
mismo directorio sin colisiones ni locks.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import BinaryIO, Optional

log = logging.getLogger(__name__)

TEMP_PREFIX = "upload-"


@dataclass(frozen=True)
class StagedUpload:
    filename: str
    path: Path
    size: int


def stage_upload(source: BinaryIO, filename: Optional[str], upload_dir: Optional[Path] = None) -> StagedUpload:
    """
    Copia el archivo subido (por bloques, sin cargarlo entero en memoria)
    a un temporal único y devuelve su descripción.

    Se conserva la extensión original como sufijo (algunos proveedores la
    usan para detectar el códec). Si la escritura falla, el temporal parcial
    se borra y la excepción se propaga.
    """
    suffix = ""
    if filename:
        _, ext = os.path.splitext(filename)
        suffix = ext if ext else ""

    if upload_dir is not None:
        upload_dir.mkdir(parents=True, exist_ok=True)

    with NamedTemporaryFile(delete=False, prefix=TEMP_PREFIX, suffix=suffix, dir=upload_dir) as tmp:
        temp_path = Path(tmp.name)
        try:
            shutil.copyfileobj(source, tmp)
            size = tmp.tell()
        except Exception:
            tmp.close()
            discard_upload(temp_path)
            raise

    staged = StagedUpload(
        filename=filename or temp_path.name,
        path=temp_path,
        size=size,
    )
    log.debug("Upload %r guardado en %s (%d bytes)", staged.filename, staged.path, staged.size)
    return staged


def discard_upload(path: Path) -> bool:
    """
    Borra el temporal (best-effort). Nunca lanza: devuelve False si no
    se pudo borrar.
    """
    try:
        if os.path.exists(path):
            os.remove(path)
        return True
    except OSError as e:
        log.warning("No se pudo borrar temporal %s: %s", path, e)
        return False
