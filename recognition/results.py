# recognition/results.py

"""
Decodificación de la respuesta del proveedor.

El JSON de AudD se interpreta UNA sola vez aquí y se convierte en una
de cuatro variantes:

    NoBody       -> no vino cuerpo (o vino null)
    NoMatch      -> status != "success", o "success" sin resultado
    SingleMatch  -> result es un objeto
    MatchList    -> result es una lista; manda el primer elemento

La normalización solo trabaja con el match ya resuelto.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union

SUCCESS_STATUS = "success"


@dataclass(frozen=True)
class NoBody:
    pass


@dataclass(frozen=True)
class NoMatch:
    raw: Any


@dataclass(frozen=True)
class SingleMatch:
    match: Dict[str, Any]
    raw: Any


@dataclass(frozen=True)
class MatchList:
    match: Dict[str, Any]
    raw: Any


ProviderResult = Union[NoBody, NoMatch, SingleMatch, MatchList]


def _is_empty_body(body: Any) -> bool:
    """null, "", 0 o false. Objetos y listas vacías NO cuentan como vacíos."""
    if body is None:
        return True
    return isinstance(body, (str, int, float, bool)) and not body


def decode_provider_body(body: Any) -> ProviderResult:
    if _is_empty_body(body):
        return NoBody()

    if not isinstance(body, dict) or body.get("status") != SUCCESS_STATUS:
        return NoMatch(raw=body)

    result = body.get("result")

    # Un objeto vacío sigue siendo un match (todos los campos quedarán en null)
    if isinstance(result, dict):
        return SingleMatch(match=result, raw=body)

    if isinstance(result, list) and result and isinstance(result[0], dict):
        return MatchList(match=result[0], raw=body)

    # null, lista vacía o algo que no es un objeto: no hay match usable
    return NoMatch(raw=body)
