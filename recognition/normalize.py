# recognition/normalize.py

"""
Normalización de un match del proveedor a NormalizedTrack.

Cada campo de salida se resuelve con una cadena ORDENADA de funciones
puras de extracción: gana el primer valor no vacío. Los campos son
independientes entre sí; que falte uno nunca impide poblar otro.

Precedencia de portada:
    1) spotify.album.images[0].url
    2) album.cover
    3) release.cover
    4) apple_music.album.artwork.urlTemplate  ({w}/{h} -> 1000)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

from recognition.models import NormalizedTrack

Extractor = Callable[[Dict[str, Any]], Optional[str]]

ARTWORK_SIZE = "1000"


def _dig(obj: Any, *path: Any) -> Any:
    """Recorre dicts/listas; devuelve None en cuanto algo no encaja."""
    current = obj
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[key] if isinstance(key, int) else current.get(key)
        if current is None:
            return None
    return current


def _text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, (dict, list)):
        return None
    return str(value)


def first_present(extractors: Sequence[Extractor], match: Dict[str, Any]) -> Optional[str]:
    for extract in extractors:
        value = extract(match)
        if value:
            return value
    return None


# ============================================================
# EXTRACTORES
# ============================================================

def title(match: Dict[str, Any]) -> Optional[str]:
    return _text(match.get("title"))


def artist(match: Dict[str, Any]) -> Optional[str]:
    return _text(match.get("artist"))


def album_title(match: Dict[str, Any]) -> Optional[str]:
    return _text(_dig(match, "album", "title"))


def release_title(match: Dict[str, Any]) -> Optional[str]:
    return _text(_dig(match, "release", "title"))


def spotify_image(match: Dict[str, Any]) -> Optional[str]:
    return _text(_dig(match, "spotify", "album", "images", 0, "url"))


def album_cover(match: Dict[str, Any]) -> Optional[str]:
    return _text(_dig(match, "album", "cover"))


def release_cover(match: Dict[str, Any]) -> Optional[str]:
    return _text(_dig(match, "release", "cover"))


def apple_music_artwork(match: Dict[str, Any]) -> Optional[str]:
    template = _text(_dig(match, "apple_music", "album", "artwork", "urlTemplate"))
    if not template:
        return None
    return template.replace("{w}", ARTWORK_SIZE).replace("{h}", ARTWORK_SIZE)


TITLE_CHAIN: Sequence[Extractor] = (title,)
ARTIST_CHAIN: Sequence[Extractor] = (artist,)
ALBUM_CHAIN: Sequence[Extractor] = (album_title, release_title)
COVER_CHAIN: Sequence[Extractor] = (
    spotify_image,
    album_cover,
    release_cover,
    apple_music_artwork,
)


def normalize_match(match: Dict[str, Any]) -> NormalizedTrack:
    """Función pura: mismo match -> mismo NormalizedTrack."""
    return NormalizedTrack(
        title=first_present(TITLE_CHAIN, match),
        artist=first_present(ARTIST_CHAIN, match),
        album=first_present(ALBUM_CHAIN, match),
        cover=first_present(COVER_CHAIN, match),
        raw=match,
    )
