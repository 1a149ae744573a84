"""
Conversion du document status.json de VLC en RawPlaybackSample.

Champs lus: state, position (0..1), length et time (secondes), et les
metadonnees information.category.meta.{title, filename, filepath | url}.
Une URL file:// est convertie en chemin local.
"""

import math
from typing import Any, Optional
from urllib.parse import unquote, urlparse

from vlcord.core.value_objects.playback_status import PlayerState, RawPlaybackSample


def _number(value: Any, default: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def url_to_path(location: Optional[str]) -> Optional[str]:
    """Convertit une URL file:// en chemin; les autres valeurs sont retournees telles quelles."""
    if not location:
        return None
    if location.startswith("file://"):
        return unquote(urlparse(location).path) or None
    return unquote(location)


def _meta(data: dict[str, Any]) -> dict[str, Any]:
    node: Any = data
    for key in ("information", "category", "meta"):
        node = node.get(key) if isinstance(node, dict) else None
    return node if isinstance(node, dict) else {}


def parse_vlc_status(data: dict[str, Any]) -> RawPlaybackSample:
    """
    Convertit le statut brut de VLC.

    Args:
        data: Document JSON retourne par /requests/status.json

    Returns:
        RawPlaybackSample (etat inconnu -> STOPPED, valeurs numeriques
        invalides -> 0)

    Raises:
        ValueError: Si le document n'est pas un objet JSON
    """
    if not isinstance(data, dict):
        raise ValueError(f"Statut VLC inattendu: {type(data).__name__}")
    meta = _meta(data)
    file_path = url_to_path(_text(meta.get("filepath")) or _text(meta.get("url")))
    filename = _text(meta.get("filename"))
    if filename is None and file_path:
        filename = file_path.replace("\\", "/").rsplit("/", 1)[-1] or None

    return RawPlaybackSample(
        state=PlayerState.from_raw(data.get("state")),
        position=min(max(_number(data.get("position")), 0.0), 1.0),
        length=max(int(_number(data.get("length"))), 0),
        time=max(int(_number(data.get("time"))), 0),
        title=_text(meta.get("title")),
        filename=filename,
        file_path=file_path,
    )
