"""
Configuration du logging de VLCord via loguru.

Deux sorties:
- console coloree, avec le contexte lie au message (cle de recherche, cause
  de panne, ...) affiche en fin de ligne
- fichier JSON avec rotation, qui recoit aussi les repetitions en DEBUG

Les secrets qui transitent dans les URLs (cle TMDB v3 en `api_key`, mot de
passe VLC) sont masques avant tout handler.
"""

import re
import sys
from pathlib import Path

from loguru import logger

_SECRET = re.compile(r"((?:api_key|password|access_token)=)[^&\s'\"]+", re.IGNORECASE)
_BEARER = re.compile(r"(Bearer\s+)[\w.\-]+", re.IGNORECASE)
MASK = "***"

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)


def redact(text: str) -> str:
    """Masque les secrets d'une chaine (parametres d'URL, jeton Bearer)."""
    text = _SECRET.sub(rf"\g<1>{MASK}", text)
    return _BEARER.sub(rf"\g<1>{MASK}", text)


def redact_record(record) -> None:
    """Patcher loguru: masque les secrets du message et du contexte lie."""
    record["message"] = redact(record["message"])
    for key, value in record["extra"].items():
        if isinstance(value, str):
            record["extra"][key] = redact(value)


def console_format(record) -> str:
    # Contexte passe en kwargs: logger.error("...", key=..., kind=...)
    context = "".join(f" <dim>{key}={{extra[{key}]}}</dim>" for key in record["extra"])
    return _CONSOLE_FORMAT + context + "\n{exception}"


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/vlcord.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args:
        log_level: Niveau minimum de la console (DEBUG, INFO, WARNING, ERROR)
        log_file: Chemin du fichier de log JSON
        rotation_size: Taille avant rotation (ex: "10 MB")
        retention_count: Nombre de fichiers rotatifs conserves
    """
    logger.remove()
    logger.configure(patcher=redact_record)

    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=console_format,
        colorize=True,
    )

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), level=log_level.upper())
