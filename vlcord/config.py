"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe VLCORD_,
et peut optionnellement etre fournie via un fichier .env.

La cle API TMDB est optionnelle - la resolution catalogue est desactivee si non fournie
(seuls les overrides restent disponibles).
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fichier .env a la racine du projet (parent de vlcord/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe VLCORD_.
    Exemple : VLCORD_VLC_PASSWORD=secret

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="VLCORD_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Lecteur VLC (interface HTTP Lua)
    vlc_host: str = Field(default="localhost")
    vlc_port: int = Field(default=8080, ge=1, le=65535)
    vlc_password: str = Field(default="")
    vlc_timeout: float = Field(default=3.0, gt=0)
    poll_interval: float = Field(default=2.0, gt=0)

    # TMDB (OPTIONNEL - resolution desactivee si non defini)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="en-US")
    tmdb_timeout: float = Field(default=10.0, gt=0)

    # Cache des fiches
    cache_dir: Path = Field(default=Path("~/.cache/vlcord"))
    cache_ttl_seconds: int = Field(default=86400, ge=0)
    cache_size_limit_mb: int = Field(default=64, ge=1)

    # Overrides
    overrides_file: Path = Field(default=Path("~/.config/vlcord/metadata-overrides.json"))
    fetch_override_details: bool = Field(default=False)

    # Resolution
    popularity_threshold: float = Field(default=2.0, ge=0)

    # Retry et disjoncteurs
    retry_attempts: int = Field(default=3, ge=1)
    vlc_retry_attempts: int = Field(default=2, ge=1)
    tmdb_breaker_threshold: int = Field(default=10, ge=1)
    tmdb_breaker_timeout: float = Field(default=120.0, gt=0)
    vlc_breaker_threshold: int = Field(default=5, ge=1)
    vlc_breaker_timeout: float = Field(default=60.0, gt=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/vlcord.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "overrides_file", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("tmdb_api_key", mode="before")
    @classmethod
    def empty_key_is_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def tmdb_enabled(self) -> bool:
        """Verifie si l'API TMDB est configuree."""
        return self.tmdb_api_key is not None
