"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI: configuration,
cache, overrides, disjoncteurs, clients VLC et TMDB, resolveur et moniteur.
"""

from typing import Optional

from dependency_injector import containers, providers

from .adapters.api.cache import MetadataCache
from .adapters.api.circuit_breaker import CircuitBreaker
from .adapters.api.tmdb_client import TMDBClient
from .adapters.persistence.overrides_store import OverrideStore
from .adapters.player.vlc_client import VLCClient
from .config import Settings
from .services.catalog_resolver import CatalogResolver
from .services.monitor import PlaybackMonitor
from .services.overrides import OverrideTable
from .services.parsing.anime_titles import AnimeTitleResolver
from .services.parsing.candidates import CandidateClassifier


def build_catalog_client(settings: Settings, breaker: CircuitBreaker) -> Optional[TMDBClient]:
    """Cree le client TMDB, ou None si aucune cle API n'est configuree."""
    if not settings.tmdb_enabled:
        return None
    return TMDBClient(
        api_key=settings.tmdb_api_key,
        language=settings.tmdb_language,
        timeout=settings.tmdb_timeout,
        max_attempts=settings.retry_attempts,
        breaker=breaker,
    )


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        monitor = container.monitor()
        resolver = container.catalog_resolver()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache des fiches - partage entre le moniteur et la CLI
    metadata_cache = providers.Singleton(
        MetadataCache,
        cache_dir=config.provided.cache_dir,
        ttl=config.provided.cache_ttl_seconds,
        size_limit_mb=config.provided.cache_size_limit_mb,
    )

    # Overrides (fichier JSON charge a la creation)
    override_store = providers.Singleton(
        OverrideStore,
        path=config.provided.overrides_file,
    )
    override_table = providers.Singleton(OverrideTable, store=override_store)

    # Parsing (stateless - Singletons)
    anime_resolver = providers.Singleton(AnimeTitleResolver)
    candidate_classifier = providers.Singleton(CandidateClassifier, anime=anime_resolver)

    # Disjoncteurs - un par service distant
    tmdb_breaker = providers.Singleton(
        CircuitBreaker,
        "tmdb",
        failure_threshold=config.provided.tmdb_breaker_threshold,
        reset_timeout=config.provided.tmdb_breaker_timeout,
    )
    vlc_breaker = providers.Singleton(
        CircuitBreaker,
        "vlc",
        failure_threshold=config.provided.vlc_breaker_threshold,
        reset_timeout=config.provided.vlc_breaker_timeout,
    )

    # Clients
    vlc_client = providers.Singleton(
        VLCClient,
        host=config.provided.vlc_host,
        port=config.provided.vlc_port,
        password=config.provided.vlc_password,
        timeout=config.provided.vlc_timeout,
        max_attempts=config.provided.vlc_retry_attempts,
        breaker=vlc_breaker,
    )
    # None si la cle API est absente: le resolveur ne consulte alors que les overrides
    tmdb_client = providers.Singleton(
        build_catalog_client,
        settings=config,
        breaker=tmdb_breaker,
    )

    catalog_resolver = providers.Singleton(
        CatalogResolver,
        client=tmdb_client,
        overrides=override_table,
        anime=anime_resolver,
        popularity_threshold=config.provided.popularity_threshold,
        fetch_override_details=config.provided.fetch_override_details,
    )

    # Moniteur - Factory, une instance par session de surveillance
    monitor = providers.Factory(
        PlaybackMonitor,
        player=vlc_client,
        resolver=catalog_resolver,
        cache=metadata_cache,
        poll_interval=config.provided.poll_interval,
        classifier=candidate_classifier,
    )
