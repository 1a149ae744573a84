"""
Clients API externes pour la resolution des metadonnees.

Ce module fournit l'adaptateur pour communiquer avec TMDB (The Movie
Database) et l'infrastructure partagee:
- MetadataCache: Cache persistant LRU + TTL des fiches
- RateLimitError / request_with_retry: Backoff exponentiel sur 429 et erreurs de transport
- CircuitBreaker / CircuitOpenError: Disjoncteur par service

Le client implemente ICatalogClient defini dans core/ports/catalog.py.
"""

from vlcord.adapters.api.cache import MetadataCache
from vlcord.adapters.api.circuit_breaker import CircuitBreaker, CircuitOpenError
from vlcord.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from vlcord.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "MetadataCache",
    "CircuitBreaker",
    "CircuitOpenError",
    "RateLimitError",
    "request_with_retry",
    "with_retry",
    "TMDBClient",
]
