"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

- ICatalogClient : Catalogue de metadonnees (TMDB)
- IPlayerClient : Lecteur multimedia (VLC)
"""

from vlcord.core.ports.catalog import ICatalogClient, SearchResult
from vlcord.core.ports.player import IPlayerClient

__all__ = ["ICatalogClient", "SearchResult", "IPlayerClient"]
