"""
Couche infrastructure (adaptateurs).

- api/ : Client TMDB, cache, retry et disjoncteur
- player/ : Client HTTP de VLC et parsing de son statut
- persistence/ : Stockage JSON des correspondances manuelles
- cli/ : Commandes typer (watch, parse, resolve, overrides, cache-stats)
"""
