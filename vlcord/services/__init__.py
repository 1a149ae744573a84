"""
Couche application (cas d'utilisation).

- parsing/ : Normalisation des noms de fichiers et extraction saison/episode
- overrides : Table de correspondances manuelles titre -> ID TMDB
- catalog_resolver : Resolution d'une identite media aupres du catalogue
- monitor : Boucle de suivi du lecteur et emission du statut

Les clients distants sont injectes via les ports definis dans core/.
"""
