"""
VLCord - Suivi de lecture VLC enrichi par les metadonnees TMDB.

Ce package interroge l'interface HTTP de VLC, deduit l'identite du media
en cours de lecture (film, episode de serie, anime) a partir du nom de
fichier, puis resout cette identite aupres de TMDB pour produire un statut
"en cours de lecture" structure.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (ports, objets valeur)
- services/ : Couche application (parsing, resolution, boucle de suivi)
- adapters/ : Couche infrastructure (clients HTTP, cache, persistance)
"""

__version__ = "0.1.0"
