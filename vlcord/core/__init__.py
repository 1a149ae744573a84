"""
Couche domaine (core).

Contient les ports (interfaces abstraites) et les objets valeur.
Cette couche n'a AUCUNE dependance vers l'infrastructure (HTTP, disque).

Sous-packages :
- ports/ : Interfaces abstraites pour le lecteur et le catalogue de metadonnees
- value_objects/ : Objets valeur immutables (identite media, fiche catalogue, statut)
"""
