"""Persistance des correspondances manuelles (fichier JSON versionne)."""

from vlcord.adapters.persistence.overrides_store import OverrideStore

__all__ = ["OverrideStore"]
