"""
Adaptateurs du lecteur multimedia.

- VLCClient : Interrogation de l'interface HTTP de VLC (status.json)
- parse_vlc_status : Conversion du JSON VLC en RawPlaybackSample
"""

from vlcord.adapters.player.vlc_client import VLCClient
from vlcord.adapters.player.vlc_parser import parse_vlc_status

__all__ = ["VLCClient", "parse_vlc_status"]
