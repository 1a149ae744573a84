"""
Mock VLC status.json responses for testing.

Shapes returned by GET /requests/status.json of the VLC Lua HTTP interface.
"""


def vlc_status(
    state: str = "playing",
    filename: str = "Inception.2010.1080p.BluRay.x264-SPARKS.mkv",
    title: str = None,
    filepath: str = None,
    position: float = 0.25,
    length: int = 8880,
    time: int = 2220,
) -> dict:
    """Construit un document status.json."""
    meta = {"filename": filename}
    if title is not None:
        meta["title"] = title
    if filepath is not None:
        meta["filepath"] = filepath
    return {
        "fullscreen": False,
        "state": state,
        "position": position,
        "length": length,
        "time": time,
        "volume": 256,
        "version": "3.0.20 Vetinari",
        "information": {
            "chapter": 0,
            "category": {
                "meta": meta,
                "Stream 0": {"Type": "Video", "Codec": "H264 - MPEG-4 AVC (part 10) (avc1)"},
            },
        },
    }


# Lecture d'un film
VLC_PLAYING_MOVIE = vlc_status()

# Lecture d'un episode avec chemin complet (URL file://)
VLC_PLAYING_EPISODE = {
    "state": "playing",
    "position": 0.5,
    "length": 2820,
    "time": 1410,
    "information": {
        "category": {
            "meta": {
                "filename": "Breaking.Bad.S05E14.Ozymandias.1080p.BluRay.x264-DEMAND.mkv",
                "url": "file:///media/series/Breaking%20Bad/Season%205/"
                "Breaking.Bad.S05E14.Ozymandias.1080p.BluRay.x264-DEMAND.mkv",
            }
        }
    },
}

# En pause
VLC_PAUSED_MOVIE = vlc_status(state="paused")

# Arrete (pas de media)
VLC_STOPPED = {
    "state": "stopped",
    "position": 0,
    "length": 0,
    "time": 0,
    "information": {"category": {"meta": {}}},
}
