"""
CLI display modules.
"""

from cli.display.tables import (
    display_header,
    display_song_info,
    display_voices,
    display_voice_detail,
    display_events,
)

__all__ = [
    "display_header",
    "display_song_info",
    "display_voices",
    "display_voice_detail",
    "display_events",
]
