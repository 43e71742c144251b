from typing import Any, Dict, Sequence, Tuple

from domain.models.setlist import SetlistSong
from domain.models.song import Song

def format_seconds(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"

def calculate_setlist_duration(entries: Sequence[Tuple[SetlistSong, Song]]) -> Dict[str, Any]:
    """
    Sum the catalog durations of a setlist's songs.
    Songs without a duration are counted separately and add nothing to the totals.
    """
    total_seconds = 0
    optional_seconds = 0
    songs_without_duration = 0

    for entry, song in entries:
        if song.duration_seconds is None:
            songs_without_duration += 1
            continue
        total_seconds += song.duration_seconds
        if entry.is_optional:
            optional_seconds += song.duration_seconds

    return {
        "total_songs": len(entries),
        "total_seconds": total_seconds,
        "required_seconds": total_seconds - optional_seconds,
        "optional_seconds": optional_seconds,
        "songs_without_duration": songs_without_duration,
        "formatted_total": format_seconds(total_seconds),
    }
