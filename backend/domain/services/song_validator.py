from typing import Iterable, List, Optional

from domain.constants import (
    MAX_ALBUM_LENGTH,
    MAX_ARTIST_LENGTH,
    MAX_BPM,
    MAX_DIFFICULTY,
    MAX_DURATION_SECONDS,
    MAX_GENRE_LENGTH,
    MAX_MUSICAL_KEY_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_TAGS_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_BPM,
    MIN_DIFFICULTY,
    MIN_DURATION_SECONDS,
    TAG_SEPARATOR,
)
from domain.models.song import Song

def validate_required_string(value: Optional[str], label: str, max_length: int, errors: List[str]):
    if not value or not value.strip():
        errors.append(f"{label} is required")
    elif len(value) > max_length:
        errors.append(f"{label} cannot exceed {max_length} characters")

def validate_optional_string(value: Optional[str], label: str, max_length: int, errors: List[str]):
    if value and len(value) > max_length:
        errors.append(f"{label} cannot exceed {max_length} characters")

def validate_optional_range(value: Optional[int], low: int, high: int, message: str, errors: List[str]):
    if value is not None and (value < low or value > high):
        errors.append(message)

def validate_song(song: Optional[Song]) -> List[str]:
    """
    Check a song against the catalog field rules.

    Every rule runs, so one call can report several problems. A missing song is
    reported as an error rather than raised.
    """
    if song is None:
        return ["Song cannot be null"]

    errors: List[str] = []

    validate_required_string(song.title, "Song title", MAX_TITLE_LENGTH, errors)
    validate_required_string(song.artist, "Artist name", MAX_ARTIST_LENGTH, errors)

    validate_optional_string(song.album, "Album name", MAX_ALBUM_LENGTH, errors)
    validate_optional_string(song.genre, "Genre", MAX_GENRE_LENGTH, errors)
    validate_optional_string(song.musical_key, "Musical key", MAX_MUSICAL_KEY_LENGTH, errors)
    validate_optional_string(song.notes, "Notes", MAX_NOTES_LENGTH, errors)
    validate_optional_string(song.tags, "Tags", MAX_TAGS_LENGTH, errors)

    validate_optional_range(song.bpm, MIN_BPM, MAX_BPM,
                            f"BPM must be between {MIN_BPM} and {MAX_BPM}", errors)
    validate_optional_range(song.duration_seconds, MIN_DURATION_SECONDS, MAX_DURATION_SECONDS,
                            "Duration must be between 1 second and 1 hour", errors)
    validate_optional_range(song.difficulty_rating, MIN_DIFFICULTY, MAX_DIFFICULTY,
                            f"Difficulty rating must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}", errors)

    if not song.user_id or not song.user_id.strip():
        errors.append("User ID is required")

    return errors

def parse_tags(raw_tags: Iterable[Optional[str]]) -> List[str]:
    """Split comma separated tag strings into one distinct, trimmed, sorted list."""
    tags = set()
    for raw in raw_tags:
        if not raw:
            continue
        for piece in raw.split(TAG_SEPARATOR):
            tag = piece.strip()
            if tag:
                tags.add(tag)
    return sorted(tags)
