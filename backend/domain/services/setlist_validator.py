from typing import List, Optional

from domain.constants import (
    MAX_BPM,
    MAX_DESCRIPTION_LENGTH,
    MAX_ENTRY_PERFORMANCE_NOTES_LENGTH,
    MAX_MUSICAL_KEY_LENGTH,
    MAX_PERFORMANCE_NOTES_LENGTH,
    MAX_POSITION,
    MAX_SETLIST_NAME_LENGTH,
    MAX_TRANSITION_NOTES_LENGTH,
    MAX_VENUE_LENGTH,
    MIN_BPM,
    MIN_EXPECTED_DURATION_MINUTES,
    MIN_POSITION,
)
from domain.models.setlist import Setlist, SetlistSong
from domain.services.song_validator import validate_optional_string, validate_required_string

def validate_setlist(setlist: Optional[Setlist]) -> List[str]:
    if setlist is None:
        return ["Setlist cannot be null"]

    errors: List[str] = []

    validate_required_string(setlist.name, "Setlist name", MAX_SETLIST_NAME_LENGTH, errors)
    validate_optional_string(setlist.description, "Description", MAX_DESCRIPTION_LENGTH, errors)
    validate_optional_string(setlist.venue, "Venue", MAX_VENUE_LENGTH, errors)

    if (setlist.expected_duration_minutes is not None
            and setlist.expected_duration_minutes < MIN_EXPECTED_DURATION_MINUTES):
        errors.append("Expected duration must be at least 1 minute")

    validate_optional_string(setlist.performance_notes, "Performance notes", MAX_PERFORMANCE_NOTES_LENGTH, errors)

    if not setlist.user_id or not setlist.user_id.strip():
        errors.append("User ID is required")

    return errors

def validate_setlist_song(entry: SetlistSong) -> List[str]:
    """Rules for the per-performance overrides of a setlist entry."""
    errors: List[str] = []

    if entry.position is not None and not (MIN_POSITION <= entry.position <= MAX_POSITION):
        errors.append(f"Position must be between {MIN_POSITION} and {MAX_POSITION}")
    if entry.custom_bpm is not None and not (MIN_BPM <= entry.custom_bpm <= MAX_BPM):
        errors.append(f"Custom BPM must be between {MIN_BPM} and {MAX_BPM}")

    validate_optional_string(entry.custom_key, "Custom key", MAX_MUSICAL_KEY_LENGTH, errors)
    validate_optional_string(entry.performance_notes, "Performance notes", MAX_ENTRY_PERFORMANCE_NOTES_LENGTH, errors)
    validate_optional_string(entry.transition_notes, "Transition notes", MAX_TRANSITION_NOTES_LENGTH, errors)

    return errors
