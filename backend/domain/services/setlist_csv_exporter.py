import csv
import io
import re
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from domain.constants import (
    CSV_COLUMNS,
    CSV_DATE_FORMAT,
    INVALID_FILENAME_CHARS_REGEX,
    MAX_FILENAME_NAME_LENGTH,
)
from domain.models.setlist import Setlist, SetlistSong
from domain.models.song import Song

SetlistEntry = Tuple[SetlistSong, Song]

def escape_csv_value(value: Optional[str]) -> str:
    """
    Quote a metadata value the way csv.writer quotes row fields.
    """
    if not value:
        return ""

    if any(c in value for c in (',', '"', '\n', '\r')):
        return '"' + value.replace('"', '""') + '"'

    return value

def effective_key(entry: SetlistSong, song: Song) -> Optional[str]:
    return entry.custom_key if entry.custom_key else song.musical_key

def effective_bpm(entry: SetlistSong, song: Song) -> Optional[int]:
    return entry.custom_bpm if entry.custom_bpm is not None else song.bpm

def _format_flag(value: bool) -> str:
    return "Yes" if value else "No"

class SetlistCsvExporter:
    """
    Serializes a setlist and its ordered songs into the CSV export format.
    Pure: the caller resolves the setlist (and its ownership) beforehand.
    """

    def build_metadata_lines(self, setlist: Setlist, total_songs: int) -> List[str]:
        lines = [f"# Name: {escape_csv_value(setlist.name)}"]
        if setlist.description:
            lines.append(f"# Description: {escape_csv_value(setlist.description)}")
        if setlist.venue:
            lines.append(f"# Venue: {escape_csv_value(setlist.venue)}")
        if setlist.performance_date is not None:
            lines.append(f"# Performance Date: {setlist.performance_date.strftime(CSV_DATE_FORMAT)}")
        if setlist.expected_duration_minutes is not None:
            lines.append(f"# Expected Duration: {setlist.expected_duration_minutes} minutes")
        lines.append(f"# Total Songs: {total_songs}")
        return lines

    def build_row(self, entry: SetlistSong, song: Song) -> List[Any]:
        # None is written as an empty field
        return [
            entry.position,
            song.title,
            song.artist,
            effective_key(entry, song),
            effective_bpm(entry, song),
            song.duration_seconds,
            song.genre,
            song.difficulty_rating,
            entry.performance_notes,
            entry.transition_notes,
            _format_flag(entry.is_encore),
            _format_flag(entry.is_optional),
        ]

    def generate_csv_content(self, setlist: Setlist, entries: Sequence[SetlistEntry]) -> str:
        output = io.StringIO()

        for line in self.build_metadata_lines(setlist, len(entries)):
            output.write(line + "\n")
        output.write("\n")

        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)

        # sort by position, gaps are allowed
        for entry, song in sorted(entries, key=lambda e: e[0].position):
            writer.writerow(self.build_row(entry, song))

        return output.getvalue()

    def export(self, setlist: Setlist, entries: Sequence[SetlistEntry]) -> bytes:
        return self.generate_csv_content(setlist, entries).encode("utf-8")

def sanitize_filename(name: Optional[str]) -> str:
    """Replace characters that are illegal in filenames, join words with underscores and cap the length."""
    sanitized = re.sub(INVALID_FILENAME_CHARS_REGEX, "_", name or "").strip()
    sanitized = re.sub(r"\s+", "_", sanitized)
    return sanitized[:MAX_FILENAME_NAME_LENGTH]

def generate_csv_filename(setlist: Optional[Setlist], today: Optional[datetime] = None) -> str:
    if setlist is None:
        raise ValueError("setlist is required")

    date = setlist.performance_date or today or datetime.now()
    return f"setlist_{sanitize_filename(setlist.name)}_{date.strftime(CSV_DATE_FORMAT)}.csv"
