import pytest
from datetime import datetime
from domain.models.setlist import Setlist, SetlistSong
from domain.models.song import Song
from domain.services.setlist_csv_exporter import (
    SetlistCsvExporter,
    escape_csv_value,
    generate_csv_filename,
    sanitize_filename,
)

HEADER = "Position,Title,Artist,Key,BPM,Duration (sec),Genre,Difficulty,Notes,Transition Notes,Encore,Optional"

def make_song(**kwargs) -> Song:
    data = {"title": "Song", "artist": "Artist", "user_id": "user-1"}
    data.update(kwargs)
    return Song(**data)

def make_entry(position: int, **kwargs) -> SetlistSong:
    return SetlistSong(setlist_id=1, song_id=position, position=position, **kwargs)

def export_text(setlist, entries) -> str:
    return SetlistCsvExporter().export(setlist, entries).decode("utf-8")

@pytest.fixture
def rock_concert() -> Setlist:
    return Setlist(
        id=1,
        user_id="user-1",
        name="Rock Concert",
        description="Greatest hits",
        venue="Madison Square Garden",
        performance_date=datetime(2024, 12, 31, 20, 0),
        expected_duration_minutes=120,
    )

def test_metadata_block(rock_concert):
    content = export_text(rock_concert, [])
    lines = content.split("\n")
    assert lines[:6] == [
        "# Name: Rock Concert",
        "# Description: Greatest hits",
        "# Venue: Madison Square Garden",
        "# Performance Date: 2024-12-31",
        "# Expected Duration: 120 minutes",
        "# Total Songs: 0",
    ]

def test_metadata_skips_missing_fields():
    setlist = Setlist(name="Bare", user_id="user-1")
    content = export_text(setlist, [])
    assert content.startswith("# Name: Bare\n# Total Songs: 0\n\n")
    assert "# Venue" not in content
    assert "# Performance Date" not in content

def test_empty_setlist_has_header_and_no_rows(rock_concert):
    content = export_text(rock_concert, [])
    lines = content.split("\n")
    assert "# Total Songs: 0" in lines
    assert lines[6] == ""
    assert lines[7] == HEADER
    # trailing newline only
    assert lines[8:] == [""]

def test_rows_sorted_by_position(rock_concert):
    entries = [
        (make_entry(3), make_song(title="Third")),
        (make_entry(1), make_song(title="First")),
        (make_entry(7), make_song(title="Gap")),
    ]
    lines = export_text(rock_concert, entries).strip().split("\n")
    rows = lines[lines.index(HEADER) + 1:]
    assert [r.split(",")[1] for r in rows] == ["First", "Third", "Gap"]
    assert [r.split(",")[0] for r in rows] == ["1", "3", "7"]
    assert "# Total Songs: 3" in lines

def test_full_row(rock_concert):
    song = make_song(
        title="Highway",
        artist="Band",
        musical_key="A",
        bpm=120,
        duration_seconds=245,
        genre="Rock",
        difficulty_rating=3,
    )
    entry = make_entry(1, performance_notes="Extended solo", transition_notes="Segue")
    rows = export_text(rock_concert, [(entry, song)]).strip().split("\n")
    assert rows[-1] == "1,Highway,Band,A,120,245,Rock,3,Extended solo,Segue,No,No"

def test_custom_key_and_bpm_override(rock_concert):
    song = make_song(musical_key="A", bpm=120)
    entry = make_entry(1, custom_key="D", custom_bpm=140)
    content = export_text(rock_concert, [(entry, song)])
    assert ",D,140," in content

def test_missing_optional_values_render_empty(rock_concert):
    entry = make_entry(1)
    rows = export_text(rock_concert, [(entry, make_song())]).strip().split("\n")
    assert rows[-1] == "1,Song,Artist,,,,,,,,No,No"

def test_encore_and_optional_flags(rock_concert):
    entry = make_entry(1, is_encore=True, is_optional=True)
    rows = export_text(rock_concert, [(entry, make_song())]).strip().split("\n")
    assert rows[-1].endswith(",Yes,Yes")

def test_escaping_commas_and_quotes(rock_concert):
    entries = [
        (make_entry(1), make_song(title="Song, with, commas")),
        (make_entry(2), make_song(title='Song "with" quotes')),
    ]
    content = export_text(rock_concert, entries)
    assert '"Song, with, commas"' in content
    assert '"Song ""with"" quotes"' in content

def test_escaping_metadata():
    setlist = Setlist(name="Rock, Pop", venue='The "Hall"', user_id="user-1")
    content = export_text(setlist, [])
    assert '# Name: "Rock, Pop"' in content
    assert '# Venue: "The ""Hall"""' in content

def test_escape_csv_value():
    assert escape_csv_value(None) == ""
    assert escape_csv_value("") == ""
    assert escape_csv_value("plain") == "plain"
    assert escape_csv_value("line\nbreak") == '"line\nbreak"'

def test_export_is_utf8(rock_concert):
    entry = make_entry(1)
    data = SetlistCsvExporter().export(rock_concert, [(entry, make_song(title="Café"))])
    assert isinstance(data, bytes)
    assert "Café" in data.decode("utf-8")

def test_filename_uses_performance_date(rock_concert):
    assert generate_csv_filename(rock_concert) == "setlist_Rock_Concert_2024-12-31.csv"

def test_filename_falls_back_to_today():
    setlist = Setlist(name="My Concert", user_id="user-1")
    today = datetime(2025, 3, 1)
    assert generate_csv_filename(setlist, today=today) == "setlist_My_Concert_2025-03-01.csv"

def test_filename_strips_illegal_characters():
    setlist = Setlist(name='a/b\\c:d*e?f"g<h>i|j', user_id="user-1")
    filename = generate_csv_filename(setlist, today=datetime(2025, 1, 1))
    for c in '/\\:*?"<>|':
        assert c not in filename

def test_filename_truncates_long_names():
    setlist = Setlist(name="x" * 100, user_id="user-1")
    filename = generate_csv_filename(setlist, today=datetime(2025, 1, 1))
    assert len(filename) < 120
    assert filename == f"setlist_{'x' * 50}_2025-01-01.csv"

def test_filename_requires_setlist():
    with pytest.raises(ValueError):
        generate_csv_filename(None)

def test_sanitize_filename_collapses_whitespace():
    assert sanitize_filename("  Summer   Tour\t2025 ") == "Summer_Tour_2025"
    assert sanitize_filename(None) == ""

def test_row_fields_with_line_breaks_and_quotes(rock_concert):
    entry = make_entry(1, performance_notes="Count in\nslowly", transition_notes='Say "thanks"')
    content = export_text(rock_concert, [(entry, make_song(genre="Rock, Pop"))])
    assert '"Count in\nslowly"' in content
    assert '"Say ""thanks"""' in content
    assert ',"Rock, Pop",' in content
