import pytest
from domain.models.song import Song
from domain.services.song_validator import validate_song, parse_tags

def make_song(**kwargs) -> Song:
    data = {
        "title": "Valid Song",
        "artist": "Valid Artist",
        "album": "Album",
        "genre": "Rock",
        "musical_key": "C#m",
        "bpm": 120,
        "duration_seconds": 240,
        "difficulty_rating": 3,
        "notes": "Notes",
        "tags": "rock, live",
        "user_id": "user-1",
    }
    data.update(kwargs)
    return Song(**data)

def test_valid_song_has_no_errors():
    assert validate_song(make_song()) == []

def test_minimal_song_is_valid():
    assert validate_song(Song(title="T", artist="A", user_id="u")) == []

def test_none_song():
    assert validate_song(None) == ["Song cannot be null"]

def test_blank_title_and_artist():
    errors = validate_song(make_song(title="  ", artist=""))
    assert "Song title is required" in errors
    assert "Artist name is required" in errors
    assert not any("cannot exceed" in e for e in errors)

@pytest.mark.parametrize("field, length, message", [
    ("title", 201, "Song title cannot exceed 200 characters"),
    ("artist", 201, "Artist name cannot exceed 200 characters"),
    ("album", 201, "Album name cannot exceed 200 characters"),
    ("genre", 51, "Genre cannot exceed 50 characters"),
    ("musical_key", 11, "Musical key cannot exceed 10 characters"),
    ("notes", 2001, "Notes cannot exceed 2000 characters"),
    ("tags", 501, "Tags cannot exceed 500 characters"),
])
def test_length_limits(field, length, message):
    assert validate_song(make_song(**{field: "x" * length})) == [message]

def test_length_limit_boundaries_are_inclusive():
    song = make_song(title="x" * 200, genre="g" * 50, musical_key="k" * 10)
    assert validate_song(song) == []

@pytest.mark.parametrize("bpm", [39, 251])
def test_bpm_out_of_range(bpm):
    assert validate_song(make_song(bpm=bpm)) == ["BPM must be between 40 and 250"]

@pytest.mark.parametrize("duration", [0, 3601])
def test_duration_out_of_range(duration):
    assert validate_song(make_song(duration_seconds=duration)) == ["Duration must be between 1 second and 1 hour"]

@pytest.mark.parametrize("rating", [0, 6])
def test_difficulty_out_of_range(rating):
    assert validate_song(make_song(difficulty_rating=rating)) == ["Difficulty rating must be between 1 and 5"]

def test_range_boundaries_are_valid():
    for bpm, duration, rating in [(40, 1, 1), (250, 3600, 5)]:
        song = make_song(bpm=bpm, duration_seconds=duration, difficulty_rating=rating)
        assert validate_song(song) == []

def test_absent_optional_fields_are_valid():
    song = make_song(album=None, genre=None, musical_key=None, notes=None, tags=None,
                     bpm=None, duration_seconds=None, difficulty_rating=None)
    assert validate_song(song) == []

def test_user_id_required():
    assert validate_song(make_song(user_id="")) == ["User ID is required"]

def test_all_errors_are_reported():
    errors = validate_song(make_song(title="", bpm=10, difficulty_rating=9, user_id=""))
    assert errors == [
        "Song title is required",
        "BPM must be between 40 and 250",
        "Difficulty rating must be between 1 and 5",
        "User ID is required",
    ]

def test_parse_tags_merges_and_sorts():
    assert parse_tags(["  jazz  ,  funk  ", "rock, blues"]) == ["blues", "funk", "jazz", "rock"]

def test_parse_tags_dedupes_and_skips_empty():
    assert parse_tags(["rock,,rock", None, "", " , ", "pop"]) == ["pop", "rock"]

def test_parse_tags_is_case_sensitive():
    assert parse_tags(["rock, Rock"]) == ["Rock", "rock"]
