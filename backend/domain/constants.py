# Song field limits
MAX_TITLE_LENGTH = 200
MAX_ARTIST_LENGTH = 200
MAX_ALBUM_LENGTH = 200
MAX_GENRE_LENGTH = 50
MAX_MUSICAL_KEY_LENGTH = 10
MAX_NOTES_LENGTH = 2000
MAX_TAGS_LENGTH = 500

MIN_BPM, MAX_BPM = 40, 250
MIN_DURATION_SECONDS, MAX_DURATION_SECONDS = 1, 3600
MIN_DIFFICULTY, MAX_DIFFICULTY = 1, 5

# Setlist field limits
MAX_SETLIST_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000
MAX_VENUE_LENGTH = 200
MAX_PERFORMANCE_NOTES_LENGTH = 2000
MIN_EXPECTED_DURATION_MINUTES = 1

# Tags are stored as free text separated by commas
TAG_SEPARATOR = ","

# CSV export
CSV_COLUMNS = [
    "Position", "Title", "Artist", "Key", "BPM", "Duration (sec)", "Genre",
    "Difficulty", "Notes", "Transition Notes", "Encore", "Optional"
]
CSV_DATE_FORMAT = "%Y-%m-%d"
MAX_FILENAME_NAME_LENGTH = 50
INVALID_FILENAME_CHARS_REGEX = r'[\\/*?:"<>|\x00-\x1f]'

# Setlist entry limits
MIN_POSITION, MAX_POSITION = 1, 1000
MAX_ENTRY_PERFORMANCE_NOTES_LENGTH = 1000
MAX_TRANSITION_NOTES_LENGTH = 500
