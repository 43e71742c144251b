from typing import List, Optional, Tuple
from sqlmodel import Session
from datetime import datetime

from domain.models.song import Song
from domain.services.song_validator import validate_song, parse_tags
from infra.repositories.song_repository import SongRepository
from utils.logger import get_logger, sanitize_message, sanitize_user_id
from utils.pagination import normalize_paging

logger = get_logger(__name__)

EDITABLE_SONG_FIELDS = [
    "title", "artist", "album", "genre", "bpm", "musical_key",
    "duration_seconds", "notes", "tags", "difficulty_rating"
]

class SongAppService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = SongRepository(session)

    def get_songs(
        self,
        user_id: str,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        tags: Optional[str] = None,
        page_number: int = 1,
        page_size: Optional[int] = None
    ) -> Tuple[List[Song], int]:
        page_number, page_size, offset = normalize_paging(page_number, page_size)
        songs, total_count = self.repository.search(
            user_id,
            search=search,
            genre=genre,
            tags=tags,
            offset=offset,
            limit=page_size
        )
        logger.info(f"Retrieved {len(songs)} songs for user {sanitize_user_id(user_id)} (page {page_number})")
        return songs, total_count

    def get_song(self, song_id: int, user_id: str) -> Optional[Song]:
        return self.repository.find_owned(song_id, user_id)

    def validate_song(self, song: Optional[Song]) -> List[str]:
        return validate_song(song)

    def _ensure_valid(self, song: Optional[Song]):
        errors = self.validate_song(song)
        if errors:
            # only the first message is reported
            raise ValueError(f"Validation failed: {errors[0]}")

    def create_song(self, song: Song) -> Song:
        self._ensure_valid(song)

        song.created_at = datetime.now()
        song.updated_at = None
        created = self.repository.create(song)

        logger.info(
            f"Created song {created.id} '{sanitize_message(created.title)}' by "
            f"'{sanitize_message(created.artist)}' for user {sanitize_user_id(created.user_id)}"
        )
        return created

    def update_song(self, song: Song, user_id: str) -> Optional[Song]:
        if not user_id or not user_id.strip():
            raise ValueError("user_id is required")

        self._ensure_valid(song)

        existing = self.repository.find_owned(song.id, user_id)
        if not existing:
            logger.warning(f"Song {song.id} not found or unauthorized for user {sanitize_user_id(user_id)}")
            return None

        for field in EDITABLE_SONG_FIELDS:
            setattr(existing, field, getattr(song, field))
        existing.updated_at = datetime.now()

        updated = self.repository.update(existing)
        logger.info(f"Updated song {updated.id} for user {sanitize_user_id(user_id)}")
        return updated

    def delete_song(self, song_id: int, user_id: str) -> bool:
        song = self.repository.find_owned(song_id, user_id)
        if not song:
            logger.warning(f"Song {song_id} not found or unauthorized for user {sanitize_user_id(user_id)}")
            return False

        title = song.title
        self.repository.delete(song)
        logger.info(f"Deleted song {song_id} '{sanitize_message(title)}' for user {sanitize_user_id(user_id)}")
        return True

    def get_genres(self, user_id: str) -> List[str]:
        return self.repository.get_all_unique_genres(user_id)

    def get_artists(self, user_id: str) -> List[str]:
        return self.repository.get_all_unique_artists(user_id)

    def get_distinct_tags(self, user_id: str) -> List[str]:
        return parse_tags(self.repository.get_all_tag_strings(user_id))
