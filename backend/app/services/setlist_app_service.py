from typing import List, Optional, Dict, Any, Tuple
from sqlmodel import Session
from datetime import datetime

from domain.models.setlist import Setlist, SetlistSong
from domain.services.setlist_csv_exporter import effective_bpm, effective_key
from domain.services.setlist_duration import calculate_setlist_duration
from domain.services.setlist_validator import validate_setlist, validate_setlist_song
from infra.repositories.setlist_repository import SetlistRepository
from infra.repositories.song_repository import SongRepository
from utils.logger import get_logger, sanitize_message, sanitize_user_id
from utils.pagination import normalize_paging

logger = get_logger(__name__)

EDITABLE_SETLIST_FIELDS = [
    "name", "description", "venue", "performance_date",
    "expected_duration_minutes", "performance_notes", "is_template", "is_active"
]

EDITABLE_ENTRY_FIELDS = [
    "performance_notes", "transition_notes", "custom_bpm",
    "custom_key", "is_encore", "is_optional"
]

ENTRY_FLAG_FIELDS = ["is_encore", "is_optional"]

# fields carried over to a copied setlist (template/active flags are reset)
COPIED_SETLIST_FIELDS = [
    "description", "venue", "performance_date",
    "expected_duration_minutes", "performance_notes"
]

class SetlistAppService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = SetlistRepository(session)
        self.song_repository = SongRepository(session)

    def get_setlists(
        self,
        user_id: str,
        search: Optional[str] = None,
        is_template: Optional[bool] = None,
        is_active: Optional[bool] = None,
        page_number: int = 1,
        page_size: Optional[int] = None
    ) -> Tuple[List[Setlist], int]:
        page_number, page_size, offset = normalize_paging(page_number, page_size)
        setlists, total_count = self.repository.search(
            user_id,
            search=search,
            is_template=is_template,
            is_active=is_active,
            offset=offset,
            limit=page_size
        )
        logger.info(f"Retrieved {len(setlists)} setlists for user {sanitize_user_id(user_id)} (page {page_number})")
        return setlists, total_count

    def get_setlist(self, setlist_id: int, user_id: str) -> Optional[Setlist]:
        return self.repository.find_owned(setlist_id, user_id)

    def validate_setlist(self, setlist: Optional[Setlist]) -> List[str]:
        return validate_setlist(setlist)

    def _ensure_valid(self, errors: List[str]):
        if errors:
            raise ValueError(f"Validation failed: {errors[0]}")

    def create_setlist(self, setlist: Setlist) -> Setlist:
        self._ensure_valid(self.validate_setlist(setlist))

        setlist.created_at = datetime.now()
        setlist.updated_at = None
        created = self.repository.create(setlist)

        logger.info(
            f"Created setlist {created.id} '{sanitize_message(created.name)}' "
            f"for user {sanitize_user_id(created.user_id)}"
        )
        return created

    def update_setlist(self, setlist: Setlist, user_id: str) -> Optional[Setlist]:
        if not user_id or not user_id.strip():
            raise ValueError("user_id is required")

        self._ensure_valid(self.validate_setlist(setlist))

        existing = self.repository.find_owned(setlist.id, user_id)
        if not existing:
            logger.warning(f"Setlist {setlist.id} not found or unauthorized for user {sanitize_user_id(user_id)}")
            return None

        for field in EDITABLE_SETLIST_FIELDS:
            setattr(existing, field, getattr(setlist, field))
        existing.updated_at = datetime.now()

        updated = self.repository.update(existing)
        logger.info(f"Updated setlist {updated.id} for user {sanitize_user_id(user_id)}")
        return updated

    def delete_setlist(self, setlist_id: int, user_id: str) -> bool:
        setlist = self.repository.find_owned(setlist_id, user_id)
        if not setlist:
            logger.warning(f"Setlist {setlist_id} not found or unauthorized for user {sanitize_user_id(user_id)}")
            return False

        self.repository.clear_entries(setlist_id)
        self.repository.delete(setlist)
        logger.info(f"Deleted setlist {setlist_id} for user {sanitize_user_id(user_id)}")
        return True

    def get_setlist_songs(self, setlist_id: int, user_id: str) -> Optional[List[Dict[str, Any]]]:
        if not self.repository.find_owned(setlist_id, user_id):
            return None

        results = self.repository.get_songs(setlist_id)
        entries = []
        for entry, song in results:
            e_dict = entry.model_dump()
            e_dict["song"] = song.model_dump()
            e_dict["effective_bpm"] = effective_bpm(entry, song)
            e_dict["effective_key"] = effective_key(entry, song)
            e_dict["formatted_duration"] = song.formatted_duration
            entries.append(e_dict)
        return entries

    def get_setlist_duration(self, setlist_id: int, user_id: str) -> Optional[Dict[str, Any]]:
        if not self.repository.find_owned(setlist_id, user_id):
            return None
        return calculate_setlist_duration(self.repository.get_songs(setlist_id))

    def _touch(self, setlist: Setlist):
        setlist.updated_at = datetime.now()
        self.session.add(setlist)

    def add_song(
        self,
        setlist_id: int,
        song_id: int,
        user_id: str,
        position: Optional[int] = None
    ) -> Optional[SetlistSong]:
        setlist = self.repository.find_owned(setlist_id, user_id)
        song = self.song_repository.find_owned(song_id, user_id)
        if not setlist or not song:
            logger.warning(
                f"Cannot add song {song_id} to setlist {setlist_id}: "
                f"not found or unauthorized for user {sanitize_user_id(user_id)}"
            )
            return None

        if self.repository.get_entry(setlist_id, song_id):
            logger.warning(f"Song {song_id} is already in setlist {setlist_id}")
            return None

        max_position = self.repository.get_max_position(setlist_id)
        if position is None or position > max_position:
            position = max_position + 1
        else:
            position = max(position, 1)
            # make room for the inserted entry
            for existing in self.repository.get_entries(setlist_id):
                if existing.position >= position:
                    existing.position += 1
                    self.session.add(existing)

        entry = SetlistSong(setlist_id=setlist_id, song_id=song_id, position=position)
        self.repository.add_entry(entry)
        self._touch(setlist)
        self.session.commit()
        self.session.refresh(entry)

        logger.info(f"Added song {song_id} to setlist {setlist_id} at position {position}")
        return entry

    def remove_song(self, setlist_id: int, song_id: int, user_id: str) -> bool:
        setlist = self.repository.find_owned(setlist_id, user_id)
        if not setlist:
            return False

        entry = self.repository.get_entry(setlist_id, song_id)
        if not entry:
            return False

        removed_position = entry.position
        self.repository.delete_entry(entry)
        for existing in self.repository.get_entries(setlist_id):
            if existing.id != entry.id and existing.position > removed_position:
                existing.position -= 1
                self.session.add(existing)

        self._touch(setlist)
        self.session.commit()
        logger.info(f"Removed song {song_id} from setlist {setlist_id}")
        return True

    def reorder_songs(self, setlist_id: int, song_ids: List[int], user_id: str) -> bool:
        """
        Renumber the entries 1..n following song_ids.
        Entries missing from song_ids keep their relative order after the listed ones.
        """
        setlist = self.repository.find_owned(setlist_id, user_id)
        if not setlist or not song_ids:
            return False

        if len(set(song_ids)) != len(song_ids):
            logger.warning(f"Duplicate song ids in reorder request for setlist {setlist_id}")
            return False

        entries = self.repository.get_entries(setlist_id)
        by_song = {e.song_id: e for e in entries}
        if any(sid not in by_song for sid in song_ids):
            logger.warning(f"Reorder request for setlist {setlist_id} references songs outside the setlist")
            return False

        ordered = [by_song[sid] for sid in song_ids]
        listed = set(song_ids)
        ordered.extend(e for e in entries if e.song_id not in listed)

        for i, entry in enumerate(ordered, start=1):
            entry.position = i
            self.session.add(entry)

        self._touch(setlist)
        self.session.commit()
        logger.info(f"Reordered {len(ordered)} songs in setlist {setlist_id}")
        return True

    def update_setlist_song(self, setlist_song_id: int, user_id: str, **changes) -> Optional[SetlistSong]:
        entry = self.repository.get_entry_by_id(setlist_song_id)
        if not entry:
            return None

        # ownership is inherited from the parent setlist
        setlist = self.repository.find_owned(entry.setlist_id, user_id)
        if not setlist:
            logger.warning(
                f"Setlist song {setlist_song_id} not found or unauthorized for user {sanitize_user_id(user_id)}"
            )
            return None

        for field, value in changes.items():
            if field not in EDITABLE_ENTRY_FIELDS:
                continue
            # an explicit null leaves a flag unchanged
            if field in ENTRY_FLAG_FIELDS and value is None:
                continue
            setattr(entry, field, value)

        errors = validate_setlist_song(entry)
        if errors:
            self.session.rollback()
            self._ensure_valid(errors)

        self.session.add(entry)
        self._touch(setlist)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def copy_setlist(self, setlist_id: int, new_name: str, user_id: str) -> Optional[Setlist]:
        if not new_name or not new_name.strip():
            raise ValueError("new_name is required")

        source = self.repository.find_owned(setlist_id, user_id)
        if not source:
            return None

        duplicate = Setlist(name=new_name.strip(), user_id=user_id)
        for field in COPIED_SETLIST_FIELDS:
            setattr(duplicate, field, getattr(source, field))

        created = self.create_setlist(duplicate)

        for entry in self.repository.get_entries(setlist_id):
            self.repository.add_entry(SetlistSong(
                setlist_id=created.id,
                song_id=entry.song_id,
                position=entry.position,
                custom_bpm=entry.custom_bpm,
                custom_key=entry.custom_key,
                performance_notes=entry.performance_notes,
                transition_notes=entry.transition_notes,
                is_encore=entry.is_encore,
                is_optional=entry.is_optional
            ))
        self.session.commit()
        self.session.refresh(created)

        logger.info(f"Copied setlist {setlist_id} to {created.id} for user {sanitize_user_id(user_id)}")
        return created
