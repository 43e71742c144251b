from typing import List, Optional, Tuple
from sqlmodel import Session, select, or_, col
from sqlalchemy import func

from domain.models.song import Song
from domain.models.setlist import SetlistSong
from domain.services.authorization import is_owned_by

class SongRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, song_id: int) -> Optional[Song]:
        if song_id is None:
            return None
        return self.session.get(Song, song_id)

    def find_owned(self, song_id: int, user_id: str) -> Optional[Song]:
        song = self.get_by_id(song_id)
        if not is_owned_by(song, user_id):
            return None
        return song

    def _apply_search_conditions(
        self,
        query,
        user_id: str,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        tags: Optional[str] = None
    ):
        """Owner filter plus the optional catalog filters."""
        query = query.where(Song.user_id == user_id)

        # 1. Free text over title / artist / album
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(or_(
                col(Song.title).ilike(pattern),
                col(Song.artist).ilike(pattern),
                col(Song.album).ilike(pattern)
            ))

        # 2. Genre (exact)
        if genre and genre.strip():
            query = query.where(Song.genre == genre)

        # 3. Tags (substring of the raw tag string)
        if tags and tags.strip():
            query = query.where(col(Song.tags).contains(tags))

        return query

    def search(
        self,
        user_id: str,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        tags: Optional[str] = None,
        offset: int = 0,
        limit: int = 20
    ) -> Tuple[List[Song], int]:
        count_query = self._apply_search_conditions(select(func.count(Song.id)), user_id, search, genre, tags)
        total_count = self.session.exec(count_query).one()

        query = self._apply_search_conditions(select(Song), user_id, search, genre, tags)
        query = query.order_by(Song.artist, Song.title).offset(offset).limit(limit)
        return self.session.exec(query).all(), total_count

    def create(self, song: Song) -> Song:
        self.session.add(song)
        self.session.commit()
        self.session.refresh(song)
        return song

    def update(self, song: Song) -> Song:
        self.session.add(song)
        self.session.commit()
        self.session.refresh(song)
        return song

    def delete(self, song: Song):
        # entries pointing at the song go first, there is no cascading FK
        entries = self.session.exec(select(SetlistSong).where(SetlistSong.song_id == song.id)).all()
        for e in entries:
            self.session.delete(e)
        self.session.delete(song)
        self.session.commit()

    def get_all_tag_strings(self, user_id: str) -> List[str]:
        statement = (
            select(Song.tags)
            .where(Song.user_id == user_id)
            .where(Song.tags != None)
            .where(Song.tags != "")
        )
        return self.session.exec(statement).all()

    def get_all_unique_genres(self, user_id: str) -> List[str]:
        statement = select(Song.genre).where(Song.user_id == user_id).where(Song.genre != None).distinct()
        genres = self.session.exec(statement).all()
        return sorted([g for g in genres if g and g.strip()])

    def get_all_unique_artists(self, user_id: str) -> List[str]:
        statement = select(Song.artist).where(Song.user_id == user_id).where(Song.artist != None).distinct()
        artists = self.session.exec(statement).all()
        return sorted([a for a in artists if a and a.strip()])
