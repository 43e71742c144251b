from typing import List, Optional, Tuple
from sqlmodel import Session, select, desc, or_, col
from sqlalchemy import func

from domain.models.setlist import Setlist, SetlistSong
from domain.models.song import Song
from domain.services.authorization import is_owned_by

class SetlistRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, setlist_id: int) -> Optional[Setlist]:
        if setlist_id is None:
            return None
        return self.session.get(Setlist, setlist_id)

    def find_owned(self, setlist_id: int, user_id: str) -> Optional[Setlist]:
        setlist = self.get_by_id(setlist_id)
        if not is_owned_by(setlist, user_id):
            return None
        return setlist

    def _apply_search_conditions(
        self,
        query,
        user_id: str,
        search: Optional[str] = None,
        is_template: Optional[bool] = None,
        is_active: Optional[bool] = None
    ):
        query = query.where(Setlist.user_id == user_id)

        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(or_(
                col(Setlist.name).ilike(pattern),
                col(Setlist.description).ilike(pattern),
                col(Setlist.venue).ilike(pattern)
            ))

        if is_template is not None:
            query = query.where(Setlist.is_template == is_template)
        if is_active is not None:
            query = query.where(Setlist.is_active == is_active)

        return query

    def search(
        self,
        user_id: str,
        search: Optional[str] = None,
        is_template: Optional[bool] = None,
        is_active: Optional[bool] = None,
        offset: int = 0,
        limit: int = 20
    ) -> Tuple[List[Setlist], int]:
        count_query = self._apply_search_conditions(select(func.count(Setlist.id)), user_id, search, is_template, is_active)
        total_count = self.session.exec(count_query).one()

        query = self._apply_search_conditions(select(Setlist), user_id, search, is_template, is_active)
        query = query.order_by(desc(Setlist.created_at), desc(Setlist.id)).offset(offset).limit(limit)
        return self.session.exec(query).all(), total_count

    def create(self, setlist: Setlist) -> Setlist:
        self.session.add(setlist)
        self.session.commit()
        self.session.refresh(setlist)
        return setlist

    def update(self, setlist: Setlist) -> Setlist:
        self.session.add(setlist)
        self.session.commit()
        self.session.refresh(setlist)
        return setlist

    def delete(self, setlist: Setlist):
        self.session.delete(setlist)
        self.session.commit()

    def get_songs(self, setlist_id: int) -> List[Tuple[SetlistSong, Song]]:
        query = (
            select(SetlistSong, Song)
            .where(SetlistSong.setlist_id == setlist_id)
            .where(SetlistSong.song_id == Song.id)
            .order_by(SetlistSong.position)
        )
        return self.session.exec(query).all()

    def get_entries(self, setlist_id: int) -> List[SetlistSong]:
        query = select(SetlistSong).where(SetlistSong.setlist_id == setlist_id).order_by(SetlistSong.position)
        return self.session.exec(query).all()

    def get_entry(self, setlist_id: int, song_id: int) -> Optional[SetlistSong]:
        query = (
            select(SetlistSong)
            .where(SetlistSong.setlist_id == setlist_id)
            .where(SetlistSong.song_id == song_id)
        )
        return self.session.exec(query).first()

    def get_entry_by_id(self, setlist_song_id: int) -> Optional[SetlistSong]:
        return self.session.get(SetlistSong, setlist_song_id)

    def get_max_position(self, setlist_id: int) -> int:
        query = select(func.max(SetlistSong.position)).where(SetlistSong.setlist_id == setlist_id)
        return self.session.exec(query).one() or 0

    def add_entry(self, setlist_song: SetlistSong):
        # The service commits, several entries are usually added in a row.
        self.session.add(setlist_song)

    def delete_entry(self, setlist_song: SetlistSong):
        self.session.delete(setlist_song)

    def clear_entries(self, setlist_id: int):
        existing = self.session.exec(select(SetlistSong).where(SetlistSong.setlist_id == setlist_id)).all()
        for e in existing:
            self.session.delete(e)
        self.session.commit()
