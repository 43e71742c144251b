from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session
from typing import Optional, List

from infra.database.connection import get_session
from domain.models.song import Song
from api.dependencies import get_current_user_id
from api.schemas.common import SongCreate, SongUpdate
from app.services.song_app_service import SongAppService
from utils.pagination import build_page, normalize_paging

router = APIRouter()

@router.get("/api/songs")
def get_songs(
    search: Optional[str] = None,
    genre: Optional[str] = None,
    tags: Optional[str] = None,
    page_number: int = Query(1),
    page_size: Optional[int] = Query(None),
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    page_number, page_size, _ = normalize_paging(page_number, page_size)
    service = SongAppService(session)
    songs, total_count = service.get_songs(user_id, search, genre, tags, page_number, page_size)
    return build_page(songs, total_count, page_number, page_size)

@router.get("/api/songs/genres", response_model=List[str])
def get_genres(user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    return SongAppService(session).get_genres(user_id)

@router.get("/api/songs/artists", response_model=List[str])
def get_artists(user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    return SongAppService(session).get_artists(user_id)

@router.get("/api/songs/tags", response_model=List[str])
def get_tags(user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    return SongAppService(session).get_distinct_tags(user_id)

@router.get("/api/songs/{song_id}")
def get_song(song_id: int, user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    song = SongAppService(session).get_song(song_id, user_id)
    if not song:
        raise HTTPException(status_code=404, detail="Song not found")
    return song

@router.post("/api/songs")
def create_song(
    data: SongCreate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    service = SongAppService(session)
    try:
        return service.create_song(Song(user_id=user_id, **data.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/api/songs/{song_id}")
def update_song(
    song_id: int,
    data: SongUpdate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    service = SongAppService(session)
    try:
        song = service.update_song(Song(id=song_id, user_id=user_id, **data.model_dump()), user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not song:
        raise HTTPException(status_code=404, detail="Song not found")
    return song

@router.delete("/api/songs/{song_id}")
def delete_song(song_id: int, user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    success = SongAppService(session).delete_song(song_id, user_id)
    if not success:
        raise HTTPException(status_code=404, detail="Song not found")
    return {"ok": True}
