from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlmodel import Session
from typing import Optional
import urllib.parse

from infra.database.connection import get_session
from domain.models.setlist import Setlist
from api.dependencies import get_current_user_id
from api.schemas.common import (
    AddSongRequest,
    CopySetlistRequest,
    ReorderRequest,
    SetlistCreate,
    SetlistSongUpdate,
    SetlistUpdate,
)
from app.services.setlist_app_service import SetlistAppService
from app.services.setlist_export_app_service import SetlistExportAppService
from utils.pagination import build_page, normalize_paging

router = APIRouter()

@router.get("/api/setlists")
def get_setlists(
    search: Optional[str] = None,
    is_template: Optional[bool] = None,
    is_active: Optional[bool] = None,
    page_number: int = Query(1),
    page_size: Optional[int] = Query(None),
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    page_number, page_size, _ = normalize_paging(page_number, page_size)
    service = SetlistAppService(session)
    setlists, total_count = service.get_setlists(user_id, search, is_template, is_active, page_number, page_size)
    return build_page(setlists, total_count, page_number, page_size)

@router.post("/api/setlists")
def create_setlist(
    data: SetlistCreate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    service = SetlistAppService(session)
    try:
        return service.create_setlist(Setlist(user_id=user_id, **data.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/api/setlists/{setlist_id}")
def get_setlist(setlist_id: int, user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    setlist = SetlistAppService(session).get_setlist(setlist_id, user_id)
    if not setlist:
        raise HTTPException(status_code=404, detail="Setlist not found")
    return setlist

@router.put("/api/setlists/{setlist_id}")
def update_setlist(
    setlist_id: int,
    data: SetlistUpdate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    service = SetlistAppService(session)
    try:
        setlist = service.update_setlist(Setlist(id=setlist_id, user_id=user_id, **data.model_dump()), user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not setlist:
        raise HTTPException(status_code=404, detail="Setlist not found")
    return setlist

@router.delete("/api/setlists/{setlist_id}")
def delete_setlist(setlist_id: int, user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    success = SetlistAppService(session).delete_setlist(setlist_id, user_id)
    if not success:
        raise HTTPException(status_code=404, detail="Setlist not found")
    return {"ok": True}

@router.get("/api/setlists/{setlist_id}/songs")
def get_setlist_songs(setlist_id: int, user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    entries = SetlistAppService(session).get_setlist_songs(setlist_id, user_id)
    if entries is None:
        raise HTTPException(status_code=404, detail="Setlist not found")
    return entries

@router.get("/api/setlists/{setlist_id}/duration")
def get_setlist_duration(setlist_id: int, user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    duration = SetlistAppService(session).get_setlist_duration(setlist_id, user_id)
    if duration is None:
        raise HTTPException(status_code=404, detail="Setlist not found")
    return duration

@router.post("/api/setlists/{setlist_id}/songs")
def add_song_to_setlist(
    setlist_id: int,
    data: AddSongRequest,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    entry = SetlistAppService(session).add_song(setlist_id, data.song_id, user_id, data.position)
    if not entry:
        raise HTTPException(status_code=404, detail="Setlist or song not found, or song already in setlist")
    return entry

@router.put("/api/setlists/{setlist_id}/songs/order")
def reorder_setlist_songs(
    setlist_id: int,
    data: ReorderRequest,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    service = SetlistAppService(session)
    if not service.get_setlist(setlist_id, user_id):
        raise HTTPException(status_code=404, detail="Setlist not found")
    if not service.reorder_songs(setlist_id, data.song_ids, user_id):
        raise HTTPException(status_code=400, detail="Invalid song order")
    return {"status": "success"}

@router.delete("/api/setlists/{setlist_id}/songs/{song_id}")
def remove_song_from_setlist(
    setlist_id: int,
    song_id: int,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    success = SetlistAppService(session).remove_song(setlist_id, song_id, user_id)
    if not success:
        raise HTTPException(status_code=404, detail="Setlist song not found")
    return {"ok": True}

@router.patch("/api/setlist-songs/{setlist_song_id}")
def update_setlist_song(
    setlist_song_id: int,
    data: SetlistSongUpdate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    service = SetlistAppService(session)
    try:
        entry = service.update_setlist_song(setlist_song_id, user_id, **data.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not entry:
        raise HTTPException(status_code=404, detail="Setlist song not found")
    return entry

@router.post("/api/setlists/{setlist_id}/copy")
def copy_setlist(
    setlist_id: int,
    data: CopySetlistRequest,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    service = SetlistAppService(session)
    try:
        setlist = service.copy_setlist(setlist_id, data.name, user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not setlist:
        raise HTTPException(status_code=404, detail="Setlist not found")
    return setlist

@router.get("/api/setlists/{setlist_id}/export/csv")
def export_setlist_csv(setlist_id: int, user_id: str = Depends(get_current_user_id), session: Session = Depends(get_session)):
    """
    Download the setlist as a CSV file (metadata block, header row, one row per song).
    """
    service = SetlistExportAppService(session)
    result = service.export_setlist_csv_file(setlist_id, user_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Setlist not found")

    filename, content = result

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{urllib.parse.quote(filename)}"}
    )
