from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

class SongCreate(BaseModel):
    title: str = ""
    artist: str = ""
    album: Optional[str] = None
    genre: Optional[str] = None
    bpm: Optional[int] = None
    musical_key: Optional[str] = None
    duration_seconds: Optional[int] = None
    notes: Optional[str] = None
    tags: Optional[str] = None
    difficulty_rating: Optional[int] = None

class SongUpdate(SongCreate):
    pass

class SetlistCreate(BaseModel):
    name: str = ""
    description: Optional[str] = None
    venue: Optional[str] = None
    performance_date: Optional[datetime] = None
    expected_duration_minutes: Optional[int] = None
    performance_notes: Optional[str] = None
    is_template: bool = False
    is_active: bool = False

class SetlistUpdate(SetlistCreate):
    pass

class AddSongRequest(BaseModel):
    song_id: int
    position: Optional[int] = None

class ReorderRequest(BaseModel):
    song_ids: List[int]

class SetlistSongUpdate(BaseModel):
    performance_notes: Optional[str] = None
    transition_notes: Optional[str] = None
    custom_bpm: Optional[int] = None
    custom_key: Optional[str] = None
    is_encore: Optional[bool] = None
    is_optional: Optional[bool] = None

class CopySetlistRequest(BaseModel):
    name: str
