from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

class Setlist(SQLModel, table=True):
    __tablename__ = "setlists"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(default="", index=True)
    name: str = ""
    description: Optional[str] = None

    # --- Performance Metadata ---
    venue: Optional[str] = None
    performance_date: Optional[datetime] = None
    expected_duration_minutes: Optional[int] = None
    performance_notes: Optional[str] = None
    is_template: bool = Field(default=False)
    is_active: bool = Field(default=False)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

class SetlistSong(SQLModel, table=True):
    __tablename__ = "setlist_songs"
    id: Optional[int] = Field(default=None, primary_key=True)
    setlist_id: int = Field(foreign_key="setlists.id")
    song_id: int = Field(foreign_key="songs.id")
    # 1-based, defines the playing order
    position: int

    # per-performance overrides of the catalog values
    custom_bpm: Optional[int] = None
    custom_key: Optional[str] = None
    performance_notes: Optional[str] = None
    transition_notes: Optional[str] = None
    is_encore: bool = Field(default=False)
    is_optional: bool = Field(default=False)

    created_at: datetime = Field(default_factory=datetime.now)
