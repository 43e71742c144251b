from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

class Song(SQLModel, table=True):
    """
    A song in a user's catalog
    """
    __tablename__ = "songs"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(default="", index=True)

    # Metadata
    title: str = Field(default="", index=True)
    artist: str = Field(default="", index=True)
    album: Optional[str] = None
    genre: Optional[str] = Field(default=None, index=True)

    # Performance data
    bpm: Optional[int] = None
    musical_key: Optional[str] = None
    duration_seconds: Optional[int] = None
    difficulty_rating: Optional[int] = None

    notes: Optional[str] = None
    # comma separated free text, e.g. "rock, live, opener"
    tags: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    @property
    def formatted_duration(self) -> str:
        if self.duration_seconds is None:
            return ""
        minutes, seconds = divmod(self.duration_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"
