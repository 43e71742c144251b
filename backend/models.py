# Aggregates every table model so SQLModel.metadata knows all of them
from domain.models.song import Song
from domain.models.setlist import Setlist, SetlistSong
