from typing import Optional, Tuple
from sqlmodel import Session

from domain.models.setlist import Setlist
from domain.services.setlist_csv_exporter import SetlistCsvExporter, generate_csv_filename
from infra.repositories.setlist_repository import SetlistRepository
from utils.logger import get_logger, sanitize_user_id

logger = get_logger(__name__)

class SetlistExportAppService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = SetlistRepository(session)
        self.exporter = SetlistCsvExporter()

    def _find_setlist(self, setlist_id: int, user_id: str) -> Optional[Setlist]:
        if not user_id or not user_id.strip():
            raise ValueError("user_id is required")

        setlist = self.repository.find_owned(setlist_id, user_id)
        if not setlist:
            logger.warning(f"Setlist {setlist_id} not found or unauthorized for user {sanitize_user_id(user_id)}")
        return setlist

    def _export(self, setlist: Setlist, user_id: str) -> bytes:
        try:
            entries = self.repository.get_songs(setlist.id)
            content = self.exporter.export(setlist, entries)
        except Exception as e:
            logger.error(f"Error exporting setlist {setlist.id} for user {sanitize_user_id(user_id)}: {e}")
            raise

        logger.info(
            f"Exported setlist {setlist.id} with {len(entries)} songs to CSV for user {sanitize_user_id(user_id)}"
        )
        return content

    def export_setlist_to_csv(self, setlist_id: int, user_id: str) -> Optional[bytes]:
        """
        UTF-8 CSV of the setlist, or None when it does not exist or belongs to someone else.
        """
        setlist = self._find_setlist(setlist_id, user_id)
        if not setlist:
            return None
        return self._export(setlist, user_id)

    def export_setlist_csv_file(self, setlist_id: int, user_id: str) -> Optional[Tuple[str, bytes]]:
        """(filename, content) for a download, with a single lookup."""
        setlist = self._find_setlist(setlist_id, user_id)
        if not setlist:
            return None
        return generate_csv_filename(setlist), self._export(setlist, user_id)

    def generate_csv_filename(self, setlist: Optional[Setlist]) -> str:
        return generate_csv_filename(setlist)
