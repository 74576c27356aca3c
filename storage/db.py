"""SQLite database operations for the STAR report builder."""
import sqlite3
from pathlib import Path

from config import DB_PATH
from core.errors import StoreError
from storage.repos.reports import ReportMixin


class Database(ReportMixin):
    def __init__(self, db_path=None):
        self.db_path = Path(db_path or DB_PATH)
        self._init_db()

    def _get_conn(self):
        conn = sqlite3.connect(str(self.db_path), timeout=10)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self):
        """Create tables and indexes if they don't exist yet."""
        schema_path = Path(__file__).parent / "schema.sql"
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._get_conn()
            try:
                conn.executescript(schema_path.read_text())
            finally:
                conn.close()
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"Could not initialise database at {self.db_path}: {e}") from e
