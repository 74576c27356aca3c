"""STAR reports: create, get, delete, filtered + paginated listing."""
import logging
import math
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone

from config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from core.errors import StoreError
from core.models import validate_report

logger = logging.getLogger(__name__)

_REPORT_COLUMNS = """id, name, situation, task, action, result,
    competency, store_category, original_story, created_at"""

# Largest value SQLite can bind as INTEGER
SQLITE_MAX_INT = 2 ** 63 - 1


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def coerce_pagination(page=None, page_size=None):
    """Coerce loosely-typed page/size values into a valid (page, page_size).

    Missing or non-numeric values fall back to page 1 and DEFAULT_PAGE_SIZE.
    page_size is clamped to [1, MAX_PAGE_SIZE]; page to >= 1 and small enough
    that its OFFSET still fits an SQLite INTEGER.
    """
    page_size = _to_int(page_size, DEFAULT_PAGE_SIZE)
    page_size = min(MAX_PAGE_SIZE, max(1, page_size))
    max_page = SQLITE_MAX_INT // page_size
    page = min(max_page, max(1, _to_int(page, 1)))
    return page, page_size


def _valid_id(report_id):
    return isinstance(report_id, int) and 0 < report_id <= SQLITE_MAX_INT


def _row_to_report(row):
    """Convert a DB row to the report payload dict."""
    return {
        "id": row["id"],
        "name": row["name"],
        "situation": row["situation"],
        "task": row["task"],
        "action": row["action"],
        "result": row["result"],
        "competency": row["competency"],
        "storeCategory": row["store_category"],
        "originalStory": row["original_story"],
        "createdAt": row["created_at"],
    }


@contextmanager
def _store_errors(operation):
    try:
        yield
    except sqlite3.Error as e:
        logger.error("Report store %s failed: %s", operation, e)
        raise StoreError(f"Report store unavailable ({operation}): {e}") from e


class ReportMixin:

    def create_report(self, fields):
        """Validate and persist a report, returning its new id.

        Raises:
            ValidationError: a required field is missing/blank or an enum
                value is outside its closed set.  Nothing is written.
            StoreError: the database rejected the write.
        """
        report = validate_report(fields)
        created_at = datetime.now(timezone.utc).isoformat(timespec="microseconds")
        with _store_errors("create"):
            with self._get_conn() as conn:
                cursor = conn.execute(
                    """INSERT INTO reports
                        (name, situation, task, action, result,
                         competency, store_category, original_story, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (report.name, report.situation, report.task, report.action,
                     report.result, report.competency, report.store_category,
                     report.original_story, created_at),
                )
                report_id = cursor.lastrowid
        logger.info("Saved report #%d (%s/%s)", report_id,
                    report.competency, report.store_category)
        return report_id

    def get_report(self, report_id):
        if not _valid_id(report_id):
            return None
        with _store_errors("get"):
            with self._get_conn() as conn:
                row = conn.execute(
                    f"SELECT {_REPORT_COLUMNS} FROM reports WHERE id = ?", (report_id,)
                ).fetchone()
        return _row_to_report(row) if row else None

    def delete_report(self, report_id):
        """Delete a report. Returns False if it did not exist."""
        if not _valid_id(report_id):
            return False
        with _store_errors("delete"):
            with self._get_conn() as conn:
                cursor = conn.execute("DELETE FROM reports WHERE id = ?", (report_id,))
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Deleted report #%d", report_id)
        return deleted

    @staticmethod
    def _report_filters(competency=None, store_category=None):
        clauses, params = [], []
        if competency:
            clauses.append("competency = ?")
            params.append(competency)
        if store_category:
            clauses.append("store_category = ?")
            params.append(store_category)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    def count_reports(self, competency=None, store_category=None):
        where, params = self._report_filters(competency, store_category)
        with _store_errors("count"):
            with self._get_conn() as conn:
                return conn.execute(f"SELECT COUNT(*) FROM reports{where}", params).fetchone()[0]

    def list_reports(self, competency=None, store_category=None,
                     page=1, page_size=DEFAULT_PAGE_SIZE):
        """List reports, most recent first.

        Filters are exact matches; omitted filters are unconstrained.
        A page past the end returns no items but the true total.

        Returns: {items, total, page, page_size, pages}
        """
        page, page_size = coerce_pagination(page, page_size)
        where, params = self._report_filters(competency, store_category)
        with _store_errors("list"):
            with self._get_conn() as conn:
                total = conn.execute(
                    f"SELECT COUNT(*) FROM reports{where}", params
                ).fetchone()[0]
                rows = conn.execute(
                    f"""SELECT {_REPORT_COLUMNS} FROM reports{where}
                    ORDER BY created_at DESC, id DESC
                    LIMIT ? OFFSET ?""",
                    params + [page_size, (page - 1) * page_size],
                ).fetchall()
        return {
            "items": [_row_to_report(r) for r in rows],
            "total": total,
            "page": page,
            "page_size": page_size,
            "pages": math.ceil(total / page_size),
        }
