"""
SQLite storage for conversion history.
Single portable file, one row per recorded conversion.
Rows are only ever inserted or bulk-deleted.
"""

import sqlite3
import logging
from pathlib import Path
from contextlib import contextmanager

from fathom.storage.models import ConversionRecord

logger = logging.getLogger(__name__)

CREATE_TABLES = """
CREATE TABLE IF NOT EXISTS conversion_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category TEXT NOT NULL,
    from_unit TEXT NOT NULL,
    to_unit TEXT NOT NULL,
    input_value REAL NOT NULL,
    output_value REAL NOT NULL,
    timestamp TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_history_timestamp
    ON conversion_history(timestamp);
CREATE INDEX IF NOT EXISTS idx_history_category
    ON conversion_history(category);
"""


class SQLiteStore:
    """SQLite conversion history store. One connection per call."""

    def __init__(self, db_path: str):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with self._connect() as conn:
            conn.executescript(CREATE_TABLES)
        logger.info("SQLite store initialized at %s", self.db_path)

    @contextmanager
    def _connect(self):
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def record_conversion(self, record: ConversionRecord) -> int:
        """Insert one conversion. Returns the new row id."""
        with self._connect() as conn:
            cur = conn.execute(
                """INSERT INTO conversion_history
                   (category, from_unit, to_unit, input_value, output_value, timestamp)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (record.category, record.from_unit, record.to_unit,
                 record.input_value, record.output_value, record.timestamp),
            )
            row_id = cur.lastrowid
        record.id = row_id
        logger.debug(
            "Recorded conversion %d (%s: %s %s -> %s)",
            row_id, record.category, record.input_value, record.from_unit, record.to_unit,
        )
        return row_id

    def get_recent(self, limit: int = 50) -> list[dict]:
        """Most recent conversions, newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                """SELECT * FROM conversion_history
                   ORDER BY timestamp DESC, id DESC
                   LIMIT ?""",
                (limit,),
            ).fetchall()
        return [dict(r) for r in rows]

    def clear_history(self) -> int:
        """Delete every record. Returns the number of rows removed."""
        with self._connect() as conn:
            deleted = conn.execute("DELETE FROM conversion_history").rowcount
        logger.info("Cleared %d history records", deleted)
        return deleted

    def export_all_json(self) -> list[dict]:
        """Every record, oldest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM conversion_history ORDER BY timestamp, id"
            ).fetchall()
        return [dict(r) for r in rows]

    def get_stats(self) -> dict:
        """Record counts overall and per category, plus the time span covered."""
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM conversion_history").fetchone()[0]
            cat_rows = conn.execute(
                """SELECT category, COUNT(*) as conversions
                   FROM conversion_history
                   GROUP BY category
                   ORDER BY conversions DESC, category"""
            ).fetchall()
            span = conn.execute(
                "SELECT MIN(timestamp) as first, MAX(timestamp) as last FROM conversion_history"
            ).fetchone()

        return {
            "conversions": total,
            "categories": {row["category"]: row["conversions"] for row in cat_rows},
            "first": span["first"],
            "last": span["last"],
        }
