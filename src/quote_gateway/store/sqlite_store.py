"""SQLite-backed append-only store for normalized offers."""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from quote_gateway.errors import StoreError
from quote_gateway.models.offer import NormalizedOffer

logger = logging.getLogger(__name__)


class QuoteStore:
    """
    SQLite store for normalized offers.
    Rows are never updated; the autoincrement id is the recency order.
    """

    def __init__(self, db_path: str | Path = "quote_gateway.db", *, timeout: float = 5.0):
        self._db_path = Path(db_path)
        self._timeout = timeout
        self._ensure_schema()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        try:
            with self._connection() as conn:
                conn.executescript(schema_path.read_text())
        except sqlite3.Error as e:
            raise StoreError(f"Could not initialize quote store at {self._db_path}: {e}") from e

    def _row_to_offer(self, row: sqlite3.Row) -> NormalizedOffer:
        return NormalizedOffer(
            carrier=row["carrier"],
            service=row["service"],
            deadline_days=row["deadline"],
            price=row["price"],
        )

    def insert_all(self, offers: Iterable[NormalizedOffer]) -> int:
        """
        Append each offer as one row. Returns the number inserted.
        On failure, rows already inserted stay committed and StoreError
        reports how many succeeded.
        """
        now = datetime.now(timezone.utc).isoformat()
        inserted = 0
        try:
            conn = self._connection()
        except sqlite3.Error as e:
            raise StoreError(f"Quote store unavailable: {e}", inserted=0) from e
        try:
            for offer in offers:
                try:
                    conn.execute(
                        "INSERT INTO quotes (carrier, service, deadline, price, created_at) VALUES (?, ?, ?, ?, ?)",
                        (offer.carrier, offer.service, offer.deadline_days, offer.price, now),
                    )
                    conn.commit()
                except sqlite3.Error as e:
                    logger.error("Quote insert failed after %d rows: %s", inserted, e)
                    raise StoreError(
                        f"Insert failed after {inserted} offers were stored: {e}",
                        inserted=inserted,
                    ) from e
                inserted += 1
        finally:
            conn.close()
        return inserted

    def read_all(self, limit: Optional[int] = None) -> list[NormalizedOffer]:
        """
        Return offers oldest-first. With a positive limit, only the `limit`
        most recently inserted offers (still oldest-first).
        """
        if limit is not None and limit > 0:
            query = "SELECT * FROM (SELECT * FROM quotes ORDER BY id DESC LIMIT ?) ORDER BY id ASC"
            params: tuple = (limit,)
        else:
            query = "SELECT * FROM quotes ORDER BY id ASC"
            params = ()
        try:
            with self._connection() as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Could not read quotes: {e}") from e
        return [self._row_to_offer(r) for r in rows]

    def count(self) -> int:
        """Return number of stored offers."""
        try:
            with self._connection() as conn:
                row = conn.execute("SELECT COUNT(*) AS n FROM quotes").fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Could not count quotes: {e}") from e
        return int(row["n"])
