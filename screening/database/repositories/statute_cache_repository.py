from typing import Any

import psycopg
from psycopg.rows import dict_row

from screening.citations.models import Jurisdiction
from screening.database.connection import get_connection
from screening.statutes.cache import BaseStatuteCache
from screening.statutes.exceptions import StatuteCacheError
from screening.statutes.models import StatuteRecord, StatuteSource


class StatuteCacheRepository(BaseStatuteCache):
    """statute_cache table, one row per ``(jurisdiction, normalized_key)``."""

    def get(self, jurisdiction: Jurisdiction, normalized_key: str) -> StatuteRecord | None:
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT jurisdiction, normalized_key, source, title, text, url, fetched_at
                        FROM statute_cache
                        WHERE jurisdiction = %s AND normalized_key = %s
                        """,
                        (jurisdiction.value, normalized_key),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StatuteCacheError(f"Statute cache read failed: {exc}") from exc
        return None if row is None else self._to_record(row)

    def set(self, record: StatuteRecord) -> None:
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO statute_cache
                        (jurisdiction, normalized_key, source, title, text, url, fetched_at)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (jurisdiction, normalized_key) DO UPDATE
                    SET source = EXCLUDED.source, title = EXCLUDED.title,
                        text = EXCLUDED.text, url = EXCLUDED.url,
                        fetched_at = EXCLUDED.fetched_at
                    """,
                    (
                        record.jurisdiction.value,
                        record.normalized_key,
                        record.source.value,
                        record.title,
                        record.text,
                        record.url,
                        record.fetched_at,
                    ),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StatuteCacheError(f"Statute cache write failed: {exc}") from exc

    def delete(self, jurisdiction: Jurisdiction, normalized_key: str) -> None:
        try:
            with get_connection() as conn:
                conn.execute(
                    "DELETE FROM statute_cache WHERE jurisdiction = %s AND normalized_key = %s",
                    (jurisdiction.value, normalized_key),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StatuteCacheError(f"Statute cache delete failed: {exc}") from exc

    @staticmethod
    def _to_record(row: dict[str, Any]) -> StatuteRecord:
        return StatuteRecord(
            jurisdiction=Jurisdiction(row["jurisdiction"]),
            normalized_key=row["normalized_key"],
            title=row["title"],
            text=row["text"],
            url=row["url"],
            fetched_at=row["fetched_at"],
            source=StatuteSource(row["source"]),
        )
