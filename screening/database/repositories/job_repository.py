from typing import Any

import psycopg
from psycopg.rows import dict_row

from screening.database.connection import get_connection
from screening.database.models import JobRecord


class JobRepository:
    """Claims and updates rows of the case_jobs queue."""

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> JobRecord | None:
        """Lock the oldest pending job (SKIP LOCKED) and move it to processing."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, case_id, attempts
                FROM case_jobs
                WHERE status = 'pending' AND attempts < %s
                ORDER BY created_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (self._max_attempts,),
            )
            row = cur.fetchone()
            if row is None:
                conn.commit()
                return None
            cur.execute(
                """
                UPDATE case_jobs
                SET status = 'processing', locked_at = NOW(), updated_at = NOW()
                WHERE id = %s
                """,
                (row["id"],),
            )
        conn.commit()
        return JobRecord(
            id=row["id"],
            case_id=row["case_id"],
            status="processing",
            attempts=row["attempts"],
        )

    def mark_done(self, job_id: int) -> None:
        self._set_status(job_id, "done")

    def mark_failed(self, job_id: int, error: str) -> None:
        self._set_status(job_id, "failed", error)

    def release_for_retry(self, job_id: int, error: str) -> None:
        """Count the failed attempt and put the job back in the queue."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE case_jobs
                SET attempts = attempts + 1, status = 'pending', error_message = %s,
                    locked_at = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (error, job_id),
            )
            conn.commit()

    def _set_status(self, job_id: int, status: str, error: str | None = None) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE case_jobs
                SET status = %s, error_message = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (status, error, job_id),
            )
            conn.commit()
