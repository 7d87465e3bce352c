from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from screening.database.connection import get_connection
from screening.database.models import CaseDocumentRecord
from screening.processor.exceptions import CaseNotFoundError


class CaseRepository:
    """Persistence boundary for cases: their documents in, analysis results out."""

    def find_documents(self, case_id: int) -> list[CaseDocumentRecord]:
        """Documents attached to a case, in upload order.

        Raises:
            CaseNotFoundError: if the case does not exist.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute("SELECT id FROM cases WHERE id = %s", (case_id,))
                if cur.fetchone() is None:
                    raise CaseNotFoundError(f"Case {case_id} not found")
                cur.execute(
                    """
                    SELECT id, case_id, filename, stored_name, storage_disk, mime_type
                    FROM case_documents
                    WHERE case_id = %s
                    ORDER BY id
                    """,
                    (case_id,),
                )
                rows = cur.fetchall()
        return [
            CaseDocumentRecord(
                id=row["id"],
                case_id=row["case_id"],
                filename=row["filename"],
                stored_name=row["stored_name"],
                storage_disk=row["storage_disk"],
                mime_type=row["mime_type"],
            )
            for row in rows
        ]

    def save_analysis(self, case_id: int, payload: dict[str, Any], status: str) -> None:
        """Store the analysis bundle and the resulting case status.

        Raises:
            CaseNotFoundError: if the case does not exist.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE cases
                    SET analysis = %s, status = %s, flag_reason = NULL,
                        analyzed_at = NOW(), updated_at = NOW()
                    WHERE id = %s
                    """,
                    (Jsonb(payload), status, case_id),
                )
                if cur.rowcount == 0:
                    raise CaseNotFoundError(f"Case {case_id} not found")
            conn.commit()

    def mark_flagged(self, case_id: int, reason: str) -> None:
        """Set the case to flagged with a reason a reviewer can read."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE cases
                SET status = 'flagged', flag_reason = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (reason, case_id),
            )
            conn.commit()
