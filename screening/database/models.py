from dataclasses import dataclass
from datetime import datetime


@dataclass
class JobRecord:
    """A row of the case_jobs table."""

    id: int
    case_id: int
    status: str
    attempts: int
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CaseDocumentRecord:
    """A row of the case_documents table."""

    id: int
    case_id: int
    filename: str
    stored_name: str
    storage_disk: str
    mime_type: str
