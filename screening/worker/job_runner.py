import psycopg

from screening.config.settings import Settings
from screening.database.models import JobRecord
from screening.database.repositories.case_repository import CaseRepository
from screening.database.repositories.job_repository import JobRepository
from screening.logging.logger import Log
from screening.processor.exceptions import ProcessorError
from screening.processor.processor import CaseProcessor

UNEXPECTED_FAILURE_REASON = "Automatic analysis failed; please review this case manually."


def flag_reason(exc: Exception) -> str:
    """Reviewer-facing reason for a failed analysis; never a stack trace."""
    if isinstance(exc, ProcessorError) and str(exc):
        return f"Automatic analysis failed: {exc}"
    return UNEXPECTED_FAILURE_REASON


class JobRunner:
    """Run one job, catch exceptions, and apply retry logic."""

    def __init__(
        self,
        processor: CaseProcessor,
        job_repo: JobRepository,
        case_repo: CaseRepository,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._job_repo = job_repo
        self._case_repo = case_repo
        self._settings = settings

    def run(self, job: JobRecord) -> None:
        """Execute a single job with error handling."""
        Log.info(f"Running job {job.id} for case {job.case_id} (attempt {job.attempts + 1})")
        try:
            self._processor.process(job.case_id, job.id)
            self._job_repo.mark_done(job.id)
            Log.info(f"Job {job.id} completed successfully")
        except Exception as exc:
            self._handle_failure(job, exc)

    def _handle_failure(self, job: JobRecord, exc: Exception) -> None:
        """Back to pending while attempts remain; otherwise fail the job and flag the case."""
        Log.error(f"Job {job.id} failed: {exc!r}")
        if job.attempts + 1 < self._settings.max_job_attempts:
            self._job_repo.release_for_retry(job.id, str(exc))
            Log.warning(f"Job {job.id} will be retried (attempt {job.attempts + 1})")
            return

        self._job_repo.mark_failed(job.id, str(exc))
        Log.error(f"Job {job.id} permanently failed after {job.attempts + 1} attempts")
        try:
            self._case_repo.mark_flagged(job.case_id, flag_reason(exc))
        except psycopg.Error as db_exc:
            Log.error(f"Failed to flag case {job.case_id}: {db_exc}")
