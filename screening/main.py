from screening.config.settings import Settings
from screening.database.connection import close_pool, init_pool
from screening.database.repositories.case_repository import CaseRepository
from screening.database.repositories.job_repository import JobRepository
from screening.logging.logger import Log
from screening.ocr.factory import resolve_ocr_provider
from screening.processor.processor import build_processor
from screening.statutes.factory import StatuteResolverFactory
from screening.worker.job_runner import JobRunner
from screening.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    ocr_provider = resolve_ocr_provider(settings)
    Log.info(f"OCR provider: {ocr_provider.kind.value}")
    resolver = StatuteResolverFactory.create(settings)
    try:
        processor = build_processor(settings, ocr_provider, resolver)
        job_repo = JobRepository(settings.max_job_attempts)
        job_runner = JobRunner(processor, job_repo, CaseRepository(), settings)
        worker = Worker(job_repo, job_runner, settings)
        worker.run()
    finally:
        resolver.close()
        close_pool()


if __name__ == "__main__":
    main()
