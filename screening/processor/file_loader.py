from pathlib import Path

from screening.database.models import CaseDocumentRecord
from screening.processor.exceptions import FileReadError, UnsupportedStorageDiskError
from screening.processor.models import RawDocument


def document_file_path(files_root: Path, case_id: int, stored_name: str) -> Path:
    """Build path to document file: {files_root}/{case_id}/{stored_name}"""
    return files_root / str(case_id) / stored_name


class FileLoader:
    """Resolves filesystem path for a case document and reads its bytes."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def load(self, document: CaseDocumentRecord) -> RawDocument:
        """Read document bytes from disk.

        Raises:
            UnsupportedStorageDiskError: if storage_disk is not 'local'.
            FileReadError: if the file is missing or unreadable.
        """
        if document.storage_disk != "local":
            raise UnsupportedStorageDiskError(
                f"storage_disk '{document.storage_disk}' is not supported"
            )
        path = document_file_path(self._files_root, document.case_id, document.stored_name)
        if not path.exists():
            raise FileReadError(f"File not found for document '{document.filename}': {path}")
        try:
            pdf_bytes = path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Failed to read document '{document.filename}': {exc}") from exc
        return RawDocument(document_id=document.id, filename=document.filename, pdf_bytes=pdf_bytes)
