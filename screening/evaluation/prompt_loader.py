from pathlib import Path

from screening.evaluation.exceptions import EvaluationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the element evaluation prompt template.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled element_prompt.txt.

    Raises:
        EvaluationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "element_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EvaluationError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the response JSON schema; defaults to the bundled element_schema.json.

    Raises:
        EvaluationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "element_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EvaluationError(f"Failed to load JSON schema: {exc}") from exc
