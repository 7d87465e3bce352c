from dataclasses import dataclass, field


@dataclass(frozen=True)
class CaseFacts:
    """What a case summary is written from."""

    case_number: str | None
    defendant_name: str | None
    merged_text: str
    case_synopsis: str | None = None
    charges: tuple[tuple[str, str], ...] = field(default_factory=tuple)
