from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from screening.citations.models import Jurisdiction


class FailureReason(str, Enum):
    NOT_FOUND = "not_found"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    RATE_LIMITED = "rate_limited"
    UNSUPPORTED = "unsupported"


class StatuteSource(str, Enum):
    UTAH_LEGISLATURE = "utah_legislature"
    WEST_VALLEY_CITY = "west_valley_city_municipal_codes"


@dataclass(frozen=True)
class StatuteRecord:
    """Validated statute text, cached by ``(jurisdiction, normalized_key)``."""

    jurisdiction: Jurisdiction
    normalized_key: str
    title: str | None
    text: str
    url: str
    fetched_at: datetime
    source: StatuteSource

    @property
    def cache_key(self) -> tuple[str, str]:
        return self.jurisdiction.value, self.normalized_key


@dataclass(frozen=True)
class StatuteFailure:
    jurisdiction: Jurisdiction
    normalized_key: str
    reason: FailureReason
    details: str
    url_tried: str | None = None


StatuteResult = StatuteRecord | StatuteFailure


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: str | None = None
