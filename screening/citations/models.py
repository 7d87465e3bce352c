from dataclasses import dataclass
from enum import Enum


class Jurisdiction(str, Enum):
    UTAH = "UT"
    WEST_VALLEY_CITY = "WVC"


@dataclass(frozen=True)
class Citation:
    raw: str
    normalized_key: str
    jurisdiction: Jurisdiction

    @property
    def cache_key(self) -> tuple[str, str]:
        return self.jurisdiction.value, self.normalized_key
