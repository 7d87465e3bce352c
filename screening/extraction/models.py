from dataclasses import dataclass, field


@dataclass(frozen=True)
class CaseIdentity:
    case_number: str | None = None
    defendant_name: str | None = None
    booked_into_jail: bool | None = None


@dataclass(frozen=True)
class ChargeCandidate:
    code: str
    charge_name: str
    charge_class: str | None = None


@dataclass(frozen=True)
class PriorOffenseEntry:
    offense_tracking_number: str | None
    date_of_arrest: str | None
    charge_text: str


@dataclass(frozen=True)
class PriorIncident:
    incident_label: str
    charges: tuple[PriorOffenseEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PriorsSummary:
    incident_count: int
    charge_count: int
    incidents: tuple[PriorIncident, ...]

    def entries(self) -> list[PriorOffenseEntry]:
        return [entry for incident in self.incidents for entry in incident.charges]
