"""Family registry domain model.

A family stays Active while its registration is within the organization's
validity window. Every status transition leaves a history entry, and the
history is kept newest first.
"""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from dateutil.relativedelta import relativedelta  # type: ignore[import-untyped]

from charity_console.domain.value_objects import (
    FamilyStatus,
    Gender,
    HistoryEntryType,
    new_id,
)

SYSTEM_AUTHOR = "System"

STATUS_HISTORY_TYPES: dict[FamilyStatus, HistoryEntryType] = {
    FamilyStatus.ACTIVE: HistoryEntryType.REACTIVATION,
    FamilyStatus.SUSPENDED: HistoryEntryType.SUSPENSION,
    FamilyStatus.INACTIVE: HistoryEntryType.UPDATE,
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Child:
    name: str
    age: int = 0
    gender: Gender = Gender.MALE
    clothing_size: str = ""
    shoe_size: int | None = None
    notes: str = ""
    id: str = field(default_factory=new_id)


@dataclass
class HistoryEntry:
    type: HistoryEntryType
    description: str
    date: datetime = field(default_factory=_utc_now)
    author: str = ""
    id: str = field(default_factory=new_id)


@dataclass
class Family:
    responsible_name: str
    id: str = field(default_factory=new_id)
    cpf: str = ""
    nis: str = ""
    address: str = ""
    postal_code: str = ""
    phone: str = ""
    number_of_adults: int = 1
    status: FamilyStatus = FamilyStatus.ACTIVE
    registration_date: datetime = field(default_factory=_utc_now)
    last_review_date: datetime | None = None
    history: list[HistoryEntry] = field(default_factory=list)
    children: list[Child] = field(default_factory=list)
    is_pregnant: bool = False
    pregnancy_due_date: date | None = None
    notes: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == FamilyStatus.ACTIVE

    @property
    def review_base_date(self) -> datetime:
        """Date the validity window is counted from."""
        return self.last_review_date or self.registration_date

    def expiration_date(self, validity_months: int) -> datetime:
        return self.review_base_date + relativedelta(months=validity_months)

    def is_expired(self, now: datetime, validity_months: int) -> bool:
        return now > self.expiration_date(validity_months)

    def last_visit_date(self) -> datetime | None:
        visits = [e.date for e in self.history if e.type == HistoryEntryType.VISIT]
        return max(visits) if visits else None

    def record_history(
        self,
        entry_type: HistoryEntryType,
        description: str,
        *,
        author: str,
        when: datetime | None = None,
    ) -> HistoryEntry:
        entry = HistoryEntry(
            type=entry_type,
            description=description,
            date=when or _utc_now(),
            author=author,
        )
        self.history.insert(0, entry)
        return entry

    def change_status(
        self,
        status: FamilyStatus,
        description: str,
        *,
        author: str,
        when: datetime | None = None,
    ) -> HistoryEntry | None:
        """Move to a new status, logging the transition.

        Returns None when the family is already in that status.
        """
        if status == self.status:
            return None
        self.status = status
        return self.record_history(
            STATUS_HISTORY_TYPES[status], description, author=author, when=when
        )

    def renew(self, now: datetime, *, author: str) -> HistoryEntry:
        """Restart the validity window and reactivate if needed."""
        previous = self.status
        self.last_review_date = now
        self.status = FamilyStatus.ACTIVE
        description = "Cadastro renovado"
        if previous != FamilyStatus.ACTIVE:
            description += f" (status anterior: {previous.value})"
        return self.record_history(
            HistoryEntryType.REACTIVATION, description, author=author, when=now
        )


__all__ = [
    "Child",
    "Family",
    "HistoryEntry",
    "STATUS_HISTORY_TYPES",
    "SYSTEM_AUTHOR",
]
