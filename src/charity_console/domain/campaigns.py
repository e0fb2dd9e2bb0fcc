"""Donation campaign domain model and item recomputation."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime

from charity_console.domain.packages import Package
from charity_console.domain.value_objects import CampaignType, ItemUnit, new_id
from charity_console.exceptions import InvalidDateRangeError, PastStartDateError


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class CampaignItem:
    name: str
    unit: ItemUnit = ItemUnit.UNIT
    target_quantity: float = 0
    collected_quantity: float = 0
    id: str = field(default_factory=new_id)

    @property
    def key(self) -> tuple[str, ItemUnit]:
        return (self.name, self.unit)

    @property
    def progress_percent(self) -> int:
        if self.target_quantity <= 0:
            return 0
        return round(self.collected_quantity / self.target_quantity * 100)


@dataclass
class Campaign:
    title: str
    start_date: date
    end_date: date
    id: str = field(default_factory=new_id)
    description: str = ""
    type: CampaignType = CampaignType.OTHER
    is_active: bool = True
    items: list[CampaignItem] = field(default_factory=list)
    package_ids: list[str] = field(default_factory=list)
    beneficiary_family_ids: list[str] = field(default_factory=list)
    bank_account_id: str | None = None
    created_at: datetime = field(default_factory=_utc_now)

    def is_expired(self, today: date) -> bool:
        return self.end_date < today

    @property
    def total_target(self) -> float:
        return sum(item.target_quantity for item in self.items)

    @property
    def total_collected(self) -> float:
        return sum(item.collected_quantity for item in self.items)

    def progress_percent(self) -> int:
        total = self.total_target
        if total <= 0:
            return 0
        return round(self.total_collected / total * 100)

    def validate_dates(self, today: date, *, is_new: bool) -> None:
        if self.end_date < self.start_date:
            raise InvalidDateRangeError(
                self.start_date.isoformat(), self.end_date.isoformat()
            )
        if is_new and self.start_date < today:
            raise PastStartDateError(self.start_date.isoformat(), today.isoformat())

    def remove_beneficiary(self, family_id: str) -> bool:
        if family_id not in self.beneficiary_family_ids:
            return False
        self.beneficiary_family_ids = [
            fid for fid in self.beneficiary_family_ids if fid != family_id
        ]
        return True

    def remove_package(self, package_id: str) -> bool:
        if package_id not in self.package_ids:
            return False
        self.package_ids = [pid for pid in self.package_ids if pid != package_id]
        return True


def recompute_campaign_items(
    existing_items: Sequence[CampaignItem],
    packages: Iterable[Package],
    package_ids: Sequence[str],
    family_ids: Sequence[str],
) -> list[CampaignItem]:
    """Rebuild campaign targets from the selected packages and families.

    Targets are ``quantity x family count`` summed per (name, unit) across
    packages. Items whose key survives keep their id and collected amount.
    With no package selected the existing (manual) list is returned as is;
    with packages but no families every target drops to zero.
    """
    if not package_ids:
        return [replace(item) for item in existing_items]

    family_count = len(set(family_ids))
    if family_count == 0:
        return [replace(item, target_quantity=0) for item in existing_items]

    catalog = {package.id: package for package in packages}
    totals: dict[tuple[str, ItemUnit], float] = {}
    for package_id in dict.fromkeys(package_ids):
        package = catalog.get(package_id)
        if package is None:
            continue
        for package_item in package.items:
            key = (package_item.name, package_item.unit)
            totals[key] = totals.get(key, 0) + package_item.quantity * family_count

    existing_by_key = {item.key: item for item in existing_items}
    items: list[CampaignItem] = []
    for (name, unit), target in totals.items():
        previous = existing_by_key.get((name, unit))
        if previous is not None:
            items.append(replace(previous, target_quantity=target))
        else:
            items.append(CampaignItem(name=name, unit=unit, target_quantity=target))
    return items
