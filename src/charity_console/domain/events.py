from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from charity_console.domain.campaigns import Campaign
from charity_console.domain.value_objects import EventFrequency, EventStatus, new_id


@dataclass
class DistributionEvent:
    """A scheduled handout, meeting or registration review.

    Campaigns linked to a delivery event supply the families expected to
    receive goods there.
    """

    title: str
    date: date
    id: str = field(default_factory=new_id)
    description: str = ""
    start_time: str = "09:00"
    end_time: str = "12:00"
    location: str = ""
    location_id: str | None = None
    frequency: EventFrequency = EventFrequency.ONCE
    is_free: bool = True
    entry_fee: Decimal | None = None
    is_delivery_event: bool = False
    is_registration_review: bool = False
    linked_campaign_ids: list[str] = field(default_factory=list)
    delivered_family_ids: list[str] = field(default_factory=list)
    status: EventStatus = EventStatus.SCHEDULED

    def can_link_campaign(self, campaign: Campaign) -> bool:
        """A campaign is linkable once it is active and finished collecting by the event date."""
        return campaign.is_active and campaign.end_date <= self.date

    def linkable_campaigns(self, campaigns: Iterable[Campaign]) -> list[Campaign]:
        # Already-linked campaigns stay listed so they can be unlinked.
        return [
            c
            for c in campaigns
            if c.id in self.linked_campaign_ids or self.can_link_campaign(c)
        ]

    def has_delivered(self, family_id: str) -> bool:
        return family_id in self.delivered_family_ids

    def mark_delivered(self, family_id: str) -> bool:
        if self.has_delivered(family_id):
            return False
        self.delivered_family_ids.append(family_id)
        return True

    def clone(self, today: date) -> "DistributionEvent":
        return replace(
            self,
            id=new_id(),
            date=today,
            status=EventStatus.SCHEDULED,
            linked_campaign_ids=list(self.linked_campaign_ids),
            delivered_family_ids=[],
        )
