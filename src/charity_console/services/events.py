"""Distribution event service: scheduling, campaign links and deliveries."""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from charity_console.domain.campaigns import Campaign
from charity_console.domain.documents import sanitize_text
from charity_console.domain.events import DistributionEvent
from charity_console.domain.families import Family
from charity_console.domain.value_objects import FamilyStatus, HistoryEntryType
from charity_console.exceptions import CampaignLinkError, CharityConsoleError
from charity_console.logging_config import get_logger
from charity_console.repositories.entities import (
    CampaignRepository,
    EventRepository,
    FamilyRepository,
)
from charity_console.services.campaigns import CampaignService
from charity_console.services.families import FamilyService
from charity_console.session import OrganizationSession

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class DeliveryCandidate:
    """A family expected at an event through one of its linked campaigns."""

    family: Family
    campaign: Campaign
    delivered: bool


@dataclass
class DeliveryConfirmation:
    event: DistributionEvent
    family: Family
    newly_delivered: bool


class EventService:
    """Schedules events and records deliveries.

    Campaign and family lists are read through their services so that the
    fetch-time rules (campaign auto-deactivation, registration expiry) have
    already been applied when links are checked and candidates are built.
    """

    def __init__(
        self,
        events: EventRepository,
        campaigns: CampaignRepository,
        families: FamilyRepository,
        campaign_service: CampaignService,
        family_service: FamilyService,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._events = events
        self._campaigns = campaigns
        self._families = families
        self._campaign_service = campaign_service
        self._family_service = family_service
        self._clock = clock

    def list_events(self, session: OrganizationSession) -> list[DistributionEvent]:
        return sorted(
            self._events.list_all(session), key=lambda e: (e.date, e.start_time)
        )

    def get_event(self, session: OrganizationSession, event_id: str) -> DistributionEvent:
        return self._events.require(session, event_id)

    def create_event(
        self, session: OrganizationSession, event: DistributionEvent
    ) -> DistributionEvent:
        self._check_new_links(session, event, already_linked=set())
        self._clean(event)
        self._events.save(session, event)
        logger.info("event_created", event_id=event.id, date=event.date.isoformat())
        return event

    def update_event(
        self, session: OrganizationSession, event: DistributionEvent
    ) -> DistributionEvent:
        stored = self._events.require(session, event.id)
        self._check_new_links(
            session, event, already_linked=set(stored.linked_campaign_ids)
        )
        self._clean(event)
        self._events.save(session, event)
        return event

    def delete_event(self, session: OrganizationSession, event_id: str) -> None:
        self._events.require(session, event_id)
        self._events.delete(session, event_id)
        logger.info("event_deleted", event_id=event_id)

    def linkable_campaigns(
        self, session: OrganizationSession, event: DistributionEvent | str
    ) -> list[Campaign]:
        """Campaigns that may be shown on the event's link picker."""
        if isinstance(event, str):
            event = self._events.require(session, event)
        campaigns = self._campaign_service.list_campaigns(session)
        return event.linkable_campaigns(campaigns)

    def delivery_candidates(
        self, session: OrganizationSession, event_id: str
    ) -> list[DeliveryCandidate]:
        event = self._events.require(session, event_id)
        # Families first: the expiry sweep drops suspended ones from campaigns.
        families = {f.id: f for f in self._family_service.list_families(session)}
        campaigns = {c.id: c for c in self._campaign_service.list_campaigns(session)}

        candidates: list[DeliveryCandidate] = []
        for campaign_id in event.linked_campaign_ids:
            campaign = campaigns.get(campaign_id)
            if campaign is None:
                continue
            for family_id in dict.fromkeys(campaign.beneficiary_family_ids):
                family = families.get(family_id)
                if family is None:
                    continue
                candidates.append(
                    DeliveryCandidate(
                        family=family,
                        campaign=campaign,
                        delivered=event.has_delivered(family_id),
                    )
                )
        return candidates

    def confirm_delivery(
        self,
        session: OrganizationSession,
        event_id: str,
        family_id: str,
        campaign_id: str,
        *,
        author: str,
    ) -> DeliveryConfirmation:
        """Record that a family received goods at an event.

        The event is written first. If the family write then fails, the
        event record is put back as it was and the error is re-raised.
        """
        event = self._events.require(session, event_id)
        family = self._families.require(session, family_id)
        campaign = self._campaigns.get(session, campaign_id)
        campaign_title = campaign.title if campaign is not None else campaign_id
        now = self._clock()

        previous_event = copy.deepcopy(event)
        newly_delivered = event.mark_delivered(family_id)
        if newly_delivered:
            self._events.save(session, event)

        family.record_history(
            HistoryEntryType.DELIVERY,
            f"Entrega realizada no evento '{event.title}' "
            f"(campanha '{campaign_title}')",
            author=author,
            when=now,
        )
        if event.is_registration_review:
            family.last_review_date = now
            if family.status != FamilyStatus.ACTIVE:
                family.change_status(
                    FamilyStatus.ACTIVE,
                    f"Cadastro revisado no evento '{event.title}'",
                    author=author,
                    when=now,
                )

        try:
            self._families.save(session, family)
        except CharityConsoleError:
            if newly_delivered:
                logger.error(
                    "delivery_family_write_failed",
                    event_id=event.id,
                    family_id=family_id,
                )
                self._events.save(session, previous_event)
            raise

        logger.info(
            "delivery_confirmed",
            event_id=event.id,
            family_id=family_id,
            campaign_id=campaign_id,
            newly_delivered=newly_delivered,
            review=event.is_registration_review,
        )
        return DeliveryConfirmation(
            event=event, family=family, newly_delivered=newly_delivered
        )

    def clone_event(self, session: OrganizationSession, event_id: str) -> DistributionEvent:
        """Duplicate an event as a new Scheduled event dated today."""
        event = self._events.require(session, event_id)
        clone = event.clone(self._clock().date())
        self._events.save(session, clone)
        logger.info("event_cloned", event_id=event.id, clone_id=clone.id)
        return clone

    def _check_new_links(
        self,
        session: OrganizationSession,
        event: DistributionEvent,
        already_linked: set[str],
    ) -> None:
        new_links = [c for c in event.linked_campaign_ids if c not in already_linked]
        if not new_links:
            return
        campaigns = {c.id: c for c in self._campaign_service.list_campaigns(session)}
        for campaign_id in new_links:
            campaign = campaigns.get(campaign_id)
            if campaign is None:
                raise CampaignLinkError(campaign_id, event.id, "campaign not found")
            if not event.can_link_campaign(campaign):
                raise CampaignLinkError(
                    campaign_id,
                    event.id,
                    "campaign must be active and end on or before the event date",
                )

    @staticmethod
    def _clean(event: DistributionEvent) -> None:
        event.title = sanitize_text(event.title)
        event.description = sanitize_text(event.description)
        event.linked_campaign_ids = list(dict.fromkeys(event.linked_campaign_ids))
        if event.is_free:
            event.entry_fee = None
