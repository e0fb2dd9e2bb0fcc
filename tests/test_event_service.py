"""Tests for EventService: campaign links, deliveries and cloning."""

from datetime import UTC, date, datetime

import pytest

from charity_console.config import Settings
from charity_console.container import Container
from charity_console.domain.campaigns import Campaign
from charity_console.domain.events import DistributionEvent
from charity_console.domain.families import Family
from charity_console.domain.value_objects import (
    EventStatus,
    FamilyStatus,
    HistoryEntryType,
)
from charity_console.exceptions import CampaignLinkError, DocumentStoreError
from charity_console.repositories.interfaces import Record
from charity_console.repositories.memory import InMemoryDocumentStore
from charity_console.session import OrganizationSession
from conftest import FixedClock


class FlakyDocumentStore(InMemoryDocumentStore):
    """Fails writes to one collection on demand."""

    def __init__(self) -> None:
        super().__init__()
        self.failing_collection: str | None = None

    def put(self, namespace: str, collection: str, doc_id: str, record: Record) -> None:
        if collection == self.failing_collection:
            raise DocumentStoreError("put", collection, "write rejected")
        super().put(namespace, collection, doc_id, record)


@pytest.fixture
def event() -> DistributionEvent:
    return DistributionEvent(
        title="Entrega de Cestas",
        date=date(2025, 2, 10),
        is_delivery_event=True,
    )


@pytest.fixture
def linked_setup(
    container: Container,
    session: OrganizationSession,
    event: DistributionEvent,
    sample_campaign: Campaign,
    sample_family: Family,
) -> DistributionEvent:
    # Registered inside the 12-month window as of the fixed clock.
    sample_family.registration_date = datetime(2024, 6, 1, tzinfo=UTC)
    sample_campaign.beneficiary_family_ids = [sample_family.id]
    container.families.save(session, sample_family)
    container.campaigns.save(session, sample_campaign)
    event.linked_campaign_ids = [sample_campaign.id]
    container.events.save(session, event)
    return event


class TestEventCrud:
    def test_list_sorted_by_date(
        self, container: Container, session: OrganizationSession
    ) -> None:
        later = DistributionEvent(title="Bazar", date=date(2025, 3, 1))
        earlier = DistributionEvent(title="Reunião", date=date(2025, 2, 1))
        container.event_service.create_event(session, later)
        container.event_service.create_event(session, earlier)

        titles = [e.title for e in container.event_service.list_events(session)]

        assert titles == ["Reunião", "Bazar"]

    def test_create_links_eligible_campaign(
        self,
        container: Container,
        session: OrganizationSession,
        event: DistributionEvent,
        sample_campaign: Campaign,
    ) -> None:
        container.campaigns.save(session, sample_campaign)
        event.linked_campaign_ids = [sample_campaign.id]

        created = container.event_service.create_event(session, event)

        assert created.linked_campaign_ids == [sample_campaign.id]

    def test_create_rejects_campaign_ending_after_event(
        self,
        container: Container,
        session: OrganizationSession,
        event: DistributionEvent,
        sample_campaign: Campaign,
    ) -> None:
        sample_campaign.end_date = date(2025, 2, 28)
        container.campaigns.save(session, sample_campaign)
        event.linked_campaign_ids = [sample_campaign.id]

        with pytest.raises(CampaignLinkError):
            container.event_service.create_event(session, event)
        assert container.events.list_all(session) == []

    def test_create_rejects_campaign_past_its_end_date(
        self,
        container: Container,
        session: OrganizationSession,
    ) -> None:
        stale = Campaign(
            title="Natal",
            start_date=date(2024, 12, 1),
            end_date=date(2024, 12, 20),
            is_active=True,
        )
        container.campaigns.save(session, stale)
        event = DistributionEvent(
            title="Entrega", date=date(2025, 1, 10), linked_campaign_ids=[stale.id]
        )

        with pytest.raises(CampaignLinkError):
            container.event_service.create_event(session, event)

        assert container.events.list_all(session) == []
        stored = container.campaigns.get(session, stale.id)
        assert stored is not None
        assert stored.is_active is False

    def test_linkable_campaigns_skip_campaigns_past_end_date(
        self,
        container: Container,
        session: OrganizationSession,
    ) -> None:
        stale = Campaign(
            title="Natal",
            start_date=date(2024, 12, 1),
            end_date=date(2024, 12, 20),
            is_active=True,
        )
        container.campaigns.save(session, stale)
        event = DistributionEvent(title="Entrega", date=date(2025, 1, 10))
        container.events.save(session, event)

        assert container.event_service.linkable_campaigns(session, event.id) == []

    def test_create_rejects_unknown_campaign(
        self,
        container: Container,
        session: OrganizationSession,
        event: DistributionEvent,
    ) -> None:
        event.linked_campaign_ids = ["camp-404"]
        with pytest.raises(CampaignLinkError):
            container.event_service.create_event(session, event)

    def test_update_keeps_existing_links(
        self,
        container: Container,
        session: OrganizationSession,
        linked_setup: DistributionEvent,
        sample_campaign: Campaign,
    ) -> None:
        sample_campaign.is_active = False
        container.campaigns.save(session, sample_campaign)
        linked_setup.title = "Entrega de Fevereiro"

        updated = container.event_service.update_event(session, linked_setup)

        assert updated.linked_campaign_ids == [sample_campaign.id]

    def test_linkable_campaigns(
        self,
        container: Container,
        session: OrganizationSession,
        event: DistributionEvent,
        sample_campaign: Campaign,
    ) -> None:
        late = Campaign(
            title="Natal",
            start_date=date(2025, 1, 2),
            end_date=date(2025, 12, 20),
        )
        container.campaigns.save(session, sample_campaign)
        container.campaigns.save(session, late)
        container.events.save(session, event)

        linkable = container.event_service.linkable_campaigns(session, event.id)

        assert [c.id for c in linkable] == [sample_campaign.id]

    def test_clone_event(
        self,
        container: Container,
        session: OrganizationSession,
        linked_setup: DistributionEvent,
        clock: FixedClock,
    ) -> None:
        linked_setup.status = EventStatus.DONE
        linked_setup.delivered_family_ids = ["x"]
        container.events.save(session, linked_setup)

        clone = container.event_service.clone_event(session, linked_setup.id)

        assert clone.id != linked_setup.id
        assert clone.date == clock.now.date()
        assert clone.status == EventStatus.SCHEDULED
        assert clone.delivered_family_ids == []
        assert len(container.events.list_all(session)) == 2


class TestDeliveries:
    def test_delivery_candidates(
        self,
        container: Container,
        session: OrganizationSession,
        linked_setup: DistributionEvent,
        sample_family: Family,
        sample_campaign: Campaign,
    ) -> None:
        candidates = container.event_service.delivery_candidates(
            session, linked_setup.id
        )

        assert len(candidates) == 1
        assert candidates[0].family.id == sample_family.id
        assert candidates[0].campaign.id == sample_campaign.id
        assert candidates[0].delivered is False

    def test_delivery_candidates_skip_expired_families(
        self,
        container: Container,
        session: OrganizationSession,
        linked_setup: DistributionEvent,
        sample_family: Family,
        sample_campaign: Campaign,
    ) -> None:
        lapsed = Family(
            responsible_name="Joana Souza",
            registration_date=datetime(2023, 1, 1, tzinfo=UTC),
        )
        container.families.save(session, lapsed)
        sample_campaign.beneficiary_family_ids = [sample_family.id, lapsed.id]
        container.campaigns.save(session, sample_campaign)

        candidates = container.event_service.delivery_candidates(
            session, linked_setup.id
        )

        assert [c.family.id for c in candidates] == [sample_family.id]
        stored = container.families.get(session, lapsed.id)
        assert stored is not None
        assert stored.status == FamilyStatus.SUSPENDED

    def test_confirm_delivery_updates_event_and_family(
        self,
        container: Container,
        session: OrganizationSession,
        linked_setup: DistributionEvent,
        sample_family: Family,
        sample_campaign: Campaign,
    ) -> None:
        result = container.event_service.confirm_delivery(
            session,
            linked_setup.id,
            sample_family.id,
            sample_campaign.id,
            author="ana",
        )

        assert result.newly_delivered
        event = container.events.get(session, linked_setup.id)
        family = container.families.get(session, sample_family.id)
        assert event is not None and family is not None
        assert event.delivered_family_ids == [sample_family.id]
        assert family.history[0].type == HistoryEntryType.DELIVERY
        assert sample_campaign.title in family.history[0].description
        assert family.last_review_date is None

    def test_confirm_delivery_twice_records_family_once(
        self,
        container: Container,
        session: OrganizationSession,
        linked_setup: DistributionEvent,
        sample_family: Family,
        sample_campaign: Campaign,
    ) -> None:
        for _ in range(2):
            container.event_service.confirm_delivery(
                session,
                linked_setup.id,
                sample_family.id,
                sample_campaign.id,
                author="ana",
            )

        event = container.events.get(session, linked_setup.id)
        assert event is not None
        assert event.delivered_family_ids == [sample_family.id]

    def test_review_event_reactivates_family(
        self,
        container: Container,
        session: OrganizationSession,
        linked_setup: DistributionEvent,
        sample_family: Family,
        sample_campaign: Campaign,
        clock: FixedClock,
    ) -> None:
        linked_setup.is_registration_review = True
        container.events.save(session, linked_setup)
        sample_family.status = FamilyStatus.SUSPENDED
        container.families.save(session, sample_family)

        result = container.event_service.confirm_delivery(
            session,
            linked_setup.id,
            sample_family.id,
            sample_campaign.id,
            author="ana",
        )

        family = result.family
        assert family.status == FamilyStatus.ACTIVE
        assert family.last_review_date == clock.now
        assert [e.type for e in family.history[:2]] == [
            HistoryEntryType.REACTIVATION,
            HistoryEntryType.DELIVERY,
        ]

    def test_review_event_for_active_family_only_renews(
        self,
        container: Container,
        session: OrganizationSession,
        linked_setup: DistributionEvent,
        sample_family: Family,
        sample_campaign: Campaign,
        clock: FixedClock,
    ) -> None:
        linked_setup.is_registration_review = True
        container.events.save(session, linked_setup)

        family = container.event_service.confirm_delivery(
            session,
            linked_setup.id,
            sample_family.id,
            sample_campaign.id,
            author="ana",
        ).family

        assert family.last_review_date == clock.now
        assert [e.type for e in family.history] == [HistoryEntryType.DELIVERY]


class TestDeliveryCompensation:
    def test_event_is_restored_when_family_write_fails(
        self,
        test_settings: Settings,
        clock: FixedClock,
        session: OrganizationSession,
        event: DistributionEvent,
        sample_campaign: Campaign,
        sample_family: Family,
    ) -> None:
        store = FlakyDocumentStore()
        container = Container(settings=test_settings, store=store, clock=clock)
        sample_campaign.beneficiary_family_ids = [sample_family.id]
        container.families.save(session, sample_family)
        container.campaigns.save(session, sample_campaign)
        event.linked_campaign_ids = [sample_campaign.id]
        container.events.save(session, event)
        store.failing_collection = "families"

        with pytest.raises(DocumentStoreError):
            container.event_service.confirm_delivery(
                session, event.id, sample_family.id, sample_campaign.id, author="ana"
            )

        stored_event = container.events.get(session, event.id)
        stored_family = container.families.get(session, sample_family.id)
        assert stored_event is not None and stored_family is not None
        assert stored_event.delivered_family_ids == []
        assert stored_family.history == []
