"""Tests for dashboard aggregates."""

from datetime import UTC, date, datetime, timedelta

from charity_console.container import Container
from charity_console.domain.campaigns import Campaign, CampaignItem
from charity_console.domain.families import Child, Family, HistoryEntry
from charity_console.domain.organization import OrganizationSettings
from charity_console.domain.value_objects import FamilyStatus, HistoryEntryType
from charity_console.services.dashboard import UPCOMING_VISITS_LIMIT, build_dashboard
from charity_console.session import OrganizationSession
from conftest import FixedClock

NOW = datetime(2025, 1, 2, 12, 0, tzinfo=UTC)


def _family(name: str, registered: datetime, **kwargs) -> Family:
    return Family(responsible_name=name, registration_date=registered, **kwargs)


class TestBuildDashboard:
    def test_counts(self) -> None:
        families = [
            _family("Ana", NOW, children=[Child(name="a"), Child(name="b")]),
            _family(
                "Bia",
                NOW,
                status=FamilyStatus.SUSPENDED,
                children=[Child(name="c")],
            ),
        ]
        campaigns = [
            Campaign(title="Janeiro", start_date=date(2025, 1, 2), end_date=date(2025, 1, 31)),
            Campaign(
                title="Natal",
                start_date=date(2024, 12, 1),
                end_date=date(2024, 12, 24),
                is_active=False,
            ),
        ]

        summary = build_dashboard(families, campaigns, OrganizationSettings(), NOW)

        assert summary.active_families == 1
        assert summary.total_children == 3
        assert summary.active_campaigns == 1
        assert [p.title for p in summary.campaign_progress] == ["Janeiro"]

    def test_campaign_progress_percent(self) -> None:
        campaign = Campaign(
            title="Janeiro",
            start_date=date(2025, 1, 2),
            end_date=date(2025, 1, 31),
            items=[
                CampaignItem(name="Arroz", target_quantity=30, collected_quantity=10),
                CampaignItem(name="Feijão", target_quantity=10, collected_quantity=0),
            ],
        )

        summary = build_dashboard([], [campaign], OrganizationSettings(), NOW)

        assert summary.campaign_progress[0].percent == 25

    def test_visits_due_from_last_visit(self) -> None:
        family = _family(
            "Ana",
            datetime(2024, 1, 1, tzinfo=UTC),
            history=[
                HistoryEntry(
                    type=HistoryEntryType.VISIT,
                    description="Visita",
                    date=datetime(2024, 12, 1, tzinfo=UTC),
                )
            ],
        )

        summary = build_dashboard(
            [family], [], OrganizationSettings(visit_interval_months=3), NOW
        )

        visit = summary.upcoming_visits[0]
        assert visit.due_date == datetime(2025, 3, 1, tzinfo=UTC)
        assert visit.is_late is False

    def test_visits_sorted_and_limited(self) -> None:
        families = [
            _family(f"Família {i}", NOW - timedelta(days=30 * i)) for i in range(7)
        ]

        summary = build_dashboard(families, [], OrganizationSettings(), NOW)

        visits = summary.upcoming_visits
        assert len(visits) == UPCOMING_VISITS_LIMIT
        assert visits[0].responsible_name == "Família 6"
        assert visits[0].is_late is True
        assert [v.due_date for v in visits] == sorted(v.due_date for v in visits)

    def test_inactive_families_have_no_visits(self) -> None:
        family = _family("Ana", NOW, status=FamilyStatus.INACTIVE)
        summary = build_dashboard([family], [], OrganizationSettings(), NOW)
        assert summary.upcoming_visits == []


class TestDashboardService:
    def test_summary_reflects_expiration_sweep(
        self,
        container: Container,
        session: OrganizationSession,
        sample_family: Family,
        clock: FixedClock,
    ) -> None:
        fresh = _family("Joana", clock.now)
        container.families.save(session, sample_family)
        container.families.save(session, fresh)

        summary = container.dashboard_service.summary(session)

        assert summary.active_families == 1
        assert summary.total_children == 2
        assert [v.family_id for v in summary.upcoming_visits] == [fresh.id]
