"""Dashboard aggregates over families and campaigns."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from dateutil.relativedelta import relativedelta  # type: ignore[import-untyped]

from charity_console.domain.campaigns import Campaign
from charity_console.domain.families import Family
from charity_console.domain.organization import OrganizationSettings
from charity_console.services.campaigns import CampaignService
from charity_console.services.families import FamilyService
from charity_console.services.organization import SettingsService
from charity_console.session import OrganizationSession

UPCOMING_VISITS_LIMIT = 5


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class CampaignProgress:
    campaign_id: str
    title: str
    percent: int


@dataclass
class UpcomingVisit:
    family_id: str
    responsible_name: str
    due_date: datetime
    is_late: bool


@dataclass
class DashboardSummary:
    active_families: int = 0
    total_children: int = 0
    active_campaigns: int = 0
    campaign_progress: list[CampaignProgress] = field(default_factory=list)
    upcoming_visits: list[UpcomingVisit] = field(default_factory=list)


def build_dashboard(
    families: Sequence[Family],
    campaigns: Sequence[Campaign],
    settings: OrganizationSettings,
    now: datetime,
) -> DashboardSummary:
    """Compute dashboard statistics without touching the inputs.

    Next visits are due ``visit_interval_months`` after the family's latest
    Visit entry, or after registration when there is none. Only the five
    soonest (most overdue first) are returned.
    """
    active_families = [f for f in families if f.is_active]
    active_campaigns = [c for c in campaigns if c.is_active]

    visits = []
    for family in active_families:
        base = family.last_visit_date() or family.registration_date
        due = base + relativedelta(months=settings.visit_interval_months)
        visits.append(
            UpcomingVisit(
                family_id=family.id,
                responsible_name=family.responsible_name,
                due_date=due,
                is_late=due < now,
            )
        )
    visits.sort(key=lambda v: v.due_date)

    return DashboardSummary(
        active_families=len(active_families),
        total_children=sum(len(f.children) for f in families),
        active_campaigns=len(active_campaigns),
        campaign_progress=[
            CampaignProgress(
                campaign_id=c.id, title=c.title, percent=c.progress_percent()
            )
            for c in active_campaigns
        ],
        upcoming_visits=visits[:UPCOMING_VISITS_LIMIT],
    )


class DashboardService:
    """Builds the summary from the same lists the family and campaign screens see."""

    def __init__(
        self,
        family_service: FamilyService,
        campaign_service: CampaignService,
        settings_service: SettingsService,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._families = family_service
        self._campaigns = campaign_service
        self._settings = settings_service
        self._clock = clock

    def summary(self, session: OrganizationSession) -> DashboardSummary:
        return build_dashboard(
            self._families.list_families(session),
            self._campaigns.list_campaigns(session),
            self._settings.get_settings(session),
            self._clock(),
        )
