"""Campaign service: CRUD, activity window and item recomputation."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from datetime import UTC, datetime

from charity_console.domain.campaigns import Campaign, recompute_campaign_items
from charity_console.domain.documents import sanitize_text
from charity_console.domain.packages import Package
from charity_console.logging_config import get_logger
from charity_console.repositories.entities import CampaignRepository, PackageRepository
from charity_console.session import OrganizationSession

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CampaignService:
    def __init__(
        self,
        campaigns: CampaignRepository,
        packages: PackageRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._campaigns = campaigns
        self._packages = packages
        self._clock = clock

    def list_campaigns(self, session: OrganizationSession) -> list[Campaign]:
        """List campaigns, deactivating those whose end date has passed."""
        campaigns = self._campaigns.list_all(session)
        today = self._clock().date()
        for campaign in campaigns:
            if campaign.is_active and campaign.is_expired(today):
                campaign.is_active = False
                self._campaigns.save(session, campaign)
                logger.info(
                    "campaign_deactivated",
                    campaign_id=campaign.id,
                    end_date=campaign.end_date.isoformat(),
                )
        return campaigns

    def get_campaign(self, session: OrganizationSession, campaign_id: str) -> Campaign:
        return self._campaigns.require(session, campaign_id)

    def create_campaign(
        self, session: OrganizationSession, campaign: Campaign
    ) -> Campaign:
        now = self._clock()
        campaign.validate_dates(now.date(), is_new=True)
        campaign = self._with_recomputed_items(session, campaign)
        campaign.title = sanitize_text(campaign.title)
        campaign.description = sanitize_text(campaign.description)
        campaign.created_at = now
        self._campaigns.save(session, campaign)
        logger.info("campaign_created", campaign_id=campaign.id, type=campaign.type.value)
        return campaign

    def update_campaign(
        self, session: OrganizationSession, campaign: Campaign
    ) -> Campaign:
        self._campaigns.require(session, campaign.id)
        campaign.validate_dates(self._clock().date(), is_new=False)
        campaign = self._with_recomputed_items(session, campaign)
        campaign.title = sanitize_text(campaign.title)
        campaign.description = sanitize_text(campaign.description)
        self._campaigns.save(session, campaign)
        return campaign

    def delete_campaign(self, session: OrganizationSession, campaign_id: str) -> None:
        self._campaigns.require(session, campaign_id)
        self._campaigns.delete(session, campaign_id)
        logger.info("campaign_deleted", campaign_id=campaign_id)

    def toggle_status(self, session: OrganizationSession, campaign_id: str) -> Campaign:
        """Flip ``is_active``.

        An inactive campaign whose end date has passed cannot be reactivated;
        it is returned unchanged.
        """
        campaign = self._campaigns.require(session, campaign_id)
        if not campaign.is_active and campaign.is_expired(self._clock().date()):
            logger.info(
                "campaign_toggle_refused",
                campaign_id=campaign.id,
                end_date=campaign.end_date.isoformat(),
            )
            return campaign
        campaign.is_active = not campaign.is_active
        self._campaigns.save(session, campaign)
        logger.info(
            "campaign_toggled", campaign_id=campaign.id, is_active=campaign.is_active
        )
        return campaign

    @staticmethod
    def apply_selection(
        campaign: Campaign,
        package_ids: Sequence[str],
        family_ids: Sequence[str],
        packages: Iterable[Package],
    ) -> Campaign:
        """Working copy of ``campaign`` with new selections and recomputed items."""
        package_ids = list(dict.fromkeys(package_ids))
        family_ids = list(dict.fromkeys(family_ids))
        return replace(
            campaign,
            package_ids=package_ids,
            beneficiary_family_ids=family_ids,
            items=recompute_campaign_items(
                campaign.items, packages, package_ids, family_ids
            ),
        )

    def _with_recomputed_items(
        self, session: OrganizationSession, campaign: Campaign
    ) -> Campaign:
        # Manual item lists (no package selected) are kept as entered.
        if not campaign.package_ids:
            return campaign
        return self.apply_selection(
            campaign,
            campaign.package_ids,
            campaign.beneficiary_family_ids,
            self._packages.list_all(session),
        )

    def recompute_items(
        self,
        session: OrganizationSession,
        campaign_id: str,
        *,
        package_ids: Sequence[str] | None = None,
        family_ids: Sequence[str] | None = None,
    ) -> Campaign:
        """Apply a package/family selection to a stored campaign and save it.

        Omitted selections keep the campaign's current ones.
        """
        campaign = self._campaigns.require(session, campaign_id)
        updated = self.apply_selection(
            campaign,
            campaign.package_ids if package_ids is None else package_ids,
            campaign.beneficiary_family_ids if family_ids is None else family_ids,
            self._packages.list_all(session),
        )
        self._campaigns.save(session, updated)
        logger.info(
            "campaign_items_recomputed",
            campaign_id=updated.id,
            packages=len(updated.package_ids),
            families=len(updated.beneficiary_family_ids),
            items=len(updated.items),
        )
        return updated
