"""Package catalog service."""

from __future__ import annotations

from charity_console.domain.documents import sanitize_text
from charity_console.domain.packages import Package, PackageItem
from charity_console.logging_config import get_logger
from charity_console.repositories.entities import CampaignRepository, PackageRepository
from charity_console.services.ai_assist import AIAssistService
from charity_console.session import OrganizationSession

logger = get_logger(__name__)


class PackageService:
    def __init__(
        self,
        packages: PackageRepository,
        campaigns: CampaignRepository,
        ai_assist: AIAssistService,
    ) -> None:
        self._packages = packages
        self._campaigns = campaigns
        self._ai_assist = ai_assist

    def list_packages(self, session: OrganizationSession) -> list[Package]:
        return self._packages.list_all(session)

    def get_package(self, session: OrganizationSession, package_id: str) -> Package:
        return self._packages.require(session, package_id)

    def save_package(self, session: OrganizationSession, package: Package) -> Package:
        package.name = sanitize_text(package.name)
        package.description = sanitize_text(package.description)
        for item in package.items:
            item.name = sanitize_text(item.name)
        self._packages.save(session, package)
        return package

    def delete_package(self, session: OrganizationSession, package_id: str) -> None:
        """Delete a package and drop it from every campaign selection.

        Item targets already stored on those campaigns are left as they are
        until the campaign is recomputed.
        """
        self._packages.require(session, package_id)
        self._packages.delete(session, package_id)
        for campaign in self._campaigns.list_all(session):
            if campaign.remove_package(package_id):
                self._campaigns.save(session, campaign)
                logger.info(
                    "campaign_package_removed",
                    campaign_id=campaign.id,
                    package_id=package_id,
                )
        logger.info("package_deleted", package_id=package_id)

    def suggest_items(self, name: str, description: str = "") -> list[PackageItem]:
        """AI-suggested contents for a package, for the user to review."""
        return [
            PackageItem(
                name=s.name,
                quantity=s.quantity,
                unit=s.unit,
                average_price=s.average_price,
            )
            for s in self._ai_assist.suggest_package_items(name, description)
        ]
