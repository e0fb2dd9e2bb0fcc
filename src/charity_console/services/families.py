"""Family registry service: CRUD, expiration sweep and renewals."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from charity_console.domain.documents import is_valid_cpf, sanitize_text
from charity_console.domain.families import SYSTEM_AUTHOR, Family, HistoryEntry
from charity_console.domain.value_objects import FamilyStatus, HistoryEntryType
from charity_console.exceptions import InvalidDocumentNumberError
from charity_console.logging_config import get_logger
from charity_console.repositories.entities import CampaignRepository, FamilyRepository
from charity_console.services.organization import SettingsService
from charity_console.session import OrganizationSession

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class FamilyService:
    """Manages registered families.

    Listing families doubles as the expiration check: any Active family
    whose validity window has lapsed is suspended before the list is
    returned, and dropped from the campaigns it benefits from.
    """

    def __init__(
        self,
        families: FamilyRepository,
        campaigns: CampaignRepository,
        settings_service: SettingsService,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._families = families
        self._campaigns = campaigns
        self._settings = settings_service
        self._clock = clock

    def list_families(self, session: OrganizationSession) -> list[Family]:
        families = self._families.list_all(session)
        if not families:
            return families

        validity_months = self._settings.get_settings(
            session
        ).registration_validity_months
        now = self._clock()
        suspended: list[str] = []
        for family in families:
            if family.is_active and family.is_expired(now, validity_months):
                family.change_status(
                    FamilyStatus.SUSPENDED,
                    f"Cadastro suspenso automaticamente: validade de "
                    f"{validity_months} meses expirada",
                    author=SYSTEM_AUTHOR,
                    when=now,
                )
                self._families.save(session, family)
                suspended.append(family.id)
                logger.info(
                    "family_suspended",
                    family_id=family.id,
                    expired_at=family.expiration_date(validity_months).isoformat(),
                )

        if suspended:
            self._remove_beneficiaries(session, suspended)
        return families

    def get_family(self, session: OrganizationSession, family_id: str) -> Family:
        return self._families.require(session, family_id)

    def create_family(
        self, session: OrganizationSession, family: Family, *, author: str
    ) -> Family:
        self._clean(family)
        now = self._clock()
        family.status = FamilyStatus.ACTIVE
        family.registration_date = now
        family.last_review_date = now
        family.record_history(
            HistoryEntryType.REGISTRATION,
            "Família cadastrada",
            author=author,
            when=now,
        )
        self._families.save(session, family)
        logger.info("family_created", family_id=family.id)
        return family

    def update_family(
        self,
        session: OrganizationSession,
        family: Family,
        *,
        renew: bool = False,
        author: str,
    ) -> Family:
        """Save edits to a family, logging any status change.

        With ``renew`` the validity window restarts and the family is
        reactivated; that single Reactivation entry replaces the ordinary
        status-change entry.
        """
        stored = self._families.require(session, family.id)
        self._clean(family)
        now = self._clock()

        requested = family.status
        family.status = stored.status
        if renew:
            family.renew(now, author=author)
        elif requested != stored.status:
            family.change_status(
                requested,
                f"Status alterado de {stored.status.value} para {requested.value}",
                author=author,
                when=now,
            )

        self._families.save(session, family)
        logger.info(
            "family_updated",
            family_id=family.id,
            status=family.status.value,
            renewed=renew,
        )
        return family

    def renew_family(
        self, session: OrganizationSession, family_id: str, *, author: str
    ) -> Family:
        family = self._families.require(session, family_id)
        family.renew(self._clock(), author=author)
        self._families.save(session, family)
        logger.info("family_renewed", family_id=family.id)
        return family

    def add_history_entry(
        self,
        session: OrganizationSession,
        family_id: str,
        entry_type: HistoryEntryType,
        description: str,
        *,
        author: str,
        when: datetime | None = None,
    ) -> HistoryEntry:
        family = self._families.require(session, family_id)
        entry = family.record_history(
            entry_type,
            sanitize_text(description),
            author=author,
            when=when or self._clock(),
        )
        self._families.save(session, family)
        return entry

    def delete_family(self, session: OrganizationSession, family_id: str) -> None:
        self._families.require(session, family_id)
        self._families.delete(session, family_id)
        self._remove_beneficiaries(session, [family_id])
        logger.info("family_deleted", family_id=family_id)

    def _remove_beneficiaries(
        self, session: OrganizationSession, family_ids: Iterable[str]
    ) -> None:
        ids = list(family_ids)
        for campaign in self._campaigns.list_all(session):
            removed = [fid for fid in ids if campaign.remove_beneficiary(fid)]
            if removed:
                self._campaigns.save(session, campaign)
                logger.info(
                    "campaign_beneficiaries_removed",
                    campaign_id=campaign.id,
                    family_ids=removed,
                )

    @staticmethod
    def _clean(family: Family) -> None:
        if family.cpf and not is_valid_cpf(family.cpf):
            raise InvalidDocumentNumberError("CPF", family.cpf)
        family.responsible_name = sanitize_text(family.responsible_name)
        family.address = sanitize_text(family.address)
        family.notes = sanitize_text(family.notes)
        for child in family.children:
            child.name = sanitize_text(child.name)
            child.notes = sanitize_text(child.notes)
