"""Services for the organization's locations, bank records and settings."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from charity_console.domain.documents import (
    is_valid_cnpj,
    is_valid_cpf,
    sanitize_text,
)
from charity_console.domain.organization import (
    BankAccount,
    OrganizationBankInfo,
    OrganizationLocation,
    OrganizationSettings,
)
from charity_console.domain.value_objects import PixKeyType
from charity_console.exceptions import (
    BankInfoError,
    InvalidDocumentNumberError,
    SettingsError,
)
from charity_console.logging_config import get_logger
from charity_console.repositories.entities import (
    BankInfoRepository,
    LocationRepository,
    SettingsRepository,
)
from charity_console.services.address_lookup import AddressLookupService
from charity_console.session import OrganizationSession

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class LocationService:
    def __init__(
        self, locations: LocationRepository, address_lookup: AddressLookupService
    ) -> None:
        self._locations = locations
        self._address_lookup = address_lookup

    def list_locations(self, session: OrganizationSession) -> list[OrganizationLocation]:
        return self._locations.list_all(session)

    def get_location(
        self, session: OrganizationSession, location_id: str
    ) -> OrganizationLocation:
        return self._locations.require(session, location_id)

    def save_location(
        self, session: OrganizationSession, location: OrganizationLocation
    ) -> OrganizationLocation:
        location.name = sanitize_text(location.name)
        location.notes = sanitize_text(location.notes)
        if location.is_main:
            # Only one main location per organization.
            for other in self._locations.list_all(session):
                if other.id != location.id and other.is_main:
                    other.is_main = False
                    self._locations.save(session, other)
        self._locations.save(session, location)
        return location

    def delete_location(self, session: OrganizationSession, location_id: str) -> None:
        self._locations.require(session, location_id)
        self._locations.delete(session, location_id)

    def fill_address(
        self, location: OrganizationLocation, postal_code: str
    ) -> OrganizationLocation:
        """Pre-fill the street fields of a location from its postal code."""
        location.apply_address(self._address_lookup.lookup(postal_code))
        return location


class BankInfoService:
    """Bank accounts and Pix keys shown to donors.

    Saving keeps exactly one primary account whenever any account exists
    and at most one primary Pix key per account.
    """

    def __init__(
        self, bank_info: BankInfoRepository, clock: Callable[[], datetime] = _utc_now
    ) -> None:
        self._bank_info = bank_info
        self._clock = clock

    def get_bank_info(self, session: OrganizationSession) -> OrganizationBankInfo:
        return self._bank_info.load(session) or OrganizationBankInfo()

    def save_bank_info(
        self, session: OrganizationSession, info: OrganizationBankInfo
    ) -> OrganizationBankInfo:
        for account in info.accounts:
            self._validate_account(account)
        info.normalize()
        info.updated_at = self._clock()
        self._bank_info.save(session, info)
        logger.info("bank_info_saved", accounts=len(info.accounts))
        return info

    def add_account(
        self, session: OrganizationSession, account: BankAccount
    ) -> OrganizationBankInfo:
        info = self.get_bank_info(session)
        if account.is_primary:
            for existing in info.accounts:
                existing.is_primary = False
        info.accounts.append(account)
        return self.save_bank_info(session, info)

    def remove_account(
        self, session: OrganizationSession, account_id: str
    ) -> OrganizationBankInfo:
        info = self.get_bank_info(session)
        info.remove_account(account_id)
        return self.save_bank_info(session, info)

    def set_primary_account(
        self, session: OrganizationSession, account_id: str
    ) -> OrganizationBankInfo:
        info = self.get_bank_info(session)
        info.set_primary_account(account_id)
        return self.save_bank_info(session, info)

    def set_primary_pix_key(
        self, session: OrganizationSession, account_id: str, key_id: str
    ) -> OrganizationBankInfo:
        info = self.get_bank_info(session)
        info.get_account(account_id).set_primary_pix_key(key_id)
        return self.save_bank_info(session, info)

    @staticmethod
    def _validate_account(account: BankAccount) -> None:
        missing = [
            name
            for name, value in (
                ("bank_name", account.bank_name),
                ("agency", account.agency),
                ("account_number", account.account_number),
            )
            if not value.strip()
        ]
        if missing:
            raise BankInfoError(
                f"Bank account is missing required fields: {', '.join(missing)}",
                context={"account_id": account.id, "missing": missing},
            )
        for key in account.pix_keys:
            if key.key_type == PixKeyType.CPF and not is_valid_cpf(key.key):
                raise InvalidDocumentNumberError("CPF", key.key)
            if key.key_type == PixKeyType.CNPJ and not is_valid_cnpj(key.key):
                raise InvalidDocumentNumberError("CNPJ", key.key)


class SettingsService:
    def __init__(
        self,
        settings: SettingsRepository,
        default_organization_name: str = "",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._settings = settings
        self._default_name = default_organization_name
        self._clock = clock

    def get_settings(self, session: OrganizationSession) -> OrganizationSettings:
        """Stored settings, or defaults when none were saved yet."""
        stored = self._settings.load(session)
        if stored is None:
            return OrganizationSettings(organization_name=self._default_name)
        return stored

    def save_settings(
        self, session: OrganizationSession, settings: OrganizationSettings
    ) -> OrganizationSettings:
        if settings.registration_validity_months < 1:
            raise SettingsError(
                "Registration validity must be at least 1 month",
                context={"validity_months": settings.registration_validity_months},
            )
        if settings.visit_interval_months < 1:
            raise SettingsError(
                "Visit interval must be at least 1 month",
                context={"visit_interval_months": settings.visit_interval_months},
            )
        if settings.cnpj and not is_valid_cnpj(settings.cnpj):
            raise InvalidDocumentNumberError("CNPJ", settings.cnpj)
        settings.organization_name = sanitize_text(settings.organization_name)
        settings.updated_at = self._clock()
        self._settings.save(session, settings)
        logger.info(
            "settings_saved",
            validity_months=settings.registration_validity_months,
            visit_interval_months=settings.visit_interval_months,
        )
        return settings
