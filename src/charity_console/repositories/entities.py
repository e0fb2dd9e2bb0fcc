"""Typed repositories over the document store.

Every call takes the organization session explicitly. Reads on an
unauthenticated session return empty results; writes raise.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from charity_console.domain.campaigns import Campaign
from charity_console.domain.events import DistributionEvent
from charity_console.domain.families import Family
from charity_console.domain.organization import (
    OrganizationBankInfo,
    OrganizationLocation,
    OrganizationSettings,
)
from charity_console.domain.packages import Package
from charity_console.exceptions import (
    AuthenticationError,
    CampaignNotFoundError,
    EventNotFoundError,
    FamilyNotFoundError,
    LocationNotFoundError,
    PackageNotFoundError,
    RecordNotFoundError,
)
from charity_console.logging_config import get_logger
from charity_console.repositories import records
from charity_console.repositories.interfaces import (
    BANK_INFO,
    CAMPAIGNS,
    EVENTS,
    FAMILIES,
    LOCATIONS,
    PACKAGES,
    SETTINGS,
    DocumentStore,
    Record,
)
from charity_console.session import OrganizationSession

logger = get_logger(__name__)

T = TypeVar("T")


def _require_auth(session: OrganizationSession, collection: str, operation: str) -> None:
    if not session.is_authenticated:
        logger.warning(
            "unauthenticated_write_rejected", collection=collection, operation=operation
        )
        raise AuthenticationError()


class DocumentRepository(Generic[T]):
    """CRUD over one collection of identified records."""

    collection: str
    not_found_error: type[RecordNotFoundError] = RecordNotFoundError
    encode: Callable[[T], Record]
    decode: Callable[[Record], T]

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def list_all(self, session: OrganizationSession) -> list[T]:
        if not session.is_authenticated:
            logger.debug("unauthenticated_read", collection=self.collection)
            return []
        return [
            self.decode(record)
            for record in self._store.list(session.namespace, self.collection)
        ]

    def get(self, session: OrganizationSession, record_id: str) -> T | None:
        if not session.is_authenticated:
            logger.debug("unauthenticated_read", collection=self.collection)
            return None
        record = self._store.get(session.namespace, self.collection, record_id)
        return self.decode(record) if record is not None else None

    def require(self, session: OrganizationSession, record_id: str) -> T:
        item = self.get(session, record_id)
        if item is None:
            raise self.not_found_error(record_id)
        return item

    def save(self, session: OrganizationSession, item: T) -> None:
        _require_auth(session, self.collection, "save")
        record = self.encode(item)
        self._store.put(session.namespace, self.collection, record["id"], record)

    def delete(self, session: OrganizationSession, record_id: str) -> None:
        _require_auth(session, self.collection, "delete")
        self._store.delete(session.namespace, self.collection, record_id)


class FamilyRepository(DocumentRepository[Family]):
    collection = FAMILIES
    not_found_error = FamilyNotFoundError
    encode = staticmethod(records.family_to_record)
    decode = staticmethod(records.family_from_record)


class CampaignRepository(DocumentRepository[Campaign]):
    collection = CAMPAIGNS
    not_found_error = CampaignNotFoundError
    encode = staticmethod(records.campaign_to_record)
    decode = staticmethod(records.campaign_from_record)


class PackageRepository(DocumentRepository[Package]):
    collection = PACKAGES
    not_found_error = PackageNotFoundError
    encode = staticmethod(records.package_to_record)
    decode = staticmethod(records.package_from_record)


class EventRepository(DocumentRepository[DistributionEvent]):
    collection = EVENTS
    not_found_error = EventNotFoundError
    encode = staticmethod(records.event_to_record)
    decode = staticmethod(records.event_from_record)


class LocationRepository(DocumentRepository[OrganizationLocation]):
    collection = LOCATIONS
    not_found_error = LocationNotFoundError
    encode = staticmethod(records.location_to_record)
    decode = staticmethod(records.location_from_record)


class BankInfoRepository:
    """The organization's bank accounts, kept as a single document."""

    collection = BANK_INFO
    document_id = "main"

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def load(self, session: OrganizationSession) -> OrganizationBankInfo | None:
        if not session.is_authenticated:
            logger.debug("unauthenticated_read", collection=self.collection)
            return None
        record = self._store.get(session.namespace, self.collection, self.document_id)
        return records.bank_info_from_record(record) if record is not None else None

    def save(self, session: OrganizationSession, info: OrganizationBankInfo) -> None:
        _require_auth(session, self.collection, "save")
        self._store.put(
            session.namespace,
            self.collection,
            self.document_id,
            records.bank_info_to_record(info),
        )


class SettingsRepository:
    """Organization-wide settings, kept as a single document."""

    collection = SETTINGS
    document_id = "global"

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def load(self, session: OrganizationSession) -> OrganizationSettings | None:
        if not session.is_authenticated:
            logger.debug("unauthenticated_read", collection=self.collection)
            return None
        record = self._store.get(session.namespace, self.collection, self.document_id)
        return records.settings_from_record(record) if record is not None else None

    def save(self, session: OrganizationSession, settings: OrganizationSettings) -> None:
        _require_auth(session, self.collection, "save")
        self._store.put(
            session.namespace,
            self.collection,
            self.document_id,
            records.settings_to_record(settings),
        )
