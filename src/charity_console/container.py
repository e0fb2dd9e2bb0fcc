"""Dependency injection container for Charity Console.

Builds the document store, repositories and services from settings and
caches them for the life of the process. Tests construct a Container
directly with an in-memory store, a fixed clock and fake collaborators.

Usage:
    from charity_console.container import get_container

    container = get_container()
    families = container.family_service.list_families(session)
"""

from collections.abc import Callable
from datetime import UTC, datetime
from functools import cached_property, lru_cache
from typing import TYPE_CHECKING, Any

import httpx

from charity_console.config import DocumentStoreType, Settings, get_settings
from charity_console.logging_config import get_logger
from charity_console.repositories.entities import (
    BankInfoRepository,
    CampaignRepository,
    EventRepository,
    FamilyRepository,
    LocationRepository,
    PackageRepository,
    SettingsRepository,
)

if TYPE_CHECKING:
    from charity_console.repositories.interfaces import DocumentStore
    from charity_console.services.address_lookup import AddressLookupService
    from charity_console.services.ai_assist import AIAssistService
    from charity_console.services.campaigns import CampaignService
    from charity_console.services.dashboard import DashboardService
    from charity_console.services.events import EventService
    from charity_console.services.families import FamilyService
    from charity_console.services.organization import (
        BankInfoService,
        LocationService,
        SettingsService,
    )
    from charity_console.services.packages import PackageService

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Container:
    """Dependency injection container.

    Everything is built lazily on first access. Collaborators can be
    replaced at construction time:

        container = Container(
            settings=Settings(document_store=DocumentStoreType.MEMORY),
            clock=lambda: datetime(2025, 1, 2, tzinfo=UTC),
        )
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        store: "DocumentStore | None" = None,
        clock: Callable[[], datetime] | None = None,
        ai_client: Any | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._store_override = store
        self._clock = clock or _utc_now
        self._ai_client = ai_client
        self._http_client = http_client
        logger.debug(
            "container_created",
            document_store=self._settings.document_store.value,
            environment=self._settings.environment.value,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def clock(self) -> Callable[[], datetime]:
        return self._clock

    @cached_property
    def document_store(self) -> "DocumentStore":
        """The configured document store, initialized on first access."""
        if self._store_override is not None:
            return self._store_override
        store_type = self._settings.document_store
        if store_type == DocumentStoreType.FIRESTORE:
            return self._create_firestore_store()
        if store_type == DocumentStoreType.MEMORY:
            from charity_console.repositories.memory import InMemoryDocumentStore

            logger.info("using_memory_document_store")
            return InMemoryDocumentStore()
        return self._create_sqlite_store()

    def _create_sqlite_store(self) -> "DocumentStore":
        from charity_console.repositories.sqlite import (
            SQLiteDatabase,
            SQLiteDocumentStore,
        )

        db_path = str(self._settings.sqlite_path)
        logger.info("initializing_sqlite_store", path=db_path)
        db = SQLiteDatabase(db_path, check_same_thread=False)
        db.initialize()
        return SQLiteDocumentStore(db)

    def _create_firestore_store(self) -> "DocumentStore":
        import firebase_admin
        from firebase_admin import firestore

        from charity_console.repositories.firestore import FirestoreDocumentStore

        try:
            app = firebase_admin.get_app()
        except ValueError:
            options = (
                {"projectId": self._settings.firestore_project_id}
                if self._settings.firestore_project_id
                else None
            )
            app = firebase_admin.initialize_app(options=options)
        logger.info(
            "initializing_firestore_store",
            project_id=self._settings.firestore_project_id,
        )
        return FirestoreDocumentStore(firestore.client(app))

    # Repositories

    @cached_property
    def families(self) -> FamilyRepository:
        return FamilyRepository(self.document_store)

    @cached_property
    def campaigns(self) -> CampaignRepository:
        return CampaignRepository(self.document_store)

    @cached_property
    def packages(self) -> PackageRepository:
        return PackageRepository(self.document_store)

    @cached_property
    def events(self) -> EventRepository:
        return EventRepository(self.document_store)

    @cached_property
    def locations(self) -> LocationRepository:
        return LocationRepository(self.document_store)

    @cached_property
    def bank_info(self) -> BankInfoRepository:
        return BankInfoRepository(self.document_store)

    @cached_property
    def organization_settings(self) -> SettingsRepository:
        return SettingsRepository(self.document_store)

    # Collaborators

    @cached_property
    def ai_assist_service(self) -> "AIAssistService":
        from charity_console.services.ai_assist import AIAssistService

        return AIAssistService(
            self._settings.gemini_api_key,
            model=self._settings.gemini_model,
            organization_name=self._settings.organization_name,
            client=self._ai_client,
        )

    @cached_property
    def address_lookup_service(self) -> "AddressLookupService":
        from charity_console.services.address_lookup import AddressLookupService

        return AddressLookupService(
            self._http_client,
            base_url=self._settings.address_lookup_url,
            timeout=self._settings.address_lookup_timeout,
        )

    # Services

    @cached_property
    def settings_service(self) -> "SettingsService":
        from charity_console.services.organization import SettingsService

        return SettingsService(
            self.organization_settings,
            default_organization_name=self._settings.organization_name,
            clock=self._clock,
        )

    @cached_property
    def bank_info_service(self) -> "BankInfoService":
        from charity_console.services.organization import BankInfoService

        return BankInfoService(self.bank_info, clock=self._clock)

    @cached_property
    def location_service(self) -> "LocationService":
        from charity_console.services.organization import LocationService

        return LocationService(self.locations, self.address_lookup_service)

    @cached_property
    def family_service(self) -> "FamilyService":
        from charity_console.services.families import FamilyService

        return FamilyService(
            self.families, self.campaigns, self.settings_service, clock=self._clock
        )

    @cached_property
    def campaign_service(self) -> "CampaignService":
        from charity_console.services.campaigns import CampaignService

        return CampaignService(self.campaigns, self.packages, clock=self._clock)

    @cached_property
    def package_service(self) -> "PackageService":
        from charity_console.services.packages import PackageService

        return PackageService(self.packages, self.campaigns, self.ai_assist_service)

    @cached_property
    def event_service(self) -> "EventService":
        from charity_console.services.events import EventService

        return EventService(
            self.events,
            self.campaigns,
            self.families,
            self.campaign_service,
            self.family_service,
            clock=self._clock,
        )

    @cached_property
    def dashboard_service(self) -> "DashboardService":
        from charity_console.services.dashboard import DashboardService

        return DashboardService(
            self.family_service,
            self.campaign_service,
            self.settings_service,
            clock=self._clock,
        )

    def close(self) -> None:
        """Close the store and HTTP client if they were opened."""
        if "document_store" in self.__dict__:
            logger.info("closing_document_store")
            self.document_store.close()
        if "address_lookup_service" in self.__dict__:
            self.address_lookup_service.close()

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


_container: Container | None = None


@lru_cache
def get_container() -> Container:
    """Get the global container singleton, created on first access."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Close and forget the global container."""
    global _container
    if _container is not None:
        _container.close()
        _container = None
    get_container.cache_clear()
