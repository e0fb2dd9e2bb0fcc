from datetime import UTC, date, datetime

import pytest

from charity_console.config import DocumentStoreType, Environment, Settings
from charity_console.container import Container
from charity_console.domain.campaigns import Campaign
from charity_console.domain.families import Child, Family
from charity_console.domain.packages import Package, PackageItem
from charity_console.domain.value_objects import ItemUnit
from charity_console.repositories.memory import InMemoryDocumentStore
from charity_console.session import OrganizationSession


class FixedClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 1, 2, 12, 0, tzinfo=UTC))


@pytest.fixture
def session() -> OrganizationSession:
    return OrganizationSession(user_id="org-1", email="admin@larmatilde.org")


@pytest.fixture
def anonymous_session() -> OrganizationSession:
    return OrganizationSession.anonymous()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        environment=Environment.TESTING,
        document_store=DocumentStoreType.MEMORY,
        gemini_api_key=None,
    )


@pytest.fixture
def container(
    test_settings: Settings, store: InMemoryDocumentStore, clock: FixedClock
) -> Container:
    return Container(settings=test_settings, store=store, clock=clock)


@pytest.fixture
def sample_family() -> Family:
    return Family(
        responsible_name="Maria da Silva",
        cpf="529.982.247-25",
        phone="11987654321",
        registration_date=datetime(2024, 1, 1, tzinfo=UTC),
        children=[Child(name="Ana", age=7), Child(name="Pedro", age=4)],
    )


@pytest.fixture
def basic_basket() -> Package:
    return Package(
        name="Basic Basket",
        items=[PackageItem(name="Rice", quantity=5, unit=ItemUnit.KILOGRAM)],
    )


@pytest.fixture
def sample_campaign() -> Campaign:
    return Campaign(
        title="Cesta de Janeiro",
        start_date=date(2025, 1, 2),
        end_date=date(2025, 1, 31),
    )
