"""Tests for the typed, session-scoped repositories."""

import pytest

from charity_console.domain.families import Family
from charity_console.domain.organization import (
    BankAccount,
    OrganizationBankInfo,
    OrganizationSettings,
)
from charity_console.exceptions import AuthenticationError, FamilyNotFoundError
from charity_console.repositories.entities import (
    BankInfoRepository,
    FamilyRepository,
    SettingsRepository,
)
from charity_console.repositories.memory import InMemoryDocumentStore
from charity_console.session import OrganizationSession


class TestFamilyRepository:
    def test_save_and_get(
        self,
        store: InMemoryDocumentStore,
        session: OrganizationSession,
        sample_family: Family,
    ) -> None:
        repo = FamilyRepository(store)
        repo.save(session, sample_family)

        loaded = repo.get(session, sample_family.id)

        assert loaded == sample_family
        assert store.get("org-1", "families", sample_family.id) is not None

    def test_records_are_namespaced_per_user(
        self,
        store: InMemoryDocumentStore,
        session: OrganizationSession,
        sample_family: Family,
    ) -> None:
        repo = FamilyRepository(store)
        repo.save(session, sample_family)
        other = OrganizationSession(user_id="org-2")
        assert repo.list_all(other) == []

    def test_require_missing_raises(
        self, store: InMemoryDocumentStore, session: OrganizationSession
    ) -> None:
        with pytest.raises(FamilyNotFoundError) as exc_info:
            FamilyRepository(store).require(session, "fam-404")
        assert exc_info.value.context == {"family_id": "fam-404"}
        assert exc_info.value.status_code == 404

    def test_delete(
        self,
        store: InMemoryDocumentStore,
        session: OrganizationSession,
        sample_family: Family,
    ) -> None:
        repo = FamilyRepository(store)
        repo.save(session, sample_family)
        repo.delete(session, sample_family.id)
        assert repo.get(session, sample_family.id) is None


class TestUnauthenticatedAccess:
    def test_reads_return_empty(
        self,
        store: InMemoryDocumentStore,
        session: OrganizationSession,
        anonymous_session: OrganizationSession,
        sample_family: Family,
    ) -> None:
        repo = FamilyRepository(store)
        repo.save(session, sample_family)

        assert repo.list_all(anonymous_session) == []
        assert repo.get(anonymous_session, sample_family.id) is None
        assert SettingsRepository(store).load(anonymous_session) is None
        assert BankInfoRepository(store).load(anonymous_session) is None

    def test_writes_raise(
        self,
        store: InMemoryDocumentStore,
        anonymous_session: OrganizationSession,
        sample_family: Family,
    ) -> None:
        with pytest.raises(AuthenticationError):
            FamilyRepository(store).save(anonymous_session, sample_family)
        with pytest.raises(AuthenticationError):
            FamilyRepository(store).delete(anonymous_session, sample_family.id)
        with pytest.raises(AuthenticationError):
            SettingsRepository(store).save(anonymous_session, OrganizationSettings())
        assert store.list("", "families") == []


class TestSingletonRepositories:
    def test_settings_live_in_global_document(
        self, store: InMemoryDocumentStore, session: OrganizationSession
    ) -> None:
        repo = SettingsRepository(store)
        assert repo.load(session) is None

        repo.save(session, OrganizationSettings(registration_validity_months=6))

        assert store.get("org-1", "settings", "global") is not None
        loaded = repo.load(session)
        assert loaded is not None
        assert loaded.registration_validity_months == 6

    def test_bank_info_lives_in_main_document(
        self, store: InMemoryDocumentStore, session: OrganizationSession
    ) -> None:
        repo = BankInfoRepository(store)
        info = OrganizationBankInfo(
            accounts=[BankAccount(bank_name="Itaú", agency="0001", account_number="1")]
        )
        repo.save(session, info)

        assert store.get("org-1", "bank_info", "main") is not None
        loaded = repo.load(session)
        assert loaded is not None
        assert loaded.accounts[0].bank_name == "Itaú"
