"""Tests for location, bank info and settings services."""

import httpx
import pytest

from charity_console.config import Settings
from charity_console.container import Container
from charity_console.domain.organization import (
    BankAccount,
    OrganizationLocation,
    OrganizationSettings,
    PixKey,
)
from charity_console.domain.value_objects import PixKeyType
from charity_console.exceptions import (
    BankAccountNotFoundError,
    BankInfoError,
    InvalidDocumentNumberError,
    SettingsError,
)
from charity_console.repositories.memory import InMemoryDocumentStore
from charity_console.session import OrganizationSession
from conftest import FixedClock


def _account(name: str = "Itaú", **kwargs) -> BankAccount:
    return BankAccount(bank_name=name, agency="0001", account_number="12345-6", **kwargs)


class TestBankInfoService:
    def test_empty_when_nothing_saved(
        self, container: Container, session: OrganizationSession
    ) -> None:
        assert container.bank_info_service.get_bank_info(session).accounts == []

    def test_first_account_becomes_primary(
        self, container: Container, session: OrganizationSession, clock: FixedClock
    ) -> None:
        info = container.bank_info_service.add_account(session, _account())

        assert info.accounts[0].is_primary
        assert info.updated_at == clock.now

    def test_new_primary_account_replaces_old(
        self, container: Container, session: OrganizationSession
    ) -> None:
        first = _account("Itaú")
        second = _account("Caixa", is_primary=True)
        container.bank_info_service.add_account(session, first)

        info = container.bank_info_service.add_account(session, second)

        assert [a.is_primary for a in info.accounts] == [False, True]

    def test_removing_primary_promotes_next(
        self, container: Container, session: OrganizationSession
    ) -> None:
        first = _account("Itaú")
        second = _account("Caixa")
        container.bank_info_service.add_account(session, first)
        container.bank_info_service.add_account(session, second)

        info = container.bank_info_service.remove_account(session, first.id)

        assert [a.id for a in info.accounts] == [second.id]
        assert info.accounts[0].is_primary

    def test_remove_unknown_account(
        self, container: Container, session: OrganizationSession
    ) -> None:
        with pytest.raises(BankAccountNotFoundError):
            container.bank_info_service.remove_account(session, "acc-404")

    def test_set_primary_account(
        self, container: Container, session: OrganizationSession
    ) -> None:
        first = _account("Itaú")
        second = _account("Caixa")
        container.bank_info_service.add_account(session, first)
        container.bank_info_service.add_account(session, second)

        info = container.bank_info_service.set_primary_account(session, second.id)

        assert info.primary_account is not None
        assert info.primary_account.id == second.id
        stored = container.bank_info.load(session)
        assert stored is not None
        assert stored.primary_account is not None
        assert stored.primary_account.id == second.id

    def test_set_primary_pix_key(
        self, container: Container, session: OrganizationSession
    ) -> None:
        email = PixKey(key_type=PixKeyType.EMAIL, key="doe@larmatilde.org")
        phone = PixKey(key_type=PixKeyType.PHONE, key="11987654321", is_primary=True)
        account = _account(pix_keys=[email, phone])
        container.bank_info_service.add_account(session, account)

        info = container.bank_info_service.set_primary_pix_key(
            session, account.id, email.id
        )

        key = info.accounts[0].primary_pix_key
        assert key is not None
        assert key.id == email.id

    def test_missing_fields_rejected(
        self, container: Container, session: OrganizationSession
    ) -> None:
        with pytest.raises(BankInfoError) as exc_info:
            container.bank_info_service.add_account(
                session, BankAccount(bank_name="Itaú", agency="", account_number="")
            )
        assert exc_info.value.context["missing"] == ["agency", "account_number"]
        assert container.bank_info.load(session) is None

    def test_invalid_cpf_pix_key_rejected(
        self, container: Container, session: OrganizationSession
    ) -> None:
        account = _account(pix_keys=[PixKey(key_type=PixKeyType.CPF, key="111.111.111-11")])
        with pytest.raises(InvalidDocumentNumberError):
            container.bank_info_service.add_account(session, account)


class TestSettingsService:
    def test_defaults_carry_organization_name(
        self, container: Container, session: OrganizationSession
    ) -> None:
        settings = container.settings_service.get_settings(session)

        assert settings.organization_name == "Lar Assistencial Matilde"
        assert settings.registration_validity_months == 12
        assert settings.visit_interval_months == 3

    def test_save_and_reload(
        self, container: Container, session: OrganizationSession, clock: FixedClock
    ) -> None:
        container.settings_service.save_settings(
            session,
            OrganizationSettings(
                organization_name="<b>Lar Matilde</b>",
                cnpj="11.222.333/0001-81",
                registration_validity_months=6,
            ),
        )

        settings = container.settings_service.get_settings(session)
        assert settings.organization_name == "Lar Matilde"
        assert settings.registration_validity_months == 6
        assert settings.updated_at == clock.now

    @pytest.mark.parametrize(
        "field_name", ["registration_validity_months", "visit_interval_months"]
    )
    def test_months_must_be_positive(
        self, container: Container, session: OrganizationSession, field_name: str
    ) -> None:
        settings = OrganizationSettings()
        setattr(settings, field_name, 0)
        with pytest.raises(SettingsError):
            container.settings_service.save_settings(session, settings)

    def test_invalid_cnpj_rejected(
        self, container: Container, session: OrganizationSession
    ) -> None:
        with pytest.raises(InvalidDocumentNumberError):
            container.settings_service.save_settings(
                session, OrganizationSettings(cnpj="11.222.333/0001-00")
            )


class TestLocationService:
    def test_only_one_main_location(
        self, container: Container, session: OrganizationSession
    ) -> None:
        sede = OrganizationLocation(name="Sede", is_main=True)
        bazar = OrganizationLocation(name="Bazar", is_main=True)
        container.location_service.save_location(session, sede)
        container.location_service.save_location(session, bazar)

        mains = [
            loc.name
            for loc in container.location_service.list_locations(session)
            if loc.is_main
        ]

        assert mains == ["Bazar"]

    def test_fill_address_from_postal_code(
        self,
        test_settings: Settings,
        store: InMemoryDocumentStore,
        clock: FixedClock,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path.endswith("/01001000/json/")
            return httpx.Response(
                200,
                json={
                    "cep": "01001-000",
                    "logradouro": "Praça da Sé",
                    "bairro": "Sé",
                    "localidade": "São Paulo",
                    "uf": "SP",
                },
            )

        container = Container(
            settings=test_settings,
            store=store,
            clock=clock,
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        location = OrganizationLocation(name="Sede", number="100")

        container.location_service.fill_address(location, "01001-000")

        assert location.postal_code == "01001-000"
        assert location.full_address == "Praça da Sé, 100 - Sé, São Paulo/SP"
