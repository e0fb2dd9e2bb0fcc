"""Organization configuration records: locations, bank accounts, settings."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from charity_console.domain.value_objects import BankAccountType, PixKeyType, new_id
from charity_console.exceptions import BankAccountNotFoundError, PixKeyNotFoundError

DEFAULT_VALIDITY_MONTHS = 12
DEFAULT_VISIT_INTERVAL_MONTHS = 3


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Address:
    postal_code: str
    street: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""


@dataclass
class OrganizationLocation:
    name: str
    id: str = field(default_factory=new_id)
    postal_code: str = ""
    street: str = ""
    number: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    is_main: bool = False
    notes: str = ""

    @property
    def full_address(self) -> str:
        street = f"{self.street}, {self.number}" if self.number else self.street
        if self.complement:
            street = f"{street} {self.complement}"
        return f"{street} - {self.neighborhood}, {self.city}/{self.state}"

    def apply_address(self, address: Address) -> None:
        self.postal_code = address.postal_code
        self.street = address.street
        self.neighborhood = address.neighborhood
        self.city = address.city
        self.state = address.state


@dataclass
class PixKey:
    key_type: PixKeyType
    key: str
    id: str = field(default_factory=new_id)
    is_primary: bool = False


@dataclass
class BankAccount:
    bank_name: str
    agency: str
    account_number: str
    id: str = field(default_factory=new_id)
    account_type: BankAccountType = BankAccountType.CHECKING
    holder_name: str = ""
    holder_document: str = ""
    is_primary: bool = False
    pix_keys: list[PixKey] = field(default_factory=list)

    @property
    def primary_pix_key(self) -> PixKey | None:
        return next((k for k in self.pix_keys if k.is_primary), None)

    def set_primary_pix_key(self, key_id: str) -> None:
        if not any(k.id == key_id for k in self.pix_keys):
            raise PixKeyNotFoundError(key_id)
        for key in self.pix_keys:
            key.is_primary = key.id == key_id

    def normalize(self) -> None:
        """Keep at most one primary Pix key (the first flagged one)."""
        seen = False
        for key in self.pix_keys:
            if key.is_primary and seen:
                key.is_primary = False
            seen = seen or key.is_primary


@dataclass
class OrganizationBankInfo:
    accounts: list[BankAccount] = field(default_factory=list)
    updated_at: datetime = field(default_factory=_utc_now)

    @property
    def primary_account(self) -> BankAccount | None:
        return next((a for a in self.accounts if a.is_primary), None)

    def get_account(self, account_id: str) -> BankAccount:
        for account in self.accounts:
            if account.id == account_id:
                return account
        raise BankAccountNotFoundError(account_id)

    def set_primary_account(self, account_id: str) -> None:
        self.get_account(account_id)
        for account in self.accounts:
            account.is_primary = account.id == account_id

    def remove_account(self, account_id: str) -> BankAccount:
        account = self.get_account(account_id)
        self.accounts = [a for a in self.accounts if a.id != account_id]
        self.normalize()
        return account

    def normalize(self) -> None:
        """Exactly one primary account whenever any account exists."""
        primary = self.primary_account
        if primary is None and self.accounts:
            primary = self.accounts[0]
        for account in self.accounts:
            account.is_primary = account is primary
            account.normalize()


@dataclass
class OrganizationSettings:
    organization_name: str = ""
    cnpj: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    registration_validity_months: int = DEFAULT_VALIDITY_MONTHS
    visit_interval_months: int = DEFAULT_VISIT_INTERVAL_MONTHS
    updated_at: datetime = field(default_factory=_utc_now)
