"""Pydantic v2 schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from charity_console.domain.value_objects import (
    BankAccountType,
    CampaignType,
    EventFrequency,
    EventStatus,
    FamilyStatus,
    Gender,
    HistoryEntryType,
    ItemUnit,
    PixKeyType,
)

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class HealthResponse(BaseModel):
    status: str
    version: str
    document_store: str
    ai_assist_enabled: bool


# Family Schemas
class ChildSchema(BaseModel):
    """A child of a registered family."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=255)
    age: int = Field(default=0, ge=0, le=25)
    gender: Gender = Gender.MALE
    clothing_size: str = ""
    shoe_size: int | None = Field(default=None, ge=0)
    notes: str = ""


class HistoryEntryCreate(BaseModel):
    type: HistoryEntryType
    description: str = Field(..., min_length=1)
    date: datetime | None = None


class HistoryEntryResponse(BaseModel):
    id: str
    type: HistoryEntryType
    date: datetime
    description: str
    author: str


class FamilyCreate(BaseModel):
    """Schema for registering a family."""

    model_config = ConfigDict(str_strip_whitespace=True)

    responsible_name: str = Field(..., min_length=1, max_length=255)
    cpf: str = ""
    nis: str = ""
    address: str = ""
    postal_code: str = ""
    phone: str = ""
    number_of_adults: int = Field(default=1, ge=0)
    children: list[ChildSchema] = Field(default_factory=list)
    is_pregnant: bool = False
    pregnancy_due_date: date | None = None
    notes: str = ""


class FamilyUpdate(FamilyCreate):
    """Schema for editing a family.

    ``renew`` restarts the validity window and reactivates the family.
    """

    status: FamilyStatus | None = None
    renew: bool = False


class FamilyResponse(BaseModel):
    id: str
    responsible_name: str
    cpf: str
    nis: str
    address: str
    postal_code: str
    phone: str
    number_of_adults: int
    status: FamilyStatus
    registration_date: datetime
    last_review_date: datetime | None
    history: list[HistoryEntryResponse]
    children: list[ChildSchema]
    is_pregnant: bool
    pregnancy_due_date: date | None
    notes: str


class FamilyExtractRequest(BaseModel):
    text: str = Field(..., min_length=1)


# Campaign Schemas
class CampaignItemSchema(BaseModel):
    id: str | None = None
    name: str = Field(..., min_length=1)
    unit: ItemUnit = ItemUnit.UNIT
    target_quantity: float = Field(default=0, ge=0)
    collected_quantity: float = Field(default=0, ge=0)


class CampaignCreate(BaseModel):
    """Schema for creating or editing a campaign.

    When packages are selected, item targets are recomputed from them and
    the beneficiary families on save.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    type: CampaignType = CampaignType.OTHER
    start_date: date
    end_date: date
    is_active: bool = True
    items: list[CampaignItemSchema] = Field(default_factory=list)
    package_ids: list[str] = Field(default_factory=list)
    beneficiary_family_ids: list[str] = Field(default_factory=list)
    bank_account_id: str | None = None


class CampaignResponse(BaseModel):
    id: str
    title: str
    description: str
    type: CampaignType
    start_date: date
    end_date: date
    is_active: bool
    items: list[CampaignItemSchema]
    package_ids: list[str]
    beneficiary_family_ids: list[str]
    bank_account_id: str | None
    created_at: datetime
    progress_percent: int


class RecomputeItemsRequest(BaseModel):
    package_ids: list[str] | None = None
    family_ids: list[str] | None = None


class DescribeCampaignRequest(BaseModel):
    title: str = Field(..., min_length=1)
    type: CampaignType = CampaignType.OTHER
    items: list[CampaignItemSchema] = Field(default_factory=list)


class DescriptionResponse(BaseModel):
    description: str


# Package Schemas
class PackageItemSchema(BaseModel):
    id: str | None = None
    name: str = Field(..., min_length=1)
    quantity: float = Field(..., ge=0)
    unit: ItemUnit = ItemUnit.UNIT
    average_price: Decimal | None = Field(default=None, ge=0)


class PackageCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    items: list[PackageItemSchema] = Field(default_factory=list)


class PackageResponse(BaseModel):
    id: str
    name: str
    description: str
    items: list[PackageItemSchema]
    estimated_cost: Decimal


class SuggestItemsRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""


# Event Schemas
class EventCreate(BaseModel):
    """Schema for scheduling or editing a distribution event."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    date: date
    start_time: str = Field(default="09:00", pattern=TIME_PATTERN)
    end_time: str = Field(default="12:00", pattern=TIME_PATTERN)
    location: str = ""
    location_id: str | None = None
    frequency: EventFrequency = EventFrequency.ONCE
    is_free: bool = True
    entry_fee: Decimal | None = Field(default=None, ge=0)
    is_delivery_event: bool = False
    is_registration_review: bool = False
    linked_campaign_ids: list[str] = Field(default_factory=list)
    status: EventStatus = EventStatus.SCHEDULED


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    date: date
    start_time: str
    end_time: str
    location: str
    location_id: str | None
    frequency: EventFrequency
    is_free: bool
    entry_fee: Decimal | None
    is_delivery_event: bool
    is_registration_review: bool
    linked_campaign_ids: list[str]
    delivered_family_ids: list[str]
    status: EventStatus


class DeliveryCandidateResponse(BaseModel):
    family_id: str
    responsible_name: str
    family_status: FamilyStatus
    campaign_id: str
    campaign_title: str
    delivered: bool


class DeliveryCreate(BaseModel):
    family_id: str = Field(..., min_length=1)
    campaign_id: str = Field(..., min_length=1)


class DeliveryResponse(BaseModel):
    event: EventResponse
    family: FamilyResponse
    newly_delivered: bool


# Organization Schemas
class LocationCreate(BaseModel):
    """Schema for a location; ``fill_address`` looks the street up by postal code."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    postal_code: str = ""
    street: str = ""
    number: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = Field(default="", max_length=2)
    is_main: bool = False
    notes: str = ""
    fill_address: bool = False


class LocationResponse(BaseModel):
    id: str
    name: str
    postal_code: str
    street: str
    number: str
    complement: str
    neighborhood: str
    city: str
    state: str
    is_main: bool
    notes: str
    full_address: str


class PixKeySchema(BaseModel):
    id: str | None = None
    key_type: PixKeyType
    key: str = Field(..., min_length=1)
    is_primary: bool = False


class BankAccountSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str | None = None
    bank_name: str = Field(..., min_length=1)
    agency: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1)
    account_type: BankAccountType = BankAccountType.CHECKING
    holder_name: str = ""
    holder_document: str = ""
    is_primary: bool = False
    pix_keys: list[PixKeySchema] = Field(default_factory=list)


class BankInfoUpdate(BaseModel):
    accounts: list[BankAccountSchema] = Field(default_factory=list)


class BankInfoResponse(BaseModel):
    accounts: list[BankAccountSchema]
    updated_at: datetime


class SettingsUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    organization_name: str = ""
    cnpj: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    registration_validity_months: int = 12
    visit_interval_months: int = 3


class SettingsResponse(BaseModel):
    organization_name: str
    cnpj: str
    phone: str
    email: str
    address: str
    registration_validity_months: int
    visit_interval_months: int
    updated_at: datetime


class AddressResponse(BaseModel):
    postal_code: str
    street: str
    neighborhood: str
    city: str
    state: str


# Dashboard Schemas
class CampaignProgressResponse(BaseModel):
    campaign_id: str
    title: str
    percent: int


class UpcomingVisitResponse(BaseModel):
    family_id: str
    responsible_name: str
    due_date: datetime
    is_late: bool


class DashboardResponse(BaseModel):
    active_families: int
    total_children: int
    active_campaigns: int
    campaign_progress: list[CampaignProgressResponse]
    upcoming_visits: list[UpcomingVisitResponse]
