from charity_console.domain.campaigns import (
    Campaign,
    CampaignItem,
    recompute_campaign_items,
)
from charity_console.domain.events import DistributionEvent
from charity_console.domain.families import Child, Family, HistoryEntry
from charity_console.domain.organization import (
    Address,
    BankAccount,
    OrganizationBankInfo,
    OrganizationLocation,
    OrganizationSettings,
    PixKey,
)
from charity_console.domain.packages import Package, PackageItem
from charity_console.domain.value_objects import (
    BankAccountType,
    CampaignType,
    ClothingSize,
    EventFrequency,
    EventStatus,
    FamilyStatus,
    Gender,
    HistoryEntryType,
    ItemUnit,
    PixKeyType,
)

__all__ = [
    "Address",
    "BankAccount",
    "BankAccountType",
    "Campaign",
    "CampaignItem",
    "CampaignType",
    "Child",
    "ClothingSize",
    "DistributionEvent",
    "EventFrequency",
    "EventStatus",
    "Family",
    "FamilyStatus",
    "Gender",
    "HistoryEntry",
    "HistoryEntryType",
    "ItemUnit",
    "OrganizationBankInfo",
    "OrganizationLocation",
    "OrganizationSettings",
    "Package",
    "PackageItem",
    "PixKey",
    "PixKeyType",
    "recompute_campaign_items",
]
