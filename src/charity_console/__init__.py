from charity_console.domain.campaigns import Campaign, CampaignItem
from charity_console.domain.events import DistributionEvent
from charity_console.domain.families import Child, Family, HistoryEntry
from charity_console.domain.organization import (
    BankAccount,
    OrganizationBankInfo,
    OrganizationLocation,
    OrganizationSettings,
    PixKey,
)
from charity_console.domain.packages import Package, PackageItem
from charity_console.session import OrganizationSession

__all__ = [
    "BankAccount",
    "Campaign",
    "CampaignItem",
    "Child",
    "DistributionEvent",
    "Family",
    "HistoryEntry",
    "OrganizationBankInfo",
    "OrganizationLocation",
    "OrganizationSession",
    "OrganizationSettings",
    "Package",
    "PackageItem",
    "PixKey",
]

__version__ = "0.1.0"
