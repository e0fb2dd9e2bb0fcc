from charity_console.services.address_lookup import AddressLookupService
from charity_console.services.ai_assist import AIAssistService, SuggestedItem
from charity_console.services.campaigns import CampaignService
from charity_console.services.dashboard import (
    CampaignProgress,
    DashboardService,
    DashboardSummary,
    UpcomingVisit,
    build_dashboard,
)
from charity_console.services.events import (
    DeliveryCandidate,
    DeliveryConfirmation,
    EventService,
)
from charity_console.services.families import FamilyService
from charity_console.services.organization import (
    BankInfoService,
    LocationService,
    SettingsService,
)
from charity_console.services.packages import PackageService

__all__ = [
    "AIAssistService",
    "AddressLookupService",
    "BankInfoService",
    "CampaignProgress",
    "CampaignService",
    "DashboardService",
    "DashboardSummary",
    "DeliveryCandidate",
    "DeliveryConfirmation",
    "EventService",
    "FamilyService",
    "LocationService",
    "PackageService",
    "SettingsService",
    "SuggestedItem",
    "UpcomingVisit",
    "build_dashboard",
]
