from charity_console.repositories.entities import (
    BankInfoRepository,
    CampaignRepository,
    DocumentRepository,
    EventRepository,
    FamilyRepository,
    LocationRepository,
    PackageRepository,
    SettingsRepository,
)
from charity_console.repositories.interfaces import DocumentStore, Record
from charity_console.repositories.memory import InMemoryDocumentStore
from charity_console.repositories.sqlite import SQLiteDatabase, SQLiteDocumentStore

__all__ = [
    "BankInfoRepository",
    "CampaignRepository",
    "DocumentRepository",
    "DocumentStore",
    "EventRepository",
    "FamilyRepository",
    "InMemoryDocumentStore",
    "LocationRepository",
    "PackageRepository",
    "Record",
    "SQLiteDatabase",
    "SQLiteDocumentStore",
    "SettingsRepository",
]
