"""Conversion between domain dataclasses and stored JSON records.

Records use camelCase keys. Decoding is lenient: optional keys may be
missing, timestamps may be date-only, end in ``Z`` or carry no offset
(read as UTC), and unknown enum labels fall back to a default.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar

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
    new_id,
)
from charity_console.repositories.interfaces import Record

E = TypeVar("E", bound=Enum)


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _enum(enum_cls: type[E], value: Any, default: E) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    return Decimal(str(value))


def _number(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


# Families


def child_to_record(child: Child) -> Record:
    return {
        "id": child.id,
        "name": child.name,
        "age": child.age,
        "gender": child.gender.value,
        "clothingSize": child.clothing_size,
        "shoeSize": child.shoe_size,
        "notes": child.notes,
    }


def child_from_record(data: Record) -> Child:
    return Child(
        id=data.get("id") or new_id(),
        name=data.get("name", ""),
        age=int(data.get("age") or 0),
        gender=_enum(Gender, data.get("gender"), Gender.OTHER),
        clothing_size=str(data.get("clothingSize") or ""),
        shoe_size=data.get("shoeSize"),
        notes=data.get("notes") or "",
    )


def history_entry_to_record(entry: HistoryEntry) -> Record:
    return {
        "id": entry.id,
        "type": entry.type.value,
        "date": entry.date.isoformat(),
        "description": entry.description,
        "author": entry.author,
    }


def history_entry_from_record(data: Record) -> HistoryEntry:
    return HistoryEntry(
        id=data.get("id") or new_id(),
        type=_enum(HistoryEntryType, data.get("type"), HistoryEntryType.OTHER),
        date=_parse_datetime(data.get("date")) or datetime.now(UTC),
        description=data.get("description", ""),
        author=data.get("author", ""),
    )


def family_to_record(family: Family) -> Record:
    return {
        "id": family.id,
        "responsibleName": family.responsible_name,
        "cpf": family.cpf,
        "nis": family.nis,
        "address": family.address,
        "postalCode": family.postal_code,
        "phone": family.phone,
        "numberOfAdults": family.number_of_adults,
        "status": family.status.value,
        "registrationDate": family.registration_date.isoformat(),
        "lastReviewDate": _iso(family.last_review_date),
        "history": [history_entry_to_record(e) for e in family.history],
        "children": [child_to_record(c) for c in family.children],
        "isPregnant": family.is_pregnant,
        "pregnancyDueDate": _iso(family.pregnancy_due_date),
        "notes": family.notes,
    }


def family_from_record(data: Record) -> Family:
    return Family(
        id=data["id"],
        responsible_name=data.get("responsibleName", ""),
        cpf=data.get("cpf") or "",
        nis=data.get("nis") or "",
        address=data.get("address") or "",
        postal_code=data.get("postalCode") or "",
        phone=data.get("phone") or "",
        number_of_adults=int(data.get("numberOfAdults", 1) or 0),
        status=_enum(FamilyStatus, data.get("status"), FamilyStatus.ACTIVE),
        registration_date=_parse_datetime(data.get("registrationDate"))
        or datetime.now(UTC),
        last_review_date=_parse_datetime(data.get("lastReviewDate")),
        history=[history_entry_from_record(e) for e in data.get("history") or []],
        children=[child_from_record(c) for c in data.get("children") or []],
        is_pregnant=bool(data.get("isPregnant", False)),
        pregnancy_due_date=_parse_date(data.get("pregnancyDueDate")),
        notes=data.get("notes") or "",
    )


# Campaigns


def campaign_item_to_record(item: CampaignItem) -> Record:
    return {
        "id": item.id,
        "name": item.name,
        "unit": item.unit.value,
        "targetQuantity": item.target_quantity,
        "collectedQuantity": item.collected_quantity,
    }


def campaign_item_from_record(data: Record) -> CampaignItem:
    return CampaignItem(
        id=data.get("id") or new_id(),
        name=data.get("name", ""),
        unit=_enum(ItemUnit, data.get("unit"), ItemUnit.UNIT),
        target_quantity=data.get("targetQuantity") or 0,
        collected_quantity=data.get("collectedQuantity") or 0,
    )


def campaign_to_record(campaign: Campaign) -> Record:
    return {
        "id": campaign.id,
        "title": campaign.title,
        "description": campaign.description,
        "type": campaign.type.value,
        "startDate": campaign.start_date.isoformat(),
        "endDate": campaign.end_date.isoformat(),
        "isActive": campaign.is_active,
        "items": [campaign_item_to_record(i) for i in campaign.items],
        "packageIds": list(campaign.package_ids),
        "beneficiaryFamilyIds": list(campaign.beneficiary_family_ids),
        "bankAccountId": campaign.bank_account_id,
        "createdAt": campaign.created_at.isoformat(),
    }


def campaign_from_record(data: Record) -> Campaign:
    start_date = _parse_date(data.get("startDate")) or date.today()
    return Campaign(
        id=data["id"],
        title=data.get("title", ""),
        description=data.get("description") or "",
        type=_enum(CampaignType, data.get("type"), CampaignType.OTHER),
        start_date=start_date,
        end_date=_parse_date(data.get("endDate")) or start_date,
        is_active=bool(data.get("isActive", True)),
        items=[campaign_item_from_record(i) for i in data.get("items") or []],
        package_ids=list(data.get("packageIds") or []),
        beneficiary_family_ids=list(data.get("beneficiaryFamilyIds") or []),
        bank_account_id=data.get("bankAccountId"),
        created_at=_parse_datetime(data.get("createdAt")) or datetime.now(UTC),
    )


# Packages


def package_item_to_record(item: PackageItem) -> Record:
    return {
        "id": item.id,
        "name": item.name,
        "quantity": item.quantity,
        "unit": item.unit.value,
        "averagePrice": _number(item.average_price),
    }


def package_item_from_record(data: Record) -> PackageItem:
    return PackageItem(
        id=data.get("id") or new_id(),
        name=data.get("name", ""),
        quantity=data.get("quantity") or 0,
        unit=_enum(ItemUnit, data.get("unit"), ItemUnit.UNIT),
        average_price=_decimal(data.get("averagePrice")),
    )


def package_to_record(package: Package) -> Record:
    return {
        "id": package.id,
        "name": package.name,
        "description": package.description,
        "items": [package_item_to_record(i) for i in package.items],
    }


def package_from_record(data: Record) -> Package:
    return Package(
        id=data["id"],
        name=data.get("name", ""),
        description=data.get("description") or "",
        items=[package_item_from_record(i) for i in data.get("items") or []],
    )


# Events


def event_to_record(event: DistributionEvent) -> Record:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "date": event.date.isoformat(),
        "startTime": event.start_time,
        "endTime": event.end_time,
        "location": event.location,
        "locationId": event.location_id,
        "frequency": event.frequency.value,
        "isFree": event.is_free,
        "entryFee": _number(event.entry_fee),
        "isDeliveryEvent": event.is_delivery_event,
        "isRegistrationReview": event.is_registration_review,
        "linkedCampaignIds": list(event.linked_campaign_ids),
        "deliveredFamilyIds": list(event.delivered_family_ids),
        "status": event.status.value,
    }


def event_from_record(data: Record) -> DistributionEvent:
    return DistributionEvent(
        id=data["id"],
        title=data.get("title", ""),
        description=data.get("description") or "",
        date=_parse_date(data.get("date")) or date.today(),
        start_time=data.get("startTime") or "09:00",
        end_time=data.get("endTime") or "12:00",
        location=data.get("location") or "",
        location_id=data.get("locationId"),
        frequency=_enum(EventFrequency, data.get("frequency"), EventFrequency.ONCE),
        is_free=bool(data.get("isFree", True)),
        entry_fee=_decimal(data.get("entryFee")),
        is_delivery_event=bool(data.get("isDeliveryEvent", False)),
        is_registration_review=bool(data.get("isRegistrationReview", False)),
        linked_campaign_ids=list(data.get("linkedCampaignIds") or []),
        delivered_family_ids=list(data.get("deliveredFamilyIds") or []),
        status=_enum(EventStatus, data.get("status"), EventStatus.SCHEDULED),
    )


# Organization


def location_to_record(location: OrganizationLocation) -> Record:
    return {
        "id": location.id,
        "name": location.name,
        "postalCode": location.postal_code,
        "street": location.street,
        "number": location.number,
        "complement": location.complement,
        "neighborhood": location.neighborhood,
        "city": location.city,
        "state": location.state,
        "isMain": location.is_main,
        "notes": location.notes,
    }


def location_from_record(data: Record) -> OrganizationLocation:
    return OrganizationLocation(
        id=data["id"],
        name=data.get("name", ""),
        postal_code=data.get("postalCode") or "",
        street=data.get("street") or "",
        number=data.get("number") or "",
        complement=data.get("complement") or "",
        neighborhood=data.get("neighborhood") or "",
        city=data.get("city") or "",
        state=data.get("state") or "",
        is_main=bool(data.get("isMain", False)),
        notes=data.get("notes") or "",
    )


def pix_key_to_record(key: PixKey) -> Record:
    return {
        "id": key.id,
        "type": key.key_type.value,
        "key": key.key,
        "isPrimary": key.is_primary,
    }


def pix_key_from_record(data: Record) -> PixKey:
    return PixKey(
        id=data.get("id") or new_id(),
        key_type=_enum(PixKeyType, data.get("type"), PixKeyType.RANDOM),
        key=data.get("key", ""),
        is_primary=bool(data.get("isPrimary", False)),
    )


def bank_account_to_record(account: BankAccount) -> Record:
    return {
        "id": account.id,
        "bankName": account.bank_name,
        "agency": account.agency,
        "accountNumber": account.account_number,
        "accountType": account.account_type.value,
        "holderName": account.holder_name,
        "holderDocument": account.holder_document,
        "isPrimary": account.is_primary,
        "pixKeys": [pix_key_to_record(k) for k in account.pix_keys],
    }


def bank_account_from_record(data: Record) -> BankAccount:
    return BankAccount(
        id=data.get("id") or new_id(),
        bank_name=data.get("bankName", ""),
        agency=data.get("agency", ""),
        account_number=data.get("accountNumber", ""),
        account_type=_enum(
            BankAccountType, data.get("accountType"), BankAccountType.CHECKING
        ),
        holder_name=data.get("holderName") or "",
        holder_document=data.get("holderDocument") or "",
        is_primary=bool(data.get("isPrimary", False)),
        pix_keys=[pix_key_from_record(k) for k in data.get("pixKeys") or []],
    )


def bank_info_to_record(info: OrganizationBankInfo) -> Record:
    return {
        "accounts": [bank_account_to_record(a) for a in info.accounts],
        "updatedAt": info.updated_at.isoformat(),
    }


def bank_info_from_record(data: Record) -> OrganizationBankInfo:
    return OrganizationBankInfo(
        accounts=[bank_account_from_record(a) for a in data.get("accounts") or []],
        updated_at=_parse_datetime(data.get("updatedAt")) or datetime.now(UTC),
    )


def settings_to_record(settings: OrganizationSettings) -> Record:
    return {
        "organizationName": settings.organization_name,
        "cnpj": settings.cnpj,
        "phone": settings.phone,
        "email": settings.email,
        "address": settings.address,
        "validityMonths": settings.registration_validity_months,
        "visitIntervalMonths": settings.visit_interval_months,
        "updatedAt": settings.updated_at.isoformat(),
    }


def settings_from_record(data: Record) -> OrganizationSettings:
    defaults = OrganizationSettings()
    return OrganizationSettings(
        organization_name=data.get("organizationName") or "",
        cnpj=data.get("cnpj") or "",
        phone=data.get("phone") or "",
        email=data.get("email") or "",
        address=data.get("address") or "",
        registration_validity_months=int(
            data.get("validityMonths") or defaults.registration_validity_months
        ),
        visit_interval_months=int(
            data.get("visitIntervalMonths") or defaults.visit_interval_months
        ),
        updated_at=_parse_datetime(data.get("updatedAt")) or defaults.updated_at,
    )
