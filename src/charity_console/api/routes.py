"""API routes for Charity Console."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, status

from charity_console.api.schemas import (
    AddressResponse,
    BankAccountSchema,
    BankInfoResponse,
    BankInfoUpdate,
    CampaignCreate,
    CampaignItemSchema,
    CampaignProgressResponse,
    CampaignResponse,
    ChildSchema,
    DashboardResponse,
    DeliveryCandidateResponse,
    DeliveryCreate,
    DeliveryResponse,
    DescribeCampaignRequest,
    DescriptionResponse,
    EventCreate,
    EventResponse,
    FamilyCreate,
    FamilyExtractRequest,
    FamilyResponse,
    FamilyUpdate,
    HealthResponse,
    HistoryEntryCreate,
    HistoryEntryResponse,
    LocationCreate,
    LocationResponse,
    PackageCreate,
    PackageItemSchema,
    PackageResponse,
    PixKeySchema,
    RecomputeItemsRequest,
    SettingsResponse,
    SettingsUpdate,
    SuggestItemsRequest,
    UpcomingVisitResponse,
)
from charity_console.container import Container, get_container
from charity_console.domain import (
    Address,
    BankAccount,
    Campaign,
    CampaignItem,
    Child,
    DistributionEvent,
    Family,
    HistoryEntry,
    OrganizationBankInfo,
    OrganizationLocation,
    OrganizationSettings,
    Package,
    PackageItem,
    PixKey,
)
from charity_console.domain.value_objects import new_id
from charity_console.logging_config import bind_context
from charity_console.services.dashboard import DashboardSummary
from charity_console.session import OrganizationSession

health_router = APIRouter(tags=["health"])
family_router = APIRouter(prefix="/families", tags=["families"])
campaign_router = APIRouter(prefix="/campaigns", tags=["campaigns"])
package_router = APIRouter(prefix="/packages", tags=["packages"])
event_router = APIRouter(prefix="/events", tags=["events"])
location_router = APIRouter(prefix="/locations", tags=["locations"])
bank_info_router = APIRouter(prefix="/bank-info", tags=["bank-info"])
settings_router = APIRouter(prefix="/settings", tags=["settings"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])
address_router = APIRouter(prefix="/address", tags=["address"])


def get_session(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_email: Annotated[str | None, Header()] = None,
) -> OrganizationSession:
    """Build the organization session from the caller's identity headers."""
    session = OrganizationSession(user_id=x_user_id or None, email=x_user_email)
    if session.is_authenticated:
        bind_context(namespace=session.namespace)
    return session


ContainerDep = Annotated[Container, Depends(get_container)]
SessionDep = Annotated[OrganizationSession, Depends(get_session)]


# Helper functions
def _child_to_schema(child: Child) -> ChildSchema:
    return ChildSchema(
        id=child.id,
        name=child.name,
        age=child.age,
        gender=child.gender,
        clothing_size=child.clothing_size,
        shoe_size=child.shoe_size,
        notes=child.notes,
    )


def _child_from_schema(data: ChildSchema) -> Child:
    return Child(
        id=data.id or new_id(),
        name=data.name,
        age=data.age,
        gender=data.gender,
        clothing_size=data.clothing_size,
        shoe_size=data.shoe_size,
        notes=data.notes,
    )


def _history_to_response(entry: HistoryEntry) -> HistoryEntryResponse:
    return HistoryEntryResponse(
        id=entry.id,
        type=entry.type,
        date=entry.date,
        description=entry.description,
        author=entry.author,
    )


def _family_to_response(family: Family) -> FamilyResponse:
    return FamilyResponse(
        id=family.id,
        responsible_name=family.responsible_name,
        cpf=family.cpf,
        nis=family.nis,
        address=family.address,
        postal_code=family.postal_code,
        phone=family.phone,
        number_of_adults=family.number_of_adults,
        status=family.status,
        registration_date=family.registration_date,
        last_review_date=family.last_review_date,
        history=[_history_to_response(e) for e in family.history],
        children=[_child_to_schema(c) for c in family.children],
        is_pregnant=family.is_pregnant,
        pregnancy_due_date=family.pregnancy_due_date,
        notes=family.notes,
    )


def _apply_family_fields(family: Family, data: FamilyCreate) -> Family:
    family.responsible_name = data.responsible_name
    family.cpf = data.cpf
    family.nis = data.nis
    family.address = data.address
    family.postal_code = data.postal_code
    family.phone = data.phone
    family.number_of_adults = data.number_of_adults
    family.children = [_child_from_schema(c) for c in data.children]
    family.is_pregnant = data.is_pregnant
    family.pregnancy_due_date = data.pregnancy_due_date
    family.notes = data.notes
    return family


def _campaign_item_to_schema(item: CampaignItem) -> CampaignItemSchema:
    return CampaignItemSchema(
        id=item.id,
        name=item.name,
        unit=item.unit,
        target_quantity=item.target_quantity,
        collected_quantity=item.collected_quantity,
    )


def _campaign_item_from_schema(data: CampaignItemSchema) -> CampaignItem:
    return CampaignItem(
        id=data.id or new_id(),
        name=data.name,
        unit=data.unit,
        target_quantity=data.target_quantity,
        collected_quantity=data.collected_quantity,
    )


def _campaign_to_response(campaign: Campaign) -> CampaignResponse:
    return CampaignResponse(
        id=campaign.id,
        title=campaign.title,
        description=campaign.description,
        type=campaign.type,
        start_date=campaign.start_date,
        end_date=campaign.end_date,
        is_active=campaign.is_active,
        items=[_campaign_item_to_schema(i) for i in campaign.items],
        package_ids=campaign.package_ids,
        beneficiary_family_ids=campaign.beneficiary_family_ids,
        bank_account_id=campaign.bank_account_id,
        created_at=campaign.created_at,
        progress_percent=campaign.progress_percent(),
    )


def _campaign_from_create(data: CampaignCreate, campaign_id: str | None = None) -> Campaign:
    return Campaign(
        id=campaign_id or new_id(),
        title=data.title,
        description=data.description,
        type=data.type,
        start_date=data.start_date,
        end_date=data.end_date,
        is_active=data.is_active,
        items=[_campaign_item_from_schema(i) for i in data.items],
        package_ids=list(data.package_ids),
        beneficiary_family_ids=list(data.beneficiary_family_ids),
        bank_account_id=data.bank_account_id,
    )


def _package_item_to_schema(item: PackageItem) -> PackageItemSchema:
    return PackageItemSchema(
        id=item.id,
        name=item.name,
        quantity=item.quantity,
        unit=item.unit,
        average_price=item.average_price,
    )


def _package_to_response(package: Package) -> PackageResponse:
    return PackageResponse(
        id=package.id,
        name=package.name,
        description=package.description,
        items=[_package_item_to_schema(i) for i in package.items],
        estimated_cost=package.estimated_cost,
    )


def _package_from_create(data: PackageCreate, package_id: str | None = None) -> Package:
    return Package(
        id=package_id or new_id(),
        name=data.name,
        description=data.description,
        items=[
            PackageItem(
                id=i.id or new_id(),
                name=i.name,
                quantity=i.quantity,
                unit=i.unit,
                average_price=i.average_price,
            )
            for i in data.items
        ],
    )


def _event_to_response(event: DistributionEvent) -> EventResponse:
    return EventResponse(
        id=event.id,
        title=event.title,
        description=event.description,
        date=event.date,
        start_time=event.start_time,
        end_time=event.end_time,
        location=event.location,
        location_id=event.location_id,
        frequency=event.frequency,
        is_free=event.is_free,
        entry_fee=event.entry_fee,
        is_delivery_event=event.is_delivery_event,
        is_registration_review=event.is_registration_review,
        linked_campaign_ids=event.linked_campaign_ids,
        delivered_family_ids=event.delivered_family_ids,
        status=event.status,
    )


def _event_from_create(
    data: EventCreate,
    event_id: str | None = None,
    delivered_family_ids: list[str] | None = None,
) -> DistributionEvent:
    return DistributionEvent(
        id=event_id or new_id(),
        title=data.title,
        description=data.description,
        date=data.date,
        start_time=data.start_time,
        end_time=data.end_time,
        location=data.location,
        location_id=data.location_id,
        frequency=data.frequency,
        is_free=data.is_free,
        entry_fee=data.entry_fee,
        is_delivery_event=data.is_delivery_event,
        is_registration_review=data.is_registration_review,
        linked_campaign_ids=list(data.linked_campaign_ids),
        delivered_family_ids=list(delivered_family_ids or []),
        status=data.status,
    )


def _location_to_response(location: OrganizationLocation) -> LocationResponse:
    return LocationResponse(
        id=location.id,
        name=location.name,
        postal_code=location.postal_code,
        street=location.street,
        number=location.number,
        complement=location.complement,
        neighborhood=location.neighborhood,
        city=location.city,
        state=location.state,
        is_main=location.is_main,
        notes=location.notes,
        full_address=location.full_address,
    )


def _location_from_create(
    data: LocationCreate, location_id: str | None = None
) -> OrganizationLocation:
    return OrganizationLocation(
        id=location_id or new_id(),
        name=data.name,
        postal_code=data.postal_code,
        street=data.street,
        number=data.number,
        complement=data.complement,
        neighborhood=data.neighborhood,
        city=data.city,
        state=data.state,
        is_main=data.is_main,
        notes=data.notes,
    )


def _account_to_schema(account: BankAccount) -> BankAccountSchema:
    return BankAccountSchema(
        id=account.id,
        bank_name=account.bank_name,
        agency=account.agency,
        account_number=account.account_number,
        account_type=account.account_type,
        holder_name=account.holder_name,
        holder_document=account.holder_document,
        is_primary=account.is_primary,
        pix_keys=[
            PixKeySchema(
                id=k.id, key_type=k.key_type, key=k.key, is_primary=k.is_primary
            )
            for k in account.pix_keys
        ],
    )


def _account_from_schema(data: BankAccountSchema) -> BankAccount:
    return BankAccount(
        id=data.id or new_id(),
        bank_name=data.bank_name,
        agency=data.agency,
        account_number=data.account_number,
        account_type=data.account_type,
        holder_name=data.holder_name,
        holder_document=data.holder_document,
        is_primary=data.is_primary,
        pix_keys=[
            PixKey(
                id=k.id or new_id(),
                key_type=k.key_type,
                key=k.key,
                is_primary=k.is_primary,
            )
            for k in data.pix_keys
        ],
    )


def _bank_info_to_response(info: OrganizationBankInfo) -> BankInfoResponse:
    return BankInfoResponse(
        accounts=[_account_to_schema(a) for a in info.accounts],
        updated_at=info.updated_at,
    )


def _settings_to_response(settings: OrganizationSettings) -> SettingsResponse:
    return SettingsResponse(
        organization_name=settings.organization_name,
        cnpj=settings.cnpj,
        phone=settings.phone,
        email=settings.email,
        address=settings.address,
        registration_validity_months=settings.registration_validity_months,
        visit_interval_months=settings.visit_interval_months,
        updated_at=settings.updated_at,
    )


def _address_to_response(address: Address) -> AddressResponse:
    return AddressResponse(
        postal_code=address.postal_code,
        street=address.street,
        neighborhood=address.neighborhood,
        city=address.city,
        state=address.state,
    )


def _dashboard_to_response(summary: DashboardSummary) -> DashboardResponse:
    return DashboardResponse(
        active_families=summary.active_families,
        total_children=summary.total_children,
        active_campaigns=summary.active_campaigns,
        campaign_progress=[
            CampaignProgressResponse(
                campaign_id=p.campaign_id, title=p.title, percent=p.percent
            )
            for p in summary.campaign_progress
        ],
        upcoming_visits=[
            UpcomingVisitResponse(
                family_id=v.family_id,
                responsible_name=v.responsible_name,
                due_date=v.due_date,
                is_late=v.is_late,
            )
            for v in summary.upcoming_visits
        ],
    )


# Health
@health_router.get("/health", response_model=HealthResponse)
def health_check(container: ContainerDep) -> HealthResponse:
    settings = container.settings
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        document_store=settings.document_store.value,
        ai_assist_enabled=container.ai_assist_service.is_available,
    )


# Families
@family_router.get("", response_model=list[FamilyResponse])
def list_families(container: ContainerDep, session: SessionDep) -> list[FamilyResponse]:
    return [
        _family_to_response(f)
        for f in container.family_service.list_families(session)
    ]


@family_router.post("", response_model=FamilyResponse, status_code=status.HTTP_201_CREATED)
def create_family(
    body: FamilyCreate, container: ContainerDep, session: SessionDep
) -> FamilyResponse:
    family = _apply_family_fields(Family(responsible_name=body.responsible_name), body)
    created = container.family_service.create_family(
        session, family, author=session.display_name
    )
    return _family_to_response(created)


@family_router.post("/extract", response_model=FamilyResponse)
def extract_family(body: FamilyExtractRequest, container: ContainerDep) -> FamilyResponse:
    """Read a family record out of free text. Nothing is saved."""
    return _family_to_response(container.ai_assist_service.extract_family(body.text))


@family_router.get("/{family_id}", response_model=FamilyResponse)
def get_family(
    family_id: str, container: ContainerDep, session: SessionDep
) -> FamilyResponse:
    return _family_to_response(container.family_service.get_family(session, family_id))


@family_router.put("/{family_id}", response_model=FamilyResponse)
def update_family(
    family_id: str, body: FamilyUpdate, container: ContainerDep, session: SessionDep
) -> FamilyResponse:
    family = _apply_family_fields(
        container.family_service.get_family(session, family_id), body
    )
    if body.status is not None:
        family.status = body.status
    updated = container.family_service.update_family(
        session, family, renew=body.renew, author=session.display_name
    )
    return _family_to_response(updated)


@family_router.delete("/{family_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_family(family_id: str, container: ContainerDep, session: SessionDep) -> None:
    container.family_service.delete_family(session, family_id)


@family_router.post("/{family_id}/renew", response_model=FamilyResponse)
def renew_family(
    family_id: str, container: ContainerDep, session: SessionDep
) -> FamilyResponse:
    family = container.family_service.renew_family(
        session, family_id, author=session.display_name
    )
    return _family_to_response(family)


@family_router.post(
    "/{family_id}/history",
    response_model=HistoryEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_history_entry(
    family_id: str,
    body: HistoryEntryCreate,
    container: ContainerDep,
    session: SessionDep,
) -> HistoryEntryResponse:
    entry = container.family_service.add_history_entry(
        session,
        family_id,
        body.type,
        body.description,
        author=session.display_name,
        when=body.date,
    )
    return _history_to_response(entry)


# Campaigns
@campaign_router.get("", response_model=list[CampaignResponse])
def list_campaigns(container: ContainerDep, session: SessionDep) -> list[CampaignResponse]:
    return [
        _campaign_to_response(c)
        for c in container.campaign_service.list_campaigns(session)
    ]


@campaign_router.post(
    "", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED
)
def create_campaign(
    body: CampaignCreate, container: ContainerDep, session: SessionDep
) -> CampaignResponse:
    campaign = container.campaign_service.create_campaign(
        session, _campaign_from_create(body)
    )
    return _campaign_to_response(campaign)


@campaign_router.post("/describe", response_model=DescriptionResponse)
def describe_campaign(
    body: DescribeCampaignRequest, container: ContainerDep
) -> DescriptionResponse:
    description = container.ai_assist_service.generate_campaign_description(
        body.title, body.type, [_campaign_item_from_schema(i) for i in body.items]
    )
    return DescriptionResponse(description=description)


@campaign_router.get("/{campaign_id}", response_model=CampaignResponse)
def get_campaign(
    campaign_id: str, container: ContainerDep, session: SessionDep
) -> CampaignResponse:
    return _campaign_to_response(
        container.campaign_service.get_campaign(session, campaign_id)
    )


@campaign_router.put("/{campaign_id}", response_model=CampaignResponse)
def update_campaign(
    campaign_id: str,
    body: CampaignCreate,
    container: ContainerDep,
    session: SessionDep,
) -> CampaignResponse:
    stored = container.campaign_service.get_campaign(session, campaign_id)
    campaign = _campaign_from_create(body, campaign_id)
    campaign.created_at = stored.created_at
    return _campaign_to_response(
        container.campaign_service.update_campaign(session, campaign)
    )


@campaign_router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_campaign(
    campaign_id: str, container: ContainerDep, session: SessionDep
) -> None:
    container.campaign_service.delete_campaign(session, campaign_id)


@campaign_router.post("/{campaign_id}/toggle", response_model=CampaignResponse)
def toggle_campaign(
    campaign_id: str, container: ContainerDep, session: SessionDep
) -> CampaignResponse:
    return _campaign_to_response(
        container.campaign_service.toggle_status(session, campaign_id)
    )


@campaign_router.post("/{campaign_id}/recompute-items", response_model=CampaignResponse)
def recompute_campaign_items(
    campaign_id: str,
    body: RecomputeItemsRequest,
    container: ContainerDep,
    session: SessionDep,
) -> CampaignResponse:
    campaign = container.campaign_service.recompute_items(
        session,
        campaign_id,
        package_ids=body.package_ids,
        family_ids=body.family_ids,
    )
    return _campaign_to_response(campaign)


# Packages
@package_router.get("", response_model=list[PackageResponse])
def list_packages(container: ContainerDep, session: SessionDep) -> list[PackageResponse]:
    return [
        _package_to_response(p)
        for p in container.package_service.list_packages(session)
    ]


@package_router.post(
    "", response_model=PackageResponse, status_code=status.HTTP_201_CREATED
)
def create_package(
    body: PackageCreate, container: ContainerDep, session: SessionDep
) -> PackageResponse:
    package = container.package_service.save_package(
        session, _package_from_create(body)
    )
    return _package_to_response(package)


@package_router.post("/suggest-items", response_model=list[PackageItemSchema])
def suggest_package_items(
    body: SuggestItemsRequest, container: ContainerDep
) -> list[PackageItemSchema]:
    items = container.package_service.suggest_items(body.name, body.description)
    return [_package_item_to_schema(i) for i in items]


@package_router.get("/{package_id}", response_model=PackageResponse)
def get_package(
    package_id: str, container: ContainerDep, session: SessionDep
) -> PackageResponse:
    return _package_to_response(
        container.package_service.get_package(session, package_id)
    )


@package_router.put("/{package_id}", response_model=PackageResponse)
def update_package(
    package_id: str,
    body: PackageCreate,
    container: ContainerDep,
    session: SessionDep,
) -> PackageResponse:
    container.package_service.get_package(session, package_id)
    package = container.package_service.save_package(
        session, _package_from_create(body, package_id)
    )
    return _package_to_response(package)


@package_router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_package(package_id: str, container: ContainerDep, session: SessionDep) -> None:
    container.package_service.delete_package(session, package_id)


# Events
@event_router.get("", response_model=list[EventResponse])
def list_events(container: ContainerDep, session: SessionDep) -> list[EventResponse]:
    return [_event_to_response(e) for e in container.event_service.list_events(session)]


@event_router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    body: EventCreate, container: ContainerDep, session: SessionDep
) -> EventResponse:
    event = container.event_service.create_event(session, _event_from_create(body))
    return _event_to_response(event)


@event_router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: str, container: ContainerDep, session: SessionDep) -> EventResponse:
    return _event_to_response(container.event_service.get_event(session, event_id))


@event_router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str, body: EventCreate, container: ContainerDep, session: SessionDep
) -> EventResponse:
    stored = container.event_service.get_event(session, event_id)
    event = _event_from_create(body, event_id, stored.delivered_family_ids)
    return _event_to_response(container.event_service.update_event(session, event))


@event_router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, container: ContainerDep, session: SessionDep) -> None:
    container.event_service.delete_event(session, event_id)


@event_router.get("/{event_id}/linkable-campaigns", response_model=list[CampaignResponse])
def list_linkable_campaigns(
    event_id: str, container: ContainerDep, session: SessionDep
) -> list[CampaignResponse]:
    return [
        _campaign_to_response(c)
        for c in container.event_service.linkable_campaigns(session, event_id)
    ]


@event_router.get(
    "/{event_id}/delivery-candidates", response_model=list[DeliveryCandidateResponse]
)
def list_delivery_candidates(
    event_id: str, container: ContainerDep, session: SessionDep
) -> list[DeliveryCandidateResponse]:
    return [
        DeliveryCandidateResponse(
            family_id=c.family.id,
            responsible_name=c.family.responsible_name,
            family_status=c.family.status,
            campaign_id=c.campaign.id,
            campaign_title=c.campaign.title,
            delivered=c.delivered,
        )
        for c in container.event_service.delivery_candidates(session, event_id)
    ]


@event_router.post("/{event_id}/deliveries", response_model=DeliveryResponse)
def confirm_delivery(
    event_id: str,
    body: DeliveryCreate,
    container: ContainerDep,
    session: SessionDep,
) -> DeliveryResponse:
    result = container.event_service.confirm_delivery(
        session,
        event_id,
        body.family_id,
        body.campaign_id,
        author=session.display_name,
    )
    return DeliveryResponse(
        event=_event_to_response(result.event),
        family=_family_to_response(result.family),
        newly_delivered=result.newly_delivered,
    )


@event_router.post(
    "/{event_id}/clone", response_model=EventResponse, status_code=status.HTTP_201_CREATED
)
def clone_event(event_id: str, container: ContainerDep, session: SessionDep) -> EventResponse:
    return _event_to_response(container.event_service.clone_event(session, event_id))


# Locations
@location_router.get("", response_model=list[LocationResponse])
def list_locations(container: ContainerDep, session: SessionDep) -> list[LocationResponse]:
    return [
        _location_to_response(loc)
        for loc in container.location_service.list_locations(session)
    ]


@location_router.post(
    "", response_model=LocationResponse, status_code=status.HTTP_201_CREATED
)
def create_location(
    body: LocationCreate, container: ContainerDep, session: SessionDep
) -> LocationResponse:
    location = _location_from_create(body)
    if body.fill_address:
        container.location_service.fill_address(location, body.postal_code)
    return _location_to_response(
        container.location_service.save_location(session, location)
    )


@location_router.get("/{location_id}", response_model=LocationResponse)
def get_location(
    location_id: str, container: ContainerDep, session: SessionDep
) -> LocationResponse:
    return _location_to_response(
        container.location_service.get_location(session, location_id)
    )


@location_router.put("/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: str,
    body: LocationCreate,
    container: ContainerDep,
    session: SessionDep,
) -> LocationResponse:
    container.location_service.get_location(session, location_id)
    location = _location_from_create(body, location_id)
    if body.fill_address:
        container.location_service.fill_address(location, body.postal_code)
    return _location_to_response(
        container.location_service.save_location(session, location)
    )


@location_router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location(
    location_id: str, container: ContainerDep, session: SessionDep
) -> None:
    container.location_service.delete_location(session, location_id)


# Bank info
@bank_info_router.get("", response_model=BankInfoResponse)
def get_bank_info(container: ContainerDep, session: SessionDep) -> BankInfoResponse:
    return _bank_info_to_response(container.bank_info_service.get_bank_info(session))


@bank_info_router.put("", response_model=BankInfoResponse)
def save_bank_info(
    body: BankInfoUpdate, container: ContainerDep, session: SessionDep
) -> BankInfoResponse:
    info = OrganizationBankInfo(
        accounts=[_account_from_schema(a) for a in body.accounts]
    )
    return _bank_info_to_response(
        container.bank_info_service.save_bank_info(session, info)
    )


@bank_info_router.post(
    "/accounts", response_model=BankInfoResponse, status_code=status.HTTP_201_CREATED
)
def add_bank_account(
    body: BankAccountSchema, container: ContainerDep, session: SessionDep
) -> BankInfoResponse:
    return _bank_info_to_response(
        container.bank_info_service.add_account(session, _account_from_schema(body))
    )


@bank_info_router.delete("/accounts/{account_id}", response_model=BankInfoResponse)
def remove_bank_account(
    account_id: str, container: ContainerDep, session: SessionDep
) -> BankInfoResponse:
    return _bank_info_to_response(
        container.bank_info_service.remove_account(session, account_id)
    )


@bank_info_router.post("/accounts/{account_id}/primary", response_model=BankInfoResponse)
def set_primary_account(
    account_id: str, container: ContainerDep, session: SessionDep
) -> BankInfoResponse:
    return _bank_info_to_response(
        container.bank_info_service.set_primary_account(session, account_id)
    )


@bank_info_router.post(
    "/accounts/{account_id}/pix-keys/{key_id}/primary",
    response_model=BankInfoResponse,
)
def set_primary_pix_key(
    account_id: str, key_id: str, container: ContainerDep, session: SessionDep
) -> BankInfoResponse:
    return _bank_info_to_response(
        container.bank_info_service.set_primary_pix_key(session, account_id, key_id)
    )


# Settings
@settings_router.get("", response_model=SettingsResponse)
def get_organization_settings(
    container: ContainerDep, session: SessionDep
) -> SettingsResponse:
    return _settings_to_response(container.settings_service.get_settings(session))


@settings_router.put("", response_model=SettingsResponse)
def save_organization_settings(
    body: SettingsUpdate, container: ContainerDep, session: SessionDep
) -> SettingsResponse:
    settings = OrganizationSettings(
        organization_name=body.organization_name,
        cnpj=body.cnpj,
        phone=body.phone,
        email=body.email,
        address=body.address,
        registration_validity_months=body.registration_validity_months,
        visit_interval_months=body.visit_interval_months,
    )
    return _settings_to_response(
        container.settings_service.save_settings(session, settings)
    )


# Dashboard
@dashboard_router.get("", response_model=DashboardResponse)
def get_dashboard(container: ContainerDep, session: SessionDep) -> DashboardResponse:
    return _dashboard_to_response(container.dashboard_service.summary(session))


# Address lookup
@address_router.get("/{postal_code}", response_model=AddressResponse)
def lookup_address(postal_code: str, container: ContainerDep) -> AddressResponse:
    return _address_to_response(container.address_lookup_service.lookup(postal_code))
