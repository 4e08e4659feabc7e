"""Estate, tenant, landlord and property-type API routes."""

from fastapi import APIRouter, Query

from ...core.exceptions import ResourceNotFoundError
from ..access_control.visibility import accessible_landlords
from ..auth.dependencies import CurrentUser, EditorUser, SuperAdminUser
from ..commons import BaseResponse
from ..sync.dependencies import State, Store, Today
from . import services
from .models import Estate, Tenant
from .schemas import (
    EstateCreate,
    EstateUpdate,
    LandlordCreate,
    LandlordRename,
    PaymentCreate,
    PhaseCreate,
    PhaseRename,
    PropertyTypeCreate,
    TenantCreate,
    TenantUpdate,
)
from .seed import TENANT_FLAT_TYPES
from .views import (
    LandlordPortfolio,
    LocatedTenant,
    PhaseSummary,
    StatusFilter,
    estate_tenants,
    landlord_portfolio,
    phase_summaries,
    property_type_listing,
)

router = APIRouter(prefix="/estates", tags=["Estates"])
landlords_router = APIRouter(prefix="/landlords", tags=["Landlords"])
property_types_router = APIRouter(prefix="/property-types", tags=["Property Types"])


# ----- Estates -----


@router.get("", response_model=BaseResponse[list[Estate]])
async def list_estates(current_user: CurrentUser, state: State):
    """Get the estates visible to the current user."""
    return BaseResponse(success=True, data=services.visible_estates(state, current_user))


@router.post("", response_model=BaseResponse[Estate])
async def create_estate(
    data: EstateCreate, current_user: SuperAdminUser, state: State, store: Store
):
    """Create a new estate."""
    estate = await services.create_estate(store, state, data)
    return BaseResponse(success=True, message="Estate created successfully", data=estate)


@router.get("/{estate_id}", response_model=BaseResponse[Estate])
async def get_estate(estate_id: str, current_user: CurrentUser, state: State):
    """Get an estate with its visible tenants."""
    return BaseResponse(
        success=True, data=services.get_visible_estate(state, current_user, estate_id)
    )


@router.put("/{estate_id}", response_model=BaseResponse[Estate])
async def update_estate(
    estate_id: str,
    data: EstateUpdate,
    current_user: SuperAdminUser,
    state: State,
    store: Store,
):
    """Update estate metadata."""
    estate = await services.update_estate(store, state, current_user, estate_id, data)
    return BaseResponse(success=True, message="Estate updated successfully", data=estate)


@router.delete("/{estate_id}", response_model=BaseResponse[None])
async def delete_estate(
    estate_id: str, current_user: SuperAdminUser, state: State, store: Store
):
    """Move an estate and all its tenants to the archive."""
    await services.archive_estate(store, state, current_user, estate_id)
    return BaseResponse(success=True, message="Estate moved to archive")


# ----- Phases -----


@router.get("/{estate_id}/phases", response_model=BaseResponse[list[PhaseSummary]])
async def list_phases(estate_id: str, current_user: CurrentUser, state: State):
    """Get per-phase totals for an estate."""
    estate = services.get_visible_estate(state, current_user, estate_id)
    return BaseResponse(success=True, data=phase_summaries(estate))


@router.post("/{estate_id}/phases", response_model=BaseResponse[Estate])
async def add_phase(
    estate_id: str,
    data: PhaseCreate,
    current_user: EditorUser,
    state: State,
    store: Store,
):
    """Declare a new phase on an estate."""
    estate = await services.add_phase(store, state, current_user, estate_id, data.name)
    return BaseResponse(success=True, message="Phase added successfully", data=estate)


@router.put("/{estate_id}/phases/{phase}", response_model=BaseResponse[Estate])
async def rename_phase(
    estate_id: str,
    phase: str,
    data: PhaseRename,
    current_user: EditorUser,
    state: State,
    store: Store,
):
    """Rename a phase, moving its tenants with it."""
    estate = await services.rename_phase(
        store, state, current_user, estate_id, phase, data.new_name
    )
    return BaseResponse(success=True, message="Phase renamed successfully", data=estate)


@router.delete("/{estate_id}/phases/{phase}", response_model=BaseResponse[Estate])
async def delete_phase(
    estate_id: str,
    phase: str,
    current_user: EditorUser,
    state: State,
    store: Store,
):
    """Move a phase and its tenants to the archive."""
    estate = await services.delete_phase(store, state, current_user, estate_id, phase)
    return BaseResponse(success=True, message="Phase moved to archive", data=estate)


# ----- Tenants -----


@router.get("/{estate_id}/tenants", response_model=BaseResponse[list[Tenant]])
async def list_tenants(
    estate_id: str,
    current_user: CurrentUser,
    state: State,
    search: str | None = Query(None),
    status: StatusFilter = Query("All"),
    flat_type: str | None = Query(None),
):
    """Get an estate's tenants, filtered by search text, status and flat type."""
    estate = services.get_visible_estate(state, current_user, estate_id)
    return BaseResponse(
        success=True,
        data=estate_tenants(estate, search=search, status=status, flat_type=flat_type),
    )


@router.post("/{estate_id}/tenants", response_model=BaseResponse[Tenant])
async def add_tenant(
    estate_id: str,
    data: TenantCreate,
    current_user: EditorUser,
    state: State,
    store: Store,
    today: Today,
):
    """Add a tenant to an estate."""
    tenant = await services.add_tenant(store, state, current_user, estate_id, data, today)
    return BaseResponse(success=True, message="Tenant added successfully", data=tenant)


@router.get("/{estate_id}/tenants/{tenant_id}", response_model=BaseResponse[Tenant])
async def get_tenant(
    estate_id: str, tenant_id: str, current_user: CurrentUser, state: State
):
    """Get a tenant by ID."""
    return BaseResponse(
        success=True,
        data=services.get_visible_tenant(state, current_user, estate_id, tenant_id),
    )


@router.put("/{estate_id}/tenants/{tenant_id}", response_model=BaseResponse[Tenant])
async def update_tenant(
    estate_id: str,
    tenant_id: str,
    data: TenantUpdate,
    current_user: EditorUser,
    state: State,
    store: Store,
    today: Today,
):
    """Update a tenant."""
    tenant = await services.update_tenant(
        store, state, current_user, estate_id, tenant_id, data, today
    )
    return BaseResponse(success=True, message="Tenant updated successfully", data=tenant)


@router.delete("/{estate_id}/tenants/{tenant_id}", response_model=BaseResponse[None])
async def delete_tenant(
    estate_id: str,
    tenant_id: str,
    current_user: EditorUser,
    state: State,
    store: Store,
):
    """Move a tenant to the archive."""
    await services.archive_tenant(store, state, current_user, estate_id, tenant_id)
    return BaseResponse(success=True, message="Tenant moved to archive")


@router.post(
    "/{estate_id}/tenants/{tenant_id}/payments", response_model=BaseResponse[Tenant]
)
async def record_payment(
    estate_id: str,
    tenant_id: str,
    data: PaymentCreate,
    current_user: EditorUser,
    state: State,
    store: Store,
    today: Today,
):
    """Record a payment against a tenant."""
    tenant = await services.record_payment(
        store, state, current_user, estate_id, tenant_id, data, today
    )
    return BaseResponse(success=True, message="Payment recorded", data=tenant)


@router.delete(
    "/{estate_id}/tenants/{tenant_id}/payments/{payment_id}",
    response_model=BaseResponse[Tenant],
)
async def remove_payment(
    estate_id: str,
    tenant_id: str,
    payment_id: str,
    current_user: EditorUser,
    state: State,
    store: Store,
    today: Today,
):
    """Remove a payment from a tenant's history."""
    tenant = await services.remove_payment(
        store, state, current_user, estate_id, tenant_id, payment_id, today
    )
    return BaseResponse(success=True, message="Payment removed", data=tenant)


# ----- Landlords -----


@landlords_router.get("", response_model=BaseResponse[list[str]])
async def list_landlords(current_user: CurrentUser, state: State):
    """Get the landlords the current user may browse."""
    return BaseResponse(
        success=True,
        data=accessible_landlords(state.landlords, current_user.access_scope),
    )


@landlords_router.post("", response_model=BaseResponse[list[str]])
async def add_landlord(
    data: LandlordCreate, current_user: SuperAdminUser, state: State, store: Store
):
    """Add a landlord."""
    landlords = await services.add_landlord(store, state, data.name)
    return BaseResponse(success=True, message="Landlord added successfully", data=landlords)


@landlords_router.put("/{name}", response_model=BaseResponse[list[str]])
async def rename_landlord(
    name: str,
    data: LandlordRename,
    current_user: SuperAdminUser,
    state: State,
    store: Store,
):
    """Rename a landlord on every tenant that references them."""
    landlords = await services.rename_landlord(store, state, name, data.new_name)
    return BaseResponse(success=True, message="Landlord renamed successfully", data=landlords)


@landlords_router.delete("/{name}", response_model=BaseResponse[None])
async def delete_landlord(
    name: str, current_user: SuperAdminUser, state: State, store: Store
):
    """Archive a landlord that no tenant references."""
    await services.delete_landlord(store, state, name)
    return BaseResponse(success=True, message="Landlord moved to archive")


@landlords_router.get("/{name}/portfolio", response_model=BaseResponse[LandlordPortfolio])
async def get_landlord_portfolio(name: str, current_user: CurrentUser, state: State):
    """Get a landlord's tenants across the visible estates, with totals."""
    if name not in accessible_landlords(state.landlords, current_user.access_scope):
        raise ResourceNotFoundError("Landlord", name)
    estates = services.visible_estates(state, current_user)
    return BaseResponse(success=True, data=landlord_portfolio(estates, name))


# ----- Property types -----


@property_types_router.get("", response_model=BaseResponse[list[str]])
async def list_property_types(current_user: CurrentUser, state: State):
    """Get the property categories."""
    return BaseResponse(success=True, data=state.property_types)


@property_types_router.get("/flat-types", response_model=BaseResponse[list[str]])
async def list_flat_types(current_user: CurrentUser):
    """Get the house types offered when entering a tenant."""
    return BaseResponse(success=True, data=TENANT_FLAT_TYPES)


@property_types_router.post("", response_model=BaseResponse[list[str]])
async def add_property_type(
    data: PropertyTypeCreate, current_user: SuperAdminUser, state: State, store: Store
):
    """Add a property category."""
    types = await services.add_property_type(store, state, data.name)
    return BaseResponse(success=True, message="Property type added successfully", data=types)


@property_types_router.get(
    "/{name}/tenants", response_model=BaseResponse[list[LocatedTenant]]
)
async def list_property_type_tenants(name: str, current_user: CurrentUser, state: State):
    """Get visible tenants whose flat type contains the property type."""
    estates = services.visible_estates(state, current_user)
    return BaseResponse(success=True, data=property_type_listing(estates, name))
