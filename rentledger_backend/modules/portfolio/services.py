"""Portfolio business logic services.

Each operation checks the caller's visibility, applies a state-container
operation and overwrites the collections it changed.
"""

import logging
import time
from datetime import date

from ...core.exceptions import ResourceNotFoundError
from ...core.utils import generate_id
from ..access_control.visibility import filter_estates_by_scope, visible_estate
from ..auth.models import UserProfile
from ..sync.snapshot import save_state
from ..sync.store import DocumentStore
from .models import Estate, PaymentRecord, Tenant
from .schemas import (
    EstateCreate,
    EstateUpdate,
    PaymentCreate,
    TenantCreate,
    TenantUpdate,
)
from .state import PortfolioState

logger = logging.getLogger(__name__)


def visible_estates(state: PortfolioState, user: UserProfile) -> list[Estate]:
    return filter_estates_by_scope(state.estates, user.access_scope)


def get_visible_estate(state: PortfolioState, user: UserProfile, estate_id: str) -> Estate:
    """The user's view of an estate.

    Raises:
        ResourceNotFoundError: If the estate does not exist or is out of scope
    """
    estate = visible_estate(state.estates, estate_id, user.access_scope)
    if estate is None:
        raise ResourceNotFoundError("Estate", estate_id)
    return estate


def get_visible_tenant(
    state: PortfolioState, user: UserProfile, estate_id: str, tenant_id: str
) -> Tenant:
    tenant = get_visible_estate(state, user, estate_id).find_tenant(tenant_id)
    if tenant is None:
        raise ResourceNotFoundError("Tenant", tenant_id)
    return tenant


# ----- Estates -----


async def create_estate(
    store: DocumentStore, state: PortfolioState, data: EstateCreate
) -> Estate:
    estate = Estate(id=generate_id("est"), **data.model_dump())
    new_state = state.add_estate(estate)
    await save_state(store, new_state, ["estates"])
    logger.info(f"Created estate {estate.id} ({estate.name})")
    return new_state.get_estate(estate.id)


async def update_estate(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    data: EstateUpdate,
) -> Estate:
    get_visible_estate(state, user, estate_id)
    new_state = state.update_estate(estate_id, data.model_dump(exclude_unset=True))
    await save_state(store, new_state, ["estates"])
    logger.info(f"Updated estate {estate_id}")
    return new_state.get_estate(estate_id)


async def archive_estate(
    store: DocumentStore, state: PortfolioState, user: UserProfile, estate_id: str
) -> None:
    get_visible_estate(state, user, estate_id)
    new_state = state.archive_estate(estate_id)
    await save_state(store, new_state, ["estates", "archived_items"])
    logger.info(f"Archived estate {estate_id}")


# ----- Phases -----


async def add_phase(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    phase: str,
) -> Estate:
    get_visible_estate(state, user, estate_id)
    new_state = state.add_phase(estate_id, phase.strip())
    await save_state(store, new_state, ["estates"])
    logger.info(f"Added phase '{phase}' to estate {estate_id}")
    return new_state.get_estate(estate_id)


async def rename_phase(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    old_name: str,
    new_name: str,
) -> Estate:
    get_visible_estate(state, user, estate_id)
    new_state = state.rename_phase(estate_id, old_name, new_name.strip())
    await save_state(store, new_state, ["estates"])
    logger.info(f"Renamed phase '{old_name}' to '{new_name}' in estate {estate_id}")
    return new_state.get_estate(estate_id)


async def delete_phase(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    phase: str,
) -> Estate:
    get_visible_estate(state, user, estate_id)
    new_state = state.delete_phase(estate_id, phase)
    await save_state(store, new_state, ["estates", "archived_items"])
    logger.info(f"Archived phase '{phase}' of estate {estate_id}")
    return new_state.get_estate(estate_id)


# ----- Tenants -----


async def add_tenant(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    data: TenantCreate,
    today: date,
) -> Tenant:
    """Add a tenant. A non-empty payment history sets rent paid."""
    get_visible_estate(state, user, estate_id)
    tenant_id = f"{estate_id}-t-{int(time.time() * 1000)}"
    payments = [
        PaymentRecord(id=f"{tenant_id}-p{i}", **p.model_dump())
        for i, p in enumerate(data.payment_history, start=1)
    ]
    fields = data.model_dump(exclude={"payment_history", "status"})
    tenant = Tenant(id=tenant_id, payment_history=payments, **fields)
    if data.status is not None:
        tenant = tenant.model_copy(update={"status": data.status})
    new_state = state.add_tenant(estate_id, tenant, today)
    await save_state(store, new_state, ["estates"])
    logger.info(f"Added tenant {tenant_id} to estate {estate_id}")
    return new_state.get_tenant(estate_id, tenant_id)


async def update_tenant(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    tenant_id: str,
    data: TenantUpdate,
    today: date,
) -> Tenant:
    get_visible_tenant(state, user, estate_id, tenant_id)
    changes = data.model_dump(exclude_unset=True)
    new_state = state.update_tenant(estate_id, tenant_id, changes, today)
    await save_state(store, new_state, ["estates"])
    logger.info(f"Updated tenant {tenant_id}: {', '.join(sorted(changes))}")
    return new_state.get_tenant(estate_id, tenant_id)


async def archive_tenant(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    tenant_id: str,
) -> None:
    get_visible_tenant(state, user, estate_id, tenant_id)
    new_state = state.archive_tenant(estate_id, tenant_id)
    await save_state(store, new_state, ["estates", "archived_items"])
    logger.info(f"Archived tenant {tenant_id} of estate {estate_id}")


async def record_payment(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    tenant_id: str,
    data: PaymentCreate,
    today: date,
) -> Tenant:
    get_visible_tenant(state, user, estate_id, tenant_id)
    payment = PaymentRecord(id=generate_id("pay"), **data.model_dump())
    new_state = state.record_payment(estate_id, tenant_id, payment, today)
    await save_state(store, new_state, ["estates"])
    logger.info(f"Recorded payment {payment.id} of {payment.amount} for tenant {tenant_id}")
    return new_state.get_tenant(estate_id, tenant_id)


async def remove_payment(
    store: DocumentStore,
    state: PortfolioState,
    user: UserProfile,
    estate_id: str,
    tenant_id: str,
    payment_id: str,
    today: date,
) -> Tenant:
    get_visible_tenant(state, user, estate_id, tenant_id)
    new_state = state.remove_payment(estate_id, tenant_id, payment_id, today)
    await save_state(store, new_state, ["estates"])
    logger.info(f"Removed payment {payment_id} from tenant {tenant_id}")
    return new_state.get_tenant(estate_id, tenant_id)


# ----- Landlords & property types -----


async def add_landlord(store: DocumentStore, state: PortfolioState, name: str) -> list[str]:
    new_state = state.add_landlord(name.strip())
    await save_state(store, new_state, ["landlords"])
    logger.info(f"Added landlord '{name}'")
    return new_state.landlords


async def rename_landlord(
    store: DocumentStore, state: PortfolioState, old_name: str, new_name: str
) -> list[str]:
    new_state = state.rename_landlord(old_name, new_name.strip())
    await save_state(store, new_state, ["estates", "landlords"])
    logger.info(f"Renamed landlord '{old_name}' to '{new_name}'")
    return new_state.landlords


async def delete_landlord(store: DocumentStore, state: PortfolioState, name: str) -> None:
    new_state = state.delete_landlord(name)
    await save_state(store, new_state, ["landlords", "archived_items"])
    logger.info(f"Archived landlord '{name}'")


async def add_property_type(
    store: DocumentStore, state: PortfolioState, name: str
) -> list[str]:
    new_state = state.add_property_type(name.strip())
    await save_state(store, new_state, ["property_types"])
    logger.info(f"Added property type '{name}'")
    return new_state.property_types
