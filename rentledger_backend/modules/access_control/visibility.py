"""Scope-based visibility filtering with rollups over the visible subset."""

from ..portfolio.ledger import with_rollups
from ..portfolio.models import Estate, Tenant
from .models import AccessScope, landlord_estate_key, phase_key


def _tenant_visible(
    tenant: Tenant,
    estate_id: str,
    estate_allowed: bool,
    allowed_phases: set[str],
    allowed_landlords: set[str],
    allowed_landlord_estates: set[str],
) -> bool:
    if estate_allowed:
        return True
    if tenant.phase and phase_key(estate_id, tenant.phase) in allowed_phases:
        return True
    if tenant.landlord in allowed_landlords:
        return True
    return landlord_estate_key(tenant.landlord, estate_id) in allowed_landlord_estates


def filter_estates_by_scope(
    estates: list[Estate], scope: AccessScope | None
) -> list[Estate]:
    """Return the estates and tenants visible under ``scope``.

    A missing or global scope returns ``estates`` as given. Under a
    restricted scope each kept estate carries only its visible tenants and
    its totals are recomputed over them. An estate with no visible tenants
    is kept only when it is allowed directly or one of its declared phases
    is allowed.
    """
    if scope is None or scope.type == "GLOBAL":
        return estates

    allowed_estates = set(scope.allowed_estates)
    allowed_phases = set(scope.allowed_phases)
    allowed_landlords = set(scope.allowed_landlords)
    allowed_landlord_estates = set(scope.allowed_landlord_estates)

    visible = []
    for estate in estates:
        estate_allowed = estate.id in allowed_estates
        tenants = [
            t
            for t in estate.tenants
            if _tenant_visible(
                t,
                estate.id,
                estate_allowed,
                allowed_phases,
                allowed_landlords,
                allowed_landlord_estates,
            )
        ]
        has_phase_access = any(
            phase_key(estate.id, phase) in allowed_phases
            for phase in estate.phases or []
        )
        if not tenants and not estate_allowed and not has_phase_access:
            continue
        visible.append(with_rollups(estate, tenants))
    return visible


def accessible_landlords(landlords: list[str], scope: AccessScope | None) -> list[str]:
    """Landlords listed for a scope; only a non-empty landlord allow-list narrows it."""
    if scope is None or scope.type == "GLOBAL" or not scope.allowed_landlords:
        return list(landlords)
    allowed = set(scope.allowed_landlords)
    return [name for name in landlords if name in allowed]


def visible_estate(
    estates: list[Estate], estate_id: str, scope: AccessScope | None
) -> Estate | None:
    """The visible projection of one estate, or None when it is out of scope."""
    estate = next((e for e in estates if e.id == estate_id), None)
    if estate is None:
        return None
    filtered = filter_estates_by_scope([estate], scope)
    return filtered[0] if filtered else None
