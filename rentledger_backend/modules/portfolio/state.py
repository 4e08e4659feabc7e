"""Immutable portfolio state container.

Every operation returns a new ``PortfolioState`` and leaves the receiver
untouched. Operations that change an estate's tenant list recompute the
estate's rollups before returning.
"""

import time
from datetime import date
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaValidationError

from ...core.exceptions import (
    BusinessLogicError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from ...core.utils import generate_id, utc_now
from ..archive.models import ArchivedItem, ArchiveType
from ..auth.models import UserProfile
from .ledger import refresh_estate, refresh_tenant, with_rollups
from .models import Estate, PaymentRecord, Tenant

ESTATE_METADATA_FIELDS = frozenset(
    {"name", "image_url", "manager", "occupancy_rate", "column_preferences"}
)


def _revalidate(model_cls, data: dict[str, Any]):
    try:
        return model_cls.model_validate(data)
    except SchemaValidationError as e:
        raise ValidationError(
            f"Invalid {model_cls.__name__.lower()} data",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


class PortfolioState(BaseModel):
    """All top-level collections of the console."""

    estates: list[Estate] = Field(default_factory=list)
    landlords: list[str] = Field(default_factory=list)
    property_types: list[str] = Field(default_factory=list)
    archived_items: list[ArchivedItem] = Field(default_factory=list)
    registered_users: list[UserProfile] = Field(default_factory=list)

    # ----- Lookups -----

    def get_estate(self, estate_id: str) -> Estate:
        estate = next((e for e in self.estates if e.id == estate_id), None)
        if estate is None:
            raise ResourceNotFoundError("Estate", estate_id)
        return estate

    def get_tenant(self, estate_id: str, tenant_id: str) -> Tenant:
        tenant = self.get_estate(estate_id).find_tenant(tenant_id)
        if tenant is None:
            raise ResourceNotFoundError("Tenant", tenant_id)
        return tenant

    def get_archived_item(self, item_id: str) -> ArchivedItem:
        item = next((i for i in self.archived_items if i.id == item_id), None)
        if item is None:
            raise ResourceNotFoundError("Archived item", item_id)
        return item

    def find_user(self, email: str) -> UserProfile | None:
        wanted = email.strip().lower()
        return next(
            (u for u in self.registered_users if u.email.lower() == wanted), None
        )

    # ----- Internal helpers -----

    def _with_estate(self, estate: Estate) -> "PortfolioState":
        estates = [estate if e.id == estate.id else e for e in self.estates]
        return self.model_copy(update={"estates": estates})

    def _with_tenants(self, estate: Estate, tenants: list[Tenant]) -> "PortfolioState":
        return self._with_estate(with_rollups(estate, tenants))

    def _archive(self, item: ArchivedItem) -> list[ArchivedItem]:
        return [item, *self.archived_items]

    # ----- Estates -----

    def add_estate(self, estate: Estate) -> "PortfolioState":
        if any(e.id == estate.id for e in self.estates):
            raise ResourceAlreadyExistsError("Estate", estate.id)
        return self.model_copy(update={"estates": [*self.estates, with_rollups(estate)]})

    def update_estate(self, estate_id: str, changes: dict[str, Any]) -> "PortfolioState":
        """Apply metadata changes; tenants and totals are not writable here."""
        estate = self.get_estate(estate_id)
        unknown = set(changes) - ESTATE_METADATA_FIELDS
        if unknown:
            raise BusinessLogicError(
                f"Estate fields cannot be updated directly: {', '.join(sorted(unknown))}"
            )
        updated = _revalidate(Estate, {**estate.model_dump(), **changes})
        return self._with_estate(with_rollups(updated))

    def archive_estate(self, estate_id: str) -> "PortfolioState":
        estate = self.get_estate(estate_id)
        item = ArchivedItem(
            id=generate_id("arch"),
            original_id=estate.id,
            type=ArchiveType.ESTATE,
            name=estate.name,
            deleted_at=utc_now(),
            data=estate.model_dump(mode="json"),
        )
        return self.model_copy(
            update={
                "estates": [e for e in self.estates if e.id != estate_id],
                "archived_items": self._archive(item),
            }
        )

    # ----- Phases -----

    def add_phase(self, estate_id: str, phase: str) -> "PortfolioState":
        estate = self.get_estate(estate_id)
        phases = estate.phases or []
        if phase in phases:
            raise ResourceAlreadyExistsError("Phase", phase)
        return self._with_estate(estate.model_copy(update={"phases": [*phases, phase]}))

    def rename_phase(self, estate_id: str, old_name: str, new_name: str) -> "PortfolioState":
        """Rename a declared phase and move its tenants along with it."""
        estate = self.get_estate(estate_id)
        phases = estate.phases or []
        if old_name not in phases:
            raise ResourceNotFoundError("Phase", old_name)
        if new_name != old_name and new_name in phases:
            raise ResourceAlreadyExistsError("Phase", new_name)
        tenants = [
            t.model_copy(update={"phase": new_name}) if t.phase == old_name else t
            for t in estate.tenants
        ]
        renamed = estate.model_copy(
            update={"phases": [new_name if p == old_name else p for p in phases]}
        )
        return self._with_tenants(renamed, tenants)

    def delete_phase(self, estate_id: str, phase: str) -> "PortfolioState":
        """Archive a phase together with its tenants and drop both from the estate."""
        estate = self.get_estate(estate_id)
        phases = estate.phases or []
        removed = [t for t in estate.tenants if t.phase == phase]
        if phase not in phases and not removed:
            raise ResourceNotFoundError("Phase", phase)
        item = ArchivedItem(
            id=generate_id("arch-phase"),
            original_id=phase,
            type=ArchiveType.PHASE,
            name=phase,
            deleted_at=utc_now(),
            data={
                "phase_name": phase,
                "tenants": [t.model_dump(mode="json") for t in removed],
            },
            parent_estate_id=estate.id,
            parent_estate_name=estate.name,
        )
        remaining = [t for t in estate.tenants if t.phase != phase]
        trimmed = estate.model_copy(update={"phases": [p for p in phases if p != phase]})
        state = self._with_tenants(trimmed, remaining)
        return state.model_copy(update={"archived_items": self._archive(item)})

    # ----- Tenants -----

    def add_tenant(self, estate_id: str, tenant: Tenant, today: date) -> "PortfolioState":
        """Append a tenant; its serial number follows the estate's tenant count."""
        estate = self.get_estate(estate_id)
        if estate.find_tenant(tenant.id) is not None:
            raise ResourceAlreadyExistsError("Tenant", tenant.id)
        numbered = tenant.model_copy(update={"serial_number": len(estate.tenants) + 1})
        return self._with_tenants(estate, [*estate.tenants, refresh_tenant(numbered, today)])

    def update_tenant(
        self, estate_id: str, tenant_id: str, changes: dict[str, Any], today: date
    ) -> "PortfolioState":
        estate = self.get_estate(estate_id)
        tenant = self.get_tenant(estate_id, tenant_id)
        merged = _revalidate(Tenant, {**tenant.model_dump(), **changes, "id": tenant.id})
        tenants = [
            refresh_tenant(merged, today) if t.id == tenant_id else t
            for t in estate.tenants
        ]
        return self._with_tenants(estate, tenants)

    def archive_tenant(self, estate_id: str, tenant_id: str) -> "PortfolioState":
        estate = self.get_estate(estate_id)
        tenant = self.get_tenant(estate_id, tenant_id)
        item = ArchivedItem(
            id=generate_id("arch"),
            original_id=tenant.id,
            type=ArchiveType.TENANT,
            name=tenant.name,
            deleted_at=utc_now(),
            data=tenant.model_dump(mode="json"),
            parent_estate_id=estate.id,
            parent_estate_name=estate.name,
        )
        state = self._with_tenants(
            estate, [t for t in estate.tenants if t.id != tenant_id]
        )
        return state.model_copy(update={"archived_items": self._archive(item)})

    def record_payment(
        self, estate_id: str, tenant_id: str, payment: PaymentRecord, today: date
    ) -> "PortfolioState":
        """Append a payment; rent paid becomes the ledger total."""
        estate = self.get_estate(estate_id)
        tenant = self.get_tenant(estate_id, tenant_id)
        if any(p.id == payment.id for p in tenant.payment_history):
            raise ResourceAlreadyExistsError("Payment", payment.id)
        paid = tenant.model_copy(
            update={"payment_history": [*tenant.payment_history, payment]}
        )
        tenants = [
            refresh_tenant(paid, today) if t.id == tenant_id else t
            for t in estate.tenants
        ]
        return self._with_tenants(estate, tenants)

    def remove_payment(
        self, estate_id: str, tenant_id: str, payment_id: str, today: date
    ) -> "PortfolioState":
        estate = self.get_estate(estate_id)
        tenant = self.get_tenant(estate_id, tenant_id)
        history = [p for p in tenant.payment_history if p.id != payment_id]
        if len(history) == len(tenant.payment_history):
            raise ResourceNotFoundError("Payment", payment_id)
        updated = tenant.model_copy(
            update={
                "payment_history": history,
                "rent_paid": sum(p.amount for p in history),
                "last_payment_date": max(
                    (p.date for p in history), default=tenant.rent_start_date
                ),
            }
        )
        tenants = [
            refresh_tenant(updated, today) if t.id == tenant_id else t
            for t in estate.tenants
        ]
        return self._with_tenants(estate, tenants)

    # ----- Landlords & property types -----

    def add_landlord(self, name: str) -> "PortfolioState":
        if name in self.landlords:
            raise ResourceAlreadyExistsError("Landlord", name)
        return self.model_copy(update={"landlords": [*self.landlords, name]})

    def rename_landlord(self, old_name: str, new_name: str) -> "PortfolioState":
        """Rename a landlord everywhere, including on every tenant."""
        if old_name not in self.landlords:
            raise ResourceNotFoundError("Landlord", old_name)
        if new_name != old_name and new_name in self.landlords:
            raise ResourceAlreadyExistsError("Landlord", new_name)
        estates = [
            e.model_copy(
                update={
                    "tenants": [
                        t.model_copy(update={"landlord": new_name})
                        if t.landlord == old_name
                        else t
                        for t in e.tenants
                    ]
                }
            )
            for e in self.estates
        ]
        landlords = [new_name if name == old_name else name for name in self.landlords]
        return self.model_copy(update={"estates": estates, "landlords": landlords})

    def delete_landlord(self, name: str) -> "PortfolioState":
        """Archive a landlord; refused while any tenant still references them."""
        if name not in self.landlords:
            raise ResourceNotFoundError("Landlord", name)
        assigned = sum(1 for e in self.estates for t in e.tenants if t.landlord == name)
        if assigned:
            raise BusinessLogicError(
                f"Cannot delete landlord. There are {assigned} tenants "
                "assigned to this landlord.",
                details={"landlord": name, "tenants": assigned},
            )
        item = ArchivedItem(
            id=generate_id("arch-ll"),
            original_id=name,
            type=ArchiveType.LANDLORD,
            name=name,
            deleted_at=utc_now(),
        )
        return self.model_copy(
            update={
                "landlords": [n for n in self.landlords if n != name],
                "archived_items": self._archive(item),
            }
        )

    def add_property_type(self, name: str) -> "PortfolioState":
        if name in self.property_types:
            raise ResourceAlreadyExistsError("Property type", name)
        return self.model_copy(update={"property_types": [*self.property_types, name]})

    # ----- Users -----

    def add_user(self, user: UserProfile) -> "PortfolioState":
        if self.find_user(user.email) is not None:
            raise ResourceAlreadyExistsError("User", user.email)
        return self.model_copy(
            update={"registered_users": [*self.registered_users, user]}
        )

    def update_user(self, email: str, changes: dict[str, Any]) -> "PortfolioState":
        user = self.find_user(email)
        if user is None:
            raise ResourceNotFoundError("User", email)
        updated = _revalidate(
            UserProfile, {**user.model_dump(), **changes, "email": user.email}
        )
        users = [updated if u is user else u for u in self.registered_users]
        return self.model_copy(update={"registered_users": users})

    # ----- Archive -----

    def restore_archived_item(self, item_id: str) -> "PortfolioState":
        """Put an archived entity back and drop its archive entry."""
        item = self.get_archived_item(item_id)
        if item.type == ArchiveType.ESTATE:
            state = self._restore_estate(item)
        elif item.type == ArchiveType.TENANT:
            state = self._restore_tenant(item)
        elif item.type == ArchiveType.PHASE:
            state = self._restore_phase(item)
        else:
            state = self
            if item.name not in self.landlords:
                state = self.model_copy(update={"landlords": [*self.landlords, item.name]})
        return state.model_copy(
            update={"archived_items": [i for i in state.archived_items if i.id != item_id]}
        )

    def _restore_estate(self, item: ArchivedItem) -> "PortfolioState":
        estate = Estate.model_validate(item.data)
        if any(e.id == estate.id for e in self.estates):
            restored_id = f"{estate.id}-restored-{int(time.time() * 1000)}"
            estate = estate.model_copy(update={"id": restored_id})
        return self.model_copy(update={"estates": [*self.estates, with_rollups(estate)]})

    def _parent_estate(self, item: ArchivedItem, kind: str) -> Estate:
        parent = next((e for e in self.estates if e.id == item.parent_estate_id), None)
        if parent is None:
            raise BusinessLogicError(
                f"Parent estate not found. Restore estate "
                f"'{item.parent_estate_name}' before restoring this {kind}.",
                details={"parent_estate_id": item.parent_estate_id},
            )
        return parent

    def _restore_tenant(self, item: ArchivedItem) -> "PortfolioState":
        parent = self._parent_estate(item, "tenant")
        tenant = Tenant.model_validate(item.data)
        if parent.find_tenant(tenant.id) is not None:
            raise ResourceAlreadyExistsError("Tenant", tenant.id)
        return self._with_tenants(parent, [*parent.tenants, tenant])

    def _restore_phase(self, item: ArchivedItem) -> "PortfolioState":
        parent = self._parent_estate(item, "phase")
        phase = item.data.get("phase_name", item.name)
        phases = parent.phases or []
        if phase not in phases:
            phases = [*phases, phase]
        present = {t.id for t in parent.tenants}
        returning = [
            Tenant.model_validate(raw)
            for raw in item.data.get("tenants", [])
            if raw.get("id") not in present
        ]
        restored = parent.model_copy(update={"phases": phases})
        return self._with_tenants(restored, [*parent.tenants, *returning])

    def permanently_delete_archived_item(self, item_id: str) -> "PortfolioState":
        self.get_archived_item(item_id)
        return self.model_copy(
            update={"archived_items": [i for i in self.archived_items if i.id != item_id]}
        )

    # ----- Derived fields -----

    def refresh_derived(self, today: date) -> "PortfolioState":
        """Recompute days left, status and rollups for every estate."""
        return self.model_copy(
            update={"estates": [refresh_estate(e, today) for e in self.estates]}
        )