"""Portfolio state container operations."""

from datetime import date

import pytest

from rentledger_backend.core.exceptions import (
    BusinessLogicError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from rentledger_backend.modules.archive.models import ArchiveType
from rentledger_backend.modules.portfolio.models import PaymentRecord, TenantStatus

from .factories import TODAY, make_estate, make_tenant


class TestDerivedFields:
    def test_refresh_derived(self, state):
        t1 = state.get_tenant("e1", "t1")
        t2 = state.get_tenant("e1", "t2")
        t3 = state.get_tenant("e2", "t3")

        assert (t1.days_left, t1.status) == (-5, TenantStatus.OVERDUE)
        assert (t2.days_left, t2.status) == (40, TenantStatus.ACTIVE)
        assert t3.days_left == 214
        assert state.get_estate("e1").total_outstanding == 400_000


class TestEstates:
    def test_add_duplicate_estate(self, state):
        with pytest.raises(ResourceAlreadyExistsError):
            state.add_estate(make_estate("e1", []))

    def test_update_metadata(self, state):
        updated = state.update_estate("e1", {"manager": "Tola Ajayi"})
        assert updated.get_estate("e1").manager == "Tola Ajayi"
        assert state.get_estate("e1").manager == "Kunle Bello"

    def test_update_rejects_derived_fields(self, state):
        with pytest.raises(BusinessLogicError):
            state.update_estate("e1", {"total_expected": 1})

    def test_archive_and_restore_estate(self, state):
        archived = state.archive_estate("e2")
        assert [e.id for e in archived.estates] == ["e1"]
        item = archived.archived_items[0]
        assert item.type == ArchiveType.ESTATE

        restored = archived.restore_archived_item(item.id)
        assert [e.id for e in restored.estates] == ["e1", "e2"]
        assert restored.archived_items == []

    def test_restore_estate_with_taken_id_gets_new_id(self, state):
        archived = state.archive_estate("e2")
        item = archived.archived_items[0]
        readded = archived.add_estate(make_estate("e2", [], name="New Cedar"))

        restored = readded.restore_archived_item(item.id)

        ids = [e.id for e in restored.estates]
        assert ids[:2] == ["e1", "e2"]
        assert ids[2].startswith("e2-restored-")


class TestPhases:
    def test_add_existing_phase(self, state):
        with pytest.raises(ResourceAlreadyExistsError):
            state.add_phase("e1", "Phase 1")

    def test_rename_moves_tenants(self, state):
        renamed = state.rename_phase("e1", "Phase 1", "Block A")
        estate = renamed.get_estate("e1")
        assert estate.phases == ["Block A", "Phase 2"]
        assert estate.find_tenant("t1").phase == "Block A"

    def test_rename_unknown_phase(self, state):
        with pytest.raises(ResourceNotFoundError):
            state.rename_phase("e1", "Phase 9", "Block A")

    def test_delete_and_restore_phase(self, state):
        deleted = state.delete_phase("e1", "Phase 1")
        estate = deleted.get_estate("e1")
        assert estate.phases == ["Phase 2"]
        assert [t.id for t in estate.tenants] == ["t2"]
        assert estate.total_expected == 500_000

        item = deleted.archived_items[0]
        assert item.type == ArchiveType.PHASE
        assert item.parent_estate_id == "e1"
        assert [t["id"] for t in item.data["tenants"]] == ["t1"]

        restored = deleted.restore_archived_item(item.id).get_estate("e1")
        assert "Phase 1" in restored.phases
        assert sorted(t.id for t in restored.tenants) == ["t1", "t2"]
        assert restored.total_expected == 1_500_000


class TestTenants:
    def test_add_tenant_numbers_and_refreshes(self, state):
        tenant = make_tenant("t9", rent_expected=400, rent_due_date=date(2025, 5, 1))

        added = state.add_tenant("e2", tenant, TODAY).get_tenant("e2", "t9")

        assert added.serial_number == 2
        assert added.status == TenantStatus.OVERDUE
        assert added.outstanding_balance == 400

    def test_add_duplicate_tenant(self, state):
        with pytest.raises(ResourceAlreadyExistsError):
            state.add_tenant("e1", make_tenant("t1"), TODAY)

    def test_update_recomputes_rollups(self, state):
        updated = state.update_tenant("e1", "t2", {"rent_paid": 100_000}, TODAY)
        estate = updated.get_estate("e1")
        assert estate.find_tenant("t2").outstanding_balance == 400_000
        assert estate.total_outstanding == 800_000

    def test_update_with_unreadable_date(self, state):
        with pytest.raises(ValidationError):
            state.update_tenant("e1", "t2", {"rent_due_date": "someday"}, TODAY)

    @pytest.mark.parametrize("value", [None, 20250601])
    def test_update_with_missing_or_numeric_date(self, state, value):
        with pytest.raises(ValidationError):
            state.update_tenant("e1", "t2", {"rent_due_date": value}, TODAY)

    def test_update_unknown_tenant(self, state):
        with pytest.raises(ResourceNotFoundError):
            state.update_tenant("e1", "missing", {"name": "X"}, TODAY)

    def test_archive_and_restore_tenant(self, state):
        archived = state.archive_tenant("e1", "t1")
        assert archived.get_estate("e1").total_expected == 500_000
        item = archived.archived_items[0]
        assert item.parent_estate_name == "Palm Grove Estate"

        restored = archived.restore_archived_item(item.id)
        assert restored.get_estate("e1").find_tenant("t1") is not None
        assert restored.get_estate("e1").total_expected == 1_500_000

    def test_restore_tenant_needs_parent_estate(self, state):
        archived = state.archive_tenant("e1", "t1").archive_estate("e1")
        tenant_item = next(
            i for i in archived.archived_items if i.type == ArchiveType.TENANT
        )
        with pytest.raises(BusinessLogicError):
            archived.restore_archived_item(tenant_item.id)


class TestPayments:
    def test_record_payment_sets_rent_paid_from_ledger(self, state):
        payment = PaymentRecord(id="p1", date=date(2025, 6, 1), amount=300_000)

        tenant = state.record_payment("e2", "t3", payment, TODAY).get_tenant("e2", "t3")

        assert tenant.rent_paid == 300_000
        assert tenant.outstanding_balance == 500_000
        assert tenant.last_payment_date == date(2025, 6, 1)

    def test_duplicate_payment_id(self, state):
        payment = PaymentRecord(id="p1", date=date(2025, 6, 1), amount=10)
        paid = state.record_payment("e2", "t3", payment, TODAY)
        with pytest.raises(ResourceAlreadyExistsError):
            paid.record_payment("e2", "t3", payment, TODAY)

    def test_remove_payment(self, state):
        first = PaymentRecord(id="p1", date=date(2025, 2, 1), amount=100)
        second = PaymentRecord(id="p2", date=date(2025, 4, 1), amount=50)
        paid = state.record_payment("e2", "t3", first, TODAY).record_payment(
            "e2", "t3", second, TODAY
        )

        tenant = paid.remove_payment("e2", "t3", "p2", TODAY).get_tenant("e2", "t3")

        assert tenant.rent_paid == 100
        assert tenant.last_payment_date == date(2025, 2, 1)

    def test_remove_last_payment_zeroes_rent_paid(self, state):
        payment = PaymentRecord(id="p1", date=date(2025, 2, 1), amount=100)
        paid = state.record_payment("e2", "t3", payment, TODAY)

        tenant = paid.remove_payment("e2", "t3", "p1", TODAY).get_tenant("e2", "t3")

        assert tenant.rent_paid == 0
        assert tenant.last_payment_date == tenant.rent_start_date

    def test_remove_unknown_payment(self, state):
        with pytest.raises(ResourceNotFoundError):
            state.remove_payment("e2", "t3", "nope", TODAY)


class TestLandlords:
    def test_delete_assigned_landlord_is_refused(self, state):
        with pytest.raises(BusinessLogicError) as exc_info:
            state.delete_landlord("Yemi Idowu")
        assert exc_info.value.message == (
            "Cannot delete landlord. There are 2 tenants assigned to this landlord."
        )

    def test_delete_and_restore_landlord(self, state):
        deleted = state.delete_landlord("Alhaji Abuja")
        assert "Alhaji Abuja" not in deleted.landlords

        restored = deleted.restore_archived_item(deleted.archived_items[0].id)
        assert "Alhaji Abuja" in restored.landlords

    def test_rename_updates_tenants(self, state):
        renamed = state.rename_landlord("Yemi Idowu", "Yemi Idowu Jr")
        assert "Yemi Idowu Jr" in renamed.landlords
        assert renamed.get_tenant("e1", "t2").landlord == "Yemi Idowu Jr"
        assert renamed.get_tenant("e2", "t3").landlord == "Yemi Idowu Jr"

    def test_rename_to_existing_landlord(self, state):
        with pytest.raises(ResourceAlreadyExistsError):
            state.rename_landlord("Yemi Idowu", "Alhaji Abuja")


class TestUsers:
    def test_find_user_ignores_case(self, state):
        assert state.find_user("SuperAdmin@Gabinas.com") is not None

    def test_add_duplicate_user(self, state):
        existing = state.find_user("editor@gabinas.com")
        with pytest.raises(ResourceAlreadyExistsError):
            state.add_user(existing)


def test_permanent_delete(state):
    archived = state.archive_tenant("e1", "t2")
    item_id = archived.archived_items[0].id

    purged = archived.permanently_delete_archived_item(item_id)

    assert purged.archived_items == []
    with pytest.raises(ResourceNotFoundError):
        purged.restore_archived_item(item_id)
