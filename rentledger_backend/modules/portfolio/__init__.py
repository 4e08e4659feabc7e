"""Portfolio domain: estates, tenants, payments and the state container."""

from .models import (
    ColumnSetting,
    Estate,
    PaymentRecord,
    Tenant,
    TenantStatus,
)

__all__ = [
    "ColumnSetting",
    "Estate",
    "PaymentRecord",
    "Tenant",
    "TenantStatus",
]
