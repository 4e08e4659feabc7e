"""Portfolio reports and the monthly expiry report."""

from .builders import Report, ReportKind, TenantReport

__all__ = ["Report", "ReportKind", "TenantReport"]
