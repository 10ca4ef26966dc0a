from swiftfix.reporting.metrics import (
    ALL,
    BookingPage,
    ChartSeries,
    DashboardStats,
    ReportFilter,
    ReportingEngine,
    ReportStats,
    ReportType,
)
from swiftfix.reporting.pricing import extract_price

__all__ = [
    "ALL",
    "BookingPage",
    "ChartSeries",
    "DashboardStats",
    "ReportFilter",
    "ReportingEngine",
    "ReportStats",
    "ReportType",
    "extract_price",
]
