"""
Dashboard reporting over the booking ledger.

Every projection is recomputed from the bookings it is given: overall
totals, per-status and per-brand counts, daily/weekly/monthly report
windows, the current-year revenue series, and the searchable, paginated
bookings table. Nothing here mutates its inputs.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from swiftfix.config import settings
from swiftfix.reporting.pricing import extract_price
from swiftfix.schemas.booking_schema import Booking, BookingStatus
from swiftfix.utils import iso_week_number, parse_iso_date

logger = logging.getLogger(__name__)

ALL = "All"

STATUS_ORDER: list[BookingStatus] = [
    BookingStatus.PENDING,
    BookingStatus.IN_PROGRESS,
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
]

MONTH_LABELS: list[str] = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


class ReportType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class DashboardStats:
    """Overview totals across the whole ledger."""

    total_revenue: int = 0
    total_bookings: int = 0
    status_counts: dict[str, int] = field(default_factory=dict)
    brand_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ReportFilter:
    """Report window selection.

    ``reference_date`` (YYYY-MM-DD) drives daily and weekly reports,
    ``reference_month`` (YYYY-MM) drives monthly ones.
    """

    report_type: ReportType = ReportType.MONTHLY
    reference_date: str = ""
    reference_month: str = ""
    service: str = ALL


@dataclass(frozen=True)
class ReportStats:
    revenue: int = 0
    count: int = 0
    completed: int = 0


@dataclass(frozen=True)
class ChartSeries:
    """Labels and values ready to hand to a chart."""

    label: str
    labels: list[str]
    data: list[int]


@dataclass(frozen=True)
class BookingPage:
    items: list[Booking]
    page: int
    total_pages: int
    total_items: int
    page_size: int


def _is_billable(booking: Booking) -> bool:
    return booking.status != BookingStatus.CANCELLED


def _same_week(booking_date: Optional[date], reference: date) -> bool:
    if booking_date is None:
        return False
    return (
        booking_date.year == reference.year
        and iso_week_number(booking_date) == iso_week_number(reference)
    )


class ReportingEngine:
    """Pure projections over bookings for the admin dashboard."""

    def __init__(self, page_size: Optional[int] = None) -> None:
        self.page_size = page_size or settings.shop.bookings_page_size

    # ------------------------------------------------------------------ #
    # Overview
    # ------------------------------------------------------------------ #

    def compute_stats(self, bookings: Iterable[Booking]) -> DashboardStats:
        """Revenue over non-cancelled bookings; counts over all of them."""
        rows = list(bookings)
        revenue = sum(extract_price(b.price) for b in rows if _is_billable(b))

        status_counts = {status.value: 0 for status in STATUS_ORDER}
        brand_counts: dict[str, int] = {}
        for b in rows:
            status_counts[b.status.value] += 1
            brand_counts[b.selected_brand.value] = brand_counts.get(b.selected_brand.value, 0) + 1

        return DashboardStats(
            total_revenue=revenue,
            total_bookings=len(rows),
            status_counts=status_counts,
            brand_counts=brand_counts,
        )

    def status_chart(self, stats: DashboardStats) -> ChartSeries:
        return ChartSeries(
            label="Count",
            labels=[status.value for status in STATUS_ORDER],
            data=[stats.status_counts.get(status.value, 0) for status in STATUS_ORDER],
        )

    def brand_chart(self, stats: DashboardStats) -> ChartSeries:
        return ChartSeries(
            label="Bookings by Brand",
            labels=list(stats.brand_counts.keys()),
            data=list(stats.brand_counts.values()),
        )

    def monthly_revenue(
        self, bookings: Iterable[Booking], year: Optional[int] = None
    ) -> ChartSeries:
        """Non-cancelled revenue per appointment month of ``year`` (default: this year)."""
        target_year = year if year is not None else date.today().year
        data = [0] * 12
        for b in bookings:
            if not _is_billable(b):
                continue
            appointment = parse_iso_date(b.appointment_date)
            if appointment is None or appointment.year != target_year:
                continue
            data[appointment.month - 1] += extract_price(b.price)
        return ChartSeries(
            label="Monthly Revenue (Current Year)",
            labels=list(MONTH_LABELS),
            data=data,
        )

    # ------------------------------------------------------------------ #
    # Report window
    # ------------------------------------------------------------------ #

    def filter_report(
        self, bookings: Iterable[Booking], report_filter: ReportFilter
    ) -> list[Booking]:
        """Bookings matching the service and the daily/weekly/monthly window."""
        service = report_filter.service
        rows = [b for b in bookings if service == ALL or b.selected_issue == service]

        if report_filter.report_type == ReportType.DAILY:
            return [b for b in rows if b.appointment_date == report_filter.reference_date]

        if report_filter.report_type == ReportType.WEEKLY:
            reference = parse_iso_date(report_filter.reference_date)
            if reference is None:
                logger.debug("Weekly report with unparseable date %r", report_filter.reference_date)
                return []
            return [b for b in rows if _same_week(parse_iso_date(b.appointment_date), reference)]

        return [b for b in rows if b.appointment_date.startswith(report_filter.reference_month)]

    def report_stats(self, report_rows: Iterable[Booking]) -> ReportStats:
        rows = list(report_rows)
        return ReportStats(
            revenue=sum(extract_price(b.price) for b in rows if _is_billable(b)),
            count=len(rows),
            completed=sum(1 for b in rows if b.status == BookingStatus.COMPLETED),
        )

    # ------------------------------------------------------------------ #
    # Bookings table
    # ------------------------------------------------------------------ #

    def search(
        self,
        bookings: Iterable[Booking],
        status: str = ALL,
        term: str = "",
    ) -> list[Booking]:
        """Exact status match (or All) and case-insensitive name/id substring."""
        needle = term.lower()
        return [
            b for b in bookings
            if (status == ALL or b.status.value == status)
            and (needle in b.customer_name.lower() or needle in b.id.lower())
        ]

    def total_pages(self, item_count: int) -> int:
        return math.ceil(item_count / self.page_size)

    def paginate(self, rows: list[Booking], page: int) -> BookingPage:
        """Slice one page; out-of-range requests clamp to the nearest valid page."""
        total_pages = self.total_pages(len(rows))
        current = max(1, min(page, max(total_pages, 1)))
        start = (current - 1) * self.page_size
        return BookingPage(
            items=rows[start:start + self.page_size],
            page=current,
            total_pages=total_pages,
            total_items=len(rows),
            page_size=self.page_size,
        )

    # ------------------------------------------------------------------ #
    # Text output
    # ------------------------------------------------------------------ #

    def format_report(
        self,
        stats: DashboardStats,
        report: Optional[ReportStats] = None,
        report_filter: Optional[ReportFilter] = None,
    ) -> str:
        """Format dashboard figures into a human-readable report."""
        currency = settings.shop.currency_symbol
        lines = [
            "=" * 60,
            f"{settings.shop.name.upper()} DASHBOARD REPORT",
            "=" * 60,
            "",
            "OVERVIEW",
            f"  Total revenue:          {currency}{stats.total_revenue:,}",
            f"  Total bookings:         {stats.total_bookings}",
            "",
            "BY STATUS",
        ]
        for status in STATUS_ORDER:
            lines.append(f"  {status.value + ':':<24}{stats.status_counts.get(status.value, 0)}")
        lines += ["", "BY BRAND"]
        if stats.brand_counts:
            for brand, count in stats.brand_counts.items():
                lines.append(f"  {brand + ':':<24}{count}")
        else:
            lines.append("  (no bookings)")

        if report is not None:
            window = ""
            if report_filter is not None:
                reference = (
                    report_filter.reference_month
                    if report_filter.report_type == ReportType.MONTHLY
                    else report_filter.reference_date
                )
                window = f" ({report_filter.report_type.value} {reference}, {report_filter.service})"
            lines += [
                "",
                f"REPORT{window}",
                f"  Revenue:                {currency}{report.revenue:,}",
                f"  Bookings:               {report.count}",
                f"  Completed:              {report.completed}",
            ]
        lines.append("=" * 60)
        return "\n".join(lines)
