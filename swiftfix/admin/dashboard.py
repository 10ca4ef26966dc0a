"""
Admin dashboard: password gate, view state and catalog/ledger actions.

The password is a single shared plaintext value from configuration. It
keeps casual visitors out of the dashboard and nothing more; it is not a
security boundary.
"""

import logging
from datetime import date
from typing import Callable, Optional, Union

from swiftfix.config import settings
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
from swiftfix.schemas.booking_schema import Booking, BookingStatus
from swiftfix.schemas.catalog_schema import RepairIssue
from swiftfix.tools.catalog import CatalogStore
from swiftfix.tools.ledger import BookingLedger

logger = logging.getLogger(__name__)

# Status changes the bookings table offers. The ledger itself accepts any.
STATUS_ACTIONS: dict[BookingStatus, list[BookingStatus]] = {
    BookingStatus.PENDING: [BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED],
    BookingStatus.IN_PROGRESS: [BookingStatus.COMPLETED, BookingStatus.CANCELLED],
    BookingStatus.COMPLETED: [],
    BookingStatus.CANCELLED: [],
}


class AdminLockedError(PermissionError):
    """Raised when a dashboard action is attempted before logging in."""


class AdminDashboard:
    """Dashboard session for the shop administrator."""

    def __init__(
        self,
        catalog: CatalogStore,
        ledger: BookingLedger,
        engine: Optional[ReportingEngine] = None,
        password: Optional[str] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._engine = engine or ReportingEngine()
        self._password = password if password is not None else settings.shop.admin_password
        self._today = today
        self._authenticated = False

        self.filter_status: str = ALL
        self.search_term: str = ""
        self.current_page: int = 1

        current = today().isoformat()
        self.report_filter = ReportFilter(
            report_type=ReportType.MONTHLY,
            reference_date=current,
            reference_month=current[:7],
            service=ALL,
        )

    # ------------------------------------------------------------------ #
    # Access
    # ------------------------------------------------------------------ #

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def login(self, password: str) -> bool:
        self._authenticated = password == self._password
        if self._authenticated:
            logger.info("Admin dashboard unlocked")
        else:
            logger.warning("Admin login failed")
        return self._authenticated

    def logout(self) -> None:
        self._authenticated = False

    def _require_auth(self) -> None:
        if not self._authenticated:
            raise AdminLockedError("Admin dashboard is locked; log in first")

    # ------------------------------------------------------------------ #
    # Overview
    # ------------------------------------------------------------------ #

    def stats(self) -> DashboardStats:
        self._require_auth()
        return self._engine.compute_stats(self._ledger)

    def status_chart(self) -> ChartSeries:
        return self._engine.status_chart(self.stats())

    def brand_chart(self) -> ChartSeries:
        return self._engine.brand_chart(self.stats())

    def monthly_revenue_chart(self) -> ChartSeries:
        self._require_auth()
        return self._engine.monthly_revenue(self._ledger, year=self._today().year)

    # ------------------------------------------------------------------ #
    # Reports
    # ------------------------------------------------------------------ #

    def service_choices(self) -> list[str]:
        return [ALL] + [service.name for service in self._catalog.services]

    def set_report(
        self,
        report_type: Optional[Union[ReportType, str]] = None,
        reference_date: Optional[str] = None,
        reference_month: Optional[str] = None,
        service: Optional[str] = None,
    ) -> ReportFilter:
        """Change any part of the report window; omitted parts stay as they are."""
        current = self.report_filter
        self.report_filter = ReportFilter(
            report_type=ReportType(report_type) if report_type is not None else current.report_type,
            reference_date=reference_date if reference_date is not None else current.reference_date,
            reference_month=reference_month if reference_month is not None else current.reference_month,
            service=service if service is not None else current.service,
        )
        return self.report_filter

    def report_rows(self) -> list[Booking]:
        self._require_auth()
        return self._engine.filter_report(self._ledger, self.report_filter)

    def report_stats(self) -> ReportStats:
        return self._engine.report_stats(self.report_rows())

    def report_text(self) -> str:
        return self._engine.format_report(self.stats(), self.report_stats(), self.report_filter)

    # ------------------------------------------------------------------ #
    # Bookings table
    # ------------------------------------------------------------------ #

    def set_filter_status(self, status: Union[BookingStatus, str]) -> None:
        self.filter_status = status.value if isinstance(status, BookingStatus) else status
        self.current_page = 1

    def set_search_term(self, term: str) -> None:
        self.search_term = term
        self.current_page = 1

    def bookings_page(self, page: Optional[int] = None) -> BookingPage:
        """The filtered bookings table at ``page`` (default: the current page)."""
        self._require_auth()
        rows = self._engine.search(self._ledger, self.filter_status, self.search_term)
        result = self._engine.paginate(rows, self.current_page if page is None else page)
        self.current_page = result.page
        return result

    def next_page(self) -> BookingPage:
        return self.bookings_page(self.current_page + 1)

    def previous_page(self) -> BookingPage:
        return self.bookings_page(self.current_page - 1)

    def status_actions(self, booking: Booking) -> list[BookingStatus]:
        return list(STATUS_ACTIONS.get(booking.status, []))

    def update_status(self, booking_id: str, status: Union[BookingStatus, str]) -> None:
        self._require_auth()
        self._ledger.update_status(booking_id, status)

    # ------------------------------------------------------------------ #
    # Services and availability
    # ------------------------------------------------------------------ #

    def update_service(self, service: RepairIssue) -> None:
        self._require_auth()
        self._catalog.update_service(service)

    def update_time_slot(self, time: str, available: bool) -> None:
        self._require_auth()
        self._catalog.update_time_slot(time, available)

    def add_time_slot(self, raw_time: str) -> None:
        self._require_auth()
        self._catalog.add_time_slot(raw_time)

    def delete_time_slot(self, time: str) -> None:
        self._require_auth()
        self._catalog.delete_time_slot(time)

    def block_date(self, iso_date: str) -> None:
        self._require_auth()
        self._catalog.block_date(iso_date)

    def unblock_date(self, iso_date: str) -> None:
        self._require_auth()
        self._catalog.unblock_date(iso_date)
