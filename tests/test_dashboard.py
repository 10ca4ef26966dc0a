"""Tests for the admin dashboard session."""

from datetime import date

import pytest

from swiftfix.admin.dashboard import AdminDashboard, AdminLockedError
from swiftfix.reporting.metrics import ReportingEngine, ReportType
from swiftfix.schemas.booking_schema import BookingStatus
from swiftfix.tools.ledger import BookingLedger
from tests.conftest import FIXED_TODAY, make_booking


@pytest.fixture
def dashboard(catalog, ledger):
    board = AdminDashboard(
        catalog,
        ledger,
        engine=ReportingEngine(page_size=10),
        password="letmein",
        today=lambda: FIXED_TODAY,
    )
    board.login("letmein")
    return board


def _fill(ledger: BookingLedger, count: int) -> None:
    for i in range(count):
        ledger.append(make_booking(f"BK-{1000 + i}", customer_name=f"Customer {i}"))


class TestAccess:
    def test_wrong_password(self, catalog, ledger):
        board = AdminDashboard(catalog, ledger, password="letmein")
        assert not board.login("admin")
        assert not board.is_authenticated
        with pytest.raises(AdminLockedError):
            board.stats()

    def test_locked_mutations_raise(self, catalog, ledger):
        board = AdminDashboard(catalog, ledger, password="letmein")
        with pytest.raises(AdminLockedError):
            board.block_date("2025-03-14")
        assert catalog.blocked_dates == []

    def test_logout_locks(self, dashboard):
        dashboard.logout()
        with pytest.raises(AdminLockedError):
            dashboard.bookings_page()

    def test_default_password_from_settings(self, catalog, ledger):
        assert AdminDashboard(catalog, ledger).login("admin")


class TestOverview:
    def test_stats_and_charts(self, dashboard, ledger):
        ledger.append(make_booking("BK-1", price="₱3,500 - ₱12,000", appointment_date="2025-03-12"))
        ledger.append(make_booking("BK-2", status=BookingStatus.CANCELLED))
        assert dashboard.stats().total_revenue == 3500
        assert dashboard.status_chart().data == [1, 0, 0, 1]
        assert dashboard.brand_chart().labels == ["Apple"]
        assert dashboard.monthly_revenue_chart().data[2] == 3500

    def test_stats_follow_status_changes(self, dashboard, ledger):
        ledger.append(make_booking("BK-1", price="₱3,500 - ₱12,000"))
        dashboard.update_status("BK-1", BookingStatus.CANCELLED)
        assert dashboard.stats().total_revenue == 0


class TestReports:
    def test_defaults_to_current_month(self, dashboard):
        assert dashboard.report_filter.report_type == ReportType.MONTHLY
        assert dashboard.report_filter.reference_month == "2025-03"
        assert dashboard.report_filter.reference_date == "2025-03-10"

    def test_service_choices(self, dashboard):
        choices = dashboard.service_choices()
        assert choices[0] == "All"
        assert "Water Damage" in choices

    def test_set_report_keeps_unspecified_parts(self, dashboard, ledger):
        ledger.append(make_booking("BK-1", appointment_date="2025-03-12"))
        ledger.append(make_booking("BK-2", appointment_date="2025-03-20"))
        dashboard.set_report(report_type="weekly", reference_date="2025-03-13")
        assert dashboard.report_filter.reference_month == "2025-03"
        assert [b.id for b in dashboard.report_rows()] == ["BK-1"]
        assert dashboard.report_stats().count == 1

    def test_report_text(self, dashboard, ledger):
        ledger.append(make_booking("BK-1"))
        text = dashboard.report_text()
        assert "REPORT (monthly 2025-03, All)" in text


class TestBookingsTable:
    def test_pagination(self, dashboard, ledger):
        _fill(ledger, 25)
        first = dashboard.bookings_page()
        assert first.page == 1 and first.total_pages == 3
        assert first.items[0].id == "BK-1024"
        assert dashboard.next_page().page == 2
        assert dashboard.next_page().page == 3
        assert dashboard.next_page().page == 3
        assert dashboard.previous_page().page == 2

    def test_filter_resets_page(self, dashboard, ledger):
        _fill(ledger, 25)
        dashboard.bookings_page(3)
        dashboard.set_search_term("Customer 1")
        assert dashboard.current_page == 1
        page = dashboard.bookings_page()
        # Customer 1 and Customer 10..19
        assert page.total_items == 11

    def test_status_filter(self, dashboard, ledger):
        _fill(ledger, 3)
        dashboard.update_status("BK-1001", BookingStatus.COMPLETED)
        dashboard.set_filter_status(BookingStatus.COMPLETED)
        assert [b.id for b in dashboard.bookings_page().items] == ["BK-1001"]

    def test_status_actions(self, dashboard):
        pending = make_booking(status=BookingStatus.PENDING)
        done = make_booking(status=BookingStatus.COMPLETED)
        assert dashboard.status_actions(pending) == [
            BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED,
        ]
        assert dashboard.status_actions(done) == []


class TestCatalogActions:
    def test_time_slots(self, dashboard, catalog):
        dashboard.add_time_slot("17:00")
        assert catalog.time_slots[-1].time == "05:00 PM"
        dashboard.update_time_slot("05:00 PM", False)
        assert not catalog.time_slots[-1].available
        dashboard.delete_time_slot("05:00 PM")
        assert "05:00 PM" not in [s.time for s in catalog.time_slots]

    def test_blocked_dates(self, dashboard, catalog):
        dashboard.block_date("2025-03-14")
        assert catalog.is_blocked("2025-03-14")
        dashboard.unblock_date("2025-03-14")
        assert not catalog.is_blocked("2025-03-14")

    def test_update_service(self, dashboard, catalog):
        service = catalog.get_service("water").model_copy(update={"price_range": "₱1,500 Diagnostic"})
        dashboard.update_service(service)
        assert catalog.get_service("water").price_range == "₱1,500 Diagnostic"

    def test_report_window_follows_today(self, catalog, ledger):
        board = AdminDashboard(catalog, ledger, password="x", today=lambda: date(2024, 12, 31))
        assert board.report_filter.reference_month == "2024-12"
