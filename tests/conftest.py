"""Shared test fixtures and helpers."""

import itertools
from datetime import date
from typing import Callable

import pytest

from swiftfix.app import AppState
from swiftfix.funnel.booking_funnel import BookingFunnel
from swiftfix.schemas.booking_schema import Booking, BookingStatus
from swiftfix.schemas.catalog_schema import Brand
from swiftfix.tools.catalog import CatalogStore
from swiftfix.tools.ledger import BookingLedger

# A Monday; appointment dates in tests are chosen after it.
FIXED_TODAY = date(2025, 3, 10)


def counter_ids(start: int = 1001) -> Callable[[], str]:
    """Deterministic id factory: BK-1001, BK-1002, ..."""
    counter = itertools.count(start)
    return lambda: f"BK-{next(counter)}"


@pytest.fixture
def catalog():
    return CatalogStore()


@pytest.fixture
def ledger():
    return BookingLedger()


@pytest.fixture
def funnel(catalog, ledger):
    return BookingFunnel(
        catalog,
        ledger,
        id_factory=counter_ids(),
        submit_delay=0,
        today=lambda: FIXED_TODAY,
    )


@pytest.fixture
def app_state():
    return AppState()


def make_booking(
    booking_id: str = "BK-1001",
    status: BookingStatus = BookingStatus.PENDING,
    brand: Brand = Brand.APPLE,
    model: str = "iPhone 15",
    issue: str = "Battery Replacement",
    price: str = "₱1,500 - ₱4,000",
    appointment_date: str = "2025-03-12",
    appointment_time: str = "10:00 AM",
    customer_name: str = "Jane Doe",
    customer_phone: str = "555-1234",
) -> Booking:
    """Helper to create a Booking with sensible defaults."""
    return Booking(
        id=booking_id,
        status=status,
        date_created="2025-03-10",
        selected_brand=brand,
        selected_model=model,
        selected_issue=issue,
        price=price,
        appointment_date=appointment_date,
        appointment_time=appointment_time,
        customer_name=customer_name,
        customer_email="",
        customer_phone=customer_phone,
    )


def advance_to_schedule(funnel: BookingFunnel) -> None:
    """Apple / iPhone 15 / Battery Replacement."""
    funnel.select_brand(Brand.APPLE)
    funnel.select_model("ip15")
    funnel.select_issue("battery")


def advance_to_confirm(funnel: BookingFunnel, appointment_date: str = "2025-03-12") -> None:
    advance_to_schedule(funnel)
    funnel.choose_date(appointment_date)
    funnel.choose_time("10:00 AM")
    funnel.set_contact(name="Jane Doe", phone="555-1234")
    assert funnel.confirm_schedule()
