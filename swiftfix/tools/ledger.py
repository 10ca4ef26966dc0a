"""
In-memory booking ledger.

Bookings are kept newest-first and never deleted; the only mutation is a
status change. There is no persistence: the ledger lives as long as the
AppState that owns it.
"""

import logging
import random
from datetime import date
from typing import Callable, Iterable, Iterator, Optional, Union

from swiftfix.schemas.booking_schema import Booking, BookingDraft, BookingStatus
from swiftfix.schemas.catalog_schema import Brand

logger = logging.getLogger(__name__)

BOOKING_ID_MIN = 1000
BOOKING_ID_MAX = 9999

IdFactory = Callable[[], str]


def generate_booking_id(rng: Optional[random.Random] = None) -> str:
    """Return a ``BK-####`` reference.

    Only 9000 values exist, so two bookings can share an id. Callers
    needing uniqueness should pass their own id factory to the funnel.
    """
    source = rng or random
    return f"BK-{source.randint(BOOKING_ID_MIN, BOOKING_ID_MAX)}"


def build_booking(
    draft: BookingDraft,
    booking_id: str,
    today: Optional[date] = None,
) -> Booking:
    """Snapshot a completed draft into a Pending ledger record."""
    return Booking(
        id=booking_id,
        status=BookingStatus.PENDING,
        date_created=(today or date.today()).isoformat(),
        selected_brand=draft.selected_brand or Brand.OTHER,
        selected_model=draft.selected_model.name if draft.selected_model else "Unknown Device",
        selected_issue=draft.selected_issue.name if draft.selected_issue else "General Inquiry",
        price=draft.selected_issue.price_range if draft.selected_issue else "TBD",
        appointment_date=draft.appointment_date,
        appointment_time=draft.appointment_time,
        customer_name=draft.customer_name,
        customer_email=draft.customer_email,
        customer_phone=draft.customer_phone,
    )


class BookingLedger:
    """Ordered collection of submitted bookings, most recent first."""

    def __init__(self, bookings: Optional[Iterable[Booking]] = None) -> None:
        self._bookings: list[Booking] = list(bookings or [])

    def __len__(self) -> int:
        return len(self._bookings)

    def __iter__(self) -> Iterator[Booking]:
        return iter(list(self._bookings))

    @property
    def bookings(self) -> list[Booking]:
        return list(self._bookings)

    def append(self, booking: Booking) -> None:
        """Insert at the head so iteration stays newest-first."""
        self._bookings.insert(0, booking)
        logger.info(
            "Booking created: %s for %s on %s at %s",
            booking.id, booking.customer_name,
            booking.appointment_date, booking.appointment_time,
        )

    def get(self, booking_id: str) -> Optional[Booking]:
        """Return the newest booking with ``booking_id``, if any."""
        for booking in self._bookings:
            if booking.id == booking_id:
                return booking
        return None

    def update_status(self, booking_id: str, new_status: Union[BookingStatus, str]) -> None:
        """Set the status of every booking carrying ``booking_id``.

        Any status is accepted for any booking; which transitions to offer
        is a dashboard concern. Unknown ids are ignored.
        """
        status = BookingStatus(new_status)
        updated = 0
        for index, booking in enumerate(self._bookings):
            if booking.id == booking_id:
                self._bookings[index] = booking.model_copy(update={"status": status})
                updated += 1
        if updated:
            logger.info("Booking %s -> %s", booking_id, status.value)
        else:
            logger.debug("update_status: no booking with id %s", booking_id)
