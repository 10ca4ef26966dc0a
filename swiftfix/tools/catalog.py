"""
Catalog store: repair services, time slots and blocked dates.

Seed data mirrors the shop's launch catalog. All mutations are
admin-initiated; lookups that miss are silent no-ops.
"""

import logging
from typing import Iterable, Optional

from swiftfix.schemas.catalog_schema import Brand, DeviceModel, IconName, RepairIssue, TimeSlot
from swiftfix.utils import display_time_minutes, parse_iso_date, to_display_time

logger = logging.getLogger(__name__)

BRANDS: list[Brand] = [Brand.APPLE, Brand.SAMSUNG, Brand.GOOGLE, Brand.OTHER]

DEVICE_MODELS: dict[Brand, list[DeviceModel]] = {
    Brand.APPLE: [
        DeviceModel(id="ip15pm", name="iPhone 15 Pro Max", brand=Brand.APPLE),
        DeviceModel(id="ip15p", name="iPhone 15 Pro", brand=Brand.APPLE),
        DeviceModel(id="ip15", name="iPhone 15", brand=Brand.APPLE),
        DeviceModel(id="ip14pm", name="iPhone 14 Pro Max", brand=Brand.APPLE),
        DeviceModel(id="ip14", name="iPhone 14", brand=Brand.APPLE),
        DeviceModel(id="ip13", name="iPhone 13", brand=Brand.APPLE),
    ],
    Brand.SAMSUNG: [
        DeviceModel(id="s24u", name="Galaxy S24 Ultra", brand=Brand.SAMSUNG),
        DeviceModel(id="s24", name="Galaxy S24", brand=Brand.SAMSUNG),
        DeviceModel(id="s23u", name="Galaxy S23 Ultra", brand=Brand.SAMSUNG),
        DeviceModel(id="zfold5", name="Galaxy Z Fold 5", brand=Brand.SAMSUNG),
    ],
    Brand.GOOGLE: [
        DeviceModel(id="p8p", name="Pixel 8 Pro", brand=Brand.GOOGLE),
        DeviceModel(id="p8", name="Pixel 8", brand=Brand.GOOGLE),
        DeviceModel(id="p7a", name="Pixel 7a", brand=Brand.GOOGLE),
    ],
    Brand.OTHER: [
        DeviceModel(id="generic", name="Generic / Other Model", brand=Brand.OTHER),
    ],
}

INITIAL_ISSUES: list[RepairIssue] = [
    RepairIssue(
        id="screen",
        name="Screen Replacement",
        price_range="₱3,500 - ₱12,000",
        duration="45 mins",
        description="Cracked glass, dead pixels, or touch issues.",
        icon_name=IconName.SCREEN,
    ),
    RepairIssue(
        id="battery",
        name="Battery Replacement",
        price_range="₱1,500 - ₱4,000",
        duration="30 mins",
        description="Draining fast, not charging, or unexpected shutdowns.",
        icon_name=IconName.BATTERY,
    ),
    RepairIssue(
        id="port",
        name="Charging Port Repair",
        price_range="₱1,200 - ₱2,500",
        duration="45 mins",
        description="Device not charging or cable fits loosely.",
        icon_name=IconName.CHARGING,
    ),
    RepairIssue(
        id="camera",
        name="Camera Repair",
        price_range="₱2,500 - ₱6,000",
        duration="60 mins",
        description="Blurry photos, cracked lens, or black screen.",
        icon_name=IconName.CAMERA,
    ),
    RepairIssue(
        id="water",
        name="Water Damage",
        price_range="₱1,000 Diagnostic",
        duration="24-48 hours",
        description="Deep cleaning and corrosion removal.",
        icon_name=IconName.WATER,
    ),
    RepairIssue(
        id="diagnosis",
        name="General Diagnosis",
        price_range="Free",
        duration="15 mins",
        description="Not sure what is wrong? We will check it out.",
        icon_name=IconName.OTHER,
    ),
]

GENERAL_DIAGNOSIS_ID = "diagnosis"

INITIAL_TIME_SLOTS: list[TimeSlot] = [
    TimeSlot(time=t)
    for t in ("09:00 AM", "10:00 AM", "11:00 AM", "01:00 PM", "02:00 PM", "03:00 PM", "04:00 PM")
]


def get_models_for_brand(brand: Brand) -> list[DeviceModel]:
    """Return the reference models offered for a brand."""
    return list(DEVICE_MODELS.get(brand, []))


def find_model(model_id: str) -> Optional[DeviceModel]:
    """Look up a device model by id across all brands."""
    for models in DEVICE_MODELS.values():
        for model in models:
            if model.id == model_id:
                return model
    return None


class CatalogStore:
    """
    Admin-editable reference data read by the funnel and the dashboard.

    Invariants:
      - time slots are unique by display time and kept in time-of-day order
      - blocked dates are unique and kept in ascending order
    """

    def __init__(
        self,
        services: Optional[Iterable[RepairIssue]] = None,
        time_slots: Optional[Iterable[TimeSlot]] = None,
        blocked_dates: Optional[Iterable[str]] = None,
    ) -> None:
        self._services = [
            s.model_copy() for s in (INITIAL_ISSUES if services is None else services)
        ]
        self._time_slots = sorted(
            (t.model_copy() for t in (INITIAL_TIME_SLOTS if time_slots is None else time_slots)),
            key=lambda slot: display_time_minutes(slot.time),
        )
        self._blocked_dates = sorted(set(blocked_dates or []))

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    @property
    def services(self) -> list[RepairIssue]:
        return list(self._services)

    @property
    def time_slots(self) -> list[TimeSlot]:
        return list(self._time_slots)

    @property
    def blocked_dates(self) -> list[str]:
        return list(self._blocked_dates)

    def get_service(self, service_id: str) -> Optional[RepairIssue]:
        for service in self._services:
            if service.id == service_id:
                return service
        return None

    def available_time_slots(self) -> list[TimeSlot]:
        """Slots currently open for booking.

        Availability is global, not tracked per appointment date.
        """
        return [slot for slot in self._time_slots if slot.available]

    def is_blocked(self, iso_date: str) -> bool:
        return iso_date in self._blocked_dates

    # ------------------------------------------------------------------ #
    # Service mutations
    # ------------------------------------------------------------------ #

    def update_service(self, service: RepairIssue) -> None:
        """Replace the service with the same id. Unknown ids are ignored."""
        for index, existing in enumerate(self._services):
            if existing.id == service.id:
                self._services[index] = service.model_copy()
                logger.info("Service updated: %s", service.id)
                return
        logger.debug("update_service: no service with id %s", service.id)

    # ------------------------------------------------------------------ #
    # Time slot mutations
    # ------------------------------------------------------------------ #

    def update_time_slot(self, time: str, available: bool) -> None:
        """Set availability for the slot keyed by ``time``. Unknown times are ignored."""
        for index, slot in enumerate(self._time_slots):
            if slot.time == time:
                self._time_slots[index] = slot.model_copy(update={"available": available})
                logger.info("Time slot %s set available=%s", time, available)
                return
        logger.debug("update_time_slot: no slot at %s", time)

    def add_time_slot(self, raw_time: str) -> None:
        """Add a slot from 24-hour ``HH:MM`` input, keeping the list sorted.

        Empty or malformed input and times already present are ignored.
        """
        if not raw_time:
            return
        try:
            display = to_display_time(raw_time)
        except ValueError:
            logger.warning("add_time_slot: ignoring malformed time %r", raw_time)
            return
        if any(slot.time == display for slot in self._time_slots):
            logger.debug("add_time_slot: %s already exists", display)
            return
        self._time_slots.append(TimeSlot(time=display, available=True))
        self._time_slots.sort(key=lambda slot: display_time_minutes(slot.time))
        logger.info("Time slot added: %s", display)

    def delete_time_slot(self, time: str) -> None:
        before = len(self._time_slots)
        self._time_slots = [slot for slot in self._time_slots if slot.time != time]
        if len(self._time_slots) != before:
            logger.info("Time slot deleted: %s", time)

    # ------------------------------------------------------------------ #
    # Blocked dates
    # ------------------------------------------------------------------ #

    def block_date(self, iso_date: str) -> None:
        """Close the shop on ``iso_date`` (YYYY-MM-DD). Duplicates are ignored."""
        if not iso_date or iso_date in self._blocked_dates:
            return
        if parse_iso_date(iso_date) is None:
            logger.warning("block_date: ignoring malformed date %r", iso_date)
            return
        self._blocked_dates.append(iso_date)
        self._blocked_dates.sort()
        logger.info("Date blocked: %s", iso_date)

    def unblock_date(self, iso_date: str) -> None:
        if iso_date in self._blocked_dates:
            self._blocked_dates.remove(iso_date)
            logger.info("Date unblocked: %s", iso_date)
