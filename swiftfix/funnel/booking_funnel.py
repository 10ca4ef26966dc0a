"""
Customer booking funnel: device -> issue -> schedule -> confirm -> success.

The funnel owns one BookingDraft until submission, reads choices from the
catalog and hands a finished Booking to the ledger. Validation problems
(closed date, missing contact details) are returned as ``False`` plus an
inline message; only actions the current step does not offer raise.

Usage:
    funnel = BookingFunnel(catalog, ledger)
    funnel.select_brand(Brand.APPLE)
    funnel.select_model("ip15")
    funnel.select_issue("battery")
    funnel.choose_date("2026-11-02")
    funnel.choose_time("10:00 AM")
    funnel.set_contact(name="Jane Doe", phone="555-1234")
    funnel.confirm_schedule()
    booking = await funnel.submit()
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Callable, Optional, Union

from swiftfix.config import settings
from swiftfix.funnel.state_machine import (
    FunnelStateMachine,
    FunnelStep,
    FunnelTrigger,
    InvalidTransitionError,
)
from swiftfix.logging_context import get_session_logger, new_session_id
from swiftfix.schemas.booking_schema import Booking, BookingDraft
from swiftfix.schemas.catalog_schema import Brand, DeviceModel, RepairIssue, TimeSlot
from swiftfix.tools.catalog import BRANDS, CatalogStore, get_models_for_brand
from swiftfix.tools.diagnosis import match_issue
from swiftfix.tools.ledger import BookingLedger, IdFactory, build_booking, generate_booking_id
from swiftfix.utils import parse_iso_date


BLOCKED_DATE_MESSAGE = "Sorry, we are closed on this date. Please select another day."
INVALID_DATE_MESSAGE = "Please select a valid date."
PAST_DATE_MESSAGE = "Please select today or a later date."


class BookingFunnel:
    """Step-by-step booking flow for a single customer session."""

    def __init__(
        self,
        catalog: CatalogStore,
        ledger: BookingLedger,
        id_factory: Optional[IdFactory] = None,
        submit_delay: Optional[float] = None,
        today: Callable[[], date] = date.today,
        session_id: Optional[str] = None,
    ) -> None:
        self.session_id = session_id or new_session_id()
        self._logger = get_session_logger(__name__, self.session_id)

        self._catalog = catalog
        self._ledger = ledger
        self._id_factory: IdFactory = id_factory or generate_booking_id
        self._submit_delay = (
            settings.shop.submit_delay_sec if submit_delay is None else submit_delay
        )
        self._today = today

        self.draft = BookingDraft()
        self._sm = FunnelStateMachine(self.draft, catalog, log=self._logger)
        self._submitting = False
        self._closed = False
        self.date_error: Optional[str] = None
        self.booking: Optional[Booking] = None

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    @property
    def step(self) -> FunnelStep:
        return self._sm.current_step

    @property
    def state_machine(self) -> FunnelStateMachine:
        return self._sm

    @property
    def is_open(self) -> bool:
        """False once the customer has cancelled or left the success screen."""
        return not self._closed

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def can_submit(self) -> bool:
        """Whether the confirm control is enabled."""
        return self.is_open and self.step == FunnelStep.CONFIRM and not self._submitting

    def can_continue(self) -> bool:
        """Whether the schedule step's continue control is enabled."""
        if not self.is_open or self.step != FunnelStep.SCHEDULE:
            return False
        self._drop_blocked_date()
        return self._sm.can_transition(FunnelTrigger.SCHEDULE_CONFIRMED)

    def _require_step(self, step: FunnelStep) -> None:
        if self._closed:
            raise InvalidTransitionError("Booking funnel is closed")
        if self.step != step:
            raise InvalidTransitionError(
                f"Action requires step '{step.value}', funnel is at '{self.step.value}'"
            )

    # ------------------------------------------------------------------ #
    # Choices offered at each step
    # ------------------------------------------------------------------ #

    def brand_choices(self) -> list[Brand]:
        return list(BRANDS)

    def model_choices(self) -> list[DeviceModel]:
        if self.draft.selected_brand is None:
            return []
        return get_models_for_brand(self.draft.selected_brand)

    def issue_choices(self) -> list[RepairIssue]:
        return self._catalog.services

    def time_choices(self) -> list[TimeSlot]:
        """Open slots. The same list is offered whatever date is chosen."""
        if self.is_open and self.step == FunnelStep.SCHEDULE:
            self._drop_blocked_date()
        return self._catalog.available_time_slots()

    # ------------------------------------------------------------------ #
    # Device and issue
    # ------------------------------------------------------------------ #

    def select_brand(self, brand: Union[Brand, str]) -> FunnelStep:
        self._require_step(FunnelStep.BRAND)
        self.draft.selected_brand = Brand(brand)
        self._logger.info("Brand selected: %s", self.draft.selected_brand.value)
        return self._sm.transition(FunnelTrigger.BRAND_SELECTED)

    def select_model(self, model: Union[DeviceModel, str]) -> FunnelStep:
        """Choose a model for the selected brand, by object or id."""
        self._require_step(FunnelStep.MODEL)
        if isinstance(model, str):
            found = next((m for m in self.model_choices() if m.id == model), None)
            if found is None:
                raise ValueError(f"Unknown model '{model}' for brand {self.draft.selected_brand}")
            model = found
        self.draft.selected_model = model
        self._logger.info("Model selected: %s", model.name)
        return self._sm.transition(FunnelTrigger.MODEL_SELECTED)

    def skip_model(self) -> FunnelStep:
        """Advance without a model ("can't find your model?")."""
        self._require_step(FunnelStep.MODEL)
        self._logger.info("Model step skipped")
        return self._sm.transition(FunnelTrigger.MODEL_SKIPPED)

    def select_issue(self, issue: Union[RepairIssue, str]) -> FunnelStep:
        """Choose a repair service, by object or catalog id."""
        self._require_step(FunnelStep.ISSUE)
        if isinstance(issue, str):
            found = self._catalog.get_service(issue)
            if found is None:
                raise ValueError(f"Unknown service '{issue}'")
            issue = found
        self.draft.selected_issue = issue
        self._logger.info("Issue selected: %s", issue.name)
        return self._sm.transition(FunnelTrigger.ISSUE_SELECTED)

    def apply_diagnosis(self, diagnosis: str) -> Optional[RepairIssue]:
        """Adopt the service an AI diagnosis points to and jump to scheduling.

        Returns the chosen service, or None when the catalog is empty.
        """
        self._require_step(FunnelStep.ISSUE)
        issue = match_issue(diagnosis, self._catalog.services)
        if issue is None:
            return None
        self.draft.selected_issue = issue
        self.draft.ai_diagnosis = diagnosis
        self._logger.info("Issue chosen from diagnosis: %s", issue.name)
        self._sm.transition(FunnelTrigger.DIAGNOSIS_ACCEPTED)
        return issue

    # ------------------------------------------------------------------ #
    # Schedule and contact details
    # ------------------------------------------------------------------ #

    def choose_date(self, iso_date: str) -> bool:
        """Pick the appointment date.

        A blocked, past or malformed date clears the current date and sets
        ``date_error``. A valid date clears the error and any chosen time.
        """
        self._require_step(FunnelStep.SCHEDULE)
        parsed = parse_iso_date(iso_date)
        if parsed is None:
            return self._reject_date(iso_date, INVALID_DATE_MESSAGE)
        if self._catalog.is_blocked(iso_date):
            return self._reject_date(iso_date, BLOCKED_DATE_MESSAGE)
        if parsed < self._today():
            return self._reject_date(iso_date, PAST_DATE_MESSAGE)

        self.date_error = None
        self.draft.appointment_date = iso_date
        self.draft.appointment_time = ""
        self._logger.debug("Appointment date set: %s", iso_date)
        return True

    def _reject_date(self, iso_date: str, message: str) -> bool:
        self.date_error = message
        self.draft.appointment_date = ""
        self._logger.debug("Appointment date rejected: %s (%s)", iso_date, message)
        return False

    def _drop_blocked_date(self) -> None:
        """Clear a chosen date the shop has closed since it was picked."""
        chosen = self.draft.appointment_date
        if chosen and self._catalog.is_blocked(chosen):
            self._reject_date(chosen, BLOCKED_DATE_MESSAGE)

    def choose_time(self, time: str) -> bool:
        """Pick one of the currently open time slots."""
        self._require_step(FunnelStep.SCHEDULE)
        if not any(slot.time == time for slot in self._catalog.available_time_slots()):
            self._logger.debug("Time %s is not an open slot", time)
            return False
        self.draft.appointment_time = time
        return True

    def set_contact(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> None:
        """Update any of the contact fields; omitted fields are left as they are."""
        self._require_step(FunnelStep.SCHEDULE)
        if name is not None:
            self.draft.customer_name = name
        if email is not None:
            self.draft.customer_email = email
        if phone is not None:
            self.draft.customer_phone = phone

    def confirm_schedule(self) -> bool:
        """Move to the confirm step if the schedule is complete.

        A date closed after the customer picked it is cleared here, as it is
        whenever the schedule step is read, with the usual inline error.
        """
        self._require_step(FunnelStep.SCHEDULE)
        self._drop_blocked_date()
        if not self._sm.can_transition(FunnelTrigger.SCHEDULE_CONFIRMED):
            return False
        self._sm.transition(FunnelTrigger.SCHEDULE_CONFIRMED)
        return True

    def confirmation_summary(self) -> dict[str, str]:
        """Read-back of the draft for the confirm screen."""
        if self.is_open and self.step == FunnelStep.SCHEDULE:
            self._drop_blocked_date()
        d = self.draft
        device = " ".join(
            part for part in (
                d.selected_brand.value if d.selected_brand else "",
                d.selected_model.name if d.selected_model else "",
            ) if part
        )
        return {
            "device": device,
            "service": d.selected_issue.name if d.selected_issue else "",
            "when": f"{d.appointment_date} at {d.appointment_time}",
            "estimated_cost": d.selected_issue.price_range if d.selected_issue else "",
            "customer": d.customer_name,
            "phone": d.customer_phone,
            "email": d.customer_email,
        }

    # ------------------------------------------------------------------ #
    # Submit, back, cancel
    # ------------------------------------------------------------------ #

    async def submit(self) -> Optional[Booking]:
        """Submit the draft after the simulated network delay.

        The booking is appended to the ledger before the funnel reaches
        ``success``. A call made while a submit is outstanding is ignored
        and returns None.
        """
        self._require_step(FunnelStep.CONFIRM)
        if self._submitting:
            self._logger.warning("Submit ignored: a submission is already in flight")
            return None

        self._submitting = True
        try:
            await asyncio.sleep(self._submit_delay)
            booking = build_booking(self.draft, self._id_factory(), today=self._today())
            self._ledger.append(booking)
            self._sm.transition(FunnelTrigger.BOOKING_SUBMITTED)
            self.booking = booking
        finally:
            self._submitting = False
        return booking

    def back(self) -> Optional[FunnelStep]:
        """Go to the previous step; from brand or success this leaves the funnel.

        Returns the new step, or None if the funnel was exited.
        """
        if self._closed:
            return None
        if self._submitting:
            self._logger.debug("Back ignored while submitting")
            return self.step
        if self._sm.previous_step() is None:
            if self._sm.is_terminal():
                self._closed = True
                self._logger.info("Funnel finished")
            else:
                self.cancel()
            return None
        return self._sm.transition(FunnelTrigger.BACK)

    def cancel(self) -> None:
        """Abandon the booking. Nothing is written to the ledger."""
        if self._closed:
            return
        if self._sm.is_terminal():
            raise InvalidTransitionError("Cannot cancel a booking that was already submitted")
        if self._submitting:
            self._logger.warning("Cancel ignored: a submission is already in flight")
            return
        self.draft = BookingDraft()
        self.date_error = None
        self._closed = True
        self._logger.info("Funnel cancelled at step '%s'", self.step.value)
