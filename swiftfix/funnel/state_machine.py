"""
Finite state machine for the booking funnel.

Six ordered steps, brand -> model -> issue -> schedule -> confirm -> success,
plus the back edges. Forward edges carry guards over the draft and catalog,
so both "may the customer continue?" and "where does Back go?" are read
from the one transition table below.

Usage:
    sm = FunnelStateMachine(draft, catalog)
    draft.selected_brand = Brand.APPLE
    sm.transition(FunnelTrigger.BRAND_SELECTED)
    assert sm.current_step == FunnelStep.MODEL
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Union

from swiftfix.schemas.booking_schema import BookingDraft
from swiftfix.tools.catalog import CatalogStore

logger = logging.getLogger(__name__)


class FunnelStep(str, Enum):
    """Funnel steps in presentation order."""
    BRAND = "brand"
    MODEL = "model"
    ISSUE = "issue"
    SCHEDULE = "schedule"
    CONFIRM = "confirm"
    SUCCESS = "success"


class FunnelTrigger(str, Enum):
    """Customer actions that move the funnel."""
    BRAND_SELECTED = "brand_selected"
    MODEL_SELECTED = "model_selected"
    MODEL_SKIPPED = "model_skipped"
    ISSUE_SELECTED = "issue_selected"
    DIAGNOSIS_ACCEPTED = "diagnosis_accepted"
    SCHEDULE_CONFIRMED = "schedule_confirmed"
    BOOKING_SUBMITTED = "booking_submitted"
    BACK = "back"


Guard = Callable[[BookingDraft, CatalogStore], bool]


def _has_brand(draft: BookingDraft, catalog: CatalogStore) -> bool:
    return draft.selected_brand is not None


def _has_model(draft: BookingDraft, catalog: CatalogStore) -> bool:
    return draft.selected_model is not None


def _has_issue(draft: BookingDraft, catalog: CatalogStore) -> bool:
    return draft.selected_issue is not None


def schedule_complete(draft: BookingDraft, catalog: CatalogStore) -> bool:
    """Open date, available time, name and phone. Email is optional."""
    if not draft.appointment_date or catalog.is_blocked(draft.appointment_date):
        return False
    open_times = {slot.time for slot in catalog.available_time_slots()}
    return (
        draft.appointment_time in open_times
        and bool(draft.customer_name.strip())
        and bool(draft.customer_phone.strip())
    )


@dataclass
class Transition:
    """A single valid step transition."""
    from_step: FunnelStep
    to_step: FunnelStep
    trigger: FunnelTrigger
    guard: Optional[Guard] = None


@dataclass
class StepEntry:
    """Recorded history entry for a step visit."""
    step: FunnelStep
    entered_at: datetime
    trigger: Optional[FunnelTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current step."""


class FunnelStateMachine:
    """
    Deterministic step machine for one booking draft.

    A trigger fires only if the table holds an edge for it from the current
    step and that edge's guard accepts the draft. Anything else is rejected
    with the list of triggers valid from where the funnel stands.
    """

    TRANSITIONS: list[Transition] = [
        # --- Forward ---
        Transition(FunnelStep.BRAND, FunnelStep.MODEL,
                   FunnelTrigger.BRAND_SELECTED, _has_brand),
        Transition(FunnelStep.MODEL, FunnelStep.ISSUE,
                   FunnelTrigger.MODEL_SELECTED, _has_model),
        Transition(FunnelStep.MODEL, FunnelStep.ISSUE,
                   FunnelTrigger.MODEL_SKIPPED),
        Transition(FunnelStep.ISSUE, FunnelStep.SCHEDULE,
                   FunnelTrigger.ISSUE_SELECTED, _has_issue),
        Transition(FunnelStep.ISSUE, FunnelStep.SCHEDULE,
                   FunnelTrigger.DIAGNOSIS_ACCEPTED, _has_issue),
        Transition(FunnelStep.SCHEDULE, FunnelStep.CONFIRM,
                   FunnelTrigger.SCHEDULE_CONFIRMED, schedule_complete),
        Transition(FunnelStep.CONFIRM, FunnelStep.SUCCESS,
                   FunnelTrigger.BOOKING_SUBMITTED),

        # --- Back ---
        Transition(FunnelStep.MODEL, FunnelStep.BRAND, FunnelTrigger.BACK),
        Transition(FunnelStep.ISSUE, FunnelStep.MODEL, FunnelTrigger.BACK),
        Transition(FunnelStep.SCHEDULE, FunnelStep.ISSUE, FunnelTrigger.BACK),
        Transition(FunnelStep.CONFIRM, FunnelStep.SCHEDULE, FunnelTrigger.BACK),
    ]

    def __init__(
        self,
        draft: BookingDraft,
        catalog: CatalogStore,
        log: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> None:
        self._draft = draft
        self._log = log or logger
        self._catalog = catalog
        self._current_step = FunnelStep.BRAND
        self._history: list[StepEntry] = [
            StepEntry(step=FunnelStep.BRAND, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_step(self) -> FunnelStep:
        return self._current_step

    def _find(self, trigger: FunnelTrigger) -> Optional[Transition]:
        for t in self.TRANSITIONS:
            if t.from_step == self._current_step and t.trigger == trigger:
                if t.guard is None or t.guard(self._draft, self._catalog):
                    return t
        return None

    def can_transition(self, trigger: FunnelTrigger) -> bool:
        """True if ``trigger`` would fire right now (edge exists and guard passes)."""
        return self._find(trigger) is not None

    def transition(self, trigger: FunnelTrigger) -> FunnelStep:
        """
        Execute a step transition.

        Args:
            trigger: The customer action triggering the transition.

        Returns:
            The new funnel step.

        Raises:
            InvalidTransitionError: If no edge exists or its guard rejects the draft.
        """
        t = self._find(trigger)
        if t is None:
            valid = [v.value for v in self.get_valid_triggers()]
            raise InvalidTransitionError(
                f"No valid transition from '{self._current_step.value}' "
                f"with trigger '{trigger.value}'. Valid triggers: {valid}"
            )

        old_step = self._current_step
        self._current_step = t.to_step
        self._history.append(StepEntry(
            step=self._current_step,
            entered_at=datetime.now(timezone.utc),
            trigger=trigger,
        ))
        self._log.debug(
            "Funnel transition: %s -> %s (trigger: %s)",
            old_step.value, self._current_step.value, trigger.value,
        )
        return self._current_step

    def get_valid_triggers(self) -> list[FunnelTrigger]:
        """Return all triggers with an edge from the current step, guards ignored."""
        return [t.trigger for t in self.TRANSITIONS if t.from_step == self._current_step]

    def previous_step(self) -> Optional[FunnelStep]:
        """Where Back leads from here; None on brand and success."""
        for t in self.TRANSITIONS:
            if t.from_step == self._current_step and t.trigger == FunnelTrigger.BACK:
                return t.to_step
        return None

    def get_history(self) -> list[StepEntry]:
        return list(self._history)

    def get_step_trace(self) -> list[str]:
        """Return ordered list of step names visited."""
        return [entry.step.value for entry in self._history]

    def is_terminal(self) -> bool:
        return self._current_step == FunnelStep.SUCCESS
