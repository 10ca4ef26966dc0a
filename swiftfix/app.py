"""
Application state handle.

One AppState holds everything a browser session would share: the catalog,
the booking ledger, the signed-in user and the reviews. Funnels, the
dashboard and the diagnosis assistant are built from it instead of
reaching for module globals.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from swiftfix.admin.dashboard import AdminDashboard
from swiftfix.funnel.booking_funnel import BookingFunnel
from swiftfix.tools.catalog import CatalogStore
from swiftfix.tools.diagnosis import DiagnoseFn, DiagnosisAssistant
from swiftfix.tools.identity import ReviewBoard, SessionIdentity
from swiftfix.tools.ledger import BookingLedger


@dataclass
class AppState:
    """Shared, in-memory state for one application session."""

    catalog: CatalogStore = field(default_factory=CatalogStore)
    ledger: BookingLedger = field(default_factory=BookingLedger)
    identity: SessionIdentity = field(default_factory=SessionIdentity)
    reviews: Optional[ReviewBoard] = None

    def __post_init__(self) -> None:
        if self.reviews is None:
            self.reviews = ReviewBoard(self.identity)

    def new_funnel(self, **kwargs: Any) -> BookingFunnel:
        """Start a booking funnel wired to this session's catalog and ledger."""
        return BookingFunnel(self.catalog, self.ledger, **kwargs)

    def new_diagnosis(self, diagnose: Optional[DiagnoseFn] = None) -> DiagnosisAssistant:
        return DiagnosisAssistant(self.catalog, diagnose=diagnose)

    def new_dashboard(self, **kwargs: Any) -> AdminDashboard:
        return AdminDashboard(self.catalog, self.ledger, **kwargs)
