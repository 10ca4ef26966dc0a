"""Booking ledger records and the transient funnel draft."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from swiftfix.schemas.catalog_schema import Brand, DeviceModel, RepairIssue


class BookingStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Booking(BaseModel):
    """
    Submitted booking stored in the ledger.

    Model, issue and price are name/price snapshots taken at submission,
    not live references into the catalog.
    """
    id: str = Field(..., description="BK-#### reference")
    status: BookingStatus = BookingStatus.PENDING
    date_created: str = Field(default_factory=lambda: date.today().isoformat())
    selected_brand: Brand
    selected_model: str
    selected_issue: str
    price: str
    appointment_date: str
    appointment_time: str
    customer_name: str
    customer_email: str = ""
    customer_phone: str


@dataclass
class BookingDraft:
    """
    In-progress funnel data, owned by a single BookingFunnel.

    Discarded on cancel, or converted into a Booking on submit.
    """
    selected_brand: Optional[Brand] = None
    selected_model: Optional[DeviceModel] = None
    selected_issue: Optional[RepairIssue] = None
    appointment_date: str = ""
    appointment_time: str = ""
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    ai_diagnosis: Optional[str] = None
