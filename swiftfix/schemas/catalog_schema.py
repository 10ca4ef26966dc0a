"""Catalog data models: brands, device models, repair services and time slots."""

from enum import Enum

from pydantic import BaseModel, Field


class Brand(str, Enum):
    APPLE = "Apple"
    SAMSUNG = "Samsung"
    GOOGLE = "Google"
    OTHER = "Other"


class IconName(str, Enum):
    """Display category for a repair service."""
    SCREEN = "screen"
    BATTERY = "battery"
    WATER = "water"
    CAMERA = "camera"
    CHARGING = "charging"
    OTHER = "other"


class RepairIssue(BaseModel):
    """A repair service offered by the shop. ``id`` never changes once created."""
    id: str
    name: str
    price_range: str = Field(..., description="Free-form display price, e.g. '₱1,500 - ₱4,000' or 'Free'")
    duration: str
    description: str = ""
    icon_name: IconName = IconName.OTHER


class DeviceModel(BaseModel):
    """Read-only reference entry for a phone model."""
    id: str
    name: str
    brand: Brand


class TimeSlot(BaseModel):
    """Bookable time of day, keyed by its 12-hour display string."""
    time: str = Field(..., description="hh:mm AM/PM")
    available: bool = True
