from swiftfix.funnel.booking_funnel import BookingFunnel
from swiftfix.funnel.state_machine import (
    FunnelStateMachine,
    FunnelStep,
    FunnelTrigger,
    InvalidTransitionError,
)

__all__ = [
    "BookingFunnel",
    "FunnelStateMachine",
    "FunnelStep",
    "FunnelTrigger",
    "InvalidTransitionError",
]
