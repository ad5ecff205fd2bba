from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from booking.services.timeslots import time_to_minutes


STATUS_CONFIRMED = "confirmed"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
STATUS_NO_SHOW = "no-show"


@dataclass(frozen=True)
class ServiceSnapshot:
    name: str
    duration: int


@dataclass(frozen=True)
class BookingRecord:
    reference: str
    zone: str
    date: date
    time: str  # "HH:MM"
    total_duration: int
    status: str = STATUS_CONFIRMED
    services: tuple[ServiceSnapshot, ...] = field(default_factory=tuple)

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.time)

    @property
    def end_minutes(self) -> int:
        # el fin nunca se guarda, siempre se deriva
        return self.start_minutes + int(self.total_duration)

    @property
    def blocks_capacity(self) -> bool:
        return self.status != STATUS_CANCELLED
