"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: a borrower's reservation of a product for a span of time
- ProductRef: the slice of a product the booking rules need (identity + owner)
- BookingStatus: derived lifecycle phase, never stored
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from shared.domain.base import Entity
from shared.domain.value_objects import TimeRange


class BookingStatus(Enum):
    """
    Booking phase relative to a point in time

    - UPCOMING: now < from
    - ACTIVE: from <= now <= to
    - COMPLETED: now > to
    """
    UPCOMING = 'upcoming'
    ACTIVE = 'active'
    COMPLETED = 'completed'


@dataclass(frozen=True)
class ProductRef:
    id: UUID
    owner_id: int


@dataclass(eq=False)
class Booking(Entity):
    """
    Booking Entity

    Bookings are created once (through admission) and deleted once
    (through cancellation). They are never mutated in between.
    """

    product_id: UUID
    user_id: int
    period: TimeRange
    contact_number: str
    address: str
    created_at: datetime
    booking_query: str = ''

    @property
    def starts_at(self) -> datetime:
        return self.period.start

    @property
    def ends_at(self) -> datetime:
        return self.period.end

    def has_started(self, now: datetime) -> bool:
        return self.period.start <= now

    def __str__(self):
        return f"Booking {self.id} of product {self.product_id} ({self.period})"


def derive_status(booking: Booking, now: datetime) -> BookingStatus:
    """Single place where a booking's phase is computed from its timestamps."""
    if now < booking.period.start:
        return BookingStatus.UPCOMING
    if now <= booking.period.end:
        return BookingStatus.ACTIVE
    return BookingStatus.COMPLETED
