"""
Product Schedule Aggregate

The consistency boundary for preventing double bookings: every admitted
booking of one product, checked as a whole before a new one is accepted.

Strategy:
1. Pessimistic locking: the product row is locked (SELECT FOR UPDATE) for
   the whole check-and-insert unit of work
2. Domain validation: find_conflict() scans all bookings of the product
3. Database constraint: bookings must satisfy starts_at < ends_at
"""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from shared.domain.value_objects import TimeRange

from .entities import Booking


@dataclass
class ProductSchedule:
    """
    All bookings currently held against one product

    Key invariant:
    - No two bookings of the product have overlapping periods, where both
      period bounds are inclusive (a booking ending at 10:00 blocks one
      starting at 10:00)

    Usage:
        product = uow.products.get(product_id, lock=True)
        schedule = ProductSchedule(product.id, uow.bookings.list_for_product(product.id))

        conflict = schedule.find_conflict(period)
        if conflict is None:
            uow.bookings.add(booking)
    """

    product_id: UUID
    bookings: List[Booking] = field(default_factory=list)

    def find_conflict(self, period: TimeRange) -> Booking | None:
        """
        First booking whose period overlaps the candidate, or None

        Full scan: per-product booking counts are small.
        """
        for booking in self.bookings:
            if booking.period.overlaps_with(period):
                return booking
        return None

    def admit(self, booking: Booking) -> Booking:
        """
        Add a booking to the schedule

        Raises:
            ValueError: if the booking overlaps an existing one
        """
        if booking.product_id != self.product_id:
            raise ValueError(
                f"Booking {booking.id} belongs to product {booking.product_id}, "
                f"not {self.product_id}"
            )
        conflict = self.find_conflict(booking.period)
        if conflict is not None:
            raise ValueError(
                f"Period {booking.period} overlaps booking {conflict.id} ({conflict.period})"
            )
        self.bookings.append(booking)
        return booking

    def is_free_of_overlaps(self) -> bool:
        """Check the non-overlap invariant over every pair of bookings"""
        ordered = sorted(self.bookings, key=lambda b: b.period.start)
        for earlier, later in zip(ordered, ordered[1:]):
            if earlier.period.overlaps_with(later.period):
                return False
        return True

    def __len__(self):
        return len(self.bookings)

    def __str__(self):
        return f"ProductSchedule(product={self.product_id}, bookings={len(self.bookings)})"
