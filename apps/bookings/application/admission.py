"""
Booking Admission

Use cases deciding whether a booking may be created or removed.

Commands:
- AdmitBookingCommand: reserve a product for a period
- CancelBookingCommand: release a reservation before it starts

Both handlers return either a domain object or an AdmissionError value.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import UUID, uuid4
import logging

from shared.application.clock import Clock
from shared.application.uow import StoreError
from shared.domain.value_objects import TimeRange
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.errors import AdmissionError
from apps.bookings.domain.schedule import ProductSchedule

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class AdmitBookingCommand:
    product_id: UUID
    requester_id: int
    starts_at: datetime
    ends_at: datetime
    contact_number: str
    address: str
    booking_query: str = ''


@dataclass
class CancelBookingCommand:
    booking_id: UUID
    requester_id: int


@dataclass(frozen=True)
class CancelledBooking:
    booking_id: UUID
    product_id: UUID
    period: TimeRange


# ===== Checker =====

class BookingAdmissionChecker:
    """
    Admission control for bookings

    The overlap check and the insert run inside one unit of work with the
    product locked, so two racing admissions for the same product are
    serialized while admissions for different products never wait on
    each other.

    Strategy:
    1. Validate the requested period against the clock
    2. Open unit of work, load product with lock
    3. Reject self-booking
    4. Load the product schedule and look for an overlapping booking
    5. Insert the booking; commit releases the lock
    """

    def __init__(self, uow_factory: Callable, clock: Clock):
        self.uow_factory = uow_factory
        self.clock = clock

    def try_admit_booking(self, command: AdmitBookingCommand) -> Booking | AdmissionError:
        now = self.clock.now()

        if command.starts_at >= command.ends_at:
            return AdmissionError.invalid_interval("From date must be before to date")
        if command.starts_at <= now:
            return AdmissionError.invalid_interval("From date must be in the future")

        period = TimeRange(command.starts_at, command.ends_at)

        try:
            with self.uow_factory() as uow:
                product = uow.products.get(command.product_id, lock=True)
                if product is None:
                    logger.warning(f"Booking refused: product {command.product_id} not found")
                    return AdmissionError.not_found("Product")

                if product.owner_id == command.requester_id:
                    logger.warning(
                        f"Booking refused: user {command.requester_id} "
                        f"owns product {product.id}"
                    )
                    return AdmissionError.self_booking()

                schedule = ProductSchedule(product.id, uow.bookings.list_for_product(product.id))
                conflict = schedule.find_conflict(period)
                if conflict is not None:
                    logger.warning(
                        f"Booking refused: {period} overlaps booking {conflict.id} "
                        f"({conflict.period}) on product {product.id}"
                    )
                    return AdmissionError.conflict_with(conflict.period)

                booking = schedule.admit(Booking(
                    id=uuid4(),
                    product_id=product.id,
                    user_id=command.requester_id,
                    period=period,
                    contact_number=command.contact_number,
                    address=command.address,
                    booking_query=command.booking_query or '',
                    created_at=now,
                ))
                booking = uow.bookings.add(booking)
        except StoreError:
            logger.error(
                f"Store failure while admitting booking for product {command.product_id}",
                exc_info=True,
            )
            return AdmissionError.store_failure()

        logger.info(
            f"Booking {booking.id} admitted for product {booking.product_id}, "
            f"user {booking.user_id}, period {booking.period}"
        )
        return booking

    def try_cancel_booking(self, command: CancelBookingCommand) -> CancelledBooking | AdmissionError:
        now = self.clock.now()

        try:
            with self.uow_factory() as uow:
                booking = uow.bookings.get(command.booking_id)
                if booking is None:
                    return AdmissionError.not_found("Booking")

                if booking.user_id != command.requester_id:
                    logger.warning(
                        f"Cancellation refused: user {command.requester_id} "
                        f"does not own booking {booking.id}"
                    )
                    return AdmissionError.forbidden()

                if booking.has_started(now):
                    logger.warning(f"Cancellation refused: booking {booking.id} already started")
                    return AdmissionError.too_late_to_cancel()

                uow.bookings.delete(booking.id)
        except StoreError:
            logger.error(
                f"Store failure while cancelling booking {command.booking_id}",
                exc_info=True,
            )
            return AdmissionError.store_failure()

        logger.info(f"Booking {booking.id} cancelled, period {booking.period} released")
        return CancelledBooking(
            booking_id=booking.id,
            product_id=booking.product_id,
            period=booking.period,
        )
