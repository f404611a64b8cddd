"""
Booking repositories (Django ORM)

Translate between ORM rows and booking domain objects. Every method is
meant to run inside a BookingUnitOfWork.
"""

from __future__ import annotations

from uuid import UUID

from apps.bookings.domain.entities import Booking, ProductRef
from apps.bookings.models import Booking as BookingModel
from apps.products.models import Product as ProductModel
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import TimeRange


def booking_from_model(row: BookingModel) -> Booking:
    return Booking(
        id=row.id,
        product_id=row.product_id,
        user_id=row.user_id,
        period=TimeRange(row.starts_at, row.ends_at),
        contact_number=row.contact_number,
        address=row.address,
        booking_query=row.booking_query,
        created_at=row.created_at,
    )


class DjangoProductRepository:
    def get(self, product_id: UUID, lock: bool = False) -> ProductRef | None:
        """
        Load a product reference

        With lock=True the product row is locked (SELECT ... FOR UPDATE)
        until the surrounding transaction ends; admissions for the same
        product queue behind each other on this lock. Backends without
        row locks (SQLite) ignore it and serialize writers themselves.
        """
        qs = ProductModel.objects.filter(pk=product_id)
        if lock:
            qs = qs.select_for_update()
        row = qs.only("id", "owner_id").first()
        if row is None:
            return None
        return ProductRef(id=row.id, owner_id=row.owner_id)


class DjangoBookingRepository:
    def get(self, booking_id: UUID) -> Booking | None:
        row = BookingModel.objects.filter(pk=booking_id).first()
        return booking_from_model(row) if row is not None else None

    def list_for_product(self, product_id: UUID) -> list[Booking]:
        rows = BookingModel.objects.filter(product_id=product_id).order_by("starts_at")
        return [booking_from_model(row) for row in rows]

    def add(self, booking: Booking) -> Booking:
        row = BookingModel.objects.create(
            id=booking.id,
            product_id=booking.product_id,
            user_id=booking.user_id,
            starts_at=booking.period.start,
            ends_at=booking.period.end,
            booking_query=booking.booking_query,
            contact_number=booking.contact_number,
            address=booking.address,
            created_at=booking.created_at,
        )
        return booking_from_model(row)

    def delete(self, booking_id: UUID) -> None:
        BookingModel.objects.filter(pk=booking_id).delete()


class BookingUnitOfWork(DjangoUnitOfWork):
    """One transaction exposing the product and booking repositories."""

    def __init__(self):
        super().__init__()
        self.products = DjangoProductRepository()
        self.bookings = DjangoBookingRepository()
