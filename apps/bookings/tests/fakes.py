"""In-memory collaborators for exercising the admission checker without a database."""

from __future__ import annotations

import threading
from collections import defaultdict
from datetime import datetime
from uuid import UUID

from apps.bookings.domain.entities import Booking, ProductRef
from shared.application.uow import AbstractUnitOfWork, StoreError


class FixedClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


class InMemoryStore:
    """Committed state shared by every unit of work created from it."""

    def __init__(self):
        self.products: dict[UUID, ProductRef] = {}
        self.bookings: dict[UUID, Booking] = {}
        self.locks: defaultdict[UUID, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()
        # name of the repository operation that raises StoreError, if any
        self.fail_on: str | None = None

    def add_product(self, product_id: UUID, owner_id: int) -> ProductRef:
        product = ProductRef(id=product_id, owner_id=owner_id)
        self.products[product_id] = product
        return product

    def lock_for(self, product_id: UUID) -> threading.Lock:
        with self._locks_guard:
            return self.locks[product_id]

    def bookings_for(self, product_id: UUID) -> list[Booking]:
        return sorted(
            (b for b in self.bookings.values() if b.product_id == product_id),
            key=lambda b: b.period.start,
        )

    def unit_of_work(self) -> "InMemoryUnitOfWork":
        return InMemoryUnitOfWork(self)


class _Products:
    def __init__(self, uow: "InMemoryUnitOfWork"):
        self._uow = uow

    def get(self, product_id: UUID, lock: bool = False) -> ProductRef | None:
        store = self._uow.store
        if store.fail_on == "products.get":
            raise StoreError("products unavailable")
        if lock:
            self._uow.hold(store.lock_for(product_id))
        return store.products.get(product_id)


class _Bookings:
    def __init__(self, uow: "InMemoryUnitOfWork"):
        self._uow = uow

    def get(self, booking_id: UUID) -> Booking | None:
        return self._uow.store.bookings.get(booking_id)

    def list_for_product(self, product_id: UUID) -> list[Booking]:
        return self._uow.store.bookings_for(product_id)

    def add(self, booking: Booking) -> Booking:
        if self._uow.store.fail_on == "bookings.add":
            raise StoreError("insert failed")
        self._uow.pending_adds.append(booking)
        return booking

    def delete(self, booking_id: UUID) -> None:
        if self._uow.store.fail_on == "bookings.delete":
            raise StoreError("delete failed")
        self._uow.pending_deletes.append(booking_id)


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Stages writes and applies them on commit; product locks are held until exit."""

    def __init__(self, store: InMemoryStore):
        self.store = store
        self.products = _Products(self)
        self.bookings = _Bookings(self)
        self.pending_adds: list[Booking] = []
        self.pending_deletes: list[UUID] = []
        self.committed = False
        self._held: list[threading.Lock] = []

    def hold(self, lock: threading.Lock) -> None:
        if lock not in self._held:
            lock.acquire()
            self._held.append(lock)

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            while self._held:
                self._held.pop().release()

    def commit(self):
        for booking in self.pending_adds:
            self.store.bookings[booking.id] = booking
        for booking_id in self.pending_deletes:
            self.store.bookings.pop(booking_id, None)
        self.committed = True

    def rollback(self):
        self.pending_adds.clear()
        self.pending_deletes.clear()
