"""Admission checker tests against in-memory collaborators."""

import threading
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from apps.bookings.application.admission import (
    AdmitBookingCommand,
    BookingAdmissionChecker,
    CancelBookingCommand,
    CancelledBooking,
)
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.errors import AdmissionError, AdmissionErrorKind
from apps.bookings.domain.schedule import ProductSchedule
from shared.domain.value_objects import TimeRange

from .fakes import FixedClock, InMemoryStore

OWNER = 1
BORROWER = 2
OTHER_BORROWER = 3


def at(day: int, hour: int = 0, second: int = 0) -> datetime:
    return datetime(2025, 6, day, hour, 0, second, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def product(store):
    return store.add_product(uuid4(), owner_id=OWNER)


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 5, 1, tzinfo=timezone.utc))


@pytest.fixture
def checker(store, clock):
    return BookingAdmissionChecker(uow_factory=store.unit_of_work, clock=clock)


def admit(checker, product, start, end, requester=BORROWER):
    return checker.try_admit_booking(AdmitBookingCommand(
        product_id=product.id,
        requester_id=requester,
        starts_at=start,
        ends_at=end,
        contact_number="5550001111",
        address="1 Main St",
    ))


def test_admits_booking_on_free_product(checker, store, product, clock):
    result = admit(checker, product, at(1), at(5))

    assert isinstance(result, Booking)
    assert result.period == TimeRange(at(1), at(5))
    assert result.created_at == clock.now()
    assert list(store.bookings) == [result.id]


def test_touching_interval_is_a_conflict(checker, store, product):
    admit(checker, product, at(1), at(5))

    result = admit(checker, product, at(5), at(10), requester=OTHER_BORROWER)

    assert isinstance(result, AdmissionError)
    assert result.kind is AdmissionErrorKind.CONFLICT
    assert result.conflict == TimeRange(at(1), at(5))
    assert len(store.bookings) == 1


def test_interval_starting_after_existing_end_is_admitted(checker, store, product):
    admit(checker, product, at(1), at(5))

    result = admit(checker, product, at(5, second=1), at(10), requester=OTHER_BORROWER)

    assert isinstance(result, Booking)
    assert len(store.bookings) == 2


def test_repeated_request_is_rejected_the_second_time(checker, store, product):
    first = admit(checker, product, at(1), at(5))
    second = admit(checker, product, at(1), at(5))

    assert isinstance(first, Booking)
    assert second.kind is AdmissionErrorKind.CONFLICT
    assert len(store.bookings) == 1


def test_conflicting_request_is_rejected_every_time(checker, store, product):
    admit(checker, product, at(1), at(5))

    first = admit(checker, product, at(3), at(8), requester=OTHER_BORROWER)
    second = admit(checker, product, at(3), at(8), requester=OTHER_BORROWER)

    assert first == second
    assert first.kind is AdmissionErrorKind.CONFLICT
    assert len(store.bookings) == 1


def test_owner_cannot_book_own_product(checker, store, product):
    result = admit(checker, product, at(1), at(5), requester=OWNER)

    assert result.kind is AdmissionErrorKind.SELF_BOOKING_FORBIDDEN
    assert not store.bookings


def test_unknown_product(checker, store):
    missing = store.add_product(uuid4(), owner_id=OWNER)
    del store.products[missing.id]

    result = admit(checker, missing, at(1), at(5))

    assert result.kind is AdmissionErrorKind.NOT_FOUND
    assert result.detail == "Product not found"


@pytest.mark.parametrize(
    "start,end",
    [
        (at(5), at(5)),
        (at(5), at(1)),
        (datetime(2025, 4, 1, tzinfo=timezone.utc), at(1)),
        (datetime(2025, 5, 1, tzinfo=timezone.utc), at(1)),
    ],
)
def test_invalid_interval(checker, store, product, start, end):
    result = admit(checker, product, start, end)

    assert result.kind is AdmissionErrorKind.INVALID_INTERVAL
    assert not store.bookings


def test_interval_is_checked_before_product_lookup(checker, store):
    missing = store.add_product(uuid4(), owner_id=OWNER)
    del store.products[missing.id]

    result = admit(checker, missing, at(5), at(1))

    assert result.kind is AdmissionErrorKind.INVALID_INTERVAL


def test_store_failure_on_insert(checker, store, product):
    store.fail_on = "bookings.add"

    result = admit(checker, product, at(1), at(5))

    assert result.kind is AdmissionErrorKind.STORE_FAILURE
    assert not store.bookings


def test_store_failure_releases_product_lock(checker, store, product):
    store.fail_on = "bookings.add"
    admit(checker, product, at(1), at(5))
    store.fail_on = None

    assert isinstance(admit(checker, product, at(1), at(5)), Booking)


def test_cancel_upcoming_booking(checker, store, product):
    booking = admit(checker, product, at(1), at(5))

    result = checker.try_cancel_booking(CancelBookingCommand(booking.id, BORROWER))

    assert result == CancelledBooking(booking.id, product.id, TimeRange(at(1), at(5)))
    assert not store.bookings
    # the released period can be booked again
    assert isinstance(admit(checker, product, at(1), at(5), requester=OTHER_BORROWER), Booking)


def test_cancel_someone_elses_booking(checker, store, product):
    booking = admit(checker, product, at(1), at(5))

    result = checker.try_cancel_booking(CancelBookingCommand(booking.id, OTHER_BORROWER))

    assert result.kind is AdmissionErrorKind.FORBIDDEN
    assert booking.id in store.bookings


def test_cancel_started_booking_is_too_late(checker, store, product, clock):
    booking = admit(checker, product, at(1), at(5))
    clock.current = at(2)

    result = checker.try_cancel_booking(CancelBookingCommand(booking.id, BORROWER))

    assert result.kind is AdmissionErrorKind.TOO_LATE_TO_CANCEL
    assert booking.id in store.bookings


def test_cancel_unknown_booking(checker):
    result = checker.try_cancel_booking(CancelBookingCommand(uuid4(), BORROWER))

    assert result.kind is AdmissionErrorKind.NOT_FOUND
    assert result.detail == "Booking not found"


def test_cancel_store_failure(checker, store, product):
    booking = admit(checker, product, at(1), at(5))
    store.fail_on = "bookings.delete"

    result = checker.try_cancel_booking(CancelBookingCommand(booking.id, BORROWER))

    assert result.kind is AdmissionErrorKind.STORE_FAILURE
    assert booking.id in store.bookings


def test_concurrent_overlapping_requests_admit_exactly_one(checker, store, product):
    workers = 8
    barrier = threading.Barrier(workers)
    results = []
    results_lock = threading.Lock()

    def request(day):
        barrier.wait()
        result = admit(checker, product, at(day), at(day + 4), requester=100 + day)
        with results_lock:
            results.append(result)

    threads = [threading.Thread(target=request, args=(day,)) for day in range(1, workers + 1)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    admitted = [r for r in results if isinstance(r, Booking)]
    refused = [r for r in results if isinstance(r, AdmissionError)]
    assert len(results) == workers
    assert admitted
    assert all(r.kind is AdmissionErrorKind.CONFLICT for r in refused)
    assert ProductSchedule(product.id, store.bookings_for(product.id)).is_free_of_overlaps()


def test_concurrent_identical_requests_leave_one_row(checker, store, product):
    workers = 6
    barrier = threading.Barrier(workers)
    results = []

    def request(requester):
        barrier.wait()
        results.append(admit(checker, product, at(1), at(5), requester=requester))

    threads = [threading.Thread(target=request, args=(10 + i,)) for i in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(isinstance(r, Booking) for r in results) == 1
    assert len(store.bookings) == 1


def test_products_do_not_share_locks(checker, store, product):
    other = store.add_product(uuid4(), owner_id=OWNER)
    lock = store.lock_for(product.id)
    lock.acquire()
    try:
        # a held lock on one product does not block admissions for another
        result = admit(checker, other, at(1), at(5))
    finally:
        lock.release()

    assert isinstance(result, Booking)
