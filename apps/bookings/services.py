"""Wiring of booking use cases to their Django collaborators."""

from __future__ import annotations

from shared.application.clock import SystemClock

from .application.admission import BookingAdmissionChecker
from .repositories import BookingUnitOfWork


def build_admission_checker() -> BookingAdmissionChecker:
    return BookingAdmissionChecker(uow_factory=BookingUnitOfWork, clock=SystemClock())
