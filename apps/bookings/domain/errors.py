"""
Admission errors

Outcomes of the booking checker that are not a success. They are returned
as values; the API layer decides how each kind is rendered.
"""

from dataclasses import dataclass
from enum import Enum

from shared.domain.value_objects import TimeRange


class AdmissionErrorKind(Enum):
    NOT_FOUND = 'not_found'
    SELF_BOOKING_FORBIDDEN = 'self_booking_forbidden'
    CONFLICT = 'conflict'
    INVALID_INTERVAL = 'invalid_interval'
    FORBIDDEN = 'forbidden'
    TOO_LATE_TO_CANCEL = 'too_late_to_cancel'
    STORE_FAILURE = 'store_failure'


@dataclass(frozen=True)
class AdmissionError:
    kind: AdmissionErrorKind
    detail: str
    conflict: TimeRange | None = None

    @classmethod
    def not_found(cls, what: str) -> 'AdmissionError':
        return cls(AdmissionErrorKind.NOT_FOUND, f"{what} not found")

    @classmethod
    def self_booking(cls) -> 'AdmissionError':
        return cls(AdmissionErrorKind.SELF_BOOKING_FORBIDDEN, "You cannot book your own product")

    @classmethod
    def conflict_with(cls, period: TimeRange) -> 'AdmissionError':
        return cls(
            AdmissionErrorKind.CONFLICT,
            "Product is already booked for the selected time period",
            conflict=period,
        )

    @classmethod
    def invalid_interval(cls, detail: str) -> 'AdmissionError':
        return cls(AdmissionErrorKind.INVALID_INTERVAL, detail)

    @classmethod
    def forbidden(cls) -> 'AdmissionError':
        return cls(AdmissionErrorKind.FORBIDDEN, "You can only delete your own bookings")

    @classmethod
    def too_late_to_cancel(cls) -> 'AdmissionError':
        return cls(
            AdmissionErrorKind.TOO_LATE_TO_CANCEL,
            "Cannot delete a booking that has already started or is in the past",
        )

    @classmethod
    def store_failure(cls) -> 'AdmissionError':
        return cls(AdmissionErrorKind.STORE_FAILURE, "Internal server error")

    def to_dict(self) -> dict:
        data = {'detail': self.detail, 'code': self.kind.value}
        if self.conflict is not None:
            data['conflict'] = self.conflict.to_dict()
        return data
