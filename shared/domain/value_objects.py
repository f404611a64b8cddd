"""
Common Value Objects

- TimeRange: a reserved span of time (from -> to) on a timeline
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    TimeRange value object

    Both bounds are part of the range, so two ranges sharing a single
    instant overlap.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(
                f"Range start ({self.start.isoformat()}) must be before "
                f"end ({self.end.isoformat()})"
            )

    def overlaps_with(self, other: 'TimeRange') -> bool:
        """
        Inclusive intersection test

        existing.start <= new.end AND existing.end >= new.start
        """
        return self.start <= other.end and self.end >= other.start

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
        }

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"
