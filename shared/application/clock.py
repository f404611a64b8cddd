"""
Clock

Time source injected into application services so that "now" can be
pinned in tests.
"""

from datetime import datetime
from typing import Protocol

from django.utils import timezone


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock, timezone aware (UTC when USE_TZ is enabled)."""

    def now(self) -> datetime:
        return timezone.now()
