"""Clock adapters."""

from datetime import date, timedelta

from lexis.domain.review.ports import Clock


class SystemClock(Clock):
    """Reads the local calendar date."""

    def today(self) -> date:
        return date.today()


class FixedClock(Clock):
    """Always reports the same day. Use advance() to move it forward."""

    def __init__(self, day: date):
        self._day = day

    def today(self) -> date:
        return self._day

    def advance(self, days: int) -> None:
        self._day = self._day + timedelta(days=days)
