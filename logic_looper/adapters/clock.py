from datetime import UTC, date, datetime


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()

    def now_utc(self) -> datetime:
        return datetime.now(UTC)

    def today(self) -> date:
        return self.now().date()

    def now_ms(self) -> int:
        return int(self.now_utc().timestamp() * 1000)


class FixedClock:
    """Clock pinned to a given instant. Used by tests and replays."""

    def __init__(self, at: datetime) -> None:
        self._at = at

    def set(self, at: datetime) -> None:
        self._at = at

    def advance(self, seconds: float) -> None:
        from datetime import timedelta

        self._at = self._at + timedelta(seconds=seconds)

    def now(self) -> datetime:
        return self._at

    def today(self) -> date:
        return self._at.date()

    def now_ms(self) -> int:
        return int(self._at.timestamp() * 1000)
