from datetime import date, datetime

from logic_looper.adapters.clock import FixedClock, SystemClock


def test_system_clock():
    clock = SystemClock()
    now = clock.now()
    assert isinstance(now, datetime)
    # Sanity check: is it close to real now?
    diff = abs((datetime.now() - now).total_seconds())
    assert diff < 1.0
    assert isinstance(clock.today(), date)
    assert abs(clock.now_ms() - int(clock.now_utc().timestamp() * 1000)) < 1000


def test_fixed_clock_advance():
    clock = FixedClock(datetime(2024, 12, 31, 23, 59, 30))
    start = clock.now_ms()
    clock.advance(45)
    assert clock.now_ms() - start == 45_000
    assert clock.today() == date(2025, 1, 1)
