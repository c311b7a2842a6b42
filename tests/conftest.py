import pytest


class FakeTimer:
    """Deterministic clock plus a multiplier that advances it by ``scale * n**3`` seconds."""

    def __init__(self, seconds_per_n3=1e-9, offset_seconds=0.0):
        self.now = 0.0
        self.seconds_per_n3 = seconds_per_n3
        self.offset_seconds = offset_seconds
        self.calls = []

    def clock(self):
        return self.now

    def multiply(self, a, b, n):
        self.calls.append(n)
        self.now += self.seconds_per_n3 * n ** 3 + self.offset_seconds
        return [], 2 * n ** 3


@pytest.fixture
def fake_timer():
    return FakeTimer()
