import pytest


class FakeClock:
    """Epoch-millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, minutes: int = 0, seconds: int = 0) -> None:
        self.now += (minutes * 60 + seconds) * 1000


@pytest.fixture
def clock():
    return FakeClock()
