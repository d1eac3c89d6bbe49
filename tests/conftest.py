import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)


class FakeClock:
    """millisecond clock for IdGenerator, moves forward by `step` every `hold` reads"""

    def __init__(self, now: int, *, hold: int = 0, step: int = 1):
        self.now = now
        self.hold = hold
        self.step = step
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        if self.hold and self.reads % self.hold == 0:
            self.now += self.step
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock
