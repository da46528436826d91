from __future__ import annotations

import threading

import pytest

from gofire.control.sequencer import Sequencer
from gofire.hardware.outputs import HardwareFault, Line, OutputDriver


class RecordingDriver(OutputDriver):
    """Keeps line values in memory and logs every write into a shared event list."""

    def __init__(self, events=None, fail_on=()):
        self.events = events if events is not None else []
        self.values = {line: 1 for line in Line}
        self.fail_on = set(fail_on)
        self.closed = False
        self._lock = threading.Lock()

    def _write(self, line, value):
        with self._lock:
            if (line, value) in self.fail_on:
                raise HardwareFault(f"injected failure on {line.value}", line=line)
            self.values[line] = value
            self.events.append(("set", line, value))

    def close(self):
        self.closed = True


@pytest.fixture
def events():
    return []


@pytest.fixture
def driver(events):
    return RecordingDriver(events)


@pytest.fixture
def sequencer(driver, events):
    return Sequencer(driver, sleep=lambda s: events.append(("hold", s)))


@pytest.fixture
def blocked_sequencer(driver):
    """
    Sequencer whose holds block until ``release`` is set.
    ``entered`` is set as soon as a recipe reaches its first hold.
    """
    entered = threading.Event()
    release = threading.Event()

    def sleep(_seconds):
        entered.set()
        assert release.wait(5), "test never released the hold"

    seq = Sequencer(driver, sleep=sleep)
    seq.entered = entered
    seq.release = release
    yield seq
    release.set()


@pytest.fixture
def mock_factory():
    from gpiozero.pins.mock import MockFactory

    factory = MockFactory()
    yield factory
    factory.close()
