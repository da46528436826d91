"""
Relay output lines and the driver that sets them.

The board is active-low: a line at 0 closes the relay contact, a line at 1
opens it. Every line starts at 1 (open).

Keep this module free of top-level Raspberry Pi specific imports (gpiozero)
so it can be safely imported on non-RPi machines.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional

from gofire.config import GPIO_PINS, GpioPins

logger = logging.getLogger(__name__)

CLOSED = 0
OPEN = 1


class Line(str, Enum):
    CH1 = "CH1"
    CH2 = "CH2"
    CH3 = "CH3"


def pin_for(line: Line, pins: GpioPins = GPIO_PINS) -> int:
    return {Line.CH1: pins.ch1, Line.CH2: pins.ch2, Line.CH3: pins.ch3}[line]


class HardwareFault(Exception):
    """Raised when a relay line cannot be requested or set."""

    def __init__(self, message: str, line: Optional[Line] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.line = line
        self.cause = cause


def _check_value(value: int) -> None:
    if value not in (CLOSED, OPEN):
        raise ValueError(f"Line value must be 0 or 1, got {value!r}")


class OutputDriver:
    """
    Sets the three relay lines. Subclasses implement ``_write``.
    """

    def set_line(self, line: Line, value: int) -> None:
        _check_value(value)
        self._write(Line(line), value)

    def _write(self, line: Line, value: int) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class GpioOutputDriver(OutputDriver):
    """
    gpiozero-backed driver, one OutputDevice per line.

    Lines are requested as outputs at construction, already at 1 (open).
    """

    def __init__(self, pins: GpioPins = GPIO_PINS, pin_factory=None):
        try:
            import gpiozero  # type: ignore
        except ImportError as e:
            raise HardwareFault(
                "gpiozero is not available on this machine. "
                "The server must run on the Raspberry Pi with '--extra rpi' deps installed.",
                cause=e,
            ) from e

        self._errors = (gpiozero.GPIOZeroError, OSError)
        self._devices: Dict[Line, "gpiozero.OutputDevice"] = {}
        for line in Line:
            pin = pin_for(line, pins)
            try:
                self._devices[line] = gpiozero.OutputDevice(
                    pin, active_high=True, initial_value=True, pin_factory=pin_factory
                )
            except self._errors as e:
                self.close()
                raise HardwareFault(f"Failed to request {line.value} on GPIO{pin}: {e}", line=line, cause=e) from e
            logger.debug("Requested %s on GPIO%d as output (open)", line.value, pin)

    def _write(self, line: Line, value: int) -> None:
        dev = self._devices.get(line)
        if dev is None:
            raise HardwareFault(f"{line.value} is not requested (driver closed?)", line=line)
        try:
            if value:
                dev.on()
            else:
                dev.off()
        except self._errors as e:
            raise HardwareFault(f"Failed to set {line.value} to {value}: {e}", line=line, cause=e) from e

    def close(self) -> None:
        while self._devices:
            line, dev = self._devices.popitem()
            try:
                dev.close()
            except self._errors as e:
                logger.warning("Failed to release %s: %s", line.value, e)
