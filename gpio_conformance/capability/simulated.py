"""In-memory GPIO controller used for dry runs and the test suite."""

from dataclasses import dataclass
from typing import Dict, Iterable, Set, Tuple

from gpio_conformance.capability.base import LineCapability, combine_failures
from gpio_conformance.config import SIM_DEFAULT_BASE, SIM_DEFAULT_LINES
from gpio_conformance.exceptions import CapabilityError
from gpio_conformance.logging_config import get_logger

logger = get_logger("capability")

DIRECTIONS = {"in", "out", "high", "low"}
VALUES = {"0", "1"}
EDGES = {"none", "rising", "falling", "both"}


@dataclass
class SimulatedLine:
    direction: str = "in"
    value: str = "0"
    edge: str = "none"


class SimulatedGpio(LineCapability):
    """A controller that honors writes, with sysfs-like rejection rules.

    - attributes of inactive lines cannot be read or written
    - activating an active line fails (busy)
    - values can only be written to output lines
    Line state survives deactivation, as it does on real hardware.
    """

    def __init__(self, base_pin: int = SIM_DEFAULT_BASE, line_count: int = SIM_DEFAULT_LINES):
        self.base_pin = base_pin
        self.line_count = line_count
        self.lines: Dict[int, SimulatedLine] = {
            base_pin + i: SimulatedLine() for i in range(line_count)
        }
        self.active: Set[int] = set()

    def _line(self, line_id: int) -> SimulatedLine:
        if line_id not in self.lines:
            raise CapabilityError(f"Line {line_id} does not exist", line=line_id)
        return self.lines[line_id]

    def _active_line(self, line_id: int) -> SimulatedLine:
        line = self._line(line_id)
        if line_id not in self.active:
            raise CapabilityError(f"Line {line_id} is not active", line=line_id)
        return line

    def discover(self) -> Tuple[int, int]:
        return self.base_pin, self.line_count

    def get_line_count(self, base_pin: int) -> int:
        if base_pin != self.base_pin:
            raise CapabilityError(f"No controller at base {base_pin}")
        return self.line_count

    def activate(self, line_ids: Iterable[int]) -> None:
        for line_id in line_ids:
            self._line(line_id)
            if line_id in self.active:
                raise CapabilityError(f"Line {line_id} is busy", line=line_id)
            self.active.add(line_id)
            logger.debug(f"Activated line {line_id}", extra={"line_id": line_id})

    def deactivate(self, line_ids: Iterable[int]) -> None:
        failures = []
        for line_id in line_ids:
            try:
                self._active_line(line_id)
            except CapabilityError as e:
                failures.append(e)
                continue
            self.active.discard(line_id)
            logger.debug(f"Deactivated line {line_id}", extra={"line_id": line_id})
        if failures:
            raise combine_failures("Deactivate", failures)

    def get_direction(self, line_id: int) -> str:
        return self._active_line(line_id).direction

    def set_direction(self, line_id: int, token: str) -> None:
        line = self._active_line(line_id)
        if token not in DIRECTIONS:
            raise CapabilityError(f"Invalid direction {token!r}", line=line_id)
        # "high"/"low" configure an output with an initial level
        if token == "high":
            line.direction, line.value = "out", "1"
        elif token == "low":
            line.direction, line.value = "out", "0"
        else:
            line.direction = token

    def get_value(self, line_id: int) -> str:
        return self._active_line(line_id).value

    def set_value(self, line_id: int, token: str) -> None:
        line = self._active_line(line_id)
        if line.direction != "out":
            raise CapabilityError(f"Line {line_id} is not an output", line=line_id)
        if token not in VALUES:
            raise CapabilityError(f"Invalid value {token!r}", line=line_id)
        line.value = token

    def get_edge(self, line_id: int) -> str:
        return self._active_line(line_id).edge

    def set_edge(self, line_id: int, token: str) -> None:
        line = self._active_line(line_id)
        if token not in EDGES:
            raise CapabilityError(f"Invalid edge {token!r}", line=line_id)
        line.edge = token
