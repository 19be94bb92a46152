"""Line capability interface consumed by the scenario sequencer."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Tuple

from gpio_conformance.exceptions import CapabilityError


class LineCapability(ABC):
    """Activate/deactivate lines and read or write their attributes.

    Every method raises ``CapabilityError`` when the controller rejects or
    cannot complete the request. Attribute tokens are plain strings in the
    representation the controller uses (``"in"``, ``"out"``, ``"0"``, ``"1"``,
    ``"none"``, ``"rising"``, ``"falling"``, ``"both"``).
    """

    @abstractmethod
    def discover(self) -> Tuple[int, int]:
        """Return ``(base_pin, line_count)`` of the controller under test."""

    @abstractmethod
    def get_line_count(self, base_pin: int) -> int:
        ...

    @abstractmethod
    def activate(self, line_ids: Iterable[int]) -> None:
        ...

    @abstractmethod
    def deactivate(self, line_ids: Iterable[int]) -> None:
        """Release every line, attempting all of them even after a failure."""

    @abstractmethod
    def get_direction(self, line_id: int) -> str:
        ...

    @abstractmethod
    def set_direction(self, line_id: int, token: str) -> None:
        ...

    @abstractmethod
    def get_value(self, line_id: int) -> str:
        ...

    @abstractmethod
    def set_value(self, line_id: int, token: str) -> None:
        ...

    @abstractmethod
    def get_edge(self, line_id: int) -> str:
        ...

    @abstractmethod
    def set_edge(self, line_id: int, token: str) -> None:
        ...


def combine_failures(action: str, errors: List[CapabilityError]) -> CapabilityError:
    """Fold the per-line failures of a multi-line call into one error."""
    if len(errors) == 1:
        return errors[0]
    lines = [e.line for e in errors]
    return CapabilityError(
        f"{action} failed for lines {lines}: " + "; ".join(str(e) for e in errors),
        errno=errors[0].errno,
    )
