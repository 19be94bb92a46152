"""Base types for scenarios: Step, Scenario, StepResult and ScenarioResult."""

from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from gpio_conformance.context import AddressingMode


class Operation(Enum):
    """Kinds of capability invocation a step can make."""

    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    GET = "get"
    SET = "set"
    COUNT = "count"


class Attribute(Enum):
    """Line attributes readable and writable through the capability."""

    DIRECTION = "direction"
    VALUE = "value"
    EDGE = "edge"


class StepStatus(Enum):
    """Outcome of a step: PASS or the kind of failure."""

    PASS = "PASS"
    CAPABILITY_ERROR = "CAPABILITY_ERROR"
    MISMATCH = "MISMATCH"
    INVALID_ADDRESSING = "INVALID_ADDRESSING"
    UNKNOWN_CASE = "UNKNOWN_CASE"


@dataclass(frozen=True)
class Step:
    op: Operation
    attribute: Optional[Attribute] = None
    value: Optional[str] = None
    expect: Optional[str] = None
    repeat: int = 1

    def describe(self) -> str:
        if self.op is Operation.SET:
            text = f"set {self.attribute.value} {self.value}"
        elif self.op is Operation.GET:
            text = f"get {self.attribute.value}"
            if self.expect is not None:
                text += f" == {self.expect}"
        elif self.op is Operation.COUNT:
            text = "get line count"
        else:
            text = self.op.value
        if self.repeat > 1:
            text += f" x{self.repeat}"
        return text


def activate() -> Step:
    return Step(Operation.ACTIVATE)


def deactivate() -> Step:
    return Step(Operation.DEACTIVATE)


def write(attribute: Attribute, token: str, repeat: int = 1) -> Step:
    return Step(Operation.SET, attribute, value=token, repeat=repeat)


def read(attribute: Attribute, expect: Optional[str] = None, repeat: int = 1) -> Step:
    return Step(Operation.GET, attribute, expect=expect, repeat=repeat)


def line_count() -> Step:
    return Step(Operation.COUNT)


SINGLE_ONLY = frozenset({AddressingMode.SINGLE})
SINGLE_OR_MULTIPLE = frozenset({AddressingMode.SINGLE, AddressingMode.MULTIPLE})
ANY_MODE = frozenset(AddressingMode)


@dataclass(frozen=True)
class Scenario:
    """One numbered test case: an ordered step list plus its recovery steps."""

    case_id: int
    name: str
    steps: Tuple[Step, ...]
    recovery: Tuple[Step, ...] = (deactivate(),)
    modes: FrozenSet[AddressingMode] = SINGLE_OR_MULTIPLE
    description: str = ""

    def supports(self, mode: Optional[AddressingMode]) -> bool:
        return mode in self.modes

    @property
    def verifications(self) -> int:
        return sum(1 for s in self.steps if s.op is Operation.GET and s.expect is not None)


@dataclass
class StepResult:
    step: str
    status: StepStatus
    line: Optional[int] = None
    observed: Optional[str] = None
    expected: Optional[str] = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status is StepStatus.PASS

    def to_dict(self):
        d = asdict(self)
        d["status"] = self.status.value
        return d


@dataclass
class ScenarioResult:
    case_id: int
    scenario: str
    status: StepStatus
    message: str = ""
    observed: Optional[str] = None
    expected: Optional[str] = None
    lines: Tuple[int, ...] = ()
    steps: List[StepResult] = field(default_factory=list)
    recovery: List[StepResult] = field(default_factory=list)
    execution_time: Optional[float] = None
    executed_at: Optional[str] = None  # ISO timestamp when the case ran

    @property
    def success(self) -> bool:
        return self.status is StepStatus.PASS

    def to_dict(self):
        d = asdict(self)
        # Enum -> string for JSON
        d["status"] = self.status.value
        d["success"] = self.success
        d["lines"] = list(self.lines)
        d["steps"] = [s.to_dict() for s in self.steps]
        d["recovery"] = [s.to_dict() for s in self.recovery]
        return d
