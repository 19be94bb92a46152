"""Conformance test driver for GPIO controllers behind a line-control transport."""

__version__ = "0.1.0"

# Core components
from gpio_conformance.context import (
    AddressingMode,
    ExecutionContext,
    resolve_lines,
)
from gpio_conformance.capability import LineCapability, SimulatedGpio, SysfsGpio
from gpio_conformance.scenarios.base import (
    Attribute,
    Operation,
    Scenario,
    ScenarioResult,
    Step,
    StepResult,
    StepStatus,
)
from gpio_conformance.scenarios.registry import SCENARIOS
from gpio_conformance.scenarios.verify import Verdict, verify
from gpio_conformance.runner.execute import dispatch, run_case, run_scenario

__all__ = [
    # Version
    "__version__",
    # Context and addressing
    "AddressingMode",
    "ExecutionContext",
    "resolve_lines",
    # Capability
    "LineCapability",
    "SimulatedGpio",
    "SysfsGpio",
    # Scenarios
    "Attribute",
    "Operation",
    "Scenario",
    "ScenarioResult",
    "Step",
    "StepResult",
    "StepStatus",
    "SCENARIOS",
    "Verdict",
    "verify",
    # Execution
    "dispatch",
    "run_case",
    "run_scenario",
]
