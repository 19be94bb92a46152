"""Scenario registration and lookup."""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from gpio_conformance.exceptions import ScenarioRegistrationError, UnknownCaseError
from .base import Scenario

# Internal registry: case_id -> scenario
_REGISTRY: Dict[int, Scenario] = {}

SCENARIOS: Mapping[int, Scenario] = MappingProxyType(_REGISTRY)
"""Read-only view of every registered scenario, keyed by case id."""


def register(*scenarios: Scenario) -> None:
    """Register scenario definitions; duplicate case ids are rejected."""
    for scenario in scenarios:
        if scenario.case_id in _REGISTRY:
            raise ScenarioRegistrationError(
                f"Case {scenario.case_id} already registered as "
                f"'{_REGISTRY[scenario.case_id].name}'"
            )
        if not scenario.steps:
            raise ScenarioRegistrationError(f"Case {scenario.case_id} has no steps")
        _REGISTRY[scenario.case_id] = scenario


def scenario_for(case_id: int) -> Scenario:
    """Get the scenario registered for a case id."""
    try:
        return _REGISTRY[case_id]
    except KeyError:
        raise UnknownCaseError(case_id) from None


def list_registered() -> List[Dict[str, Any]]:
    """List all registered scenarios, ordered by case id."""
    result: List[Dict[str, Any]] = []

    for case_id in sorted(_REGISTRY):
        scenario = _REGISTRY[case_id]
        result.append(
            {
                "case_id": case_id,
                "name": scenario.name,
                "modes": "".join(
                    m.value for m in sorted(scenario.modes, key=lambda m: "sma".index(m.value))
                ),
                "steps": len(scenario.steps),
                "verifications": scenario.verifications,
                "description": scenario.description,
            }
        )

    return result
