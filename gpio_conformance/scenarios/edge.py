"""IRQ edge type cases: single settings and transitions between edge types."""

from typing import Tuple

from gpio_conformance.scenarios.base import (
    SINGLE_ONLY,
    Attribute,
    Scenario,
    Step,
    activate,
    read,
    write,
)
from gpio_conformance.scenarios.registry import register

EDGE = Attribute.EDGE

# Edges are configured on a line driven high
_PREPARE: Tuple[Step, ...] = (
    activate(),
    write(Attribute.DIRECTION, "out"),
    write(Attribute.VALUE, "1"),
)


def _edge_case(case_id: int, edge: str) -> Scenario:
    return Scenario(
        case_id=case_id,
        name=f"set edge {edge}",
        steps=_PREPARE + (write(EDGE, edge), read(EDGE, expect=edge)),
        modes=SINGLE_ONLY,
        description=f"IRQ type can be set to {edge} edge",
    )


def _transition_case(case_id: int, first: str, second: str) -> Scenario:
    return Scenario(
        case_id=case_id,
        name=f"edge {first} to {second}",
        steps=_PREPARE
        + (
            write(EDGE, first),
            read(EDGE, expect=first),
            write(EDGE, second),
            read(EDGE, expect=second),
        ),
        modes=SINGLE_ONLY,
        description=f"IRQ type can be changed from {first} to {second}",
    )


register(
    _edge_case(286, "rising"),
    _edge_case(287, "falling"),
    _edge_case(288, "both"),
    _transition_case(411, "falling", "rising"),
    _transition_case(412, "rising", "falling"),
    _transition_case(413, "rising", "both"),
    _transition_case(416, "none", "both"),
    _transition_case(417, "both", "none"),
)
