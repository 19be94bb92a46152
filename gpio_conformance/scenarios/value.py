"""Line value get/set cases."""

from gpio_conformance.scenarios.base import (
    SINGLE_ONLY,
    Attribute,
    Scenario,
    activate,
    read,
    write,
)
from gpio_conformance.scenarios.registry import register


def _set_value_case(case_id: int, name: str, level: str, description: str) -> Scenario:
    return Scenario(
        case_id=case_id,
        name=name,
        steps=(
            activate(),
            write(Attribute.DIRECTION, "out"),
            write(Attribute.VALUE, level),
            read(Attribute.DIRECTION, expect="out"),
            read(Attribute.VALUE, expect=level),
        ),
        modes=SINGLE_ONLY,
        description=description,
    )


register(
    Scenario(
        case_id=279,
        name="get value",
        steps=(
            activate(),
            write(Attribute.DIRECTION, "in"),
            read(Attribute.VALUE),
        ),
        description="Get response carries the current line value",
    ),
    _set_value_case(281, "set value high", "1", "A line can be set HIGH"),
    _set_value_case(282, "set value low", "0", "A line can be set LOW"),
)
