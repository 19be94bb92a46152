"""Direction request cases, including input/output transitions."""

from gpio_conformance.config import REPEAT_COUNT
from gpio_conformance.scenarios.base import (
    ANY_MODE,
    SINGLE_ONLY,
    Attribute,
    Scenario,
    activate,
    deactivate,
    read,
    write,
)
from gpio_conformance.scenarios.registry import register

DIRECTION = Attribute.DIRECTION
VALUE = Attribute.VALUE

register(
    Scenario(
        case_id=270,
        name="multiple direction",
        steps=(activate(), read(DIRECTION)),
        description="Multiple direction requests execute successfully",
    ),
    Scenario(
        case_id=271,
        name="repeated direction",
        steps=(activate(), read(DIRECTION, repeat=REPEAT_COUNT)),
        modes=SINGLE_ONLY,
        description="Repeated direction requests for one line raise no error",
    ),
    Scenario(
        case_id=272,
        name="all direction",
        steps=(activate(), read(DIRECTION)),
        modes=ANY_MODE,
        description="Direction requests can be issued for every line of the controller",
    ),
    Scenario(
        case_id=273,
        name="multiple input",
        steps=(activate(), write(DIRECTION, "in"), read(DIRECTION, expect="in")),
        description="Multiple direction input requests execute successfully",
    ),
    Scenario(
        case_id=274,
        name="repeated input",
        steps=(
            activate(),
            write(DIRECTION, "in", repeat=REPEAT_COUNT),
            read(DIRECTION, expect="in"),
        ),
        modes=SINGLE_ONLY,
        description="Repeated direction input requests for one line raise no error",
    ),
    Scenario(
        case_id=276,
        name="multiple output",
        steps=(activate(), write(DIRECTION, "out"), read(DIRECTION, expect="out")),
        description="Multiple direction output requests execute successfully",
    ),
    Scenario(
        case_id=277,
        name="repeated output",
        steps=(
            activate(),
            write(DIRECTION, "out", repeat=REPEAT_COUNT),
            read(DIRECTION, expect="out"),
        ),
        modes=SINGLE_ONLY,
        description="Repeated direction output requests for one line raise no error",
    ),
    Scenario(
        case_id=409,
        name="input to output",
        steps=(
            activate(),
            write(DIRECTION, "in"),
            read(VALUE),
            deactivate(),
            activate(),
            write(DIRECTION, "out"),
            write(VALUE, "1"),
            read(VALUE, expect="1"),
        ),
        modes=SINGLE_ONLY,
        description="A line configured as input can be reconfigured as output",
    ),
    Scenario(
        case_id=410,
        name="output to input",
        steps=(
            activate(),
            write(DIRECTION, "out"),
            write(VALUE, "1"),
            deactivate(),
            activate(),
            write(DIRECTION, "in"),
            read(VALUE),
        ),
        modes=SINGLE_ONLY,
        description="A line configured as output can be reconfigured as input",
    ),
)
