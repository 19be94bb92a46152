"""Line count and activation cases."""

from gpio_conformance.scenarios.base import (
    ANY_MODE,
    Scenario,
    activate,
    deactivate,
    line_count,
)
from gpio_conformance.scenarios.registry import register

register(
    Scenario(
        case_id=263,
        name="line count",
        steps=(line_count(),),
        recovery=(),
        modes=ANY_MODE,
        description="Line count response reports the number of lines managed by the controller",
    ),
    Scenario(
        case_id=264,
        name="multiple activate",
        steps=(activate(),),
        description="Multiple activate requests execute successfully",
    ),
    Scenario(
        case_id=267,
        name="multiple deactivate",
        steps=(activate(), deactivate()),
        # The case itself releases the lines
        recovery=(),
        description="Multiple deactivate requests execute successfully",
    ),
)
