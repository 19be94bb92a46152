import pytest
from unittest.mock import Mock
from gpio_conformance.capability.simulated import SimulatedGpio
from gpio_conformance.context import ExecutionContext

BASE_PIN = 32
LINE_COUNT = 8


@pytest.fixture
def sim():
    """Simulated controller with 8 lines starting at 32."""
    return SimulatedGpio(base_pin=BASE_PIN, line_count=LINE_COUNT)


@pytest.fixture
def capability(sim):
    """Call-recording capability that forwards to the simulated controller."""
    return Mock(wraps=sim)


@pytest.fixture
def make_context():
    """Factory for execution contexts against the simulated controller."""

    def _make(case_id, mode="s", offsets=(1, None, None), base_pin=BASE_PIN, line_count=LINE_COUNT):
        return ExecutionContext.from_args(
            case_id=case_id,
            mode_tag=mode,
            base_pin=base_pin,
            line_count=line_count,
            pin_offsets=offsets,
        )

    return _make
