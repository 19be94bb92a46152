"""Line capability interface and its backends."""

from gpio_conformance.capability.base import LineCapability
from gpio_conformance.capability.simulated import SimulatedGpio
from gpio_conformance.capability.sysfs import SysfsGpio
from gpio_conformance.exceptions import ConfigurationError


def make_capability(backend: str, **options) -> LineCapability:
    """Build the capability backend named on the command line."""
    if backend == "sysfs":
        return SysfsGpio(**options)
    if backend == "sim":
        return SimulatedGpio(**options)
    raise ConfigurationError(f"Unknown capability backend: {backend!r}")


__all__ = ["LineCapability", "SimulatedGpio", "SysfsGpio", "make_capability"]
