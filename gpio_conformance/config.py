"""Configuration management with environment variable and .env file loading."""

import os
from typing import Optional
from pathlib import Path

from gpio_conformance.exceptions import ConfigurationError


def load_env_file():
    """Load environment variables from .env file if it exists."""
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        with open(env_file, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    if key not in os.environ:  # Don't override existing env vars
                        os.environ[key] = value


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(name, default)


def get_int_env(name: str, default: int) -> int:
    """Get an integer environment variable, raising ConfigurationError if malformed."""
    raw = get_env(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def get_float_env(name: str, default: float) -> float:
    """Get a float environment variable, raising ConfigurationError if malformed."""
    raw = get_env(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


# Load .env file on import
load_env_file()

# Environment variable names
ENV_BACKEND = "GPIO_BACKEND"
"""str: Environment variable selecting the capability backend (sysfs or sim)."""

ENV_SYSFS_ROOT = "GPIO_SYSFS_ROOT"
"""str: Environment variable overriding the GPIO sysfs class directory."""

ENV_CHIP_LABEL = "GPIO_CHIP_LABEL"
"""str: Environment variable overriding the label of the controller under test."""

ENV_RETRY_ATTEMPTS = "SYSFS_RETRY_ATTEMPTS"
ENV_RETRY_DELAY = "SYSFS_RETRY_DELAY"

# Core Configuration Constants
DEFAULT_BACKEND = "sysfs"
BACKENDS = ("sysfs", "sim")

DEFAULT_SYSFS_ROOT = "/sys/class/gpio"
"""str: Linux GPIO sysfs class directory."""

DEFAULT_CHIP_LABEL = "greybus_gpio"
"""str: gpiochip label reported by the Greybus GPIO controller."""

# Scenario constants
REPEAT_COUNT = 10
"""int: How often repeated-operation scenarios issue the same request."""

MULTIPLE_LINE_COUNT = 3

# Simulated controller defaults
SIM_DEFAULT_BASE = 0
SIM_DEFAULT_LINES = 16

# Retry tuning for transient sysfs errors
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 0.05
