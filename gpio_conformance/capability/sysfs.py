"""Line capability backed by the Linux GPIO sysfs interface."""

import errno
from pathlib import Path
from typing import Iterable, Optional, Tuple

from gpio_conformance.capability.base import LineCapability, combine_failures
from gpio_conformance.config import (
    DEFAULT_CHIP_LABEL,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_SYSFS_ROOT,
    ENV_CHIP_LABEL,
    ENV_RETRY_ATTEMPTS,
    ENV_RETRY_DELAY,
    ENV_SYSFS_ROOT,
    get_env,
    get_float_env,
    get_int_env,
)
from gpio_conformance.exceptions import CapabilityError, DeviceNotFoundError
from gpio_conformance.logging_config import get_logger
from gpio_conformance.retry import exponential_backoff

logger = get_logger("capability")

TRANSIENT_ERRNOS = frozenset((errno.EAGAIN, errno.EBUSY, errno.EINTR))

# export/unexport report a line that is already claimed as EBUSY
CONTROL_TRANSIENT_ERRNOS = TRANSIENT_ERRNOS - {errno.EBUSY}


def _is_transient(exc: Exception) -> bool:
    return getattr(exc, "errno", None) in TRANSIENT_ERRNOS


def _is_control_transient(exc: Exception) -> bool:
    return getattr(exc, "errno", None) in CONTROL_TRANSIENT_ERRNOS


class SysfsGpio(LineCapability):
    """GPIO lines through ``/sys/class/gpio``.

    Layout used::

        <root>/gpiochip<base>/{label,base,ngpio}
        <root>/export, <root>/unexport
        <root>/gpio<line>/{direction,value,edge}
    """

    def __init__(
        self,
        root: Optional[str] = None,
        chip_label: Optional[str] = None,
        retry_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        self.root = Path(root or get_env(ENV_SYSFS_ROOT, DEFAULT_SYSFS_ROOT))
        self.chip_label = chip_label or get_env(ENV_CHIP_LABEL, DEFAULT_CHIP_LABEL)
        if retry_attempts is None:
            retry_attempts = get_int_env(ENV_RETRY_ATTEMPTS, DEFAULT_RETRY_ATTEMPTS)
        if retry_delay is None:
            retry_delay = get_float_env(ENV_RETRY_DELAY, DEFAULT_RETRY_DELAY)

        def retry(predicate):
            return exponential_backoff(
                max_attempts=max(1, retry_attempts),
                base_delay=retry_delay,
                retry_on=OSError,
                should_retry=predicate,
            )

        self._read = retry(_is_transient)(self._read_attribute)
        self._write = retry(_is_transient)(self._write_attribute)
        self._write_control = retry(_is_control_transient)(self._write_attribute)

    @staticmethod
    def _read_attribute(path: Path) -> str:
        return path.read_text().strip()

    @staticmethod
    def _write_attribute(path: Path, token: str) -> None:
        with open(path, "w") as f:
            f.write(token)

    def _read_checked(self, path: Path, line=None) -> str:
        try:
            return self._read(path)
        except OSError as e:
            raise CapabilityError(f"Read of {path} failed: {e}", line=line, errno=e.errno) from e

    def _write_checked(self, path: Path, token: str, line=None, control=False) -> None:
        logger.debug(f"Writing {token!r} to {path}", extra={"path": str(path), "token": token})
        write = self._write_control if control else self._write
        try:
            write(path, token)
        except OSError as e:
            raise CapabilityError(
                f"Write of {token!r} to {path} failed: {e}", line=line, errno=e.errno
            ) from e

    def _line_attr(self, line_id: int, attribute: str) -> Path:
        return self.root / f"gpio{line_id}" / attribute

    def discover(self) -> Tuple[int, int]:
        chips = sorted(self.root.glob("gpiochip*"))
        for chip in chips:
            label = self._read_checked(chip / "label")
            if label != self.chip_label:
                continue
            try:
                base = int(self._read_checked(chip / "base"))
                count = int(self._read_checked(chip / "ngpio"))
            except ValueError as e:
                raise CapabilityError(f"Malformed gpiochip attributes in {chip}: {e}") from e
            logger.info(
                f"Found controller '{label}' at {chip}: base {base}, {count} lines",
                extra={"chip": str(chip), "base_pin": base, "line_count": count},
            )
            return base, count
        raise DeviceNotFoundError(
            f"No gpiochip labelled '{self.chip_label}' under {self.root} "
            f"({len(chips)} chips scanned)"
        )

    def get_line_count(self, base_pin: int) -> int:
        raw = self._read_checked(self.root / f"gpiochip{base_pin}" / "ngpio")
        try:
            return int(raw)
        except ValueError as e:
            raise CapabilityError(f"Malformed line count {raw!r}") from e

    def activate(self, line_ids: Iterable[int]) -> None:
        for line_id in line_ids:
            self._write_checked(self.root / "export", str(line_id), line=line_id, control=True)

    def deactivate(self, line_ids: Iterable[int]) -> None:
        failures = []
        for line_id in line_ids:
            try:
                self._write_checked(
                    self.root / "unexport", str(line_id), line=line_id, control=True
                )
            except CapabilityError as e:
                failures.append(e)
        if failures:
            raise combine_failures("Unexport", failures)

    def get_direction(self, line_id: int) -> str:
        return self._read_checked(self._line_attr(line_id, "direction"), line=line_id)

    def set_direction(self, line_id: int, token: str) -> None:
        self._write_checked(self._line_attr(line_id, "direction"), token, line=line_id)

    def get_value(self, line_id: int) -> str:
        return self._read_checked(self._line_attr(line_id, "value"), line=line_id)

    def set_value(self, line_id: int, token: str) -> None:
        self._write_checked(self._line_attr(line_id, "value"), token, line=line_id)

    def get_edge(self, line_id: int) -> str:
        return self._read_checked(self._line_attr(line_id, "edge"), line=line_id)

    def set_edge(self, line_id: int, token: str) -> None:
        self._write_checked(self._line_attr(line_id, "edge"), token, line=line_id)
