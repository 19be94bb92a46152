"""Execution context and pin addressing for a conformance run."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from gpio_conformance.config import MULTIPLE_LINE_COUNT
from gpio_conformance.exceptions import InvalidAddressingError

ResolvedLines = Tuple[int, ...]


class AddressingMode(Enum):
    """Which lines a scenario targets: SINGLE, MULTIPLE or ALL."""

    SINGLE = "s"
    MULTIPLE = "m"
    ALL = "a"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "AddressingMode":
        """Parse a user supplied type tag (s/m/a, case-insensitive)."""
        if tag:
            for mode in cls:
                if mode.value == tag.lower():
                    return mode
        raise InvalidAddressingError(f"Unrecognized addressing mode: {tag!r}")


@dataclass(frozen=True)
class ExecutionContext:
    """Identifies one test run: case id, addressing and the discovered controller."""

    case_id: int
    addressing_mode: Optional[AddressingMode]
    base_pin: int = 0
    line_count: int = 0
    pin_offsets: Tuple[Optional[int], ...] = (None, None, None)

    @classmethod
    def from_args(
        cls,
        case_id: int,
        mode_tag: Optional[str],
        base_pin: int,
        line_count: int,
        pin_offsets: Sequence[Optional[int]] = (),
    ) -> "ExecutionContext":
        """Build a context from raw CLI values.

        An unrecognized mode tag is kept as ``None`` so that the failure is
        reported by ``resolve_lines`` once the case has been dispatched.
        """
        try:
            mode = AddressingMode.from_tag(mode_tag)
        except InvalidAddressingError:
            mode = None
        offsets = tuple(pin_offsets)[:MULTIPLE_LINE_COUNT]
        offsets += (None,) * (MULTIPLE_LINE_COUNT - len(offsets))
        return cls(
            case_id=case_id,
            addressing_mode=mode,
            base_pin=base_pin,
            line_count=line_count,
            pin_offsets=offsets,
        )


def _offset(ctx: ExecutionContext, index: int) -> int:
    value = ctx.pin_offsets[index] if index < len(ctx.pin_offsets) else None
    if value is None:
        raise InvalidAddressingError(
            f"{ctx.addressing_mode.name} addressing requires pin offset {index + 1}"
        )
    if value < 0:
        raise InvalidAddressingError(f"Pin offset {index + 1} is negative: {value}")
    return ctx.base_pin + value


def resolve_lines(ctx: ExecutionContext) -> ResolvedLines:
    """Turn the context's addressing mode into absolute line ids.

    Raises:
        InvalidAddressingError: mode missing, offsets missing, or no lines
    """
    mode = ctx.addressing_mode
    if mode is AddressingMode.SINGLE:
        return (_offset(ctx, 0),)
    if mode is AddressingMode.MULTIPLE:
        # Order is kept and duplicates are allowed
        return tuple(_offset(ctx, i) for i in range(MULTIPLE_LINE_COUNT))
    if mode is AddressingMode.ALL:
        if ctx.line_count <= 0:
            raise InvalidAddressingError("ALL addressing requires a non-zero line count")
        return tuple(range(ctx.base_pin, ctx.base_pin + ctx.line_count))
    raise InvalidAddressingError("Addressing mode is not set")
