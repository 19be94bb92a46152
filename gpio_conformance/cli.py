import argparse
import errno
import sys

from gpio_conformance.capability import make_capability
from gpio_conformance.catalog import format_catalog
from gpio_conformance.config import (
    BACKENDS,
    DEFAULT_BACKEND,
    ENV_BACKEND,
    SIM_DEFAULT_BASE,
    SIM_DEFAULT_LINES,
    get_env,
)
from gpio_conformance.context import ExecutionContext
from gpio_conformance.exceptions import CapabilityError, ConfigurationError, UnknownCaseError
from gpio_conformance.logging_config import get_logger, setup_logging
from gpio_conformance.runner.execute import dispatch, run_case
from gpio_conformance.scenarios.base import ScenarioResult, StepStatus

logger = get_logger("cli")

EXIT_CODES = {
    StepStatus.PASS: 0,
    StepStatus.MISMATCH: 1,
    StepStatus.CAPABILITY_ERROR: errno.EIO,
    StepStatus.INVALID_ADDRESSING: errno.EINVAL,
    StepStatus.UNKNOWN_CASE: errno.EINVAL,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

EPILOG = """\
example: case 270 on three lines (offsets 0, 8 and 9 from the controller base)
    gpio-conformance -c 270 -t m -1 0 -2 8 -3 9
"""


def exit_code(result: ScenarioResult) -> int:
    return EXIT_CODES[result.status]


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {raw}")
    return value


def _build_capability(args):
    if args.backend == "sim":
        return make_capability("sim", base_pin=args.sim_base, line_count=args.sim_lines)
    return make_capability("sysfs", root=args.sysfs_root, chip_label=args.chip_label)


def _run(args) -> int:
    try:
        dispatch(args.case_id)
    except UnknownCaseError as e:
        logger.error(f"Error: {e}", extra={"case_id": args.case_id})
        return EXIT_CODES[StepStatus.UNKNOWN_CASE]

    try:
        capability = _build_capability(args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}", extra={"case_id": args.case_id})
        return errno.EINVAL

    # Check the controller before running the case
    try:
        base_pin, line_count = capability.discover()
    except CapabilityError as e:
        logger.error(f"Controller check failed: {e}", extra={"case_id": args.case_id})
        return EXIT_CODES[StepStatus.CAPABILITY_ERROR]

    ctx = ExecutionContext.from_args(
        case_id=args.case_id,
        mode_tag=args.mode,
        base_pin=base_pin,
        line_count=line_count,
        pin_offsets=(args.pin1, args.pin2, args.pin3),
    )
    result = run_case(capability, ctx)

    verdict = "PASS" if result.success else f"FAIL ({result.status.value})"
    print(f"Case {result.case_id} {result.scenario}: {verdict}")
    return exit_code(result)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gpio-conformance",
        description="GPIO controller conformance test driver",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-c", "-C", dest="case_id", type=_positive_int, help="Test case id")
    p.add_argument(
        "-t", "-T", dest="mode",
        help="'s' single line, 'm' three lines (-1 -2 -3), 'a' all lines",
    )
    p.add_argument("-1", dest="pin1", type=int, help="Line offset for single or multiple addressing")
    p.add_argument("-2", dest="pin2", type=int, help="Second line offset for multiple addressing")
    p.add_argument("-3", dest="pin3", type=int, help="Third line offset for multiple addressing")
    p.add_argument("--list-cases", action="store_true", help="Print the registered cases and exit")

    backend = p.add_argument_group("backend")
    backend.add_argument(
        "--backend",
        choices=BACKENDS,
        default=get_env(ENV_BACKEND, DEFAULT_BACKEND),
        help="Line capability backend (or set GPIO_BACKEND)",
    )
    backend.add_argument("--sysfs-root", type=str, help="GPIO sysfs directory (or set GPIO_SYSFS_ROOT)")
    backend.add_argument("--chip-label", type=str, help="gpiochip label to test (or set GPIO_CHIP_LABEL)")
    backend.add_argument("--sim-base", type=int, default=SIM_DEFAULT_BASE, help="Simulated controller base")
    backend.add_argument("--sim-lines", type=int, default=SIM_DEFAULT_LINES, help="Simulated line count")

    logs = p.add_argument_group("logging")
    logs.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="DEBUG, INFO, WARNING, ERROR (or set GPIOTEST_LOG_LEVEL)",
    )
    logs.add_argument("--json-logs", action="store_true", default=None, help="Structured JSON log lines")
    logs.add_argument("--log-dir", type=str, help="Also write rotating log files to this directory")
    return p


def main(argv=None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    if args.list_cases:
        print(format_catalog())
        return 0
    if args.case_id is None:
        p.error("the following arguments are required: -c/-C")

    try:
        setup_logging(
            level=args.log_level,
            log_dir=args.log_dir,
            enable_file=args.log_dir is not None,
            json_format=args.json_logs,
        )
    except ValueError as e:
        # Malformed GPIOTEST_LOG_LEVEL or GPIOTEST_LOG_LEVEL_<MODULE>
        print(f"{p.prog}: error: {e}", file=sys.stderr)
        return errno.EINVAL
    return _run(args)


if __name__ == "__main__":
    raise SystemExit(main())
