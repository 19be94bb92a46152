import time
from datetime import datetime
from typing import Iterator, List, Sequence, Tuple

from gpio_conformance.capability.base import LineCapability
from gpio_conformance.context import (
    AddressingMode,
    ExecutionContext,
    ResolvedLines,
    resolve_lines,
)
from gpio_conformance.exceptions import (
    CapabilityError,
    InvalidAddressingError,
    UnknownCaseError,
    VerificationMismatchError,
)
from gpio_conformance.logging_config import get_logger
from gpio_conformance.scenarios.base import (
    Attribute,
    Operation,
    Scenario,
    ScenarioResult,
    Step,
    StepResult,
    StepStatus,
)
from gpio_conformance.scenarios.registry import scenario_for
from gpio_conformance.scenarios.verify import ensure_match
import gpio_conformance.scenarios  # noqa: F401

logger = get_logger("runner")

_GETTERS = {
    Attribute.DIRECTION: "get_direction",
    Attribute.VALUE: "get_value",
    Attribute.EDGE: "get_edge",
}
_SETTERS = {
    Attribute.DIRECTION: "set_direction",
    Attribute.VALUE: "set_value",
    Attribute.EDGE: "set_edge",
}


def dispatch(case_id: int) -> Scenario:
    """Select the scenario for a case id.

    Raises:
        UnknownCaseError: no scenario is registered for ``case_id``
    """
    return scenario_for(case_id)


def _call_targets(
    step: Step, mode: AddressingMode, lines: ResolvedLines
) -> Iterator[Tuple[int, ...]]:
    """Yield the line tuple of each capability call a step makes."""
    if step.op is Operation.COUNT:
        yield ()
    elif step.op in (Operation.ACTIVATE, Operation.DEACTIVATE) and mode is not AddressingMode.ALL:
        yield tuple(lines)
    else:
        # Lines are addressed one at a time, in order
        for line in lines:
            yield (line,)


def _invoke(
    capability: LineCapability, step: Step, targets: Tuple[int, ...], ctx: ExecutionContext
) -> StepResult:
    """Make one capability call and reduce it to a StepResult."""
    label = step.describe()
    line = targets[0] if len(targets) == 1 else None
    try:
        if step.op is Operation.COUNT:
            count = capability.get_line_count(ctx.base_pin)
            return StepResult(
                label, StepStatus.PASS, observed=str(count), message=f"GPIO count: {count}"
            )
        if step.op is Operation.ACTIVATE:
            capability.activate(list(targets))
            return StepResult(label, StepStatus.PASS, line=line)
        if step.op is Operation.DEACTIVATE:
            capability.deactivate(list(targets))
            return StepResult(label, StepStatus.PASS, line=line)
        if step.op is Operation.SET:
            getattr(capability, _SETTERS[step.attribute])(line, step.value)
            return StepResult(label, StepStatus.PASS, line=line, observed=step.value)

        actual = getattr(capability, _GETTERS[step.attribute])(line)
        if step.expect is not None:
            ensure_match(actual, step.expect, line=line)
        return StepResult(
            label, StepStatus.PASS, line=line, observed=actual, expected=step.expect
        )
    except VerificationMismatchError as e:
        return StepResult(
            label,
            StepStatus.MISMATCH,
            line=line,
            observed=e.actual,
            expected=e.expected,
            message=str(e),
        )
    except CapabilityError as e:
        return StepResult(
            label,
            StepStatus.CAPABILITY_ERROR,
            line=line,
            expected=step.expect,
            message=str(e),
        )


def _log_step(ctx: ExecutionContext, phase: str, res: StepResult) -> None:
    extra = {
        "case_id": ctx.case_id,
        "phase": phase,
        "step": res.step,
        "line_id": res.line,
        "status": res.status.value,
    }
    target = f" on line {res.line}" if res.line is not None else ""
    if res.success:
        logger.info(f"[{ctx.case_id}] {phase}: {res.step}{target} ok", extra=extra)
    else:
        logger.warning(
            f"[{ctx.case_id}] {phase}: {res.step}{target} failed "
            f"({res.status.value}): {res.message}",
            extra=extra,
        )


def _execute_steps(
    capability: LineCapability,
    steps: Sequence[Step],
    ctx: ExecutionContext,
    lines: ResolvedLines,
    phase: str,
) -> List[StepResult]:
    results: List[StepResult] = []
    for step in steps:
        for _ in range(step.repeat):
            for targets in _call_targets(step, ctx.addressing_mode, lines):
                res = _invoke(capability, step, targets, ctx)
                results.append(res)
                _log_step(ctx, phase, res)
    return results


def run_scenario(
    capability: LineCapability,
    scenario: Scenario,
    ctx: ExecutionContext,
    lines: ResolvedLines,
) -> ScenarioResult:
    """Execute one scenario's steps, then its recovery steps.

    The case result is the outcome of the last main-phase call: a later
    outcome overwrites an earlier failure. Recovery always runs once the main
    phase has started and never changes the case result.
    """
    start_time = time.time()
    if not scenario.supports(ctx.addressing_mode):
        mode = ctx.addressing_mode.name if ctx.addressing_mode else None
        return ScenarioResult(
            case_id=scenario.case_id,
            scenario=scenario.name,
            status=StepStatus.INVALID_ADDRESSING,
            message=f"Case {scenario.case_id} does not support {mode} addressing",
            lines=tuple(lines),
            executed_at=datetime.now().isoformat(),
        )

    logger.info(
        f"Running case {scenario.case_id} '{scenario.name}' on lines {list(lines)}",
        extra={"case_id": scenario.case_id, "lines": list(lines)},
    )
    steps = _execute_steps(capability, scenario.steps, ctx, lines, "step")
    recovery = _execute_steps(capability, scenario.recovery, ctx, lines, "recovery")
    final = steps[-1]

    return ScenarioResult(
        case_id=scenario.case_id,
        scenario=scenario.name,
        status=final.status,
        message=final.message,
        observed=final.observed,
        expected=final.expected,
        lines=tuple(lines),
        steps=steps,
        recovery=recovery,
        execution_time=time.time() - start_time,
        executed_at=datetime.now().isoformat(),
    )


def run_case(capability: LineCapability, ctx: ExecutionContext) -> ScenarioResult:
    """Dispatch, resolve addressing and run the case selected by ``ctx``.

    Unknown cases and invalid addressing are reported as failed results
    without any capability call.
    """
    try:
        scenario = dispatch(ctx.case_id)
        lines = resolve_lines(ctx)
    except UnknownCaseError as e:
        logger.error(str(e), extra={"case_id": ctx.case_id})
        return ScenarioResult(
            case_id=ctx.case_id,
            scenario="",
            status=StepStatus.UNKNOWN_CASE,
            message=str(e),
            executed_at=datetime.now().isoformat(),
        )
    except InvalidAddressingError as e:
        logger.error(
            f"Case {ctx.case_id}: invalid addressing: {e}", extra={"case_id": ctx.case_id}
        )
        return ScenarioResult(
            case_id=ctx.case_id,
            scenario=scenario.name,
            status=StepStatus.INVALID_ADDRESSING,
            message=str(e),
            executed_at=datetime.now().isoformat(),
        )

    result = run_scenario(capability, scenario, ctx, lines)
    verdict = "PASS" if result.success else "FAIL"
    log = logger.info if result.success else logger.error
    log(
        f"Case {result.case_id} '{result.scenario}': {verdict}"
        + (f" ({result.status.value}: {result.message})" if not result.success else ""),
        extra={
            "case_id": result.case_id,
            "status": result.status.value,
            "execution_time": result.execution_time,
            "recovery_failures": sum(1 for r in result.recovery if not r.success),
        },
    )
    return result
