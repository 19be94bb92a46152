import pytest
from unittest.mock import call
from gpio_conformance.capability.simulated import SimulatedGpio
from gpio_conformance.context import AddressingMode
from gpio_conformance.exceptions import CapabilityError
from gpio_conformance.runner.execute import dispatch, run_case, run_scenario
from gpio_conformance.scenarios.base import (
    ANY_MODE,
    Attribute,
    Scenario,
    StepStatus,
    activate,
    read,
)
from gpio_conformance.scenarios.registry import SCENARIOS
from gpio_conformance.exceptions import UnknownCaseError


def _cases_supporting(mode):
    return sorted(case_id for case_id, s in SCENARIOS.items() if s.supports(mode))


class TestDispatch:
    def test_known_case(self):
        assert dispatch(273) is SCENARIOS[273]

    def test_unknown_case(self):
        with pytest.raises(UnknownCaseError):
            dispatch(999)


class TestRejectedBeforeExecution:
    def test_unknown_case_makes_no_calls(self, capability, make_context):
        result = run_case(capability, make_context(999))

        assert result.status is StepStatus.UNKNOWN_CASE
        assert not result.success
        assert capability.method_calls == []

    def test_unset_mode_makes_no_calls(self, capability, make_context):
        result = run_case(capability, make_context(270, mode="x"))

        assert result.status is StepStatus.INVALID_ADDRESSING
        assert result.scenario == "multiple direction"
        assert capability.method_calls == []

    def test_missing_offset_makes_no_calls(self, capability, make_context):
        result = run_case(capability, make_context(270, mode="m", offsets=(0, 1)))

        assert result.status is StepStatus.INVALID_ADDRESSING
        assert capability.method_calls == []

    def test_all_with_no_lines_makes_no_calls(self, capability, make_context):
        result = run_case(capability, make_context(272, mode="a", line_count=0))

        assert result.status is StepStatus.INVALID_ADDRESSING
        assert capability.method_calls == []

    @pytest.mark.parametrize("case_id,mode", [(281, "m"), (416, "a"), (270, "a")])
    def test_unsupported_mode_makes_no_calls(self, capability, make_context, case_id, mode):
        result = run_case(capability, make_context(case_id, mode=mode, offsets=(0, 1, 2)))

        assert result.status is StepStatus.INVALID_ADDRESSING
        assert "does not support" in result.message
        assert capability.method_calls == []


class TestCasesOnSimulatedController:
    @pytest.mark.parametrize("case_id", _cases_supporting(AddressingMode.SINGLE))
    def test_single_line_cases_pass(self, sim, make_context, case_id):
        result = run_case(sim, make_context(case_id))

        assert result.status is StepStatus.PASS, result.message
        assert sim.active == set()

    @pytest.mark.parametrize("case_id", _cases_supporting(AddressingMode.MULTIPLE))
    def test_multiple_line_cases_pass(self, sim, make_context, case_id):
        result = run_case(sim, make_context(case_id, mode="m", offsets=(0, 5, 2)))

        assert result.status is StepStatus.PASS, result.message
        assert result.lines == (32, 37, 34)
        assert sim.active == set()

    @pytest.mark.parametrize("case_id", _cases_supporting(AddressingMode.ALL))
    def test_all_line_cases_pass(self, sim, make_context, case_id):
        result = run_case(sim, make_context(case_id, mode="a"))

        assert result.status is StepStatus.PASS, result.message
        assert sim.active == set()


class TestCallSequences:
    def test_line_count(self, capability, make_context):
        result = run_case(capability, make_context(263, mode="a"))

        assert result.success
        assert result.observed == "8"
        assert result.message == "GPIO count: 8"
        assert capability.method_calls == [call.get_line_count(32)]

    def test_single_activate_and_recovery(self, capability, make_context):
        result = run_case(capability, make_context(264, offsets=(4,)))

        assert result.success
        assert capability.method_calls == [call.activate([36]), call.deactivate([36])]

    def test_multiple_lines_activate_in_one_call(self, capability, make_context):
        run_case(capability, make_context(270, mode="m", offsets=(3, 0, 6)))

        capability.activate.assert_called_once_with([35, 32, 38])
        assert capability.get_direction.call_args_list == [call(35), call(32), call(38)]
        capability.deactivate.assert_called_once_with([35, 32, 38])

    def test_all_lines_activate_one_at_a_time(self, capability, make_context):
        run_case(capability, make_context(272, mode="a"))

        lines = list(range(32, 40))
        assert capability.activate.call_args_list == [call([line]) for line in lines]
        assert capability.get_direction.call_args_list == [call(line) for line in lines]
        assert capability.deactivate.call_args_list == [call([line]) for line in lines]

    def test_self_releasing_case_has_no_recovery(self, capability, make_context):
        result = run_case(capability, make_context(267, mode="m", offsets=(0, 1, 2)))

        assert result.success
        assert result.recovery == []
        capability.deactivate.assert_called_once_with([32, 33, 34])

    @pytest.mark.parametrize("case_id,token", [(274, "in"), (277, "out")])
    def test_repeated_direction_writes(self, capability, make_context, case_id, token):
        result = run_case(capability, make_context(case_id))

        assert result.success
        assert capability.set_direction.call_args_list == [call(33, token)] * 10
        capability.get_direction.assert_called_once_with(33)

    def test_repeated_direction_reads(self, capability, make_context):
        run_case(capability, make_context(271))
        assert capability.get_direction.call_count == 10

    def test_reactivation_cases_release_twice(self, capability, make_context):
        result = run_case(capability, make_context(409))

        assert result.success
        assert result.observed == "1"
        assert capability.activate.call_count == 2
        assert capability.deactivate.call_count == 2

    def test_steps_are_recorded_per_call(self, capability, make_context):
        result = run_case(capability, make_context(416))

        edge_reads = [s for s in result.steps if s.step.startswith("get edge")]
        assert [s.observed for s in edge_reads] == ["none", "both"]
        assert [r.step for r in result.recovery] == ["deactivate"]


class TestOutcomeAggregation:
    def test_mismatch_still_runs_recovery(self, capability, make_context):
        capability.get_direction.side_effect = lambda line: "in"

        result = run_case(capability, make_context(276))

        assert result.status is StepStatus.MISMATCH
        assert result.observed == "in"
        assert result.expected == "out"
        capability.deactivate.assert_called_once_with([33])

    def test_final_call_decides_result(self, capability, make_context):
        capability.get_edge.side_effect = ["rising", "both"]

        result = run_case(capability, make_context(416))

        assert result.status is StepStatus.PASS
        assert result.observed == "both"
        assert any(s.status is StepStatus.MISMATCH for s in result.steps)

    def test_final_mismatch_overrides_earlier_passes(self, capability, make_context):
        capability.get_edge.side_effect = ["none", "rising"]

        result = run_case(capability, make_context(416))

        assert result.status is StepStatus.MISMATCH
        assert result.observed == "rising"
        assert result.expected == "both"

    def test_capability_error_is_reported(self, capability, make_context):
        capability.activate.side_effect = CapabilityError("Line 33 is busy", line=33)

        result = run_case(capability, make_context(264))

        assert result.status is StepStatus.CAPABILITY_ERROR
        assert "busy" in result.message
        capability.deactivate.assert_called_once_with([33])
        assert result.recovery[0].status is StepStatus.CAPABILITY_ERROR

    def test_recovery_failure_does_not_change_result(self, capability, make_context):
        capability.deactivate.side_effect = CapabilityError("unexport failed")

        result = run_case(capability, make_context(273))

        assert result.status is StepStatus.PASS
        assert not result.recovery[0].success

    def test_recovery_releases_lines_after_a_failed_one(self, sim, capability, make_context):
        def release_middle_line(line):
            if line == 33:
                sim.deactivate([33])
            return sim.get_direction(line)

        capability.get_direction.side_effect = release_middle_line

        result = run_case(capability, make_context(270, mode="m", offsets=(0, 1, 2)))

        assert result.status is StepStatus.PASS
        capability.deactivate.assert_called_once_with([32, 33, 34])
        assert result.recovery[0].status is StepStatus.CAPABILITY_ERROR
        assert "33" in result.recovery[0].message
        assert sim.active == set()

    def test_later_calls_run_after_a_failure(self, capability, make_context):
        capability.set_direction.side_effect = CapabilityError("write failed")

        result = run_case(capability, make_context(281))

        capability.get_value.assert_called_once_with(33)
        assert result.status is StepStatus.MISMATCH
        assert result.observed == "0"


class TestRunScenario:
    def test_runs_ad_hoc_scenario(self, make_context):
        sim = SimulatedGpio(base_pin=0, line_count=4)
        scenario = Scenario(
            case_id=9100,
            name="edge default",
            steps=(activate(), read(Attribute.EDGE, expect="none")),
            modes=ANY_MODE,
        )
        ctx = make_context(9100, mode="a", base_pin=0, line_count=4)

        result = run_scenario(sim, scenario, ctx, (0, 1, 2, 3))

        assert result.success
        assert [s.line for s in result.steps[4:]] == [0, 1, 2, 3]
        assert result.execution_time is not None
        assert result.to_dict()["status"] == "PASS"
