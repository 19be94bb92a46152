import pytest
from gpio_conformance.context import AddressingMode
from gpio_conformance.exceptions import ScenarioRegistrationError, UnknownCaseError
from gpio_conformance.scenarios.base import Scenario, activate
from gpio_conformance.scenarios.registry import (
    SCENARIOS,
    _REGISTRY,
    list_registered,
    register,
    scenario_for,
)

CASE_IDS = {
    263, 264, 267, 270, 271, 272, 273, 274, 276, 277, 279, 281, 282,
    286, 287, 288, 409, 410, 411, 412, 413, 416, 417,
}


@pytest.fixture
def scratch_case():
    """Case id reserved for registration tests, removed afterwards."""
    case_id = 9001
    yield case_id
    _REGISTRY.pop(case_id, None)


class TestRegistry:
    def test_every_case_is_registered(self):
        assert set(SCENARIOS) == CASE_IDS

    def test_scenario_for_known_case(self):
        scenario = scenario_for(416)
        assert scenario.case_id == 416
        assert scenario.name == "edge none to both"

    def test_scenario_for_unknown_case(self):
        with pytest.raises(UnknownCaseError, match="999"):
            scenario_for(999)

    def test_view_is_read_only(self):
        with pytest.raises(TypeError):
            SCENARIOS[9002] = SCENARIOS[263]

    def test_duplicate_case_id_is_rejected(self):
        with pytest.raises(ScenarioRegistrationError, match="already registered"):
            register(Scenario(case_id=270, name="duplicate", steps=(activate(),)))
        assert SCENARIOS[270].name != "duplicate"

    def test_empty_scenario_is_rejected(self, scratch_case):
        with pytest.raises(ScenarioRegistrationError, match="no steps"):
            register(Scenario(case_id=scratch_case, name="empty", steps=()))
        assert scratch_case not in SCENARIOS

    def test_registration_is_visible_through_view(self, scratch_case):
        register(Scenario(case_id=scratch_case, name="scratch", steps=(activate(),)))
        assert SCENARIOS[scratch_case].name == "scratch"


class TestListRegistered:
    def test_sorted_by_case_id(self):
        ids = [entry["case_id"] for entry in list_registered()]
        assert ids == sorted(CASE_IDS)

    def test_mode_strings(self):
        entries = {entry["case_id"]: entry for entry in list_registered()}

        assert entries[263]["modes"] == "sma"
        assert entries[270]["modes"] == "sm"
        assert entries[281]["modes"] == "s"

    def test_counts(self):
        entries = {entry["case_id"]: entry for entry in list_registered()}

        assert entries[416]["steps"] == 7
        assert entries[416]["verifications"] == 2
        assert entries[264]["verifications"] == 0


class TestScenarioSupports:
    def test_supports_declared_modes(self):
        assert SCENARIOS[272].supports(AddressingMode.ALL)
        assert not SCENARIOS[270].supports(AddressingMode.ALL)
        assert not SCENARIOS[281].supports(AddressingMode.MULTIPLE)

    def test_unset_mode_is_never_supported(self):
        assert not SCENARIOS[263].supports(None)
