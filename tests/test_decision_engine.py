"""
Decision Engine Tests

Classification table, sink ordering and read-failure handling.
"""

import logging

import pytest

from spotguard.schemas import PowerState
from spotguard.services import DecisionEngine, RecoveryActor, build_plan, classify
from tests.conftest import status


@pytest.fixture
def engine(compute, metrics, alerts):
    return DecisionEngine(compute, metrics, RecoveryActor(compute, metrics, alerts))


class TestClassify:
    def test_running(self):
        observation = classify([status("ProvisioningState/succeeded"), status("PowerState/running")])
        assert observation.state == PowerState.RUNNING
        assert observation.raw_code == "PowerState/running"

    def test_deallocated(self):
        assert classify([status("PowerState/deallocated")]).state == PowerState.DEALLOCATED

    @pytest.mark.parametrize("code", ["PowerState/stopped", "PowerState/starting", "PowerState/deallocating"])
    def test_other_states_keep_raw_code(self, code):
        observation = classify([status(code)])
        assert observation.state == PowerState.OTHER
        assert observation.raw_code == code

    @pytest.mark.parametrize("statuses", [
        [],
        None,
        [status("ProvisioningState/succeeded")],
        [status(None), status("powerstate/running")],
    ])
    def test_no_power_state_is_unknown(self, statuses):
        observation = classify(statuses)
        assert observation.state == PowerState.UNKNOWN
        assert observation.code == "Unknown"

    def test_first_power_state_wins(self):
        observation = classify([status("PowerState/deallocated"), status("PowerState/running")])
        assert observation.state == PowerState.DEALLOCATED

    def test_dict_records(self):
        assert classify([{"code": "PowerState/running"}]).state == PowerState.RUNNING

    def test_token_must_match_exactly(self):
        assert classify([status("PowerState/running-ish")]).state == PowerState.OTHER


class TestBuildPlan:
    @pytest.mark.parametrize("code,value,restart", [
        ("PowerState/running", 1, False),
        ("PowerState/deallocated", 0, True),
        ("PowerState/stopped", 0, False),
    ])
    def test_mapping(self, code, value, restart):
        plan = build_plan(classify([status(code)]))
        assert plan.metric_value == value
        assert plan.restart is restart

    def test_unknown(self):
        plan = build_plan(classify([]))
        assert plan.metric_value == 0
        assert plan.restart is False


class TestCheckAndAct:
    def test_running_pushes_up_sample_only(self, engine, compute, events, target):
        compute.statuses = [status("PowerState/running")]

        plan = engine.check_and_act(target)

        assert plan.metric_value == 1
        assert events == [("read", "spot-vm-01"), ("metrics", "azure.vm.spot-vm-01.up", 1)]

    def test_unknown_pushes_down_sample_without_restart(self, engine, compute, events, target):
        compute.statuses = [status("ProvisioningState/succeeded")]

        engine.check_and_act(target)

        assert events == [("read", "spot-vm-01"), ("metrics", "azure.vm.spot-vm-01.up", 0)]

    def test_deallocated_pushes_down_sample_before_restart(self, engine, compute, events, target):
        compute.statuses = [status("PowerState/deallocated")]

        plan = engine.check_and_act(target)

        assert plan.restart is True
        kinds = [event[0] for event in events]
        assert kinds.index("metrics") < kinds.index("start")
        assert events[1] == ("metrics", "azure.vm.spot-vm-01.up", 0)

    def test_read_error_is_logged_not_alerted(self, engine, compute, events, target, caplog):
        compute.read_error = ConnectionError("network unreachable")

        with caplog.at_level(logging.ERROR):
            plan = engine.check_and_act(target)

        assert plan is None
        assert events == [("read", "spot-vm-01")]
        assert "network unreachable" in caplog.text
