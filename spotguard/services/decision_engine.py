"""
Decision Engine

Maps the VM status records read in a cycle to an action plan and carries it
out:

    | power state  | sample | restart |
    |--------------|--------|---------|
    | running      | 1      | no      |
    | deallocated  | 0      | yes     |
    | anything else| 0      | no      |

The sample for the observed state is always pushed before a restart is
attempted, so dashboards see the down event even when the restart works.

Read failures are logged only. Alerting on them would page on every network
blip; restart failures are the loud path (see RecoveryActor).
"""

import logging
from typing import Any, Iterable, Optional

from ..schemas import ActionPlan, PowerObservation, PowerState, Target
from .interfaces import ComputeProvider, MetricsSink
from .recovery_actor import RecoveryActor

logger = logging.getLogger(__name__)

POWER_STATE_PREFIX = "PowerState/"

_TOKEN_STATES = {
    "running": PowerState.RUNNING,
    "deallocated": PowerState.DEALLOCATED,
}


def _status_code(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        code = record.get("code")
    else:
        code = getattr(record, "code", None)
    return code if isinstance(code, str) else None


def classify(statuses: Optional[Iterable[Any]]) -> PowerObservation:
    """
    Classify the first ``PowerState/...`` status record

    Args:
        statuses: Status records in reported order, each with a ``code``

    Returns:
        PowerObservation; UNKNOWN when no power state code is present
    """
    for record in statuses or ():
        code = _status_code(record)
        if code is not None and code.startswith(POWER_STATE_PREFIX):
            token = code[len(POWER_STATE_PREFIX):]
            return PowerObservation(
                state=_TOKEN_STATES.get(token, PowerState.OTHER),
                raw_code=code,
            )
    return PowerObservation(state=PowerState.UNKNOWN)


def build_plan(observation: PowerObservation) -> ActionPlan:
    """Action plan for one observation"""
    if observation.state == PowerState.RUNNING:
        return ActionPlan(observation=observation, metric_value=1, restart=False)
    if observation.state == PowerState.DEALLOCATED:
        return ActionPlan(observation=observation, metric_value=0, restart=True)
    return ActionPlan(observation=observation, metric_value=0, restart=False)


class DecisionEngine:
    """Runs the read, classify and act steps of one poll cycle"""

    def __init__(self, compute: ComputeProvider, metrics: MetricsSink, recovery: RecoveryActor):
        self.compute = compute
        self.metrics = metrics
        self.recovery = recovery

    def evaluate(self, statuses: Optional[Iterable[Any]]) -> ActionPlan:
        return build_plan(classify(statuses))

    def act(self, target: Target, plan: ActionPlan) -> None:
        """Push the sample for the observed state, then restart if planned"""
        self.metrics.push(target.metric_name, plan.metric_value)

        if plan.restart:
            logger.warning(f"⚠️ VM {target} deallocated! Attempting to start...")
            self.recovery.recover(target)

    def check_and_act(self, target: Target) -> Optional[ActionPlan]:
        """
        One poll cycle: read the power state, decide, act

        Args:
            target: Monitored VM

        Returns:
            The executed plan, or None if the state could not be read
        """
        try:
            statuses = self.compute.get_power_statuses(target)
        except Exception as e:
            logger.error(f"❌ Azure API error while reading {target}: {e}")
            return None

        plan = self.evaluate(statuses)
        logger.info(
            f"State: {plan.observation.code}",
            extra={"vm": target.vm_name, "power_state": plan.observation.state.value},
        )

        self.act(target, plan)
        return plan
