"""
Recovery Actor

Brings a deallocated Spot VM back up and reports the outcome:
1. Sends one start command and waits for it to finish
2. On success: "recovered" alert, then an up sample
3. On failure: one error alert with the failure detail, no extra sample

There is no retry here. The next poll cycle observes the VM again and
tries again if it is still deallocated.
"""

import logging

from ..schemas import RestartOutcome, Target
from .interfaces import AlertSink, ComputeProvider, MetricsSink

logger = logging.getLogger(__name__)

RECOVERED_TITLE = "✅ Spot VM recovered"
FAILURE_TITLE = "🔥 Spot VM critical failure"


def recovered_message(vm_name: str) -> str:
    return f"The Spot VM **{vm_name}** has been successfully restarted by spotguard."


def failure_message(vm_name: str, error_detail: str) -> str:
    return (
        f"The VM **{vm_name}** is down and spotguard cannot restart it "
        f"(probably out of Spot quota or price too high).\n\n"
        f"Error: {error_detail}"
    )


class RecoveryActor:
    """Executes one restart attempt per call"""

    def __init__(self, compute: ComputeProvider, metrics: MetricsSink, alerts: AlertSink):
        """
        Initialize recovery actor

        Args:
            compute: Compute provider used to start the VM
            metrics: Sink for the follow-up up sample
            alerts: Sink for the outcome alert
        """
        self.compute = compute
        self.metrics = metrics
        self.alerts = alerts

    def recover(self, target: Target) -> RestartOutcome:
        """
        Attempt to start the VM and report the outcome

        Args:
            target: Deallocated VM

        Returns:
            RestartOutcome
        """
        try:
            self.compute.start_vm(target)
        except Exception as e:
            detail = str(e) or e.__class__.__name__
            logger.error(f"🔥 Restart failure for {target}: {detail}")
            self.alerts.notify(FAILURE_TITLE, failure_message(target.vm_name, detail), True)
            return RestartOutcome.failure(detail)

        logger.info(f"✅ VM {target} successfully restarted!")
        self.alerts.notify(RECOVERED_TITLE, recovered_message(target.vm_name), False)
        self.metrics.push(target.metric_name, 1)
        return RestartOutcome.success()
