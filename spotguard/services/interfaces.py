"""
Collaborator Interfaces

The core (decision engine, recovery actor, control loop) only talks to the
outside world through these three contracts.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ..schemas import Target


class ComputeProvider(ABC):
    """Reads and starts the monitored VM. Owns all cloud authentication."""

    @abstractmethod
    def get_power_statuses(self, target: Target) -> Sequence[Any]:
        """
        Return the VM status records, in the order the cloud reports them

        Each record exposes a ``code`` attribute such as
        ``ProvisioningState/succeeded`` or ``PowerState/running``.
        """

    @abstractmethod
    def start_vm(self, target: Target) -> None:
        """
        Start the VM and block until the operation is terminal

        Returns on success, raises on rejection, failure or timeout.
        """


class MetricsSink(ABC):
    """Accepts up/down samples. Never raises."""

    @abstractmethod
    def push(
        self,
        metric_name: str,
        value: int,
        timestamp: Optional[int] = None,
        interval_hint: Optional[int] = None
    ) -> bool:
        """Push one sample; return True if it was delivered"""


class AlertSink(ABC):
    """Accepts human-readable alerts. Never raises."""

    @abstractmethod
    def notify(self, title: str, body: str, is_error: bool) -> bool:
        """Send one alert; return True if it was delivered"""
