"""
spotguard services

Core: DecisionEngine, RecoveryActor, ControlLoop.
Adapters: AzureComputeClient, MetricsClient, AlertClient.
"""

from .interfaces import ComputeProvider, MetricsSink, AlertSink
from .azure_client import AzureComputeClient
from .metrics_client import MetricsClient
from .alert_client import AlertClient
from .recovery_actor import RecoveryActor
from .decision_engine import DecisionEngine, classify, build_plan
from .control_loop import ControlLoop

__all__ = [
    "ComputeProvider",
    "MetricsSink",
    "AlertSink",
    "AzureComputeClient",
    "MetricsClient",
    "AlertClient",
    "RecoveryActor",
    "DecisionEngine",
    "classify",
    "build_plan",
    "ControlLoop",
]
