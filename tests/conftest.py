"""
Shared fixtures: in-memory collaborators that record every call, in order,
into one shared event list.
"""

from types import SimpleNamespace
from typing import List, Optional

import pytest

from spotguard.schemas import Target
from spotguard.services import AlertSink, ComputeProvider, MetricsSink


def status(code):
    """Status record shaped like azure.mgmt.compute InstanceViewStatus"""
    return SimpleNamespace(code=code)


class FakeCompute(ComputeProvider):
    def __init__(self, events: List[tuple], statuses=None, read_error: Exception = None,
                 start_error: Exception = None):
        self.events = events
        self.statuses = statuses if statuses is not None else []
        self.read_error = read_error
        self.start_error = start_error

    def get_power_statuses(self, target):
        self.events.append(("read", target.vm_name))
        if self.read_error is not None:
            raise self.read_error
        return self.statuses

    def start_vm(self, target):
        self.events.append(("start", target.vm_name))
        if self.start_error is not None:
            raise self.start_error


class FakeMetrics(MetricsSink):
    def __init__(self, events: List[tuple]):
        self.events = events

    def push(self, metric_name, value, timestamp: Optional[int] = None, interval_hint: Optional[int] = None):
        self.events.append(("metrics", metric_name, value))
        return True


class FakeAlerts(AlertSink):
    def __init__(self, events: List[tuple]):
        self.events = events

    def notify(self, title, body, is_error=False):
        self.events.append(("alert", title, body, is_error))
        return True


@pytest.fixture
def events():
    return []


@pytest.fixture
def target():
    return Target(resource_group="rg-spot", vm_name="spot-vm-01")


@pytest.fixture
def compute(events):
    return FakeCompute(events)


@pytest.fixture
def metrics(events):
    return FakeMetrics(events)


@pytest.fixture
def alerts(events):
    return FakeAlerts(events)


@pytest.fixture(autouse=True)
def _clear_spotguard_env(monkeypatch):
    """Keep the developer's environment out of settings tests"""
    for name in (
        "AZURE_RESOURCE_GROUP", "AZURE_VM_NAME", "AZURE_SUBSCRIPTION_ID",
        "AZURE_TENANT_ID", "AZURE_CLIENT_ID", "AZURE_CLIENT_SECRET",
        "CHECK_INTERVAL_SECONDS", "START_TIMEOUT_SECONDS", "HTTP_TIMEOUT_SECONDS",
        "GRAFANA_URI", "GRAFANA_USER", "GRAFANA_TOKEN", "METRICS_FORMAT",
        "TEAMS_WEBHOOK_URL", "ALERT_FORMAT", "LOG_LEVEL", "LOG_FORMAT", "LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
