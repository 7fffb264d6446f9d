"""
Core Data Models for spotguard

These models describe the monitored VM, what was observed on it during one
poll cycle, and what the agent decided and achieved in that cycle.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

_METRIC_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_metric_component(value: str) -> str:
    """Replace every character outside [A-Za-z0-9._-] with an underscore"""
    return _METRIC_UNSAFE_CHARS.sub("_", value)


def metric_name_for(vm_name: str) -> str:
    """Up/down metric name for a VM, e.g. ``azure.vm.my-vm.01_.up``"""
    return f"azure.vm.{sanitize_metric_component(vm_name)}.up"


class PowerState(str, Enum):
    """Classification of the VM power state"""
    RUNNING = "running"
    DEALLOCATED = "deallocated"
    OTHER = "other"
    UNKNOWN = "unknown"


class Target(BaseModel):
    """The monitored VM, fixed for the lifetime of the process"""
    resource_group: str = Field(..., description="Azure resource group name")
    vm_name: str = Field(..., description="Azure VM name")

    model_config = ConfigDict(frozen=True)

    @property
    def metric_name(self) -> str:
        return metric_name_for(self.vm_name)

    def __str__(self) -> str:
        return f"{self.resource_group}/{self.vm_name}"


class PowerObservation(BaseModel):
    """Power state read during one cycle"""
    state: PowerState = Field(..., description="Classified power state")
    raw_code: Optional[str] = Field(None, description="Status code as reported, e.g. PowerState/stopped")

    model_config = ConfigDict(frozen=True)

    @property
    def code(self) -> str:
        return self.raw_code or "Unknown"


class ActionPlan(BaseModel):
    """What to do for one observation: the sample to emit and whether to restart"""
    observation: PowerObservation
    metric_value: int = Field(..., ge=0, le=1, description="Up/down sample for the observed state")
    restart: bool = Field(False, description="Attempt a VM start in this cycle")

    model_config = ConfigDict(frozen=True)


class RestartOutcome(BaseModel):
    """Terminal result of a single restart attempt"""
    succeeded: bool
    error_detail: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def success(cls) -> "RestartOutcome":
        return cls(succeeded=True)

    @classmethod
    def failure(cls, error_detail: str) -> "RestartOutcome":
        return cls(succeeded=False, error_detail=error_detail)
