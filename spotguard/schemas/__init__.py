"""
Schemas for spotguard

Small, short-lived values passed between the control loop, the decision
engine and the recovery actor. Nothing here is persisted.
"""

from .models import (
    Target,
    PowerState,
    PowerObservation,
    ActionPlan,
    RestartOutcome,
    sanitize_metric_component,
    metric_name_for,
)

__all__ = [
    "Target",
    "PowerState",
    "PowerObservation",
    "ActionPlan",
    "RestartOutcome",
    "sanitize_metric_component",
    "metric_name_for",
]
