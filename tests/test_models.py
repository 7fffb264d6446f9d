"""
Schema Model Tests
"""

import pytest
from pydantic import ValidationError

from spotguard.schemas import RestartOutcome, Target


def test_target_is_immutable_and_hashable():
    target = Target(resource_group="rg-spot", vm_name="spot-vm-01")

    with pytest.raises(ValidationError):
        target.vm_name = "other-vm"

    assert {target: "seen"}[Target(resource_group="rg-spot", vm_name="spot-vm-01")] == "seen"
    assert str(target) == "rg-spot/spot-vm-01"


def test_restart_outcome_constructors():
    assert RestartOutcome.success().succeeded is True
    failed = RestartOutcome.failure("QuotaExceeded")
    assert failed.succeeded is False
    assert failed.error_detail == "QuotaExceeded"
