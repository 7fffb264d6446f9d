"""
Azure Compute Client Service

Handles Azure Compute API operations for the monitored VM:
- Read the instance view (power state)
- Start the VM and wait for the long-running operation
"""

import logging
from typing import Any, List

from azure.core.exceptions import AzureError
from azure.identity import ClientSecretCredential
from azure.mgmt.compute import ComputeManagementClient

from ..exceptions import ComputeProviderError, StartTimeoutError
from ..schemas import Target
from .interfaces import ComputeProvider

logger = logging.getLogger(__name__)


def describe_azure_error(error: Exception) -> str:
    """Short, alert-friendly description of an SDK error, keeping the error code"""
    message = getattr(error, "message", None) or str(error) or error.__class__.__name__
    code = getattr(getattr(error, "error", None), "code", None)
    if code and code not in message:
        return f"({code}) {message}"
    return message


class AzureComputeClient(ComputeProvider):
    """Azure Compute API client for a single VM"""

    def __init__(self, compute_client: ComputeManagementClient, start_timeout_seconds: int = 900):
        """
        Initialize Azure client

        Args:
            compute_client: Authenticated ComputeManagementClient
            start_timeout_seconds: Max time to wait for a start operation to finish
        """
        self.compute = compute_client
        self.start_timeout_seconds = start_timeout_seconds

    @classmethod
    def from_settings(cls, settings) -> "AzureComputeClient":
        """Build the service principal credential and SDK client from settings"""
        credential = ClientSecretCredential(
            tenant_id=settings.azure_tenant_id,
            client_id=settings.azure_client_id,
            client_secret=settings.azure_client_secret,
        )
        compute_client = ComputeManagementClient(credential, settings.azure_subscription_id)
        logger.info(f"Azure compute client initialized (subscription: {settings.azure_subscription_id})")
        return cls(compute_client, start_timeout_seconds=settings.start_timeout_seconds)

    def get_power_statuses(self, target: Target) -> List[Any]:
        """
        Read the VM instance view

        Args:
            target: VM to read

        Returns:
            Status records (``InstanceViewStatus``) as reported by Azure
        """
        try:
            instance_view = self.compute.virtual_machines.instance_view(
                target.resource_group, target.vm_name
            )
        except AzureError as e:
            raise ComputeProviderError(describe_azure_error(e), operation="instance_view") from e

        return list(instance_view.statuses or [])

    def start_vm(self, target: Target) -> None:
        """
        Start the VM and wait until Azure reports a terminal state

        Args:
            target: VM to start

        Raises:
            StartTimeoutError: the operation was still running after the timeout
            ComputeProviderError: the start was rejected or ended in failure
        """
        try:
            poller = self.compute.virtual_machines.begin_start(target.resource_group, target.vm_name)
            logger.info(f"🚀 Start command sent for {target}, waiting...")

            poller.wait(timeout=self.start_timeout_seconds)
            if not poller.done():
                raise StartTimeoutError(self.start_timeout_seconds)

            # Re-raises the failure of a finished operation
            poller.result()
        except AzureError as e:
            raise ComputeProviderError(describe_azure_error(e), operation="start") from e

        logger.info(f"Start operation for {target} finished with status {poller.status()}")
