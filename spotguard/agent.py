#!/usr/bin/env python3
"""
spotguard agent entry point

Wires settings, adapters and the core together and runs the control loop
until the process receives SIGINT or SIGTERM.
"""

import functools
import logging
import signal
import sys
from typing import Optional

from dotenv import load_dotenv

from . import __version__
from .config import Settings, get_settings, setup_logging
from .exceptions import ConfigurationError
from .schemas import Target
from .services import (
    AlertClient,
    AzureComputeClient,
    ComputeProvider,
    ControlLoop,
    DecisionEngine,
    MetricsClient,
    RecoveryActor,
)

logger = logging.getLogger(__name__)


class SpotGuardAgent:
    """Watchdog for one Spot VM"""

    def __init__(self, settings: Settings, compute: Optional[ComputeProvider] = None):
        """
        Initialize agent

        Args:
            settings: Loaded settings
            compute: Compute provider; built from settings when omitted

        Raises:
            ConfigurationError: required settings are missing
        """
        missing = settings.missing_required()
        if missing:
            raise ConfigurationError(missing)

        self.settings = settings
        self.target = Target(
            resource_group=settings.azure_resource_group,
            vm_name=settings.azure_vm_name,
        )

        self.compute = compute or AzureComputeClient.from_settings(settings)
        self.metrics = MetricsClient(
            settings.grafana_uri,
            user=settings.grafana_user,
            token=settings.grafana_token,
            interval_seconds=settings.check_interval_seconds,
            payload_format=settings.metrics_format,
            timeout=settings.http_timeout_seconds,
        )
        self.alerts = AlertClient(
            settings.teams_webhook_url,
            card_format=settings.alert_format,
            timeout=settings.http_timeout_seconds,
        )
        self.recovery = RecoveryActor(self.compute, self.metrics, self.alerts)
        self.engine = DecisionEngine(self.compute, self.metrics, self.recovery)
        self.loop = ControlLoop(
            functools.partial(self.engine.check_and_act, self.target),
            settings.check_interval_seconds,
        )

    def start(self, max_cycles: Optional[int] = None):
        """Run the control loop (blocking)"""
        logger.info("🤖 Spot Bot Initialized.")
        logger.info(f"🎯 Target: VM '{self.target.vm_name}' in '{self.target.resource_group}'")
        logger.info(f"⏱️ Frequency: Every {self.settings.check_interval_seconds} seconds")
        logger.info(f"  Metrics: {'enabled' if self.metrics.enabled else 'disabled'}")
        logger.info(f"  Alerts: {'enabled' if self.alerts.enabled else 'disabled'}")

        self.loop.run(max_cycles=max_cycles)

    def stop(self):
        self.loop.stop()

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals"""
        logger.info(f"Received signal {signum}, shutting down...")
        self.stop()

    def install_signal_handlers(self):
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)


def main():
    """Main entry point"""
    load_dotenv()
    settings = get_settings()
    setup_logging("spotguard", settings.log_level, settings.log_format, settings.log_file)

    logger.info("=" * 80)
    logger.info(f"spotguard v{__version__}")
    logger.info("=" * 80)

    if not settings.validate_required():
        logger.error("Configuration validation failed!")
        sys.exit(1)

    agent = SpotGuardAgent(settings)
    agent.install_signal_handlers()
    agent.start()


if __name__ == '__main__':
    main()
