"""
Metrics Client Service

Pushes the VM up/down sample to Grafana (Graphite HTTP ingestion).
Delivery is best effort: a lost sample never affects VM recovery.
"""

import json
import logging
import time
from typing import Optional, Tuple

import requests

from .interfaces import MetricsSink

logger = logging.getLogger(__name__)


def build_json_payload(metric_name: str, value: int, timestamp: int, interval: int) -> Tuple[str, str]:
    """JSON array with a single sample"""
    body = json.dumps([{
        "name": metric_name,
        "value": value,
        "time": timestamp,
        "interval": interval,
    }])
    return body, "application/json"


def build_graphite_payload(metric_name: str, value: int, timestamp: int, interval: int) -> Tuple[str, str]:
    """Graphite plain line protocol: ``name value timestamp``"""
    return f"{metric_name} {value} {timestamp}", "text/plain"


PAYLOAD_BUILDERS = {
    "json": build_json_payload,
    "graphite": build_graphite_payload,
}


class MetricsClient(MetricsSink):
    """HTTP client for the metrics backend"""

    def __init__(
        self,
        uri: Optional[str],
        user: Optional[str] = None,
        token: Optional[str] = None,
        interval_seconds: int = 60,
        payload_format: str = "json",
        timeout: int = 10,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize metrics client

        Args:
            uri: Push endpoint; None or empty disables metrics
            user: Basic auth username
            token: Basic auth password (API token)
            interval_seconds: Default ``interval`` field of each sample
            payload_format: "json" or "graphite"
            timeout: Request timeout in seconds
            session: Optional pre-built requests session
        """
        self.uri = uri or None
        self.interval_seconds = interval_seconds
        self.timeout = timeout
        self.build_payload = PAYLOAD_BUILDERS.get(payload_format, build_json_payload)
        self.session = session or requests.Session()
        if user or token:
            self.session.auth = (user or "", token or "")

        if self.uri:
            logger.info(f"Metrics client initialized: {self.uri} ({payload_format})")
        else:
            logger.debug("GRAFANA_URI not set, metrics disabled")

    @property
    def enabled(self) -> bool:
        return self.uri is not None

    def push(
        self,
        metric_name: str,
        value: int,
        timestamp: Optional[int] = None,
        interval_hint: Optional[int] = None
    ) -> bool:
        """
        Push one up/down sample

        Args:
            metric_name: e.g. azure.vm.my-vm.up
            value: 1 (up) or 0 (down)
            timestamp: Unix seconds, defaults to now
            interval_hint: Seconds between samples, defaults to the poll interval

        Returns:
            True if the backend accepted the sample
        """
        if not self.enabled:
            return False

        if timestamp is None:
            timestamp = int(time.time())
        if interval_hint is None:
            interval_hint = self.interval_seconds

        body, content_type = self.build_payload(metric_name, value, timestamp, interval_hint)

        try:
            response = self.session.post(
                self.uri,
                data=body,
                headers={"Content-Type": content_type},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.error(f"Metrics push timeout: {metric_name}={value}")
            return False
        except requests.exceptions.ConnectionError:
            logger.error(f"Metrics push connection error: {metric_name}={value}")
            return False
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            logger.error(f"Metrics push HTTP error {status}: {metric_name}={value}")
            return False
        except Exception as e:
            logger.error(f"Metrics push failed: {metric_name}={value} - {e}")
            return False

        logger.debug(f"Metric pushed: {metric_name}={value} @ {timestamp}")
        return True
