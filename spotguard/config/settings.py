"""
Settings for the spotguard agent

Pydantic settings read once from the environment (and an optional .env file).
"""

import logging
import threading
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CHECK_INTERVAL_SECONDS = 60
DEFAULT_START_TIMEOUT_SECONDS = 900

METRICS_FORMATS = ("json", "graphite")
ALERT_FORMATS = ("adaptive", "messagecard")


def _positive_int(value, default: int, name: str) -> int:
    """Coerce a raw setting to a positive integer, falling back to default"""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Invalid {name}={value!r}, using default {default}")
        return default
    if number <= 0:
        logger.warning(f"Non-positive {name}={value!r}, using default {default}")
        return default
    # Event.wait rejects timeouts above TIMEOUT_MAX
    if number > threading.TIMEOUT_MAX:
        logger.warning(f"Too large {name}={value!r}, using default {default}")
        return default
    return number


class Settings(BaseSettings):
    """
    Agent settings

    Field names match the environment variables case-insensitively,
    e.g. ``azure_vm_name`` is read from ``AZURE_VM_NAME``.
    """

    # Target
    azure_resource_group: Optional[str] = Field(None, description="Resource group of the monitored VM")
    azure_vm_name: Optional[str] = Field(None, description="Name of the monitored VM")

    # Azure credentials
    azure_subscription_id: Optional[str] = Field(None, description="Azure subscription ID")
    azure_tenant_id: Optional[str] = Field(None, description="Service principal tenant ID")
    azure_client_id: Optional[str] = Field(None, description="Service principal client ID")
    azure_client_secret: Optional[str] = Field(None, description="Service principal secret")

    # Timing
    check_interval_seconds: int = Field(DEFAULT_CHECK_INTERVAL_SECONDS, description="Seconds between two checks")
    start_timeout_seconds: int = Field(DEFAULT_START_TIMEOUT_SECONDS, description="Max seconds to wait for a VM start")
    http_timeout_seconds: int = Field(10, description="Timeout for metrics and alert pushes")

    # Metrics (Grafana)
    grafana_uri: Optional[str] = Field(None, description="Metrics push endpoint (None disables metrics)")
    grafana_user: Optional[str] = Field(None, description="Metrics basic auth user")
    grafana_token: Optional[str] = Field(None, description="Metrics basic auth token")
    metrics_format: str = Field("json", description="Metrics payload format (json, graphite)")

    # Alerts (Teams)
    teams_webhook_url: Optional[str] = Field(None, description="Alert webhook URL (None disables alerts)")
    alert_format: str = Field("adaptive", description="Alert payload format (adaptive, messagecard)")

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("json", description="Log format (json, text)")
    log_file: Optional[str] = Field(None, description="Log file path (None for stdout only)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("check_interval_seconds", mode="before")
    @classmethod
    def _coerce_interval(cls, value):
        return _positive_int(value, DEFAULT_CHECK_INTERVAL_SECONDS, "CHECK_INTERVAL_SECONDS")

    @field_validator("start_timeout_seconds", mode="before")
    @classmethod
    def _coerce_start_timeout(cls, value):
        return _positive_int(value, DEFAULT_START_TIMEOUT_SECONDS, "START_TIMEOUT_SECONDS")

    @field_validator("http_timeout_seconds", mode="before")
    @classmethod
    def _coerce_http_timeout(cls, value):
        return _positive_int(value, 10, "HTTP_TIMEOUT_SECONDS")

    @field_validator("metrics_format", mode="before")
    @classmethod
    def _check_metrics_format(cls, value):
        value = (value or "json").strip().lower()
        if value not in METRICS_FORMATS:
            logger.warning(f"Unknown METRICS_FORMAT={value!r}, using json")
            return "json"
        return value

    @field_validator("alert_format", mode="before")
    @classmethod
    def _check_alert_format(cls, value):
        value = (value or "adaptive").strip().lower()
        if value not in ALERT_FORMATS:
            logger.warning(f"Unknown ALERT_FORMAT={value!r}, using adaptive")
            return "adaptive"
        return value

    def missing_required(self) -> List[str]:
        """Names of required environment variables that are unset or empty"""
        required = {
            "AZURE_RESOURCE_GROUP": self.azure_resource_group,
            "AZURE_VM_NAME": self.azure_vm_name,
            "AZURE_SUBSCRIPTION_ID": self.azure_subscription_id,
            "AZURE_TENANT_ID": self.azure_tenant_id,
            "AZURE_CLIENT_ID": self.azure_client_id,
            "AZURE_CLIENT_SECRET": self.azure_client_secret,
        }
        return [name for name, value in required.items() if not (value and value.strip())]

    def validate_required(self) -> bool:
        """Validate required configuration"""
        missing = self.missing_required()
        for name in missing:
            logger.error(f"{name} not set!")
        return not missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get global settings instance (cached)

    Returns:
        Settings instance
    """
    return Settings()
