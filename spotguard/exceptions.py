"""
Exceptions raised by spotguard
"""


class SpotGuardError(Exception):
    """Base class for spotguard errors"""


class ConfigurationError(SpotGuardError):
    """Required settings are missing; fatal at startup"""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required settings: {', '.join(self.missing)}")


class ComputeProviderError(SpotGuardError):
    """A call to the cloud compute API failed"""

    def __init__(self, message: str, operation: str = None):
        self.operation = operation
        super().__init__(message)


class StartTimeoutError(ComputeProviderError):
    """The VM start operation did not finish in time"""

    def __init__(self, timeout_seconds: int, operation: str = "start"):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"VM start did not complete within {timeout_seconds} seconds",
            operation=operation,
        )
