"""Exceptions raised by interface resolution and counter sampling."""

class MonitorError(Exception):
    """Base exception for bandwidth monitoring."""
    pass

class ResolutionError(MonitorError):
    """The interface token could not be resolved to an ifIndex."""
    def __init__(self, message: str, token: str = None):
        super().__init__(message)
        self.token = token

class InterfaceNotFoundError(ResolutionError):
    """No interface name matched the token."""
    def __init__(self, token: str):
        super().__init__(f"interface '{token}' not found", token)

class SamplingError(MonitorError):
    """A counter request failed; the tick produced nothing."""
    pass

class UtilizationConfigError(MonitorError, ValueError):
    """Zero/negative link speed or sampling interval."""
    pass
