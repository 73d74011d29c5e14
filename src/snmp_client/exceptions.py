"""Custom exceptions for the SNMP client."""

class SnmpError(Exception):
    """Base exception for SNMP operations."""
    pass

class TransportError(SnmpError):
    """No usable response from the agent (timeout, unreachable, engine error)."""
    pass

class ProtocolError(SnmpError):
    """Agent answered with a non-zero error-status."""
    def __init__(self, error_status: str, error_index: int = 0, oid: str = None):
        super().__init__(f"Failed - {error_status}({error_index})")
        self.error_status = error_status
        self.error_index = error_index
        self.oid = oid

class ConfigurationError(SnmpError):
    """Session parameters are invalid."""
    pass
