# sysloggen/exceptions.py
"""Errors raised before dispatch starts."""


class SyslogGenError(Exception):
    """Base class for fatal generator errors."""


class ConfigurationError(SyslogGenError):
    """Invalid or conflicting settings."""


class ResourceUnavailable(SyslogGenError):
    """An input file could not be opened."""

    def __init__(self, kind: str, path: str, reason: str = ""):
        self.kind = kind
        self.path = path
        message = f"Could not open {kind} file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidAddress(SyslogGenError):
    """An address is not a valid IPv4 address."""

    def __init__(self, address: str, role: str = "destination"):
        self.address = address
        self.role = role
        super().__init__(f"Invalid {role} IP address: {address}")
