"""Domain-specific exceptions for the registry."""

from __future__ import annotations


class ClerqError(Exception):
    """Base exception for all clerq errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidServiceError(ClerqError):
    """Raised when a service name is not a non-empty string."""

    code = "INVALID_SERVICE"

    def __init__(self, service: object = None):
        super().__init__(self.code, details={"service": repr(service)})
        self.service = service


class InvalidOptionsError(ClerqError):
    """Raised when registry options cannot be used to build a configuration."""

    pass


class StoreError(ClerqError):
    """Base exception for set store operations."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.key = key
        self.operation = operation
        if key:
            self.details["key"] = key
        if operation:
            self.details["operation"] = operation


class StoreNotConnectedError(StoreError):
    """Raised when a store operation is attempted after the connection was closed."""

    def __init__(self, operation: str):
        super().__init__(
            f"Set store not connected. Cannot perform '{operation}' operation.",
            operation=operation,
        )


class PortAllocationError(ClerqError):
    """Raised when no port could be found or claimed."""

    def __init__(self, message: str, host: str | None = None, start_port: int | None = None):
        super().__init__(message)
        self.host = host
        self.start_port = start_port
        if host:
            self.details["host"] = host
        if start_port is not None:
            self.details["start_port"] = start_port
