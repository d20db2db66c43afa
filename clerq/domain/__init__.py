"""Domain layer - keys, addresses and errors."""

from .exceptions import (
    ClerqError,
    InvalidOptionsError,
    InvalidServiceError,
    PortAllocationError,
    StoreError,
    StoreNotConnectedError,
)
from .keys import build_key, normalize_address, port_claim_key, strip_prefix

__all__ = [
    "ClerqError",
    "InvalidOptionsError",
    "InvalidServiceError",
    "PortAllocationError",
    "StoreError",
    "StoreNotConnectedError",
    "build_key",
    "normalize_address",
    "port_claim_key",
    "strip_prefix",
]
