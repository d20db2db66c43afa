"""Ports layer - Interfaces for external collaborators."""

from .address_resolver import AddressResolverPort
from .clock import ClockPort
from .logger import LoggerPort
from .port_probe import PortProbePort
from .set_store import SetStorePort

__all__ = [
    "AddressResolverPort",
    "ClockPort",
    "LoggerPort",
    "PortProbePort",
    "SetStorePort",
]
