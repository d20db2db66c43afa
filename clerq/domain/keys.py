"""Key and address construction for registry entries.

Every function here is pure: the local host is handed in by the caller
(either as a string or as a zero-argument callable resolved on demand).
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable

DEFAULT_PREFIX = "clerq"
DEFAULT_DELIMITER = "::"
PORT_CLAIM_SUFFIX = "/p"

# Mirrors integer parsing that stops at the first non-digit ("8000abc" -> 8000)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

LocalHost = str | Callable[[], str]


def build_key(prefix: str, delimiter: str | None = None, service: str | None = None) -> str:
    """Build the registry key for a service.

    Args:
        prefix: Key prefix shared by every entry of a registry
        delimiter: Separator between prefix and service name (defaults to ``::``)
        service: Service name; when absent the common key prefix is returned

    Returns:
        ``prefix + delimiter + service`` or ``prefix + delimiter``
    """
    key = f"{prefix}{delimiter or DEFAULT_DELIMITER}"
    if not service:
        return key
    return f"{key}{service}"


def port_claim_key(prefix: str, delimiter: str | None, host: str) -> str:
    """Build the key holding the set of ports claimed for ``host``."""
    return f"{build_key(prefix, delimiter, host)}{PORT_CLAIM_SUFFIX}"


def strip_prefix(key: str, common_prefix: str) -> str:
    """Remove the first occurrence of the common key prefix from ``key``."""
    return key.replace(common_prefix, "", 1)


def _host(local_host: LocalHost) -> str:
    return local_host() if callable(local_host) else local_host


def normalize_address(target: object, local_host: LocalHost) -> str | None:
    """Turn a registration target into a ``host:port`` address.

    Numbers and numeric strings are bound to the local host with the absolute
    port value. Strings that already contain ``:`` are taken as-is.

    Returns:
        The address, or None when the target cannot be used
    """
    if isinstance(target, bool):
        return None
    if isinstance(target, int | float):
        if isinstance(target, float) and not math.isfinite(target):
            return None
        return f"{_host(local_host)}:{abs(int(target))}"
    if isinstance(target, str):
        if ":" in target:
            return target
        match = _LEADING_INT.match(target)
        if match:
            return f"{_host(local_host)}:{abs(int(match.group(1)))}"
    return None
