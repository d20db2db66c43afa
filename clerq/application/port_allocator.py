"""Port allocation with optional per-host reservation in the set store."""

from __future__ import annotations

from ..domain.exceptions import PortAllocationError
from ..domain.keys import port_claim_key
from ..ports.logger import LoggerPort
from ..ports.port_probe import PortProbePort
from ..ports.set_store import SetStorePort


class PortAllocator:
    """Finds free ports and claims them against a host in the shared store.

    Claims are optimistic: the store's atomic set-add reports whether the
    port was new for the host, and a port someone else already holds makes
    the search resume one port higher. No lock is taken.
    """

    def __init__(
        self,
        store: SetStorePort,
        probe: PortProbePort,
        prefix: str,
        delimiter: str,
        expire: int | None = None,
        max_attempts: int | None = None,
        logger: LoggerPort | None = None,
    ):
        """Initialize the allocator.

        Args:
            store: Set store holding the per-host claim sets
            probe: Local free-port probe
            prefix: Registry key prefix
            delimiter: Registry key delimiter
            expire: TTL in seconds refreshed on each claim key access
            max_attempts: Give up after this many conflicts (unbounded if None)
            logger: Optional logger for debugging
        """
        if max_attempts is not None and max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")

        self._store = store
        self._probe = probe
        self._prefix = prefix
        self._delimiter = delimiter
        self._expire = expire
        self._max_attempts = max_attempts
        self._logger = logger

    def claim_key(self, host: str) -> str:
        """Key of the set of ports claimed for ``host``."""
        return port_claim_key(self._prefix, self._delimiter, host)

    async def _refresh(self, key: str) -> None:
        if self._expire:
            await self._store.expire(key, self._expire)

    async def find_port(self, start_port: int | None = None, host: str | None = None) -> int:
        """Find a free port, claiming it for ``host`` when one is given.

        Without a host the probe's answer is returned as-is and the store is
        never touched.

        Raises:
            PortAllocationError: If max_attempts conflicts occurred in a row
            StoreError: If the store fails
        """
        if not host:
            return await self._probe.find_free_port(start_port)

        key = self.claim_key(host)
        start = start_port
        conflicts = 0

        while True:
            candidate = await self._probe.find_free_port(start)
            added = await self._store.add(key, str(candidate))
            await self._refresh(key)

            if added:
                if self._logger:
                    self._logger.info("Port claimed", host=host, port=candidate)
                return candidate

            conflicts += 1
            if self._logger:
                self._logger.debug("Port already claimed, retrying", host=host, port=candidate)
            if self._max_attempts is not None and conflicts >= self._max_attempts:
                raise PortAllocationError(
                    f"Could not claim a port for {host} after {conflicts} attempts",
                    host=host,
                    start_port=start_port,
                )
            start = candidate + 1

    async def release_port(self, port: int, host: str) -> int:
        """Release a claimed port.

        Returns:
            1 if the port was claimed for the host, 0 if there was nothing to release
        """
        if not host:
            raise ValueError("host is required to release a port")

        key = self.claim_key(host)
        removed = await self._store.remove(key, str(port))
        await self._refresh(key)

        if self._logger:
            self._logger.info("Port released", host=host, port=port, removed=removed)
        return removed
