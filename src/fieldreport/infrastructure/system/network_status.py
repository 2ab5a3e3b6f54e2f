"""Device network status backed by name resolution."""

from __future__ import annotations

import asyncio
import logging
import socket

logger = logging.getLogger(__name__)


class DnsNetworkStatus:
    """Reports internet access by resolving a well-known host.

    A successful lookup of the mirror host is taken as "online". Nothing
    is sent to the host itself.
    """

    def __init__(self, host: str, port: int = 443, timeout: float = 3.0):
        self._host = host
        self._port = port
        self._timeout = timeout

    async def has_internet(self) -> bool:
        loop = asyncio.get_running_loop()
        try:
            addresses = await asyncio.wait_for(
                loop.getaddrinfo(self._host, self._port, type=socket.SOCK_STREAM),
                timeout=self._timeout,
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug("Could not resolve %s: %s", self._host, e)
            return False
        return bool(addresses)


class StaticNetworkStatus:
    """Fixed answer. Used for offline mode and in tests."""

    def __init__(self, online: bool = True):
        self.online = online

    async def has_internet(self) -> bool:
        return self.online
