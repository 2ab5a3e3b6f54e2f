"""Network status port. Reports whether the device is online."""

from typing import Protocol


class NetworkStatus(Protocol):
    """Device capability: is there a network route with internet access?"""

    async def has_internet(self) -> bool:
        """True when the device reports internet connectivity."""
        ...
