"""HTTP client for the remote incident mirror."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from fieldreport.application.ports import MirrorPostResult
from fieldreport.infrastructure.integration.mirror.payloads import (
    RemoteIncidentPayload,
    RemotePost,
)

if TYPE_CHECKING:
    from fieldreport.application.ports import NetworkStatus
    from fieldreport.domain.incident import Incident

logger = logging.getLogger(__name__)


class RemoteMirrorClient:
    """HTTP client wrapper for the mirror endpoint.

    Never raises for network or protocol problems: every call answers
    False, an empty list or a failed ``MirrorPostResult`` instead and logs
    a warning.
    """

    def __init__(  # NOQA: PLR0913
        self,
        base_url: str,
        network_status: Optional[NetworkStatus] = None,
        timeout: float = 30.0,
        probe_path: str = "/posts/1",
        collection_path: str = "/posts",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._network_status = network_status
        self._timeout = timeout
        self._probe_path = probe_path
        self._collection_path = collection_path.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> RemoteMirrorClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Connectivity
    # -------------------------------------------------------------------------

    async def check_connectivity(self) -> bool:
        """True if the device is online and the probe resource answers 2xx."""
        try:
            if self._network_status is not None:
                if not await self._network_status.has_internet():
                    logger.debug("Device reports no internet access")
                    return False
            client = await self._get_client()
            response = await client.get(self._probe_path)
            return response.is_success
        except Exception as e:
            logger.warning("Mirror connectivity check failed: %s", e)
            return False

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    async def fetch_remote_incidents(self) -> list[RemotePost]:
        """List everything the endpoint currently holds."""
        if self._network_status is not None and not await self._network_status.has_internet():
            return []
        try:
            client = await self._get_client()
            response = await client.get(self._collection_path)
            response.raise_for_status()
            return [RemotePost.model_validate(item) for item in response.json()]
        except httpx.HTTPError as e:
            logger.warning("Could not fetch remote incidents: %s", e)
            return []
        except (ValueError, TypeError, PydanticValidationError) as e:
            logger.warning("Mirror returned an unreadable post list: %s", e)
            return []

    async def post_incident(self, incident: Incident) -> MirrorPostResult:
        """Create the incident remotely.

        Returns
        -------
        MirrorPostResult with the id the endpoint assigned, or a failed
        result when offline, on HTTP errors or when no id comes back
        """
        if not await self.check_connectivity():
            return MirrorPostResult.failed()

        payload = RemoteIncidentPayload.from_incident(incident)
        try:
            client = await self._get_client()
            response = await client.post(
                self._collection_path,
                content=payload.to_json(),
            )
            response.raise_for_status()
            created = RemotePost.model_validate(response.json())
        except httpx.ConnectError as e:
            logger.warning("Mirror connection failed: %s", e)
            return MirrorPostResult.failed()
        except httpx.TimeoutException as e:
            logger.warning("Mirror timeout: %s", e)
            return MirrorPostResult.failed()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Mirror returned error %d: %s",
                e.response.status_code,
                e.response.text[:200] if e.response.text else "no body",
            )
            return MirrorPostResult.failed()
        except Exception as e:
            logger.warning(
                "Posting incident %s failed (%s): %s",
                incident.id,
                type(e).__name__,
                e,
            )
            return MirrorPostResult.failed()

        logger.info("Incident %s mirrored as remote %s", incident.id, created.id)
        return MirrorPostResult(success=True, remote_id=created.id)

    async def update_incident(self, incident: Incident) -> bool:
        """Replace the remote copy of an already mirrored incident."""
        if incident.remote_id is None:
            logger.debug("Incident %s has no remote id, skipping update", incident.id)
            return False
        if not await self.check_connectivity():
            return False

        payload = RemoteIncidentPayload.from_incident(incident, include_remote_id=True)
        try:
            client = await self._get_client()
            response = await client.put(
                f"{self._collection_path}/{incident.remote_id}",
                content=payload.to_json(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Mirror rejected update of remote %s with %d",
                incident.remote_id,
                e.response.status_code,
            )
            return False
        except httpx.HTTPError as e:
            logger.warning("Updating remote %s failed: %s", incident.remote_id, e)
            return False
        return True
