from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from ..core.constants import DEFAULT_IP_LOOKUP_URL
from ..core.exceptions import NetworkError

logger = logging.getLogger(__name__)


class PublicIpLookup(Protocol):
    async def get_public_ip(self) -> str:
        raise NotImplementedError


class HttpxPublicIpLookup:
    """Fetch the caller's public IP from a ``{"ip": "..."}`` JSON endpoint."""

    def __init__(
        self,
        url: str = DEFAULT_IP_LOOKUP_URL,
        *,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def get_public_ip(self) -> str:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Public IP lookup failed: %s", exc)
            raise NetworkError("Could not determine public IP address") from exc
        except ValueError as exc:
            raise NetworkError("Public IP lookup returned an invalid response") from exc

        ip = data.get("ip") if isinstance(data, dict) else None
        if not isinstance(ip, str) or not ip.strip():
            raise NetworkError("Public IP lookup returned no address")
        return ip.strip()
