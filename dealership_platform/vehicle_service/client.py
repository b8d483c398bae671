"""
HTTP client for the Auth Service's token verification endpoint.
"""
from typing import Optional
import logging

import httpx
from pydantic import ValidationError

from ..common.schemas import Identity

logger = logging.getLogger(__name__)

VERIFY_PATH = "/api/auth/verify"


class AuthServiceClient:
    """
    Verifies bearer tokens against the Auth Service.

    Makes exactly one request per call with a bounded timeout and keeps no
    cache. Every failure mode collapses to ``None``. One instance holds a
    single connection pool for the life of the service; call ``aclose`` on
    shutdown.
    """

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    async def verify(self, token: str) -> Optional[Identity]:
        try:
            response = await self._client.post(VERIFY_PATH, headers={"Authorization": f"Bearer {token}"})
        except httpx.TimeoutException:
            logger.warning("[GATE] Auth service timed out after %ss", self.timeout)
            return None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"[GATE] Auth service unreachable: {e}")
            return None

        if response.status_code != 200:
            logger.info("[GATE] Auth service rejected token: HTTP %s", response.status_code)
            return None

        try:
            return Identity.model_validate(response.json()["user"])
        except (ValueError, KeyError, TypeError, ValidationError):
            logger.warning("[GATE] Malformed verification response from auth service")
            return None
