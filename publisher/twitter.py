"""X API v2 client bound to one access token"""

import logging
from typing import Any, Dict, Optional

import httpx

from errors import BotError, SubmitFailed
from settings import API_BASE, CONNECT_TIMEOUT, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class TwitterClient:
    """Authenticated accessor returned by the token refresh manager"""

    def __init__(
        self,
        access_token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        api_base: str = API_BASE,
    ):
        self.access_token = access_token
        self.api_base = api_base.rstrip("/")
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT)
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "authorization": f"Bearer {self.access_token}",
            "content-type": "application/json",
        }

    async def create_post(self, text: str) -> Dict[str, Any]:
        """Submit a post

        Args:
            text: Sanitized post text

        Returns:
            The post record from the platform (``{"id": ..., "text": ...}``)

        Raises:
            SubmitFailed: transport error, rejection, or malformed response
        """
        try:
            response = await self._http.post(f"{self.api_base}/tweets", json={"text": text}, headers=self.headers)
        except httpx.HTTPError as e:
            logger.error(f"Post submission failed: {e}")
            raise SubmitFailed(f"Post submission failed: {e}", cause=e) from e

        if response.status_code not in (200, 201):
            logger.error(f"Post submission rejected with status {response.status_code}: {response.text}")
            raise SubmitFailed(f"Post submission rejected: {response.status_code} - {response.text}")

        data = self._data(response, SubmitFailed, "Post submission")
        logger.info(f"Post submitted: {data.get('id')}")
        return data

    async def get_me(self) -> Dict[str, Any]:
        """Look up the authorized identity"""
        try:
            response = await self._http.get(f"{self.api_base}/users/me", headers=self.headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise BotError(f"User lookup failed: {e}", cause=e) from e
        return self._data(response, BotError, "User lookup")

    @staticmethod
    def _data(response: httpx.Response, error_cls: type, what: str) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise error_cls(f"{what} returned invalid JSON", cause=e) from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise error_cls(f"{what} response did not include data: {payload}")
        return data
