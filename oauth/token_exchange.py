"""X OAuth 2.0 token endpoint calls"""

import logging
from typing import Any, Dict, Optional

import httpx

from errors import RefreshFailed, TokenExchangeFailed
from settings import CONNECT_TIMEOUT, REQUEST_TIMEOUT, TOKEN_URL
from utils.logging_utils import redact
from .models import TokenPair

logger = logging.getLogger(__name__)


class OAuthTokenClient:
    """Confidential-client access to the token endpoint

    Both grants authenticate with HTTP Basic (client id and secret). One
    instance is built at startup and shared, the underlying httpx client is
    closed with ``aclose``.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str = TOKEN_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT)
        )

    async def exchange_code(self, code: str, code_verifier: str, redirect_uri: str) -> TokenPair:
        """Exchange authorization code for tokens

        Args:
            code: Authorization code from the callback
            code_verifier: PKCE verifier stored when the link was issued
            redirect_uri: The same redirect URI the link was built with

        Returns:
            TokenPair (refresh_token may be None)

        Raises:
            TokenExchangeFailed: on transport or protocol errors
        """
        logger.info("Exchanging authorization code for tokens...")
        token_data = await self._post_token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "code_verifier": code_verifier,
                "redirect_uri": redirect_uri,
                "client_id": self.client_id,
            },
            TokenExchangeFailed,
            "Token exchange failed",
        )
        return self._parse_token_pair(token_data, TokenExchangeFailed, "Token exchange failed")

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Trade a refresh token for a new token pair

        The refresh token passed in is invalid once this returns.

        Raises:
            RefreshFailed: on transport or protocol errors
        """
        logger.info(f"Refreshing OAuth tokens with refresh token {redact(refresh_token)}")
        token_data = await self._post_token_request(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": self.client_id,
            },
            RefreshFailed,
            "Token refresh failed",
        )
        return self._parse_token_pair(token_data, RefreshFailed, "Token refresh failed")

    async def _post_token_request(self, form: Dict[str, str], error_cls: type, prefix: str) -> Dict[str, Any]:
        try:
            response = await self._http.post(
                self.token_url,
                data=form,
                auth=(self.client_id, self.client_secret),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as e:
            logger.error(f"{prefix}: {e}")
            raise error_cls(f"{prefix}: {e}", cause=e) from e

        if response.status_code != 200:
            logger.error(f"{prefix} with status {response.status_code}: {response.text}")
            raise error_cls(f"{prefix}: {response.status_code} - {response.text}")

        try:
            token_data = response.json()
        except ValueError as e:
            raise error_cls(f"{prefix}: token endpoint returned invalid JSON", cause=e) from e

        if not isinstance(token_data, dict):
            raise error_cls(f"{prefix}: unexpected token response")
        return token_data

    @staticmethod
    def _parse_token_pair(token_data: Dict[str, Any], error_cls: type, prefix: str) -> TokenPair:
        access_token = token_data.get("access_token")
        if not access_token:
            raise error_cls(f"{prefix}: response did not include an access token")

        return TokenPair(
            access_token=access_token,
            refresh_token=token_data.get("refresh_token") or None,
            expires_in=token_data.get("expires_in"),
            scope=token_data.get("scope"),
        )

    async def aclose(self) -> None:
        await self._http.aclose()


__all__ = ["OAuthTokenClient"]
