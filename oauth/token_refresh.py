"""OAuth token refresh with mandatory refresh-token rotation"""

import logging
from typing import Optional

import httpx

from errors import NotAuthorized, RefreshFailed
from settings import API_BASE
from publisher.twitter import TwitterClient
from utils.storage import CredentialStore
from .token_exchange import OAuthTokenClient

logger = logging.getLogger(__name__)


class TokenRefreshManager:
    """Mints a fresh access token before every authenticated call

    The authorization server invalidates a refresh token when it is used,
    so the new pair is persisted before anything else happens. Losing it
    means running the authorization flow again.
    """

    def __init__(
        self,
        store: CredentialStore,
        token_client: OAuthTokenClient,
        api_http_client: Optional[httpx.AsyncClient] = None,
        api_base: str = API_BASE,
    ):
        self.store = store
        self.token_client = token_client
        self.api_http_client = api_http_client
        self.api_base = api_base

    async def ensure_fresh_token(self) -> TwitterClient:
        """Refresh the token pair and return a client bound to the new access token

        Raises:
            NotAuthorized: no refresh token stored
            RefreshFailed: the refresh grant failed or did not rotate the token
            StorageError: the new pair could not be persisted
        """
        refresh_token = self.store.get("refresh_token")
        if not refresh_token:
            logger.error("No refresh token found in credential store")
            raise NotAuthorized("Not authenticated. Go to /auth first.")

        tokens = await self.token_client.refresh(refresh_token)

        if not tokens.refresh_token:
            raise RefreshFailed("Token refresh response did not include a new refresh token")

        self.store.merge(tokens.to_record())
        logger.info("Successfully refreshed OAuth tokens")

        return TwitterClient(tokens.access_token, http_client=self.api_http_client, api_base=self.api_base)
