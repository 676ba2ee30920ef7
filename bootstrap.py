"""Startup wiring

Every external client is created once here and handed to the components
that need it. Missing required configuration fails before anything runs.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

import settings
from config.loader import get_config_loader
from content.generator import GeminiGenerator
from oauth.authorization import AuthorizationFlowController
from oauth.token_exchange import OAuthTokenClient
from oauth.token_refresh import TokenRefreshManager
from publisher.publisher import PostPublisher
from utils.storage import CredentialStore, FileCredentialStore

logger = logging.getLogger(__name__)

REQUIRED_VARS = [
    settings.CLIENT_ID_VAR,
    settings.CLIENT_SECRET_VAR,
    settings.GEMINI_API_KEY_VAR,
]


@dataclass
class Services:
    """Components shared across invocations"""
    store: CredentialStore
    token_client: OAuthTokenClient
    generator: GeminiGenerator
    auth_flow: AuthorizationFlowController
    refresh_manager: TokenRefreshManager
    publisher: PostPublisher
    http_client: httpx.AsyncClient

    async def aclose(self) -> None:
        await self.http_client.aclose()


def build_services(
    store: Optional[CredentialStore] = None,
    callback_url: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Services:
    """Build the component graph from configuration

    Args:
        store: Credential store to use (defaults to the token file)
        callback_url: Override for the configured redirect URI
        http_client: Shared HTTP client for all upstream calls

    Raises:
        ConfigurationError: a required variable is not set
    """
    required = get_config_loader().require(REQUIRED_VARS)

    http_client = http_client or httpx.AsyncClient(
        timeout=httpx.Timeout(settings.REQUEST_TIMEOUT, connect=settings.CONNECT_TIMEOUT)
    )
    store = store or FileCredentialStore()
    redirect_uri = callback_url or settings.CALLBACK_URL

    token_client = OAuthTokenClient(
        client_id=required[settings.CLIENT_ID_VAR],
        client_secret=required[settings.CLIENT_SECRET_VAR],
        http_client=http_client,
    )
    generator = GeminiGenerator(
        api_key=required[settings.GEMINI_API_KEY_VAR],
        model=settings.GEMINI_MODEL,
        http_client=http_client,
    )
    auth_flow = AuthorizationFlowController(store, token_client, redirect_uri=redirect_uri)
    refresh_manager = TokenRefreshManager(store, token_client, api_http_client=http_client)
    publisher = PostPublisher(refresh_manager, generator, prompt=settings.POST_PROMPT)

    logger.debug(f"Services built (store={store.location}, redirect_uri={redirect_uri})")
    return Services(
        store=store,
        token_client=token_client,
        generator=generator,
        auth_flow=auth_flow,
        refresh_manager=refresh_manager,
        publisher=publisher,
        http_client=http_client,
    )
