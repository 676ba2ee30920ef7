"""Shared fixtures: a fake upstream for the token endpoint, X API and Gemini."""

import json
import typing as t
from urllib.parse import parse_qs

import httpx
import pytest

from content.generator import GeminiGenerator
from oauth.authorization import AuthorizationFlowController
from oauth.token_exchange import OAuthTokenClient
from oauth.token_refresh import TokenRefreshManager
from publisher.publisher import PostPublisher
from utils.storage import MemoryCredentialStore

TOKEN_URL = 'https://api.example.com/2/oauth2/token'
API_BASE = 'https://api.example.com/2'
GEMINI_BASE = 'https://gemini.example.com/v1beta'
REDIRECT_URI = 'http://localhost:3000/callback'


def gemini_payload(text: str) -> t.Dict[str, t.Any]:
    return {'candidates': [{'content': {'role': 'model', 'parts': [{'text': text}]}, 'finishReason': 'STOP'}]}


class FakeUpstream:
    """Routes httpx requests to canned responses and records them."""

    def __init__(self) -> None:
        self.requests: t.List[httpx.Request] = []
        self.issued = 0
        self.refresh_error: t.Optional[httpx.Response] = None
        self.exchange_response: t.Optional[httpx.Response] = None
        self.omit_refresh_token = False
        self.generated_text = 'Ship it! #techtwitter'
        self.gemini_response: t.Optional[httpx.Response] = None
        self.post_response: t.Optional[httpx.Response] = None
        self.posted: t.List[str] = []

    def calls(self, path_suffix: str) -> t.List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(path_suffix)]

    def form(self, request: httpx.Request) -> t.Dict[str, str]:
        return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}

    def _new_pair(self) -> t.Dict[str, t.Any]:
        self.issued += 1
        data = {'access_token': f'access-{self.issued}', 'token_type': 'bearer', 'expires_in': 7200}
        if not self.omit_refresh_token:
            data['refresh_token'] = f'refresh-{self.issued}'
        return data

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == TOKEN_URL:
            grant = self.form(request).get('grant_type')
            if grant == 'authorization_code' and self.exchange_response is not None:
                return self.exchange_response
            if grant == 'refresh_token' and self.refresh_error is not None:
                return self.refresh_error
            return httpx.Response(200, json=self._new_pair())

        if url.startswith(GEMINI_BASE):
            if self.gemini_response is not None:
                return self.gemini_response
            return httpx.Response(200, json=gemini_payload(self.generated_text))

        if url == f'{API_BASE}/tweets':
            if self.post_response is not None:
                return self.post_response
            text = json.loads(request.content)['text']
            self.posted.append(text)
            return httpx.Response(201, json={'data': {'id': '1850000000000000001', 'text': text}})

        if url == f'{API_BASE}/users/me':
            return httpx.Response(200, json={'data': {'id': '42', 'username': 'techbot'}})

        return httpx.Response(404, json={'error': 'not found'})


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def token_client(http_client: httpx.AsyncClient) -> OAuthTokenClient:
    return OAuthTokenClient('client-id', 'client-secret', token_url=TOKEN_URL, http_client=http_client)


@pytest.fixture
def auth_flow(store: MemoryCredentialStore, token_client: OAuthTokenClient) -> AuthorizationFlowController:
    return AuthorizationFlowController(store, token_client, redirect_uri=REDIRECT_URI)


@pytest.fixture
def refresh_manager(
    store: MemoryCredentialStore, token_client: OAuthTokenClient, http_client: httpx.AsyncClient
) -> TokenRefreshManager:
    return TokenRefreshManager(store, token_client, api_http_client=http_client, api_base=API_BASE)


@pytest.fixture
def generator(http_client: httpx.AsyncClient) -> GeminiGenerator:
    return GeminiGenerator('gemini-key', model='gemini-test', http_client=http_client, api_base=GEMINI_BASE)


@pytest.fixture
def publisher(refresh_manager: TokenRefreshManager, generator: GeminiGenerator) -> PostPublisher:
    return PostPublisher(refresh_manager, generator, prompt='Tweet something cool for #techtwitter')
