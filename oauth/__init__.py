"""X OAuth 2.0 (authorization code + PKCE) package"""

from .models import AuthSession, PKCEPair, TokenPair
from .pkce import compute_challenge, create_state, generate_pkce
from .token_exchange import OAuthTokenClient
from .authorization import AuthorizationFlowController
from .token_refresh import TokenRefreshManager

__all__ = [
    "AuthSession",
    "PKCEPair",
    "TokenPair",
    "compute_challenge",
    "create_state",
    "generate_pkce",
    "OAuthTokenClient",
    "AuthorizationFlowController",
    "TokenRefreshManager",
]
