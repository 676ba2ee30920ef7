"""OAuth 2.0 authorization-code flow with PKCE

Two steps of the three-phase flow live here: issuing the consent link and
handling the redirect back from the authorization server. The third phase
(refresh) is in ``token_refresh``.
"""

import logging
import webbrowser
from typing import List, Optional
from urllib.parse import urlencode

from errors import MissingParameter, NoPendingAuthorization, NoRefreshTokenIssued, StateMismatch
from settings import AUTHORIZE_URL, SCOPES
from utils.storage import CredentialStore
from .models import AuthSession, TokenPair
from .pkce import create_state, generate_pkce
from .token_exchange import OAuthTokenClient

logger = logging.getLogger(__name__)


class AuthorizationFlowController:
    """Drives NotStarted -> LinkIssued -> Authorized

    Only one authorization can be pending at a time: issuing a new link
    overwrites the stored verifier and state of any earlier one.
    """

    def __init__(
        self,
        store: CredentialStore,
        token_client: OAuthTokenClient,
        redirect_uri: str,
        scopes: Optional[List[str]] = None,
        authorize_url: str = AUTHORIZE_URL,
    ):
        self.store = store
        self.token_client = token_client
        self.redirect_uri = redirect_uri
        self.scopes = scopes or list(SCOPES)
        self.authorize_url = authorize_url

    def issue_link(self) -> str:
        """Construct the consent URL and remember the PKCE verifier and state

        Returns:
            Full authorization URL to redirect the user to
        """
        pkce = generate_pkce()
        state = create_state()

        self.store.merge(AuthSession(code_verifier=pkce.verifier, state=state).to_record())

        params = {
            "response_type": "code",
            "client_id": self.token_client.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(self.scopes),
            "state": state,
            "code_challenge": pkce.challenge,
            "code_challenge_method": "S256",
        }

        logger.info("Issued authorization link")
        return f"{self.authorize_url}?{urlencode(params)}"

    def start_login_flow(self) -> str:
        """Issue a link and open it in the default browser

        Returns:
            Authorization URL that was opened
        """
        auth_url = self.issue_link()
        webbrowser.open(auth_url)
        return auth_url

    async def handle_callback(self, state: Optional[str], code: Optional[str]) -> TokenPair:
        """Complete the flow with the parameters of the redirect

        Args:
            state: ``state`` query parameter from the redirect
            code: ``code`` query parameter from the redirect

        Returns:
            The stored token pair

        Raises:
            MissingParameter: state or code absent
            NoPendingAuthorization: no link was issued
            StateMismatch: state differs from the one issued
            TokenExchangeFailed: the token endpoint call failed
            NoRefreshTokenIssued: offline access was not granted
        """
        if not state or not code:
            logger.error("Missing state or code in callback")
            raise MissingParameter(
                "Missing state or code in callback. Please restart the authentication flow."
            )

        session = AuthSession.from_record(self.store.read())
        if session is None:
            logger.error("No verifier/state stored")
            raise NoPendingAuthorization("No verifier/state stored. Start with /auth.")

        if state != session.state:
            logger.error("State mismatch on callback")
            raise StateMismatch("State mismatch. Restart from /auth.")

        tokens = await self.token_client.exchange_code(
            code=code,
            code_verifier=session.code_verifier,
            redirect_uri=self.redirect_uri,
        )

        if not tokens.refresh_token:
            logger.error("No refresh token received; was offline.access granted?")
            raise NoRefreshTokenIssued("No refresh token received from the authorization server.")

        self.store.merge(tokens.to_record())
        logger.info("Authentication complete, tokens stored")
        return tokens
