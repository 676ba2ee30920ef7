"""Data models for the X OAuth 2.0 flow"""

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional


class PKCEPair(NamedTuple):
    """PKCE code verifier and challenge pair"""
    verifier: str
    challenge: str


@dataclass
class AuthSession:
    """Pending authorization, created when a link is issued

    Attributes:
        code_verifier: PKCE verifier, kept local and sent only to the token endpoint
        state: Anti-forgery nonce echoed back on the callback
    """
    code_verifier: str
    state: str

    def to_record(self) -> Dict[str, Any]:
        return {"code_verifier": self.code_verifier, "state": self.state}

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> Optional["AuthSession"]:
        code_verifier = record.get("code_verifier")
        state = record.get("state")
        if not code_verifier or not state:
            return None
        return cls(code_verifier=code_verifier, state=state)


@dataclass
class TokenPair:
    """Token endpoint response

    Attributes:
        access_token: Short-lived bearer token for API calls
        refresh_token: Single-use token for minting the next pair (None when
            the server did not grant offline access)
        expires_in: Access token lifetime in seconds, if reported
        scope: Granted scopes, if reported
    """
    access_token: str
    refresh_token: Optional[str]
    expires_in: Optional[int] = None
    scope: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        """Fields persisted to the credential store"""
        return {"access_token": self.access_token, "refresh_token": self.refresh_token}
