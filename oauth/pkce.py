"""PKCE (Proof Key for Code Exchange) and state generation"""

import base64
import hashlib
import secrets

from .models import PKCEPair


def generate_pkce() -> PKCEPair:
    """
    Generate PKCE code verifier and challenge.

    RFC 7636 PKCE standard:
    - Verifier: 43-128 characters, base64url encoded (32 bytes -> 43 chars)
    - Challenge: SHA-256 hash of verifier, base64url encoded

    Returns:
        PKCEPair: Tuple of (verifier, challenge)
    """
    verifier = secrets.token_urlsafe(32)
    return PKCEPair(verifier=verifier, challenge=compute_challenge(verifier))


def compute_challenge(verifier: str) -> str:
    """S256 code challenge for a verifier"""
    challenge_bytes = hashlib.sha256(verifier.encode('utf-8')).digest()
    return base64.urlsafe_b64encode(challenge_bytes).decode('utf-8').rstrip('=')


def create_state() -> str:
    """
    Generate random state parameter for CSRF protection.

    Returns:
        str: 32-byte random state string
    """
    return secrets.token_urlsafe(32)
