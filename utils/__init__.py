"""Shared utilities package for the tweet bot"""

from .storage import CredentialStore, FileCredentialStore, MemoryCredentialStore
from .logging_utils import redact, setup_logging

__all__ = [
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "redact",
    "setup_logging",
]
