"""Error taxonomy for the bot

Every error carries the HTTP status the web surface reports it with. The
scheduled CLI form maps any of them to exit code 1.
"""

from typing import Optional


class BotError(Exception):
    """Base class for all bot errors"""

    status_code = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(BotError):
    """Required configuration is missing or invalid"""


class StorageError(BotError):
    """The credential store could not be read or written"""


# Client-facing, invocation aborted with no state mutated
class MissingParameter(BotError):
    status_code = 400


class NoPendingAuthorization(BotError):
    status_code = 400


class StateMismatch(BotError):
    status_code = 400


class NotAuthorized(BotError):
    status_code = 400


# Upstream authorization server failures
class TokenExchangeFailed(BotError):
    pass


class NoRefreshTokenIssued(BotError):
    pass


class RefreshFailed(BotError):
    pass


# Content pipeline failures
class GenerationFailed(BotError):
    pass


class EmptyContent(BotError):
    pass


class SubmitFailed(BotError):
    pass


__all__ = [
    "BotError",
    "ConfigurationError",
    "StorageError",
    "MissingParameter",
    "NoPendingAuthorization",
    "StateMismatch",
    "NotAuthorized",
    "TokenExchangeFailed",
    "NoRefreshTokenIssued",
    "RefreshFailed",
    "GenerationFailed",
    "EmptyContent",
    "SubmitFailed",
]
