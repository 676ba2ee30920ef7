"""
Pydantic response models for the bot endpoints.
"""
from typing import Optional
from pydantic import BaseModel


class PostRecord(BaseModel):
    """Post as returned by the platform"""
    id: Optional[str] = None
    text: Optional[str] = None

    model_config = {"extra": "allow"}


class PostResponse(BaseModel):
    """Result of /tweet"""
    text: str
    data: PostRecord


class AuthStatusResponse(BaseModel):
    """Credential store status, never includes secrets"""
    has_pending_authorization: bool
    is_authorized: bool
    has_access_token: bool
    location: str


class HealthResponse(BaseModel):
    status: str
    timestamp: float

