"""
OAuth endpoints: consent redirect, callback, and status.
"""
import html
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from bootstrap import Services
from errors import BotError
from publisher.twitter import TwitterClient
from ..dependencies import get_services
from ..models import AuthStatusResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/auth")
async def auth(services: Services = Depends(get_services)):
    """Step 1: redirect to the consent page"""
    try:
        url = services.auth_flow.issue_link()
    except BotError as e:
        raise HTTPException(status_code=e.status_code, detail=f"Error generating auth link: {e.message}")
    return RedirectResponse(url, status_code=302)


@router.get("/callback")
async def callback(
    state: Optional[str] = None,
    code: Optional[str] = None,
    services: Services = Depends(get_services),
):
    """Step 2: verify state and exchange the code for tokens"""
    logger.info("Callback hit")
    try:
        tokens = await services.auth_flow.handle_callback(state, code)
    except BotError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    identity = ""
    try:
        client = TwitterClient(
            tokens.access_token,
            http_client=services.http_client,
            api_base=services.refresh_manager.api_base,
        )
        me = await client.get_me()
        identity = f" as @{html.escape(str(me.get('username', me.get('id', ''))))}"
    except BotError as e:
        logger.warning(f"Authorized, but identity lookup failed: {e}")

    return HTMLResponse(f'Authenticated{identity}! You can now <a href="/tweet">/tweet</a>')


@router.get("/auth/status", response_model=AuthStatusResponse)
async def auth_status(services: Services = Depends(get_services)):
    """Get credential store status without exposing secrets"""
    try:
        return services.store.status()
    except BotError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
