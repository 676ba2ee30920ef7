"""
Post endpoint: refresh tokens, generate, sanitize and submit one post.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from bootstrap import Services
from errors import BotError
from ..dependencies import get_services
from ..models import PostResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.api_route("/tweet", methods=["GET", "POST"], response_model=PostResponse)
async def tweet(services: Services = Depends(get_services)):
    """Step 3: publish a generated post"""
    try:
        result = await services.publisher.publish()
    except BotError as e:
        logger.error(f"Tweet error: {e}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    logger.info(f"Tweet posted successfully: {result.post_id}")
    return result.to_dict()
