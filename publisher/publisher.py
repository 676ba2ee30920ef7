"""Post publishing orchestration"""

import logging
from typing import TYPE_CHECKING, Callable

from content.sanitize import sanitize as default_sanitize
from .models import GeneratedPost, PostResult

if TYPE_CHECKING:
    from content.generator import GeminiGenerator
    from oauth.token_refresh import TokenRefreshManager

logger = logging.getLogger(__name__)


class PostPublisher:
    """refresh token -> generate -> sanitize -> submit

    Holds no state of its own. Any failure propagates unchanged and nothing
    reaches the platform before the final submit.
    """

    def __init__(
        self,
        refresh_manager: "TokenRefreshManager",
        generator: "GeminiGenerator",
        prompt: str,
        sanitizer: Callable[[str], str] = default_sanitize,
    ):
        self.refresh_manager = refresh_manager
        self.generator = generator
        self.prompt = prompt
        self.sanitizer = sanitizer

    async def compose(self) -> GeneratedPost:
        raw = await self.generator.generate(self.prompt)
        return GeneratedPost(raw=raw, sanitized=self.sanitizer(raw))

    async def publish(self) -> PostResult:
        client = await self.refresh_manager.ensure_fresh_token()

        post = await self.compose()
        logger.info(f"Final post to publish ({len(post.sanitized)} chars): {post.sanitized}")

        data = await client.create_post(post.sanitized)
        return PostResult(text=post.sanitized, data=data)
