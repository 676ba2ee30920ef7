"""Post publishing: platform client and orchestration"""

from .models import GeneratedPost, PostResult
from .twitter import TwitterClient
from .publisher import PostPublisher

__all__ = [
    "GeneratedPost",
    "PostResult",
    "TwitterClient",
    "PostPublisher",
]
