"""
Tweet bot HTTP surface.

Routes for the three OAuth phases (/auth, /callback, /tweet) plus status and
health checks, served by uvicorn.
"""
from .app import create_app
from .server import BotServer

__version__ = "1.0.0"

__all__ = [
    'BotServer',
    'create_app',
]
