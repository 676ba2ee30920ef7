"""
BotServer class for CLI control of the FastAPI application.
"""
import logging
from typing import Optional

import uvicorn

from bootstrap import Services
from settings import PORT, LOG_LEVEL, BIND_ADDRESS
from .app import create_app

logger = logging.getLogger(__name__)


class BotServer:
    """HTTP server wrapper for CLI control"""

    def __init__(self, services: Services, bind_address: Optional[str] = None, port: Optional[int] = None):
        self.server = None
        self.config = None
        self.services = services
        self.bind_address = bind_address or BIND_ADDRESS
        self.port = port or PORT

    @property
    def base_url(self) -> str:
        return f"http://{self.bind_address}:{self.port}"

    def run(self):
        """Run the server (blocking)"""
        logger.info(f"Starting tweet bot on {self.base_url}")
        logger.info("1. Go to /auth to authenticate.")
        logger.info("2. Then go to /tweet to post a tweet.")
        self.config = uvicorn.Config(
            create_app(self.services),
            host=self.bind_address,
            port=self.port,
            log_level=LOG_LEVEL,
            access_log=False  # request middleware already logs
        )
        self.server = uvicorn.Server(self.config)
        self.server.run()

    def stop(self):
        """Stop the server"""
        if self.server:
            self.server.should_exit = True
