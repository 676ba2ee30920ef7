"""
Logging setup and helpers for keeping secrets out of log output.
"""
import logging
import os
from typing import Optional

from rich.logging import RichHandler

logger = logging.getLogger(__name__)

DEBUG_LOG_FILE = "bot_debug.log"


def setup_logging(level: str = "info", debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure the root logger

    Console output goes through Rich. In debug mode everything is also
    appended to a log file.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = RichHandler(rich_tracebacks=debug, show_path=False)
    console_handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root_logger.addHandler(console_handler)

    if debug:
        log_path = os.path.abspath(log_file or DEBUG_LOG_FILE)
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(file_handler)
        logger.info(f"Debug logging enabled - appending to {log_path}")

    # httpx logs full request URLs at INFO, which include the Gemini API key
    logging.getLogger("httpx").setLevel(logging.WARNING)


def redact(secret: Optional[str], visible: int = 6) -> str:
    """Show only the first few characters of a secret"""
    if not secret:
        return "<none>"
    if len(secret) <= visible:
        return "[REDACTED]"
    return f"{secret[:visible]}...[REDACTED]"
