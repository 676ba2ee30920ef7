"""Scheduled (non-interactive) post form for cron jobs and CI runners"""

import asyncio
import logging
import os
from typing import Optional

import settings
from bootstrap import build_services
from config.loader import get_config_loader
from errors import BotError
from publisher.models import PostResult
from utils.storage import CredentialStore, MemoryCredentialStore

logger = logging.getLogger(__name__)


def write_github_output(name: str, value: str, output_file: Optional[str] = None) -> bool:
    """Append ``name=value`` to the GitHub Actions step output file

    Returns:
        False when not running under GitHub Actions
    """
    output_file = output_file or os.getenv("GITHUB_OUTPUT")
    if not output_file:
        return False
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
    return True


async def publish_once(store: CredentialStore) -> PostResult:
    """Publish one post with credentials from ``store``

    The store keeps any rotated refresh token even when a later step fails.
    """
    services = build_services(store=store)
    try:
        return await services.publisher.publish()
    finally:
        await services.aclose()


def report_rotated_token(console, provisioned: str, store: CredentialStore) -> None:
    """Hand a rotated refresh token back to whoever provisioned the old one

    Once a refresh succeeded the provisioned token is dead, so this runs on
    failure as well as on success.
    """
    new_refresh_token = store.get("refresh_token")
    if not new_refresh_token or new_refresh_token == provisioned:
        return
    if write_github_output("new_refresh_token", new_refresh_token):
        console.print("[dim]New refresh token written to GITHUB_OUTPUT[/dim]")
    else:
        console.print("[yellow]New refresh token (update TWITTER_REFRESH_TOKEN):[/yellow]")
        console.print(new_refresh_token, markup=False)


def run_scheduled_post(console, debug: bool = False) -> int:
    """
    Refresh, generate and post once

    Args:
        console: Rich console for output
        debug: Whether debug mode is enabled

    Returns:
        Process exit code (0 on success, 1 on any failure)
    """
    try:
        refresh_token = get_config_loader().require([settings.REFRESH_TOKEN_VAR])[settings.REFRESH_TOKEN_VAR]
    except BotError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        return 1

    store = MemoryCredentialStore({"refresh_token": refresh_token})
    try:
        result = asyncio.run(publish_once(store))
    except BotError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        logger.debug("Scheduled post failed", exc_info=debug)
        return 1
    finally:
        report_rotated_token(console, refresh_token, store)

    console.print(f"[green]✓ Tweet posted:[/green] {result.text}")
    console.print(f"  id: {result.post_id}  length: {len(result.text)}")
    return 0
