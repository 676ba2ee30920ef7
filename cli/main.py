"""CLI entry point and argument parsing"""

import sys
import argparse
import threading
import webbrowser
from rich.console import Console

import settings
from bootstrap import build_services
from errors import BotError, ConfigurationError
from server import BotServer
from utils.logging_utils import setup_logging
from utils.storage import FileCredentialStore
from cli.headless import run_scheduled_post
from cli.status_display import show_token_status


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gemini-powered tweet bot")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP server (/auth, /callback, /tweet)")
    serve.add_argument("--bind", "-b", default=None, help="Override bind address (default: from config)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Override port (default: from config)")
    serve.add_argument(
        "--open-browser",
        action="store_true",
        help="Open /auth in the default browser once the server is starting"
    )

    subparsers.add_parser(
        "post",
        help="Post once using TWITTER_REFRESH_TOKEN (for schedulers); exits non-zero on failure"
    )
    subparsers.add_parser("status", help="Show stored credential status")

    return parser


def serve(args) -> int:
    try:
        services = build_services()
    except ConfigurationError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        return 1

    server = BotServer(services, bind_address=args.bind, port=args.port)
    console.print(f"[bold]Tweet bot running at[/bold] {server.base_url}")
    console.print("1. Go to /auth to authenticate.")
    console.print("2. Then go to /tweet to post a tweet.")

    if args.open_browser or settings.OPEN_BROWSER:
        threading.Timer(1.0, webbrowser.open, args=(f"{server.base_url}/auth",)).start()

    server.run()
    return 0


def status(args) -> int:
    try:
        show_token_status(FileCredentialStore(), console)
    except BotError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        return 1
    return 0


def main(argv=None):
    """Entry point for the CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(settings.LOG_LEVEL, debug=args.debug)

    try:
        if args.command == "serve":
            code = serve(args)
        elif args.command == "post":
            code = run_scheduled_post(console, debug=args.debug)
        elif args.command == "status":
            code = status(args)
        else:
            parser.print_help()
            code = 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        code = 130

    sys.exit(code)


if __name__ == "__main__":
    main()
