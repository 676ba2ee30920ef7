"""CLI package for the tweet bot

Subcommands: ``serve`` runs the HTTP surface, ``post`` publishes once for a
scheduler, ``status`` shows what the credential store holds.
"""

from cli.main import main

__all__ = [
    "main",
]
