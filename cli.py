"""CLI entry point - wrapper around the cli package

Allows ``python cli.py serve`` from a checkout without installing.
"""

from cli.main import main

if __name__ == "__main__":
    main()
