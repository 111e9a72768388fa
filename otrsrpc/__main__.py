"""Entry point for ``python -m otrsrpc``."""

from otrsrpc.cli.commands import app

if __name__ == "__main__":
    app()
