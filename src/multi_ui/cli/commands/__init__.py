"""Command implementations registered on the multi-ui Typer app."""

import typer

from .add import add
from .setup import setup


def register_commands(app: typer.Typer) -> None:
    app.command()(setup)
    app.command()(add)


__all__ = ["add", "register_commands", "setup"]
