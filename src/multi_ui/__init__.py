"""
multi-ui CLI - copy ready-made UI components into your project.

Usage:
    multi-ui setup
    multi-ui add <ComponentName>
"""

import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler
from typer.core import TyperGroup

from multi_ui.cli.commands import register_commands

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

USAGE = """
Usage:
  multi-ui setup                    - Set up the project (choose language and path)
  multi-ui add <ComponentName>      - Create a new component
"""

console = Console()


class UsageGroup(TyperGroup):
    """Group that answers unknown commands with the usage text instead of an error."""

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            console.print(USAGE, highlight=False)
            ctx.exit(0)
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="multi-ui",
    help="Copy multi-ui components into your project as TSX or JSX",
    add_completion=False,
    invoke_without_command=True,
    cls=UsageGroup,
)


def _version_callback(value: bool):
    if value:
        console.print(f"multi-ui {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """Print usage when no subcommand is provided."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )
    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        console.print(USAGE, highlight=False)


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
