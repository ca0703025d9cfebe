"""Interactive questions asked by ``multi-ui setup``."""

from __future__ import annotations

from typing import Protocol

import typer
from rich.console import Console

from multi_ui.cli.ui import select_with_arrows
from multi_ui.core.constants import DEFAULT_COMPONENT_DIR
from multi_ui.core.preferences import Language

LANGUAGE_CHOICES = {"JavaScript": "untyped .jsx files", "TypeScript": "typed .tsx files"}


class PromptProvider(Protocol):
    def ask_language(self) -> Language: ...

    def ask_directory(self, default: str = DEFAULT_COMPONENT_DIR) -> str: ...


class InteractivePromptProvider:
    """Asks the user in the terminal."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def ask_language(self) -> Language:
        choice = select_with_arrows(
            LANGUAGE_CHOICES,
            prompt_text="Choose your project language:",
            default_key="TypeScript",
            console=self.console,
        )
        self.console.print(f"[cyan]Selected language:[/cyan] {choice}")
        return Language.from_choice(choice)

    def ask_directory(self, default: str = DEFAULT_COMPONENT_DIR) -> str:
        return typer.prompt(f"Enter the directory for components (default: {default})", default=default)


__all__ = ["LANGUAGE_CHOICES", "InteractivePromptProvider", "PromptProvider"]
