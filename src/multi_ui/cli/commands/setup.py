"""``multi-ui setup`` command."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from multi_ui.core.preferences import PreferenceError, PreferenceStore
from multi_ui.installer import InstallError, NpmDependencyInstaller
from multi_ui.pipeline import run_setup
from multi_ui.prompts import InteractivePromptProvider

console = Console()


def setup(
    skip_install: bool = typer.Option(
        False,
        "--skip-install",
        help="Only save preferences; do not install the Babel presets with npm",
    ),
) -> None:
    """Choose the project language and the directory components go to."""
    store = PreferenceStore()
    installer = None if skip_install else NpmDependencyInstaller()

    try:
        preference = run_setup(store, InteractivePromptProvider(console), installer)
    except InstallError as e:
        if store.exists():
            console.print(f"[yellow]Preferences saved to {escape(str(store.config_file))}[/yellow]", soft_wrap=True)
        console.print(f"[red]Setup failed:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)
    except (PreferenceError, OSError) as e:
        console.print(f"[red]Setup failed:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    console.print(
        f"[green]Setup complete![/green] Language: {preference.language.display_name}, "
        f"Components Path: {escape(preference.component_path)}",
        soft_wrap=True,
    )
