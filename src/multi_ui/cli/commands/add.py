"""``multi-ui add`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from multi_ui.cli.ui import StepTracker
from multi_ui.core.constants import DEFAULT_COMPONENT_PATH
from multi_ui.core.preferences import PreferenceError, PreferenceStore
from multi_ui.fetcher import ComponentFetcher, ComponentFetchError
from multi_ui.pipeline import add_component
from multi_ui.transform import TransformError

console = Console()


def add(
    component_name: Optional[str] = typer.Argument(
        None,
        help="Component to copy, e.g. Dropdown_5",
        show_default=False,
    ),
) -> None:
    """Copy a component into the project, converted to your language."""
    if not component_name:
        console.print("[red]Please provide a component name.[/red] Usage: multi-ui add <ComponentName>")
        raise typer.Exit(0)

    root = Path.cwd()
    store = PreferenceStore(root)
    tracker = StepTracker(f"Add {component_name}")
    tracker.add("fetch", "Fetch component source")
    tracker.add("convert", "Convert to JavaScript")
    tracker.add("write", "Write component file")

    try:
        if not store.exists():
            console.print(
                "[yellow]No preference found. Defaulting to TypeScript and "
                f"{DEFAULT_COMPONENT_PATH}.[/yellow] Run 'multi-ui setup' to choose.",
                soft_wrap=True,
            )
        preference = store.read()

        console.print(f"[cyan]Fetching {escape(component_name)} from GitHub...[/cyan]")
        with ComponentFetcher() as fetcher:
            created = add_component(component_name, preference, fetcher, root, tracker)
    except (PreferenceError, ComponentFetchError, TransformError, OSError) as e:
        if any(step.status != "pending" for step in tracker.steps):
            console.print(tracker.render())
        console.print(f"[red]Error creating component:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    console.print(tracker.render())
    console.print(f"[green]Component created at:[/green] {escape(str(created))}", soft_wrap=True)
