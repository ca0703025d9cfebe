"""End-to-end tests for the multi-ui command line."""

from __future__ import annotations

import importlib
import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from multi_ui import app as cli_app
from multi_ui.core.preferences import Language
from multi_ui.fetcher import ComponentFetcher
from multi_ui.core.config import RemoteSource
from multi_ui.installer import InstallError

add_module = importlib.import_module("multi_ui.cli.commands.add")
setup_command_module = importlib.import_module("multi_ui.cli.commands.setup")

runner = CliRunner()

MISSING_URL = "https://raw.githubusercontent.com/om0852/multi-ui/main/app/missing/_components/Missing_1.tsx"


class FakePrompts:
    def __init__(self, language: Language, directory: str):
        self.language = language
        self.directory = directory

    def ask_language(self) -> Language:
        return self.language

    def ask_directory(self, default: str = "src/app/") -> str:
        return self.directory


@pytest.fixture()
def serve(monkeypatch):
    """Route the add command's HTTP traffic to a handler; returns requested URLs."""
    requested: list[str] = []

    def install(handler):
        def recording(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return handler(request)

        def factory():
            client = httpx.Client(transport=httpx.MockTransport(recording))
            return ComponentFetcher(source=RemoteSource(), client=client)

        monkeypatch.setattr(add_module, "ComponentFetcher", factory)
        return requested

    return install


def _setup(monkeypatch, language: Language, directory: str, *args: str):
    monkeypatch.setattr(
        setup_command_module,
        "InteractivePromptProvider",
        lambda console=None: FakePrompts(language, directory),
    )
    return runner.invoke(cli_app, ["setup", *args])


def _write_config(root: Path, language: str) -> None:
    (root / "multi-ui.config.json").write_text(
        json.dumps({"language": language, "componentPath": "app/multi-ui/components"}),
        encoding="utf-8",
    )


def test_setup_writes_config(project_dir: Path, monkeypatch) -> None:
    result = _setup(monkeypatch, Language.TYPESCRIPT, "app/", "--skip-install")

    assert result.exit_code == 0, result.output
    data = json.loads((project_dir / "multi-ui.config.json").read_text(encoding="utf-8"))
    assert data == {"language": "typescript", "componentPath": "app/multi-ui/components"}
    assert "Setup complete!" in result.stdout
    assert "TypeScript" in result.stdout


def test_setup_installs_build_dependencies(project_dir: Path, monkeypatch) -> None:
    calls = []

    class FakeInstaller:
        def install(self, packages, cwd):
            calls.append((list(packages), cwd))

    monkeypatch.setattr(setup_command_module, "NpmDependencyInstaller", FakeInstaller)

    result = _setup(monkeypatch, Language.JAVASCRIPT, "src/app/")

    assert result.exit_code == 0, result.output
    assert calls == [(["@babel/preset-react", "@babel/preset-typescript"], project_dir)]


def test_setup_reports_install_failure_but_keeps_config(project_dir: Path, monkeypatch) -> None:
    class BrokenInstaller:
        def install(self, packages, cwd):
            raise InstallError("Error installing dependencies: npm ERR! offline")

    monkeypatch.setattr(setup_command_module, "NpmDependencyInstaller", BrokenInstaller)

    result = _setup(monkeypatch, Language.JAVASCRIPT, "app/")

    assert result.exit_code == 1
    assert "npm ERR! offline" in result.stdout
    assert (project_dir / "multi-ui.config.json").exists()


def test_add_typescript_component(project_dir: Path, serve) -> None:
    _write_config(project_dir, "typescript")
    serve(lambda request: httpx.Response(200, text="export default function Button(){}"))

    result = runner.invoke(cli_app, ["add", "Button_1"])

    assert result.exit_code == 0, result.output
    created = project_dir / "app/multi-ui/components/Button_1.tsx"
    assert created.read_text(encoding="utf-8") == "export default function Button(){}"
    assert "Fetching Button_1 from GitHub..." in result.stdout
    assert "Component created at:" in result.stdout


def test_add_javascript_component(project_dir: Path, serve) -> None:
    _write_config(project_dir, "javascript")
    serve(lambda request: httpx.Response(200, text="export default function Button(){}"))

    result = runner.invoke(cli_app, ["add", "Button_1"])

    assert result.exit_code == 0, result.output
    created = project_dir / "app/multi-ui/components/Button_1.jsx"
    assert created.read_text(encoding="utf-8") == "export default function Button(){}"
    assert not (project_dir / "app/multi-ui/components/Button_1.tsx").exists()


def test_add_missing_component(project_dir: Path, serve) -> None:
    _write_config(project_dir, "typescript")
    requested = serve(lambda request: httpx.Response(404))

    result = runner.invoke(cli_app, ["add", "Missing_1"])

    assert result.exit_code == 1
    assert requested == [MISSING_URL]
    assert "Missing_1" in result.stdout
    assert MISSING_URL in result.stdout
    assert not (project_dir / "app").exists()


def test_add_without_config_uses_defaults(project_dir: Path, serve) -> None:
    serve(lambda request: httpx.Response(200, text="export const A = 1;"))

    result = runner.invoke(cli_app, ["add", "Card_1"])

    assert result.exit_code == 0, result.output
    assert "No preference found" in result.stdout
    assert (project_dir / "src/app/multi-ui/components/Card_1.tsx").exists()
    assert not (project_dir / "multi-ui.config.json").exists()


def test_add_with_malformed_config(project_dir: Path, serve) -> None:
    (project_dir / "multi-ui.config.json").write_text("{oops", encoding="utf-8")
    requested = serve(lambda request: httpx.Response(200, text="x"))

    result = runner.invoke(cli_app, ["add", "Card_1"])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.stdout
    assert requested == []


def test_add_without_name_prints_usage(project_dir: Path) -> None:
    result = runner.invoke(cli_app, ["add"])

    assert result.exit_code == 0
    assert "Please provide a component name" in result.stdout


@pytest.mark.parametrize("args", [[], ["frobnicate"]])
def test_other_invocations_print_usage(project_dir: Path, args) -> None:
    result = runner.invoke(cli_app, args)

    assert result.exit_code == 0
    assert "multi-ui setup" in result.stdout
    assert "multi-ui add <ComponentName>" in result.stdout
