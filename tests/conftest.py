from collections.abc import Generator
from pathlib import Path

import pytest

from stack_starter.selection import Feature, Language, PackageManager, Selection

here = Path(__file__).parent


# Environment variables that may affect test behavior - clear before each test
_STARTER_ENV_VARS = [
    "STACK_STARTER_SETTLE_DELAY",
    "STACK_STARTER_PROJECT_NAME",
    "STACK_STARTER_PACKAGE_MANAGER",
    "STACK_STARTER_LANGUAGE",
    "STACK_STARTER_SHELL",
    "STACK_STARTER_VERBOSE",
]

VITE_CONFIG_TS = """import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'

// https://vite.dev/config/
export default defineConfig({
  plugins: [react()],
})
"""

INDEX_CSS = """:root {
  font-family: system-ui, Avenir, Helvetica, Arial, sans-serif;
}
"""


@pytest.fixture(autouse=True)
def clean_starter_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear starter environment variables before each test for isolation."""
    for var in _STARTER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    # keep rich output on a single line per message
    monkeypatch.setenv("COLUMNS", "200")
    yield


@pytest.fixture
def selection(tmp_path: Path) -> Selection:
    return Selection(
        language=Language.TYPESCRIPT,
        features=(Feature.TAILWINDCSS, Feature.AXIOS),
        package_manager=PackageManager.PNPM,
        project_name="demo",
        project_root=tmp_path,
    )


@pytest.fixture
def scaffolded_project(selection: Selection) -> Path:
    """A project folder laid out the way ``create vite`` leaves it."""
    project_path = selection.project_path
    (project_path / "src").mkdir(parents=True)
    (project_path / "vite.config.ts").write_text(VITE_CONFIG_TS)
    (project_path / "src" / "index.css").write_text(INDEX_CSS)
    (project_path / "README.md").write_text("# React + TypeScript + Vite\n")
    return project_path
