"""Tests for stack_starter.selection module."""

from pathlib import Path

import pytest

from stack_starter.exceptions import InvalidSelectionError
from stack_starter.selection import Feature, Language, PackageManager, Selection, parse_features


def test_language_template_and_extension() -> None:
    assert Language.TYPESCRIPT.template == "react-ts"
    assert Language.JAVASCRIPT.template == "react"
    assert Language.TYPESCRIPT.config_extension == ".ts"
    assert Language.JAVASCRIPT.config_extension == ".js"


@pytest.mark.parametrize(
    ("manager", "expected"),
    [
        (PackageManager.NPM, "npm create vite@latest demo -- --template react"),
        (PackageManager.YARN, "yarn create vite demo --template react"),
        (PackageManager.PNPM, "pnpm create vite demo --template react"),
    ],
)
def test_scaffold_command(manager: PackageManager, expected: str) -> None:
    assert manager.scaffold_command("demo", "react") == expected


def test_scaffold_command_quotes_project_name() -> None:
    assert PackageManager.NPM.scaffold_command("my app", "react") == "npm create vite@latest 'my app' -- --template react"


def test_add_command_per_manager() -> None:
    assert PackageManager.NPM.add_command(["axios"]) == "npm install axios"
    assert PackageManager.YARN.add_command(["axios"]) == "yarn add axios"
    assert PackageManager.PNPM.add_command(["eslint", "prettier"], dev=True) == "pnpm add -D eslint prettier"


def test_dev_command() -> None:
    assert PackageManager.NPM.dev_command == "npm run dev"
    assert PackageManager.YARN.dev_command == "yarn dev"
    assert PackageManager.PNPM.dev_command == "pnpm dev"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("React Router", Feature.REACT_ROUTER),
        ("react-router", Feature.REACT_ROUTER),
        ("REACT_ROUTER", Feature.REACT_ROUTER),
        ("tailwindcss", Feature.TAILWINDCSS),
        ("ESLint + Prettier", Feature.LINT_FORMAT),
        ("lint-format", Feature.LINT_FORMAT),
        (" chakra-ui ", Feature.CHAKRA_UI),
        ("Angular", None),
        ("", None),
    ],
)
def test_feature_parse(value: str, expected: "Feature | None") -> None:
    assert Feature.parse(value) is expected


def test_parse_features_drops_unknown_and_duplicates() -> None:
    features = parse_features(["Axios", "svelte", "tailwindcss", "axios", Feature.ZUSTAND])
    assert features == (Feature.AXIOS, Feature.TAILWINDCSS, Feature.ZUSTAND)


def test_selection_coerces_raw_values(tmp_path: Path) -> None:
    selection = Selection(
        language="JavaScript",  # type: ignore[arg-type]
        features=("Axios", "unknown"),  # type: ignore[arg-type]
        package_manager="yarn",  # type: ignore[arg-type]
        project_name="demo",
        project_root=str(tmp_path),  # type: ignore[arg-type]
    )
    assert selection.language is Language.JAVASCRIPT
    assert selection.package_manager is PackageManager.YARN
    assert selection.features == (Feature.AXIOS,)
    assert selection.project_path == tmp_path / "demo"


def test_selection_validate_accepts_valid_selection(selection: Selection) -> None:
    selection.validate()


def test_selection_validate_rejects_empty_name(selection: Selection) -> None:
    selection.project_name = "  "
    with pytest.raises(InvalidSelectionError, match="project name"):
        selection.validate()


@pytest.mark.parametrize("name", ["..", "nested/demo", "nested\\demo"])
def test_selection_validate_rejects_path_like_names(selection: Selection, name: str) -> None:
    selection.project_name = name
    with pytest.raises(InvalidSelectionError, match="plain folder name"):
        selection.validate()


def test_selection_validate_rejects_empty_features(selection: Selection) -> None:
    selection.features = ()
    with pytest.raises(InvalidSelectionError, match="No technologies selected"):
        selection.validate()


def test_selection_validate_rejects_missing_root(selection: Selection, tmp_path: Path) -> None:
    selection.project_root = tmp_path / "missing"
    with pytest.raises(InvalidSelectionError, match="not an existing directory"):
        selection.validate()


def test_invalid_selection_error_is_value_error() -> None:
    assert issubclass(InvalidSelectionError, ValueError)


def test_selection_strips_project_name(tmp_path: Path) -> None:
    selection = Selection(
        language=Language.TYPESCRIPT,
        features=(Feature.AXIOS,),
        package_manager=PackageManager.NPM,
        project_name="  demo ",
        project_root=tmp_path,
    )

    assert selection.project_name == "demo"
    assert selection.project_path == tmp_path / "demo"
    selection.validate()


def test_selection_validate_rejects_padded_name(selection: Selection) -> None:
    selection.project_name = " demo"
    with pytest.raises(InvalidSelectionError, match="whitespace"):
        selection.validate()


def test_selection_validate_name_ignores_root(selection: Selection, tmp_path: Path) -> None:
    selection.project_root = tmp_path / "missing"
    selection.validate_name()
