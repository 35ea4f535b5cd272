"""Tests for stack_starter.plan module."""

import shlex
from pathlib import Path

import pytest

from stack_starter.plan import CommandPlan, build_plan, feature_commands
from stack_starter.selection import Feature, Language, PackageManager, Selection


def _selection(tmp_path: Path, *features: Feature, manager: PackageManager = PackageManager.NPM) -> Selection:
    return Selection(
        language=Language.JAVASCRIPT,
        features=features,
        package_manager=manager,
        project_name="demo",
        project_root=tmp_path,
    )


def test_build_plan_typescript_tailwind_axios_pnpm(selection: Selection, tmp_path: Path) -> None:
    plan = build_plan(selection)

    assert list(plan) == [
        f"cd {shlex.quote(str(tmp_path))}",
        "pnpm create vite demo --template react-ts",
        "cd demo",
        "pnpm install",
        "pnpm add tailwindcss @tailwindcss/vite",
        "pnpm add axios",
    ]


def test_build_plan_uses_react_template_for_javascript(tmp_path: Path) -> None:
    plan = build_plan(_selection(tmp_path, Feature.REACT))

    assert plan.commands[1] == "npm create vite@latest demo -- --template react"


def test_build_plan_template_features_add_no_commands(tmp_path: Path) -> None:
    plan = build_plan(_selection(tmp_path, Feature.REACT, Feature.VITE))

    assert len(plan) == 4
    assert plan.commands[-1] == "npm install"


def test_tailwind_install_follows_base_install(tmp_path: Path) -> None:
    plan = build_plan(_selection(tmp_path, Feature.AXIOS, Feature.TAILWINDCSS))
    commands = list(plan)

    tailwind_index = commands.index("npm install tailwindcss @tailwindcss/vite")
    assert tailwind_index > commands.index("npm install")


def test_feature_installs_use_canonical_order(tmp_path: Path) -> None:
    plan = build_plan(
        _selection(
            tmp_path,
            Feature.LINT_FORMAT,
            Feature.ZUSTAND,
            Feature.FRAMER_MOTION,
            Feature.REDUX_TOOLKIT,
            Feature.AXIOS,
            Feature.REACT_ROUTER,
            Feature.TAILWINDCSS,
        ),
    )

    assert plan.commands[4:] == (
        "npm install tailwindcss @tailwindcss/vite",
        "npm install react-router-dom",
        "npm install axios",
        "npm install @reduxjs/toolkit react-redux",
        "npm install zustand",
        "npm install framer-motion",
        "npm install -D eslint prettier eslint-config-prettier eslint-plugin-react",
    )


def test_chakra_ui_supersedes_framer_motion(tmp_path: Path) -> None:
    plan = build_plan(_selection(tmp_path, Feature.FRAMER_MOTION, Feature.CHAKRA_UI))

    animation_lines = [command for command in plan if "framer-motion" in command]
    assert animation_lines == ["npm install @chakra-ui/react @emotion/react @emotion/styled framer-motion"]


def test_framer_motion_alone_is_installed(tmp_path: Path) -> None:
    plan = build_plan(_selection(tmp_path, Feature.FRAMER_MOTION, manager=PackageManager.YARN))

    assert plan.commands[-1] == "yarn add framer-motion"


def test_unknown_feature_tags_are_ignored(tmp_path: Path) -> None:
    selection = _selection(tmp_path, Feature.AXIOS)
    selection.features = ("Axios", "Svelte")  # type: ignore[assignment]

    assert feature_commands(selection.features, PackageManager.NPM) == ["npm install axios"]


@pytest.mark.parametrize("manager", list(PackageManager))
def test_build_plan_quotes_directories(tmp_path: Path, manager: PackageManager) -> None:
    root = tmp_path / "with space"
    root.mkdir()
    plan = build_plan(_selection(root, Feature.AXIOS, manager=manager))

    assert plan.commands[0] == f"cd '{root}'"
    assert plan.commands[2] == "cd demo"
    assert plan.commands[3] == f"{manager.value} install"


def test_command_plan_str_and_dict() -> None:
    plan = CommandPlan(commands=("cd a", "npm install"))

    assert str(plan) == "cd a\nnpm install"
    assert plan.to_dict() == {"commands": ["cd a", "npm install"]}


def test_build_plan_quotes_shell_metacharacters_in_name(tmp_path: Path) -> None:
    selection = _selection(tmp_path, Feature.AXIOS)
    selection.project_name = 'my"app'

    plan = build_plan(selection)

    assert plan.commands[2] == "cd 'my\"app'"
    assert shlex.split(plan.commands[2]) == ["cd", 'my"app']
