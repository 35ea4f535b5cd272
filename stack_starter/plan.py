"""Command plan construction.

A plan is the ordered list of shell lines that scaffolds a Vite + React project
and installs the libraries of the selected features.
"""

import logging
import shlex
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from stack_starter.selection import Feature, PackageManager, Selection

__all__ = ("FEATURE_PACKAGES", "CommandPlan", "build_plan", "feature_commands")

logger = logging.getLogger("stack_starter")

FEATURE_PACKAGES: "dict[Feature, tuple[list[str], bool]]" = {
    Feature.TAILWINDCSS: (["tailwindcss", "@tailwindcss/vite"], False),
    Feature.REACT_ROUTER: (["react-router-dom"], False),
    Feature.AXIOS: (["axios"], False),
    Feature.REDUX_TOOLKIT: (["@reduxjs/toolkit", "react-redux"], False),
    Feature.ZUSTAND: (["zustand"], False),
    Feature.CHAKRA_UI: (["@chakra-ui/react", "@emotion/react", "@emotion/styled", "framer-motion"], False),
    Feature.FRAMER_MOTION: (["framer-motion"], False),
    Feature.LINT_FORMAT: (["eslint", "prettier", "eslint-config-prettier", "eslint-plugin-react"], True),
}
"""Packages installed for each feature, and whether they are dev dependencies.

Insertion order is the order install commands are emitted in. React and Vite ship
with the starter template and install nothing.
"""


@dataclass(frozen=True)
class CommandPlan:
    """Ordered shell lines to run in a single terminal session."""

    commands: "tuple[str, ...]" = ()

    def __iter__(self) -> "Iterator[str]":
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __str__(self) -> str:
        return "\n".join(self.commands)

    def to_dict(self) -> "dict[str, Any]":
        return {"commands": list(self.commands)}


def feature_commands(features: "tuple[Feature, ...]", package_manager: PackageManager) -> list[str]:
    """Get the install commands for ``features`` in canonical order.

    Chakra UI already depends on Framer Motion, so selecting it suppresses the
    separate Framer Motion install.

    Args:
        features: The selected features.
        package_manager: Package manager to install with.

    Returns:
        One install command per feature needing packages.
    """
    commands: list[str] = []
    for feature, (packages, dev) in FEATURE_PACKAGES.items():
        if feature not in features:
            continue
        if feature is Feature.FRAMER_MOTION and Feature.CHAKRA_UI in features:
            logger.debug("Skipping separate Framer Motion install, Chakra UI already pulls it in")
            continue
        commands.append(package_manager.add_command(packages, dev=dev))
    return commands


def build_plan(selection: Selection) -> CommandPlan:
    """Build the commands scaffolding the project described by ``selection``.

    Args:
        selection: A validated selection.

    Returns:
        The command plan. Feature installs always follow the base install.
    """
    package_manager = selection.package_manager
    commands = [
        f"cd {shlex.quote(str(selection.project_root))}",
        package_manager.scaffold_command(selection.project_name, selection.language.template),
        f"cd {shlex.quote(selection.project_name)}",
        package_manager.install_command,
        *feature_commands(selection.features, package_manager),
    ]
    logger.debug("Built plan with %d commands for %s", len(commands), selection.project_name)
    return CommandPlan(commands=tuple(commands))
