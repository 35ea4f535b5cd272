"""Project selection model.

This module defines the choices a user makes before a project is scaffolded:
the language, the package manager, the optional features and where the project
is created.
"""

import shlex
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from stack_starter.exceptions import InvalidSelectionError

__all__ = ("Feature", "Language", "PackageManager", "Selection", "parse_features")


class Language(str, Enum):
    """Supported project languages."""

    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"

    @property
    def template(self) -> str:
        """Name of the ``create-vite`` template for this language."""
        return "react-ts" if self is Language.TYPESCRIPT else "react"

    @property
    def config_extension(self) -> str:
        """File extension of the generated ``vite.config`` file."""
        return ".ts" if self is Language.TYPESCRIPT else ".js"


class PackageManager(str, Enum):
    """Supported JavaScript package managers."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    def scaffold_command(self, project_name: str, template: str) -> str:
        """Get the command materialising the Vite starter template.

        npm forwards arguments to the initializer only after a ``--`` separator.

        Returns:
            The scaffold command line.
        """
        name = shlex.quote(project_name)
        if self is PackageManager.NPM:
            return f"npm create vite@latest {name} -- --template {template}"
        return f"{self.value} create vite {name} --template {template}"

    @property
    def install_command(self) -> str:
        """Get the command installing the dependencies already declared by the project."""
        return f"{self.value} install"

    def add_command(self, packages: "Iterable[str]", *, dev: bool = False) -> str:
        """Get the command adding ``packages`` to the project.

        Returns:
            The install command line.
        """
        verb = "install" if self is PackageManager.NPM else "add"
        flag = " -D" if dev else ""
        return f"{self.value} {verb}{flag} {' '.join(packages)}"

    @property
    def dev_command(self) -> str:
        """Get the command starting the Vite dev server (e.g., npm run dev)."""
        return "npm run dev" if self is PackageManager.NPM else f"{self.value} dev"


class Feature(str, Enum):
    """Optional technologies a project can be created with.

    Values are the labels shown to the user and written to the README.
    """

    REACT = "React"
    VITE = "Vite"
    TAILWINDCSS = "TailwindCSS"
    REACT_ROUTER = "React Router"
    AXIOS = "Axios"
    REDUX_TOOLKIT = "Redux Toolkit"
    ZUSTAND = "Zustand"
    CHAKRA_UI = "Chakra UI"
    FRAMER_MOTION = "Framer Motion"
    LINT_FORMAT = "ESLint + Prettier"

    @property
    def slug(self) -> str:
        """Command-line friendly name of the feature (e.g. ``react-router``)."""
        return self.name.lower().replace("_", "-")

    @classmethod
    def parse(cls, value: "str | Feature") -> "Feature | None":
        """Resolve a label, member name or slug to a feature.

        Args:
            value: The raw feature tag.

        Returns:
            The matching feature, or ``None`` when the tag is not recognised.
        """
        if isinstance(value, Feature):
            return value
        key = value.strip().lower()
        for feature in cls:
            if key in {feature.value.lower(), feature.slug, feature.name.lower()}:
                return feature
        return None


def parse_features(values: "Iterable[str | Feature]") -> "tuple[Feature, ...]":
    """Parse raw feature tags, keeping the order they were given in.

    Unknown tags and repeated features are dropped.

    Returns:
        The recognised features.
    """
    features: list[Feature] = []
    for value in values:
        feature = Feature.parse(value)
        if feature is not None and feature not in features:
            features.append(feature)
    return tuple(features)


@dataclass
class Selection:
    """Everything needed to scaffold a project.

    Attributes:
        language: Language of the generated project.
        features: Selected features, in the order they were picked.
        package_manager: Package manager used for every command.
        project_name: Name of the project folder to create.
        project_root: Existing directory the project folder is created in.
    """

    language: Language
    features: "tuple[Feature, ...]"
    package_manager: PackageManager
    project_name: str
    project_root: Path = field(default_factory=Path.cwd)

    def __post_init__(self) -> None:
        """Coerce raw values into their model types."""
        if not isinstance(self.language, Language):
            self.language = Language(self.language)
        if not isinstance(self.package_manager, PackageManager):
            self.package_manager = PackageManager(self.package_manager)
        self.features = parse_features(self.features)
        self.project_name = str(self.project_name).strip()
        self.project_root = Path(self.project_root)

    @property
    def project_path(self) -> Path:
        """Directory the scaffold command creates."""
        return self.project_root / self.project_name

    def has(self, feature: Feature) -> bool:
        return feature in self.features

    def validate_name(self) -> None:
        """Check the project name is a plain folder name.

        Raises:
            InvalidSelectionError: If the name is empty, padded with whitespace or not a plain
                folder name.
        """
        name = self.project_name
        if not name.strip():
            msg = "A project name is required."
            raise InvalidSelectionError(msg)
        if name != name.strip():
            msg = f"Project name {name!r} must not start or end with whitespace."
            raise InvalidSelectionError(msg)
        if name in {".", ".."} or "/" in name or "\\" in name:
            msg = f"Project name {name!r} must be a plain folder name."
            raise InvalidSelectionError(msg)

    def validate(self) -> None:
        """Check the selection can be scaffolded.

        Raises:
            InvalidSelectionError: If the name is invalid, no features are selected or the project
                root is not an existing directory.
        """
        self.validate_name()
        if not self.features:
            msg = "No technologies selected."
            raise InvalidSelectionError(msg)
        if not self.project_root.is_dir():
            msg = f"Project root {str(self.project_root)!r} is not an existing directory."
            raise InvalidSelectionError(msg)
