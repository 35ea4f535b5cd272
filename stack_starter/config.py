import logging
import os
from dataclasses import dataclass, field

from stack_starter.exceptions import ImproperlyConfiguredError
from stack_starter.selection import Language, PackageManager

__all__ = ("TRUE_VALUES", "StarterConfig")

logger = logging.getLogger("stack_starter")

TRUE_VALUES = {"True", "true", "1", "yes", "Y", "T"}


def _get_optional_env(name: str) -> "str | None":
    value = os.getenv(name)
    return value or None


@dataclass
class StarterConfig:
    """Configuration for the project starter.

    Every field falls back to a ``STACK_STARTER_*`` environment variable so the
    CLI can be preconfigured without passing options.
    """

    settle_delay: "float | str" = field(default_factory=lambda: os.getenv("STACK_STARTER_SETTLE_DELAY", "0"))
    """Seconds to wait after the commands completed and before the generated files are patched.

    The command runner only returns once every command exited, so this is only needed when a
    package manager keeps writing files after its process ended.
    """
    default_project_name: str = field(default_factory=lambda: os.getenv("STACK_STARTER_PROJECT_NAME", "my-app"))
    """Project name suggested by the name prompt."""
    default_package_manager: "PackageManager | str" = field(
        default_factory=lambda: os.getenv("STACK_STARTER_PACKAGE_MANAGER", "npm"),
    )
    """Package manager used when none is chosen."""
    default_language: "Language | str" = field(
        default_factory=lambda: os.getenv("STACK_STARTER_LANGUAGE", "TypeScript"),
    )
    """Language used when none is chosen."""
    shell: "str | None" = field(default_factory=lambda: _get_optional_env("STACK_STARTER_SHELL"))
    """Shell executable running the plan. The system default shell is used when unset."""
    verbose: bool = field(default_factory=lambda: os.getenv("STACK_STARTER_VERBOSE", "False") in TRUE_VALUES)
    """Enable debug logging."""

    def __post_init__(self) -> None:
        """Coerce raw values and reject the ones that cannot be used.

        Raises:
            ImproperlyConfiguredError: If a value is out of range or not a known choice.
        """
        try:
            self.settle_delay = float(self.settle_delay)
            if not isinstance(self.default_package_manager, PackageManager):
                self.default_package_manager = PackageManager(self.default_package_manager)
            if not isinstance(self.default_language, Language):
                self.default_language = Language(self.default_language)
        except ValueError as e:
            msg = f"Invalid starter configuration: {e}"
            raise ImproperlyConfiguredError(msg) from e
        if self.settle_delay < 0:
            msg = f"settle_delay must be zero or positive, got {self.settle_delay}"
            raise ImproperlyConfiguredError(msg)
        if not self.default_project_name:
            logger.debug("No default project name configured, falling back to 'my-app'")
            self.default_project_name = "my-app"
