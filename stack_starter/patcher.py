"""Post-scaffold file patches.

Once the scaffold commands completed, a few generated files are edited so the selected
features work out of the box. Every edit is independent: a failing target is reported
and the remaining targets are still processed.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from stack_starter.selection import Feature, Selection

__all__ = (
    "TAILWIND_CSS_IMPORT",
    "TAILWIND_VITE_IMPORT",
    "PatchOutcome",
    "PatchStatus",
    "apply_patches",
    "patch_file",
    "patch_stylesheet_text",
    "patch_vite_config_text",
    "render_readme",
    "render_template",
    "write_readme",
)

logger = logging.getLogger("stack_starter")

TAILWIND_VITE_IMPORT = "import tailwindcss from '@tailwindcss/vite'\n"
TAILWIND_VITE_PLUGIN = "tailwindcss(), "
TAILWIND_CSS_IMPORT = '@import "tailwindcss";\n'

_TAILWIND_VITE_IMPORT_PATTERN = re.compile(r"""from\s+['"]@tailwindcss/vite['"]""")
_PLUGINS_ARRAY_PATTERN = re.compile(r"plugins\s*:\s*\[")
_TAILWIND_CSS_IMPORT_PATTERN = re.compile(r"""@import\s+['"]tailwindcss['"]""")


class PatchStatus(str, Enum):
    """Terminal status of a patch target."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class PatchOutcome:
    """Result of patching a single file.

    Attributes:
        target: The patched file.
        status: What happened to the file.
        reason: Why the file was skipped or why patching failed.
    """

    target: Path
    status: PatchStatus
    reason: "str | None" = None

    def to_dict(self) -> "dict[str, Any]":
        return {"target": str(self.target), "status": self.status.value, "reason": self.reason}


def get_template_dir() -> Path:
    """Get the directory containing file templates.

    Returns:
        Path to the templates directory.
    """
    return Path(__file__).parent / "templates"


def render_template(template_path: Path, context: "dict[str, Any]") -> str:
    """Render a Jinja2 template with the given context.

    Templates are rendered with autoescaping disabled because the output is Markdown
    and configuration files, not HTML.

    Args:
        template_path: Path to the template file.
        context: Dictionary of template variables.

    Returns:
        Rendered template content.
    """
    from jinja2 import Environment, FileSystemLoader

    env = Environment(
        loader=FileSystemLoader(str(template_path.parent)),
        keep_trailing_newline=True,
        autoescape=False,  # noqa: S701
    )
    template = env.get_template(template_path.name)
    return template.render(**context)


def patch_vite_config_text(content: str) -> str:
    """Register the Tailwind Vite plugin in a ``vite.config`` source.

    The import is prepended and ``tailwindcss()`` is inserted at the start of the first
    ``plugins: [`` array. Without a plugins array only the import is added. Content that
    already imports ``@tailwindcss/vite`` is returned unchanged.

    Args:
        content: The current config source.

    Returns:
        The patched config source.
    """
    if _TAILWIND_VITE_IMPORT_PATTERN.search(content):
        return content
    match = _PLUGINS_ARRAY_PATTERN.search(content)
    if match is None:
        logger.debug("No plugins array found in vite config, only adding the import")
    else:
        content = content[: match.end()] + TAILWIND_VITE_PLUGIN + content[match.end() :]
    return TAILWIND_VITE_IMPORT + content


def patch_stylesheet_text(content: str) -> str:
    """Prepend the Tailwind import directive unless the stylesheet already has it."""
    if _TAILWIND_CSS_IMPORT_PATTERN.search(content):
        return content
    return TAILWIND_CSS_IMPORT + content


def patch_file(path: Path, transform: "Callable[[str], str]") -> PatchOutcome:
    """Apply ``transform`` to the text of ``path``.

    The file is only written when the transform changed its content.

    Args:
        path: File to patch.
        transform: Function returning the patched content.

    Returns:
        ``skipped`` when the file was already patched, ``failed`` on any I/O error.
    """
    try:
        content = path.read_text(encoding="utf-8")
        patched = transform(content)
        if patched == content:
            logger.debug("%s already patched", path)
            return PatchOutcome(target=path, status=PatchStatus.SKIPPED, reason="already patched")
        path.write_text(patched, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to patch %s: %s", path, e)
        return PatchOutcome(target=path, status=PatchStatus.FAILED, reason=str(e))
    return PatchOutcome(target=path, status=PatchStatus.SUCCESS)


def render_readme(selection: Selection) -> str:
    """Render the README of the generated project.

    Returns:
        The README content.
    """
    package_manager = selection.package_manager
    return render_template(
        get_template_dir() / "README.md.j2",
        {
            "project_name": selection.project_name,
            "language": selection.language.value,
            "features": [feature.value for feature in selection.features],
            "install_command": package_manager.install_command,
            "dev_command": package_manager.dev_command,
        },
    )


def write_readme(selection: Selection, project_path: Path) -> PatchOutcome:
    """Write the README, replacing any existing one.

    Returns:
        The outcome of the write.
    """
    path = project_path / "README.md"
    try:
        path.write_text(render_readme(selection), encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to write %s: %s", path, e)
        return PatchOutcome(target=path, status=PatchStatus.FAILED, reason=str(e))
    return PatchOutcome(target=path, status=PatchStatus.SUCCESS)


def apply_patches(selection: Selection, project_path: Path) -> list[PatchOutcome]:
    """Patch the generated project files for the selected features.

    Args:
        selection: The selection the project was scaffolded with.
        project_path: Directory of the generated project.

    Returns:
        One outcome per target, in the order the targets were processed.
    """
    outcomes: list[PatchOutcome] = []
    if selection.has(Feature.TAILWINDCSS):
        vite_config = project_path / f"vite.config{selection.language.config_extension}"
        outcomes.append(patch_file(vite_config, patch_vite_config_text))
        outcomes.append(patch_file(project_path / "src" / "index.css", patch_stylesheet_text))
    outcomes.append(write_readme(selection, project_path))
    return outcomes
