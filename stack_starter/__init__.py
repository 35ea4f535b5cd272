"""Frontend Stack Starter: scaffold Vite + React projects with the libraries you pick.

Basic usage:
    from pathlib import Path

    from stack_starter import Feature, Language, PackageManager, Selection, apply_patches, build_plan
    from stack_starter.executor import ShellSessionRunner

    selection = Selection(
        language=Language.TYPESCRIPT,
        features=(Feature.TAILWINDCSS, Feature.AXIOS),
        package_manager=PackageManager.PNPM,
        project_name="demo",
        project_root=Path.home() / "projects",
    )
    selection.validate()
    ShellSessionRunner().run(build_plan(selection))
    outcomes = apply_patches(selection, selection.project_path)
"""

from stack_starter.config import StarterConfig
from stack_starter.patcher import PatchOutcome, PatchStatus, apply_patches
from stack_starter.plan import CommandPlan, build_plan
from stack_starter.selection import Feature, Language, PackageManager, Selection

__all__ = (
    "CommandPlan",
    "Feature",
    "Language",
    "PackageManager",
    "PatchOutcome",
    "PatchStatus",
    "Selection",
    "StarterConfig",
    "apply_patches",
    "build_plan",
)
