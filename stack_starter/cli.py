from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from click import Choice, ClickException, Context, FloatRange, argument, group, option, pass_context, version_option
from click import Path as ClickPath

from stack_starter.__metadata__ import __project__, __version__
from stack_starter.selection import Feature, Language, PackageManager

if TYPE_CHECKING:
    from stack_starter.config import StarterConfig
    from stack_starter.patcher import PatchOutcome
    from stack_starter.selection import Selection


def selection_options(func: "Callable[..., Any]") -> "Callable[..., Any]":
    """Add the options describing a project selection to a command."""
    decorators = [
        option(
            "--language",
            type=Choice([language.value for language in Language], case_sensitive=False),
            help="Language of the project.",
            default=None,
            required=False,
        ),
        option(
            "--feature",
            "features",
            type=str,
            multiple=True,
            help="Technology to include. Accepts the label or slug (e.g. react-router), repeat for more.",
        ),
        option(
            "--package-manager",
            type=Choice([manager.value for manager in PackageManager], case_sensitive=False),
            help="Package manager used to create the project and install packages.",
            default=None,
            required=False,
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@group(name="stack-starter")
@version_option(version=__version__, prog_name=__project__)
def starter_group() -> None:
    """Scaffold Vite + React projects."""


def _prompt_features() -> "tuple[Feature, ...]":
    """Ask for the technologies to include.

    Accepts comma-separated numbers from the listing or feature names.

    Returns:
        The picked features. Unknown entries are ignored.
    """
    from rich.prompt import Prompt
    from rich.table import Table

    from stack_starter._utils import console
    from stack_starter.selection import parse_features

    features = list(Feature)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim")
    table.add_column("Technology")
    for index, feature in enumerate(features, start=1):
        table.add_row(str(index), feature.value)
    console.print(table)

    answer = Prompt.ask("Select technologies to include in your project (e.g. 1,3,5)")
    values: list[str] = []
    for value in answer.split(","):
        value = value.strip()
        if value.isdigit() and 1 <= int(value) <= len(features):
            values.append(features[int(value) - 1].value)
        elif value:
            values.append(value)
    return parse_features(values)


def _collect_selection(
    config: "StarterConfig",
    language: "Optional[str]",
    features: "tuple[str, ...]",
    package_manager: "Optional[str]",
    name: "Optional[str]",
    root: "Optional[Path]",
    no_prompt: bool,
) -> "Selection":
    """Build a selection from the options, prompting for whatever is missing.

    Raises:
        KeyboardInterrupt: If a prompt was cancelled.
        EOFError: If a prompt got no input.

    Returns:
        The collected selection.
    """
    from rich.prompt import Prompt

    from stack_starter.selection import Selection, parse_features

    if language is None:
        language = (
            config.default_language.value
            if no_prompt
            else Prompt.ask(
                "Choose the language for your project",
                choices=[item.value for item in Language],
                default=config.default_language.value,
            )
        )
    selected = parse_features(features)
    if not selected and not no_prompt:
        selected = _prompt_features()
    if not selected:
        return Selection(
            language=Language(language),
            features=(),
            package_manager=config.default_package_manager,
            project_name=name or config.default_project_name,
            project_root=root or Path.cwd(),
        )
    if package_manager is None:
        package_manager = (
            config.default_package_manager.value
            if no_prompt
            else Prompt.ask(
                "Select a package manager",
                choices=[item.value for item in PackageManager],
                default=config.default_package_manager.value,
            )
        )
    if name is None:
        name = (
            config.default_project_name
            if no_prompt
            else Prompt.ask("Enter your project name", default=config.default_project_name)
        )
    if root is None:
        root = (
            Path.cwd()
            if no_prompt
            else Path(Prompt.ask("Select folder to create project in", default=str(Path.cwd())))
        )
    return Selection(
        language=Language(language),
        features=selected,
        package_manager=PackageManager(package_manager),
        project_name=name,
        project_root=root.expanduser().absolute(),
    )


def _report_outcomes(outcomes: "list[PatchOutcome]") -> bool:
    """Print one line per patch outcome.

    Returns:
        True when no target failed.
    """
    from rich.markup import escape

    from stack_starter._utils import log_fail, log_info, log_success
    from stack_starter.patcher import PatchStatus

    for outcome in outcomes:
        if outcome.status is PatchStatus.SUCCESS:
            log_success(f"Updated {escape(str(outcome.target))}")
        elif outcome.status is PatchStatus.SKIPPED:
            log_info(f"[yellow]Skipped {escape(str(outcome.target))}[/] ({outcome.reason})")
        else:
            reason = escape(outcome.reason or "")
            log_fail(f"[red]Failed to update {escape(str(outcome.target))}:[/] {reason}")
    return all(outcome.status is not PatchStatus.FAILED for outcome in outcomes)


@starter_group.command(
    name="create",
    help="Create a new frontend project.",
)
@selection_options
@option("--name", type=str, help="Name of the project folder.", default=None, required=False)
@option(
    "--root",
    type=ClickPath(exists=True, dir_okay=True, file_okay=False, path_type=Path),
    help="Existing folder to create the project in.",
    default=None,
    required=False,
)
@option(
    "--settle-delay",
    type=FloatRange(min=0),
    help="Seconds to wait between the end of the setup commands and the file patches.",
    default=None,
    required=False,
)
@option(
    "--no-install",
    help="Print the setup commands instead of running them. File patches are skipped.",
    type=bool,
    default=False,
    required=False,
    show_default=True,
    is_flag=True,
)
@option(
    "--no-prompt",
    help="Do not prompt for missing values and use the configured defaults.",
    type=bool,
    default=False,
    required=False,
    show_default=True,
    is_flag=True,
)
@option("--verbose", type=bool, help="Enable verbose output.", default=False, is_flag=True)
@pass_context
def create_project(
    ctx: "Context",
    language: "Optional[str]",
    features: "tuple[str, ...]",
    package_manager: "Optional[str]",
    name: "Optional[str]",
    root: "Optional[Path]",
    settle_delay: "Optional[float]",
    no_install: bool,
    no_prompt: bool,
    verbose: bool,
) -> None:
    """Scaffold a project, install the selected technologies and patch the generated files."""
    import time

    from stack_starter._utils import configure_logging, console, log_info
    from stack_starter.config import StarterConfig
    from stack_starter.exceptions import StackStarterError
    from stack_starter.executor import DryRunRunner, ShellSessionRunner
    from stack_starter.patcher import apply_patches
    from stack_starter.plan import build_plan

    try:
        config = StarterConfig()
    except StackStarterError as e:
        raise ClickException(str(e)) from e
    configure_logging(verbose or config.verbose)

    console.rule("[yellow]Creating frontend project[/]", align="left")
    try:
        selection = _collect_selection(config, language, features, package_manager, name, root, no_prompt)
    except (KeyboardInterrupt, EOFError):
        ctx.exit(1)
    if not selection.features:
        log_info("No technologies selected.")
        return
    try:
        selection.validate()
    except StackStarterError as e:
        raise ClickException(str(e)) from e

    plan = build_plan(selection)
    if no_install:
        console.rule("[yellow]Setup commands[/]", align="left")
        DryRunRunner(cwd=selection.project_root).run(plan)
        log_info("Skipping file updates. Run [bold]stack-starter patch[/] once the commands completed.")
        return

    console.rule("[yellow]Running setup commands[/]", align="left")
    runner = ShellSessionRunner(cwd=selection.project_root, shell=config.shell)
    try:
        runner.run(plan)
    except StackStarterError as e:
        raise ClickException(str(e)) from e

    delay = config.settle_delay if settle_delay is None else settle_delay
    if delay > 0:
        log_info(f"Waiting {delay:g}s before updating project files")
        time.sleep(delay)

    console.rule("[yellow]Updating project files[/]", align="left")
    if not _report_outcomes(apply_patches(selection, selection.project_path)):
        ctx.exit(1)
    console.print(f"[bold green]Project {selection.project_name} created in {selection.project_path}[/]")


@starter_group.command(
    name="plan",
    help="Print the setup commands for a project without running them.",
)
@selection_options
@option("--name", type=str, help="Name of the project folder.", default=None, required=False)
@option(
    "--root",
    type=ClickPath(dir_okay=True, file_okay=False, path_type=Path),
    help="Folder the project would be created in.",
    default=None,
    required=False,
)
@option("--json", "as_json", type=bool, help="Print the plan as JSON.", default=False, is_flag=True)
def show_plan(
    language: "Optional[str]",
    features: "tuple[str, ...]",
    package_manager: "Optional[str]",
    name: "Optional[str]",
    root: "Optional[Path]",
    as_json: bool,
) -> None:
    """Print the commands ``create`` would run."""
    import click
    import msgspec

    from stack_starter._utils import console, log_info
    from stack_starter.config import StarterConfig
    from stack_starter.exceptions import StackStarterError
    from stack_starter.plan import build_plan

    try:
        config = StarterConfig()
    except StackStarterError as e:
        raise ClickException(str(e)) from e
    selection = _collect_selection(config, language, features, package_manager, name, root, no_prompt=True)
    if not selection.features:
        log_info("No technologies selected.")
        return
    try:
        selection.validate_name()
    except StackStarterError as e:
        raise ClickException(str(e)) from e

    plan = build_plan(selection)
    if as_json:
        content = msgspec.json.format(
            msgspec.json.encode(
                {
                    "project_name": selection.project_name,
                    "project_root": str(selection.project_root),
                    "language": selection.language.value,
                    "package_manager": selection.package_manager.value,
                    "features": [feature.value for feature in selection.features],
                    **plan.to_dict(),
                },
            ),
            indent=2,
        )
        click.echo(content.decode("utf-8"))
        return

    console.rule(f"[yellow]Setup commands for {selection.project_name}[/]", align="left")
    console.print(str(plan), markup=False, highlight=False)


@starter_group.command(
    name="patch",
    help="Apply the file updates to an already scaffolded project.",
)
@argument(
    "project_path",
    type=ClickPath(exists=True, dir_okay=True, file_okay=False, path_type=Path),
)
@selection_options
@option("--verbose", type=bool, help="Enable verbose output.", default=False, is_flag=True)
@pass_context
def patch_project(
    ctx: "Context",
    project_path: Path,
    language: "Optional[str]",
    features: "tuple[str, ...]",
    package_manager: "Optional[str]",
    verbose: bool,
) -> None:
    """Re-apply the post-scaffold updates. Already patched files are left untouched."""
    from stack_starter._utils import configure_logging, console, log_info
    from stack_starter.config import StarterConfig
    from stack_starter.exceptions import StackStarterError
    from stack_starter.patcher import apply_patches

    try:
        config = StarterConfig()
    except StackStarterError as e:
        raise ClickException(str(e)) from e
    configure_logging(verbose or config.verbose)

    project_path = project_path.absolute()
    selection = _collect_selection(
        config,
        language,
        features,
        package_manager,
        project_path.name,
        project_path.parent,
        no_prompt=True,
    )
    if not selection.features:
        log_info("No technologies selected.")
        return

    console.rule(f"[yellow]Updating {project_path}[/]", align="left")
    if not _report_outcomes(apply_patches(selection, project_path)):
        ctx.exit(1)


@starter_group.command(
    name="features",
    help="List the technologies a project can include.",
)
@option(
    "--package-manager",
    type=Choice([manager.value for manager in PackageManager], case_sensitive=False),
    help="Package manager to show install commands for.",
    default=PackageManager.NPM.value,
    show_default=True,
)
def list_features(package_manager: str) -> None:
    """Show every feature with its slug and install command."""
    from rich.table import Table

    from stack_starter._utils import console
    from stack_starter.plan import feature_commands

    manager = PackageManager(package_manager)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Technology")
    table.add_column("Slug", style="dim")
    table.add_column("Install")
    for feature in Feature:
        commands = feature_commands((feature,), manager)
        table.add_row(feature.value, feature.slug, "\n".join(commands) or "[dim]included in the template[/]")
    console.print(table)
