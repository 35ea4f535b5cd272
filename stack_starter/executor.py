"""Command runners for scaffold plans.

This module provides the runners that dispatch a :class:`~stack_starter.plan.CommandPlan`
the way a terminal session would, one line after the other.
"""

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from stack_starter._utils import console, log_info, log_warn
from stack_starter.exceptions import CommandExecutionError

if TYPE_CHECKING:
    from stack_starter.plan import CommandPlan

__all__ = ("CommandResult", "CommandRunner", "DryRunRunner", "ShellSessionRunner")

logger = logging.getLogger("stack_starter")


@dataclass
class CommandResult:
    """Outcome of a single plan line.

    Attributes:
        command: The shell line.
        cwd: Directory the line ran in.
        return_code: Exit status, or ``None`` when the line was not executed.
    """

    command: str
    cwd: Path
    return_code: "int | None" = None

    @property
    def ok(self) -> bool:
        return self.return_code in {None, 0}


def _parse_cd(command: str) -> "str | None":
    """Return the target of a ``cd`` line, or ``None`` for any other command.

    Raises:
        CommandExecutionError: If a ``cd`` line cannot be split into arguments.
    """
    if command.split(maxsplit=1)[:1] != ["cd"]:
        return None
    try:
        tokens = shlex.split(command)
    except ValueError as e:
        raise CommandExecutionError(command, detail=f"Cannot parse directory change: {e}") from e
    if len(tokens) != 2:
        return None
    return tokens[1]


class CommandRunner(ABC):
    """Abstract base class for plan runners."""

    def __init__(self, cwd: "Path | str | None" = None) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    @abstractmethod
    def run(self, plan: "CommandPlan") -> list[CommandResult]:
        """Run every line of the plan and return once all of them completed."""


class ShellSessionRunner(CommandRunner):
    """Run a plan as a persistent shell session.

    ``cd`` lines move the session to another directory; every other line runs through
    the shell in the current directory and must exit before the next one starts. A
    non-zero exit status is reported and the session carries on.
    """

    def __init__(self, cwd: "Path | str | None" = None, shell: "str | None" = None) -> None:
        super().__init__(cwd)
        self.shell = shell

    def change_directory(self, target: str) -> Path:
        """Move the session to ``target``, relative to the current directory.

        Raises:
            CommandExecutionError: If the target directory does not exist.

        Returns:
            The new working directory.
        """
        path = Path(target).expanduser()
        if not path.is_absolute():
            path = self.cwd / path
        if not path.is_dir():
            raise CommandExecutionError(f"cd {target}", detail=f"No such directory: {path}")
        self.cwd = path.resolve()
        return self.cwd

    def execute(self, command: str) -> CommandResult:
        """Run a single line and wait for it to exit.

        Raises:
            CommandExecutionError: If a ``cd`` line is malformed or its target is missing, or the
                shell cannot be started.

        Returns:
            The result of the line.
        """
        target = _parse_cd(command)
        if target is not None:
            cwd = self.change_directory(target)
            logger.debug("Session moved to %s", cwd)
            return CommandResult(command=command, cwd=cwd, return_code=0)

        console.print(f"[dim]$ {escape(command)}[/]")
        logger.debug("Running %r in %s", command, self.cwd)
        try:
            process = subprocess.run(  # noqa: S602
                command,
                cwd=self.cwd,
                shell=True,
                executable=self.shell,
                check=False,
                stdout=None,  # inherit for live output
                stderr=None,
            )
        except OSError as e:
            raise CommandExecutionError(command, detail=str(e)) from e
        if process.returncode != 0:
            logger.warning("Command %r exited with status %d", command, process.returncode)
            log_warn(f"[yellow]{escape(command)}[/] exited with status {process.returncode}")
        return CommandResult(command=command, cwd=self.cwd, return_code=process.returncode)

    def run(self, plan: "CommandPlan") -> list[CommandResult]:
        return [self.execute(command) for command in plan]


class DryRunRunner(CommandRunner):
    """Print the plan without executing anything."""

    def run(self, plan: "CommandPlan") -> list[CommandResult]:
        results: list[CommandResult] = []
        for command in plan:
            log_info(f"[dim]{escape(command)}[/]")
            results.append(CommandResult(command=command, cwd=self.cwd))
        return results
