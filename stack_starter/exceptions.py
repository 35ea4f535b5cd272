"""Frontend Stack Starter exception classes."""

__all__ = [
    "CommandExecutionError",
    "ImproperlyConfiguredError",
    "InvalidSelectionError",
    "StackStarterError",
]


class StackStarterError(Exception):
    """Base exception for Frontend Stack Starter related errors."""


class InvalidSelectionError(StackStarterError, ValueError):
    """Raised when the collected project selection cannot be scaffolded."""


class ImproperlyConfiguredError(StackStarterError):
    """Raised when the starter configuration holds an invalid value."""


class CommandExecutionError(StackStarterError):
    """Raised when a command of the plan cannot be dispatched."""

    def __init__(self, command: str, return_code: "int | None" = None, detail: str = "") -> None:
        message = f"Command {command!r} failed"
        if return_code is not None:
            message += f" with return code {return_code}"
        if detail:
            message += f".\n{detail}"
        super().__init__(message)
        self.command = command
        self.return_code = return_code
        self.detail = detail
