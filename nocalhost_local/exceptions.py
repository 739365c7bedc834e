"""Exceptions related to nocalhost-local."""

__all__ = [
    "NocalhostException",
    "InputException",
    "CommandException",
    "NhctlException",
    "KubectlException",
    "TaskRunningError",
    "ResolutionError",
    "MaterializationError",
    "ReadOnlyDocumentError",
]


class NocalhostException(Exception):
    """Generic base exception used for this library."""


class InputException(NocalhostException):
    """Raised when the input values are not formatted as expected."""


class CommandException(NocalhostException):
    """Raised when there is a failure running a subcommand."""


class NhctlException(CommandException):
    """Raised when there is a failure running an nhctl command."""


class KubectlException(CommandException):
    """Raised when there is a failure running a kubectl command."""


class TaskRunningError(NocalhostException):
    """Raised when an exclusive command is requested while another one runs."""

    def __init__(self, command: str | None = None) -> None:
        super().__init__("A task is running, please try again later")
        self.command = command


class ResolutionError(NocalhostException):
    """Raised when the configuration source of a workload can't be determined."""

    def __init__(self, resource_name: str, message: str | None) -> None:
        super().__init__(
            f"Unable to resolve config for {resource_name}: {message or 'Unknown error'}"
        )
        self.resource_name = resource_name
        self.message = message


class MaterializationError(NocalhostException):
    """Raised when the content of a virtual document can't be produced."""


class ReadOnlyDocumentError(MaterializationError):
    """Raised when saving a document that is a generated view."""
