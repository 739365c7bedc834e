"""The user facing side of the extension.

Commands never print directly. They report through a `Host` so that the same
command bodies can drive a terminal, an interactive shell or an editor.
"""

from abc import ABC, abstractmethod
import asyncio
import logging
import sys
from typing import Any, TextIO

from .command import Command

_LOGGER = logging.getLogger(__name__)

__all__ = ["Host", "ConsoleHost"]


class Host(ABC):
    """Collaborator that presents messages and documents to the user."""

    @abstractmethod
    def show_info(self, message: str) -> None:
        """Show an informational message."""

    @abstractmethod
    def show_warning(self, message: str) -> None:
        """Show a transient warning, e.g. to retry later."""

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Show a failure."""

    @abstractmethod
    def append_output(self, text: str) -> None:
        """Append command output to the output channel."""

    @abstractmethod
    def show_document(self, name: str, uri: str, content: str) -> None:
        """Present a materialized virtual document."""

    @abstractmethod
    def refresh(self, subject: Any = None) -> None:
        """Re-render the subject, or everything when no subject is given."""

    @abstractmethod
    def prompt(self, placeholder: str) -> str | None:
        """Ask the user for a value, returning None if cancelled."""

    @abstractmethod
    async def run_terminal(self, name: str, cmd: Command) -> None:
        """Run an interactive or long running command in a terminal."""


class ConsoleHost(Host):
    """Host that writes to console streams."""

    def __init__(
        self,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        stdin: TextIO | None = None,
    ) -> None:
        """Initialize the host with the given I/O streams."""
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.stdin = stdin if stdin is not None else sys.stdin

    def show_info(self, message: str) -> None:
        print(message, file=self.stdout)

    def show_warning(self, message: str) -> None:
        print(f"warning: {message}", file=self.stderr)

    def show_error(self, message: str) -> None:
        print(f"error: {message}", file=self.stderr)

    def append_output(self, text: str) -> None:
        if text:
            print(text.rstrip("\n"), file=self.stdout)

    def show_document(self, name: str, uri: str, content: str) -> None:
        print(f"# {name}", file=self.stdout)
        print(content.rstrip("\n"), file=self.stdout)

    def refresh(self, subject: Any = None) -> None:
        # Nothing is rendered persistently on a console
        _LOGGER.debug("Refresh requested for %s", subject)

    def prompt(self, placeholder: str) -> str | None:
        print(f"{placeholder}: ", end="", file=self.stdout, flush=True)
        value = self.stdin.readline()
        if not value:
            return None
        return value.strip() or None

    async def run_terminal(self, name: str, cmd: Command) -> None:
        """Run the command attached to the console until it exits."""
        _LOGGER.info("Starting %s: %s", name, cmd)
        proc = await asyncio.create_subprocess_shell(cmd.string)
        returncode = await proc.wait()
        if returncode:
            raise cmd.exc(f"Command '{cmd}' failed with return code {returncode}")
