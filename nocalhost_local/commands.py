"""Registry of named commands invoked from a UI.

Commands are registered as either exclusive or not. An exclusive command holds
the `CommandLock` for its entire body, so that two exclusive commands never
overlap even when their bodies suspend on I/O. Non-exclusive commands bypass
the lock and may run at any time.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import logging
from typing import Any, TYPE_CHECKING

from .exceptions import InputException, TaskRunningError
from .lock import CommandLock

if TYPE_CHECKING:
    from .host import Host

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "CommandRegistry",
    "INSTALL_APP",
    "UNINSTALL_APP",
    "ENTRY_DEV_SPACE",
    "EXIT_DEV_SPACE",
    "EXEC",
    "USE_APPLICATION",
    "WRITE_SERVICE_CONFIG",
    "LOAD_RESOURCE",
    "LOG",
    "PORT_FORWARD",
    "SWITCH_ENDPOINT",
    "REFRESH_APPLICATION",
    "SIGN_OUT",
]

# Exclusive commands
INSTALL_APP = "install_app"
UNINSTALL_APP = "uninstall_app"
ENTRY_DEV_SPACE = "entry_dev_space"
EXIT_DEV_SPACE = "exit_dev_space"
EXEC = "exec"
USE_APPLICATION = "use_application"

# Non-exclusive commands
WRITE_SERVICE_CONFIG = "write_service_config"
LOAD_RESOURCE = "load_resource"
LOG = "log"
PORT_FORWARD = "port_forward"
SWITCH_ENDPOINT = "switch_endpoint"
REFRESH_APPLICATION = "refresh_application"
SIGN_OUT = "sign_out"

CommandCallback = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class RegisteredCommand:
    """A command and how it must be scheduled."""

    name: str
    exclusive: bool
    callback: CommandCallback


class CommandRegistry:
    """Dispatches named commands, gating the exclusive ones."""

    def __init__(self, lock: CommandLock, host: "Host") -> None:
        """Initialize CommandRegistry."""
        self._lock = lock
        self._host = host
        self._commands: dict[str, RegisteredCommand] = {}

    def register(
        self, name: str, exclusive: bool, callback: CommandCallback
    ) -> Callable[[], None]:
        """Register a command, returning a callable that unregisters it."""
        if name in self._commands:
            raise InputException(f"Command {name} is already registered")
        self._commands[name] = RegisteredCommand(name, exclusive, callback)

        def dispose() -> None:
            self._commands.pop(name, None)

        return dispose

    @property
    def names(self) -> list[str]:
        """Names of every registered command."""
        return sorted(self._commands)

    def is_exclusive(self, name: str) -> bool:
        """Return True if the command must hold the lock."""
        return self._get(name).exclusive

    def _get(self, name: str) -> RegisteredCommand:
        if (command := self._commands.get(name)) is None:
            raise InputException(f"Unknown command: {name}")
        return command

    async def execute(self, name: str, *args: Any) -> Any:
        """Run the named command.

        An exclusive command that can't acquire the lock is dropped with a
        warning to the host and returns None without running. Errors raised by
        the command body propagate after the lock is released.
        """
        command = self._get(name)
        if not command.exclusive:
            return await command.callback(*args)
        if self._lock.is_running():
            _LOGGER.debug("Rejected %s, another task is running", name)
            self._host.show_warning(str(TaskRunningError(name)))
            return None
        async with self._lock.hold(name):
            return await command.callback(*args)
