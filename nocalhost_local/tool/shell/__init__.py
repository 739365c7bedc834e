"""nocalhost-local shell command implementation."""

from .repl import NocalhostShell
from .action import ShellAction

__all__ = ["NocalhostShell", "ShellAction"]
