"""nocalhost-local shell command implementation."""

import asyncio
import logging
from argparse import _SubParsersAction as SubParsersAction, ArgumentParser
from typing import Any, cast

from nocalhost_local.exceptions import NocalhostException
from nocalhost_local.extension import Extension
from nocalhost_local.host import ConsoleHost

from nocalhost_local.tool import selector
from .repl import NocalhostShell

_LOGGER = logging.getLogger(__name__)


class ShellAction:
    """nocalhost-local shell action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the shell subcommand."""
        parser = cast(
            ArgumentParser,
            subparsers.add_parser(
                "shell",
                help="Start an interactive shell",
                description="Start an interactive shell for working on workloads.",
            ),
        )
        selector.add_context_flags(parser)
        parser.set_defaults(cls=cls)
        return parser

    async def run(
        self,
        app: str | None = None,
        namespace: str = selector.DEFAULT_NAMESPACE,
        kubeconfig: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Run the interactive shell."""
        host = ConsoleHost()
        extension = await Extension.create(host)
        shell = NocalhostShell(
            extension,
            loop=asyncio.get_running_loop(),
            app=app or extension.user_config.selected_app,
            namespace=namespace,
            kubeconfig=kubeconfig,
            stdout=host.stdout,
            stderr=host.stderr,
        )
        _LOGGER.info("Interactive shell ready. Type 'help' for available commands.")
        try:
            await asyncio.get_running_loop().run_in_executor(None, shell.cmdloop)
        except NocalhostException as e:
            _LOGGER.error("nocalhost error: %s", e)
            raise
        finally:
            await shell.wait_background()
            extension.deactivate()
            _LOGGER.debug("Extension deactivated")
