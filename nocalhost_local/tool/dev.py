"""nocalhost-local dev action."""

from argparse import (
    ArgumentParser,
    _SubParsersAction as SubParsersAction,
)
import logging
from typing import cast, Any

from nocalhost_local import commands
from nocalhost_local.extension import Extension
from nocalhost_local.host import ConsoleHost

from . import selector

_LOGGER = logging.getLogger(__name__)


class DevCommandAction:
    """Run a workload command through the extension."""

    name: str
    help: str
    command: str

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(cls.name, help=cls.help, description=cls.help),
        )
        selector.add_workload_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        extension = await Extension.create(ConsoleHost())
        target = selector.build_workload_target(extension.user_config, **kwargs)
        await extension.execute(self.command, target)


class DevStartAction(DevCommandAction):
    """Enter development mode."""

    name = "start"
    help = "Replace a workload with a development container"
    command = commands.ENTRY_DEV_SPACE


class DevEndAction(DevCommandAction):
    """Exit development mode."""

    name = "end"
    help = "Restore a workload from development mode"
    command = commands.EXIT_DEV_SPACE


class DevExecAction(DevCommandAction):
    """Open a shell in the development container."""

    name = "exec"
    help = "Open a shell in the development container of a workload"
    command = commands.EXEC


class DevLogAction(DevCommandAction):
    """Follow workload logs."""

    name = "log"
    help = "Follow the logs of a workload"
    command = commands.LOG


class DevAction:
    """nocalhost-local dev action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "dev",
                help="Develop a workload",
                description="Enter and exit development mode for a workload",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        DevStartAction.register(subcmds)
        DevEndAction.register(subcmds)
        DevExecAction.register(subcmds)
        DevLogAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs: Any,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        # No-op given subcommands are always the dispatch target
