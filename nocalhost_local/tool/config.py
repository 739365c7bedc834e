"""nocalhost-local config action."""

from argparse import (
    ArgumentParser,
    _SubParsersAction as SubParsersAction,
)
import logging
import pathlib
from typing import cast, Any

import aiofiles

from nocalhost_local import commands
from nocalhost_local.extension import Extension
from nocalhost_local.host import ConsoleHost

from .format import table_lines
from . import selector

_LOGGER = logging.getLogger(__name__)


class ResolveConfigAction:
    """Print which config source is used for a workload."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "resolve",
                help="Print the config source of a workload",
                description="Print the protocol and document URI of a workload config",
            ),
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
        resolution = await extension.resolver.resolve(target)
        for line in table_lines(
            ["protocol", "uri"], [[str(resolution.protocol), resolution.uri]]
        ):
            print(line)


class ShowConfigAction:
    """Print the config of a workload."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "show",
                help="Print the config of a workload",
                description="Print the config document of a workload",
            ),
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
        await extension.execute(commands.WRITE_SERVICE_CONFIG, target)


class EditConfigAction:
    """Replace the config of a workload."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "edit",
                help="Save a config file for a workload",
                description="Save the contents of a file as the config of a workload",
            ),
        )
        selector.add_workload_flags(args)
        args.add_argument(
            "--file",
            "-f",
            type=pathlib.Path,
            required=True,
            help="Yaml file with the new config",
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        file: pathlib.Path,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        extension = await Extension.create(ConsoleHost())
        target = selector.build_workload_target(extension.user_config, **kwargs)
        async with aiofiles.open(str(file)) as config_file:
            content = await config_file.read()
        resolution = await extension.resolver.resolve(target)
        await extension.documents.save_content(resolution.uri, content)
        extension.host.show_info(f"Saved config for {target.name}")


class ConfigAction:
    """nocalhost-local config action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "config",
                help="Inspect and edit workload configs",
                description="Inspect and edit the development config of workloads",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        ResolveConfigAction.register(subcmds)
        ShowConfigAction.register(subcmds)
        EditConfigAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs: Any,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        # No-op given subcommands are always the dispatch target
