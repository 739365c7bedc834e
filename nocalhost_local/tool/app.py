"""nocalhost-local app action."""

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


class InstallAppAction:
    """Install an application."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "install",
                help="Install an application",
                description="Install an application into a namespace with nhctl",
            ),
        )
        selector.add_context_flags(args)
        args.add_argument(
            "--url",
            "-u",
            type=str,
            default=None,
            help="Git url of the application manifests",
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        extension = await Extension.create(ConsoleHost())
        target = selector.build_app_target(extension.user_config, **kwargs)
        await extension.execute(commands.INSTALL_APP, target)


class UninstallAppAction:
    """Uninstall an application."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "uninstall",
                help="Uninstall an application",
                description="Uninstall an application from a namespace with nhctl",
            ),
        )
        selector.add_context_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        extension = await Extension.create(ConsoleHost())
        target = selector.build_app_target(extension.user_config, **kwargs)
        await extension.execute(commands.UNINSTALL_APP, target)


class UseAppAction:
    """Select the application used by default."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "use",
                help="Select the default application",
                description="Save the application used when --app is not given",
            ),
        )
        selector.add_context_flags(args)
        args.add_argument(
            "name",
            help="Name of the application",
            type=str,
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        name: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        extension = await Extension.create(ConsoleHost())
        kwargs["app"] = name
        target = selector.build_app_target(extension.user_config, **kwargs)
        if await extension.execute(commands.USE_APPLICATION, target):
            extension.host.show_info(f"Using application {name}")


class AppAction:
    """nocalhost-local app action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "app",
                help="Manage applications",
                description="Install, uninstall and select applications",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        InstallAppAction.register(subcmds)
        UninstallAppAction.register(subcmds)
        UseAppAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs: Any,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        # No-op given subcommands are always the dispatch target
