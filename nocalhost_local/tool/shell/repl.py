"""nocalhost-local interactive shell implementation.

The shell runs in a worker thread while the extension lives on the event loop.
Every line is dispatched through the extension's command registry. Exclusive
commands run in the background so that status and config commands stay usable
while, for example, a workload is entering development mode.
"""

import asyncio
import cmd
import concurrent.futures
from argparse import ArgumentParser, Namespace
from dataclasses import dataclass, field
import logging
import shlex
import sys
from typing import Any, TextIO

from nocalhost_local import commands
from nocalhost_local.exceptions import NocalhostException
from nocalhost_local.extension import Extension
from nocalhost_local.identity import ResourceKind, WorkloadTarget
from nocalhost_local.tool import selector
from nocalhost_local.tool.format import StateFormatter


_LOGGER = logging.getLogger(__name__)


@dataclass
class WorkloadType:
    """Represents a workload kind in the shell."""

    kind: ResourceKind
    aliases: list[str] = field(default_factory=list)

    def matches(self, name: str) -> bool:
        """Check if this type matches the given name or alias."""
        return name.lower() in [
            self.kind.lower(),
            *[a.lower() for a in self.aliases],
        ]


class NocalhostShell(cmd.Cmd):
    """Interactive shell for nocalhost-local."""

    intro = (
        "Welcome to the nocalhost-local shell. Type 'help' for help, 'exit' to quit."
    )
    prompt = "nocalhost> "

    WORKLOAD_TYPES = [
        WorkloadType(ResourceKind.DEPLOYMENT, ["deploy", "deployments"]),
        WorkloadType(ResourceKind.STATEFUL_SET, ["sts", "statefulsets"]),
        WorkloadType(ResourceKind.DAEMON_SET, ["ds", "daemonsets"]),
        WorkloadType(ResourceKind.JOB, ["jobs"]),
        WorkloadType(ResourceKind.CRON_JOB, ["cj", "cronjobs"]),
        WorkloadType(ResourceKind.POD, ["po", "pods"]),
    ]

    def __init__(
        self,
        extension: Extension,
        loop: asyncio.AbstractEventLoop,
        app: str | None = None,
        namespace: str = selector.DEFAULT_NAMESPACE,
        kubeconfig: str | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        """Initialize the shell.

        Args:
            extension: The activated extension commands are dispatched to
            loop: The event loop the extension runs on
            app: The selected application
            namespace: Namespace the application is deployed to
            kubeconfig: Optional kube config path
            stdout: Optional stream for stdout (default: sys.stdout)
            stderr: Optional stream for stderr (default: sys.stderr)
        """
        super().__init__(
            stdin=sys.stdin,
            stdout=stdout if stdout is not None else sys.stdout,
        )
        self.extension = extension
        self.loop = loop
        self.app = app
        self.namespace = namespace
        self.kubeconfig = kubeconfig
        self.stderr = stderr if stderr is not None else sys.stderr
        self._background: set[concurrent.futures.Future[Any]] = set()

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        print(message, file=self.stderr)

    def _get_workload_type(self, name: str) -> WorkloadType | None:
        """Get workload type by kind or alias."""
        return next((wt for wt in self.WORKLOAD_TYPES if wt.matches(name)), None)

    def _dispatch(self, name: str, *args: Any, wait: bool = False) -> Any:
        """Run a command on the event loop.

        Exclusive commands run in the background unless `wait` is set, e.g. for
        interactive terminals that read from the same stdin as the shell.
        Returns the result of a command that was waited for, or None if it
        failed.
        """
        future = asyncio.run_coroutine_threadsafe(
            self.extension.execute(name, *args), self.loop
        )
        if self.extension.commands.is_exclusive(name) and not wait:
            self._background.add(future)
            future.add_done_callback(self._background_done)
            return None
        try:
            return future.result()
        except Exception as err:
            self.print_error(f"Error: {err}")
            return None

    def _background_done(self, future: concurrent.futures.Future[Any]) -> None:
        self._background.discard(future)
        if future.cancelled():
            return
        if (err := future.exception()) is not None:
            self.print_error(f"Error: {err}")

    async def wait_background(self) -> None:
        """Wait for exclusive commands started from the shell to finish."""
        if futures := [asyncio.wrap_future(f) for f in list(self._background)]:
            await asyncio.gather(*futures, return_exceptions=True)

    def _parse_workload_args(
        self, prog: str, arg: str, extra: list[str] | None = None
    ) -> Namespace | None:
        """Parse `<kind> <name>` with optional app and namespace overrides."""
        parser = ArgumentParser(prog=prog, add_help=False)
        parser.add_argument("kind", help="Workload kind (e.g., deployment, sts)")
        parser.add_argument("name", help="Workload name")
        for name in extra or []:
            parser.add_argument(name, nargs="*")
        parser.add_argument("-a", "--app", help="Application")
        parser.add_argument("-n", "--namespace", help="Namespace")
        try:
            if not arg.strip():
                print(
                    f"Usage: {prog} <kind> <name> [-a <app>] [-n <namespace>]",
                    file=self.stdout,
                )
                return None
            args, _ = parser.parse_known_args(shlex.split(arg))
        except SystemExit:
            # Handle argparse exit from help or error
            return None
        return args

    def _workload_target(self, args: Namespace) -> WorkloadTarget | None:
        if (workload_type := self._get_workload_type(args.kind)) is None:
            self.print_error(f"Unknown workload kind: {args.kind}")
            return None
        try:
            return selector.build_workload_target(
                self.extension.user_config,
                name=args.name,
                kind=str(workload_type.kind),
                app=args.app or self.app,
                namespace=args.namespace or self.namespace,
                kubeconfig=self.kubeconfig,
            )
        except NocalhostException as err:
            self.print_error(f"Error: {err}")
            return None

    def _workload_command(
        self, command: str, prog: str, arg: str, wait: bool = False
    ) -> None:
        if (args := self._parse_workload_args(prog, arg)) is None:
            return
        if (target := self._workload_target(args)) is None:
            return
        self._dispatch(command, target, wait=wait)

    def do_use(self, arg: str) -> None:
        """Select the application used by other commands.

        The selection is saved to the user config.

        Examples:
            use bookinfo
        """
        if not (name := arg.strip()):
            print(f"Selected application: {self.app or '<none>'}", file=self.stdout)
            return
        target = selector.build_app_target(
            self.extension.user_config,
            app=name,
            namespace=self.namespace,
            kubeconfig=self.kubeconfig,
        )
        if self._dispatch(commands.USE_APPLICATION, target, wait=True) is None:
            return
        self.app = name
        print(f"Using application {self.app}", file=self.stdout)

    def do_status(self, arg: str) -> None:
        """Show the runtime state of an application.

        Examples:
            status
            status bookinfo
        """
        if not (app := arg.strip() or self.app):
            self.print_error("Error: you must select one app")
            return
        if not StateFormatter(self.extension.store, app).print(file=self.stdout):
            print("No state found", file=self.stdout)

    def do_config(self, arg: str) -> None:
        """Open the development config of a workload.

        Examples:
            config deployment productpage
            config sts mysql -a bookinfo -n demo
        """
        self._workload_command(commands.WRITE_SERVICE_CONFIG, "config", arg)

    def do_resource(self, arg: str) -> None:
        """Show the yaml of a workload, or the config of the application.

        Examples:
            resource
            resource deployment productpage
        """
        if arg.strip():
            self._workload_command(commands.LOAD_RESOURCE, "resource", arg)
            return
        try:
            target = selector.build_app_target(
                self.extension.user_config,
                app=self.app,
                namespace=self.namespace,
                kubeconfig=self.kubeconfig,
            )
        except NocalhostException as err:
            self.print_error(f"Error: {err}")
            return
        self._dispatch(commands.LOAD_RESOURCE, target)

    def do_dev(self, arg: str) -> None:
        """Enter or exit development mode for a workload.

        Examples:
            dev start deployment productpage
            dev end deployment productpage
        """
        action, _, rest = arg.strip().partition(" ")
        command = {
            "start": commands.ENTRY_DEV_SPACE,
            "end": commands.EXIT_DEV_SPACE,
        }.get(action)
        if command is None:
            print("Usage: dev start|end <kind> <name>", file=self.stdout)
            return
        self._workload_command(command, f"dev {action}", rest)

    def do_exec(self, arg: str) -> None:
        """Open a shell in the development container of a workload.

        The shell prompt returns once the container shell exits.
        """
        self._workload_command(commands.EXEC, "exec", arg, wait=True)

    def do_log(self, arg: str) -> None:
        """Follow the logs of a workload."""
        self._workload_command(commands.LOG, "log", arg)

    def do_forward(self, arg: str) -> None:
        """Forward local ports to a workload.

        Examples:
            forward deployment productpage 9080:9080
        """
        if (args := self._parse_workload_args("forward", arg, ["ports"])) is None:
            return
        if (target := self._workload_target(args)) is None:
            return
        self._dispatch(commands.PORT_FORWARD, target, args.ports)

    def do_install(self, arg: str) -> None:
        """Install the selected application, optionally from a git url.

        Examples:
            install
            install https://github.com/nocalhost/bookinfo.git
        """
        self._app_command(commands.INSTALL_APP, url=arg.strip() or None)

    def do_uninstall(self, arg: str) -> None:
        """Uninstall the selected application."""
        self._app_command(commands.UNINSTALL_APP)

    def _app_command(self, command: str, url: str | None = None) -> None:
        try:
            target = selector.build_app_target(
                self.extension.user_config,
                app=self.app,
                namespace=self.namespace,
                kubeconfig=self.kubeconfig,
                url=url,
            )
        except NocalhostException as err:
            self.print_error(f"Error: {err}")
            return
        self._dispatch(command, target)

    def do_endpoint(self, arg: str) -> None:
        """Switch the api server url.

        Examples:
            endpoint http://nocalhost.example.com
        """
        if not arg.strip():
            print("Usage: endpoint <url>", file=self.stdout)
            return
        self._dispatch(commands.SWITCH_ENDPOINT, arg.strip())

    def do_refresh(self, arg: str) -> None:
        """Refresh the application list."""
        self._dispatch(commands.REFRESH_APPLICATION)

    def do_signout(self, arg: str) -> None:
        """Sign out of the api server."""
        self._dispatch(commands.SIGN_OUT)

    def emptyline(self) -> bool:
        """Do nothing on an empty line."""
        return False

    def do_exit(self, arg: str) -> bool:
        """Exit the shell."""
        print("Exiting nocalhost-local shell", file=self.stdout)
        return True

    def do_quit(self, arg: str) -> bool:
        """Exit the shell (alias for exit)."""
        return self.do_exit(arg)

    def do_EOF(self, arg: str) -> bool:
        """Handle EOF (Ctrl+D) to exit the shell."""
        print("\n", file=self.stdout, end="")
        self.stdout.flush()
        return self.do_exit(arg)
