"""Wiring of the extension services and the commands it exposes.

An `Extension` is constructed once per process. It owns the state store, the
command lock and every collaborator, and each command handler reaches them
through the extension instance rather than through module globals.
"""

from collections.abc import Awaitable, Callable
import logging
from pathlib import Path
from typing import Any

from . import commands
from .command import check_binaries
from .commands import CommandRegistry
from .config import (
    ExtensionConfig,
    USER_CONFIG_FULLPATH,
    UserConfig,
    read_user_config,
    write_user_config,
)
from .document import VirtualDocumentProvider, app_uri, resource_uri
from .exceptions import InputException
from .host import Host
from .identity import AppTarget, TargetKind, WorkloadTarget
from .kubectl import Kubectl
from .lock import CommandLock
from .nhctl import Nhctl
from .resolver import ConfigResolver, document_name
from .service import NocalhostService
from .store import AppStateStore, InMemoryAppStateStore, StateChange

_LOGGER = logging.getLogger(__name__)

__all__ = ["Extension"]

Target = AppTarget | WorkloadTarget


def _require(target: Target | None, kind: TargetKind) -> Any:
    if target is None or target.target_kind != kind:
        raise InputException(f"Command requires a {kind.value} target, got {target}")
    return target


_DOCUMENT_URIS: dict[TargetKind, Callable[[Any], str]] = {
    TargetKind.WORKLOAD: lambda t: resource_uri(
        t.kind, t.name, t.namespace, t.kube_config_path
    ),
    TargetKind.APPLICATION: lambda t: app_uri(
        t.app_name, t.namespace, t.kube_config_path
    ),
}


class Extension:
    """Owns the services shared by every command."""

    def __init__(
        self,
        host: Host,
        config: ExtensionConfig | None = None,
        user_config: UserConfig | None = None,
        user_config_path: Path = USER_CONFIG_FULLPATH,
        store: AppStateStore | None = None,
        nhctl: Nhctl | None = None,
        kubectl: Kubectl | None = None,
    ) -> None:
        """Initialize the Extension and its collaborators."""
        self.config = config or ExtensionConfig()
        self.host = host
        self.user_config = user_config or UserConfig()
        self.user_config_path = user_config_path
        self.store = store or InMemoryAppStateStore()
        self.lock = CommandLock()
        self.nhctl = nhctl or Nhctl(self.config.nhctl_bin, self.config.command_timeout)
        self.kubectl = kubectl or Kubectl(
            self.config.kubectl_bin, self.config.command_timeout
        )
        self.resolver = ConfigResolver(self.nhctl)
        self.documents = VirtualDocumentProvider(self.nhctl, self.kubectl)
        self.service = NocalhostService(self.nhctl, self.kubectl, self.store, host)
        self.commands = CommandRegistry(self.lock, host)
        self._disposables: list[Callable[[], None]] = []

    @classmethod
    async def create(
        cls,
        host: Host,
        config: ExtensionConfig | None = None,
        user_config_path: Path = USER_CONFIG_FULLPATH,
    ) -> "Extension":
        """Create an activated extension using the stored user config."""
        user_config = await read_user_config(user_config_path)
        extension = cls(
            host,
            config=config,
            user_config=user_config,
            user_config_path=user_config_path,
        )
        extension.activate()
        return extension

    def activate(self) -> None:
        """Register every command and start forwarding state changes."""
        if self.config.check_binaries:
            check_binaries([self.config.nhctl_bin, self.config.kubectl_bin])
        self._disposables.append(self.store.add_listener(self._on_state_change))
        for name, exclusive, handler in self._command_table():
            self._disposables.append(self.commands.register(name, exclusive, handler))
        _LOGGER.debug("Activated with commands: %s", self.commands.names)

    def deactivate(self) -> None:
        """Unregister commands and listeners."""
        while self._disposables:
            self._disposables.pop()()

    async def execute(self, name: str, *args: Any) -> Any:
        """Run a registered command."""
        return await self.commands.execute(name, *args)

    async def open_document(self, uri: str) -> str:
        """Materialize a virtual document and show it."""
        content = await self.documents.provide_content(uri)
        self.host.show_document(document_name(uri), uri, content)
        return content

    def _on_state_change(self, change: StateChange) -> None:
        self.host.refresh(change.subject)

    def _command_table(
        self,
    ) -> list[tuple[str, bool, Callable[..., Awaitable[Any]]]]:
        return [
            (commands.INSTALL_APP, True, self._install_app),
            (commands.UNINSTALL_APP, True, self._uninstall_app),
            (commands.ENTRY_DEV_SPACE, True, self._entry_dev_space),
            (commands.EXIT_DEV_SPACE, True, self._exit_dev_space),
            (commands.EXEC, True, self._exec),
            (commands.USE_APPLICATION, True, self._use_application),
            (commands.WRITE_SERVICE_CONFIG, False, self._write_service_config),
            (commands.LOAD_RESOURCE, False, self._load_resource),
            (commands.LOG, False, self._log),
            (commands.PORT_FORWARD, False, self._port_forward),
            (commands.SWITCH_ENDPOINT, False, self._switch_endpoint),
            (commands.REFRESH_APPLICATION, False, self._refresh_application),
            (commands.SIGN_OUT, False, self._sign_out),
        ]

    async def _install_app(self, target: AppTarget | None) -> None:
        app = _require(target, TargetKind.APPLICATION)
        await self.service.install(app, subject=app)

    async def _uninstall_app(self, target: AppTarget | None) -> None:
        app = _require(target, TargetKind.APPLICATION)
        await self.service.uninstall(app, subject=app)

    async def _entry_dev_space(self, target: WorkloadTarget | None) -> None:
        workload = _require(target, TargetKind.WORKLOAD)
        await self.service.entry_dev_space(workload, subject=workload)

    async def _exit_dev_space(self, target: WorkloadTarget | None) -> None:
        workload = _require(target, TargetKind.WORKLOAD)
        await self.service.exit_dev_space(workload, subject=workload)

    async def _exec(self, target: WorkloadTarget | None) -> None:
        await self.service.exec(_require(target, TargetKind.WORKLOAD))

    async def _use_application(self, target: AppTarget | None) -> str:
        app = _require(target, TargetKind.APPLICATION)
        self.user_config.selected_app = app.app_name
        await write_user_config(self.user_config, self.user_config_path)
        self.host.refresh()
        return app.app_name

    async def _write_service_config(self, target: WorkloadTarget | None) -> str:
        workload = _require(target, TargetKind.WORKLOAD)
        resolution = await self.resolver.resolve(workload)
        await self.open_document(resolution.uri)
        return resolution.uri

    async def _load_resource(self, target: Target | None) -> str:
        if target is None:
            raise InputException("Command requires a target")
        uri = _DOCUMENT_URIS[target.target_kind](target)
        await self.open_document(uri)
        return uri

    async def _log(self, target: WorkloadTarget | None) -> None:
        await self.service.log(_require(target, TargetKind.WORKLOAD))

    async def _port_forward(
        self, target: WorkloadTarget | None, ports: list[str] | None = None
    ) -> None:
        workload = _require(target, TargetKind.WORKLOAD)
        if not ports:
            if not (value := self.host.prompt("input the ports, e.g. 8080:80")):
                return
            ports = value.split()
        await self.service.port_forward(workload, ports)

    async def _switch_endpoint(self, url: str | None = None) -> None:
        if url is None:
            url = self.host.prompt("input your api server url")
        if not url:
            return
        self.user_config.base_url = url
        await write_user_config(self.user_config, self.user_config_path)
        self.host.show_info("configured api server")
        await self.execute(commands.REFRESH_APPLICATION)

    async def _refresh_application(self) -> None:
        self.host.refresh()

    async def _sign_out(self) -> None:
        self.user_config.jwt = None
        await write_user_config(self.user_config, self.user_config_path)
        self.host.refresh()
