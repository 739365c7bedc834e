"""Application and workload operations.

The service marshals parameters into nhctl invocations and reports progress
into the application state store. It holds no locks itself: callers that need
mutual exclusion run these operations as exclusive commands.
"""

import logging
from typing import Any

from .exceptions import NocalhostException
from .host import Host
from .identity import AppTarget, WorkloadTarget
from .kubectl import Kubectl
from .nhctl import Nhctl
from .store import AppStateStore, WorkloadStatus, get_status, set_status

_LOGGER = logging.getLogger(__name__)

__all__ = ["NocalhostService", "APP_INSTALLED_KEY"]

APP_INSTALLED_KEY = "installed"
APP_STATUS_KEY = "_status"


class NocalhostService:
    """Runs nhctl operations and tracks their state."""

    def __init__(
        self, nhctl: Nhctl, kubectl: Kubectl, store: AppStateStore, host: Host
    ) -> None:
        """Initialize NocalhostService."""
        self._nhctl = nhctl
        self._kubectl = kubectl
        self._store = store
        self._host = host

    async def install(self, app: AppTarget, subject: Any = None) -> None:
        """Install the application."""
        self._host.show_info(f"Installing application: {app.app_name}")
        self._store.set(
            app.app_name,
            APP_STATUS_KEY,
            str(WorkloadStatus.INSTALLING),
            refresh=True,
            subject=subject,
        )
        try:
            self._host.append_output(await self._nhctl.install(app))
        finally:
            self._store.delete(
                app.app_name, APP_STATUS_KEY, refresh=True, subject=subject
            )
        self._store.set(
            app.app_name, APP_INSTALLED_KEY, True, refresh=True, subject=subject
        )
        self._host.show_info(f"Application {app.app_name} installed")

    async def uninstall(self, app: AppTarget, subject: Any = None) -> None:
        """Uninstall the application and forget its state."""
        self._host.show_info(f"Uninstalling application: {app.app_name}")
        self._store.set(
            app.app_name,
            APP_STATUS_KEY,
            str(WorkloadStatus.UNINSTALLING),
            refresh=True,
            subject=subject,
        )
        try:
            self._host.append_output(await self._nhctl.uninstall(app))
        except NocalhostException:
            self._store.delete(
                app.app_name, APP_STATUS_KEY, refresh=True, subject=subject
            )
            raise
        self._store.clear_app(app.app_name, refresh=True)
        self._host.show_info(f"Application {app.app_name} uninstalled")

    async def entry_dev_space(
        self, target: WorkloadTarget, subject: Any = None
    ) -> None:
        """Switch the workload into development mode."""
        self._host.show_info(f"Starting DevMode: {target.name}")
        set_status(self._store, target.identity, WorkloadStatus.STARTING, subject)
        try:
            self._host.append_output(await self._nhctl.dev_start(target))
        except NocalhostException:
            _LOGGER.error("Failed to start DevMode for %s", target.identity)
            set_status(self._store, target.identity, None, subject)
            raise
        set_status(self._store, target.identity, WorkloadStatus.DEVELOPING, subject)
        self._host.show_info(f"DevMode started: {target.name}")

    async def exit_dev_space(
        self, target: WorkloadTarget, subject: Any = None
    ) -> None:
        """Restore the workload from development mode."""
        self._host.show_info(f"Ending DevMode: {target.name}")
        previous = get_status(self._store, target.identity)
        set_status(self._store, target.identity, WorkloadStatus.ENDING, subject)
        try:
            self._host.append_output(await self._nhctl.dev_end(target))
        except NocalhostException:
            _LOGGER.error("Failed to end DevMode for %s", target.identity)
            set_status(self._store, target.identity, previous, subject)
            raise
        set_status(self._store, target.identity, None, subject)
        self._host.show_info(f"DevMode ended: {target.name}")

    async def exec(self, target: WorkloadTarget) -> None:
        """Open a shell in the development container."""
        await self._host.run_terminal(
            f"{target.name}-exec", self._nhctl.exec_command(target)
        )

    async def log(self, target: WorkloadTarget) -> None:
        """Follow the logs of the workload."""
        await self._host.run_terminal(
            f"{target.name}-log",
            self._kubectl.logs_command(
                target.kind, target.name, target.namespace, target.kube_config_path
            ),
        )

    async def port_forward(self, target: WorkloadTarget, ports: list[str]) -> None:
        """Forward local ports to the workload."""
        await self._host.run_terminal(
            f"{target.name}-port-forward",
            self._nhctl.port_forward_command(target, ports),
        )
