"""Tests for the application and workload operations."""

from unittest.mock import AsyncMock

import pytest

from nocalhost_local.exceptions import NhctlException
from nocalhost_local.identity import AppTarget, WorkloadTarget, status_key
from nocalhost_local.service import APP_INSTALLED_KEY, NocalhostService
from nocalhost_local.store import InMemoryAppStateStore, StateChange, get_status

from .conftest import RecordingHost


@pytest.fixture
def store() -> InMemoryAppStateStore:
    return InMemoryAppStateStore()


@pytest.fixture
def service(
    nhctl: AsyncMock,
    kubectl: AsyncMock,
    store: InMemoryAppStateStore,
    host: RecordingHost,
) -> NocalhostService:
    return NocalhostService(nhctl, kubectl, store, host)


async def test_entry_dev_space(
    service: NocalhostService,
    store: InMemoryAppStateStore,
    host: RecordingHost,
    workload: WorkloadTarget,
) -> None:
    """Test entering dev mode walks the workload through its statuses."""
    events: list[StateChange] = []
    store.add_listener(events.append)

    await service.entry_dev_space(workload, subject="node")

    assert [event.value for event in events] == ["Starting", "Developing"]
    assert all(event.subject == "node" for event in events)
    assert get_status(store, workload.identity) == "Developing"
    assert host.output == ["dev start\n"]
    assert host.infos == ["Starting DevMode: web", "DevMode started: web"]


async def test_entry_dev_space_failure(
    service: NocalhostService,
    nhctl: AsyncMock,
    store: InMemoryAppStateStore,
    workload: WorkloadTarget,
) -> None:
    """Test a failed dev start clears the status and propagates."""
    nhctl.dev_start.side_effect = NhctlException("image pull failed")
    with pytest.raises(NhctlException, match="image pull failed"):
        await service.entry_dev_space(workload)
    assert get_status(store, workload.identity) is None


async def test_exit_dev_space(
    service: NocalhostService,
    store: InMemoryAppStateStore,
    workload: WorkloadTarget,
) -> None:
    """Test exiting dev mode removes the status."""
    await service.entry_dev_space(workload)
    await service.exit_dev_space(workload)
    assert get_status(store, workload.identity) is None
    assert store.keys("demo") == []


async def test_exit_dev_space_failure(
    service: NocalhostService,
    nhctl: AsyncMock,
    store: InMemoryAppStateStore,
    workload: WorkloadTarget,
) -> None:
    """Test a failed dev end restores the previous status."""
    await service.entry_dev_space(workload)
    nhctl.dev_end.side_effect = NhctlException("timeout")
    with pytest.raises(NhctlException):
        await service.exit_dev_space(workload)
    assert get_status(store, workload.identity) == "Developing"


async def test_install_uninstall(
    service: NocalhostService,
    store: InMemoryAppStateStore,
    host: RecordingHost,
    app: AppTarget,
    workload: WorkloadTarget,
) -> None:
    """Test install marks the app and uninstall drops all of its state."""
    await service.install(app)
    assert store.get("demo", APP_INSTALLED_KEY) is True
    await service.entry_dev_space(workload)
    store.set("other", "key", "value")

    await service.uninstall(app)

    assert store.keys("demo") == []
    assert store.get("demo", status_key(workload.identity)) is None
    assert store.get("other", "key") == "value"
    assert host.output[0] == "installed\n"
    assert host.output[-1] == "uninstalled\n"


async def test_install_failure(
    service: NocalhostService,
    nhctl: AsyncMock,
    store: InMemoryAppStateStore,
    app: AppTarget,
) -> None:
    """Test a failed install leaves no state behind."""
    nhctl.install.side_effect = NhctlException("helm failed")
    with pytest.raises(NhctlException):
        await service.install(app)
    assert store.keys("demo") == []


async def test_uninstall_failure(
    service: NocalhostService,
    nhctl: AsyncMock,
    store: InMemoryAppStateStore,
    app: AppTarget,
) -> None:
    """Test a failed uninstall keeps the application state."""
    await service.install(app)
    nhctl.uninstall.side_effect = NhctlException("forbidden")
    with pytest.raises(NhctlException):
        await service.uninstall(app)
    assert store.keys("demo") == [APP_INSTALLED_KEY]


async def test_terminal_commands(
    service: NocalhostService,
    nhctl: AsyncMock,
    kubectl: AsyncMock,
    host: RecordingHost,
    workload: WorkloadTarget,
) -> None:
    """Test interactive commands are handed to a terminal."""
    await service.exec(workload)
    await service.log(workload)
    await service.port_forward(workload, ["8080:80"])
    assert [name for name, _ in host.terminals] == [
        "web-exec",
        "web-log",
        "web-port-forward",
    ]
    nhctl.exec_command.assert_called_once_with(workload)
    nhctl.port_forward_command.assert_called_once_with(workload, ["8080:80"])
    kubectl.logs_command.assert_called_once_with(
        "Deployment", "web", "ns1", workload.kube_config_path
    )
