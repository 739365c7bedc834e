"""Fixtures shared by the nocalhost-local tests."""

from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from nocalhost_local.command import Command
from nocalhost_local.config import ExtensionConfig, UserConfig
from nocalhost_local.extension import Extension
from nocalhost_local.host import Host
from nocalhost_local.identity import AppTarget, ResourceIdentity, WorkloadTarget
from nocalhost_local.kubectl import Kubectl
from nocalhost_local.nhctl import Nhctl, ServiceProfile

KUBE_CONFIG = "/home/dev/.kube/config"


@dataclass
class RecordingHost(Host):
    """Host that records everything shown to the user."""

    infos: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    output: list[str] = field(default_factory=list)
    documents: list[tuple[str, str, str]] = field(default_factory=list)
    refreshed: list[Any] = field(default_factory=list)
    terminals: list[tuple[str, Command]] = field(default_factory=list)
    answers: list[str | None] = field(default_factory=list)

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def append_output(self, text: str) -> None:
        self.output.append(text)

    def show_document(self, name: str, uri: str, content: str) -> None:
        self.documents.append((name, uri, content))

    def refresh(self, subject: Any = None) -> None:
        self.refreshed.append(subject)

    def prompt(self, placeholder: str) -> str | None:
        return self.answers.pop(0) if self.answers else None

    async def run_terminal(self, name: str, cmd: Command) -> None:
        self.terminals.append((name, cmd))


@pytest.fixture
def host() -> RecordingHost:
    """Return a host recording messages."""
    return RecordingHost()


@pytest.fixture
def identity() -> ResourceIdentity:
    """Return the identity of a test workload."""
    return ResourceIdentity(
        app_name="demo", namespace="ns1", kind="Deployment", name="web"
    )


@pytest.fixture
def workload(identity: ResourceIdentity) -> WorkloadTarget:
    """Return a test workload target."""
    return WorkloadTarget(identity=identity, kube_config_path=KUBE_CONFIG)


@pytest.fixture
def app() -> AppTarget:
    """Return a test application target."""
    return AppTarget(app_name="demo", kube_config_path=KUBE_CONFIG, namespace="ns1")


@pytest.fixture
def nhctl() -> AsyncMock:
    """Return a mock nhctl reporting no config overrides."""
    mock = AsyncMock(spec=Nhctl)
    mock.describe.return_value = ServiceProfile(name="web")
    mock.get_config.return_value = "name: web\n"
    mock.get_config_template.return_value = "name: web\ncontainers: []\n"
    mock.install.return_value = "installed\n"
    mock.uninstall.return_value = "uninstalled\n"
    mock.dev_start.return_value = "dev start\n"
    mock.dev_end.return_value = "dev end\n"
    return mock


@pytest.fixture
def kubectl() -> AsyncMock:
    """Return a mock kubectl."""
    mock = AsyncMock(spec=Kubectl)
    mock.get_yaml.return_value = "kind: Deployment\n"
    return mock


@pytest.fixture
def user_config_path(tmp_path: Path) -> Path:
    """Return a path for the user config inside the test directory."""
    return tmp_path / "plugin" / "config.json"


@pytest.fixture
def extension(
    host: RecordingHost,
    nhctl: AsyncMock,
    kubectl: AsyncMock,
    user_config_path: Path,
) -> Generator[Extension, None, None]:
    """Return an activated extension wired to mock command line tools."""
    extension = Extension(
        host,
        config=ExtensionConfig(check_binaries=False),
        user_config=UserConfig(selected_app="demo"),
        user_config_path=user_config_path,
        nhctl=nhctl,
        kubectl=kubectl,
    )
    extension.activate()
    yield extension
    extension.deactivate()
