"""Tests for the nocalhost-local command line actions."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from nocalhost_local.exceptions import InputException
from nocalhost_local.extension import Extension
from nocalhost_local.nhctl import ServiceProfile
from nocalhost_local.tool import nocalhost_local

from ..conftest import KUBE_CONFIG, RecordingHost

CONTEXT_ARGS = ["-a", "demo", "-n", "ns1", "--kubeconfig", KUBE_CONFIG]


async def run_action(extension: Extension, args: list[str]) -> None:
    """Parse the arguments and run the action against a test extension."""
    parsed = nocalhost_local._make_parser().parse_args(args)
    with patch.object(Extension, "create", AsyncMock(return_value=extension)):
        await parsed.cls().run(**vars(parsed))


async def test_install(extension: Extension, nhctl: AsyncMock) -> None:
    """Test installing an application from the command line."""
    await run_action(extension, ["app", "install", *CONTEXT_ARGS, "-u", "git@repo"])
    app = nhctl.install.await_args.args[0]
    assert app.app_name == "demo"
    assert app.namespace == "ns1"
    assert app.kube_config_path == KUBE_CONFIG
    assert app.url == "git@repo"


async def test_dev_start(extension: Extension, nhctl: AsyncMock) -> None:
    """Test entering development mode from the command line."""
    await run_action(
        extension, ["dev", "start", "web", "-k", "StatefulSet", *CONTEXT_ARGS]
    )
    target = nhctl.dev_start.await_args.args[0]
    assert target.kind == "StatefulSet"
    assert target.name == "web"


async def test_config_show(extension: Extension, host: RecordingHost) -> None:
    """Test printing the config of a workload."""
    await run_action(extension, ["config", "show", "web", *CONTEXT_ARGS])
    assert [doc[2] for doc in host.documents] == ["name: web\ncontainers: []\n"]


async def test_config_edit(
    extension: Extension, nhctl: AsyncMock, host: RecordingHost, tmp_path: Path
) -> None:
    """Test saving a config file for a workload with an override."""
    nhctl.describe.return_value = ServiceProfile(localconfigloaded=True)
    config_file = tmp_path / "web.yaml"
    config_file.write_text("name: web\nimage: busybox\n")
    await run_action(
        extension, ["config", "edit", "web", "-f", str(config_file), *CONTEXT_ARGS]
    )
    assert nhctl.edit_config.await_args.args[1] == "name: web\nimage: busybox\n"
    assert host.infos == ["Saved config for web"]


def test_main_error(capsys: pytest.CaptureFixture[str]) -> None:
    """Test errors are printed with a non-zero exit code."""
    with (
        patch("sys.argv", ["nocalhost-local", "app", "uninstall"]),
        patch.object(
            Extension,
            "create",
            AsyncMock(side_effect=InputException("not found nhctl")),
        ),
        pytest.raises(SystemExit) as exc_info,
    ):
        nocalhost_local.main()
    assert exc_info.value.code == 1
    assert "nocalhost-local error:  not found nhctl" in capsys.readouterr().err


async def test_app_use(
    extension: Extension, host: RecordingHost, user_config_path: Path
) -> None:
    """Test selecting the default application from the command line."""
    await run_action(extension, ["app", "use", "bookinfo", "-n", "ns1"])
    assert extension.user_config.selected_app == "bookinfo"
    assert '"selectedApp": "bookinfo"' in user_config_path.read_text()
    assert host.infos == ["Using application bookinfo"]
