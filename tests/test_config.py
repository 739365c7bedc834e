"""Tests for user configuration."""

import json
from pathlib import Path

import pytest

from nocalhost_local.config import (
    DEFAULT_KUBE_CONFIG_FULLPATH,
    UserConfig,
    read_user_config,
    write_user_config,
)
from nocalhost_local.exceptions import InputException


async def test_missing_config(tmp_path: Path) -> None:
    """Test a missing config file yields defaults."""
    config = await read_user_config(tmp_path / "config.json")
    assert config == UserConfig()
    assert config.kube_config_path == str(DEFAULT_KUBE_CONFIG_FULLPATH)


async def test_read_config(tmp_path: Path) -> None:
    """Test reading the keys written by the plugin."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "baseUrl": "http://nocalhost.example.com",
                "jwt": "token",
                "selectedApp": "demo",
                "currentKubeconfigFullpath": "/tmp/kubeconfig",
                "welcomeDidShow": True,
            }
        )
    )
    config = await read_user_config(path)
    assert config.base_url == "http://nocalhost.example.com"
    assert config.jwt == "token"
    assert config.selected_app == "demo"
    assert config.kube_config_path == "/tmp/kubeconfig"


async def test_write_config(tmp_path: Path) -> None:
    """Test writing omits unset values and uses the plugin keys."""
    path = tmp_path / "plugin" / "config.json"
    await write_user_config(UserConfig(base_url="http://api", selected_app="demo"), path)
    assert json.loads(path.read_text()) == {
        "baseUrl": "http://api",
        "selectedApp": "demo",
    }
    assert await read_user_config(path) == UserConfig(
        base_url="http://api", selected_app="demo"
    )


async def test_invalid_config(tmp_path: Path) -> None:
    """Test a corrupt config file."""
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(InputException, match="Invalid user config"):
        await read_user_config(path)


async def test_unwritable_config(tmp_path: Path) -> None:
    """Test a config directory blocked by a file is reported as an input error."""
    (tmp_path / "plugin").write_text("")
    path = tmp_path / "plugin" / "config.json"
    with pytest.raises(InputException, match="Unable to write user config"):
        await write_user_config(UserConfig(base_url="http://x"), path)


async def test_unreadable_config(tmp_path: Path) -> None:
    """Test a directory in place of the config file is reported as an input error."""
    path = tmp_path / "config.json"
    path.mkdir()
    with pytest.raises(InputException, match="Unable to read user config"):
        await read_user_config(path)
