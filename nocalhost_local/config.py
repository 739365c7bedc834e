"""Configuration objects for nocalhost-local."""

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path

import aiofiles
from aiofiles.ospath import exists
from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig

from .command import DEFAULT_TIMEOUT
from .exceptions import InputException

_LOGGER = logging.getLogger(__name__)

HOME_DIR = Path.home()
NH_CONFIG_DIR = HOME_DIR / ".nh"
PLUGIN_CONFIG_DIR = NH_CONFIG_DIR / "plugin"
USER_CONFIG_FULLPATH = PLUGIN_CONFIG_DIR / "config.json"
KUBE_CONFIG_DIR = PLUGIN_CONFIG_DIR / "kubeConfigs"
DEFAULT_KUBE_CONFIG_FULLPATH = HOME_DIR / ".kube" / "config"


@dataclass
class ExtensionConfig:
    """Configuration for the external tools invoked by commands."""

    nhctl_bin: str = "nhctl"
    kubectl_bin: str = "kubectl"
    command_timeout: float = DEFAULT_TIMEOUT
    check_binaries: bool = True
    """Verify the binaries are on the PATH when activating."""


@dataclass
class UserConfig(DataClassDictMixin):
    """Persisted user settings."""

    base_url: str | None = field(
        default=None, metadata=field_options(alias="baseUrl")
    )
    jwt: str | None = None
    username: str | None = None
    selected_app: str | None = field(
        default=None, metadata=field_options(alias="selectedApp")
    )
    current_kube_config: str | None = field(
        default=None, metadata=field_options(alias="currentKubeconfigFullpath")
    )

    @property
    def kube_config_path(self) -> str:
        """Kube config used for commands when none is given explicitly."""
        return self.current_kube_config or str(DEFAULT_KUBE_CONFIG_FULLPATH)

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


async def read_user_config(path: Path = USER_CONFIG_FULLPATH) -> UserConfig:
    """Return the user config stored at the path, or defaults if missing."""
    if not await exists(path):
        _LOGGER.debug("No user config at %s, using defaults", path)
        return UserConfig()
    try:
        async with aiofiles.open(str(path)) as config_file:
            content = await config_file.read()
    except OSError as err:
        raise InputException(f"Unable to read user config {path}: {err}") from err
    if not content.strip():
        return UserConfig()
    try:
        return UserConfig.from_dict(json.loads(content))
    except ValueError as err:
        raise InputException(f"Invalid user config file {path}: {err}") from err


async def write_user_config(
    config: UserConfig, path: Path = USER_CONFIG_FULLPATH
) -> None:
    """Write the user config to disk."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(str(path), mode="w") as config_file:
            await config_file.write(json.dumps(config.to_dict(), indent=2))
    except OSError as err:
        raise InputException(f"Unable to write user config {path}: {err}") from err
