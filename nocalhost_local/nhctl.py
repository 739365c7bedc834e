"""Library for issuing nhctl commands against an application in a cluster.

nhctl does the actual work of installing applications and swapping workloads
into development mode. This module only builds command lines and interprets
their output:

```python
from nocalhost_local.nhctl import Nhctl

profile = await Nhctl().describe(target)
if profile.localconfigloaded:
    print("Using local config override")
```
"""

import base64
from dataclasses import dataclass
import logging

import yaml
from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig

from .command import Command, DEFAULT_TIMEOUT, run
from .exceptions import NhctlException
from .identity import AppTarget, WorkloadTarget

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "Nhctl",
    "ServiceProfile",
]

NHCTL_BIN = "nhctl"


@dataclass
class ServiceProfile(DataClassDictMixin):
    """Runtime description of a workload reported by `nhctl describe`."""

    name: str | None = None
    developing: bool = False
    portforwarded: bool = False
    localconfigloaded: bool = False
    """A local override config file is in use."""

    cmconfigloaded: bool = False
    """A config stored in a config map is in use."""

    class Config(BaseConfig):
        omit_none = True

    @classmethod
    def parse_yaml(cls, content: str) -> "ServiceProfile":
        """Parse the output of `nhctl describe`."""
        try:
            doc = yaml.safe_load(content)
        except yaml.YAMLError as err:
            raise NhctlException(f"Unable to parse service profile: {err}") from err
        if not isinstance(doc, dict):
            raise NhctlException(f"Unexpected service profile output: {content!r}")
        try:
            return cls.from_dict(doc)
        except ValueError as err:
            raise NhctlException(f"Invalid service profile: {err}") from err


def _kube_args(kube_config_path: str, namespace: str) -> list[str]:
    return ["--kubeconfig", kube_config_path, "-n", namespace]


def _workload_args(target: WorkloadTarget) -> list[str]:
    return [
        target.app_name,
        "-d",
        target.name,
        "--controller-type",
        target.kind,
        *_kube_args(target.kube_config_path, target.namespace),
    ]


class Nhctl:
    """Library for issuing nhctl commands."""

    def __init__(
        self, binary: str = NHCTL_BIN, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        """Initialize Nhctl."""
        self._binary = binary
        self._timeout = timeout

    def command(self, args: list[str], stream: bool = False) -> Command:
        """Build an nhctl command, without a timeout for long running streams."""
        return Command(
            [self._binary, *args],
            exc=NhctlException,
            timeout=None if stream else self._timeout,
        )

    async def _run(self, args: list[str]) -> str:
        return await run(self.command(args))

    async def describe(self, target: WorkloadTarget) -> ServiceProfile:
        """Return the service profile of a workload."""
        out = await self._run(["describe", *_workload_args(target)])
        return ServiceProfile.parse_yaml(out)

    async def get_config(self, target: WorkloadTarget) -> str:
        """Return the loaded config of a workload (local or config map)."""
        return await self._run(["config", "get", *_workload_args(target)])

    async def get_config_template(self, target: WorkloadTarget) -> str:
        """Return a generated default config for a workload."""
        return await self._run(["config", "template", *_workload_args(target)])

    async def edit_config(self, target: WorkloadTarget, content: str) -> None:
        """Store an edited config for the workload."""
        encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")
        await self._run(["config", "edit", *_workload_args(target), "-c", encoded])

    async def get_app_config(
        self, app_name: str, namespace: str, kube_config_path: str
    ) -> str:
        """Return the config of a whole application."""
        return await self._run(
            ["config", "get", app_name, *_kube_args(kube_config_path, namespace)]
        )

    async def install(self, app: AppTarget) -> str:
        """Install an application into the namespace."""
        args = [
            "install",
            app.app_name,
            *_kube_args(app.kube_config_path, app.namespace),
        ]
        if app.url:
            args.extend(["-u", app.url])
        return await self._run(args)

    async def uninstall(self, app: AppTarget) -> str:
        """Uninstall an application from the namespace."""
        return await self._run(
            [
                "uninstall",
                app.app_name,
                "--force",
                *_kube_args(app.kube_config_path, app.namespace),
            ]
        )

    async def dev_start(self, target: WorkloadTarget) -> str:
        """Replace the workload with a development container."""
        return await self._run(["dev", "start", *_workload_args(target)])

    async def dev_end(self, target: WorkloadTarget) -> str:
        """Restore the original workload."""
        return await self._run(["dev", "end", *_workload_args(target)])

    def exec_command(self, target: WorkloadTarget) -> Command:
        """Command opening an interactive shell in the development container."""
        return self.command(
            ["exec", *_workload_args(target), "-c", "/bin/sh"], stream=True
        )

    def port_forward_command(
        self, target: WorkloadTarget, ports: list[str]
    ) -> Command:
        """Command forwarding local ports to the workload, e.g. `8080:80`."""
        args = ["port-forward", "start", *_workload_args(target)]
        for port in ports:
            args.extend(["-p", port])
        return self.command(args, stream=True)
