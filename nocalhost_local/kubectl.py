"""Library for reading raw kubernetes resources with kubectl."""

import logging

from .command import Command, DEFAULT_TIMEOUT, run
from .exceptions import KubectlException

_LOGGER = logging.getLogger(__name__)

__all__ = ["Kubectl"]

KUBECTL_BIN = "kubectl"


class Kubectl:
    """Library for issuing kubectl commands."""

    def __init__(
        self, binary: str = KUBECTL_BIN, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        """Initialize Kubectl."""
        self._binary = binary
        self._timeout = timeout

    async def get_yaml(
        self, kind: str, name: str, namespace: str, kube_config_path: str
    ) -> str:
        """Return the resource as a yaml document."""
        cmd = Command(
            [
                self._binary,
                "get",
                kind,
                name,
                "-n",
                namespace,
                "--kubeconfig",
                kube_config_path,
                "-o",
                "yaml",
            ],
            exc=KubectlException,
            timeout=self._timeout,
        )
        return await run(cmd)

    def logs_command(
        self, kind: str, name: str, namespace: str, kube_config_path: str
    ) -> Command:
        """Command that follows the logs of a workload."""
        return Command(
            [
                self._binary,
                "logs",
                "-f",
                f"{kind.lower()}/{name}",
                "-n",
                namespace,
                "--kubeconfig",
                kube_config_path,
            ],
            exc=KubectlException,
            timeout=None,
        )
