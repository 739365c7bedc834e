"""Library for common target selectors."""

from argparse import ArgumentParser
import logging
from typing import Any

from nocalhost_local.config import UserConfig
from nocalhost_local.exceptions import InputException
from nocalhost_local.identity import (
    AppTarget,
    ResourceIdentity,
    ResourceKind,
    WorkloadTarget,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"


def add_context_flags(args: ArgumentParser) -> None:
    """Add flags selecting the cluster and application."""
    args.add_argument(
        "--kubeconfig",
        help="Path to the kube config, defaults to the configured or ~/.kube/config",
        type=str,
        default=None,
    )
    args.add_argument(
        "--namespace",
        "-n",
        help="Namespace the application is deployed to",
        type=str,
        default=DEFAULT_NAMESPACE,
    )
    args.add_argument(
        "--app",
        "-a",
        help="Application name, defaults to the selected application",
        type=str,
        default=None,
    )


def add_workload_flags(args: ArgumentParser) -> None:
    """Add flags selecting a workload of an application."""
    add_context_flags(args)
    args.add_argument(
        "--kind",
        "-k",
        help="Kind of the workload",
        choices=[str(kind) for kind in ResourceKind],
        default=str(ResourceKind.DEPLOYMENT),
    )
    args.add_argument(
        "name",
        help="Name of the workload",
        type=str,
    )


def _app_name(user_config: UserConfig, app: str | None) -> str:
    if app := app or user_config.selected_app:
        return app
    raise InputException("you must select one app")


def build_workload_target(
    user_config: UserConfig,
    name: str,
    kind: str = str(ResourceKind.DEPLOYMENT),
    app: str | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    kubeconfig: str | None = None,
    **kwargs: Any,
) -> WorkloadTarget:
    """Build a WorkloadTarget from command line flags."""
    return WorkloadTarget(
        identity=ResourceIdentity(
            app_name=_app_name(user_config, app),
            namespace=namespace,
            kind=kind,
            name=name,
        ),
        kube_config_path=kubeconfig or user_config.kube_config_path,
    )


def build_app_target(
    user_config: UserConfig,
    app: str | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    kubeconfig: str | None = None,
    url: str | None = None,
    **kwargs: Any,
) -> AppTarget:
    """Build an AppTarget from command line flags."""
    return AppTarget(
        app_name=_app_name(user_config, app),
        kube_config_path=kubeconfig or user_config.kube_config_path,
        namespace=namespace,
        url=url,
    )
