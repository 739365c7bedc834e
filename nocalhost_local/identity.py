"""Identifiers for applications and workloads.

Every piece of per-resource state is keyed off a `ResourceIdentity`. The
identity is rendered into a flat key with `derive_key`, which is the key
used by the state store and embedded in virtual document URIs.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum

from .exceptions import InputException

__all__ = [
    "ResourceIdentity",
    "ResourceKind",
    "TargetKind",
    "AppTarget",
    "WorkloadTarget",
    "derive_key",
    "status_key",
]

KEY_SEPARATOR = "/"
STATUS_SUFFIX = "_status"


class ResourceKind(StrEnum):
    """Workload kinds understood by nhctl."""

    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"
    DAEMON_SET = "DaemonSet"
    JOB = "Job"
    CRON_JOB = "CronJob"
    POD = "Pod"


@dataclass(frozen=True)
class ResourceIdentity:
    """Identifier for a workload that belongs to an application."""

    app_name: str
    namespace: str
    kind: str
    name: str

    def __post_init__(self) -> None:
        """Reject values that would make derived keys ambiguous."""
        for field_name in ("app_name", "namespace", "kind", "name"):
            value = getattr(self, field_name)
            if not value:
                raise InputException(f"Resource identity missing {field_name}")
            if KEY_SEPARATOR in value:
                raise InputException(
                    f"Resource identity {field_name} may not contain '{KEY_SEPARATOR}': {value}"
                )

    @property
    def namespaced_name(self) -> str:
        return f"{self.namespace}/{self.name}"

    def __str__(self) -> str:
        """Return the kind and namespaced name concatenated as an id."""
        return f"{self.app_name}:{self.kind}/{self.namespaced_name}"


def derive_key(identity: ResourceIdentity) -> str:
    """Return the stable key for the identity."""
    return KEY_SEPARATOR.join(
        [identity.app_name, identity.namespace, identity.kind, identity.name]
    )


def status_key(identity: ResourceIdentity) -> str:
    """Return the state key holding the status of the workload."""
    return f"{derive_key(identity)}{STATUS_SUFFIX}"


class TargetKind(Enum):
    """The closed set of things a command may be invoked on."""

    APPLICATION = "application"
    WORKLOAD = "workload"


@dataclass(frozen=True)
class AppTarget:
    """An application folder."""

    app_name: str
    kube_config_path: str
    namespace: str
    url: str | None = None
    """Location of the application manifests used by install."""

    target_kind = TargetKind.APPLICATION


@dataclass(frozen=True)
class WorkloadTarget:
    """A workload within an application."""

    identity: ResourceIdentity
    kube_config_path: str

    target_kind = TargetKind.WORKLOAD

    @property
    def app_name(self) -> str:
        return self.identity.app_name

    @property
    def namespace(self) -> str:
        return self.identity.namespace

    @property
    def kind(self) -> str:
        return self.identity.kind

    @property
    def name(self) -> str:
        return self.identity.name
