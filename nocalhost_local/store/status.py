"""Status information for a workload."""

from enum import StrEnum
from typing import Any

from nocalhost_local.identity import ResourceIdentity, status_key

from .store import AppStateStore


class WorkloadStatus(StrEnum):
    """Runtime status of a workload shown next to it in a tree view."""

    INSTALLING = "Installing"
    UNINSTALLING = "Uninstalling"
    STARTING = "Starting"
    DEVELOPING = "Developing"
    ENDING = "Ending"


def get_status(store: AppStateStore, identity: ResourceIdentity) -> str | None:
    """Return the current status of the workload, if any."""
    return store.get(identity.app_name, status_key(identity))


def set_status(
    store: AppStateStore,
    identity: ResourceIdentity,
    status: str | None,
    subject: Any = None,
) -> None:
    """Update the status of a workload, removing it when status is empty."""
    if status:
        store.set(
            identity.app_name,
            status_key(identity),
            str(status),
            refresh=True,
            subject=subject,
        )
    else:
        store.delete(
            identity.app_name, status_key(identity), refresh=True, subject=subject
        )
